"""Entry point for `python -m doseer`."""

from doseer.app import main

if __name__ == "__main__":
    main()
