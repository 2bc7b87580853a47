"""Best-effort detection of the desktop environment's icon theme."""

from __future__ import annotations

import configparser
import logging
import subprocess
from pathlib import Path
from typing import Callable, Sequence

from doseer.dirs import home_dir
from doseer.icons.constants import DEFAULT_QUERY_TIMEOUT

logger = logging.getLogger("doseer.icons.desktop")

ThemeDetector = Callable[[float], str | None]

_STRIP_CHARS = "'\"\n\r\t "


def gnome_icon_theme(timeout: float) -> str | None:
    return _query(["gsettings", "get", "org.gnome.desktop.interface", "icon-theme"], timeout)


def kde_icon_theme(timeout: float) -> str | None:
    for binary in ("kreadconfig6", "kreadconfig5"):
        theme = _query(
            [binary, "--file", "kdeglobals", "--group", "Icons", "--key", "Theme"],
            timeout,
        )
        if theme:
            return theme
    return None


def xfce_icon_theme(timeout: float) -> str | None:
    return _query(["xfconf-query", "-c", "xsettings", "-p", "/Net/IconThemeName"], timeout)


def gtk_icon_theme(timeout: float) -> str | None:
    """Read ``gtk-icon-theme-name`` from the user's GTK settings.ini files."""
    for version in ("3.0", "4.0"):
        settings_path = home_dir() / ".config" / f"gtk-{version}" / "settings.ini"
        theme = _read_gtk_settings(settings_path)
        if theme:
            return theme
    return None


DESKTOP_DETECTORS: tuple[ThemeDetector, ...] = (
    gnome_icon_theme,
    kde_icon_theme,
    xfce_icon_theme,
    gtk_icon_theme,
)


def detect_icon_theme(
    timeout: float = DEFAULT_QUERY_TIMEOUT,
    detectors: Sequence[ThemeDetector] = DESKTOP_DETECTORS,
) -> str | None:
    """Return the first icon theme name reported by ``detectors``."""
    for detector in detectors:
        theme = detector(timeout)
        if theme:
            logger.debug("desktop icon theme %r reported by %s", theme, detector.__name__)
            return theme
    return None


def _query(args: list[str], timeout: float) -> str | None:
    try:
        result = subprocess.run(
            args,
            capture_output=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        logger.warning("desktop theme query timed out after %.1fs: %s", timeout, args[0])
        return None
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("desktop theme query unavailable: %s (%s)", args[0], exc)
        return None

    if result.returncode != 0:
        logger.debug("desktop theme query failed: %s exited %s", args[0], result.returncode)
        return None
    try:
        output = result.stdout.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug("desktop theme query returned undecodable output: %s", args[0])
        return None
    return _clean(output)


def _read_gtk_settings(path: Path) -> str | None:
    if not path.is_file():
        return None
    parser = configparser.ConfigParser(interpolation=None, strict=False)
    try:
        parser.read(path, encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError, configparser.Error) as exc:
        logger.debug("unable to read %s: %s", path, exc)
        return None
    return _clean(parser.get("Settings", "gtk-icon-theme-name", fallback=""))


def _clean(raw: str) -> str | None:
    value = raw.strip(_STRIP_CHARS)
    return value or None
