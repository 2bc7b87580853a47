"""Icon theme ``index.theme`` parsing and directory scoring.

``load_theme_index`` raises ``ThemeIndexError`` for unusable folders and is
what discovery uses so it can record why a candidate was dropped.
``try_load_theme`` is the non-raising entry point for callers that only
need to know whether a single folder is a usable theme.
"""

from __future__ import annotations

import configparser
import logging
from pathlib import Path
from typing import Mapping

from doseer.errors import ErrorCode, classify_exception
from doseer.icons.constants import INDEX_FILE_NAME, MIMETYPES_MARKER, PLACES_MARKER, THEME_SECTION
from doseer.icons.models import Theme, ThemeIndexError

logger = logging.getLogger("doseer.icons.index")

_MAX_INDEX_BYTES = 4 * 1024 * 1024


def load_theme_index(theme_dir: Path) -> Theme:
    """Parse ``theme_dir/index.theme`` into a :class:`Theme`.

    Raises :class:`ThemeIndexError` when the descriptor is missing, unreadable,
    malformed, declares no ``Directories`` or yields no usable directory.
    """
    index_path = theme_dir / INDEX_FILE_NAME
    try:
        index_path = index_path.resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        raise _index_error(exc, index_path) from exc
    root = index_path.parent

    parser = _read_index(index_path)
    if not parser.has_section(THEME_SECTION):
        raise ThemeIndexError(ErrorCode.THEME_SECTION_MISSING, path=index_path)
    main = parser[THEME_SECTION]

    name = (main.get("Name") or "").strip() or root.name
    inherits = tuple(_split_list(main.get("Inherits", "")))

    directories = main.get("Directories")
    if directories is None:
        raise ThemeIndexError(ErrorCode.THEME_DIRECTORIES_MISSING, path=index_path)

    mimes: list[tuple[str, int]] = []
    places: list[tuple[str, int]] = []
    for directory in _split_list(directories):
        if MIMETYPES_MARKER in directory:
            mimes.append((directory, _score_named(parser, directory)))
        elif PLACES_MARKER in directory:
            places.append((directory, _score_named(parser, directory)))

    if not mimes and not places:
        raise ThemeIndexError(ErrorCode.THEME_EMPTY, path=index_path, details={"name": name})

    theme = Theme(
        name=name,
        root=root,
        mime_dirs=_ranked(root, mimes),
        place_dirs=_ranked(root, places),
        inherits=inherits,
    )
    logger.debug("indexed icon theme %s at %s", theme.name, root)
    return theme


def try_load_theme(theme_dir: Path) -> Theme | None:
    """Like :func:`load_theme_index` but returns ``None`` on failure."""
    try:
        return load_theme_index(theme_dir)
    except ThemeIndexError:
        return None


def score_directory(section: Mapping[str, str] | None) -> int:
    """Score an icon directory section; higher means better suited.

    Scalable directories rank by ``MaxSize**2``, fixed ones by
    ``Size**2 * Scale**2``. Anything else scores 0.
    """
    if section is None:
        return 0

    if section.get("Type") == "Scalable":
        max_size = _parse_uint(section.get("MaxSize"))
        if max_size is not None:
            return max_size ** 2

    size = _parse_uint(section.get("Size"))
    if size is not None:
        scale = _parse_uint(section.get("Scale"))
        if scale is None:
            scale = 1
        return size ** 2 * scale ** 2

    return 0


def _score_named(parser: configparser.ConfigParser, directory: str) -> int:
    if not parser.has_section(directory):
        return 0
    return score_directory(parser[directory])


def _ranked(root: Path, scored: list[tuple[str, int]]) -> tuple[Path, ...]:
    ordered = sorted(scored, key=lambda item: item[1], reverse=True)
    return tuple(root / directory for directory, _score in ordered)


def _read_index(index_path: Path) -> configparser.ConfigParser:
    try:
        size = index_path.stat().st_size
    except OSError as exc:
        raise _index_error(exc, index_path) from exc
    if size > _MAX_INDEX_BYTES:
        raise ThemeIndexError(
            ErrorCode.THEME_INDEX_UNREADABLE,
            message=f"index.theme exceeds max size ({_MAX_INDEX_BYTES} bytes)",
            path=index_path,
        )

    parser = configparser.ConfigParser(
        delimiters=("=",),
        interpolation=None,
        strict=False,
        comment_prefixes=("#", ";"),
    )
    parser.optionxform = str  # keys are case-sensitive
    try:
        parser.read_string(index_path.read_text(encoding="utf-8-sig"), source=str(index_path))
    except (OSError, UnicodeDecodeError, configparser.Error) as exc:
        raise _index_error(exc, index_path) from exc
    return parser


def _index_error(exc: Exception, index_path: Path) -> ThemeIndexError:
    classified = classify_exception(exc, index_path)
    return ThemeIndexError(
        classified.code,
        message=classified.message,
        path=classified.path,
        details=classified.details,
    )


def _split_list(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def _parse_uint(raw: str | None) -> int | None:
    if raw is None:
        return None
    cleaned = raw.strip()
    if not (cleaned.isascii() and cleaned.isdigit()):
        return None
    return int(cleaned)
