"""Error codes and error handling utilities for Doseer."""

from __future__ import annotations

import configparser
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for icon lookup operations."""

    # Theme index errors
    THEME_INDEX_MISSING = auto()
    THEME_INDEX_UNREADABLE = auto()
    THEME_INDEX_INVALID = auto()
    THEME_SECTION_MISSING = auto()
    THEME_DIRECTORIES_MISSING = auto()
    THEME_EMPTY = auto()

    # Discovery errors
    SEARCH_ROOT_UNREADABLE = auto()
    SEARCH_ROOT_TRUNCATED = auto()

    OPERATION_FAILED = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.THEME_INDEX_MISSING: "The theme directory has no index.theme file.",
    ErrorCode.THEME_INDEX_UNREADABLE: "The index.theme file could not be read.",
    ErrorCode.THEME_INDEX_INVALID: "The index.theme file is not valid INI.",
    ErrorCode.THEME_SECTION_MISSING: "The index.theme file has no [Icon Theme] section.",
    ErrorCode.THEME_DIRECTORIES_MISSING: "The index.theme file declares no Directories.",
    ErrorCode.THEME_EMPTY: "The theme has no mimetype or place icon directories.",

    ErrorCode.SEARCH_ROOT_UNREADABLE: "An icon search directory could not be listed.",
    ErrorCode.SEARCH_ROOT_TRUNCATED: "Too many theme folders; only the first ones were scanned.",

    ErrorCode.OPERATION_FAILED: "Operation failed. See details for more information.",
}


@dataclass
class DoseerError(Exception):
    """Base exception for Doseer with error code and context."""

    code: ErrorCode
    message: str = ""
    path: Path | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected error occurred.")

    def __str__(self) -> str:
        parts = [self.message]
        if self.path:
            parts.append(f" ({self.path})")
        if self.details:
            details_str = " | ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f" [{details_str}]")
        return "".join(parts)


def classify_exception(exc: Exception, path: Path | None = None) -> DoseerError:
    """Classify a generic exception raised while reading theme data."""
    if isinstance(exc, DoseerError):
        return exc

    exc_name = type(exc).__name__
    exc_str = str(exc).lower()

    if isinstance(exc, FileNotFoundError):
        return DoseerError(ErrorCode.THEME_INDEX_MISSING, path=path, details={"original": exc_str})
    if isinstance(exc, (OSError, UnicodeDecodeError)):
        return DoseerError(ErrorCode.THEME_INDEX_UNREADABLE, path=path, details={"original": exc_str})
    if isinstance(exc, configparser.Error):
        return DoseerError(ErrorCode.THEME_INDEX_INVALID, path=path, details={"original": exc_str})

    return DoseerError(
        ErrorCode.OPERATION_FAILED,
        message=f"{exc_name}: {exc}",
        path=path,
        details={"original": exc_str},
    )
