"""Home, XDG data and user directory helpers."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from PySide6.QtCore import QStandardPaths

SYSTEM_ICONS_DIR = Path("/usr/share/icons")

_Location = QStandardPaths.StandardLocation


def home_dir() -> Path:
    """Return the current user's home directory."""
    return Path.home()


def data_dir() -> Path:
    """Return the per-user data directory (``$XDG_DATA_HOME``, usually ``~/.local/share``)."""
    location = _writable(_Location.GenericDataLocation)
    if location is not None:
        return location
    return home_dir() / ".local" / "share"


def icon_search_roots() -> list[Path]:
    """Return the icon theme search roots in priority order."""
    return [
        home_dir() / ".icons",
        data_dir() / "icons",
        SYSTEM_ICONS_DIR,
    ]


@dataclass(frozen=True, slots=True)
class UserDirs:
    """Well-known user folders that get their own place icon."""

    home: Path
    desktop: Path | None = None
    documents: Path | None = None
    download: Path | None = None
    music: Path | None = None
    pictures: Path | None = None
    videos: Path | None = None

    @classmethod
    def from_system(cls) -> UserDirs:
        return cls(
            home=home_dir(),
            desktop=_writable(_Location.DesktopLocation),
            documents=_writable(_Location.DocumentsLocation),
            download=_writable(_Location.DownloadLocation),
            music=_writable(_Location.MusicLocation),
            pictures=_writable(_Location.PicturesLocation),
            videos=_writable(_Location.MoviesLocation),
        )


def _writable(location: QStandardPaths.StandardLocation) -> Path | None:
    value = QStandardPaths.writableLocation(location)
    if not value:
        return None
    return Path(value)
