"""Shared fixtures for icon theme tests."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Iterable, Mapping

import pytest
from PySide6.QtCore import QSettings
from PySide6.QtWidgets import QApplication

from doseer.config.settings import AppSettings
from doseer.dirs import UserDirs

ThemeFactory = Callable[..., Path]


def write_index(
    theme_dir: Path,
    *,
    name: str | None = None,
    inherits: Iterable[str] = (),
    directories: Mapping[str, Mapping[str, object]] | None = None,
    extra: str = "",
) -> Path:
    """Write an index.theme describing ``directories`` into ``theme_dir``."""
    directories = directories or {}
    lines = ["[Icon Theme]"]
    if name is not None:
        lines.append(f"Name={name}")
    inherits = list(inherits)
    if inherits:
        lines.append(f"Inherits={','.join(inherits)}")
    if directories:
        lines.append(f"Directories={','.join(directories)}")
    for directory, keys in directories.items():
        lines.append("")
        lines.append(f"[{directory}]")
        for key, value in keys.items():
            lines.append(f"{key}={value}")
    if extra:
        lines.append(extra)
    theme_dir.mkdir(parents=True, exist_ok=True)
    index_path = theme_dir / "index.theme"
    index_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return index_path


@pytest.fixture
def make_theme() -> ThemeFactory:
    """Create a theme folder with an index and icon files.

    ``icons`` maps a directory name to file names created inside it.
    """

    def _make(
        root: Path,
        folder: str,
        *,
        name: str | None = None,
        inherits: Iterable[str] = (),
        directories: Mapping[str, Mapping[str, object]] | None = None,
        icons: Mapping[str, Iterable[str]] | None = None,
    ) -> Path:
        theme_dir = root / folder
        write_index(
            theme_dir,
            name=name if name is not None else folder,
            inherits=inherits,
            directories=directories,
        )
        for directory in (directories or {}):
            (theme_dir / directory).mkdir(parents=True, exist_ok=True)
        for directory, files in (icons or {}).items():
            icon_dir = theme_dir / directory
            icon_dir.mkdir(parents=True, exist_ok=True)
            for file_name in files:
                (icon_dir / file_name).write_bytes(b"icon")
        return theme_dir

    return _make


@pytest.fixture(scope="session")
def qapp() -> QApplication:
    """A QApplication on the offscreen platform for tests that need a GUI."""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QApplication.instance() or QApplication([])
    return app


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    qs = QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)
    return AppSettings(qs)


@pytest.fixture
def user_dirs(tmp_path: Path) -> UserDirs:
    home = tmp_path / "home"
    dirs = UserDirs(
        home=home,
        desktop=home / "Desktop",
        documents=home / "Documents",
        download=home / "Downloads",
        music=home / "Music",
        pictures=home / "Pictures",
        videos=home / "Videos",
    )
    for path in (home, dirs.desktop, dirs.documents, dirs.download, dirs.music, dirs.pictures, dirs.videos):
        path.mkdir(parents=True, exist_ok=True)
    return dirs
