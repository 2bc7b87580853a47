"""Tests for the shell-backed icon loader."""

from __future__ import annotations

import sys

from PySide6.QtGui import QImage

from doseer.icons import IconLoader, ThemeIconLoader
from doseer.icons.models import IconKind
from doseer.icons.shell import ShellIconLoader


class _FakePixmap:
    def __init__(self, image: QImage) -> None:
        self._image = image

    def toImage(self) -> QImage:
        return self._image


class _FakeIcon:
    def __init__(self, image: QImage | None) -> None:
        self._image = image
        self.requested_sizes = []

    def isNull(self) -> bool:
        return self._image is None

    def pixmap(self, size):
        self.requested_sizes.append((size.width(), size.height()))
        return _FakePixmap(self._image)


class _FakeProvider:
    """Stands in for QFileIconProvider; maps file names to images."""

    def __init__(self, images: dict[str, QImage | None]) -> None:
        self._images = images
        self.requested: list[str] = []
        self.icons: list[_FakeIcon] = []

    def icon(self, info):
        self.requested.append(info.absoluteFilePath())
        icon = _FakeIcon(self._images.get(info.fileName()))
        self.icons.append(icon)
        return icon


def _image(width: int = 4, height: int = 4) -> QImage:
    image = QImage(width, height, QImage.Format.Format_ARGB32)
    image.fill(0)
    return image


class TestShellIconLoader:
    def test_load_returns_raster_image_icon(self, tmp_path):
        provider = _FakeProvider({"report.pdf": _image()})
        loader = ShellIconLoader(provider=provider, icon_size=32)

        icon = loader.load(tmp_path / "report.pdf")

        assert icon is not None
        assert icon.kind is IconKind.RASTER
        assert icon.path is None
        assert icon.image.width() == 4
        assert provider.icons[0].requested_sizes == [(32, 32)]

    def test_load_is_cached_by_absolute_path(self, tmp_path, monkeypatch):
        provider = _FakeProvider({"report.pdf": _image()})
        loader = ShellIconLoader(provider=provider)
        monkeypatch.chdir(tmp_path)

        first = loader.load("report.pdf")
        second = loader.load(tmp_path / "report.pdf")

        assert first is second
        assert len(provider.requested) == 1
        assert loader.cache.keys() == [str(tmp_path / "report.pdf")]

    def test_null_icon_is_not_cached(self, tmp_path):
        provider = _FakeProvider({})
        loader = ShellIconLoader(provider=provider)

        assert loader.load(tmp_path / "unknown.bin") is None
        assert loader.load(tmp_path / "unknown.bin") is None
        assert len(provider.requested) == 2
        assert len(loader.cache) == 0

    def test_empty_rendering_is_no_icon(self, tmp_path):
        provider = _FakeProvider({"blank.txt": QImage()})
        loader = ShellIconLoader(provider=provider)

        assert loader.load(tmp_path / "blank.txt") is None

    def test_cache_is_bounded(self, tmp_path):
        names = [f"file-{index}.txt" for index in range(5)]
        provider = _FakeProvider({name: _image() for name in names})
        loader = ShellIconLoader(capacity=2, provider=provider)

        for name in names:
            loader.load(tmp_path / name)

        assert len(loader.cache) == 2
        assert loader.cache.keys() == [str(tmp_path / "file-3.txt"), str(tmp_path / "file-4.txt")]

    def test_from_settings_uses_shell_capacity(self, settings):
        settings.shell_cache_capacity = 9

        loader = ShellIconLoader.from_settings(settings)

        assert loader.cache.capacity == 9


def test_icon_loader_matches_platform():
    expected = ShellIconLoader if sys.platform == "win32" else ThemeIconLoader
    assert IconLoader is expected
