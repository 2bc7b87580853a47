"""Icon loader backed by the platform shell (Windows).

Qt's ``QFileIconProvider`` asks the Windows shell for the icon registered
for a path, so this module is the only place that touches native icon
extraction. A ``QGuiApplication`` must exist before icons are requested.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from PySide6.QtCore import QFileInfo, QSize
from PySide6.QtGui import QIcon

from doseer.icons.cache import IconCache
from doseer.icons.constants import DEFAULT_SHELL_CACHE_CAPACITY, SHELL_ICON_SIZE
from doseer.icons.models import Icon

if TYPE_CHECKING:
    from doseer.config.settings import AppSettings

logger = logging.getLogger("doseer.icons.shell")


class FileIconSource(Protocol):
    def icon(self, info: QFileInfo) -> QIcon: ...


class ShellIconLoader:
    """Loads the shell icon of each path, caching by absolute path."""

    def __init__(
        self,
        *,
        capacity: int = DEFAULT_SHELL_CACHE_CAPACITY,
        provider: FileIconSource | None = None,
        icon_size: int = SHELL_ICON_SIZE,
    ) -> None:
        self._cache: IconCache[str] = IconCache(capacity)
        self._provider = provider
        self._icon_size = QSize(icon_size, icon_size)

    @classmethod
    def from_settings(cls, settings: AppSettings) -> ShellIconLoader:
        return cls(capacity=settings.shell_cache_capacity)

    @property
    def cache(self) -> IconCache[str]:
        return self._cache

    def load(self, path: str | Path) -> Icon | None:
        """Try to load the shell icon for this path."""
        key = str(Path(path).absolute())
        return self._cache.get_or_resolve(key, lambda: self._extract(key))

    def _extract(self, path: str) -> Icon | None:
        qicon = self._icon_provider().icon(QFileInfo(path))
        if qicon.isNull():
            return None
        image = qicon.pixmap(self._icon_size).toImage()
        if image.isNull():
            logger.debug("shell icon for %s rendered empty", path)
            return None
        return Icon.from_image(image)

    def _icon_provider(self) -> FileIconSource:
        if self._provider is None:
            from PySide6.QtWidgets import QFileIconProvider

            self._provider = QFileIconProvider()
        return self._provider
