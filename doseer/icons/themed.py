"""Icon loader based on the freedesktop icon theme specification."""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

from doseer.dirs import UserDirs
from doseer.icons import constants
from doseer.icons.cache import IconCache
from doseer.icons.discovery import CancelCheck, ProgressCallback, ThemeDiscovery
from doseer.icons.models import Icon, IconCategory
from doseer.icons.registry import ThemeRegistry
from doseer.icons.resolver import ThemeResolver

if TYPE_CHECKING:
    from doseer.config.settings import AppSettings

logger = logging.getLogger("doseer.icons.themed")


class ThemeIconLoader:
    """Loads icons for paths from the installed icon themes.

    The theme registry is built once, eagerly, when the loader is created;
    create a new loader to pick up themes installed afterwards.
    """

    def __init__(
        self,
        registry: ThemeRegistry | None = None,
        *,
        mime_capacity: int = constants.DEFAULT_MIME_CACHE_CAPACITY,
        place_capacity: int = constants.DEFAULT_PLACE_CACHE_CAPACITY,
        user_dirs: UserDirs | None = None,
    ) -> None:
        if registry is None:
            registry = ThemeDiscovery().discover()
        self._resolver = ThemeResolver(registry)
        self._mime_cache: IconCache[str] = IconCache(mime_capacity)
        self._place_cache: IconCache[str] = IconCache(place_capacity)
        self._places = _place_table(user_dirs if user_dirs is not None else UserDirs.from_system())

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings,
        *,
        roots: Sequence[Path] | None = None,
        progress: ProgressCallback | None = None,
        should_cancel: CancelCheck | None = None,
    ) -> ThemeIconLoader:
        """Discover themes as configured in ``settings`` and build a loader."""
        discovery = ThemeDiscovery(
            roots,
            preferred_theme=settings.icon_theme,
            detect_desktop=settings.detect_desktop_theme,
            query_timeout=settings.desktop_query_timeout,
        )
        registry = discovery.discover(progress=progress, should_cancel=should_cancel)
        errors = discovery.load_errors()
        if errors:
            logger.info(
                "%d icon theme candidates skipped; loaded %d themes",
                len(errors),
                len(registry),
            )
        return cls(
            registry,
            mime_capacity=settings.mime_cache_capacity,
            place_capacity=settings.place_cache_capacity,
        )

    @property
    def registry(self) -> ThemeRegistry:
        return self._resolver.registry

    @property
    def mime_cache(self) -> IconCache[str]:
        return self._mime_cache

    @property
    def place_cache(self) -> IconCache[str]:
        return self._place_cache

    def load(self, path: str | Path) -> Icon | None:
        """Try to load an appropriate icon for this path."""
        path = Path(path)
        if path.is_dir():
            return self.load_place(self.place_essence(path))
        return self.load_content_type(content_type_essence(path))

    def load_content_type(self, essence: str) -> Icon | None:
        return self._mime_cache.get_or_resolve(
            essence,
            lambda: self._resolver.resolve(IconCategory.CONTENT_TYPE, essence),
        )

    def load_place(self, essence: str) -> Icon | None:
        return self._place_cache.get_or_resolve(
            essence,
            lambda: self._resolver.resolve(IconCategory.PLACE, essence),
        )

    def place_essence(self, path: Path) -> str:
        """Return the place icon name for a directory."""
        key = _path_key(path)
        for place_path, essence in self._places:
            if key == place_path:
                return essence
        return constants.PLACE_FOLDER


def content_type_essence(path: Path) -> str:
    """Return the icon name for a file's guessed content type, e.g. ``image-png``."""
    mime_type, _encoding = mimetypes.guess_type(path.name)
    return (mime_type or constants.FALLBACK_MIME_TYPE).replace("/", "-")


def _place_table(user_dirs: UserDirs) -> list[tuple[str, str]]:
    # home first: it wins over any other place that points at $HOME
    candidates = (
        (user_dirs.home, constants.PLACE_HOME),
        (user_dirs.desktop, constants.PLACE_DESKTOP),
        (user_dirs.documents, constants.PLACE_DOCUMENTS),
        (user_dirs.download, constants.PLACE_DOWNLOAD),
        (user_dirs.music, constants.PLACE_MUSIC),
        (user_dirs.pictures, constants.PLACE_PICTURES),
        (user_dirs.videos, constants.PLACE_VIDEOS),
    )
    return [(_path_key(path), essence) for path, essence in candidates if path is not None]


def _path_key(path: Path) -> str:
    try:
        return str(path.resolve())
    except OSError:
        return str(path.absolute())
