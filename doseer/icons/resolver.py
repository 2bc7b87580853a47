"""Icon lookup across an ordered theme registry."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from doseer.icons.models import Icon, IconCategory, Theme
from doseer.icons.registry import ThemeRegistry

logger = logging.getLogger("doseer.icons.resolver")


class ThemeResolver:
    """Finds the best icon for an essence by walking themes in priority order."""

    def __init__(self, registry: ThemeRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> ThemeRegistry:
        return self._registry

    def resolve(self, category: IconCategory, essence: str) -> Icon | None:
        """Return the first matching icon, or ``None`` if no theme has one.

        Each theme is tried before its parents (transitively); the first hit
        anywhere ends the walk. A theme reached through several inheritance
        chains is only searched once.
        """
        searched: set[int] = set()
        for theme in self._registry:
            for candidate in self._registry.lineage(theme):
                if id(candidate) in searched:
                    continue
                searched.add(id(candidate))
                icon = find_in_theme(candidate, category, essence)
                if icon is not None:
                    logger.debug(
                        "resolved %s %r from theme %s", category.name, essence, candidate.name
                    )
                    return icon
        return None


def find_in_theme(theme: Theme, category: IconCategory, essence: str) -> Icon | None:
    """Search ``theme``'s directories for ``category``, best-scored first."""
    for icon_dir in theme.dirs_for(category):
        icon = find_in_directory(icon_dir, essence)
        if icon is not None:
            return icon
    return None


def find_in_directory(icon_dir: Path, essence: str) -> Icon | None:
    """Return the file in ``icon_dir`` whose stem is ``essence``.

    When several files share the stem, the first by name wins.
    """
    try:
        with os.scandir(icon_dir) as entries:
            matches = sorted(
                entry.name
                for entry in entries
                if Path(entry.name).stem == essence and entry.is_file()
            )
    except OSError:
        return None
    if not matches:
        return None
    return Icon.from_file(icon_dir / matches[0])
