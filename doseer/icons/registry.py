"""Ordered icon theme registry."""

from __future__ import annotations

from typing import Iterable, Iterator

from doseer.icons.models import Theme


class ThemeRegistry:
    """Immutable, priority-ordered list of themes with a name lookup table."""

    def __init__(self, themes: Iterable[Theme] = ()) -> None:
        self._themes: tuple[Theme, ...] = tuple(themes)
        self._by_name: dict[str, Theme] = {}
        # Display names win over directory names; within each, the highest
        # priority theme shadows the rest.
        for theme in self._themes:
            self._by_name.setdefault(_name_key(theme.name), theme)
        for theme in self._themes:
            self._by_name.setdefault(_name_key(theme.root.name), theme)

    @property
    def themes(self) -> tuple[Theme, ...]:
        return self._themes

    def __iter__(self) -> Iterator[Theme]:
        return iter(self._themes)

    def __len__(self) -> int:
        return len(self._themes)

    def __bool__(self) -> bool:
        return bool(self._themes)

    def names(self) -> list[str]:
        return [theme.name for theme in self._themes]

    def get(self, name: str) -> Theme | None:
        """Return the theme called ``name`` (case-insensitive).

        ``Inherits`` entries and desktop settings usually name the theme
        directory rather than its display name, so both are accepted.
        """
        return self._by_name.get(_name_key(name))

    def lineage(self, theme: Theme) -> Iterator[Theme]:
        """Yield ``theme`` followed by all of its ancestors.

        Parents are visited depth-first in declared order, so a parent's own
        parents are tried before the next declared parent. Unknown names are
        skipped and every theme is yielded at most once, which also stops
        inheritance cycles.
        """
        seen: set[int] = set()
        stack: list[Theme] = [theme]
        while stack:
            current = stack.pop()
            if id(current) in seen:
                continue
            seen.add(id(current))
            yield current
            parents = [self.get(name) for name in current.inherits]
            stack.extend(parent for parent in reversed(parents) if parent is not None)


def _name_key(name: str) -> str:
    return name.strip().casefold()
