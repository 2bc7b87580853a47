"""Icon theme discovery across the search roots."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
import logging
import os
from pathlib import Path
from typing import Callable, Sequence

from doseer.dirs import icon_search_roots
from doseer.errors import DoseerError, ErrorCode
from doseer.icons.constants import DEFAULT_QUERY_TIMEOUT
from doseer.icons.desktop import ThemeDetector, DESKTOP_DETECTORS, detect_icon_theme
from doseer.icons.index import load_theme_index
from doseer.icons.models import Theme, ThemeIndexError
from doseer.icons.registry import ThemeRegistry

logger = logging.getLogger("doseer.icons.discovery")

_MAX_THEME_DIR_CANDIDATES = 512

ProgressCallback = Callable[[int, int, str], None]
CancelCheck = Callable[[], bool]


class DiscoveryCancelled(Exception):
    """Raised when discovery is aborted through ``should_cancel``."""


class ThemeDiscovery:
    """Builds a :class:`ThemeRegistry` from the icon theme search roots.

    Every immediate child directory of every root is a candidate theme. The
    candidates are parsed on a thread pool and joined back in discovery order
    (root priority, then directory name), so parse completion order never
    changes the result. If the desktop environment (or ``preferred_theme``)
    names a discovered theme, that theme is moved to the front.
    """

    def __init__(
        self,
        roots: Sequence[Path] | None = None,
        *,
        preferred_theme: str = "",
        detect_desktop: bool = True,
        query_timeout: float = DEFAULT_QUERY_TIMEOUT,
        detectors: Sequence[ThemeDetector] = DESKTOP_DETECTORS,
        max_workers: int | None = None,
    ) -> None:
        self._roots = [Path(root) for root in (roots if roots is not None else icon_search_roots())]
        self._preferred_theme = preferred_theme.strip()
        self._detect_desktop = detect_desktop
        self._query_timeout = query_timeout
        self._detectors = tuple(detectors)
        self._max_workers = max_workers or min(os.cpu_count() or 4, 8)
        self._load_errors: list[DoseerError] = []

    @property
    def roots(self) -> list[Path]:
        return list(self._roots)

    def load_errors(self) -> list[DoseerError]:
        return list(self._load_errors)

    def discover(
        self,
        progress: ProgressCallback | None = None,
        should_cancel: CancelCheck | None = None,
    ) -> ThemeRegistry:
        """Scan the roots and return the ordered registry.

        Blocks until every candidate is parsed and the desktop theme query
        has returned. Raises :class:`DiscoveryCancelled` if ``should_cancel``
        reports true while candidates are being collected.
        """
        self._load_errors = []
        candidates: list[Path] = []
        for root in self._roots:
            candidates.extend(self._list_candidates(root))

        registry = ThemeRegistry(self._parse_all(candidates, progress, should_cancel))
        active = self._active_theme_name()
        if active and registry:
            registry = _promote(registry, active)
        return registry

    def _list_candidates(self, root: Path) -> list[Path]:
        if not root.is_dir():
            return []
        try:
            candidates = sorted(path for path in root.iterdir() if path.is_dir())
        except OSError as exc:
            self._record(
                DoseerError(
                    ErrorCode.SEARCH_ROOT_UNREADABLE,
                    path=root,
                    details={"original": str(exc)},
                )
            )
            return []
        if len(candidates) > _MAX_THEME_DIR_CANDIDATES:
            self._record(
                DoseerError(
                    ErrorCode.SEARCH_ROOT_TRUNCATED,
                    path=root,
                    details={"scanned": _MAX_THEME_DIR_CANDIDATES},
                )
            )
            candidates = candidates[:_MAX_THEME_DIR_CANDIDATES]
        return candidates

    def _parse_all(
        self,
        candidates: list[Path],
        progress: ProgressCallback | None,
        should_cancel: CancelCheck | None,
    ) -> list[Theme]:
        if not candidates:
            return []

        themes: list[Theme] = []
        total = len(candidates)
        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            futures: list[Future[Theme]] = [
                executor.submit(load_theme_index, candidate) for candidate in candidates
            ]
            for done, (candidate, future) in enumerate(zip(candidates, futures), start=1):
                if should_cancel is not None and should_cancel():
                    for pending in futures:
                        pending.cancel()
                    raise DiscoveryCancelled()
                try:
                    theme = future.result()
                except ThemeIndexError as exc:
                    self._record(exc)
                else:
                    logger.info("loaded icon theme %s from %s", theme.name, theme.root)
                    themes.append(theme)
                if progress is not None:
                    progress(done, total, candidate.name)
        return themes

    def _active_theme_name(self) -> str | None:
        if self._preferred_theme:
            return self._preferred_theme
        if not self._detect_desktop:
            return None
        return detect_icon_theme(self._query_timeout, self._detectors)

    def _record(self, error: DoseerError) -> None:
        logger.debug("skipping icon theme candidate: %s", error)
        self._load_errors.append(error)


def _promote(registry: ThemeRegistry, name: str) -> ThemeRegistry:
    """Move the theme known as ``name`` to the front of the registry."""
    theme = registry.get(name)
    if theme is None:
        logger.debug("desktop icon theme %r is not installed", name)
        return registry
    logger.info("prioritising desktop icon theme %s", theme.name)
    if registry.themes[0] is theme:
        return registry
    return ThemeRegistry([theme, *(other for other in registry if other is not theme)])
