"""Application settings via QSettings."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QSettings

from doseer.icons.constants import (
    DEFAULT_MIME_CACHE_CAPACITY,
    DEFAULT_PLACE_CACHE_CAPACITY,
    DEFAULT_QUERY_TIMEOUT,
    DEFAULT_SHELL_CACHE_CAPACITY,
)

_MIN_QUERY_TIMEOUT = 0.1
_MAX_QUERY_TIMEOUT = 30.0
_MAX_CACHE_CAPACITY = 10_000


class AppSettings:
    """Wraps QSettings for persistent app configuration."""

    def __init__(self, qsettings: QSettings | None = None) -> None:
        self._qs = qsettings if qsettings is not None else QSettings("Doseer", "Doseer")

    # -- icon theme --

    @property
    def icon_theme(self) -> str:
        """Theme to try first; empty means ask the desktop environment."""
        raw = self._qs.value("icons/theme", "", type=str)
        return (raw or "").strip()

    @icon_theme.setter
    def icon_theme(self, value: str) -> None:
        self._qs.setValue("icons/theme", (value or "").strip())

    @property
    def detect_desktop_theme(self) -> bool:
        return self._qs.value("icons/detect_desktop_theme", True, type=bool)

    @detect_desktop_theme.setter
    def detect_desktop_theme(self, value: bool) -> None:
        self._qs.setValue("icons/detect_desktop_theme", bool(value))

    @property
    def desktop_query_timeout(self) -> float:
        raw = self._qs.value("icons/desktop_query_timeout", DEFAULT_QUERY_TIMEOUT, type=float)
        return _clamp_timeout(raw)

    @desktop_query_timeout.setter
    def desktop_query_timeout(self, value: float) -> None:
        self._qs.setValue("icons/desktop_query_timeout", _clamp_timeout(value))

    # -- cache sizes --

    @property
    def mime_cache_capacity(self) -> int:
        return self._capacity("icons/mime_cache_capacity", DEFAULT_MIME_CACHE_CAPACITY)

    @mime_cache_capacity.setter
    def mime_cache_capacity(self, value: int) -> None:
        self._qs.setValue("icons/mime_cache_capacity", _clamp_capacity(value))

    @property
    def place_cache_capacity(self) -> int:
        return self._capacity("icons/place_cache_capacity", DEFAULT_PLACE_CACHE_CAPACITY)

    @place_cache_capacity.setter
    def place_cache_capacity(self, value: int) -> None:
        self._qs.setValue("icons/place_cache_capacity", _clamp_capacity(value))

    @property
    def shell_cache_capacity(self) -> int:
        return self._capacity("icons/shell_cache_capacity", DEFAULT_SHELL_CACHE_CAPACITY)

    @shell_cache_capacity.setter
    def shell_cache_capacity(self, value: int) -> None:
        self._qs.setValue("icons/shell_cache_capacity", _clamp_capacity(value))

    # -- helpers --

    @property
    def app_data_dir(self) -> Path:
        path = self._app_data_dir()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def log_dir(self) -> Path:
        path = self.app_data_dir / "logs"
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _capacity(self, key: str, default: int) -> int:
        raw = self._qs.value(key, default, type=int)
        return _clamp_capacity(raw)

    @staticmethod
    def _app_data_dir() -> Path:
        import os
        base = os.environ.get("APPDATA") or os.environ.get("XDG_CONFIG_HOME")
        return Path(base or Path.home() / ".config") / "doseer"


def _clamp_timeout(value: float) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        return DEFAULT_QUERY_TIMEOUT
    return min(max(timeout, _MIN_QUERY_TIMEOUT), _MAX_QUERY_TIMEOUT)


def _clamp_capacity(value: int) -> int:
    try:
        capacity = int(value)
    except (TypeError, ValueError):
        return 1
    return min(max(capacity, 1), _MAX_CACHE_CAPACITY)
