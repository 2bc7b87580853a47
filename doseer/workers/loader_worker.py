"""Worker that builds the icon loader off the GUI thread."""

from __future__ import annotations

from pathlib import Path
import sys
from threading import Event
from typing import Sequence

from PySide6.QtCore import QObject, Signal

from doseer.config.settings import AppSettings
from doseer.icons.discovery import DiscoveryCancelled
from doseer.icons.shell import ShellIconLoader
from doseer.icons.themed import ThemeIconLoader


class LoaderBuildWorker(QObject):
    """Discovers icon themes and emits a ready-to-use icon loader.

    Theme discovery may wait on desktop query commands, so keep it off the
    GUI thread with the moveToThread pattern:

        worker = LoaderBuildWorker(settings)
        thread = QThread()
        worker.moveToThread(thread)
        thread.started.connect(worker.run)
        worker.finished.connect(thread.quit)
        worker.finished.connect(worker.deleteLater)
        thread.finished.connect(thread.deleteLater)
        thread.start()
    """

    started = Signal()
    progress = Signal(int, int, str)    # parsed, total, theme folder
    finished = Signal(object)           # ThemeIconLoader | ShellIconLoader
    error = Signal(str)
    cancelled = Signal()

    def __init__(
        self,
        settings: AppSettings,
        *,
        roots: Sequence[Path] | None = None,
        use_shell: bool | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._settings = settings
        self._roots = list(roots) if roots is not None else None
        self._use_shell = sys.platform == "win32" if use_shell is None else use_shell
        self._cancel_event = Event()

    def cancel(self) -> None:
        self._cancel_event.set()

    @property
    def _is_cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def run(self) -> None:
        self.started.emit()
        try:
            if self._use_shell:
                loader = ShellIconLoader.from_settings(self._settings)
            else:
                loader = ThemeIconLoader.from_settings(
                    self._settings,
                    roots=self._roots,
                    progress=self.progress.emit,
                    should_cancel=lambda: self._is_cancelled,
                )
            self.finished.emit(loader)
        except DiscoveryCancelled:
            self.cancelled.emit()
        except Exception as e:
            self.error.emit(str(e))
