"""QApplication bootstrap."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys
from typing import Sequence

from PySide6.QtCore import QObject, QThread, Signal, Slot
from PySide6.QtWidgets import QApplication

from doseer.config.settings import AppSettings
from doseer.dirs import home_dir
from doseer.icons.models import Icon
from doseer.workers.loader_worker import LoaderBuildWorker

logger = logging.getLogger("doseer.app")


def _configure_logger(settings: AppSettings) -> logging.Logger:
    root_logger = logging.getLogger("doseer")
    if root_logger.handlers:
        return root_logger

    root_logger.setLevel(logging.INFO)
    handler = RotatingFileHandler(
        settings.log_dir / "doseer.log",
        maxBytes=512_000,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    root_logger.addHandler(handler)
    root_logger.propagate = False
    return root_logger


def describe_icon(icon: Icon | None) -> str:
    if icon is None:
        return "no icon"
    if icon.path is not None:
        return f"{icon.kind.value} {icon.path}"
    if icon.image is not None:
        return f"{icon.kind.value} {icon.image.width()}x{icon.image.height()}"
    return icon.kind.value


def _targets(args: Sequence[str]) -> list[Path]:
    if args:
        return [Path(arg).expanduser() for arg in args]
    home = home_dir()
    try:
        return [home, *sorted(home.iterdir())]
    except OSError:
        return [home]


class PathReport(QObject):
    """Prints the icon of each path once the loader is ready.

    Lives on the GUI thread; the worker's signals reach it queued.
    """

    done = Signal(int)  # exit code

    def __init__(self, paths: Sequence[Path], parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._paths = list(paths)

    @Slot(int, int, str)
    def on_progress(self, done: int, total: int, name: str) -> None:
        logger.debug("parsed icon theme candidate %d/%d: %s", done, total, name)

    @Slot(object)
    def on_finished(self, loader) -> None:
        logger.info("icon loader ready: %s", type(loader).__name__)
        for path in self._paths:
            print(f"{path}: {describe_icon(loader.load(path))}")
        self.done.emit(0)

    @Slot(str)
    def on_error(self, message: str) -> None:
        logger.error("building the icon loader failed: %s", message)
        print(f"error: {message}", file=sys.stderr)
        self.done.emit(1)

    @Slot()
    def on_cancelled(self) -> None:
        logger.info("icon loader build cancelled")
        self.done.emit(1)


def run_app(argv: Sequence[str] | None = None) -> int:
    """Resolve and print the icon for each path given on the command line."""
    argv = list(sys.argv if argv is None else argv)
    app = QApplication.instance() or QApplication(argv)
    app.setApplicationName("Doseer")
    app.setOrganizationName("Doseer")
    settings = AppSettings()
    _configure_logger(settings)
    logger.info("startup platform=%s", sys.platform)

    report = PathReport(_targets(argv[1:]))
    report.done.connect(app.exit)

    worker = LoaderBuildWorker(settings)
    thread = QThread()
    worker.moveToThread(thread)
    thread.started.connect(worker.run)
    worker.progress.connect(report.on_progress)
    worker.finished.connect(report.on_finished)
    worker.error.connect(report.on_error)
    worker.cancelled.connect(report.on_cancelled)
    worker.finished.connect(thread.quit)
    worker.error.connect(thread.quit)
    worker.cancelled.connect(thread.quit)

    thread.start()
    try:
        return app.exec()
    finally:
        worker.cancel()
        thread.quit()
        thread.wait()


def main() -> None:
    sys.exit(run_app())
