"""ProjectController - save/load, recent files, background image and PNG export."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from PySide6.QtCore import QObject, QThread, Slot
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QFileDialog, QMessageBox

from src.services.image_loader import ImageLoadError, load_image_data_uri
from src.services.project_io import SceneDecodeError, default_scene, load_project, save_project
from src.utils.config import (
    EXPORT_FILENAME,
    EXPORT_FILTER,
    EXPORT_SCALE,
    IMAGE_FILTER,
    PROJECT_FILENAME,
    PROJECT_FILTER,
)
from src.workers.export_worker import ExportWorker

if TYPE_CHECKING:
    from src.ui.controllers.app_context import AppContext

logger = logging.getLogger(__name__)


class ProjectController(QObject):
    """Project files, image input and export.

    A QObject so the export worker's signals are delivered on the GUI thread.
    """

    def __init__(self, ctx: AppContext) -> None:
        super().__init__()
        self.ctx = ctx
        self._thread: QThread | None = None
        self._worker: ExportWorker | None = None

    # ---- Save / load ----

    def on_save_project(self) -> None:
        ctx = self.ctx
        start = str(ctx.current_project_path or PROJECT_FILENAME)
        path, _ = QFileDialog.getSaveFileName(ctx.window, "Save Project", start, PROJECT_FILTER)
        if not path:
            return
        path = Path(path)
        try:
            save_project(ctx.store.get(), path)
        except OSError as e:
            logger.error(f"Failed to save project {path}: {e}")
            QMessageBox.critical(ctx.window, "Save Error", str(e))
            return
        ctx.current_project_path = path
        ctx.autosave.add_recent_file(path)
        self.update_recent_menu()
        ctx.status_bar().showMessage(f"Project saved: {path}", 3000)

    def on_load_project(self, path=None) -> None:
        """Replace the scene with a project file; the scene is unchanged on failure."""
        ctx = self.ctx
        if not path:
            path, _ = QFileDialog.getOpenFileName(ctx.window, "Load Project", "", PROJECT_FILTER)
            if not path:
                return
        path = Path(path)
        try:
            state = load_project(path)
        except (OSError, SceneDecodeError) as e:
            logger.warning(f"Failed to load project {path}: {e}")
            QMessageBox.critical(ctx.window, "Load Error", f"Failed to load project file.\n\n{e}")
            return
        ctx.store.replace(state)
        ctx.current_project_path = path
        ctx.autosave.add_recent_file(path)
        self.update_recent_menu()
        ctx.status_bar().showMessage(f"Project loaded: {path}", 3000)

    def on_new_scene(self) -> None:
        ctx = self.ctx
        reply = QMessageBox.question(
            ctx.window, "New Scene",
            "Discard the current scene and start over with the default template?",
        )
        if reply != QMessageBox.StandardButton.Yes:
            return
        ctx.store.replace(default_scene())
        ctx.current_project_path = None
        ctx.status_bar().showMessage("New scene", 2000)

    # ---- Recent files ----

    def update_recent_menu(self) -> None:
        ctx = self.ctx
        recent_menu = ctx.recent_menu
        if recent_menu is None:
            return
        recent_menu.clear()
        recent_files = ctx.autosave.get_recent_files()
        if not recent_files:
            no_recent = QAction("No Recent Projects", ctx.window)
            no_recent.setEnabled(False)
            recent_menu.addAction(no_recent)
            return
        for i, p in enumerate(recent_files):
            action = QAction(f"{i + 1}. {p.name}", ctx.window)
            action.setData(str(p))
            action.triggered.connect(lambda checked=False, p=p: self.on_open_recent(p))
            recent_menu.addAction(action)
        recent_menu.addSeparator()
        clear_action = QAction("Clear Recent Projects", ctx.window)
        clear_action.triggered.connect(self.on_clear_recent)
        recent_menu.addAction(clear_action)

    def on_open_recent(self, path: Path) -> None:
        if path.is_file():
            self.on_load_project(path)
        else:
            QMessageBox.warning(
                self.ctx.window, "File Not Found", f"The file {path} no longer exists."
            )
            self.update_recent_menu()

    def on_clear_recent(self) -> None:
        self.ctx.autosave.clear_recent_files()
        self.update_recent_menu()

    # ---- Background image ----

    def on_upload_image(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self.ctx.window, "Open Image", "", IMAGE_FILTER)
        if path:
            self.set_image_from_path(path)

    def set_image_from_path(self, path) -> None:
        ctx = self.ctx
        try:
            uri = load_image_data_uri(path)
        except ImageLoadError as e:
            logger.warning(str(e))
            QMessageBox.warning(ctx.window, "Image Error", str(e))
            return
        ctx.store.update(image=uri)
        ctx.status_bar().showMessage(f"Background: {Path(path).name}", 2000)

    def on_clear_image(self) -> None:
        self.ctx.store.update(image=None)

    # ---- Export ----

    def on_export_png(self) -> None:
        ctx = self.ctx
        if self._thread is not None:
            ctx.status_bar().showMessage("An export is already running", 2000)
            return
        path, _ = QFileDialog.getSaveFileName(ctx.window, "Export Image", EXPORT_FILENAME, EXPORT_FILTER)
        if not path:
            return
        self.start_export(Path(path))

    def start_export(self, output_path: Path, scale: int = EXPORT_SCALE) -> None:
        self._thread = QThread()
        self._worker = ExportWorker(self.ctx.store.get(), output_path, scale)
        self._worker.moveToThread(self._thread)

        self._thread.started.connect(self._worker.run)
        self._worker.finished.connect(self._on_export_finished)
        self._worker.error.connect(self._on_export_error)

        self.ctx.status_bar().showMessage("Exporting...")
        self._thread.start()

    @property
    def is_exporting(self) -> bool:
        return self._thread is not None

    @Slot(str)
    def _on_export_finished(self, output_path: str) -> None:
        self._cleanup_thread()
        self.ctx.status_bar().showMessage(f"Exported: {output_path}", 5000)

    @Slot(str)
    def _on_export_error(self, message: str) -> None:
        self._cleanup_thread()
        self.ctx.status_bar().showMessage("Export failed", 5000)
        QMessageBox.critical(self.ctx.window, "Export Error", message)

    def shutdown(self) -> None:
        """Wait for a running export before the window closes."""
        if self._thread and self._thread.isRunning():
            self._thread.quit()
            self._thread.wait()
        self._cleanup_thread()

    def _cleanup_thread(self) -> None:
        if self._thread and self._thread.isRunning():
            self._thread.quit()
            if not self._thread.wait(5000):
                logger.warning("Export thread did not stop in time; keeping it alive")
                return
        self._thread = None
        self._worker = None

    # ---- Autosave ----

    def on_autosave_failed(self, message: str) -> None:
        self.ctx.status_bar().showMessage(f"Autosave failed: {message}", 5000)
