"""Background worker for PNG export."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import QObject, Signal

from src.models.scene import SceneState
from src.services.scene_exporter import ExportError, export_png
from src.utils.config import EXPORT_SCALE

logger = logging.getLogger(__name__)


class ExportWorker(QObject):
    """Runs the scene export in a background thread.

    The worker renders its own copy of the scene, so the live state can keep
    changing (or the result be abandoned) while it runs.

    Signals:
        finished(str): output path on success
        error(str): error message on failure
    """

    finished = Signal(str)
    error = Signal(str)

    def __init__(self, state: SceneState, output_path: Path, scale: int = EXPORT_SCALE):
        super().__init__()
        self._state = state.copy()
        self._output_path = output_path
        self._scale = scale

    def run(self) -> None:
        try:
            export_png(self._state, self._output_path, self._scale)
            self.finished.emit(str(self._output_path))
        except ExportError as e:
            logger.error(f"Export failed: {e}")
            self.error.emit(str(e))
        except Exception as e:
            logger.exception(f"Unexpected error during export: {e}")
            self.error.emit(str(e))
