"""Live scene preview with image drag & drop."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QRectF, QSize, Qt, Signal
from PySide6.QtGui import QColor, QImage, QPainter, QPaintEvent
from PySide6.QtWidgets import QSizePolicy, QWidget

from src.models.scene import SceneState
from src.services.image_loader import data_uri_to_qimage, sniff_image_mime
from src.services.scene_painter import canvas_size, paint_scene


class ScenePreviewWidget(QWidget):
    """Paints the current scene scaled to fit the widget."""

    # Emitted with a local file path when an image is dropped on the preview
    image_dropped = Signal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._state: SceneState | None = None
        self._background = QImage()
        self._background_uri: str | None = None
        self.setAcceptDrops(True)
        self.setMinimumSize(480, 270)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

    def set_state(self, state: SceneState) -> None:
        self._state = state
        # Decoding the data URI is the expensive part; redo it only on change
        if state.image != self._background_uri:
            self._background_uri = state.image
            self._background = data_uri_to_qimage(state.image)
        self.update()

    def scene_rect(self) -> QRectF:
        """Widget-space rectangle the canvas is drawn into."""
        if self._state is None:
            return QRectF()
        logical = canvas_size(self._state, self._background)
        fitted = QSize(logical)
        fitted.scale(self.size(), Qt.AspectRatioMode.KeepAspectRatio)
        rect = QRectF(0, 0, fitted.width(), fitted.height())
        rect.moveCenter(QRectF(self.rect()).center())
        return rect

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(24, 24, 27))
        if self._state is not None:
            logical = canvas_size(self._state, self._background)
            target = self.scene_rect()
            if logical.width() > 0 and target.width() > 0:
                factor = target.width() / logical.width()
                painter.translate(target.topLeft())
                painter.scale(factor, factor)
                paint_scene(
                    painter,
                    QRectF(0, 0, logical.width(), logical.height()),
                    self._state,
                    self._background,
                )
        painter.end()

    # ----------------------------------------------------- Drag & Drop

    @staticmethod
    def _first_image_path(mime_data) -> Path | None:
        if not mime_data.hasUrls():
            return None
        for url in mime_data.urls():
            path = Path(url.toLocalFile())
            if path.is_file() and sniff_image_mime(path):
                return path
        return None

    def dragEnterEvent(self, event) -> None:
        if self._first_image_path(event.mimeData()) is not None:
            event.acceptProposedAction()

    def dragMoveEvent(self, event) -> None:
        if self._first_image_path(event.mimeData()) is not None:
            event.acceptProposedAction()

    def dropEvent(self, event) -> None:
        path = self._first_image_path(event.mimeData())
        if path is None:
            return
        self.image_dropped.emit(str(path))
        event.acceptProposedAction()
