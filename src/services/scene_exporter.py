"""Rasterize a scene to PNG."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import QRectF
from PySide6.QtGui import QColor, QImage, QPainter

from src.models.scene import SceneState
from src.services.image_loader import data_uri_to_qimage
from src.services.scene_painter import canvas_size, paint_scene
from src.utils.config import EXPORT_BACKGROUND, EXPORT_SCALE

logger = logging.getLogger(__name__)


class ExportError(RuntimeError):
    """Raised when the scene cannot be rendered or written."""


def render_scene(state: SceneState, scale: int = EXPORT_SCALE) -> QImage:
    """Render *state* at *scale* x its logical canvas size.

    Transparent areas end up on an opaque black backdrop.
    """
    background = data_uri_to_qimage(state.image)
    size = canvas_size(state, background)
    image = QImage(size.width() * scale, size.height() * scale, QImage.Format.Format_RGB32)
    if image.isNull():
        raise ExportError(f"Cannot allocate a {size.width() * scale}x{size.height() * scale} image")
    image.fill(QColor(EXPORT_BACKGROUND))

    painter = QPainter(image)
    try:
        painter.scale(scale, scale)
        paint_scene(painter, QRectF(0, 0, size.width(), size.height()), state, background)
    finally:
        painter.end()
    return image


def export_png(state: SceneState, output_path: Path, scale: int = EXPORT_SCALE) -> Path:
    """Render *state* and save it as a PNG file.

    Raises:
        ExportError: rendering or encoding failed
    """
    image = render_scene(state, scale)
    output_path = Path(output_path)
    if not image.save(str(output_path), "PNG"):
        raise ExportError(f"Failed to write PNG to {output_path}")
    logger.info(f"Exported scene {image.width()}x{image.height()} to {output_path}")
    return output_path
