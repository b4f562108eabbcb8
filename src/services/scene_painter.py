"""QPainter rendering of a scene, shared by the preview widget and the exporter."""

from __future__ import annotations

from PySide6.QtCore import QPointF, QRectF, QSize, Qt
from PySide6.QtGui import (
    QBrush,
    QColor,
    QFont,
    QFontDatabase,
    QFontMetricsF,
    QImage,
    QLinearGradient,
    QPainter,
    QPainterPath,
    QPen,
)

from src.models.scene import ImageScale, SceneState
from src.models.style import TextAlign
from src.services.layout_engine import (
    BoxGeometry,
    GradientBox,
    PanelBox,
    RenderPlan,
    Rgba,
    TextLine,
    layout_box,
    resolve_render_plan,
)
from src.utils.config import (
    FONTS,
    LINE_SPACING,
    OUTLINE_COLOR,
    OUTLINE_OFFSETS,
    PREVIEW_FIT_SIZE,
    PREVIEW_ORIGINAL_MIN_SIZE,
)

_STYLE_HINTS = {
    "sans-serif": QFont.StyleHint.SansSerif,
    "serif": QFont.StyleHint.Serif,
    "monospace": QFont.StyleHint.Monospace,
}

_ALIGN_FLAGS = {
    TextAlign.LEFT: Qt.AlignmentFlag.AlignLeft,
    TextAlign.CENTER: Qt.AlignmentFlag.AlignHCenter,
    TextAlign.RIGHT: Qt.AlignmentFlag.AlignRight,
}

_PLACEHOLDER_COLOR = QColor(82, 82, 91)


def qcolor(paint: Rgba) -> QColor:
    return QColor(paint.r, paint.g, paint.b, paint.alpha_byte())


def qfont_for(line: TextLine) -> QFont:
    """Build the QFont for a resolved line (font token -> Qt family)."""
    if line.font_family == "system-ui":
        font = QFontDatabase.systemFont(QFontDatabase.SystemFont.GeneralFont)
    else:
        font = QFont()
        family = next((f for _, token, f in FONTS if token == line.font_family), "")
        if family:
            font.setFamily(family)
        font.setStyleHint(_STYLE_HINTS.get(line.font_family, QFont.StyleHint.AnyStyle))
    font.setPixelSize(max(1, line.font_size_px))
    font.setItalic(line.italic)
    return font


def canvas_size(state: SceneState, background: QImage | None = None) -> QSize:
    """Logical size of the scene canvas.

    ``fit`` uses a fixed 16:9 canvas; ``original`` uses the image's own
    size, but never less than the minimum original-mode canvas.
    """
    if (
        state.image_scale == ImageScale.ORIGINAL
        and background is not None
        and not background.isNull()
    ):
        min_w, min_h = PREVIEW_ORIGINAL_MIN_SIZE
        return QSize(max(min_w, background.width()), max(min_h, background.height()))
    return QSize(*PREVIEW_FIT_SIZE)


def _text_flags(align: TextAlign) -> int:
    return (
        _ALIGN_FLAGS[align].value
        | Qt.AlignmentFlag.AlignTop.value
        | Qt.TextFlag.TextWordWrap.value
    )


def _line_height(line: TextLine, width: float, align: TextAlign) -> float:
    metrics = QFontMetricsF(qfont_for(line))
    bounds = metrics.boundingRect(QRectF(0, 0, max(1.0, width), 1e6), _text_flags(align), line.text)
    return bounds.height()


def measure_text_block(plan: RenderPlan, width: float) -> list[float]:
    """Wrapped height of each plan line at *width*."""
    return [_line_height(line, width, plan.text_align) for line in plan.lines]


def _draw_background(painter: QPainter, rect: QRectF, state: SceneState,
                     background: QImage | None) -> None:
    if background is None or background.isNull():
        painter.setPen(_PLACEHOLDER_COLOR)
        font = QFont()
        font.setPixelSize(16)
        painter.setFont(font)
        painter.drawText(
            rect,
            Qt.AlignmentFlag.AlignCenter.value,
            "Drag and drop an image here\nor use Media > Upload Image",
        )
        return
    size = QSize(background.width(), background.height())
    if state.image_scale == ImageScale.FIT:
        size.scale(rect.size().toSize(), Qt.AspectRatioMode.KeepAspectRatio)
    target = QRectF(0, 0, size.width(), size.height())
    target.moveCenter(rect.center())
    painter.drawImage(target, background)


def _draw_gradient_box(painter: QPainter, box: GradientBox, geometry: BoxGeometry) -> None:
    r = geometry.box
    gradient = QLinearGradient(QPointF(0, r.bottom), QPointF(0, r.y))
    color = qcolor(box.paint)
    clear = QColor(color)
    clear.setAlpha(0)
    gradient.setColorAt(0.0, color)
    gradient.setColorAt(1.0, clear)
    painter.fillRect(QRectF(r.x, r.y, r.width, r.height), QBrush(gradient))


def _draw_panel_box(painter: QPainter, box: PanelBox, geometry: BoxGeometry) -> None:
    r = geometry.box
    deco = box.decoration
    rect = QRectF(r.x, r.y, r.width, r.height)
    radius = deco.corner_radius

    # Glow: concentric outlines fading out
    if deco.glow_radius > 0:
        glow = qcolor(deco.glow_color)
        base_alpha = glow.alpha()
        painter.setBrush(Qt.BrushStyle.NoBrush)
        for step in range(1, deco.glow_radius + 1):
            glow.setAlpha(int(base_alpha * (1 - step / (deco.glow_radius + 1)) / 3))
            painter.setPen(QPen(glow, 1))
            grown = rect.adjusted(-step, -step, step, step)
            painter.drawRoundedRect(grown, radius + step, radius + step)

    path = QPainterPath()
    path.addRoundedRect(rect, radius, radius)
    painter.fillPath(path, qcolor(box.paint))

    if deco.border_width > 0:
        half = deco.border_width / 2
        inset = rect.adjusted(half, half, -half, -half)
        pen = QPen(QColor(deco.border_color), deco.border_width)
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawRoundedRect(inset, max(0.0, radius - half), max(0.0, radius - half))


def _draw_line(painter: QPainter, line: TextLine, rect: QRectF, align: TextAlign) -> None:
    painter.setFont(qfont_for(line))
    flags = _text_flags(align)
    if line.outline:
        painter.setPen(QColor(OUTLINE_COLOR))
        for dx, dy in OUTLINE_OFFSETS:
            painter.drawText(rect.translated(dx, dy), flags, line.text)
    painter.setPen(QColor(line.color))
    painter.drawText(rect, flags, line.text)


def paint_scene(painter: QPainter, rect: QRectF, state: SceneState,
                background: QImage | None = None) -> RenderPlan:
    """Draw *state* into *rect* (logical coordinates).

    Returns:
        The render plan that was drawn
    """
    plan = resolve_render_plan(state)
    painter.save()
    painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
    painter.setRenderHint(QPainter.RenderHint.TextAntialiasing, True)
    painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, True)
    painter.setClipRect(rect)
    painter.fillRect(rect, Qt.GlobalColor.black)
    _draw_background(painter, rect, state, background)

    painter.translate(rect.topLeft())
    width, height = rect.width(), rect.height()
    text_width = layout_box(plan.box, width, height, 0).text.width
    heights = measure_text_block(plan, text_width)
    block_height = sum(heights) + LINE_SPACING * len(heights)
    geometry = layout_box(plan.box, width, height, block_height)

    if isinstance(plan.box, GradientBox):
        _draw_gradient_box(painter, plan.box, geometry)
    else:
        _draw_panel_box(painter, plan.box, geometry)

    y = geometry.text.y
    for line, line_height in zip(plan.lines, heights):
        line_rect = QRectF(geometry.text.x, y, geometry.text.width, line_height)
        _draw_line(painter, line, line_rect, plan.text_align)
        y += line_height + LINE_SPACING

    painter.restore()
    return plan
