"""Editors for the live template's text and box styles."""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QButtonGroup,
    QCheckBox,
    QColorDialog,
    QComboBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSlider,
    QWidget,
)

from src.models.style import BoxStyle, BoxType, TextAlign, TextStyle
from src.utils.config import (
    FONT_SIZE_MAX,
    FONT_SIZE_MIN,
    FONTS,
    OPACITY_MAX,
    OPACITY_MIN,
    PADDING_MAX,
    PADDING_MIN,
)

_BOX_TYPES = [
    ("Gradient (Cinematic)", BoxType.GRADIENT),
    ("Solid Box", BoxType.SOLID),
    ("Fantasy Border", BoxType.FANTASY),
    ("Romance Border", BoxType.ROMANCE),
]


def _make_color_button(hex_color: str) -> QPushButton:
    btn = QPushButton()
    btn.setFixedSize(60, 24)
    _set_button_color(btn, hex_color)
    return btn


def _set_button_color(btn: QPushButton, hex_color: str) -> None:
    btn.setProperty("color_hex", hex_color)
    btn.setToolTip(hex_color.upper())
    btn.setStyleSheet(f"background-color: {hex_color}; border: 1px solid #888;")


def _make_slider(lo: int, hi: int) -> QSlider:
    slider = QSlider(Qt.Orientation.Horizontal)
    slider.setRange(lo, hi)
    return slider


class TextStyleEditor(QWidget):
    """Edits one TextStyle; emits only the fields the user changed."""

    style_edited = Signal(str, dict)  # role, changes

    def __init__(self, role: str, parent=None):
        super().__init__(parent)
        self._role = role
        self._updating = True
        layout = QFormLayout(self)

        self._font_combo = QComboBox()
        for label, token, _ in FONTS:
            self._font_combo.addItem(label, token)
        self._font_combo.currentIndexChanged.connect(
            lambda _: self._emit(font_family=self._font_combo.currentData())
        )
        layout.addRow("Font Family:", self._font_combo)

        self._size_label = QLabel()
        self._size_slider = _make_slider(FONT_SIZE_MIN, FONT_SIZE_MAX)
        self._size_slider.valueChanged.connect(self._on_size_changed)
        layout.addRow(self._size_label, self._size_slider)

        color_row = QHBoxLayout()
        self._color_btn = _make_color_button("#ffffff")
        self._color_btn.clicked.connect(self._pick_color)
        color_row.addWidget(self._color_btn)
        color_row.addStretch()
        layout.addRow("Text Color:", color_row)

        self._outline_check = QCheckBox("Text Outline / Shadow")
        self._outline_check.toggled.connect(lambda on: self._emit(has_outline=on))
        layout.addRow(self._outline_check)

        self._italic_check = QCheckBox("Italic")
        self._italic_check.toggled.connect(lambda on: self._emit(is_italic=on))
        layout.addRow(self._italic_check)
        self._updating = False

    @property
    def role(self) -> str:
        return self._role

    def set_style(self, style: TextStyle) -> None:
        """Show *style* without emitting edits."""
        self._updating = True
        try:
            idx = self._font_combo.findData(style.font_family)
            self._font_combo.setCurrentIndex(max(0, idx))
            self._size_slider.setValue(style.font_size)
            self._size_label.setText(f"Font Size: {style.font_size}px")
            _set_button_color(self._color_btn, style.color)
            self._outline_check.setChecked(style.has_outline)
            self._italic_check.setChecked(style.is_italic)
        finally:
            self._updating = False

    def _on_size_changed(self, value: int) -> None:
        self._size_label.setText(f"Font Size: {value}px")
        self._emit(font_size=value)

    def _pick_color(self) -> None:
        current = QColor(self._color_btn.property("color_hex"))
        color = QColorDialog.getColor(current, self, "Select Color")
        if color.isValid():
            _set_button_color(self._color_btn, color.name())
            self._emit(color=color.name())

    def _emit(self, **changes) -> None:
        if not self._updating:
            self.style_edited.emit(self._role, changes)


class BoxStyleEditor(QWidget):
    """Edits the BoxStyle of the live template."""

    box_edited = Signal(dict)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._updating = True
        layout = QFormLayout(self)

        self._type_combo = QComboBox()
        for label, box_type in _BOX_TYPES:
            self._type_combo.addItem(label, box_type.value)
        self._type_combo.currentIndexChanged.connect(
            lambda _: self._emit(type=self._type_combo.currentData())
        )
        layout.addRow("Box Type:", self._type_combo)

        color_row = QHBoxLayout()
        self._color_btn = _make_color_button("#000000")
        self._color_btn.clicked.connect(self._pick_color)
        color_row.addWidget(self._color_btn)
        color_row.addStretch()
        layout.addRow("Background Color:", color_row)

        self._opacity_label = QLabel()
        self._opacity_slider = _make_slider(OPACITY_MIN, OPACITY_MAX)
        self._opacity_slider.valueChanged.connect(self._on_opacity_changed)
        layout.addRow(self._opacity_label, self._opacity_slider)

        align_row = QHBoxLayout()
        self._align_group = QButtonGroup(self)
        self._align_group.setExclusive(True)
        self._align_buttons: dict[TextAlign, QPushButton] = {}
        for align in TextAlign:
            btn = QPushButton(align.value.capitalize())
            btn.setCheckable(True)
            btn.clicked.connect(lambda checked, a=align: self._emit(text_align=a.value))
            self._align_group.addButton(btn)
            self._align_buttons[align] = btn
            align_row.addWidget(btn)
        layout.addRow("Alignment:", align_row)

        self._padding_label = QLabel()
        self._padding_slider = _make_slider(PADDING_MIN, PADDING_MAX)
        self._padding_slider.valueChanged.connect(self._on_padding_changed)
        layout.addRow(self._padding_label, self._padding_slider)
        self._updating = False

    def set_style(self, style: BoxStyle) -> None:
        """Show *style* without emitting edits."""
        self._updating = True
        try:
            idx = self._type_combo.findData(style.type.value)
            self._type_combo.setCurrentIndex(max(0, idx))
            _set_button_color(self._color_btn, style.background_color)
            self._opacity_slider.setValue(style.opacity)
            self._opacity_label.setText(f"Opacity: {style.opacity}%")
            self._align_buttons[style.text_align].setChecked(True)
            self._padding_slider.setValue(style.padding)
            self._padding_label.setText(f"Vertical Padding: {style.padding}%")
        finally:
            self._updating = False

    def _on_opacity_changed(self, value: int) -> None:
        self._opacity_label.setText(f"Opacity: {value}%")
        self._emit(opacity=value)

    def _on_padding_changed(self, value: int) -> None:
        self._padding_label.setText(f"Vertical Padding: {value}%")
        self._emit(padding=value)

    def _pick_color(self) -> None:
        current = QColor(self._color_btn.property("color_hex"))
        color = QColorDialog.getColor(current, self, "Select Color")
        if color.isValid():
            _set_button_color(self._color_btn, color.name())
            self._emit(background_color=color.name())

    def _emit(self, **changes) -> None:
        if not self._updating:
            self.box_edited.emit(changes)
