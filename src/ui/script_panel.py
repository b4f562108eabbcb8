"""Media and script inputs: background image, scaling mode and text fields."""

from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QButtonGroup,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from src.models.scene import ImageScale, SceneState


def _caption(text: str) -> QLabel:
    label = QLabel(text.upper())
    label.setStyleSheet("color: #a1a1aa; font-size: 10px; font-weight: bold;")
    return label


class MediaPanel(QWidget):
    upload_requested = Signal()
    clear_requested = Signal()
    image_scale_changed = Signal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QVBoxLayout(self)

        layout.addWidget(_caption("Background Image"))
        btn_row = QHBoxLayout()
        self._upload_btn = QPushButton("Upload Image")
        self._upload_btn.clicked.connect(lambda: self.upload_requested.emit())
        btn_row.addWidget(self._upload_btn)
        self._clear_btn = QPushButton("Remove")
        self._clear_btn.clicked.connect(lambda: self.clear_requested.emit())
        btn_row.addWidget(self._clear_btn)
        layout.addLayout(btn_row)

        layout.addWidget(_caption("Scaling Mode"))
        scale_row = QHBoxLayout()
        self._scale_group = QButtonGroup(self)
        self._scale_group.setExclusive(True)
        self._scale_buttons: dict[ImageScale, QPushButton] = {}
        for label, scale in [("Fit to Screen", ImageScale.FIT), ("Original Size", ImageScale.ORIGINAL)]:
            btn = QPushButton(label)
            btn.setCheckable(True)
            btn.clicked.connect(lambda checked, s=scale: self.image_scale_changed.emit(s.value))
            self._scale_group.addButton(btn)
            self._scale_buttons[scale] = btn
            scale_row.addWidget(btn)
        layout.addLayout(scale_row)

    def set_state(self, state: SceneState) -> None:
        self._scale_buttons[state.image_scale].setChecked(True)
        self._clear_btn.setEnabled(state.has_image)


class ScriptPanel(QWidget):
    """Character name, dialogue and secondary dialogue inputs."""

    # field name on SceneState, new text
    text_edited = Signal(str, str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._updating = False
        layout = QVBoxLayout(self)

        layout.addWidget(_caption("Character Name"))
        self._name_edit = QLineEdit()
        self._name_edit.setPlaceholderText("e.g. Narrator")
        self._name_edit.textEdited.connect(
            lambda text: self.text_edited.emit("character_name", text)
        )
        layout.addWidget(self._name_edit)

        layout.addWidget(_caption("Primary Dialogue"))
        self._dialogue_edit = QPlainTextEdit()
        self._dialogue_edit.setPlaceholderText("Enter dialogue here...")
        self._dialogue_edit.setFixedHeight(96)
        self._dialogue_edit.textChanged.connect(
            lambda: self._emit_plain("dialogue", self._dialogue_edit)
        )
        layout.addWidget(self._dialogue_edit)

        layout.addWidget(_caption("Secondary Dialogue (Translation/Sub)"))
        self._secondary_edit = QPlainTextEdit()
        self._secondary_edit.setPlaceholderText("Optional secondary language...")
        self._secondary_edit.setFixedHeight(80)
        self._secondary_edit.textChanged.connect(
            lambda: self._emit_plain("secondary_dialogue", self._secondary_edit)
        )
        layout.addWidget(self._secondary_edit)

    def set_state(self, state: SceneState) -> None:
        """Show the scene text; fields already holding the text are untouched."""
        self._updating = True
        try:
            if self._name_edit.text() != state.character_name:
                self._name_edit.setText(state.character_name)
            if self._dialogue_edit.toPlainText() != state.dialogue:
                self._dialogue_edit.setPlainText(state.dialogue)
            if self._secondary_edit.toPlainText() != state.secondary_dialogue:
                self._secondary_edit.setPlainText(state.secondary_dialogue)
        finally:
            self._updating = False

    def _emit_plain(self, field: str, edit: QPlainTextEdit) -> None:
        if not self._updating:
            self.text_edited.emit(field, edit.toPlainText())
