"""Template browser: built-in and saved templates, save current style."""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QHBoxLayout,
    QInputDialog,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from src.models.scene import SceneState
from src.services.template_registry import list_builtins

_ID_ROLE = Qt.ItemDataRole.UserRole

_LIST_STYLE = (
    "QListWidget { background: #1e1e1e; border: 1px solid #444; }"
    "QListWidget::item { padding: 6px; color: #ccc; }"
    "QListWidget::item:selected { background: #4f46e5; color: white; }"
)


class TemplatesPanel(QWidget):
    """Lists templates and forwards user requests as signals."""

    apply_requested = Signal(str)            # template_id
    delete_requested = Signal(str)           # template_id
    save_requested = Signal(str)             # name
    rename_requested = Signal(str, str)      # template_id, name
    overwrite_requested = Signal(str)        # template_id

    def __init__(self, parent=None):
        super().__init__(parent)
        self._active_id: str | None = None
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(6)

        layout.addWidget(self._section_label("Built-in Templates"))
        self._builtin_list = QListWidget()
        self._builtin_list.setStyleSheet(_LIST_STYLE)
        for t in list_builtins():
            item = QListWidgetItem(t.name)
            item.setData(_ID_ROLE, t.template_id)
            self._builtin_list.addItem(item)
        self._builtin_list.setFixedHeight(3 * 32 + 6)
        self._builtin_list.itemClicked.connect(self._on_item_clicked)
        layout.addWidget(self._builtin_list)

        self._saved_label = self._section_label("My Templates")
        layout.addWidget(self._saved_label)
        self._saved_list = QListWidget()
        self._saved_list.setStyleSheet(_LIST_STYLE)
        self._saved_list.itemClicked.connect(self._on_item_clicked)
        self._saved_list.currentItemChanged.connect(lambda *_: self._update_buttons())
        layout.addWidget(self._saved_list)

        saved_btns = QHBoxLayout()
        self._rename_btn = QPushButton("Rename...")
        self._rename_btn.clicked.connect(self._on_rename)
        saved_btns.addWidget(self._rename_btn)
        self._overwrite_btn = QPushButton("Update")
        self._overwrite_btn.setToolTip("Store the current style in the selected template")
        self._overwrite_btn.clicked.connect(self._on_overwrite)
        saved_btns.addWidget(self._overwrite_btn)
        self._delete_btn = QPushButton("Delete")
        self._delete_btn.clicked.connect(self._on_delete)
        saved_btns.addWidget(self._delete_btn)
        layout.addLayout(saved_btns)

        layout.addWidget(self._section_label("Save Current Style"))
        save_row = QHBoxLayout()
        self._name_edit = QLineEdit()
        self._name_edit.setPlaceholderText("Template name...")
        self._name_edit.textChanged.connect(lambda _: self._update_buttons())
        self._name_edit.returnPressed.connect(self._on_save)
        save_row.addWidget(self._name_edit)
        self._save_btn = QPushButton("+")
        self._save_btn.setFixedWidth(32)
        self._save_btn.clicked.connect(self._on_save)
        save_row.addWidget(self._save_btn)
        layout.addLayout(save_row)

        layout.addStretch()
        self._update_buttons()

    @staticmethod
    def _section_label(text: str) -> QLabel:
        label = QLabel(text.upper())
        label.setStyleSheet("color: #a1a1aa; font-size: 10px; font-weight: bold;")
        return label

    # ------------------------------------------------------------------ State

    def set_state(self, state: SceneState) -> None:
        """Refresh the saved list and highlight the live template."""
        self._active_id = state.template.template_id
        selected = self._selected_saved_id()

        self._saved_list.blockSignals(True)
        self._saved_list.clear()
        for t in state.saved_templates:
            item = QListWidgetItem(t.name)
            item.setData(_ID_ROLE, t.template_id)
            self._saved_list.addItem(item)
            if t.template_id == selected:
                self._saved_list.setCurrentItem(item)
        self._saved_list.blockSignals(False)

        has_saved = bool(state.saved_templates)
        self._saved_label.setVisible(has_saved)
        self._saved_list.setVisible(has_saved)
        self._highlight_active()
        self._update_buttons()

    def _highlight_active(self) -> None:
        for lst in (self._builtin_list, self._saved_list):
            for i in range(lst.count()):
                item = lst.item(i)
                font = item.font()
                font.setBold(item.data(_ID_ROLE) == self._active_id)
                item.setFont(font)

    def _selected_saved_id(self) -> str | None:
        item = self._saved_list.currentItem()
        return item.data(_ID_ROLE) if item else None

    def _update_buttons(self) -> None:
        has_selection = self._selected_saved_id() is not None
        self._rename_btn.setEnabled(has_selection)
        self._overwrite_btn.setEnabled(has_selection)
        self._delete_btn.setEnabled(has_selection)
        self._save_btn.setEnabled(bool(self._name_edit.text().strip()))

    # ------------------------------------------------------------------ Actions

    def _on_item_clicked(self, item: QListWidgetItem) -> None:
        self.apply_requested.emit(item.data(_ID_ROLE))

    def _on_save(self) -> None:
        name = self._name_edit.text().strip()
        if not name:
            return
        self.save_requested.emit(name)
        self._name_edit.clear()

    def _on_delete(self) -> None:
        template_id = self._selected_saved_id()
        if template_id:
            self.delete_requested.emit(template_id)

    def _on_overwrite(self) -> None:
        template_id = self._selected_saved_id()
        if template_id:
            self.overwrite_requested.emit(template_id)

    def _on_rename(self) -> None:
        item = self._saved_list.currentItem()
        if item is None:
            return
        name, ok = QInputDialog.getText(self, "Rename Template", "New name:", text=item.text())
        if ok and name.strip():
            self.rename_requested.emit(item.data(_ID_ROLE), name.strip())
