"""MainWindow layout. Signal wiring happens in main_window.py."""

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QPushButton,
    QSplitter,
    QTabWidget,
    QToolBox,
    QVBoxLayout,
    QWidget,
)

from src.models.template import TEXT_ROLES
from src.ui.preview_widget import ScenePreviewWidget
from src.ui.script_panel import MediaPanel, ScriptPanel
from src.ui.style_panel import BoxStyleEditor, TextStyleEditor
from src.ui.templates_panel import TemplatesPanel

_ROLE_TABS = {
    "name": "Name",
    "dialogue": "Dialogue",
    "secondary": "Secondary",
}


def build_main_window_ui(window) -> None:
    """Build the central splitter: preview on the left, editing sidebar on the right.

    Sets ``_preview``, ``_media_panel``, ``_script_panel``, ``_templates_panel``,
    ``_text_editors``, ``_box_editor``, ``_save_btn``, ``_load_btn`` and
    ``_export_btn`` on *window*.
    """
    splitter = QSplitter(Qt.Orientation.Horizontal)
    window.setCentralWidget(splitter)

    window._preview = ScenePreviewWidget()
    splitter.addWidget(window._preview)

    sidebar = QToolBox()
    sidebar.setMinimumWidth(340)

    window._media_panel = MediaPanel()
    sidebar.addItem(window._media_panel, "Media")

    window._script_panel = ScriptPanel()
    sidebar.addItem(window._script_panel, "Script")

    style_tabs = QTabWidget()
    window._templates_panel = TemplatesPanel()
    style_tabs.addTab(window._templates_panel, "Template")
    window._text_editors = {}
    for role in TEXT_ROLES:
        editor = TextStyleEditor(role)
        window._text_editors[role] = editor
        style_tabs.addTab(editor, _ROLE_TABS[role])
    window._box_editor = BoxStyleEditor()
    style_tabs.addTab(window._box_editor, "Box")
    sidebar.addItem(style_tabs, "Style && Templates")

    project = QWidget()
    project_layout = QVBoxLayout(project)
    window._save_btn = QPushButton("Save Project")
    project_layout.addWidget(window._save_btn)
    window._load_btn = QPushButton("Load Project")
    project_layout.addWidget(window._load_btn)
    window._export_btn = QPushButton("Export Image")
    window._export_btn.setStyleSheet(
        "QPushButton { background: #4f46e5; color: white; font-weight: bold; padding: 8px; }"
    )
    project_layout.addWidget(window._export_btn)
    project_layout.addStretch()
    sidebar.addItem(project, "Project")

    splitter.addWidget(sidebar)
    splitter.setStretchFactor(0, 3)
    splitter.setStretchFactor(1, 1)
