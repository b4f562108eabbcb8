"""MainWindow menu bar. Called after the controllers exist."""

from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QMenu


def build_main_window_menu(window) -> None:
    """Build the menu bar. Needs window._project_ctrl and window._ctx."""
    menubar = window.menuBar()
    project_ctrl = window._project_ctrl

    file_menu = menubar.addMenu("&File")

    new_action = QAction("&New Scene", window)
    new_action.setShortcut(QKeySequence("Ctrl+N"))
    new_action.triggered.connect(project_ctrl.on_new_scene)
    file_menu.addAction(new_action)

    open_image_action = QAction("Open &Image...", window)
    open_image_action.setShortcut(QKeySequence("Ctrl+O"))
    open_image_action.triggered.connect(project_ctrl.on_upload_image)
    file_menu.addAction(open_image_action)

    file_menu.addSeparator()

    save_action = QAction("&Save Project...", window)
    save_action.setShortcut(QKeySequence("Ctrl+S"))
    save_action.triggered.connect(project_ctrl.on_save_project)
    file_menu.addAction(save_action)

    load_action = QAction("&Load Project...", window)
    load_action.setShortcut(QKeySequence("Ctrl+L"))
    load_action.triggered.connect(lambda: project_ctrl.on_load_project())
    file_menu.addAction(load_action)

    recent_menu = QMenu("Recent &Projects", window)
    file_menu.addMenu(recent_menu)
    window._ctx.recent_menu = recent_menu
    project_ctrl.update_recent_menu()

    file_menu.addSeparator()

    export_action = QAction("&Export Image...", window)
    export_action.setShortcut(QKeySequence("Ctrl+E"))
    export_action.triggered.connect(project_ctrl.on_export_png)
    file_menu.addAction(export_action)

    file_menu.addSeparator()

    quit_action = QAction("&Quit", window)
    quit_action.setShortcut(QKeySequence("Ctrl+Q"))
    quit_action.triggered.connect(window.close)
    file_menu.addAction(quit_action)
