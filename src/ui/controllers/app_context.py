"""AppContext - shared state and widget references for the controllers.

MainWindow builds this object after creating its widgets and hands it to
every controller, which reach everything through ``self.ctx``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path

    from PySide6.QtWidgets import QMainWindow, QMenu, QStatusBar

    from src.services.autosave import AutoSaveManager
    from src.services.scene_store import SceneStore
    from src.ui.preview_widget import ScenePreviewWidget


class AppContext:
    """Container shared by the controllers.

    All fields are set after MainWindow.__init__ has built the UI.
    """

    def __init__(self) -> None:
        # ---- Core state ----
        self.store: SceneStore = None  # type: ignore[assignment]
        self.window: QMainWindow = None  # type: ignore[assignment]

        # ---- Services ----
        self.autosave: AutoSaveManager = None  # type: ignore[assignment]

        # ---- Widgets ----
        self.preview: ScenePreviewWidget = None  # type: ignore[assignment]
        self.recent_menu: QMenu | None = None

        # ---- Project path ----
        self.current_project_path: Path | None = None

        # ---- Controllers (set by MainWindow) ----
        self.scene_ctrl: Any = None
        self.project_ctrl: Any = None

    def status_bar(self) -> QStatusBar:
        """Shortcut to the main window's status bar."""
        return self.window.statusBar()
