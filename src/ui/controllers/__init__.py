"""UI controllers split out of MainWindow.

Each controller reaches the shared state through an AppContext.
"""

from src.ui.controllers.app_context import AppContext

__all__ = ["AppContext"]
