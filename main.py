"""VN Scene Mockup application entry point."""

import sys
from pathlib import Path

# Print Python tracebacks on hard crashes
try:
    import faulthandler
    faulthandler.enable(all_threads=True)
except Exception:
    pass

from PySide6.QtWidgets import QApplication
from PySide6.QtGui import QColor, QPalette

from src.utils.config import APP_NAME, ORG_NAME
from src.utils.logging_config import setup_logging
from src.ui.main_window import MainWindow


def _apply_dark_theme(app: QApplication) -> None:
    """Apply a dark color palette using the Fusion style."""
    app.setStyle("Fusion")
    palette = QPalette()

    # Base colors
    palette.setColor(QPalette.ColorRole.Window, QColor(24, 24, 27))
    palette.setColor(QPalette.ColorRole.WindowText, QColor(228, 228, 231))
    palette.setColor(QPalette.ColorRole.Base, QColor(30, 30, 30))
    palette.setColor(QPalette.ColorRole.AlternateBase, QColor(39, 39, 42))
    palette.setColor(QPalette.ColorRole.ToolTipBase, QColor(50, 50, 50))
    palette.setColor(QPalette.ColorRole.ToolTipText, QColor(228, 228, 231))
    palette.setColor(QPalette.ColorRole.Text, QColor(228, 228, 231))
    palette.setColor(QPalette.ColorRole.Button, QColor(39, 39, 42))
    palette.setColor(QPalette.ColorRole.ButtonText, QColor(228, 228, 231))
    palette.setColor(QPalette.ColorRole.BrightText, QColor(255, 255, 255))

    # Highlight
    palette.setColor(QPalette.ColorRole.Highlight, QColor(79, 70, 229))
    palette.setColor(QPalette.ColorRole.HighlightedText, QColor(255, 255, 255))

    # Disabled
    palette.setColor(QPalette.ColorGroup.Disabled, QPalette.ColorRole.WindowText, QColor(120, 120, 120))
    palette.setColor(QPalette.ColorGroup.Disabled, QPalette.ColorRole.Text, QColor(120, 120, 120))
    palette.setColor(QPalette.ColorGroup.Disabled, QPalette.ColorRole.ButtonText, QColor(120, 120, 120))

    app.setPalette(palette)


def main() -> None:
    setup_logging()
    QApplication.setOrganizationName(ORG_NAME)
    QApplication.setApplicationName(APP_NAME)

    app = QApplication(sys.argv)
    _apply_dark_theme(app)

    window = MainWindow()
    window.show()

    # Allow opening a project via command-line argument
    if len(sys.argv) > 1:
        project_path = Path(sys.argv[1])
        if project_path.is_file():
            window._project_ctrl.on_load_project(project_path)

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
