"""Logging setup: console handler plus a log file in the app data dir."""

import logging
import sys
from pathlib import Path

from src.utils.config import APP_DATA_DIR

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_log_path() -> Path:
    """Return the path to the application log file."""
    log_dir = APP_DATA_DIR / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / "app.log"


def setup_logging(level: str = "INFO", log_to_file: bool = True) -> None:
    """Configure the root logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ...)
        log_to_file: Also write to ``get_log_path()``
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(_FORMAT)

    root = logging.getLogger()
    root.setLevel(log_level)
    root.handlers.clear()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_to_file:
        try:
            fh = logging.FileHandler(get_log_path(), encoding="utf-8")
        except OSError as e:
            root.warning(f"Log file unavailable, console only: {e}")
        else:
            fh.setFormatter(formatter)
            root.addHandler(fh)
