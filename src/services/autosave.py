"""Automatic saving of the scene to a durable settings slot, and recovery."""

import logging
from pathlib import Path
from typing import List, Optional

from PySide6.QtCore import QObject, QSettings, Signal, Slot

from src.models.scene import SceneState
from src.services.project_io import SceneDecodeError, decode_scene, default_scene, encode_scene
from src.utils.config import (
    AUTOSAVE_KEY,
    RECENT_FILES_KEY,
    RECENT_FILES_MAX_DEFAULT,
    RECENT_FILES_MAX_KEY,
)

logger = logging.getLogger(__name__)


class AutoSaveManager(QObject):
    """Persists the whole scene after every change and restores it on startup.

    Features:
    - Writes the serialized scene to ``AUTOSAVE_KEY`` on every store change
    - Falls back to the default scene when the slot is empty or malformed
    - Recent project files list management
    """

    save_completed = Signal()
    save_failed = Signal(str)

    def __init__(self, settings: Optional[QSettings] = None, parent: QObject = None):
        super().__init__(parent)
        self._settings = settings if settings is not None else QSettings()
        self._max_recent = int(
            self._settings.value(RECENT_FILES_MAX_KEY, RECENT_FILES_MAX_DEFAULT)
        )

    def attach(self, store) -> None:
        """Save after every change announced by *store* (a ``SceneStore``)."""
        store.state_changed.connect(self.save)

    @Slot(object)
    def save(self, state: SceneState) -> None:
        """Write *state* to the autosave slot."""
        try:
            payload = encode_scene(state).decode("utf-8")
            self._settings.setValue(AUTOSAVE_KEY, payload)
            self._settings.sync()
        except (OSError, ValueError) as e:
            logger.error(f"Autosave failed: {e}")
            self.save_failed.emit(str(e))
            return
        if self._settings.status() != QSettings.Status.NoError:
            logger.error(f"Autosave failed: settings status {self._settings.status()}")
            self.save_failed.emit("settings write error")
            return
        self.save_completed.emit()

    def restore(self) -> SceneState:
        """Return the autosaved scene, or the default scene if there is none.

        A malformed payload is logged and ignored.
        """
        payload = self._settings.value(AUTOSAVE_KEY)
        if not payload:
            return default_scene()
        if isinstance(payload, (bytes, bytearray)):
            payload = bytes(payload)
        elif not isinstance(payload, str):
            logger.warning(f"Ignoring autosave payload of type {type(payload).__name__}")
            return default_scene()
        try:
            return decode_scene(payload)
        except SceneDecodeError as e:
            logger.warning(f"Failed to load autosave, using defaults: {e}")
            return default_scene()

    def clear(self) -> None:
        """Remove the autosave slot."""
        self._settings.remove(AUTOSAVE_KEY)
        self._settings.sync()

    # ---------------------------------------------------- Recent files

    def get_recent_files(self) -> List[Path]:
        """Get the list of recent project files that still exist."""
        recent = self._settings.value(RECENT_FILES_KEY, [])
        if isinstance(recent, str):
            recent = [recent]
        if recent:
            return [Path(p) for p in recent if Path(p).is_file()]
        return []

    def add_recent_file(self, path: Path) -> None:
        """Move *path* to the top of the recent files list."""
        str_path = str(path)
        recent_files = [p for p in self.get_recent_files() if str(p) != str_path]
        recent_files.insert(0, path)
        recent_files = recent_files[:self._max_recent]
        self._settings.setValue(RECENT_FILES_KEY, [str(p) for p in recent_files])

    def clear_recent_files(self) -> None:
        self._settings.setValue(RECENT_FILES_KEY, [])
