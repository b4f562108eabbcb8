"""Authoritative holder of the current scene state."""

from __future__ import annotations

import dataclasses

from PySide6.QtCore import QObject, Signal

from src.models.scene import SceneState
from src.services.project_io import decode_scene, default_scene, encode_scene


_FIELDS = frozenset(f.name for f in dataclasses.fields(SceneState))


class SceneStore(QObject):
    """Owns the live ``SceneState`` and announces every change.

    Each change installs a new state value; a state returned by ``get()`` is
    never modified afterwards. Persistence is not done here: listeners such
    as ``AutoSaveManager`` subscribe to ``state_changed``.
    """

    state_changed = Signal(object)  # SceneState

    def __init__(self, initial: SceneState | None = None, parent: QObject = None):
        super().__init__(parent)
        self._state = initial.copy() if initial is not None else default_scene()

    def get(self) -> SceneState:
        """Return the current state. Treat it as read-only."""
        return self._state

    def update(self, **fields) -> SceneState:
        """Shallow-merge top-level fields into a new state.

        Passing ``template`` replaces the whole live template.

        Raises:
            TypeError: an unknown field name was given
        """
        unknown = set(fields) - _FIELDS
        if unknown:
            raise TypeError(f"Unknown scene fields: {', '.join(sorted(unknown))}")
        if "template" in fields:
            fields["template"] = fields["template"].copy()
        if "saved_templates" in fields:
            fields["saved_templates"] = [t.copy() for t in fields["saved_templates"]]
        return self._commit(dataclasses.replace(self._state.copy(), **fields))

    def replace(self, state: SceneState) -> SceneState:
        """Install *state* (copied) as the current state."""
        if state is self._state:
            return self._state
        return self._commit(state.copy())

    def load(self, raw: bytes | str) -> SceneState:
        """Decode *raw* and make it the current state.

        Raises:
            SceneDecodeError: *raw* is malformed; the current state is kept
        """
        return self._commit(decode_scene(raw))

    def serialize(self, state: SceneState | None = None) -> bytes:
        return encode_scene(state if state is not None else self._state)

    def _commit(self, state: SceneState) -> SceneState:
        self._state = state
        self.state_changed.emit(state)
        return state
