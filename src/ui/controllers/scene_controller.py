"""SceneController - script text, style edits and template operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.models.scene import ImageScale
from src.services import style_editor, template_registry

if TYPE_CHECKING:
    from src.ui.controllers.app_context import AppContext


class SceneController:
    """Turns UI requests into new scene states on the store."""

    def __init__(self, ctx: AppContext) -> None:
        self.ctx = ctx

    # ---- Script / media ----

    def on_text_edited(self, field: str, text: str) -> None:
        if field in ("character_name", "dialogue", "secondary_dialogue"):
            self.ctx.store.update(**{field: text})

    def on_image_scale_changed(self, value: str) -> None:
        try:
            scale = ImageScale(value)
        except ValueError:
            return
        if scale != self.ctx.store.get().image_scale:
            self.ctx.store.update(image_scale=scale)

    def set_image(self, data_uri: str | None) -> None:
        self.ctx.store.update(image=data_uri)

    # ---- Style edits ----

    def on_text_style_edited(self, role: str, changes: dict) -> None:
        store = self.ctx.store
        store.replace(style_editor.update_text_style(store.get(), role, **changes))

    def on_box_style_edited(self, changes: dict) -> None:
        store = self.ctx.store
        store.replace(style_editor.update_box_style(store.get(), **changes))

    # ---- Templates ----

    def on_apply_template(self, template_id: str) -> None:
        store = self.ctx.store
        store.replace(template_registry.apply_template(store.get(), template_id))

    def on_save_template(self, name: str) -> None:
        store = self.ctx.store
        before = store.get()
        after = template_registry.save_as_template(before, name)
        if after is before:
            return
        store.replace(after)
        self.ctx.status_bar().showMessage(f"Template saved: {name.strip()}", 3000)

    def on_delete_template(self, template_id: str) -> None:
        store = self.ctx.store
        store.replace(template_registry.delete_template(store.get(), template_id))

    def on_rename_template(self, template_id: str, name: str) -> None:
        store = self.ctx.store
        store.replace(template_registry.rename_template(store.get(), template_id, name))

    def on_overwrite_template(self, template_id: str) -> None:
        store = self.ctx.store
        store.replace(template_registry.overwrite_template(store.get(), template_id))
