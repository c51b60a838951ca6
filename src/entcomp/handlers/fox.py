from __future__ import annotations

from typing import Optional

from ..assets.state import get_select, get_toggle
from ..schema.models import EntityFeatureStateView
from .base import HandlerContext, HandlerResult, select, toggle

FOX_TYPES = (("red", "fox"), ("snow", "snow_fox"))


def fox_handler(ctx: HandlerContext) -> Optional[HandlerResult]:
    """Red/snow coat and the sleeping texture."""
    if ctx.folder_root != "fox":
        return None

    types = [(name, leaf) for name, leaf in FOX_TYPES if ctx.has_entity(f"fox/{leaf}")]
    default_type = "snow" if ctx.leaf.startswith("snow_fox") else "red"
    controls = []
    if len(types) > 1:
        controls.append(
            select("fox.type", "Fox Type", default_type, [name for name, _ in types])
        )
    default_sleeping = ctx.leaf.endswith("_sleep")
    controls.append(toggle("fox.sleeping", "Sleeping", default_sleeping))
    leaves = dict(FOX_TYPES)

    def base_texture(state: EntityFeatureStateView) -> str:
        leaf = leaves.get(get_select(state, "fox.type", default_type), "fox")
        candidates = [f"fox/{leaf}"]
        if get_toggle(state, "fox.sleeping", default_sleeping):
            candidates.insert(0, f"fox/{leaf}_sleep")
        return ctx.find_entity(*candidates) or ctx.base_asset_id

    def entity_state(state: EntityFeatureStateView):
        return {"is_sleeping": get_toggle(state, "fox.sleeping", default_sleeping)}

    return HandlerResult(
        controls=controls,
        get_base_texture_asset_id=base_texture,
        get_entity_state_overrides=entity_state,
    )
