from __future__ import annotations

from typing import List, Optional

from ..assets.state import get_toggle
from ..logging import get_logger
from ..schema.models import (
    BoneRenderOverrides,
    EntityFeatureStateView,
    EntityLayerDefinition,
    MaterialMode,
    cem_model_layer,
)
from .base import HandlerContext, HandlerResult, hidden, toggle
from .horse import SADDLE_BONE_ALIASES

CHEST_BONES = (
    "left_chest",
    "right_chest",
    "left_chest2",
    "right_chest2",
    "mule_left_chest",
    "mule_right_chest",
)
CHESTED_FAMILIES = ("donkey", "mule")


def _family(ctx: HandlerContext) -> Optional[str]:
    if ctx.folder_root in CHESTED_FAMILIES:
        return ctx.folder_root
    # vanilla keeps donkey.png and mule.png in the horse folder
    if ctx.folder_root == "horse" and ctx.entity_type in CHESTED_FAMILIES:
        return ctx.entity_type
    return None


def donkey_handler(ctx: HandlerContext) -> Optional[HandlerResult]:
    """Chest and saddle for donkeys and mules."""
    family = _family(ctx)
    if family is None:
        return None

    saddle = ctx.find_entity(f"equipment/{family}_saddle/saddle")
    get_logger().debug("%s: saddle=%s", family, saddle)
    saddle_id = f"{family}.saddle"
    chest_id = f"{family}.chest"

    controls = []
    if saddle:
        controls.append(toggle(saddle_id, "Saddle", False))
    controls.append(toggle(chest_id, "Chest", False))

    def bone_render(state: EntityFeatureStateView) -> BoneRenderOverrides:
        if get_toggle(state, chest_id, False):
            return {}
        return hidden(CHEST_BONES)

    def entity_state(state: EntityFeatureStateView):
        return {"is_ridden": get_toggle(state, saddle_id, False)}

    def layers(state: EntityFeatureStateView) -> List[EntityLayerDefinition]:
        if not saddle or not get_toggle(state, saddle_id, False):
            return []
        return [
            cem_model_layer(
                f"{family}_saddle",
                "Saddle",
                saddle,
                [f"{family}_saddle"],
                z_index=135,
                material_mode=MaterialMode.default(),
                bone_alias_map=dict(SADDLE_BONE_ALIASES),
            )
        ]

    return HandlerResult(
        controls=controls,
        get_bone_render_overrides=bone_render,
        get_entity_state_overrides=entity_state if saddle else None,
        get_layer_contributions=layers if saddle else None,
    )
