from __future__ import annotations

from typing import List, Optional

from ..assets.state import get_select, get_toggle
from ..schema.models import (
    BoneRenderOverrides,
    EntityFeatureStateView,
    EntityLayerDefinition,
    MaterialMode,
    cem_model_layer,
)
from .base import NONE_OPTION, HandlerContext, HandlerResult, hidden, pick_default, select, toggle

LLAMA_CHEST_BONES = ("left_chest", "right_chest", "chest_left", "chest_right")


def llama_handler(ctx: HandlerContext) -> Optional[HandlerResult]:
    """Coat colour, carpet decor and chest for llamas."""
    if ctx.folder_root != "llama" or ctx.direct is None:
        return None

    coats = ctx.leaves("llama", exclude_layers=True)
    decor = ctx.leaves("equipment/llama_body")
    controls = []
    default_coat = ctx.leaf
    if len(coats) > 1:
        if default_coat not in coats:
            default_coat = pick_default(coats, "creamy", "white")
        controls.append(select("llama.coat", "Coat Color", default_coat, coats))
    if decor:
        controls.append(select("llama.decor", "Decor", "none", [NONE_OPTION, *decor]))
    controls.append(toggle("llama.chest", "Chest", False))

    def base_texture(state: EntityFeatureStateView) -> str:
        chosen = get_select(state, "llama.coat", default_coat)
        return ctx.find_entity(f"llama/{chosen}") or ctx.base_asset_id

    def bone_render(state: EntityFeatureStateView) -> BoneRenderOverrides:
        if get_toggle(state, "llama.chest", False):
            return {}
        return hidden(LLAMA_CHEST_BONES)

    def layers(state: EntityFeatureStateView) -> List[EntityLayerDefinition]:
        chosen = get_select(state, "llama.decor", "none")
        if chosen == "none":
            return []
        tex = ctx.find_entity(f"equipment/llama_body/{chosen}")
        if tex is None:
            return []
        return [
            cem_model_layer(
                "llama_decor",
                "Decor",
                tex,
                ["llama_decor"],
                z_index=140,
                material_mode=MaterialMode.default(),
                sync_to_base_pose=True,
            )
        ]

    return HandlerResult(
        controls=controls,
        get_base_texture_asset_id=base_texture if len(coats) > 1 else None,
        get_bone_render_overrides=bone_render,
        get_layer_contributions=layers,
    )
