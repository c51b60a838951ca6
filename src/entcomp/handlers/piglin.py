from __future__ import annotations

from typing import List, Optional

from ..assets.state import get_select, get_toggle
from ..schema.models import (
    ALL_BONES,
    BoneRenderOverrides,
    EntityFeatureStateView,
    EntityLayerDefinition,
    MaterialMode,
    Vec3,
    cem_model_layer,
)
from .base import HandlerContext, HandlerResult, pick_default, select, toggle

PIGLIN_TYPES = ("piglin", "piglin_brute")
HELMET_SCALE = 1.01


def armor_layer_1_overrides(
    show_helmet: bool, show_chest: bool, show_boots: bool
) -> BoneRenderOverrides:
    """Show-only-selected visibility for a humanoid layer 1 armor model."""
    if show_helmet and show_chest and show_boots:
        return {ALL_BONES: {"visible": True}}
    overrides: BoneRenderOverrides = {ALL_BONES: {"visible": False}}
    if show_helmet:
        overrides["head"] = {"visible": True}
    if show_chest:
        for bone in ("body", "left_arm", "right_arm"):
            overrides[bone] = {"visible": True}
    if show_boots:
        for bone in ("left_shoe", "right_shoe"):
            overrides[bone] = {"visible": True}
    return overrides


def piglin_handler(ctx: HandlerContext) -> Optional[HandlerResult]:
    """Humanoid armor set worn by piglins."""
    if ctx.folder_root != "piglin" or ctx.entity_type not in PIGLIN_TYPES:
        return None

    materials = ctx.leaves("equipment/humanoid")
    if not materials:
        return None
    default_material = pick_default(materials, "diamond")

    def layers(state: EntityFeatureStateView) -> List[EntityLayerDefinition]:
        if not get_toggle(state, "mob_armor.enabled", False):
            return []
        material = get_select(state, "mob_armor.material", default_material)
        layer_1 = ctx.find_entity(f"equipment/humanoid/{material}")
        layer_2 = ctx.find_entity(f"equipment/humanoid_leggings/{material}")
        out: List[EntityLayerDefinition] = []
        if layer_1:
            out.append(
                cem_model_layer(
                    "mob_armor_layer_1",
                    "Armor",
                    layer_1,
                    ["armor_layer_1"],
                    z_index=130,
                    material_mode=MaterialMode.default(),
                    bone_render_overrides=armor_layer_1_overrides(
                        get_toggle(state, "mob_armor.show_helmet", True),
                        get_toggle(state, "mob_armor.show_chestplate", True),
                        get_toggle(state, "mob_armor.show_boots", True),
                    ),
                    bone_scale_multipliers={"head": Vec3.uniform(HELMET_SCALE)},
                )
            )
        if layer_2:
            out.append(
                cem_model_layer(
                    "mob_armor_layer_2",
                    "Leggings",
                    layer_2,
                    ["armor_layer_2"],
                    z_index=125,
                    material_mode=MaterialMode.default(),
                    bone_render_overrides={
                        ALL_BONES: {
                            "visible": get_toggle(state, "mob_armor.show_leggings", True)
                        }
                    },
                )
            )
        return out

    return HandlerResult(
        controls=[
            toggle("mob_armor.enabled", "Armor", False),
            select("mob_armor.material", "Armor Material", default_material, materials),
            toggle("mob_armor.show_helmet", "Helmet", True),
            toggle("mob_armor.show_chestplate", "Chestplate", True),
            toggle("mob_armor.show_leggings", "Leggings", True),
            toggle("mob_armor.show_boots", "Boots", True),
        ],
        get_layer_contributions=layers,
    )
