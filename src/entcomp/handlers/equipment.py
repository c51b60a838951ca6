"""Humanoid armor previews.

Layer 1 textures (``equipment/humanoid/<material>``) cover helmet, chest
and boots; layer 2 (``equipment/humanoid_leggings/<material>``) covers the
leggings. Both render over an underlay rig, an armor stand by default or a
player when requested, which stays hidden unless one of them is toggled on.
Non-humanoid equipment (saddles, barding, harnesses) is previewed through
its owning family instead.
"""

from __future__ import annotations

from typing import List, Optional

from ..assets.state import get_toggle
from ..logging import get_logger
from ..schema.models import (
    ALL_BONES,
    BoneRenderOverrides,
    CemEntityType,
    EntityFeatureStateView,
    EntityLayerDefinition,
    MaterialMode,
    Vec3,
    cem_model_layer,
)
from .base import HandlerContext, HandlerResult, toggle
from .piglin import HELMET_SCALE, armor_layer_1_overrides

ARMOR_STAND_CANDIDATES = (
    "armorstand/armorstand",
    "armorstand/wood",
    "armor_stand",
    "armor_stand/armor_stand",
)
# Helmets sit half a pixel higher on the player head to avoid z-fighting.
PLAYER_HELMET_OFFSET = 0.5 / 16
PLAYER_CANDIDATES = ("player/wide/steve", "player/slim/steve")


def equipment_handler(ctx: HandlerContext) -> Optional[HandlerResult]:
    if ctx.folder_root != "equipment":
        return None
    parts = ctx.entity_path.split("/")
    kind = parts[1].lower() if len(parts) > 1 else ""
    is_humanoid = "humanoid" in kind
    is_layer_2 = "leggings" in kind
    is_layer_1 = is_humanoid and not is_layer_2
    if not is_layer_1 and not is_layer_2:
        get_logger().debug("equipment %s has no humanoid preview", ctx.entity_path)
        return None

    leggings = (
        ctx.find_entity(f"equipment/humanoid_leggings/{ctx.leaf}") if is_layer_1 else None
    )
    layer_1_texture = ctx.base_asset_id if is_layer_1 else None
    layer_2_texture = ctx.base_asset_id if is_layer_2 else leggings
    # both rigs fall back to the armor texture itself when absent
    armor_stand = ctx.find_entity(*ARMOR_STAND_CANDIDATES) or ctx.base_asset_id
    player = ctx.find_entity(*PLAYER_CANDIDATES) or armor_stand

    controls = [
        toggle("equipment.add_player", "Show Player", False),
        toggle("equipment.add_armor_stand", "Show Armor Stand", False),
    ]
    if is_layer_1:
        controls.append(toggle("equipment.show_helmet", "Helmet", True))
        controls.append(toggle("equipment.show_chestplate", "Chestplate", True))
        if leggings:
            controls.append(toggle("equipment.show_leggings", "Leggings", True))
        controls.append(toggle("equipment.show_boots", "Boots", True))
    else:
        controls.append(toggle("equipment.show_leggings", "Leggings", True))

    def show_player(state: EntityFeatureStateView) -> bool:
        return get_toggle(state, "equipment.add_player", False)

    def base_texture(state: EntityFeatureStateView) -> str:
        return player if show_player(state) else armor_stand

    def cem_type(state: EntityFeatureStateView) -> CemEntityType:
        return CemEntityType("player" if show_player(state) else "armor_stand")

    def underlay(state: EntityFeatureStateView) -> BoneRenderOverrides:
        overrides: BoneRenderOverrides = {}
        if not (show_player(state) or get_toggle(state, "equipment.add_armor_stand", False)):
            overrides[ALL_BONES] = {"visible": False}
        if is_layer_1 and get_toggle(state, "equipment.show_helmet", True):
            overrides["headwear"] = {"visible": False}
        return overrides

    def layers(state: EntityFeatureStateView) -> List[EntityLayerDefinition]:
        out: List[EntityLayerDefinition] = []
        if layer_1_texture:
            out.append(
                cem_model_layer(
                    "equipment_armor_layer_1",
                    "Armor",
                    layer_1_texture,
                    ["armor_layer_1"],
                    z_index=100,
                    material_mode=MaterialMode.default(),
                    sync_to_base_pose=True,
                    bone_render_overrides=armor_layer_1_overrides(
                        get_toggle(state, "equipment.show_helmet", True),
                        get_toggle(state, "equipment.show_chestplate", True),
                        get_toggle(state, "equipment.show_boots", True),
                    ),
                    bone_position_offsets=(
                        {"head": Vec3(0.0, PLAYER_HELMET_OFFSET, 0.0)}
                        if show_player(state)
                        else None
                    ),
                    bone_scale_multipliers={"head": Vec3.uniform(HELMET_SCALE)},
                )
            )
        if layer_2_texture:
            out.append(
                cem_model_layer(
                    "equipment_armor_layer_2",
                    "Leggings",
                    layer_2_texture,
                    ["armor_layer_2"],
                    z_index=90,
                    material_mode=MaterialMode.default(),
                    sync_to_base_pose=True,
                    bone_render_overrides={
                        ALL_BONES: {
                            "visible": get_toggle(state, "equipment.show_leggings", True)
                        }
                    },
                )
            )
        return out

    return HandlerResult(
        controls=controls,
        get_base_texture_asset_id=base_texture,
        get_cem_entity_type=cem_type,
        get_bone_render_overrides=underlay,
        get_layer_contributions=layers,
    )
