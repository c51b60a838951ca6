from __future__ import annotations

from typing import Dict, List, Optional

from ..assets.ids import title_label
from ..assets.state import get_select, get_toggle
from ..layers.scan import is_horse_coat_leaf
from ..logging import get_logger
from ..schema.models import (
    ALL_BONES,
    BoneRenderOverrides,
    EntityFeatureStateView,
    EntityLayerDefinition,
    MaterialMode,
    SelectOption,
    Vec3,
    cem_model_layer,
    clone_texture_layer,
)
from .base import NONE_OPTION, HandlerContext, HandlerResult, pick_default, select, toggle, visible

HORSE_SADDLE_BONES = (
    "headpiece",
    "noseband",
    "left_bit",
    "right_bit",
    "left_rein",
    "right_rein",
    "saddle",
)

# Saddle overlay bone -> horse base bone.
SADDLE_BONE_ALIASES: Dict[str, str] = {
    "headpiece": "head",
    "noseband": "head",
    "left_bit": "head",
    "right_bit": "head",
    "left_rein": "head",
    "right_rein": "head",
    "saddle": "body",
}

MARKINGS_SCALE = 1.001
ARMOR_SCALE = 1.004


def horse_handler(ctx: HandlerContext) -> Optional[HandlerResult]:
    """Coat, markings, armor and saddle for ``entity/horse/horse_*`` coats."""
    if ctx.folder_root != "horse" or not is_horse_coat_leaf(ctx.entity_type):
        return None

    coats = [c for c in ctx.leaves("horse", exclude_layers=True) if is_horse_coat_leaf(c)]
    markings = [m for m in ctx.leaves("horse") if m.startswith("horse_markings_")]
    armors = ctx.leaves("equipment/horse_body")
    saddle_texture = ctx.find_entity("equipment/horse_saddle/saddle")
    logger = get_logger()
    logger.debug(
        "horse: coats=%d markings=%d armors=%d saddle=%s",
        len(coats),
        len(markings),
        len(armors),
        saddle_texture,
    )

    controls = []
    base_texture = None
    if len(coats) > 1:
        default_coat = (
            ctx.leaf if ctx.leaf in coats else pick_default(coats, "horse_brown")
        )
        controls.append(
            select(
                "horse.coat",
                "Coat Color",
                default_coat,
                [SelectOption(c, title_label(c[len("horse_") :])) for c in coats],
            )
        )

        def base_texture(state: EntityFeatureStateView) -> str:
            chosen = get_select(state, "horse.coat", default_coat)
            return ctx.find_entity(f"horse/{chosen}") or ctx.base_asset_id

    if markings:
        controls.append(
            select(
                "horse.markings",
                "Spot Type",
                "none",
                [NONE_OPTION]
                + [
                    SelectOption(m, title_label(m[len("horse_markings_") :]))
                    for m in markings
                ],
            )
        )
    if armors:
        controls.append(select("horse.armor", "Horse Armor", "none", [NONE_OPTION, *armors]))
    if saddle_texture:
        controls.append(toggle("horse.saddle", "Saddle", False))
        controls.append(toggle("horse.rider", "Rider", False))

    def bone_render(state: EntityFeatureStateView) -> BoneRenderOverrides:
        return visible(HORSE_SADDLE_BONES, get_toggle(state, "horse.saddle", False))

    def entity_state(state: EntityFeatureStateView):
        return {"is_ridden": get_toggle(state, "horse.rider", False)}

    def layers(state: EntityFeatureStateView) -> List[EntityLayerDefinition]:
        out: List[EntityLayerDefinition] = []
        marking = get_select(state, "horse.markings", "none")
        marking_tex = ctx.find_entity(f"horse/{marking}") if marking in markings else None
        if marking_tex:
            out.append(
                clone_texture_layer(
                    "horse_markings",
                    "Markings",
                    marking_tex,
                    z_index=80,
                    material_mode=MaterialMode.default(),
                    bone_scale_multipliers={ALL_BONES: Vec3.uniform(MARKINGS_SCALE)},
                )
            )
        armor = get_select(state, "horse.armor", "none")
        armor_tex = (
            ctx.find_entity(f"equipment/horse_body/{armor}") if armor in armors else None
        )
        if armor_tex:
            out.append(
                cem_model_layer(
                    "horse_armor",
                    "Armor",
                    armor_tex,
                    ["horse_armor"],
                    z_index=140,
                    material_mode=MaterialMode.default(),
                    sync_to_base_pose=True,
                    bone_scale_multipliers={ALL_BONES: Vec3.uniform(ARMOR_SCALE)},
                )
            )
        if saddle_texture and get_toggle(state, "horse.saddle", False):
            out.append(
                cem_model_layer(
                    "horse_saddle",
                    "Saddle",
                    saddle_texture,
                    ["horse_saddle"],
                    z_index=135,
                    material_mode=MaterialMode.default(),
                    allow_vanilla_fallback=False,
                    replaces_base_bones=HORSE_SADDLE_BONES,
                    bone_alias_map={
                        **SADDLE_BONE_ALIASES,
                        "head": "head",
                        "body": "body",
                        "neck": "neck",
                        "mouth": "mouth",
                    },
                )
            )
        return out

    return HandlerResult(
        controls=controls,
        get_base_texture_asset_id=base_texture,
        get_bone_render_overrides=bone_render,
        get_entity_state_overrides=entity_state,
        get_layer_contributions=layers,
    )
