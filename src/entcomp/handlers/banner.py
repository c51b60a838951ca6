from __future__ import annotations

import math
from typing import List, Optional

from ..assets.ids import get_leaf_name, strip_namespace, title_label
from ..assets.reference import get_dye_rgb
from ..assets.state import get_select
from ..layers.patterns import BANNER_BASE_LEAVES
from ..schema.models import (
    BoneRenderOverrides,
    CemEntityType,
    EntityFeatureStateView,
    EntityLayerDefinition,
    MaterialMode,
    RootTransform,
    SelectOption,
    Vec3,
    clone_texture_layer,
)
from .base import NONE_OPTION, HandlerContext, HandlerResult, select
from .sheep import dye_options

FACING_STEPS = 16


def facing_index(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0


def banner_handler(ctx: HandlerContext) -> Optional[HandlerResult]:
    """Placement, facing, base colour and one tinted pattern."""
    prefix = f"{ctx.namespace}:entity/banner/"
    patterns = [i for i in ctx.all_ids_list if i.startswith(prefix)]
    applies = ctx.entity_type in ("banner", "banner_base") or strip_namespace(
        ctx.base_asset_id
    ).startswith("entity/banner")
    if not patterns or not applies:
        return None

    full_texture = ctx.find_entity("banner_base") or ctx.find_entity(
        "banner/base", "banner/banner_base"
    )
    mask_texture = ctx.find_entity("banner/base", "banner/banner_base") or full_texture
    pattern_leaves = sorted(
        {get_leaf_name(p) for p in patterns} - BANNER_BASE_LEAVES
    )

    controls = [
        select(
            "banner.placement",
            "Placement",
            "standing",
            [("standing", "Standing"), ("wall", "Wall")],
        ),
        select(
            "banner.facing",
            "Facing",
            "0",
            [(str(i), str(i)) for i in range(FACING_STEPS)],
        ),
        select("banner.base_color", "Base Color", "white", dye_options()),
    ]
    if pattern_leaves:
        controls.append(
            select(
                "banner.pattern",
                "Pattern",
                "none",
                [NONE_OPTION] + [SelectOption(p, title_label(p)) for p in pattern_leaves],
            )
        )
        controls.append(select("banner.pattern_color", "Pattern Color", "black", dye_options()))

    def root_transform(state: EntityFeatureStateView) -> RootTransform:
        idx = facing_index(get_select(state, "banner.facing", "0"))
        return RootTransform(rotation=Vec3(0.0, -idx * (math.pi / 8), 0.0))

    def bone_render(state: EntityFeatureStateView) -> BoneRenderOverrides:
        if get_select(state, "banner.placement", "standing") != "wall":
            return {}
        return {"stand": {"visible": False}}

    def layers(state: EntityFeatureStateView) -> List[EntityLayerDefinition]:
        out: List[EntityLayerDefinition] = []
        base_dye = get_select(state, "banner.base_color", "white")
        if mask_texture and base_dye != "white":
            out.append(
                clone_texture_layer(
                    "banner_base_tint",
                    "Base Color",
                    mask_texture,
                    z_index=50,
                    material_mode=MaterialMode.tint(get_dye_rgb(base_dye)),
                )
            )
        chosen = get_select(state, "banner.pattern", "none")
        pattern = ctx.find_entity(f"banner/{chosen}") if chosen != "none" else None
        if pattern:
            dye = get_select(state, "banner.pattern_color", "black")
            out.append(
                clone_texture_layer(
                    "banner_pattern",
                    "Pattern",
                    pattern,
                    z_index=60,
                    material_mode=MaterialMode.tint(get_dye_rgb(dye)),
                )
            )
        return out

    return HandlerResult(
        controls=controls,
        get_base_texture_asset_id=(lambda state: full_texture) if full_texture else None,
        # geometry is the same banner model for both placements
        get_cem_entity_type=lambda state: CemEntityType("banner"),
        get_root_transform=root_transform,
        get_bone_render_overrides=bone_render,
        get_layer_contributions=layers,
    )
