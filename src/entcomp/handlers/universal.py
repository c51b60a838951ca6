"""Cross-family overlays checked for every entity before the family chain."""

from __future__ import annotations

from typing import List, Optional

from ..assets.state import get_select, get_toggle
from ..logging import get_logger
from ..schema.models import (
    EntityFeatureStateView,
    EntityLayerDefinition,
    MaterialMode,
    cem_model_layer,
    clone_texture_layer,
)
from .base import NONE_OPTION, HandlerContext, HandlerResult, select, toggle

__all__ = [
    "glowing_eyes_feature",
    "outer_layer_feature",
    "crackiness_feature",
    "creeper_charge_feature",
    "UNIVERSAL_FEATURES",
    "CRACKINESS_LEVELS",
]

CRACKINESS_LEVELS = ("low", "medium", "high")


def _overlay(ctx: HandlerContext, *suffixes: str) -> Optional[str]:
    paths = [ctx.sibling_path(f"{ctx.leaf}{s}") for s in suffixes]
    if ctx.dir:
        paths += [f"{ctx.leaf}{s}" for s in suffixes]
    return ctx.find_entity(*paths)


def glowing_eyes_feature(ctx: HandlerContext) -> Optional[HandlerResult]:
    texture = _overlay(ctx, "_eyes")
    if texture is None:
        return None
    get_logger().debug("eyes overlay for %s: %s", ctx.base_asset_id, texture)

    def layers(state: EntityFeatureStateView) -> List[EntityLayerDefinition]:
        if not get_toggle(state, "feature.glowing_eyes", True):
            return []
        return [
            clone_texture_layer(
                "glowing_eyes",
                "Glowing Eyes",
                texture,
                blend="additive",
                z_index=200,
                material_mode=MaterialMode.emissive(1.0),
            )
        ]

    return HandlerResult(
        controls=[toggle("feature.glowing_eyes", "Glowing Eyes", True)],
        get_layer_contributions=layers,
    )


def outer_layer_feature(ctx: HandlerContext) -> Optional[HandlerResult]:
    texture = _overlay(ctx, "_outer_layer", "_outer", "_overlay")
    if texture is None:
        return None
    get_logger().debug("outer layer for %s: %s", ctx.base_asset_id, texture)

    def layers(state: EntityFeatureStateView) -> List[EntityLayerDefinition]:
        if not get_toggle(state, "feature.outer_layer", True):
            return []
        return [
            clone_texture_layer(
                "outer_layer",
                "Outer Layer",
                texture,
                z_index=110,
                material_mode=MaterialMode.default(),
            )
        ]

    return HandlerResult(
        controls=[toggle("feature.outer_layer", "Outer Layer", True)],
        get_layer_contributions=layers,
    )


def crackiness_feature(ctx: HandlerContext) -> Optional[HandlerResult]:
    textures = {}
    for level in CRACKINESS_LEVELS:
        tex = _overlay(ctx, f"_crackiness_{level}")
        if tex:
            textures[level] = tex
    if not textures:
        return None
    get_logger().debug(
        "crackiness levels for %s: %s", ctx.base_asset_id, ", ".join(textures)
    )

    def layers(state: EntityFeatureStateView) -> List[EntityLayerDefinition]:
        tex = textures.get(get_select(state, "feature.crackiness", "none"))
        if tex is None:
            return []
        return [
            clone_texture_layer(
                "crackiness",
                "Cracks",
                tex,
                z_index=150,
                material_mode=MaterialMode.default(),
            )
        ]

    control = select(
        "feature.crackiness",
        "Damage",
        "none",
        [NONE_OPTION, *textures.keys()],
    )
    return HandlerResult(controls=[control], get_layer_contributions=layers)


def creeper_charge_feature(ctx: HandlerContext) -> Optional[HandlerResult]:
    if ctx.entity_type != "creeper":
        return None
    texture = ctx.find_entity(
        ctx.sibling_path("creeper_armor"),
        ctx.sibling_path("creeper_charge"),
        "creeper/creeper_armor",
        "creeper_armor",
    )
    if texture is None:
        return None

    def layers(state: EntityFeatureStateView) -> List[EntityLayerDefinition]:
        if not get_toggle(state, "creeper.charge", False):
            return []
        return [
            cem_model_layer(
                "creeper_charge",
                "Charge",
                texture,
                ["creeper_charge", "creeper_armor"],
                blend="additive",
                z_index=190,
                material_mode=MaterialMode.energy_swirl(
                    intensity=1.0, repeat=1.0, scroll_u=0.2, scroll_v=0.2
                ),
            )
        ]

    return HandlerResult(
        controls=[toggle("creeper.charge", "Charged", False)],
        get_layer_contributions=layers,
    )


UNIVERSAL_FEATURES = (
    glowing_eyes_feature,
    outer_layer_feature,
    crackiness_feature,
    creeper_charge_feature,
)
