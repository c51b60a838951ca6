from __future__ import annotations

from typing import List, Optional

from ..assets.ids import title_label
from ..assets.state import get_select, get_toggle
from ..schema.models import (
    EntityFeatureStateView,
    EntityLayerDefinition,
    MaterialMode,
    SelectOption,
    cem_model_layer,
)
from .base import HandlerContext, HandlerResult, pick_default, select, toggle

_HARNESS_SUFFIX = "_harness"


def happy_ghast_handler(ctx: HandlerContext) -> Optional[HandlerResult]:
    if ctx.folder_root != "happy_ghast" and ctx.entity_type != "happy_ghast":
        return None

    colors = [
        leaf[: -len(_HARNESS_SUFFIX)]
        for leaf in ctx.leaves("equipment/happy_ghast_body")
        if leaf.endswith(_HARNESS_SUFFIX)
    ]
    if not colors:
        return None
    default_color = pick_default(colors, "brown")

    def layers(state: EntityFeatureStateView) -> List[EntityLayerDefinition]:
        if not get_toggle(state, "happy_ghast.harness", False):
            return []
        color = get_select(state, "happy_ghast.harness_color", default_color)
        tex = ctx.find_entity(f"equipment/happy_ghast_body/{color}{_HARNESS_SUFFIX}")
        if tex is None:
            return []
        return [
            cem_model_layer(
                "happy_ghast_harness",
                "Harness",
                tex,
                ["happy_ghast_harness"],
                z_index=140,
                material_mode=MaterialMode.default(),
                bone_alias_map={"goggles": "body", "harness": "body"},
            )
        ]

    return HandlerResult(
        controls=[
            toggle("happy_ghast.harness", "Harness", False),
            select(
                "happy_ghast.harness_color",
                "Harness Color",
                default_color,
                [SelectOption(c, title_label(c)) for c in colors],
            ),
        ],
        get_layer_contributions=layers,
    )
