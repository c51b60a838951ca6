from __future__ import annotations

from typing import List, Optional

from ..assets.reference import DYE_COLORS, get_dye_rgb
from ..assets.state import get_select
from ..logging import get_logger
from ..schema.models import (
    EntityFeatureStateView,
    EntityLayerDefinition,
    MaterialMode,
    SelectOption,
    cem_model_layer,
)
from .base import HandlerContext, HandlerResult, select

COAT_STATES = (("full", "Full"), ("sheared", "Sheared"), ("bare", "Bare"))


def dye_options() -> List[SelectOption]:
    return [SelectOption(d.id, d.label) for d in DYE_COLORS]


def sheep_handler(ctx: HandlerContext) -> Optional[HandlerResult]:
    """Dyed wool and undercoat overlays driven by a three-state coat select.

    ``full`` shows both layers, ``sheared`` only the undercoat, ``bare``
    neither.
    """
    if ctx.folder_root != "sheep":
        return None

    wool = ctx.find_entity(
        ctx.sibling_path(f"{ctx.leaf}_wool"),
        ctx.sibling_path(f"{ctx.leaf}_fur"),
        "sheep/sheep_fur",
        "sheep/sheep_wool",
    )
    undercoat = (
        ctx.find_entity(
            ctx.sibling_path(f"{ctx.leaf}_wool_undercoat"),
            ctx.sibling_path(f"{ctx.leaf}_undercoat"),
        )
        or wool
    )
    if wool is None and undercoat is None:
        return None
    get_logger().debug("sheep: wool=%s undercoat=%s", wool, undercoat)

    def layers(state: EntityFeatureStateView) -> List[EntityLayerDefinition]:
        coat = get_select(state, "sheep.coat_state", "full")
        tint = MaterialMode.tint(get_dye_rgb(get_select(state, "sheep.color", "white")))
        out: List[EntityLayerDefinition] = []
        if coat in ("full", "sheared") and undercoat:
            out.append(
                cem_model_layer(
                    "sheep_undercoat",
                    "Undercoat",
                    undercoat,
                    ["sheep_wool_undercoat", "sheep_fur", "sheep_wool"],
                    z_index=120,
                    material_mode=tint,
                    sync_to_base_pose=True,
                )
            )
        if coat == "full" and wool:
            out.append(
                cem_model_layer(
                    "sheep_wool",
                    "Wool",
                    wool,
                    ["sheep_wool", "sheep_fur"],
                    z_index=130,
                    material_mode=tint,
                    sync_to_base_pose=True,
                )
            )
        return out

    return HandlerResult(
        controls=[
            select("sheep.coat_state", "Coat", "full", COAT_STATES),
            select("sheep.color", "Wool Color", "white", dye_options()),
        ],
        get_layer_contributions=layers,
    )
