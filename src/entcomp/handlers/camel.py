from __future__ import annotations

from typing import List, Optional

from ..assets.state import get_select, get_toggle
from ..schema.models import (
    EntityFeatureStateView,
    EntityLayerDefinition,
    MaterialMode,
    cem_model_layer,
)
from .base import HandlerContext, HandlerResult, select, toggle


def camel_handler(ctx: HandlerContext) -> Optional[HandlerResult]:
    """Saddle overlay, sitting pose and rider."""
    if ctx.folder_root != "camel":
        return None

    saddle = ctx.find_entity("equipment/camel_saddle/saddle")
    controls = []
    if saddle:
        controls.append(toggle("camel.saddle", "Saddle", False))
    controls.append(
        select("camel.pose", "Pose", "standing", [("standing", "Standing"), ("sitting", "Sitting")])
    )
    controls.append(toggle("camel.rider", "Rider", False))

    def entity_state(state: EntityFeatureStateView):
        return {
            "is_sitting": get_select(state, "camel.pose", "standing") == "sitting",
            "is_ridden": get_toggle(state, "camel.rider", False),
        }

    def layers(state: EntityFeatureStateView) -> List[EntityLayerDefinition]:
        if not saddle or not get_toggle(state, "camel.saddle", False):
            return []
        return [
            cem_model_layer(
                "camel_saddle",
                "Saddle",
                saddle,
                ["camel_saddle"],
                z_index=135,
                material_mode=MaterialMode.default(),
                sync_to_base_pose=True,
            )
        ]

    return HandlerResult(
        controls=controls,
        get_entity_state_overrides=entity_state,
        get_layer_contributions=layers,
    )
