from __future__ import annotations

from typing import List, Optional

from ..assets.state import get_toggle
from ..schema.models import (
    EntityFeatureStateView,
    EntityLayerDefinition,
    MaterialMode,
    clone_texture_layer,
)
from .base import HandlerContext, HandlerResult, toggle

ALLAY_GLOW_INTENSITY = 0.4


def allay_handler(ctx: HandlerContext) -> Optional[HandlerResult]:
    """Fullbright glow pass and the dancing pose."""
    if ctx.folder_root != "allay":
        return None

    def layers(state: EntityFeatureStateView) -> List[EntityLayerDefinition]:
        if not get_toggle(state, "allay.glow", True):
            return []
        return [
            clone_texture_layer(
                "allay_glow",
                "Glow",
                ctx.base_asset_id,
                blend="additive",
                z_index=60,
                material_mode=MaterialMode.emissive(ALLAY_GLOW_INTENSITY),
            )
        ]

    return HandlerResult(
        controls=[
            toggle("allay.glow", "Glow", True),
            toggle("allay.dancing", "Dancing", False),
        ],
        get_entity_state_overrides=lambda state: {
            "is_dancing": get_toggle(state, "allay.dancing", False)
        },
        get_layer_contributions=layers,
    )
