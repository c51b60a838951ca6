from __future__ import annotations

from typing import List, Optional

from ..assets.state import get_toggle
from ..logging import get_logger
from ..schema.models import BoneInputOverrides, EntityFeatureStateView
from .base import HandlerContext, HandlerResult, toggle


def bee_handler(ctx: HandlerContext) -> Optional[HandlerResult]:
    """Angry/nectar texture swap plus stinger visibility."""
    if ctx.folder_root != "bee":
        return None

    angry = ctx.find_entity("bee/bee_angry")
    nectar = ctx.find_entity("bee/bee_nectar")
    angry_nectar = ctx.find_entity("bee/bee_angry_nectar")
    get_logger().debug(
        "bee textures: angry=%s nectar=%s angry_nectar=%s", angry, nectar, angry_nectar
    )

    def base_texture(state: EntityFeatureStateView) -> str:
        is_angry = get_toggle(state, "bee.angry", False)
        has_nectar = get_toggle(state, "bee.nectar", False)
        if is_angry and has_nectar:
            chain: List[Optional[str]] = [angry_nectar, angry, nectar]
        elif is_angry:
            chain = [angry]
        elif has_nectar:
            chain = [nectar]
        else:
            chain = []
        for candidate in chain:
            if candidate:
                return candidate
        return ctx.base_asset_id

    def bone_inputs(state: EntityFeatureStateView) -> BoneInputOverrides:
        stinger = get_toggle(state, "bee.has_stinger", True)
        return {"stinger": {"visible": 1 if stinger else 0}}

    return HandlerResult(
        controls=[
            toggle("bee.angry", "Angry", False),
            toggle("bee.nectar", "Nectar", False),
            toggle("bee.has_stinger", "Stinger", True),
        ],
        get_base_texture_asset_id=base_texture,
        get_bone_input_overrides=bone_inputs,
    )
