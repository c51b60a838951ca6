from __future__ import annotations

from typing import Optional

from ..assets.state import get_select
from ..schema.models import BoneRenderOverrides, EntityFeatureStateView
from .base import HandlerContext, HandlerResult, select, visible

UNROLLED_BONES = (
    "body",
    "head",
    "tail",
    "right_hind_leg",
    "left_hind_leg",
    "right_front_leg",
    "left_front_leg",
)
ROLLED_BONES = ("cube",)


def armadillo_handler(ctx: HandlerContext) -> Optional[HandlerResult]:
    if ctx.folder_root != "armadillo":
        return None

    def bone_render(state: EntityFeatureStateView) -> BoneRenderOverrides:
        rolled = get_select(state, "armadillo.pose", "unrolled") == "rolled"
        overrides = visible(UNROLLED_BONES, not rolled)
        overrides.update(visible(ROLLED_BONES, rolled))
        return overrides

    return HandlerResult(
        controls=[
            select(
                "armadillo.pose",
                "Pose",
                "unrolled",
                [("unrolled", "Unrolled"), ("rolled", "Rolled Up")],
            )
        ],
        get_bone_render_overrides=bone_render,
        get_entity_state_overrides=lambda state: {
            "is_rolled_up": get_select(state, "armadillo.pose", "unrolled") == "rolled"
        },
    )
