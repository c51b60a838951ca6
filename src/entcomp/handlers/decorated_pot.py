from __future__ import annotations

from typing import Dict, Optional

from ..assets.ids import title_label
from ..assets.state import get_select
from ..schema.models import CemEntityType, EntityFeatureStateView, SelectOption
from .base import NONE_OPTION, HandlerContext, HandlerResult, select

POT_FIXED_FACES = ("neck", "top", "bottom")
POT_SIDE_FACES = ("front", "back", "left", "right")
_POT_OWN_LEAVES = frozenset({"decorated_pot_base", "decorated_pot_side"})
_PATTERN_SUFFIX = "_pottery_pattern"


def _sherd_label(leaf: str) -> str:
    if leaf.endswith(_PATTERN_SUFFIX):
        leaf = leaf[: -len(_PATTERN_SUFFIX)]
    return title_label(leaf)


def decorated_pot_handler(ctx: HandlerContext) -> Optional[HandlerResult]:
    """One sherd pattern applied to the four side faces."""
    if ctx.folder_root != "decorated_pot" and ctx.dir != "decorated_pot":
        return None

    base = (
        ctx.find_entity("decorated_pot/decorated_pot_base", "decorated_pot_base")
        or ctx.base_asset_id
    )
    side = ctx.find_entity("decorated_pot/decorated_pot_side", "decorated_pot_side") or base
    patterns = [p for p in ctx.leaves("decorated_pot") if p not in _POT_OWN_LEAVES]

    def part_textures(state: EntityFeatureStateView) -> Dict[str, str]:
        chosen = get_select(state, "decorated_pot.pattern", "none")
        pattern = None
        if chosen != "none":
            pattern = ctx.find_entity(f"decorated_pot/{chosen}")
        faces = {face: base for face in POT_FIXED_FACES}
        faces.update({face: pattern or side for face in POT_SIDE_FACES})
        return faces

    return HandlerResult(
        controls=[
            select(
                "decorated_pot.pattern",
                "Pottery Sherd",
                "none",
                [NONE_OPTION] + [SelectOption(p, _sherd_label(p)) for p in patterns],
            )
        ],
        get_base_texture_asset_id=lambda state: base,
        get_cem_entity_type=lambda state: CemEntityType("decorated_pot"),
        get_part_texture_overrides=part_textures,
    )
