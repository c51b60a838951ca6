"""Villager and zombie villager overlay selects.

Both families share one layout: ``<family>/type/``, ``<family>/profession/``
and ``<family>/profession_level/`` hold overlays composited onto the base
texture. Each select defaults to a documented value and contributes one
layer when it is not ``none``.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from ..assets.state import get_select
from ..logging import get_logger
from ..schema.models import (
    EntityFeatureStateView,
    EntityLayerDefinition,
    MaterialMode,
    SelectControl,
    SelectOption,
    clone_texture_layer,
)
from .base import NONE_OPTION, EntityHandler, HandlerContext, HandlerResult, select

LEVEL_LABELS = {
    "novice": "Stone",
    "apprentice": "Iron",
    "journeyman": "Gold",
    "expert": "Emerald",
    "master": "Diamond",
    "stone": "Stone",
    "iron": "Iron",
    "gold": "Gold",
    "emerald": "Emerald",
    "diamond": "Diamond",
}


def sentence_label(value: str) -> str:
    """``swamp_hut`` -> ``Swamp hut``."""
    text = value.replace("_", " ")
    return text[:1].upper() + text[1:]


def level_label(value: str) -> str:
    return LEVEL_LABELS.get(value) or sentence_label(value)


# (select suffix, sub folder, label, preferred default, layer z, option labeller)
_OVERLAYS: Tuple[Tuple[str, str, str, str, int, Callable[[str], str]], ...] = (
    ("type", "type", "{family} Type", "plains", 80, sentence_label),
    ("profession", "profession", "Profession", "none", 90, sentence_label),
    ("level", "profession_level", "Level", "none", 95, level_label),
)


def _overlay_select(
    ctx: HandlerContext,
    control_id: str,
    folder: str,
    label: str,
    preferred: str,
    labeller: Callable[[str], str],
) -> Optional[SelectControl]:
    values = [v for v in ctx.leaves(folder) if v != "none"]
    if not values:
        return None
    options = [NONE_OPTION] + [SelectOption(v, labeller(v)) for v in values]
    default = preferred if preferred == "none" or preferred in values else values[0]
    return select(control_id, label, default, options)


def make_villager_handler(family: str, family_label: str) -> EntityHandler:
    def handler(ctx: HandlerContext) -> Optional[HandlerResult]:
        if ctx.folder_root != family:
            return None

        active = []
        controls = []
        for suffix, folder, label, preferred, z_index, labeller in _OVERLAYS:
            control = _overlay_select(
                ctx,
                f"{family}.{suffix}",
                f"{family}/{folder}",
                label.format(family=family_label),
                preferred,
                labeller,
            )
            if control is None:
                continue
            controls.append(control)
            active.append((control, folder, suffix, z_index))
        if not controls:
            return None
        get_logger().debug(
            "%s overlays: %s", family, ", ".join(c.id for c in controls)
        )

        def layers(state: EntityFeatureStateView) -> List[EntityLayerDefinition]:
            out: List[EntityLayerDefinition] = []
            for control, folder, suffix, z_index in active:
                chosen = get_select(state, control.id, control.default_value)
                if chosen == "none":
                    continue
                tex = ctx.find_entity(f"{family}/{folder}/{chosen}")
                if tex is None:
                    continue
                out.append(
                    clone_texture_layer(
                        f"{family}_{suffix}",
                        control.label,
                        tex,
                        z_index=z_index,
                        material_mode=MaterialMode.default(),
                    )
                )
            return out

        return HandlerResult(controls=controls, get_layer_contributions=layers)

    handler.__name__ = f"{family}_handler"
    return handler


villager_handler = make_villager_handler("villager", "Villager")
zombie_villager_handler = make_villager_handler("zombie_villager", "Zombie Villager")
