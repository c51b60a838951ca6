"""Catch-all variant select for simple ``entity/<dir>/<leaf>`` folders.

A folder qualifies when it holds more than one standalone texture and
either every leaf is a plain variant of the folder name (equal to it,
prefixed by ``<dir>_`` or suffixed by ``_<dir>``) or the leaf set is a
closed category: dye colours, wood types, or cat skins inside ``cat``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..assets.ids import title_label
from ..assets.reference import (
    CAT_SKIN_IDS,
    DYE_COLORS,
    DYE_COLOR_IDS,
    WOOD_TYPE_IDS,
    all_leaves_in_set,
    get_dye_label,
    sort_by_preferred_order,
)
from ..assets.state import get_select
from ..logging import get_logger
from ..schema.models import EntityFeatureStateView, SelectOption
from .base import HandlerContext, HandlerResult, select

# Folders with a dedicated family handler.
EXCLUDED_DIRS = frozenset({"bee", "banner", "horse"})


@dataclass(frozen=True, slots=True)
class VariantDirectory:
    label: str
    leaves: List[str]
    is_dye: bool = False


def is_variant_leaf(directory: str, leaf: str) -> bool:
    return (
        leaf == directory
        or leaf.startswith(f"{directory}_")
        or leaf.endswith(f"_{directory}")
    )


def variant_option_label(directory: str, leaf: str) -> str:
    if leaf == directory:
        return "Default"
    if leaf.startswith(f"{directory}_"):
        return title_label(leaf[len(directory) + 1 :])
    if leaf.endswith(f"_{directory}"):
        return title_label(leaf[: -(len(directory) + 1)])
    return title_label(leaf)


def detect_variant_directory(
    directory: str, leaves: Sequence[str]
) -> Optional[VariantDirectory]:
    if len(leaves) <= 1:
        return None
    is_pattern = all(is_variant_leaf(directory, leaf) for leaf in leaves)
    is_dye = all_leaves_in_set(leaves, DYE_COLOR_IDS)
    is_wood = all_leaves_in_set(leaves, WOOD_TYPE_IDS)
    is_cat = directory == "cat" and all_leaves_in_set(leaves, CAT_SKIN_IDS)
    if is_dye:
        return VariantDirectory(
            "Color",
            sort_by_preferred_order(leaves, [d.id for d in DYE_COLORS]),
            is_dye=True,
        )
    if is_wood:
        return VariantDirectory("Wood Type", list(leaves))
    if is_cat:
        return VariantDirectory("Cat Type", list(leaves))
    if is_pattern:
        return VariantDirectory("Variant", list(leaves))
    return None


def base_variant_handler(ctx: HandlerContext) -> Optional[HandlerResult]:
    direct = ctx.direct
    if direct is None or direct.dir in EXCLUDED_DIRS:
        return None

    leaves = ctx.leaves(direct.dir, exclude_layers=True)
    variant = detect_variant_directory(direct.dir, leaves)
    if variant is None:
        return None
    default = direct.leaf if direct.leaf in variant.leaves else variant.leaves[0]
    get_logger().debug(
        "variant select for %s: default=%s options=%d",
        direct.dir,
        default,
        len(variant.leaves),
    )

    options = [
        SelectOption(
            leaf,
            (get_dye_label(leaf) if variant.is_dye else None)
            or variant_option_label(direct.dir, leaf),
        )
        for leaf in variant.leaves
    ]

    def base_texture(state: EntityFeatureStateView) -> str:
        chosen = get_select(state, "entity.variant", default)
        candidate = ctx.entity_id(f"{direct.dir}/{chosen}")
        return candidate if candidate in ctx.all_ids else ctx.base_asset_id

    return HandlerResult(
        controls=[select("entity.variant", variant.label, default, options)],
        get_base_texture_asset_id=base_texture,
    )
