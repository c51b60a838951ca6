"""Static reference tables: dye colours, wood types and cat skins."""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Dict, FrozenSet, Iterable, Tuple

from ..schema.models import Rgb

__all__ = [
    "DyeColor",
    "DYE_COLORS",
    "DYE_COLOR_IDS",
    "WOOD_TYPES",
    "WOOD_TYPE_IDS",
    "CAT_SKINS",
    "CAT_SKIN_IDS",
    "get_dye_rgb",
    "get_dye_label",
    "all_leaves_in_set",
    "sort_by_preferred_order",
]


@dataclass(frozen=True, slots=True)
class DyeColor:
    id: str
    label: str
    rgb: Rgb


def _dye(dye_id: str, label: str, hex_value: int) -> DyeColor:
    return DyeColor(dye_id, label, Rgb.from_hex(hex_value))


# Texture diffuse colours, in the game's canonical dye order.
DYE_COLORS: Tuple[DyeColor, ...] = (
    _dye("white", "White", 0xF9FFFE),
    _dye("orange", "Orange", 0xF9801D),
    _dye("magenta", "Magenta", 0xC74EBD),
    _dye("light_blue", "Light Blue", 0x3AB3DA),
    _dye("yellow", "Yellow", 0xFED83D),
    _dye("lime", "Lime", 0x80C71F),
    _dye("pink", "Pink", 0xF38BAA),
    _dye("gray", "Gray", 0x474F52),
    _dye("light_gray", "Light Gray", 0x9D9D97),
    _dye("cyan", "Cyan", 0x169C9C),
    _dye("purple", "Purple", 0x8932B8),
    _dye("blue", "Blue", 0x3C44AA),
    _dye("brown", "Brown", 0x835432),
    _dye("green", "Green", 0x5E7C16),
    _dye("red", "Red", 0xB02E26),
    _dye("black", "Black", 0x1D1D21),
)

_DYES_BY_ID: Dict[str, DyeColor] = {d.id: d for d in DYE_COLORS}

DYE_COLOR_IDS: FrozenSet[str] = frozenset(_DYES_BY_ID)

WOOD_TYPES: Tuple[str, ...] = (
    "oak",
    "spruce",
    "birch",
    "jungle",
    "acacia",
    "dark_oak",
    "mangrove",
    "cherry",
    "bamboo",
    "pale_oak",
    "crimson",
    "warped",
)
WOOD_TYPE_IDS: FrozenSet[str] = frozenset(WOOD_TYPES)

CAT_SKINS: Tuple[str, ...] = (
    "tabby",
    "black",
    "red",
    "siamese",
    "british_shorthair",
    "calico",
    "persian",
    "ragdoll",
    "white",
    "jellie",
    "all_black",
)
CAT_SKIN_IDS: FrozenSet[str] = frozenset(CAT_SKINS)


def get_dye_rgb(dye_id: str) -> Rgb:
    dye = _DYES_BY_ID.get(dye_id) or _DYES_BY_ID["white"]
    return dye.rgb


def get_dye_label(dye_id: str) -> str | None:
    dye = _DYES_BY_ID.get(dye_id)
    return dye.label if dye else None


def all_leaves_in_set(leaves: Iterable[str], known: AbstractSet[str]) -> bool:
    items = list(leaves)
    return bool(items) and all(leaf in known for leaf in items)


def sort_by_preferred_order(
    values: Iterable[str], preferred: Iterable[str]
) -> list[str]:
    """Known values first in ``preferred`` order, unknown ones alphabetically."""
    order = {v: i for i, v in enumerate(preferred)}
    fallback = len(order)
    return sorted(values, key=lambda v: (order.get(v, fallback), v))
