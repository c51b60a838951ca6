"""Naming-convention tables for feature-layer classification."""

from __future__ import annotations

from typing import Dict, Tuple

__all__ = [
    "OVERLAY_SUFFIXES",
    "BASE_LOOKUP_SUFFIXES",
    "CRACKINESS_PATTERN",
    "BEE_LAYER_VARIANTS",
    "BREEZE_LAYER_VARIANTS",
    "VILLAGER_LAYER_PREFIXES",
    "BANNER_BASE_LEAVES",
    "HORSE_MARKINGS_PREFIX",
    "OVERLAY_DIR_SEGMENT",
    "MISFILED_COW_MUSHROOMS",
    "EQUIPMENT_OWNER_MAP",
]

# Same-UV overlay suffixes, matched against the leaf name.
OVERLAY_SUFFIXES: Tuple[str, ...] = (
    "_eyes",
    "_overlay",
    "_outer",
    "_outer_layer",
    "_fur",
    "_wool",
    "_wool_undercoat",
    "_undercoat",
    "_collar",
    "_saddle",
    "_armor",
    "_charge",
)

# Reverse lookup strips the longest matching suffix first.
BASE_LOOKUP_SUFFIXES: Tuple[str, ...] = (
    "_eyes",
    "_overlay",
    "_outer_layer",
    "_outer",
    "_fur",
    "_wool_undercoat",
    "_wool",
    "_undercoat",
    "_collar",
    "_saddle",
    "_armor",
    "_charge",
    "_crackiness_low",
    "_crackiness_medium",
    "_crackiness_high",
)

CRACKINESS_PATTERN = r"_crackiness_(low|medium|high)$"

BEE_LAYER_VARIANTS: frozenset[str] = frozenset(
    {
        "bee_angry",
        "bee_nectar",
        "bee_angry_nectar",
        "bee_stinger",
        "bee_angry_stinger",
        "bee_nectar_stinger",
        "bee_angry_nectar_stinger",
    }
)

BREEZE_LAYER_VARIANTS: frozenset[str] = frozenset(
    {"breeze_wind", "wind", "breeze_air", "breeze_wind_charge", "wind_charge"}
)

VILLAGER_LAYER_PREFIXES: Tuple[str, ...] = (
    "villager/type/",
    "villager/profession/",
    "villager/profession_level/",
    "zombie_villager/type/",
    "zombie_villager/profession/",
    "zombie_villager/profession_level/",
)

BANNER_BASE_LEAVES: frozenset[str] = frozenset({"base", "banner_base"})

HORSE_MARKINGS_PREFIX = "horse_markings_"

OVERLAY_DIR_SEGMENT = "/overlay/"

# Mushroom textures some packs drop into the cow folder; they decorate the
# mooshroom of the same colour.
MISFILED_COW_MUSHROOMS: Dict[str, str] = {
    "red_mushroom": "red_mooshroom",
    "brown_mushroom": "brown_mooshroom",
}

# Equipment kind keyword -> owner lookup. Plain entries are exact entity
# paths; entries ending in "/" scan that folder in sorted order.
EQUIPMENT_OWNER_MAP: Dict[str, Tuple[str, ...]] = {
    "happy_ghast": ("happy_ghast/happy_ghast", "ghast/happy_ghast", "happy_ghast/"),
    "donkey": ("donkey/donkey", "horse/donkey", "donkey"),
    "mule": ("mule/mule", "horse/mule", "mule"),
    "horse": ("horse/horse_brown", "horse/"),
    "llama": ("llama/creamy", "llama/white", "llama/"),
    "wolf": ("wolf/wolf", "wolf/"),
    "camel": ("camel/camel", "camel/"),
    "strider": ("strider/strider", "strider/"),
    "pig": ("pig/pig", "pig/temperate_pig", "pig/"),
}
