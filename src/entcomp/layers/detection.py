"""Feature-layer classification.

A texture is a *feature layer* when it is meant to be composited onto
another entity instead of being previewed on its own. Classification is an
ordered rule table: each rule inspects the entity path and answers
``True`` (layer), ``False`` (standalone) or ``None`` (no opinion). The
first rule with an opinion decides; when none has one the texture is
standalone.
"""

from __future__ import annotations

import re
from typing import Callable, Optional, Tuple

from ..assets.ids import get_entity_path, get_leaf_name
from .patterns import (
    BANNER_BASE_LEAVES,
    BEE_LAYER_VARIANTS,
    BREEZE_LAYER_VARIANTS,
    CRACKINESS_PATTERN,
    HORSE_MARKINGS_PREFIX,
    MISFILED_COW_MUSHROOMS,
    OVERLAY_DIR_SEGMENT,
    OVERLAY_SUFFIXES,
    VILLAGER_LAYER_PREFIXES,
)

__all__ = [
    "LayerRule",
    "LAYER_RULES",
    "classify_entity_path",
    "is_feature_layer",
    "is_entity_feature_layer_texture_asset_id",
]

LayerRule = Callable[[str], Optional[bool]]

_CRACKINESS_RE = re.compile(CRACKINESS_PATTERN)


def _equipment_rule(entity_path: str) -> Optional[bool]:
    if not entity_path.startswith("equipment/"):
        return None
    # humanoid layer 1 armor is previewed on its own rig
    return not entity_path.startswith("equipment/humanoid/")


def _family_state_rule(entity_path: str) -> Optional[bool]:
    leaf = get_leaf_name(entity_path)
    if entity_path.startswith("bee/") and leaf in BEE_LAYER_VARIANTS:
        return True
    if entity_path.startswith("breeze/") and leaf in BREEZE_LAYER_VARIANTS:
        return True
    return None


def _villager_rule(entity_path: str) -> Optional[bool]:
    if entity_path.startswith(VILLAGER_LAYER_PREFIXES):
        return True
    return None


def _banner_rule(entity_path: str) -> Optional[bool]:
    if not entity_path.startswith("banner/"):
        return None
    return get_leaf_name(entity_path) not in BANNER_BASE_LEAVES


def _overlay_rule(entity_path: str) -> Optional[bool]:
    leaf = get_leaf_name(entity_path)
    if leaf.endswith(OVERLAY_SUFFIXES):
        return True
    if leaf.startswith(HORSE_MARKINGS_PREFIX):
        return True
    if _CRACKINESS_RE.search(leaf):
        return True
    if OVERLAY_DIR_SEGMENT in entity_path:
        return True
    if entity_path.startswith("cow/") and leaf in MISFILED_COW_MUSHROOMS:
        return True
    return None


LAYER_RULES: Tuple[LayerRule, ...] = (
    _equipment_rule,
    _family_state_rule,
    _villager_rule,
    _banner_rule,
    _overlay_rule,
)


def classify_entity_path(entity_path: str) -> bool:
    for rule in LAYER_RULES:
        verdict = rule(entity_path)
        if verdict is not None:
            return verdict
    return False


def is_feature_layer(asset_id: str) -> bool:
    entity_path = get_entity_path(asset_id)
    if not entity_path:
        return False
    return classify_entity_path(entity_path)


# Host-facing name.
is_entity_feature_layer_texture_asset_id = is_feature_layer
