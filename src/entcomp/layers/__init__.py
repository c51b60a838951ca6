from .detection import (
    LAYER_RULES,
    classify_entity_path,
    is_feature_layer,
    is_entity_feature_layer_texture_asset_id,
)
from .base_lookup import find_likely_base_entity, find_equipment_owner
from .scan import list_leaves, is_horse_coat_leaf

__all__ = [
    "LAYER_RULES",
    "classify_entity_path",
    "is_feature_layer",
    "is_entity_feature_layer_texture_asset_id",
    "find_likely_base_entity",
    "find_equipment_owner",
    "list_leaves",
    "is_horse_coat_leaf",
]
