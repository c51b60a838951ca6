from .ids import (
    DEFAULT_NAMESPACE,
    DirectPath,
    strip_namespace,
    get_namespace,
    make_asset_id,
    get_entity_path,
    get_leaf_name,
    get_entity_root,
    get_dir_and_leaf,
    get_direct_entity_dir_and_leaf,
    title_label,
    stable_unique,
    find_asset_id,
)
from .state import get_toggle, get_select
from .reference import (
    DyeColor,
    DYE_COLORS,
    DYE_COLOR_IDS,
    WOOD_TYPES,
    WOOD_TYPE_IDS,
    CAT_SKINS,
    CAT_SKIN_IDS,
    get_dye_rgb,
    get_dye_label,
    all_leaves_in_set,
    sort_by_preferred_order,
)

__all__ = [
    "DEFAULT_NAMESPACE",
    "DirectPath",
    "strip_namespace",
    "get_namespace",
    "make_asset_id",
    "get_entity_path",
    "get_leaf_name",
    "get_entity_root",
    "get_dir_and_leaf",
    "get_direct_entity_dir_and_leaf",
    "title_label",
    "stable_unique",
    "find_asset_id",
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
    "get_toggle",
    "get_select",
]
