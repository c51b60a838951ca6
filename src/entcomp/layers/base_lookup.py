"""Reverse lookup from a feature layer to the entity it decorates."""

from __future__ import annotations

from typing import AbstractSet, Callable, Iterable, Optional, Tuple

from ..logging import get_logger
from ..assets.ids import (
    find_asset_id,
    get_dir_and_leaf,
    get_entity_path,
    get_leaf_name,
    get_namespace,
    make_asset_id,
)
from .detection import is_feature_layer
from .patterns import (
    BASE_LOOKUP_SUFFIXES,
    EQUIPMENT_OWNER_MAP,
    HORSE_MARKINGS_PREFIX,
    MISFILED_COW_MUSHROOMS,
)
from .scan import is_horse_coat_leaf, list_leaves

__all__ = ["find_likely_base_entity", "find_equipment_owner"]

FamilyLookup = Callable[[str, str, AbstractSet[str]], Optional[str]]


def _prefix_lookup(prefix: str, candidates: Tuple[str, ...]) -> FamilyLookup:
    def lookup(entity_path: str, ns: str, universe: AbstractSet[str]) -> Optional[str]:
        if not entity_path.startswith(prefix):
            return None
        return find_asset_id(ns, candidates, universe)

    return lookup


def _first_in_folder(ns: str, folder: str, universe: AbstractSet[str]) -> Optional[str]:
    leaves = list_leaves(ns, folder, universe, exclude_layers=True)
    if not leaves:
        return None
    return make_asset_id(ns, f"entity/{folder}/{leaves[0]}")


def find_equipment_owner(
    entity_path: str, ns: str, universe: AbstractSet[str]
) -> Optional[str]:
    """Best-guess owner of a non-humanoid equipment texture."""
    parts = entity_path.split("/")
    kind = parts[1].lower() if len(parts) > 1 else ""
    for keyword, entries in EQUIPMENT_OWNER_MAP.items():
        if keyword not in kind:
            continue
        for entry in entries:
            if entry.endswith("/"):
                found = _first_in_folder(ns, entry.rstrip("/"), universe)
            else:
                found = find_asset_id(ns, [f"entity/{entry}"], universe)
            if found:
                return found
    return None


def _equipment_lookup(
    entity_path: str, ns: str, universe: AbstractSet[str]
) -> Optional[str]:
    if not entity_path.startswith("equipment/"):
        return None
    parts = entity_path.split("/")
    if len(parts) == 3 and parts[1] == "humanoid_leggings":
        return find_asset_id(ns, [f"entity/equipment/humanoid/{parts[2]}"], universe)
    return find_equipment_owner(entity_path, ns, universe)


def _horse_markings_lookup(
    entity_path: str, ns: str, universe: AbstractSet[str]
) -> Optional[str]:
    if not get_leaf_name(entity_path).startswith(HORSE_MARKINGS_PREFIX):
        return None
    coats = [
        leaf
        for leaf in list_leaves(ns, "horse", universe, exclude_layers=True)
        if is_horse_coat_leaf(leaf)
    ]
    if not coats:
        return None
    preferred = "horse_brown" if "horse_brown" in coats else coats[0]
    return make_asset_id(ns, f"entity/horse/{preferred}")


def _cow_mushroom_lookup(
    entity_path: str, ns: str, universe: AbstractSet[str]
) -> Optional[str]:
    if not entity_path.startswith("cow/"):
        return None
    target = MISFILED_COW_MUSHROOMS.get(get_leaf_name(entity_path))
    if target is None:
        return None
    return find_asset_id(
        ns,
        [f"entity/cow/{target}", f"entity/mooshroom/{target}", f"entity/{target}"],
        universe,
    )


FAMILY_LOOKUPS: Tuple[FamilyLookup, ...] = (
    _prefix_lookup("bee/", ("entity/bee/bee", "entity/bee")),
    _prefix_lookup("breeze/", ("entity/breeze/breeze", "entity/breeze")),
    _prefix_lookup(
        "villager/", ("entity/villager/villager", "entity/villager")
    ),
    _prefix_lookup(
        "zombie_villager/",
        ("entity/zombie_villager/zombie_villager", "entity/zombie_villager"),
    ),
    _prefix_lookup(
        "banner/",
        (
            "entity/banner/base",
            "entity/banner/banner_base",
            "entity/banner_base",
            "entity/banner",
        ),
    ),
    _equipment_lookup,
    _horse_markings_lookup,
    _cow_mushroom_lookup,
)


def _suffix_lookup(
    entity_path: str, ns: str, universe: AbstractSet[str]
) -> Optional[str]:
    directory, leaf = get_dir_and_leaf(entity_path)
    for suffix in BASE_LOOKUP_SUFFIXES:
        if not leaf.endswith(suffix):
            continue
        base_leaf = leaf[: -len(suffix)]
        if not base_leaf:
            continue
        candidates = [f"entity/{base_leaf}"]
        if directory:
            candidates.insert(0, f"entity/{directory}/{base_leaf}")
        found = find_asset_id(ns, candidates, universe)
        if found:
            return found
    return None


def find_likely_base_entity(
    layer_asset_id: str, all_asset_ids: Iterable[str]
) -> Optional[str]:
    """Guess the standalone entity a feature layer belongs to.

    Returns ``None`` when ``layer_asset_id`` is not a layer or no owner is
    present in ``all_asset_ids``; callers then treat it as standalone.
    """
    if not is_feature_layer(layer_asset_id):
        return None
    entity_path = get_entity_path(layer_asset_id)
    if not entity_path:
        return None
    universe: AbstractSet[str] = (
        all_asset_ids
        if isinstance(all_asset_ids, (set, frozenset))
        else frozenset(all_asset_ids)
    )
    ns = get_namespace(layer_asset_id)
    logger = get_logger()
    for lookup in FAMILY_LOOKUPS:
        found = lookup(entity_path, ns, universe)
        if found:
            logger.debug("base lookup: %s -> %s", layer_asset_id, found)
            return found
    found = _suffix_lookup(entity_path, ns, universe)
    if found:
        logger.debug("base lookup: %s -> %s (suffix)", layer_asset_id, found)
    else:
        logger.debug("base lookup: %s has no owner", layer_asset_id)
    return found
