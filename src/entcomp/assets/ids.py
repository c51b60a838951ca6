"""Namespaced asset identifier helpers.

Identifiers look like ``namespace:path/to/leaf``. Everything here is pure
string work; malformed input yields ``None`` or an empty value, never an
exception.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, AbstractSet, Tuple

DEFAULT_NAMESPACE = "minecraft"
ENTITY_PREFIX = "entity/"

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
]


@dataclass(frozen=True, slots=True)
class DirectPath:
    """``entity/<dir>/<leaf>`` split into its two segments."""

    dir: str
    leaf: str


def strip_namespace(asset_id: str) -> str:
    idx = asset_id.find(":")
    return asset_id[idx + 1 :] if idx >= 0 else asset_id


def get_namespace(asset_id: str) -> str:
    idx = asset_id.find(":")
    if idx <= 0:
        return DEFAULT_NAMESPACE
    return asset_id[:idx]


def make_asset_id(namespace: str, path: str) -> str:
    return f"{namespace}:{path}"


def get_entity_path(asset_id: str) -> Optional[str]:
    path = strip_namespace(asset_id)
    if not path.startswith(ENTITY_PREFIX):
        return None
    return path[len(ENTITY_PREFIX) :]


def get_leaf_name(path: str) -> str:
    return path.rsplit("/", 1)[-1]


def get_entity_root(entity_path: str) -> str:
    return entity_path.split("/", 1)[0]


def get_dir_and_leaf(entity_path: str) -> Tuple[str, str]:
    """Split at the last slash; ``dir`` is empty for single-segment paths."""
    if "/" not in entity_path:
        return "", entity_path
    directory, leaf = entity_path.rsplit("/", 1)
    return directory, leaf


def get_direct_entity_dir_and_leaf(entity_path: str) -> Optional[DirectPath]:
    parts = entity_path.split("/")
    if len(parts) != 2:
        return None
    directory, leaf = parts
    if not directory or not leaf:
        return None
    return DirectPath(directory, leaf)


def title_label(token: str) -> str:
    """``light_blue`` -> ``Light Blue``."""
    words = [w for w in token.replace("-", "_").split("_") if w]
    return " ".join(w[:1].upper() + w[1:].lower() for w in words)


def stable_unique(values: Iterable[str]) -> List[str]:
    return sorted(set(values))


def find_asset_id(
    namespace: str,
    candidate_paths: Sequence[str],
    universe: AbstractSet[str],
) -> Optional[str]:
    for path in candidate_paths:
        asset_id = make_asset_id(namespace, path)
        if asset_id in universe:
            return asset_id
    return None
