"""Linear scans over the asset universe."""

from __future__ import annotations

from typing import Iterable, List

from ..assets.ids import make_asset_id
from .detection import is_feature_layer

__all__ = ["list_leaves", "is_horse_coat_leaf"]


def list_leaves(
    namespace: str,
    directory: str,
    all_ids: Iterable[str],
    *,
    exclude_layers: bool = False,
) -> List[str]:
    """Sorted leaf names directly under ``entity/<directory>/``.

    Deeper paths are ignored. With ``exclude_layers`` feature-layer
    textures are skipped.
    """
    prefix = make_asset_id(namespace, f"entity/{directory}/")
    leaves = set()
    for asset_id in all_ids:
        if not asset_id.startswith(prefix):
            continue
        leaf = asset_id[len(prefix) :]
        if not leaf or "/" in leaf:
            continue
        if exclude_layers and is_feature_layer(asset_id):
            continue
        leaves.add(leaf)
    return sorted(leaves)


def is_horse_coat_leaf(leaf: str) -> bool:
    if not leaf.startswith("horse_"):
        return False
    if leaf.startswith("horse_markings_"):
        return False
    return "skeleton" not in leaf and "zombie" not in leaf
