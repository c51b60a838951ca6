"""Host-facing API for entcomp.

The two engine entry points are re-exported unchanged; ``scan_universe``
is a convenience for tools that want an overview of a whole pack stack.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .assets.ids import get_entity_path
from .layers.detection import is_entity_feature_layer_texture_asset_id
from .logging import get_logger
from .reporting import get_reporter, task
from .resolver import resolve_entity_composite_schema
from .schema.models import EntityCompositeSchema, EntityFeatureStateView

__all__ = [
    "resolve_entity_composite_schema",
    "is_entity_feature_layer_texture_asset_id",
    "EntityScanEntry",
    "ScanResult",
    "scan_universe",
    "evaluate_schema",
]


@dataclass(slots=True)
class EntityScanEntry:
    asset_id: str
    controls: int = 0
    layers: int = 0

    @property
    def composable(self) -> bool:
        return self.controls > 0

    def to_dict(self) -> dict:
        return {
            "asset_id": self.asset_id,
            "controls": self.controls,
            "layers": self.layers,
            "composable": self.composable,
        }


@dataclass(slots=True)
class ScanResult:
    entries: List[EntityScanEntry] = field(default_factory=list)
    feature_layers: int = 0

    @property
    def composable(self) -> List[EntityScanEntry]:
        return [e for e in self.entries if e.composable]

    def to_dict(self) -> dict:
        return {
            "entities": len(self.entries),
            "composable": len(self.composable),
            "feature_layers": self.feature_layers,
            "entries": [e.to_dict() for e in self.entries],
        }


def evaluate_schema(
    schema: EntityCompositeSchema, state: Optional[EntityFeatureStateView] = None
) -> dict:
    """Snapshot of ``schema`` for ``state`` (all defaults when omitted)."""
    return schema.snapshot(state)


def scan_universe(all_asset_ids: Iterable[str]) -> ScanResult:
    """Resolve every standalone entity texture in the universe.

    Feature layers are counted but not resolved on their own; ``layers`` on
    an entry is the number of layers active for the default state.
    """
    universe = sorted(set(all_asset_ids))
    entities = [a for a in universe if get_entity_path(a)]
    standalone = [
        a for a in entities if not is_entity_feature_layer_texture_asset_id(a)
    ]
    result = ScanResult(feature_layers=len(entities) - len(standalone))
    logger = get_logger()
    with task("scan.resolve", "Resolve entities", total=len(standalone)) as rep:
        for asset_id in standalone:
            entry = EntityScanEntry(asset_id)
            schema = resolve_entity_composite_schema(asset_id, universe)
            if schema is not None:
                entry.controls = len(schema.controls)
                entry.layers = len(schema.get_active_layers(schema.default_state()))
            result.entries.append(entry)
            rep.advance(
                "scan.resolve",
                current_item=asset_id,
                entities=len(result.entries),
                composable=len(result.composable),
            )
    logger.debug("scanned %d entity textures", len(entities))
    get_reporter().status(
        "Scan summary: "
        + f"entities={len(result.entries)} composable={len(result.composable)} "
        + f"layers={result.feature_layers}"
    )
    return result
