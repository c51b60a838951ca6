"""Resolution orchestrator: selected texture id -> composite schema.

Phases:
 1. universe snapshot (set for membership, sorted tuple for scans)
 2. base id: feature layers are swapped for their likely owner
 3. context: namespace, entity path, family root, (dir, leaf)
 4. contributions: universal features, then the ordered handler chain;
    the catch-all variant handler only runs when no family claimed the id
 5. merge into one schema, or ``None`` when nothing offers a control

Merge policy when several contributions supply the same function:
 - controls concatenate in dispatch order; a repeated id keeps the first
 - base texture, geometry type and root transform: last contributor wins
 - bone render / bone input maps merge per bone, later flags win
 - entity state / part texture maps merge flat, later keys win
 - layers concatenate, then sort ascending by zIndex (stable)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import (
    AbstractSet,
    Any,
    Callable,
    Dict,
    Iterable,
    List,
    Optional,
    Tuple,
    TypeVar,
)

from .assets.ids import (
    get_dir_and_leaf,
    get_direct_entity_dir_and_leaf,
    get_entity_path,
    get_entity_root,
    get_namespace,
)
from .handlers import (
    ENTITY_HANDLERS,
    FALLBACK_HANDLERS,
    SHARED_HANDLERS,
    UNIVERSAL_FEATURES,
)
from .handlers.base import EntityHandler, HandlerContext, HandlerResult
from .layers.base_lookup import find_likely_base_entity
from .layers.detection import is_feature_layer
from .logging import get_logger
from .schema.models import (
    EntityCompositeSchema,
    EntityFeatureControl,
    EntityFeatureStateView,
    EntityLayerDefinition,
)

__all__ = [
    "resolve_entity_composite_schema",
    "resolve_base_asset_id",
    "build_context",
]

T = TypeVar("T")
StateFn = Callable[[EntityFeatureStateView], T]

# Single-valued functions; a later contributor replaces an earlier one.
_SCALAR_FUNCTIONS = (
    "get_base_texture_asset_id",
    "get_cem_entity_type",
    "get_root_transform",
)
# Map-valued functions; contributions are composed.
_NESTED_MAP_FUNCTIONS = ("get_bone_render_overrides", "get_bone_input_overrides")
_FLAT_MAP_FUNCTIONS = ("get_entity_state_overrides", "get_part_texture_overrides")


def resolve_base_asset_id(selected_asset_id: str, universe: AbstractSet[str]) -> str:
    if not is_feature_layer(selected_asset_id):
        return selected_asset_id
    owner = find_likely_base_entity(selected_asset_id, universe)
    return owner or selected_asset_id


def build_context(
    base_asset_id: str,
    selected_asset_id: str,
    universe: AbstractSet[str],
    ids_list: Tuple[str, ...],
) -> Optional[HandlerContext]:
    entity_path = get_entity_path(base_asset_id)
    if not entity_path:
        return None
    directory, leaf = get_dir_and_leaf(entity_path)
    return HandlerContext(
        base_asset_id=base_asset_id,
        selected_asset_id=selected_asset_id,
        namespace=get_namespace(base_asset_id),
        entity_path=entity_path,
        folder_root=get_entity_root(entity_path),
        dir=directory,
        leaf=leaf,
        direct=get_direct_entity_dir_and_leaf(entity_path),
        all_ids=universe,
        all_ids_list=ids_list,
    )


def _merge_nested(
    fns: List[StateFn[Dict[str, Dict[str, Any]]]],
) -> StateFn[Dict[str, Dict[str, Any]]]:
    def merged(state: EntityFeatureStateView) -> Dict[str, Dict[str, Any]]:
        out: Dict[str, Dict[str, Any]] = {}
        for fn in fns:
            for bone, values in fn(state).items():
                out.setdefault(bone, {}).update(values)
        return out

    return merged


def _merge_flat(fns: List[StateFn[Dict[str, Any]]]) -> StateFn[Dict[str, Any]]:
    def merged(state: EntityFeatureStateView) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for fn in fns:
            out.update(fn(state))
        return out

    return merged


def _merge_layers(
    fns: List[StateFn[List[EntityLayerDefinition]]],
) -> StateFn[List[EntityLayerDefinition]]:
    def active_layers(state: EntityFeatureStateView) -> List[EntityLayerDefinition]:
        layers: List[EntityLayerDefinition] = []
        for fn in fns:
            layers.extend(fn(state))
        return sorted(layers, key=lambda layer: layer.z_index)

    return active_layers


@dataclass(slots=True)
class _Contributions:
    base_asset_id: str
    controls: List[EntityFeatureControl] = field(default_factory=list)
    control_ids: set[str] = field(default_factory=set)
    scalars: Dict[str, Callable[..., Any]] = field(default_factory=dict)
    maps: Dict[str, List[Callable[..., Any]]] = field(default_factory=dict)
    layers: List[StateFn[List[EntityLayerDefinition]]] = field(default_factory=list)
    contributors: List[str] = field(default_factory=list)

    def add(self, name: str, result: HandlerResult) -> None:
        logger = get_logger()
        self.contributors.append(name)
        for control in result.controls:
            if control.id in self.control_ids:
                logger.debug(
                    "%s: control %s already offered, keeping first",
                    name,
                    control.id,
                )
                continue
            self.control_ids.add(control.id)
            self.controls.append(control)
        for attr in _SCALAR_FUNCTIONS:
            fn = getattr(result, attr)
            if fn is None:
                continue
            if attr in self.scalars:
                logger.debug("%s: replaces %s for %s", name, attr, self.base_asset_id)
            self.scalars[attr] = fn
        for attr in _NESTED_MAP_FUNCTIONS + _FLAT_MAP_FUNCTIONS:
            fn = getattr(result, attr)
            if fn is not None:
                self.maps.setdefault(attr, []).append(fn)
        if result.get_layer_contributions is not None:
            self.layers.append(result.get_layer_contributions)

    def to_schema(self, entity_root: str) -> EntityCompositeSchema:
        functions: Dict[str, Any] = dict(self.scalars)
        for attr in _NESTED_MAP_FUNCTIONS:
            if attr in self.maps:
                functions[attr] = _merge_nested(self.maps[attr])
        for attr in _FLAT_MAP_FUNCTIONS:
            if attr in self.maps:
                functions[attr] = _merge_flat(self.maps[attr])
        return EntityCompositeSchema(
            base_asset_id=self.base_asset_id,
            entity_root=entity_root,
            controls=tuple(self.controls),
            get_active_layers=_merge_layers(list(self.layers)),
            **functions,
        )


def _run(
    handlers: Iterable[EntityHandler],
    ctx: HandlerContext,
    acc: _Contributions,
    *,
    shared: AbstractSet[EntityHandler] = frozenset(),
    fallback: AbstractSet[EntityHandler] = frozenset(),
) -> None:
    claimed_by: Optional[str] = None
    for handler in handlers:
        if claimed_by and handler in fallback:
            get_logger().debug(
                "%s skipped: %s claimed %s",
                handler.__name__,
                claimed_by,
                ctx.base_asset_id,
            )
            continue
        result = handler(ctx)
        if result is None:
            continue
        if claimed_by is None and handler not in shared and handler not in fallback:
            claimed_by = handler.__name__
        acc.add(handler.__name__, result)


def resolve_entity_composite_schema(
    selected_asset_id: str, all_asset_ids: Iterable[str]
) -> Optional[EntityCompositeSchema]:
    """Resolve the composite schema for the texture the user selected.

    Returns ``None`` when the id is not an entity texture or no feature
    applies; that means "no customization", never an error.
    """
    logger = get_logger()
    universe = frozenset(all_asset_ids)
    ids_list = tuple(sorted(universe))
    base_asset_id = resolve_base_asset_id(selected_asset_id, universe)
    if base_asset_id != selected_asset_id:
        logger.debug("layer %s resolved to base %s", selected_asset_id, base_asset_id)
    ctx = build_context(base_asset_id, selected_asset_id, universe, ids_list)
    if ctx is None:
        logger.debug("%s is not an entity texture", base_asset_id)
        return None

    acc = _Contributions(base_asset_id)
    _run(UNIVERSAL_FEATURES, ctx, acc)
    _run(
        ENTITY_HANDLERS,
        ctx,
        acc,
        shared=SHARED_HANDLERS,
        fallback=FALLBACK_HANDLERS,
    )
    if not acc.controls:
        logger.debug("no features for %s", base_asset_id)
        return None
    logger.debug(
        "resolved %s: controls=%d contributors=%s",
        base_asset_id,
        len(acc.controls),
        ",".join(acc.contributors),
    )
    return acc.to_schema(ctx.folder_root)
