"""Entity composite resolution engine.

Given a selected entity texture id and the set of texture ids available in
the active pack stack, decide which optional visual features apply and
describe them as a declarative, side-effect-free schema.
"""

from ._version import __version__
from .layers.detection import is_entity_feature_layer_texture_asset_id
from .resolver import resolve_entity_composite_schema

__all__ = [
    "__version__",
    "resolve_entity_composite_schema",
    "is_entity_feature_layer_texture_asset_id",
]
