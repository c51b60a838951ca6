"""Handler contract shared by every entity family.

A handler is a plain function ``(HandlerContext) -> HandlerResult | None``.
It returns ``None`` when its family does not apply; otherwise it returns the
controls it exposes plus any of the optional state functions. Handlers never
mutate the context and never touch anything outside it.
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
    Sequence,
    Tuple,
)

from ..assets.ids import (
    DirectPath,
    find_asset_id,
    make_asset_id,
    title_label,
)
from ..layers.scan import list_leaves
from ..schema.models import (
    BoneInputOverrides,
    BoneRenderOverrides,
    CemEntityType,
    EntityFeatureControl,
    EntityFeatureStateView,
    EntityLayerDefinition,
    RootTransform,
    SelectControl,
    SelectOption,
    ToggleControl,
)

__all__ = [
    "HandlerContext",
    "HandlerResult",
    "EntityHandler",
    "toggle",
    "select",
    "NONE_OPTION",
    "pick_default",
    "hidden",
    "visible",
]

NONE_OPTION = SelectOption("none", "None")


@dataclass(frozen=True, slots=True)
class HandlerContext:
    """Normalized view of one resolution call."""

    base_asset_id: str
    selected_asset_id: str
    namespace: str
    entity_path: str
    folder_root: str
    dir: str
    leaf: str
    direct: Optional[DirectPath]
    all_ids: AbstractSet[str]
    all_ids_list: Tuple[str, ...]

    @property
    def entity_type(self) -> str:
        return self.leaf

    def find(self, *paths: str) -> Optional[str]:
        """First ``namespace:<path>`` present in the universe."""
        return find_asset_id(self.namespace, paths, self.all_ids)

    def find_entity(self, *entity_paths: str) -> Optional[str]:
        return self.find(*(f"entity/{p}" for p in entity_paths))

    def entity_id(self, entity_path: str) -> str:
        return make_asset_id(self.namespace, f"entity/{entity_path}")

    def has_entity(self, entity_path: str) -> bool:
        return self.entity_id(entity_path) in self.all_ids

    def leaves(self, directory: str, *, exclude_layers: bool = False) -> List[str]:
        return list_leaves(
            self.namespace, directory, self.all_ids_list, exclude_layers=exclude_layers
        )

    def sibling_path(self, leaf: str) -> str:
        """Entity path of ``leaf`` next to the base texture."""
        return f"{self.dir}/{leaf}" if self.dir else leaf


@dataclass(slots=True)
class HandlerResult:
    controls: List[EntityFeatureControl] = field(default_factory=list)
    get_base_texture_asset_id: Optional[Callable[[EntityFeatureStateView], str]] = None
    get_cem_entity_type: Optional[
        Callable[[EntityFeatureStateView], CemEntityType]
    ] = None
    get_root_transform: Optional[
        Callable[[EntityFeatureStateView], RootTransform]
    ] = None
    get_bone_render_overrides: Optional[
        Callable[[EntityFeatureStateView], BoneRenderOverrides]
    ] = None
    get_bone_input_overrides: Optional[
        Callable[[EntityFeatureStateView], BoneInputOverrides]
    ] = None
    get_entity_state_overrides: Optional[
        Callable[[EntityFeatureStateView], Dict[str, Any]]
    ] = None
    get_part_texture_overrides: Optional[
        Callable[[EntityFeatureStateView], Dict[str, str]]
    ] = None
    get_layer_contributions: Optional[
        Callable[[EntityFeatureStateView], List[EntityLayerDefinition]]
    ] = None


EntityHandler = Callable[[HandlerContext], Optional[HandlerResult]]


# ---------------------------------------------------------------------------
# Control builders
# ---------------------------------------------------------------------------


def toggle(
    control_id: str, label: str, default: bool = False, description: str | None = None
) -> ToggleControl:
    return ToggleControl(control_id, label, default, description)


def select(
    control_id: str,
    label: str,
    default: str,
    options: Iterable[SelectOption | Tuple[str, str] | str],
    description: str | None = None,
) -> SelectControl:
    """Build a select; bare strings become options labelled via ``title_label``."""
    opts: List[SelectOption] = []
    for o in options:
        if isinstance(o, SelectOption):
            opts.append(o)
        elif isinstance(o, tuple):
            opts.append(SelectOption(o[0], o[1]))
        else:
            opts.append(SelectOption(o, title_label(o)))
    return SelectControl(control_id, label, default, tuple(opts), description)


def pick_default(values: Sequence[str], *preferred: str) -> str:
    """First of ``preferred`` present in ``values``, else the first value."""
    for p in preferred:
        if p in values:
            return p
    return values[0]


def visible(bones: Iterable[str], flag: bool) -> BoneRenderOverrides:
    return {b: {"visible": flag} for b in bones}


def hidden(bones: Iterable[str]) -> BoneRenderOverrides:
    return visible(bones, False)
