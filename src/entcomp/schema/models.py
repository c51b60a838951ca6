"""Data contracts shared by the resolver, the handlers and their consumers.

Everything here is immutable. The composite schema carries plain data
(base id, family root, control descriptors) plus a set of pure functions
that map an interaction state onto render instructions; only the data part
takes part in equality.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Tuple,
    Union,
)

__all__ = [
    "SelectOption",
    "ToggleControl",
    "SelectControl",
    "EntityFeatureControl",
    "Rgb",
    "Vec3",
    "MaterialMode",
    "EntityLayerDefinition",
    "CemEntityType",
    "RootTransform",
    "EntityFeatureStateView",
    "EntityCompositeSchema",
    "BoneRenderOverrides",
    "BoneInputOverrides",
    "clone_texture_layer",
    "cem_model_layer",
    "LAYER_KINDS",
    "BLEND_MODES",
    "ALL_BONES",
]

LAYER_KINDS = ("cloneTexture", "cemModel")
BLEND_MODES = ("normal", "additive")
MATERIAL_KINDS = ("default", "tint", "emissive", "energySwirl")

# Bone override key addressing every bone of the rig.
ALL_BONES = "*"

BoneRenderOverrides = Dict[str, Dict[str, bool]]
BoneInputOverrides = Dict[str, Dict[str, float]]


# ---------------------------------------------------------------------------
# Controls
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SelectOption:
    value: str
    label: str

    def to_dict(self) -> Dict[str, str]:
        return {"value": self.value, "label": self.label}


@dataclass(frozen=True, slots=True)
class ToggleControl:
    id: str
    label: str
    default_value: bool
    description: Optional[str] = None

    @property
    def kind(self) -> str:
        return "toggle"

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "kind": self.kind,
            "id": self.id,
            "label": self.label,
            "default": self.default_value,
        }
        if self.description:
            d["description"] = self.description
        return d


@dataclass(frozen=True, slots=True)
class SelectControl:
    id: str
    label: str
    default_value: str
    options: Tuple[SelectOption, ...]
    description: Optional[str] = None

    @property
    def kind(self) -> str:
        return "select"

    @property
    def values(self) -> Tuple[str, ...]:
        return tuple(o.value for o in self.options)

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "kind": self.kind,
            "id": self.id,
            "label": self.label,
            "default": self.default_value,
            "options": [o.to_dict() for o in self.options],
        }
        if self.description:
            d["description"] = self.description
        return d


EntityFeatureControl = Union[ToggleControl, SelectControl]


# ---------------------------------------------------------------------------
# Layer payloads
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Rgb:
    """sRGB colour multiplier, components in 0..1."""

    r: float
    g: float
    b: float

    @classmethod
    def from_hex(cls, value: int) -> "Rgb":
        return cls(
            ((value >> 16) & 0xFF) / 255.0,
            ((value >> 8) & 0xFF) / 255.0,
            (value & 0xFF) / 255.0,
        )

    def to_dict(self) -> Dict[str, float]:
        return {"r": self.r, "g": self.g, "b": self.b}


@dataclass(frozen=True, slots=True)
class Vec3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def uniform(cls, value: float) -> "Vec3":
        return cls(value, value, value)

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "z": self.z}


@dataclass(frozen=True, slots=True)
class MaterialMode:
    """How an overlay's material is shaded.

    ``tint`` multiplies by ``color``; ``emissive`` renders unlit at
    ``intensity``; ``energySwirl`` is an additive unlit material with UVs
    scrolling at ``scroll_u``/``scroll_v`` units per second.
    """

    kind: str = "default"
    color: Optional[Rgb] = None
    intensity: Optional[float] = None
    repeat: Optional[float] = None
    scroll_u: Optional[float] = None
    scroll_v: Optional[float] = None

    @classmethod
    def default(cls) -> "MaterialMode":
        return cls()

    @classmethod
    def tint(cls, color: Rgb) -> "MaterialMode":
        return cls(kind="tint", color=color)

    @classmethod
    def emissive(cls, intensity: float = 1.0) -> "MaterialMode":
        return cls(kind="emissive", intensity=intensity)

    @classmethod
    def energy_swirl(
        cls,
        intensity: float = 1.0,
        repeat: float = 1.0,
        scroll_u: float = 0.0,
        scroll_v: float = 0.0,
    ) -> "MaterialMode":
        return cls(
            kind="energySwirl",
            intensity=intensity,
            repeat=repeat,
            scroll_u=scroll_u,
            scroll_v=scroll_v,
        )

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"kind": self.kind}
        if self.color is not None:
            d["color"] = self.color.to_dict()
        if self.intensity is not None:
            d["intensity"] = self.intensity
        if self.repeat is not None:
            d["repeat"] = self.repeat
        if self.scroll_u is not None or self.scroll_v is not None:
            d["scroll"] = {
                "uPerSec": self.scroll_u or 0.0,
                "vPerSec": self.scroll_v or 0.0,
            }
        return d


def _vec_map(values: Optional[Mapping[str, Vec3]]) -> Optional[Dict[str, Any]]:
    if values is None:
        return None
    return {k: v.to_dict() for k, v in sorted(values.items())}


@dataclass(frozen=True, slots=True)
class EntityLayerDefinition:
    """One render instruction composed on top of the base entity.

    ``cloneTexture`` layers reuse the base geometry with another texture;
    ``cemModel`` layers load alternate geometry, trying
    ``cem_entity_type_candidates`` in order. Higher ``z_index`` renders
    later (in front).
    """

    id: str
    label: str
    kind: str
    texture_asset_id: str
    blend: str = "normal"
    z_index: int = 0
    cem_entity_type_candidates: Tuple[str, ...] = ()
    material_mode: Optional[MaterialMode] = None
    bone_render_overrides: Optional[BoneRenderOverrides] = None
    bone_alias_map: Optional[Dict[str, str]] = None
    replaces_base_bones: Tuple[str, ...] = ()
    allow_vanilla_fallback: bool = True
    bone_position_offsets: Optional[Dict[str, Vec3]] = None
    bone_scale_multipliers: Optional[Dict[str, Vec3]] = None
    sync_to_base_pose: bool = False
    opacity: float = 1.0

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "id": self.id,
            "label": self.label,
            "kind": self.kind,
            "texture": self.texture_asset_id,
            "blend": self.blend,
            "z_index": self.z_index,
            "opacity": self.opacity,
        }
        if self.kind == "cemModel":
            d["cem_entity_type_candidates"] = list(self.cem_entity_type_candidates)
        if self.material_mode is not None:
            d["material_mode"] = self.material_mode.to_dict()
        if self.bone_render_overrides:
            d["bone_render_overrides"] = _copy_nested(self.bone_render_overrides)
        if self.bone_alias_map:
            d["bone_alias_map"] = dict(sorted(self.bone_alias_map.items()))
        if self.replaces_base_bones:
            d["replaces_base_bones"] = list(self.replaces_base_bones)
        if not self.allow_vanilla_fallback:
            d["allow_vanilla_fallback"] = False
        if self.bone_position_offsets:
            d["bone_position_offsets"] = _vec_map(self.bone_position_offsets)
        if self.bone_scale_multipliers:
            d["bone_scale_multipliers"] = _vec_map(self.bone_scale_multipliers)
        if self.sync_to_base_pose:
            d["sync_to_base_pose"] = True
        return d


def clone_texture_layer(
    id: str, label: str, texture_asset_id: str, **kwargs: Any
) -> EntityLayerDefinition:
    return EntityLayerDefinition(
        id=id,
        label=label,
        kind="cloneTexture",
        texture_asset_id=texture_asset_id,
        **kwargs,
    )


def cem_model_layer(
    id: str,
    label: str,
    texture_asset_id: str,
    candidates: Iterable[str],
    **kwargs: Any,
) -> EntityLayerDefinition:
    return EntityLayerDefinition(
        id=id,
        label=label,
        kind="cemModel",
        texture_asset_id=texture_asset_id,
        cem_entity_type_candidates=tuple(candidates),
        **kwargs,
    )


@dataclass(frozen=True, slots=True)
class CemEntityType:
    entity_type: str
    parent_entity: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"entity_type": self.entity_type, "parent_entity": self.parent_entity}


@dataclass(frozen=True, slots=True)
class RootTransform:
    position: Optional[Vec3] = None
    rotation: Optional[Vec3] = None
    scale: Optional[Vec3] = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {}
        for name in ("position", "rotation", "scale"):
            v = getattr(self, name)
            if v is not None:
                d[name] = v.to_dict()
        return d


# ---------------------------------------------------------------------------
# State view
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class EntityFeatureStateView:
    """Current interaction state. A missing key means the control default."""

    toggles: Mapping[str, Optional[bool]] = field(default_factory=dict)
    selects: Mapping[str, Optional[str]] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "EntityFeatureStateView":
        data = data or {}
        toggles = data.get("toggles") or {}
        selects = data.get("selects") or {}
        if not isinstance(toggles, Mapping) or not isinstance(selects, Mapping):
            raise ValueError("State 'toggles' and 'selects' must be objects")
        return cls(
            {str(k): (None if v is None else bool(v)) for k, v in toggles.items()},
            {str(k): (None if v is None else str(v)) for k, v in selects.items()},
        )

    @classmethod
    def defaults_for(
        cls, controls: Iterable[EntityFeatureControl]
    ) -> "EntityFeatureStateView":
        toggles: Dict[str, Optional[bool]] = {}
        selects: Dict[str, Optional[str]] = {}
        for c in controls:
            if isinstance(c, ToggleControl):
                toggles[c.id] = c.default_value
            else:
                selects[c.id] = c.default_value
        return cls(toggles, selects)

    def with_toggle(self, control_id: str, value: bool) -> "EntityFeatureStateView":
        toggles = dict(self.toggles)
        toggles[control_id] = value
        return EntityFeatureStateView(toggles, dict(self.selects))

    def with_select(self, control_id: str, value: str) -> "EntityFeatureStateView":
        selects = dict(self.selects)
        selects[control_id] = value
        return EntityFeatureStateView(dict(self.toggles), selects)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "toggles": dict(sorted(self.toggles.items())),
            "selects": dict(sorted(self.selects.items())),
        }


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------


def _copy_nested(value: Mapping[str, Mapping[str, Any]]) -> Dict[str, Dict[str, Any]]:
    return {k: dict(sorted(v.items())) for k, v in sorted(value.items())}


@dataclass(frozen=True, slots=True)
class EntityCompositeSchema:
    """Resolution output: controls plus state-to-render-data functions."""

    base_asset_id: str
    entity_root: str
    controls: Tuple[EntityFeatureControl, ...]
    get_active_layers: Callable[
        [EntityFeatureStateView], List[EntityLayerDefinition]
    ] = field(compare=False, repr=False)
    get_base_texture_asset_id: Optional[
        Callable[[EntityFeatureStateView], str]
    ] = field(default=None, compare=False, repr=False)
    get_cem_entity_type: Optional[
        Callable[[EntityFeatureStateView], CemEntityType]
    ] = field(default=None, compare=False, repr=False)
    get_root_transform: Optional[
        Callable[[EntityFeatureStateView], RootTransform]
    ] = field(default=None, compare=False, repr=False)
    get_bone_render_overrides: Optional[
        Callable[[EntityFeatureStateView], BoneRenderOverrides]
    ] = field(default=None, compare=False, repr=False)
    get_bone_input_overrides: Optional[
        Callable[[EntityFeatureStateView], BoneInputOverrides]
    ] = field(default=None, compare=False, repr=False)
    get_entity_state_overrides: Optional[
        Callable[[EntityFeatureStateView], Dict[str, Any]]
    ] = field(default=None, compare=False, repr=False)
    get_part_texture_overrides: Optional[
        Callable[[EntityFeatureStateView], Dict[str, str]]
    ] = field(default=None, compare=False, repr=False)

    def control(self, control_id: str) -> Optional[EntityFeatureControl]:
        for c in self.controls:
            if c.id == control_id:
                return c
        return None

    def default_state(self) -> EntityFeatureStateView:
        return EntityFeatureStateView.defaults_for(self.controls)

    def snapshot(
        self, state: Optional[EntityFeatureStateView] = None
    ) -> Dict[str, Any]:
        """Evaluate every present function for ``state`` into plain data."""
        if state is None:
            state = self.default_state()
        d: Dict[str, Any] = {
            "base_asset_id": self.base_asset_id,
            "entity_root": self.entity_root,
            "controls": [c.to_dict() for c in self.controls],
            "state": state.to_dict(),
        }
        d["base_texture_asset_id"] = (
            self.get_base_texture_asset_id(state)
            if self.get_base_texture_asset_id
            else None
        )
        d["cem_entity_type"] = (
            self.get_cem_entity_type(state).to_dict()
            if self.get_cem_entity_type
            else None
        )
        d["root_transform"] = (
            self.get_root_transform(state).to_dict()
            if self.get_root_transform
            else None
        )
        d["bone_render_overrides"] = (
            _copy_nested(self.get_bone_render_overrides(state))
            if self.get_bone_render_overrides
            else None
        )
        d["bone_input_overrides"] = (
            _copy_nested(self.get_bone_input_overrides(state))
            if self.get_bone_input_overrides
            else None
        )
        d["entity_state_overrides"] = (
            dict(sorted(self.get_entity_state_overrides(state).items()))
            if self.get_entity_state_overrides
            else None
        )
        d["part_texture_overrides"] = (
            dict(sorted(self.get_part_texture_overrides(state).items()))
            if self.get_part_texture_overrides
            else None
        )
        d["layers"] = [layer.to_dict() for layer in self.get_active_layers(state)]
        return d
