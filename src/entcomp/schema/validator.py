"""Composite schema validation.

Phases:
 1. controls: descriptor shape, unique ids, defaults among valid values
 2. layers: evaluated for one state; ordering, texture references, ranges

Returns list of ValidationErrorRecord; empty list means success.
"""

from __future__ import annotations
from typing import AbstractSet, Iterable, List, Optional, Sequence

from .models import (
    BLEND_MODES,
    LAYER_KINDS,
    EntityCompositeSchema,
    EntityFeatureControl,
    EntityFeatureStateView,
    EntityLayerDefinition,
    SelectControl,
    ToggleControl,
)


class ValidationErrorRecord:
    def __init__(self, code: str, message: str, path: str = "") -> None:
        self.code = code
        self.message = message
        self.path = path

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "path": self.path}

    def __repr__(self) -> str:  # convenience for tests
        return f"ValidationErrorRecord(code={self.code}, path={self.path}, message={self.message})"


def _err(
    errors: List[ValidationErrorRecord], code: str, message: str, path: str
):
    errors.append(ValidationErrorRecord(code, message, path))


def _controls_phase(
    controls: Sequence[EntityFeatureControl],
) -> List[ValidationErrorRecord]:
    errors: List[ValidationErrorRecord] = []
    seen: set[str] = set()
    for i, c in enumerate(controls):
        path = f"controls[{i}]"
        if c.id in seen:
            _err(errors, "E_DUP_ID", f"Duplicate control id '{c.id}'", path)
        seen.add(c.id)
        if isinstance(c, ToggleControl):
            if not isinstance(c.default_value, bool):
                _err(
                    errors,
                    "E_TYPE",
                    "Toggle default must be a boolean",
                    path + ".default",
                )
        elif isinstance(c, SelectControl):
            values = [o.value for o in c.options]
            if not values:
                _err(errors, "E_OPTIONS", "Select has no options", path)
                continue
            if len(set(values)) != len(values):
                _err(
                    errors,
                    "E_OPTIONS",
                    "Duplicate option values",
                    path + ".options",
                )
            if c.default_value not in values:
                _err(
                    errors,
                    "E_DEFAULT",
                    f"Default '{c.default_value}' is not an option",
                    path + ".default",
                )
        else:
            _err(errors, "E_TYPE", "Unknown control kind", path)
    return errors


def _layers_phase(
    layers: Sequence[EntityLayerDefinition],
    universe: AbstractSet[str],
) -> List[ValidationErrorRecord]:
    errors: List[ValidationErrorRecord] = []
    seen: set[str] = set()
    prev_z: Optional[int] = None
    for i, layer in enumerate(layers):
        path = f"layers[{i}]"
        if layer.id in seen:
            _err(errors, "E_DUP_ID", f"Duplicate layer id '{layer.id}'", path)
        seen.add(layer.id)
        if prev_z is not None and layer.z_index < prev_z:
            _err(
                errors,
                "E_ORDER",
                f"zIndex {layer.z_index} after {prev_z}",
                path + ".z_index",
            )
        prev_z = layer.z_index
        if layer.kind not in LAYER_KINDS:
            _err(errors, "E_TYPE", f"Unknown layer kind '{layer.kind}'", path)
        if layer.blend not in BLEND_MODES:
            _err(
                errors,
                "E_TYPE",
                f"Unknown blend mode '{layer.blend}'",
                path + ".blend",
            )
        if layer.texture_asset_id not in universe:
            _err(
                errors,
                "E_REF",
                f"Texture not in asset universe: {layer.texture_asset_id}",
                path + ".texture",
            )
        if layer.kind == "cemModel" and not layer.cem_entity_type_candidates:
            _err(
                errors,
                "E_CEM",
                "cemModel layer without entity type candidates",
                path + ".cem_entity_type_candidates",
            )
        if not 0.0 <= layer.opacity <= 1.0:
            _err(
                errors,
                "E_RANGE",
                "opacity out of range",
                path + ".opacity",
            )
    return errors


def validate_layers(
    layers: Sequence[EntityLayerDefinition], universe: Iterable[str]
) -> List[ValidationErrorRecord]:
    return _layers_phase(layers, frozenset(universe))


def run_validation_pipeline(
    schema: EntityCompositeSchema,
    universe: Iterable[str],
    state: Optional[EntityFeatureStateView] = None,
) -> List[ValidationErrorRecord]:
    errors: List[ValidationErrorRecord] = []
    errors.extend(_controls_phase(schema.controls))
    if errors:
        return errors  # stop early if controls are malformed
    if state is None:
        state = schema.default_state()
    errors.extend(_layers_phase(schema.get_active_layers(state), frozenset(universe)))
    return errors


__all__ = [
    "run_validation_pipeline",
    "validate_layers",
    "ValidationErrorRecord",
]
