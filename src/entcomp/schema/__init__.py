from .models import (
    SelectOption,
    ToggleControl,
    SelectControl,
    EntityFeatureControl,
    Rgb,
    Vec3,
    MaterialMode,
    EntityLayerDefinition,
    CemEntityType,
    RootTransform,
    EntityFeatureStateView,
    EntityCompositeSchema,
    clone_texture_layer,
    cem_model_layer,
    ALL_BONES,
)
from .validator import (
    ValidationErrorRecord,
    run_validation_pipeline,
    validate_layers,
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
    "clone_texture_layer",
    "cem_model_layer",
    "ALL_BONES",
    "ValidationErrorRecord",
    "run_validation_pipeline",
    "validate_layers",
]
