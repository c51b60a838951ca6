from __future__ import annotations

from typing import List, Optional

from ..assets.state import get_toggle
from ..schema.models import (
    EntityFeatureStateView,
    EntityLayerDefinition,
    MaterialMode,
    cem_model_layer,
)
from .base import HandlerContext, HandlerResult, toggle


def breeze_handler(ctx: HandlerContext) -> Optional[HandlerResult]:
    """Additive wind and wind-charge geometry around the breeze."""
    if ctx.folder_root != "breeze":
        return None

    wind = ctx.find_entity("breeze/breeze_wind", "breeze/wind", "breeze/breeze_air")
    charge = ctx.find_entity("breeze/breeze_wind_charge", "breeze/wind_charge")
    controls = []
    if wind:
        controls.append(toggle("breeze.wind", "Wind", False))
    if charge:
        controls.append(toggle("breeze.wind_charge", "Wind Charge", False))
    if not controls:
        return None

    def layers(state: EntityFeatureStateView) -> List[EntityLayerDefinition]:
        out: List[EntityLayerDefinition] = []
        if wind and get_toggle(state, "breeze.wind", False):
            out.append(
                cem_model_layer(
                    "breeze_wind",
                    "Wind",
                    wind,
                    ["breeze_wind", "breeze_air", "wind"],
                    blend="additive",
                    z_index=170,
                    material_mode=MaterialMode.emissive(0.9),
                )
            )
        if charge and get_toggle(state, "breeze.wind_charge", False):
            out.append(
                cem_model_layer(
                    "breeze_wind_charge",
                    "Wind Charge",
                    charge,
                    ["breeze_wind_charge", "wind_charge"],
                    blend="additive",
                    z_index=175,
                    material_mode=MaterialMode.emissive(1.0),
                )
            )
        return out

    return HandlerResult(controls=controls, get_layer_contributions=layers)
