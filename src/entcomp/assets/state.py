"""State accessors used by every handler."""

from __future__ import annotations

from ..schema.models import EntityFeatureStateView

__all__ = ["get_toggle", "get_select"]


def get_toggle(state: EntityFeatureStateView, control_id: str, default: bool) -> bool:
    value = state.toggles.get(control_id)
    return default if value is None else bool(value)


def get_select(state: EntityFeatureStateView, control_id: str, default: str) -> str:
    value = state.selects.get(control_id)
    return default if value is None else value
