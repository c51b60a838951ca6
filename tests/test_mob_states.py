from __future__ import annotations

from entcomp import resolve_entity_composite_schema
from entcomp.handlers.mob_states import ANGER_TIME
from entcomp.schema import EntityFeatureStateView
from universe_helper import UNIVERSE, eid


def _wolf():
    schema = resolve_entity_composite_schema(eid("wolf/wolf"), UNIVERSE)
    assert schema is not None
    return schema


def test_wolf_state_controls():
    schema = _wolf()
    ids = [c.id for c in schema.controls]
    for control_id in ("wolf.aggressive", "wolf.baby", "wolf.sitting", "wolf.movement"):
        assert control_id in ids
    assert "wolf.in_water" not in ids
    movement = schema.control("wolf.movement")
    assert movement.values == ("idle", "walking", "running")
    assert movement.default_value == "idle"
    assert schema.control("wolf.baby").description


def test_wolf_default_state():
    schema = _wolf()
    overrides = schema.get_entity_state_overrides(schema.default_state())
    assert overrides == {
        "is_aggressive": False,
        "is_child": False,
        "is_sitting": False,
        "limb_speed": 0.0,
    }


def test_aggressive_sets_anger_timers():
    schema = _wolf()
    state = schema.default_state().with_toggle("wolf.aggressive", True)
    overrides = schema.get_entity_state_overrides(state)
    assert overrides["is_aggressive"] is True
    assert overrides["anger_time"] == ANGER_TIME
    assert overrides["anger_time_start"] == ANGER_TIME


def test_movement_drives_limb_speed():
    schema = _wolf()
    walking = schema.get_entity_state_overrides(
        EntityFeatureStateView({}, {"wolf.movement": "walking"})
    )
    assert walking["limb_speed"] == 0.5
    assert "is_sprinting" not in walking
    running = schema.get_entity_state_overrides(
        EntityFeatureStateView({}, {"wolf.movement": "running"})
    )
    assert running["limb_speed"] == 1.0
    assert running["is_sprinting"] is True


def test_sleeping_only_asserted():
    schema = resolve_entity_composite_schema(eid("cat/tabby"), UNIVERSE)
    overrides = schema.get_entity_state_overrides(schema.default_state())
    assert "is_sleeping" not in overrides
    asleep = schema.get_entity_state_overrides(
        EntityFeatureStateView({"cat.sleeping": True}, {})
    )
    assert asleep["is_sleeping"] is True


def test_water_entity():
    schema = resolve_entity_composite_schema(eid("axolotl/axolotl_blue"), UNIVERSE)
    assert schema.control("axolotl.in_water") is not None
    assert schema.control("axolotl.baby") is not None


def test_entity_without_states():
    schema = resolve_entity_composite_schema(eid("creeper/creeper"), UNIVERSE)
    assert schema.control("creeper.movement") is None
