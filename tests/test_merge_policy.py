from __future__ import annotations

import pytest

from entcomp import resolve_entity_composite_schema, resolver
from entcomp.handlers.base import HandlerResult, toggle
from entcomp.schema import (
    CemEntityType,
    EntityFeatureStateView,
    clone_texture_layer,
)
from universe_helper import UNIVERSE, eid

STATE = EntityFeatureStateView()


def first(ctx):
    return HandlerResult(
        controls=[toggle("x.shared", "First"), toggle("x.one", "One")],
        get_base_texture_asset_id=lambda s: "minecraft:entity/first",
        get_bone_render_overrides=lambda s: {"head": {"visible": False}},
        get_entity_state_overrides=lambda s: {"a": 1, "b": 1},
        get_layer_contributions=lambda s: [
            clone_texture_layer("top", "Top", ctx.base_asset_id, z_index=50)
        ],
    )


def second(ctx):
    return HandlerResult(
        controls=[toggle("x.shared", "Second", True), toggle("x.two", "Two")],
        get_base_texture_asset_id=lambda s: "minecraft:entity/second",
        get_cem_entity_type=lambda s: CemEntityType("second"),
        get_bone_render_overrides=lambda s: {
            "head": {"visible": True},
            "body": {"visible": False},
        },
        get_entity_state_overrides=lambda s: {"b": 2},
        get_layer_contributions=lambda s: [
            clone_texture_layer("bottom", "Bottom", ctx.base_asset_id, z_index=10),
            clone_texture_layer("middle", "Middle", ctx.base_asset_id, z_index=50),
        ],
    )


def nothing(ctx):
    return None


def empty(ctx):
    return HandlerResult()


@pytest.fixture()
def fake_chain(monkeypatch):
    def install(universal, handlers):
        monkeypatch.setattr(resolver, "UNIVERSAL_FEATURES", universal)
        monkeypatch.setattr(resolver, "ENTITY_HANDLERS", handlers)

    return install


def test_first_control_id_wins(fake_chain):
    fake_chain([first], [nothing, second])
    schema = resolve_entity_composite_schema(eid("creeper/creeper"), UNIVERSE)
    assert [c.id for c in schema.controls] == ["x.shared", "x.one", "x.two"]
    assert schema.control("x.shared").label == "First"
    assert schema.default_state().toggles["x.shared"] is False


def test_last_scalar_wins(fake_chain):
    fake_chain([first], [second])
    schema = resolve_entity_composite_schema(eid("creeper/creeper"), UNIVERSE)
    assert schema.get_base_texture_asset_id(STATE) == "minecraft:entity/second"
    assert schema.get_cem_entity_type(STATE).entity_type == "second"
    assert schema.get_root_transform is None


def test_maps_are_composed(fake_chain):
    fake_chain([first], [second])
    schema = resolve_entity_composite_schema(eid("creeper/creeper"), UNIVERSE)
    assert schema.get_bone_render_overrides(STATE) == {
        "head": {"visible": True},
        "body": {"visible": False},
    }
    assert schema.get_entity_state_overrides(STATE) == {"a": 1, "b": 2}
    assert schema.get_part_texture_overrides is None


def test_layers_sorted_stably(fake_chain):
    fake_chain([first], [second])
    schema = resolve_entity_composite_schema(eid("creeper/creeper"), UNIVERSE)
    assert [layer.id for layer in schema.get_active_layers(STATE)] == [
        "bottom",
        "top",
        "middle",
    ]


def test_no_controls_means_no_schema(fake_chain):
    fake_chain([empty], [nothing, empty])
    assert resolve_entity_composite_schema(eid("creeper/creeper"), UNIVERSE) is None


def test_empty_layer_list_when_nobody_contributes(fake_chain):
    fake_chain([], [lambda ctx: HandlerResult(controls=[toggle("x.t", "T")])])
    schema = resolve_entity_composite_schema(eid("creeper/creeper"), UNIVERSE)
    assert schema.get_active_layers(STATE) == []
    assert schema.get_base_texture_asset_id is None


def test_handlers_see_resolved_base(fake_chain):
    seen = []

    def spy(ctx):
        seen.append((ctx.base_asset_id, ctx.selected_asset_id, ctx.folder_root))
        return None

    fake_chain([spy], [])
    assert resolve_entity_composite_schema(eid("bee/bee_angry"), UNIVERSE) is None
    assert seen == [(eid("bee/bee"), eid("bee/bee_angry"), "bee")]


def test_duplicate_control_across_real_handlers():
    schema = resolve_entity_composite_schema(eid("fox/fox"), UNIVERSE)
    ids = [c.id for c in schema.controls]
    assert ids.count("fox.sleeping") == 1
    # the family handler offers it before the generic state handler
    assert schema.control("fox.sleeping").description is None


def test_fallback_runs_only_when_unclaimed(fake_chain, monkeypatch):
    monkeypatch.setattr(resolver, "FALLBACK_HANDLERS", frozenset({second}))
    fake_chain([], [first, second])
    claimed = resolve_entity_composite_schema(eid("creeper/creeper"), UNIVERSE)
    assert [c.id for c in claimed.controls] == ["x.shared", "x.one"]
    assert claimed.get_base_texture_asset_id(STATE) == "minecraft:entity/first"
    fake_chain([], [nothing, second])
    unclaimed = resolve_entity_composite_schema(eid("creeper/creeper"), UNIVERSE)
    assert [c.id for c in unclaimed.controls] == ["x.shared", "x.two"]
