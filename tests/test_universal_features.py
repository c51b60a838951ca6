from __future__ import annotations

from entcomp import resolve_entity_composite_schema
from entcomp.schema import EntityFeatureStateView
from universe_helper import UNIVERSE, eid


def _layers(schema, toggles=None, selects=None):
    state = EntityFeatureStateView(toggles or {}, selects or {})
    return schema.get_active_layers(state)


def test_glowing_eyes_default_on():
    schema = resolve_entity_composite_schema(eid("enderman/enderman"), UNIVERSE)
    assert schema is not None
    control = schema.control("feature.glowing_eyes")
    assert control.kind == "toggle" and control.default_value is True
    (layer,) = _layers(schema)
    assert layer.id == "glowing_eyes"
    assert layer.kind == "cloneTexture"
    assert layer.blend == "additive"
    assert layer.z_index == 200
    assert layer.texture_asset_id == eid("enderman/enderman_eyes")
    assert layer.material_mode.kind == "emissive"
    assert _layers(schema, {"feature.glowing_eyes": False}) == []


def test_selecting_the_eyes_layer_resolves_its_owner():
    schema = resolve_entity_composite_schema(eid("enderman/enderman_eyes"), UNIVERSE)
    assert schema.base_asset_id == eid("enderman/enderman")


def test_no_feature_returns_none():
    universe = [eid("enderman/enderman")]
    assert resolve_entity_composite_schema(eid("enderman/enderman"), universe) is None


def test_non_entity_ids_return_none():
    assert resolve_entity_composite_schema("minecraft:block/stone", UNIVERSE) is None
    assert resolve_entity_composite_schema("minecraft:entity/", UNIVERSE) is None


def test_outer_layer():
    schema = resolve_entity_composite_schema(eid("zombie/drowned"), UNIVERSE)
    assert schema.control("feature.outer_layer").default_value is True
    ids = [layer.id for layer in _layers(schema)]
    assert ids == ["outer_layer"]
    assert _layers(schema)[0].texture_asset_id == eid("zombie/drowned_outer_layer")
    assert _layers(schema, {"feature.outer_layer": False}) == []


def test_crackiness_offers_existing_levels():
    schema = resolve_entity_composite_schema(eid("iron_golem/iron_golem"), UNIVERSE)
    control = schema.control("feature.crackiness")
    assert control.kind == "select"
    assert control.default_value == "none"
    assert control.values == ("none", "low", "medium", "high")
    assert _layers(schema) == []
    (layer,) = _layers(schema, selects={"feature.crackiness": "medium"})
    assert layer.id == "crackiness"
    assert layer.z_index == 150
    assert layer.texture_asset_id == eid("iron_golem/iron_golem_crackiness_medium")


def test_crackiness_partial_levels():
    universe = [eid("iron_golem/iron_golem"), eid("iron_golem/iron_golem_crackiness_high")]
    schema = resolve_entity_composite_schema(eid("iron_golem/iron_golem"), universe)
    assert schema.control("feature.crackiness").values == ("none", "high")


def test_creeper_charge():
    schema = resolve_entity_composite_schema(eid("creeper/creeper"), UNIVERSE)
    control = schema.control("creeper.charge")
    assert control.default_value is False
    assert _layers(schema) == []
    (layer,) = _layers(schema, {"creeper.charge": True})
    assert layer.id == "creeper_charge"
    assert layer.kind == "cemModel"
    assert layer.blend == "additive"
    assert layer.cem_entity_type_candidates == ("creeper_charge", "creeper_armor")
    assert layer.material_mode.kind == "energySwirl"
    assert layer.texture_asset_id == eid("creeper/creeper_armor")


def test_creeper_without_armor_texture_has_no_features():
    assert resolve_entity_composite_schema(eid("creeper/creeper"), [eid("creeper/creeper")]) is None
