from __future__ import annotations

from entcomp import resolve_entity_composite_schema
from entcomp.handlers.donkey import CHEST_BONES
from entcomp.handlers.horse import HORSE_SADDLE_BONES
from entcomp.handlers.llama import LLAMA_CHEST_BONES
from entcomp.schema import EntityFeatureStateView
from universe_helper import UNIVERSE, eid


def _resolve(path: str):
    schema = resolve_entity_composite_schema(eid(path), UNIVERSE)
    assert schema is not None, path
    return schema


def _state(toggles=None, selects=None) -> EntityFeatureStateView:
    return EntityFeatureStateView(toggles or {}, selects or {})


def _layer_ids(schema, toggles=None, selects=None):
    return [layer.id for layer in schema.get_active_layers(_state(toggles, selects))]


class TestHorse:
    def test_controls(self):
        schema = _resolve("horse/horse_black")
        coat = schema.control("horse.coat")
        assert coat.default_value == "horse_black"
        assert coat.values == ("horse_black", "horse_brown", "horse_white")
        assert [o.label for o in coat.options] == ["Black", "Brown", "White"]
        markings = schema.control("horse.markings")
        assert markings.label == "Spot Type"
        assert markings.values == (
            "none",
            "horse_markings_blackdots",
            "horse_markings_white",
        )
        assert schema.control("horse.armor").values == ("none", "diamond", "iron")
        assert schema.control("horse.saddle").default_value is False
        assert schema.control("horse.rider").default_value is False

    def test_coat_swaps_base_texture(self):
        schema = _resolve("horse/horse_black")
        assert schema.get_base_texture_asset_id(_state()) == eid("horse/horse_black")
        white = _state(selects={"horse.coat": "horse_white"})
        assert schema.get_base_texture_asset_id(white) == eid("horse/horse_white")

    def test_saddle_and_rider(self):
        schema = _resolve("horse/horse_brown")
        off = schema.get_bone_render_overrides(_state())
        assert all(off[b] == {"visible": False} for b in HORSE_SADDLE_BONES)
        saddled = _state({"horse.saddle": True, "horse.rider": True})
        on = schema.get_bone_render_overrides(saddled)
        assert all(on[b] == {"visible": True} for b in HORSE_SADDLE_BONES)
        assert schema.get_entity_state_overrides(saddled)["is_ridden"] is True
        (saddle,) = schema.get_active_layers(saddled)
        assert saddle.id == "horse_saddle"
        assert saddle.allow_vanilla_fallback is False
        assert saddle.bone_alias_map["headpiece"] == "head"
        assert saddle.bone_alias_map["saddle"] == "body"
        assert saddle.texture_asset_id == eid("equipment/horse_saddle/saddle")

    def test_layer_order(self):
        schema = _resolve("horse/horse_brown")
        ids = _layer_ids(
            schema,
            {"horse.saddle": True},
            {"horse.markings": "horse_markings_white", "horse.armor": "iron"},
        )
        assert ids == ["horse_markings", "horse_saddle", "horse_armor"]

    def test_markings_layer_resolves_to_preferred_coat(self):
        schema = _resolve("horse/horse_markings_white")
        assert schema.base_asset_id == eid("horse/horse_brown")
        assert schema.control("horse.coat").default_value == "horse_brown"


class TestVillager:
    def test_defaults(self):
        schema = _resolve("villager/villager")
        assert schema.control("villager.type").default_value == "plains"
        assert schema.control("villager.type").values == ("none", "desert", "plains")
        assert schema.control("villager.profession").default_value == "none"
        assert schema.control("villager.level").default_value == "none"
        (layer,) = schema.get_active_layers(_state())
        assert layer.id == "villager_type"
        assert layer.texture_asset_id == eid("villager/type/plains")
        assert layer.label == "Villager Type"

    def test_each_select_adds_one_layer(self):
        schema = _resolve("villager/villager")
        layers = schema.get_active_layers(
            _state(selects={"villager.profession": "farmer", "villager.level": "iron"})
        )
        assert [(layer.id, layer.z_index) for layer in layers] == [
            ("villager_type", 80),
            ("villager_profession", 90),
            ("villager_level", 95),
        ]
        assert layers[2].texture_asset_id == eid("villager/profession_level/iron")
        assert _layer_ids(schema, selects={"villager.type": "none"}) == []

    def test_level_labels(self):
        schema = _resolve("villager/villager")
        labels = {o.value: o.label for o in schema.control("villager.level").options}
        assert labels == {"none": "None", "iron": "Iron", "stone": "Stone"}

    def test_zombie_villager(self):
        schema = _resolve("zombie_villager/profession/farmer")
        assert schema.base_asset_id == eid("zombie_villager/zombie_villager")
        assert schema.control("zombie_villager.type").label == "Zombie Villager Type"
        assert schema.control("zombie_villager.level") is None
        assert _layer_ids(
            schema, selects={"zombie_villager.profession": "farmer"}
        ) == ["zombie_villager_type", "zombie_villager_profession"]


class TestFox:
    def test_type_and_sleeping(self):
        schema = _resolve("fox/fox")
        assert schema.control("fox.type").values == ("red", "snow")
        assert schema.control("fox.type").default_value == "red"
        assert schema.control("fox.sleeping").default_value is False
        assert schema.get_base_texture_asset_id(_state()) == eid("fox/fox")
        asleep = _state({"fox.sleeping": True})
        assert schema.get_base_texture_asset_id(asleep) == eid("fox/fox_sleep")
        snow_asleep = _state({"fox.sleeping": True}, {"fox.type": "snow"})
        assert schema.get_base_texture_asset_id(snow_asleep) == eid("fox/snow_fox_sleep")
        assert schema.get_entity_state_overrides(asleep)["is_sleeping"] is True

    def test_defaults_follow_selected_texture(self):
        schema = _resolve("fox/snow_fox_sleep")
        assert schema.control("fox.type").default_value == "snow"
        assert schema.control("fox.sleeping").default_value is True
        assert schema.get_base_texture_asset_id(schema.default_state()) == eid(
            "fox/snow_fox_sleep"
        )

    def test_sleeping_toggle_offered_once(self):
        schema = _resolve("fox/fox")
        ids = [c.id for c in schema.controls]
        assert ids.count("fox.sleeping") == 1

    def test_owns_base_texture_in_a_plain_variant_folder(self):
        universe = [eid("fox/fox"), eid("fox/fox_sleep"), eid("fox/snow_fox")]
        schema = resolve_entity_composite_schema(eid("fox/fox"), universe)
        assert schema.control("entity.variant") is None
        asleep = _state({"fox.sleeping": True})
        assert schema.get_base_texture_asset_id(asleep) == eid("fox/fox_sleep")
        snow = _state(selects={"fox.type": "snow"})
        assert schema.get_base_texture_asset_id(snow) == eid("fox/snow_fox")


class TestLlama:
    def test_coat_decor_chest(self):
        schema = _resolve("llama/gray")
        coat = schema.control("llama.coat")
        assert coat.values == ("brown", "creamy", "gray", "white")
        assert coat.default_value == "gray"
        assert schema.control("llama.decor").values == ("none", "blue", "red")
        white = _state(selects={"llama.coat": "white"})
        assert schema.get_base_texture_asset_id(white) == eid("llama/white")
        hidden = schema.get_bone_render_overrides(_state())
        assert all(hidden[b] == {"visible": False} for b in LLAMA_CHEST_BONES)
        assert schema.get_bone_render_overrides(_state({"llama.chest": True})) == {}
        (decor,) = schema.get_active_layers(_state(selects={"llama.decor": "red"}))
        assert decor.id == "llama_decor"
        assert decor.texture_asset_id == eid("equipment/llama_body/red")
        assert decor.sync_to_base_pose is True

    def test_coat_not_shadowed_by_color_variant(self):
        universe = [eid("llama/white"), eid("llama/brown"), eid("llama/gray")]
        schema = resolve_entity_composite_schema(eid("llama/white"), universe)
        assert [c.id for c in schema.controls] == ["llama.coat", "llama.chest"]
        brown = _state(selects={"llama.coat": "brown"})
        assert schema.get_base_texture_asset_id(brown) == eid("llama/brown")


class TestDonkeyMule:
    def test_donkey_saddle_and_chest(self):
        schema = _resolve("horse/donkey")
        assert [c.id for c in schema.controls] == ["donkey.saddle", "donkey.chest"]
        hidden = schema.get_bone_render_overrides(_state())
        assert all(hidden[b] == {"visible": False} for b in CHEST_BONES)
        assert schema.get_bone_render_overrides(_state({"donkey.chest": True})) == {}
        saddled = _state({"donkey.saddle": True})
        assert schema.get_entity_state_overrides(saddled) == {"is_ridden": True}
        (saddle,) = schema.get_active_layers(saddled)
        assert saddle.id == "donkey_saddle"
        assert saddle.cem_entity_type_candidates == ("donkey_saddle",)

    def test_mule_without_saddle_texture(self):
        schema = _resolve("horse/mule")
        assert [c.id for c in schema.controls] == ["mule.chest"]
        assert schema.get_entity_state_overrides is None
        assert schema.get_active_layers(_state({"mule.chest": True})) == []


def test_armadillo_pose_groups():
    schema = _resolve("armadillo/armadillo")
    assert schema.control("armadillo.pose").values == ("unrolled", "rolled")
    unrolled = schema.get_bone_render_overrides(_state())
    assert unrolled["body"] == {"visible": True}
    assert unrolled["cube"] == {"visible": False}
    rolled_state = _state(selects={"armadillo.pose": "rolled"})
    rolled = schema.get_bone_render_overrides(rolled_state)
    assert rolled["body"] == {"visible": False}
    assert rolled["cube"] == {"visible": True}
    assert schema.get_entity_state_overrides(rolled_state)["is_rolled_up"] is True


def test_allay_glow_and_dance():
    schema = _resolve("allay/allay")
    (glow,) = schema.get_active_layers(_state())
    assert glow.id == "allay_glow"
    assert glow.texture_asset_id == eid("allay/allay")
    assert glow.material_mode.intensity == 0.4
    assert schema.get_active_layers(_state({"allay.glow": False})) == []
    dancing = _state({"allay.dancing": True})
    assert schema.get_entity_state_overrides(dancing)["is_dancing"] is True


def test_camel_saddle_pose_rider():
    schema = _resolve("camel/camel")
    state = _state({"camel.saddle": True, "camel.rider": True}, {"camel.pose": "sitting"})
    overrides = schema.get_entity_state_overrides(state)
    assert overrides["is_sitting"] is True
    assert overrides["is_ridden"] is True
    assert _layer_ids(schema, {"camel.saddle": True}) == ["camel_saddle"]
    assert _layer_ids(schema) == []


def test_happy_ghast_harness():
    schema = _resolve("happy_ghast/happy_ghast")
    color = schema.control("happy_ghast.harness_color")
    assert color.values == ("black", "brown")
    assert color.default_value == "brown"
    assert _layer_ids(schema) == []
    (harness,) = schema.get_active_layers(_state({"happy_ghast.harness": True}))
    assert harness.texture_asset_id == eid("equipment/happy_ghast_body/brown_harness")
    black = _state({"happy_ghast.harness": True}, {"happy_ghast.harness_color": "black"})
    (harness,) = schema.get_active_layers(black)
    assert harness.texture_asset_id == eid("equipment/happy_ghast_body/black_harness")


def test_piglin_armor():
    schema = _resolve("piglin/piglin")
    material = schema.control("mob_armor.material")
    assert material.values == ("chainmail", "diamond")
    assert material.default_value == "diamond"
    assert _layer_ids(schema) == []
    armored = _state({"mob_armor.enabled": True, "mob_armor.show_helmet": False})
    layers = schema.get_active_layers(armored)
    assert [layer.id for layer in layers] == ["mob_armor_layer_2", "mob_armor_layer_1"]
    assert layers[1].texture_asset_id == eid("equipment/humanoid/diamond")
    assert layers[1].bone_render_overrides["*"] == {"visible": False}
    assert "head" not in layers[1].bone_render_overrides
    assert layers[1].bone_render_overrides["body"] == {"visible": True}


def test_zombified_piglin_has_no_armor_controls():
    schema = _resolve("piglin/zombified_piglin")
    assert schema.control("mob_armor.enabled") is None


def test_breeze_wind_layers():
    schema = _resolve("breeze/breeze")
    both = _state({"breeze.wind": True, "breeze.wind_charge": True})
    layers = schema.get_active_layers(both)
    assert [(layer.id, layer.z_index) for layer in layers] == [
        ("breeze_wind", 170),
        ("breeze_wind_charge", 175),
    ]
    assert all(layer.blend == "additive" for layer in layers)
    assert layers[1].texture_asset_id == eid("breeze/wind_charge")
