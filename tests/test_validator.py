from __future__ import annotations

from entcomp.schema import (
    EntityCompositeSchema,
    EntityFeatureStateView,
    EntityLayerDefinition,
    SelectControl,
    SelectOption,
    ToggleControl,
    cem_model_layer,
    clone_texture_layer,
    run_validation_pipeline,
    validate_layers,
)

TEX = "minecraft:entity/cow/cow"
UNIVERSE = [TEX]


def _schema(controls, layers=()):
    return EntityCompositeSchema(
        base_asset_id=TEX,
        entity_root="cow",
        controls=tuple(controls),
        get_active_layers=lambda state: list(layers),
    )


def _codes(errors):
    return [e.code for e in errors]


def test_valid_schema():
    schema = _schema(
        [
            ToggleControl("cow.baby", "Baby", False),
            SelectControl(
                "cow.kind",
                "Kind",
                "a",
                (SelectOption("a", "A"), SelectOption("b", "B")),
            ),
        ],
        [clone_texture_layer("overlay", "Overlay", TEX, z_index=5)],
    )
    assert run_validation_pipeline(schema, UNIVERSE) == []


def test_duplicate_control_stops_early():
    bad_layer = clone_texture_layer("x", "X", "minecraft:entity/missing")
    schema = _schema(
        [ToggleControl("cow.baby", "Baby", False), ToggleControl("cow.baby", "Baby", True)],
        [bad_layer],
    )
    errors = run_validation_pipeline(schema, UNIVERSE)
    assert _codes(errors) == ["E_DUP_ID"]
    assert errors[0].path == "controls[1]"


def test_select_problems():
    schema = _schema(
        [
            SelectControl("a", "A", "x", ()),
            SelectControl(
                "b", "B", "z", (SelectOption("x", "X"), SelectOption("x", "X2"))
            ),
        ]
    )
    assert _codes(run_validation_pipeline(schema, UNIVERSE)) == [
        "E_OPTIONS",
        "E_OPTIONS",
        "E_DEFAULT",
    ]


def test_toggle_default_type():
    schema = _schema([ToggleControl("t", "T", "yes")])
    errors = run_validation_pipeline(schema, UNIVERSE)
    assert _codes(errors) == ["E_TYPE"]
    assert errors[0].path == "controls[0].default"


def test_layer_checks():
    layers = [
        clone_texture_layer("a", "A", TEX, z_index=10),
        clone_texture_layer("b", "B", "minecraft:entity/missing", z_index=5),
        cem_model_layer("c", "C", TEX, [], z_index=20, opacity=1.5),
        EntityLayerDefinition("a", "A2", "sprite", TEX, blend="screen", z_index=30),
    ]
    errors = validate_layers(layers, UNIVERSE)
    assert _codes(errors) == [
        "E_ORDER",
        "E_REF",
        "E_CEM",
        "E_RANGE",
        "E_DUP_ID",
        "E_TYPE",
        "E_TYPE",
    ]
    assert errors[1].to_dict() == {
        "code": "E_REF",
        "message": "Texture not in asset universe: minecraft:entity/missing",
        "path": "layers[1].texture",
    }


def test_layers_evaluated_for_given_state():
    def layers(state):
        if state.toggles.get("t"):
            return [clone_texture_layer("x", "X", "minecraft:entity/missing")]
        return []

    schema = EntityCompositeSchema(
        base_asset_id=TEX,
        entity_root="cow",
        controls=(ToggleControl("t", "T", False),),
        get_active_layers=layers,
    )
    assert run_validation_pipeline(schema, UNIVERSE) == []
    on = EntityFeatureStateView({"t": True}, {})
    assert _codes(run_validation_pipeline(schema, UNIVERSE, on)) == ["E_REF"]
