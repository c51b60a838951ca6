from __future__ import annotations

from entcomp.assets import (
    DirectPath,
    all_leaves_in_set,
    find_asset_id,
    get_direct_entity_dir_and_leaf,
    get_dir_and_leaf,
    get_dye_label,
    get_dye_rgb,
    get_entity_path,
    get_entity_root,
    get_leaf_name,
    get_namespace,
    get_select,
    get_toggle,
    make_asset_id,
    sort_by_preferred_order,
    stable_unique,
    strip_namespace,
    title_label,
    DYE_COLORS,
    DYE_COLOR_IDS,
    WOOD_TYPE_IDS,
)
from entcomp.schema import EntityFeatureStateView, Rgb


def test_namespace_parsing():
    assert get_namespace("mypack:entity/bee/bee") == "mypack"
    assert get_namespace("entity/bee/bee") == "minecraft"
    assert get_namespace(":entity/bee/bee") == "minecraft"
    assert strip_namespace("minecraft:entity/bee/bee") == "entity/bee/bee"
    assert strip_namespace("entity/bee/bee") == "entity/bee/bee"
    assert make_asset_id("minecraft", "entity/cow/cow") == "minecraft:entity/cow/cow"


def test_entity_path_only_for_entity_textures():
    assert get_entity_path("minecraft:entity/bee/bee") == "bee/bee"
    assert get_entity_path("entity/allay/allay") == "allay/allay"
    assert get_entity_path("minecraft:block/stone") is None
    assert get_entity_path("") is None


def test_path_segments():
    assert get_leaf_name("villager/profession/farmer") == "farmer"
    assert get_entity_root("villager/profession/farmer") == "villager"
    assert get_dir_and_leaf("villager/profession/farmer") == (
        "villager/profession",
        "farmer",
    )
    assert get_dir_and_leaf("banner_base") == ("", "banner_base")


def test_direct_dir_and_leaf_requires_two_segments():
    assert get_direct_entity_dir_and_leaf("bed/red") == DirectPath("bed", "red")
    assert get_direct_entity_dir_and_leaf("banner_base") is None
    assert get_direct_entity_dir_and_leaf("villager/type/plains") is None
    assert get_direct_entity_dir_and_leaf("bed/") is None


def test_labels_and_unique():
    assert title_label("light_blue") == "Light Blue"
    assert title_label("dark_oak") == "Dark Oak"
    assert stable_unique(["b", "a", "b"]) == ["a", "b"]


def test_find_asset_id_first_present_candidate():
    universe = {"minecraft:entity/bee/bee", "minecraft:entity/bee/bee_angry"}
    found = find_asset_id("minecraft", ["entity/bee/missing", "entity/bee/bee_angry"], universe)
    assert found == "minecraft:entity/bee/bee_angry"
    assert find_asset_id("minecraft", ["entity/none"], universe) is None


def test_dye_table():
    assert len(DYE_COLORS) == 16
    assert DYE_COLORS[0].id == "white" and DYE_COLORS[-1].id == "black"
    assert get_dye_label("light_gray") == "Light Gray"
    assert get_dye_label("not_a_dye") is None
    assert get_dye_rgb("not_a_dye") == get_dye_rgb("white")
    red = get_dye_rgb("red")
    assert red == Rgb.from_hex(0xB02E26)
    assert all(0.0 <= c <= 1.0 for c in (red.r, red.g, red.b))


def test_closed_sets():
    assert all_leaves_in_set(["red", "blue"], DYE_COLOR_IDS)
    assert not all_leaves_in_set(["red", "tabby"], DYE_COLOR_IDS)
    assert not all_leaves_in_set([], WOOD_TYPE_IDS)
    assert sort_by_preferred_order(["red", "zzz", "white"], ["white", "red"]) == [
        "white",
        "red",
        "zzz",
    ]


def test_state_accessors_fall_back_to_default():
    state = EntityFeatureStateView({"a": True, "b": None}, {"s": "x", "t": None})
    assert get_toggle(state, "a", False) is True
    assert get_toggle(state, "b", True) is True
    assert get_toggle(state, "missing", False) is False
    assert get_select(state, "s", "d") == "x"
    assert get_select(state, "t", "d") == "d"
    assert get_select(state, "missing", "d") == "d"
