from __future__ import annotations

import json

import pytest

from entcomp.cli import main
from universe_helper import UNIVERSE, eid


@pytest.fixture()
def assets_file(tmp_path):
    p = tmp_path / "assets.txt"
    p.write_text("\n".join(UNIVERSE) + "\n", encoding="utf-8")
    return p


def test_resolve_json_with_override(assets_file, capsys):
    rc = main(
        [
            "resolve",
            eid("bee/bee"),
            "--assets",
            str(assets_file),
            "--toggle",
            "bee.angry=true",
            "--json",
        ]
    )
    assert rc == 0
    snap = json.loads(capsys.readouterr().out)
    assert snap["base_texture_asset_id"] == eid("bee/bee_angry")
    assert snap["state"]["toggles"]["bee.angry"] is True


def test_resolve_text_output(assets_file, capsys):
    rc = main(["resolve", eid("sheep/sheep"), "--assets", str(assets_file)])
    assert rc == 0
    err = capsys.readouterr().err
    assert "[Controls]" in err
    assert "sheep.coat_state (select) = full" in err
    assert "Resolve summary: id=" + eid("sheep/sheep") in err


def test_resolve_state_file_and_unknown_control(assets_file, tmp_path, capsys):
    state = tmp_path / "state.json"
    state.write_text(
        json.dumps({"selects": {"sheep.coat_state": "bare"}, "toggles": {"nope": True}}),
        encoding="utf-8",
    )
    rc = main(
        [
            "resolve",
            eid("sheep/sheep"),
            "--assets",
            str(assets_file),
            "--state",
            str(state),
            "--json",
        ]
    )
    captured = capsys.readouterr()
    assert rc == 0
    assert json.loads(captured.out)["layers"] == []
    assert "Unknown control 'nope'" in captured.err


def test_resolve_without_features(assets_file, capsys):
    assert main(["resolve", "minecraft:block/stone", "--assets", str(assets_file)]) == 1
    assert "No composable features" in capsys.readouterr().err


def test_missing_asset_list(tmp_path, capsys):
    rc = main(["resolve", eid("bee/bee"), "--assets", str(tmp_path / "none.txt")])
    assert rc == 1
    assert "Cannot load input" in capsys.readouterr().err


def test_bad_toggle_value(assets_file):
    with pytest.raises(SystemExit) as exc:
        main(
            [
                "resolve",
                eid("bee/bee"),
                "--assets",
                str(assets_file),
                "--toggle",
                "bee.angry=maybe",
            ]
        )
    assert exc.value.code == 2


def test_scan_json(assets_file, capsys):
    assert main(["scan", "--assets", str(assets_file), "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["entities"] == len(data["entries"])
    assert data["composable"] <= data["entities"]


def test_classify_json_events(capsys):
    rc = main(
        ["-r", "json", "classify", eid("bee/bee"), eid("bee/bee_angry")]
    )
    assert rc == 0
    events = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    summary = [e for e in events if e["event"] == "summary"]
    assert summary[0]["summary_type"] == "classify"
    assert summary[0]["ids"] == "2"
    assert summary[0]["layers"] == "1"
    messages = [e["message"] for e in events if e["event"] == "status"]
    assert eid("bee/bee") + ": standalone" in messages


def test_classify_with_base_lookup(assets_file, capsys):
    rc = main(
        ["classify", eid("sheep/sheep_wool"), "--assets", str(assets_file), "--json"]
    )
    assert rc == 0
    rows = json.loads(capsys.readouterr().out)
    assert rows == [
        {"asset_id": eid("sheep/sheep_wool"), "layer": True, "base": eid("sheep/sheep")}
    ]
