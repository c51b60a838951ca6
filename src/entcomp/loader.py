"""Asset-universe and state loading utilities (JSON/YAML/text) for entcomp."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List

import yaml

from .schema.models import EntityFeatureStateView

__all__ = ["load_asset_universe", "load_state", "parse_asset_list"]

_YAML_SUFFIXES = {".yaml", ".yml"}
_JSON_SUFFIXES = {".json"}


def _read_structured(p: Path, text: str) -> Any:
    if p.suffix.lower() in _YAML_SUFFIXES:
        return yaml.safe_load(text)
    return json.loads(text)


def parse_asset_list(text: str) -> List[str]:
    """One id per line; blank lines and ``#`` comments are skipped."""
    ids: List[str] = []
    for line in text.splitlines():
        line = line.split("#", 1)[0].strip()
        if line:
            ids.append(line)
    return ids


def _coerce_ids(data: Any, p: Path) -> List[str]:
    if isinstance(data, dict):
        data = data.get("assets")
    if not isinstance(data, list):
        raise ValueError(f"{p}: expected a list of asset ids or an 'assets' list")
    bad = [x for x in data if not isinstance(x, str)]
    if bad:
        raise ValueError(f"{p}: asset ids must be strings, got {bad[0]!r}")
    return list(data)


def load_asset_universe(path: str | Path) -> List[str]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(p)
    text = p.read_text(encoding="utf-8")
    if p.suffix.lower() in _YAML_SUFFIXES | _JSON_SUFFIXES:
        return _coerce_ids(_read_structured(p, text), p)
    return parse_asset_list(text)


def load_state(path: str | Path) -> EntityFeatureStateView:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(p)
    data = _read_structured(p, p.read_text(encoding="utf-8"))
    if data is None:
        return EntityFeatureStateView()
    if not isinstance(data, dict):
        raise ValueError("Root of state file must be an object")
    return EntityFeatureStateView.from_mapping(data)
