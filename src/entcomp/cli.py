"""Command line interface for entcomp."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import yaml

from .api import (
    is_entity_feature_layer_texture_asset_id,
    resolve_entity_composite_schema,
    scan_universe,
)
from .layers.base_lookup import find_likely_base_entity
from .loader import load_asset_universe, load_state
from .logging import configure_logging, get_logger, step
from .reporting import (
    REPORTERS,
    PlainReporter,
    get_reporter,
    set_reporter,
    set_verbosity,
)
from .schema.models import EntityFeatureStateView
from .schema.validator import run_validation_pipeline

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}

# Host-side input problems reported as a single error line.
_LOAD_ERRORS = (FileNotFoundError, ValueError, yaml.YAMLError)


def _key_value(text: str) -> Tuple[str, str]:
    key, sep, value = text.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got '{text}'")
    return key, value


def _toggle_arg(text: str) -> Tuple[str, bool]:
    key, value = _key_value(text)
    v = value.strip().lower()
    if v in _TRUE:
        return key, True
    if v in _FALSE:
        return key, False
    raise argparse.ArgumentTypeError(f"toggle '{key}' needs true/false, got '{value}'")


def _merge_state(
    base: EntityFeatureStateView, overlay: EntityFeatureStateView
) -> EntityFeatureStateView:
    toggles = dict(base.toggles)
    toggles.update({k: v for k, v in overlay.toggles.items() if v is not None})
    selects = dict(base.selects)
    selects.update({k: v for k, v in overlay.selects.items() if v is not None})
    return EntityFeatureStateView(toggles, selects)


def _emit_json(obj: object) -> None:
    # finish any progress UI before writing to stdout
    get_reporter().flush()
    print(json.dumps(obj, indent=2, sort_keys=True))


def _classify_cmd(args: argparse.Namespace) -> int:
    universe: List[str] = []
    if args.assets is not None:
        try:
            universe = load_asset_universe(args.assets)
        except _LOAD_ERRORS as e:
            get_reporter().error(f"Cannot load asset list: {e}")
            return 1
    rep = get_reporter()
    rows = []
    for asset_id in args.ids:
        is_layer = is_entity_feature_layer_texture_asset_id(asset_id)
        base = find_likely_base_entity(asset_id, universe) if is_layer else None
        rows.append({"asset_id": asset_id, "layer": is_layer, "base": base})
        if not args.json:
            kind = "layer" if is_layer else "standalone"
            suffix = f" base={base}" if base else ""
            rep.status(f"{asset_id}: {kind}{suffix}")
    layers = sum(1 for r in rows if r["layer"])
    rep.status(f"Classify summary: ids={len(rows)} layers={layers}")
    if args.json:
        _emit_json(rows)
    return 0


def _resolve_cmd(args: argparse.Namespace) -> int:
    rep = get_reporter()
    step(f"loading asset list {args.assets}")
    try:
        universe = load_asset_universe(args.assets)
        file_state = (
            load_state(args.state) if args.state is not None else EntityFeatureStateView()
        )
    except _LOAD_ERRORS as e:
        rep.error(f"Cannot load input: {e}")
        return 1
    schema = resolve_entity_composite_schema(args.id, universe)
    if schema is None:
        rep.warning(f"No composable features for {args.id}")
        rep.status(f"Resolve summary: id={args.id} controls=0 layers=0")
        return 1

    overrides = EntityFeatureStateView(dict(args.toggle), dict(args.select))
    state = _merge_state(_merge_state(schema.default_state(), file_state), overrides)
    requested = [
        *file_state.toggles,
        *file_state.selects,
        *overrides.toggles,
        *overrides.selects,
    ]
    for control_id in requested:
        if schema.control(control_id) is None:
            rep.warning(f"Unknown control '{control_id}' ignored by {schema.base_asset_id}")

    findings = run_validation_pipeline(schema, universe, state)
    for f in findings:
        rep.warning(f"{f.code} {f.path}: {f.message}")

    snapshot = schema.snapshot(state)
    if args.json:
        _emit_json(snapshot)
    else:
        rep.section("Controls")
        for c in schema.controls:
            value = state.toggles.get(c.id, state.selects.get(c.id))
            rep.status(f"{c.id} ({c.kind}) = {value}")
        rep.section("Layers")
        for layer in snapshot["layers"]:
            rep.status(
                f"{layer['z_index']:>4} {layer['id']} {layer['kind']} {layer['texture']}"
            )
    rep.status(
        "Resolve summary: "
        + f"id={schema.base_asset_id} controls={len(schema.controls)} "
        + f"layers={len(snapshot['layers'])} findings={len(findings)}"
    )
    return 1 if findings else 0


def _scan_cmd(args: argparse.Namespace) -> int:
    try:
        universe = load_asset_universe(args.assets)
    except _LOAD_ERRORS as e:
        get_reporter().error(f"Cannot load asset list: {e}")
        return 1
    get_logger().info("Scanning %d asset ids", len(universe))
    result = scan_universe(universe)
    if args.json:
        _emit_json(result.to_dict())
    else:
        rep = get_reporter()
        rep.section("Composable entities")
        for entry in result.composable:
            rep.status(
                f"{entry.asset_id} controls={entry.controls} layers={entry.layers}"
            )
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="entcomp", description="Entity composite resolution tool"
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (repeatable)",
    )
    p.add_argument(
        "-r",
        "--reporter",
        choices=sorted(REPORTERS),
        default="plain",
        help="Select reporter backend: plain (default), rich, json (JSONL events), silent",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    c = sub.add_parser("classify", help="Classify texture ids as layer or standalone")
    c.add_argument("ids", nargs="+")
    c.add_argument("--assets", type=Path, help="Asset list used for base lookup")
    c.add_argument("--json", action="store_true", help="Emit JSON rows")
    c.set_defaults(func=_classify_cmd)

    r = sub.add_parser("resolve", help="Resolve the composite schema of one id")
    r.add_argument("id")
    r.add_argument("--assets", type=Path, required=True)
    r.add_argument("--state", type=Path, help="JSON/YAML {toggles, selects}")
    r.add_argument(
        "--toggle",
        type=_toggle_arg,
        action="append",
        default=[],
        metavar="ID=BOOL",
    )
    r.add_argument(
        "--select",
        type=_key_value,
        action="append",
        default=[],
        metavar="ID=VALUE",
    )
    r.add_argument("--json", action="store_true", help="Emit JSON snapshot")
    r.set_defaults(func=_resolve_cmd)

    s = sub.add_parser("scan", help="Resolve every standalone entity in a list")
    s.add_argument("--assets", type=Path, required=True)
    s.add_argument("--json", action="store_true", help="Emit JSON scan result")
    s.set_defaults(func=_scan_cmd)

    return p


def _make_reporter(requested: str):
    if requested == "rich" and not sys.stderr.isatty():
        # fall back quietly to plain if no TTY
        return PlainReporter()
    return REPORTERS[requested]()


def main(argv: Optional[List[str]] = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    set_reporter(_make_reporter(args.reporter))
    set_verbosity(args.verbose)
    configure_logging(args.verbose)
    try:
        return args.func(args)
    finally:
        get_reporter().flush()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
