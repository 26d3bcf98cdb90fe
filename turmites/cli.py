"""CLI entrypoint for headless runs, real-time runs, and rule-file tooling."""

from __future__ import annotations

import argparse
import json
from dataclasses import asdict
from pathlib import Path
from random import Random

from turmites.config.types import (
    HeadingMode,
    MoveOptions,
    PlacementMode,
    RunConfig,
    SchedulerConfig,
    SimulationConfig,
)
from turmites.domain.presets import DEFAULT_PRESET, PRESETS, get_preset
from turmites.domain.rules import (
    RuleTable,
    decode_rule_json,
    format_rule_table,
    generate_random_rule_table,
    move_choices,
    strip_comment_lines,
    validate_rule_table,
)
from turmites.io.rule_files import load_rule_file
from turmites.simulation.engine import run_simulation
from turmites.simulation.scheduler import map_speed, run_realtime
from turmites.simulation.state import SimulationState
from turmites.viz.render import render_run_directory

# ---------------------------------------------------------------------------
# CLI parsing helpers
# ---------------------------------------------------------------------------


def _parse_placement(raw: str) -> PlacementMode:
    """Parse CLI placement value into PlacementMode enum."""
    try:
        return PlacementMode(raw)
    except ValueError as exc:
        valid = ", ".join(mode.value for mode in PlacementMode)
        raise ValueError(f"placement must be one of {valid}") from exc


def _parse_heading(raw: str) -> HeadingMode:
    """Parse CLI heading value into HeadingMode enum."""
    try:
        return HeadingMode(raw)
    except ValueError as exc:
        valid = ", ".join(mode.value for mode in HeadingMode)
        raise ValueError(f"heading must be one of {valid}") from exc


def _move_options(args: argparse.Namespace) -> MoveOptions:
    return MoveOptions(
        use_relative=not args.no_relative,
        use_absolute=args.absolute,
        use_random=args.random_moves,
    )


def _resolve_rules(args: argparse.Namespace) -> tuple[RuleTable, str | None]:
    """Pick the shared table: rule file, random generation, or a preset."""
    if args.rules_file is not None:
        table = load_rule_file(args.rules_file)
        if table is None:
            raise ValueError(f"rules file is not a valid rule table: {args.rules_file}")
        return table, None
    if args.random_states is not None or args.random_colors is not None:
        rng = Random(args.seed)
        table = generate_random_rule_table(
            args.random_states or 1,
            args.random_colors or 2,
            move_choices(_move_options(args)),
            rng,
        )
        return table, None
    preset = get_preset(args.preset)
    return preset.rules, preset.name


def _sim_config(args: argparse.Namespace) -> SimulationConfig:
    return SimulationConfig(
        ant_count=args.ants,
        placement=_parse_placement(args.placement),
        heading=_parse_heading(args.heading),
        per_ant_rules=args.per_ant_rules,
        move_options=_move_options(args),
    )


def _add_simulation_arguments(p: argparse.ArgumentParser) -> None:
    source = p.add_mutually_exclusive_group()
    source.add_argument("--preset", type=str, default=DEFAULT_PRESET, choices=sorted(PRESETS))
    source.add_argument("--rules-file", type=Path, default=None)
    p.add_argument("--random-states", type=int, default=None)
    p.add_argument("--random-colors", type=int, default=None)
    p.add_argument("--no-relative", action="store_true", help="Disable L/R/N/U moves")
    p.add_argument("--absolute", action="store_true", help="Enable ^ > v < moves")
    p.add_argument("--random-moves", action="store_true", help="Enable the ? move")
    p.add_argument("--ants", type=int, default=1)
    p.add_argument("--placement", type=str, default=PlacementMode.CENTER.value)
    p.add_argument("--heading", type=str, default=HeadingMode.NORTH.value)
    p.add_argument("--per-ant-rules", action="store_true")
    p.add_argument("--seed", type=int, default=0)


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------


def _handle_run(args: argparse.Namespace) -> int:
    rules, preset_name = _resolve_rules(args)
    summary = run_simulation(
        rules,
        out_dir=args.out_dir,
        run_config=RunConfig(
            ticks=args.ticks,
            seed=args.seed,
            log_interval=args.log_interval,
            stop_when_halted=not args.keep_running,
        ),
        sim_config=_sim_config(args),
        preset_name=preset_name,
    )
    print(json.dumps(asdict(summary), ensure_ascii=False, indent=2))
    return 0


def _handle_play(args: argparse.Namespace) -> int:
    rules, _ = _resolve_rules(args)
    state = SimulationState(rules, config=_sim_config(args), rng=Random(args.seed))
    stats = run_realtime(state, args.seconds, config=SchedulerConfig(speed=args.speed))
    summary = {
        "speed": args.speed,
        "steps_per_second": map_speed(args.speed),
        "tick_count": state.tick_count,
        "cells_painted": state.grid.size(),
        **asdict(stats),
    }
    print(json.dumps(summary, ensure_ascii=False, indent=2))
    return 0


def _handle_presets(args: argparse.Namespace) -> int:
    listing = {key: preset.name for key, preset in PRESETS.items()}
    print(json.dumps(listing, ensure_ascii=False, indent=2))
    return 0


def _handle_show_rules(args: argparse.Namespace) -> int:
    if args.rules_file is not None:
        table = load_rule_file(args.rules_file)
        if table is None:
            raise ValueError(f"rules file is not a valid rule table: {args.rules_file}")
        print(format_rule_table(table))
    else:
        preset = get_preset(args.preset)
        print(format_rule_table(preset.rules, preset_name=preset.name))
    return 0


def _handle_validate(args: argparse.Namespace) -> int:
    body = strip_comment_lines(Path(args.rules_file).read_text())
    try:
        payload = decode_rule_json(body)
    except ValueError as exc:
        report = {"is_valid": False, "errors": [str(exc)]}
    else:
        result = validate_rule_table(payload)
        report = {"is_valid": result.is_valid, "errors": list(result.errors)}
    print(json.dumps(report, ensure_ascii=False, indent=2))
    return 0 if report["is_valid"] else 1


def _handle_render(args: argparse.Namespace) -> int:
    output = render_run_directory(args.run_dir, args.output, base_dir=args.base_dir)
    print(json.dumps({"output": str(output)}, ensure_ascii=False, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Turmite simulation tools")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("run", help="Run a headless simulation and persist logs")
    p.set_defaults(func=_handle_run)
    _add_simulation_arguments(p)
    p.add_argument("--ticks", type=int, default=1_000)
    p.add_argument("--log-interval", type=int, default=1)
    p.add_argument("--keep-running", action="store_true", help="Do not stop when all ants halt")
    p.add_argument("--out-dir", type=Path, default=Path("data"))

    p = sub.add_parser("play", help="Run the real-time scheduler for a fixed duration")
    p.set_defaults(func=_handle_play)
    _add_simulation_arguments(p)
    p.add_argument("--seconds", type=float, default=2.0)
    p.add_argument("--speed", type=int, default=50)

    p = sub.add_parser("presets", help="List preset rule tables")
    p.set_defaults(func=_handle_presets)

    p = sub.add_parser("show-rules", help="Print a rule table in its editable text form")
    p.set_defaults(func=_handle_show_rules)
    source = p.add_mutually_exclusive_group()
    source.add_argument("--preset", type=str, default=DEFAULT_PRESET, choices=sorted(PRESETS))
    source.add_argument("--rules-file", type=Path, default=None)

    p = sub.add_parser("validate", help="Validate a rule file and list every error")
    p.set_defaults(func=_handle_validate)
    p.add_argument("rules_file", type=Path)

    p = sub.add_parser("render", help="Render a run directory's final grid to PNG")
    p.set_defaults(func=_handle_render)
    p.add_argument("--run-dir", type=Path, required=True)
    p.add_argument("--output", type=Path, required=True)
    p.add_argument("--base-dir", type=Path, default=None)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint with subcommands."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except ValueError as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    raise SystemExit(main())
