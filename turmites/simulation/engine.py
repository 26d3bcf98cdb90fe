"""Headless simulation engine: untimed ticks with Parquet and JSON persistence."""

from __future__ import annotations

import json
from pathlib import Path
from random import Random

import pyarrow.parquet as pq

from turmites.config.constants import FLUSH_THRESHOLD
from turmites.config.types import RunConfig, RunSummary, SimulationConfig
from turmites.domain.ant import ant_to_payload
from turmites.domain.rules import RuleTable, rule_table_to_payload
from turmites.io.paths import (
    ant_log_path,
    grid_snapshot_path,
    logs_dir,
    rule_payload_path,
    rules_dir,
)
from turmites.io.schemas import RULE_PAYLOAD_SCHEMA_VERSION
from turmites.simulation.persistence import flush_ant_columns, write_grid_snapshot
from turmites.simulation.state import SimulationState

HALTED = "halted"
"""Termination reason recorded when every ant reached HALT."""


def _deterministic_run_id(preset_name: str | None, seed: int, ant_count: int) -> str:
    """Build a reproducible run ID stable across runs for identical inputs."""
    label = preset_name or "custom"
    safe = "".join(ch if ch.isalnum() else "_" for ch in label)
    return f"{safe}_s{seed}_a{ant_count}"


def _append_ant_rows(
    columns: dict[str, list[int | str]], run_id: str, state: SimulationState
) -> None:
    for ant_id, ant in enumerate(state.ants):
        columns["run_id"].append(run_id)
        columns["tick"].append(state.tick_count)
        columns["ant_id"].append(ant_id)
        columns["x"].append(ant.x)
        columns["y"].append(ant.y)
        columns["heading"].append(int(ant.heading))
        columns["state"].append(ant.state)


def run_simulation(
    rules: RuleTable,
    out_dir: Path,
    run_config: RunConfig | None = None,
    sim_config: SimulationConfig | None = None,
    run_id: str | None = None,
    preset_name: str | None = None,
) -> RunSummary:
    """Run one seeded simulation as fast as possible and persist its artifacts.

    Tick 0 (the initial placement) and every ``log_interval``-th tick are
    logged; the final tick is always logged.
    """
    run_config = run_config or RunConfig()
    sim_config = sim_config or SimulationConfig()
    run_id = run_id or _deterministic_run_id(preset_name, run_config.seed, sim_config.ant_count)

    out_dir = Path(out_dir)
    rules_dir(out_dir).mkdir(parents=True, exist_ok=True)
    logs_dir(out_dir).mkdir(parents=True, exist_ok=True)

    state = SimulationState(
        rules, config=sim_config, rng=Random(run_config.seed), track_changes=False
    )
    initial_ants = [ant_to_payload(ant) for ant in state.ants]
    columns: dict[str, list[int | str]] = {
        "run_id": [],
        "tick": [],
        "ant_id": [],
        "x": [],
        "y": [],
        "heading": [],
        "state": [],
    }
    writer: pq.ParquetWriter | None = None
    termination_reason: str | None = None
    logged_tick = -1

    try:
        _append_ant_rows(columns, run_id, state)
        logged_tick = state.tick_count
        for _ in range(run_config.ticks):
            state.tick()
            if state.tick_count % run_config.log_interval == 0:
                _append_ant_rows(columns, run_id, state)
                logged_tick = state.tick_count
            if len(columns["run_id"]) >= FLUSH_THRESHOLD:
                writer = flush_ant_columns(columns, ant_log_path(out_dir), writer)
            if run_config.stop_when_halted and state.all_halted:
                termination_reason = HALTED
                break
        if logged_tick != state.tick_count:
            _append_ant_rows(columns, run_id, state)
        writer = flush_ant_columns(columns, ant_log_path(out_dir), writer)
    finally:
        if writer is not None:
            writer.close()

    write_grid_snapshot(state.grid, run_id, grid_snapshot_path(out_dir))

    ants_halted = sum(1 for ant in state.ants if ant.halted)
    payload = {
        "run_id": run_id,
        "preset_name": preset_name,
        "table": rule_table_to_payload(rules),
        "private_tables": [
            rule_table_to_payload(ant.rules) if ant.rules is not None else None
            for ant in state.ants
        ],
        "initial_ants": initial_ants,
        "metadata": {
            "seed": run_config.seed,
            "ticks_requested": run_config.ticks,
            "ticks_executed": state.tick_count,
            "log_interval": run_config.log_interval,
            "ant_count": sim_config.ant_count,
            "placement": sim_config.placement.value,
            "heading": sim_config.heading.value,
            "per_ant_rules": sim_config.uses_private_rules,
            "field_width": sim_config.field_width,
            "field_height": sim_config.field_height,
            "cells_painted": state.grid.size(),
            "ants_halted": ants_halted,
            "termination_reason": termination_reason,
            "schema_version": RULE_PAYLOAD_SCHEMA_VERSION,
        },
    }
    rule_payload_path(out_dir, run_id).write_text(
        json.dumps(payload, ensure_ascii=False, indent=2)
    )

    return RunSummary(
        run_id=run_id,
        ticks_executed=state.tick_count,
        cells_painted=state.grid.size(),
        ants_halted=ants_halted,
        termination_reason=termination_reason,
    )
