"""Simulation layer: step engine, state, scheduler, and headless runs."""

from turmites.simulation.engine import run_simulation
from turmites.simulation.scheduler import (
    RunState,
    Scheduler,
    SchedulerStats,
    map_speed,
    run_realtime,
)
from turmites.simulation.state import Invalidation, SimulationState, place_ants
from turmites.simulation.step import lookup_rule, step_ant, step_tick

__all__ = [
    "Invalidation",
    "RunState",
    "Scheduler",
    "SchedulerStats",
    "SimulationState",
    "lookup_rule",
    "map_speed",
    "place_ants",
    "run_realtime",
    "run_simulation",
    "step_ant",
    "step_tick",
]
