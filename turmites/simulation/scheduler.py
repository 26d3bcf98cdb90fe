"""Fixed-timestep simulation loop and independent render loop.

Both loops are callbacks re-armed on an event-loop host that exposes
``time()`` (monotonic seconds) and ``call_later(delay, callback)`` returning
a cancellable handle; an ``asyncio`` loop qualifies. Callbacks never run
concurrently, so a tick always completes before the next one is scheduled.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from turmites.config.constants import (
    MAX_STEPS_PER_SECOND,
    MID_STEPS_PER_SECOND,
    MIN_STEPS_PER_SECOND,
    SPEED_CURVE_POWER,
    SPEED_INPUT_MAX,
    SPEED_INPUT_MID,
    SPEED_INPUT_MIN,
)
from turmites.config.types import SchedulerConfig
from turmites.simulation.state import SimulationState


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class LoopHost(Protocol):
    def time(self) -> float: ...

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle: ...


DrawCallback = Callable[[SimulationState, Any], None]
"""Receives the simulation state and the camera passed to the scheduler."""


class RunState(Enum):
    """Process-level run state. Per-ant HALT is independent of it."""

    STOPPED = "stopped"
    RUNNING = "running"
    PAUSED = "paused"


def map_speed(value: float) -> float:
    """Map a normalized speed input (1-100) to target steps per second.

    Linear from the minimum to the midpoint rate over the lower half, then a
    cubic ramp from the midpoint to the maximum rate over the upper half.
    """
    value = max(SPEED_INPUT_MIN, min(SPEED_INPUT_MAX, value))
    if value == SPEED_INPUT_MID:
        return MID_STEPS_PER_SECOND
    if value < SPEED_INPUT_MID:
        fraction = (value - SPEED_INPUT_MIN) / (SPEED_INPUT_MID - SPEED_INPUT_MIN)
        speed = MIN_STEPS_PER_SECOND + fraction * (MID_STEPS_PER_SECOND - MIN_STEPS_PER_SECOND)
        return max(MIN_STEPS_PER_SECOND, speed)
    fraction = (value - SPEED_INPUT_MID) / (SPEED_INPUT_MAX - SPEED_INPUT_MID)
    speed = MID_STEPS_PER_SECOND + fraction**SPEED_CURVE_POWER * (
        MAX_STEPS_PER_SECOND - MID_STEPS_PER_SECOND
    )
    return min(MAX_STEPS_PER_SECOND, speed)


def step_interval(steps_per_second: float) -> float:
    """Seconds between ticks for a target rate."""
    if steps_per_second <= 0:
        raise ValueError("steps_per_second must be > 0")
    return 1.0 / steps_per_second


@dataclass
class SchedulerStats:
    """Counters accumulated across the scheduler's lifetime."""

    wakes: int = 0
    ticks: int = 0
    resyncs: int = 0
    frames: int = 0


class Scheduler:
    """Paces ``SimulationState.tick`` against wall time and drives a draw callback."""

    def __init__(
        self,
        state: SimulationState,
        loop: LoopHost,
        config: SchedulerConfig | None = None,
        draw: DrawCallback | None = None,
        camera: Any = None,
    ) -> None:
        self.state = state
        self.loop = loop
        self.config = config or SchedulerConfig()
        self.draw = draw
        self.camera = camera
        self.stats = SchedulerStats()
        self.next_step_deadline = 0.0
        self.paused_at: float | None = None
        self._interval = step_interval(map_speed(self.config.speed))
        self._run_state = RunState.STOPPED
        self._sim_handle: TimerHandle | None = None
        self._frame_handle: TimerHandle | None = None

    @property
    def run_state(self) -> RunState:
        return self._run_state

    @property
    def interval(self) -> float:
        return self._interval

    def set_speed(self, value: float) -> None:
        """Change the target rate; takes effect from the next deadline advance."""
        self._interval = step_interval(map_speed(value))

    # -- transitions --------------------------------------------------------

    def start(self) -> None:
        """Stopped -> Running: schedule the first tick immediately."""
        if self._run_state is not RunState.STOPPED:
            raise RuntimeError(f"cannot start from {self._run_state.value}")
        self._begin()

    def restart(self) -> None:
        """Re-enter Running with a fresh deadline after a simulation reset."""
        self._cancel_timers()
        self._begin()

    def pause(self) -> None:
        """Running -> Paused: stop both loops and remember when."""
        if self._run_state is not RunState.RUNNING:
            raise RuntimeError(f"cannot pause from {self._run_state.value}")
        self._cancel_timers()
        self.paused_at = self.loop.time()
        self._run_state = RunState.PAUSED

    def resume(self) -> None:
        """Paused -> Running: shift the deadline by the paused duration."""
        if self._run_state is not RunState.PAUSED or self.paused_at is None:
            raise RuntimeError(f"cannot resume from {self._run_state.value}")
        self.next_step_deadline += self.loop.time() - self.paused_at
        self.paused_at = None
        self._run_state = RunState.RUNNING
        self._arm_simulation()
        self._arm_frame(0.0)

    def toggle(self) -> RunState:
        if self._run_state is RunState.RUNNING:
            self.pause()
        else:
            self.resume()
        return self._run_state

    def close(self) -> None:
        """Cancel both loops and return to Stopped (host teardown)."""
        self._cancel_timers()
        self.paused_at = None
        self._run_state = RunState.STOPPED

    # -- loops --------------------------------------------------------------

    def _begin(self) -> None:
        self.paused_at = None
        self.next_step_deadline = self.loop.time()
        self._run_state = RunState.RUNNING
        self.state.invalidation.request_full_redraw()
        self._arm_simulation()
        self._arm_frame(0.0)

    def _arm_simulation(self) -> None:
        delay = max(0.0, self.next_step_deadline - self.loop.time())
        self._sim_handle = self.loop.call_later(delay, self._on_simulation_wake)

    def _arm_frame(self, delay: float) -> None:
        if self.draw is None:
            return
        self._frame_handle = self.loop.call_later(delay, self._on_frame)

    def _cancel_timers(self) -> None:
        if self._sim_handle is not None:
            self._sim_handle.cancel()
            self._sim_handle = None
        if self._frame_handle is not None:
            self._frame_handle.cancel()
            self._frame_handle = None

    def _on_simulation_wake(self) -> None:
        self._sim_handle = None
        if self._run_state is not RunState.RUNNING:
            return
        self.stats.wakes += 1
        now = self.loop.time()
        cap = self.config.max_steps_per_wake
        per_tick = max(1, len(self.state.ants))
        executed = 0
        while now >= self.next_step_deadline and executed < cap:
            self.state.tick()
            self.stats.ticks += 1
            self.next_step_deadline += self._interval
            executed += per_tick
        if executed >= cap:
            self.next_step_deadline = self.loop.time() + self._interval
            self.stats.resyncs += 1
        if self.draw is None:
            # nothing consumes dirty cells without a frame loop
            self.state.invalidation.dirty.clear()
        self._arm_simulation()

    def _on_frame(self) -> None:
        self._frame_handle = None
        if self._run_state is not RunState.RUNNING or self.draw is None:
            return
        self.draw(self.state, self.camera)
        self.stats.frames += 1
        self._arm_frame(self.config.frame_interval)


def run_realtime(
    state: SimulationState,
    seconds: float,
    config: SchedulerConfig | None = None,
    draw: DrawCallback | None = None,
    camera: Any = None,
) -> SchedulerStats:
    """Drive *state* on a private asyncio loop for *seconds* of wall time."""
    if seconds <= 0:
        raise ValueError("seconds must be > 0")
    loop = asyncio.new_event_loop()
    scheduler = Scheduler(state, loop, config=config, draw=draw, camera=camera)
    try:
        scheduler.start()
        loop.call_later(seconds, loop.stop)
        loop.run_forever()
    finally:
        scheduler.close()
        loop.close()
    return scheduler.stats
