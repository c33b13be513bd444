# -*- coding: utf-8 -*-

import math
from dataclasses import dataclass
from typing import Dict, Optional

from domain.models import TimerPhase, TimerSettings

P = TimerPhase

# phase -> phase reached by a short press
SHORT_PRESS_TRANSITIONS: Dict[TimerPhase, TimerPhase] = {
    P.IDLE_WORK: P.RUNNING_WORK,
    P.RUNNING_WORK: P.PAUSED_WORK,
    P.PAUSED_WORK: P.RUNNING_WORK,
    P.IDLE_BREAK: P.RUNNING_BREAK,
    P.RUNNING_BREAK: P.PAUSED_BREAK,
    P.PAUSED_BREAK: P.RUNNING_BREAK,
}

# phase -> phase reached when its countdown hits zero (or is forced to)
COMPLETION_TRANSITIONS: Dict[TimerPhase, TimerPhase] = {
    P.RUNNING_WORK: P.IDLE_BREAK,
    P.PAUSED_WORK: P.IDLE_BREAK,
    P.RUNNING_BREAK: P.IDLE_WORK,
    P.PAUSED_BREAK: P.IDLE_WORK,
}


@dataclass
class EngineSnapshot:
    phase: TimerPhase
    cycle_index: int
    remaining_sec: int
    target_end_ms: Optional[float]

    @property
    def is_running(self) -> bool:
        return self.phase.is_running

    @property
    def is_paused(self) -> bool:
        return self.phase.is_paused

    @property
    def is_idle(self) -> bool:
        return self.phase.is_idle


@dataclass(frozen=True)
class Transition:
    source: TimerPhase
    target: TimerPhase
    completed: bool = False  # a work or break phase ran out


@dataclass(frozen=True)
class TickResult:
    exact_seconds: float  # precise time left, 0.0 once completed
    transition: Optional[Transition] = None


def total_seconds_for_phase(phase: TimerPhase, settings: TimerSettings) -> int:
    return settings.work_seconds if phase.is_work else settings.break_seconds


class TimerEngine:
    """
    Pure six-phase state machine (no scheduling, no I/O).
    Time comes in as wall-clock milliseconds; a running countdown is anchored
    to an absolute deadline, not decremented per tick.
    """

    def __init__(self, settings: Optional[TimerSettings] = None):
        settings = settings or TimerSettings()
        self.phase = P.IDLE_WORK
        self.cycle_index = 0
        self.remaining_sec = settings.work_seconds
        self.target_end_ms: Optional[float] = None

    def snapshot(self) -> EngineSnapshot:
        return EngineSnapshot(
            phase=self.phase,
            cycle_index=self.cycle_index,
            remaining_sec=self.remaining_sec,
            target_end_ms=self.target_end_ms,
        )

    def total_seconds(self, settings: TimerSettings) -> int:
        return total_seconds_for_phase(self.phase, settings)

    # ----- Inputs -----
    def reset(self, settings: TimerSettings) -> Transition:
        source = self.phase
        self.phase = P.IDLE_WORK
        self.cycle_index = 0
        self.remaining_sec = settings.work_seconds
        self.target_end_ms = None
        return Transition(source, self.phase)

    def short_press(self, settings: TimerSettings, now_ms: float) -> Transition:
        source = self.phase
        target = SHORT_PRESS_TRANSITIONS[source]

        if source.is_idle:
            # fresh start of the phase
            self.remaining_sec = total_seconds_for_phase(target, settings)
            self._arm(now_ms)
        elif source.is_running:
            self.remaining_sec = self._seconds_left(now_ms)
            self.target_end_ms = None
        else:
            # resume from whatever was left at pause time
            self._arm(now_ms)

        self.phase = target
        return Transition(source, target)

    def long_press(self, settings: TimerSettings, now_ms: float) -> Transition:
        """Paused: skip to the next phase. Idle or running: full reset."""
        if self.phase.is_paused:
            return self.complete(settings)
        return self.reset(settings)

    def complete(self, settings: TimerSettings) -> Transition:
        source = self.phase
        target = COMPLETION_TRANSITIONS.get(source)
        if target is None:
            # idle phases have no countdown to finish
            return Transition(source, source)

        if not source.is_work:
            # a whole work+break cycle is done
            self.cycle_index = (self.cycle_index + 1) % settings.cycle_count

        self.phase = target
        self.remaining_sec = total_seconds_for_phase(target, settings)
        self.target_end_ms = None
        return Transition(source, target, completed=True)

    def tick(self, settings: TimerSettings, now_ms: float) -> Optional[TickResult]:
        """
        Re-reads the deadline. Returns None when not running.
        """
        if not self.phase.is_running or self.target_end_ms is None:
            return None

        diff_ms = self.target_end_ms - now_ms
        if diff_ms <= 0:
            self.remaining_sec = 0
            return TickResult(0.0, self.complete(settings))

        self.remaining_sec = int(math.floor(diff_ms / 1000))
        return TickResult(diff_ms / 1000)

    # ----- Internals -----
    def _arm(self, now_ms: float) -> None:
        self.target_end_ms = now_ms + self.remaining_sec * 1000

    def _seconds_left(self, now_ms: float) -> int:
        if self.target_end_ms is None:
            return self.remaining_sec
        return max(0, int(math.floor((self.target_end_ms - now_ms) / 1000)))
