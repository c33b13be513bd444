# -*- coding: utf-8 -*-

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Dict, Optional


class TimerPhase(IntEnum):
    IDLE_WORK = 0  # waiting to start work
    RUNNING_WORK = 1
    PAUSED_WORK = 2
    IDLE_BREAK = 3  # work finished, waiting to start break
    RUNNING_BREAK = 4
    PAUSED_BREAK = 5

    @property
    def is_work(self) -> bool:
        return self in (TimerPhase.IDLE_WORK, TimerPhase.RUNNING_WORK, TimerPhase.PAUSED_WORK)

    @property
    def is_running(self) -> bool:
        return self in (TimerPhase.RUNNING_WORK, TimerPhase.RUNNING_BREAK)

    @property
    def is_paused(self) -> bool:
        return self in (TimerPhase.PAUSED_WORK, TimerPhase.PAUSED_BREAK)

    @property
    def is_idle(self) -> bool:
        return self in (TimerPhase.IDLE_WORK, TimerPhase.IDLE_BREAK)


@dataclass(frozen=True)
class TimerSettings:
    work_minutes: int = 25
    break_minutes: int = 5
    cycle_count: int = 4  # 1..4
    sound_enabled: bool = False

    @property
    def work_seconds(self) -> int:
        return self.work_minutes * 60

    @property
    def break_seconds(self) -> int:
        return self.break_minutes * 60


@dataclass(frozen=True)
class RenderSignature:
    """Quantized visual parameters; two equal signatures draw the same image."""

    progress_step: int
    title: str
    content_opacity: float
    global_opacity: float
    pulse_opacity: float
    indicator_opacity: float
    phase: TimerPhase
    cycle_index: int


@dataclass(frozen=True)
class TimerVisuals:
    progress: float  # 0..1 of the current phase left
    title: str
    is_seconds: bool
    content_opacity: float
    global_opacity: float
    pulse_opacity: float
    indicator_opacity: float


@dataclass(frozen=True)
class RenderedFrame:
    title: str
    image: str  # data URI
    signature: RenderSignature


class EventKind(str, Enum):
    APPEAR = "appear"
    DISAPPEAR = "disappear"
    SETTINGS_CHANGED = "settings_changed"
    PRESS_DOWN = "press_down"
    PRESS_UP = "press_up"


@dataclass(frozen=True)
class HostEvent:
    kind: EventKind
    instance_id: str
    settings: Optional[Dict[str, Any]] = None
