# -*- coding: utf-8 -*-

from typing import Any, Callable, Dict, List, Tuple

import pytest

from core.scheduler import Scheduler
from services.registry import InstanceRegistry
from services.timer_service import HostSink, TimerInstance


class FakeClock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class ManualScheduler(Scheduler):
    """Runs due callbacks in order as the fake clock is advanced."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self._seq = 0
        self._queue: Dict[int, Tuple[float, Callable[[], None]]] = {}

    def _call_later(self, delay_ms: int, fn: Callable[[], None]) -> Any:
        self._seq += 1
        self._queue[self._seq] = (self.clock.now + delay_ms, fn)
        return self._seq

    def _cancel(self, token: Any) -> None:
        self._queue.pop(token, None)

    def pending(self) -> int:
        return len(self._queue)

    def advance(self, ms: float) -> None:
        end = self.clock.now + ms
        while True:
            due = [(when, token) for token, (when, _fn) in self._queue.items() if when <= end]
            if not due:
                break
            when, token = min(due)
            _when, fn = self._queue.pop(token)
            self.clock.now = max(self.clock.now, when)
            fn()
        self.clock.now = end


class RecordingSink(HostSink):
    def __init__(self):
        self.titles: List[Tuple[str, str]] = []
        self.images: List[Tuple[str, str]] = []

    def set_title(self, instance_id: str, text: str) -> None:
        self.titles.append((instance_id, text))

    def set_image(self, instance_id: str, image: str) -> None:
        self.images.append((instance_id, image))

    def images_for(self, instance_id: str) -> List[str]:
        return [img for iid, img in self.images if iid == instance_id]


class RecordingSound:
    def __init__(self):
        self.plays = 0

    def play_completion(self) -> None:
        self.plays += 1


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler(clock) -> ManualScheduler:
    return ManualScheduler(clock)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def sound() -> RecordingSound:
    return RecordingSound()


@pytest.fixture
def make_instance(sink, scheduler, sound, clock):
    def _make(settings=None, **kwargs) -> TimerInstance:
        inst = TimerInstance(
            "key-1",
            sink=sink,
            scheduler=scheduler,
            sound=sound,
            clock=clock,
            settings=settings,
            **kwargs,
        )
        inst.appear(inst.settings)
        return inst

    return _make


@pytest.fixture
def registry(sink, scheduler, sound, clock) -> InstanceRegistry:
    return InstanceRegistry(sink=sink, scheduler=scheduler, sound=sound, clock=clock)
