# -*- coding: utf-8 -*-

import logging
import time
from typing import Callable, Optional

from core.render import RenderPipeline
from core.scheduler import TICK_INTERVAL_MS, Job, Scheduler
from core.timer_engine import EngineSnapshot, TimerEngine, Transition
from domain.models import RenderedFrame, TimerSettings
from services.sound_service import SoundPlayer

logger = logging.getLogger(__name__)

LONG_PRESS_MS = 1500


def wall_clock_ms() -> float:
    return time.time() * 1000


class HostSink:
    """
    Protocol base for the host side of a key. Subclasses (PreviewWindow,
    the recording sink in tests) override both methods; the base versions
    raise NotImplementedError so a sink missing one fails on first frame.
    """

    def set_title(self, instance_id: str, text: str) -> None:
        raise NotImplementedError

    def set_image(self, instance_id: str, image: str) -> None:
        raise NotImplementedError


class TimerInstance:
    """
    Orchestrates one button:
    - TimerEngine state
    - countdown / pause-pulse / long-press jobs on the scheduler
    - RenderPipeline output to the host sink
    - completion sound
    """

    def __init__(
        self,
        instance_id: str,
        sink: HostSink,
        scheduler: Scheduler,
        sound: Optional[SoundPlayer] = None,
        clock: Callable[[], float] = wall_clock_ms,
        settings: Optional[TimerSettings] = None,
        in_image_numeral: bool = True,
        long_press_ms: int = LONG_PRESS_MS,
        tick_ms: int = TICK_INTERVAL_MS,
    ):
        self.instance_id = instance_id
        self.sink = sink
        self.scheduler = scheduler
        self.sound = sound or SoundPlayer()
        self.clock = clock
        self.long_press_ms = long_press_ms
        self.tick_ms = tick_ms

        self.settings = settings or TimerSettings()
        self.engine = TimerEngine(self.settings)
        self.pipeline = RenderPipeline(in_image_numeral=in_image_numeral)

        self.long_press_armed = False
        self.disposed = False
        self._did_long_press = False
        self._last_title: Optional[str] = None

        self._countdown_job: Optional[Job] = None
        self._pulse_job: Optional[Job] = None
        self._hold_job: Optional[Job] = None

        self._on_phase_change: Optional[Callable[[EngineSnapshot], None]] = None

    # ----- Callbacks -----
    def set_on_phase_change(self, fn: Callable[[EngineSnapshot], None]) -> None:
        self._on_phase_change = fn

    def _emit_phase_change(self) -> None:
        if self._on_phase_change:
            self._on_phase_change(self.engine.snapshot())

    # ----- Public API -----
    def get_snapshot(self) -> EngineSnapshot:
        return self.engine.snapshot()

    @property
    def has_countdown(self) -> bool:
        return self._countdown_job is not None

    @property
    def has_pulse(self) -> bool:
        return self._pulse_job is not None

    @property
    def has_pending_hold(self) -> bool:
        return self._hold_job is not None

    def appear(self, settings: TimerSettings) -> None:
        if self.disposed:
            return
        self.settings = settings
        # the host may have lost whatever we drew before
        self.pipeline.invalidate()
        self._last_title = None
        self.reset()

    def apply_settings(self, settings: TimerSettings) -> None:
        if self.disposed:
            return
        self.settings = settings
        self.reset()

    def press_down(self) -> None:
        if self.disposed:
            return
        self._cancel_hold()
        self._did_long_press = False
        self.long_press_armed = True
        self._hold_job = self.scheduler.once(self.long_press_ms, self._on_hold_elapsed)

    def press_up(self) -> None:
        if self.disposed:
            return
        self._cancel_hold()

        if self._did_long_press:
            # release after a long press does nothing more
            self._did_long_press = False
            return
        if not self.long_press_armed:
            logger.debug(f"[{self.instance_id}] release without press, ignored")
            return

        self.long_press_armed = False
        self.short_press()

    def short_press(self) -> None:
        self._after_transition(self.engine.short_press(self.settings, self.clock()))

    def long_press(self) -> None:
        self._after_transition(self.engine.long_press(self.settings, self.clock()))

    def reset(self) -> None:
        self._after_transition(self.engine.reset(self.settings))

    def dispose(self) -> None:
        """Stop every job this instance owns. Safe to call twice."""
        self._cancel_countdown()
        self._cancel_pulse()
        self._cancel_hold()
        self.long_press_armed = False
        self.disposed = True

    # ----- Transitions -----
    def _after_transition(self, transition: Transition) -> None:
        self._sync_jobs()

        if transition.completed:
            logger.info(
                f"[{self.instance_id}] {transition.source.name} finished, "
                f"cycle {self.engine.cycle_index + 1}/{self.settings.cycle_count}"
            )
            if self.settings.sound_enabled:
                self.sound.play_completion()

        if transition.source != transition.target:
            logger.info(f"[{self.instance_id}] {transition.source.name} -> {transition.target.name}")
            self._emit_phase_change()

        self._render()

    def _sync_jobs(self) -> None:
        # countdown only while running, pulse only while paused
        phase = self.engine.phase
        if phase.is_running:
            self._cancel_pulse()
            self._cancel_countdown()
            self._countdown_job = self.scheduler.every(self.tick_ms, self._on_countdown_tick)
        elif phase.is_paused:
            self._cancel_countdown()
            self._cancel_pulse()
            self._pulse_job = self.scheduler.every(self.tick_ms, self._on_pulse_tick)
        else:
            self._cancel_countdown()
            self._cancel_pulse()

    # ----- Scheduled callbacks -----
    def _on_countdown_tick(self) -> None:
        if self.disposed:
            return
        now = self.clock()
        result = self.engine.tick(self.settings, now)
        if result is None:
            self._cancel_countdown()
            return
        if result.transition is not None:
            self._after_transition(result.transition)
        else:
            self._render(exact_seconds=result.exact_seconds, now_ms=now)

    def _on_pulse_tick(self) -> None:
        if self.disposed:
            return
        self._render()

    def _on_hold_elapsed(self) -> None:
        self._hold_job = None
        if self.disposed or not self.long_press_armed:
            return
        self.long_press_armed = False
        self._did_long_press = True
        logger.debug(f"[{self.instance_id}] long press in {self.engine.phase.name}")
        self.long_press()

    def _cancel_countdown(self) -> None:
        if self._countdown_job is not None:
            self._countdown_job.cancel()
            self._countdown_job = None

    def _cancel_pulse(self) -> None:
        if self._pulse_job is not None:
            self._pulse_job.cancel()
            self._pulse_job = None

    def _cancel_hold(self) -> None:
        if self._hold_job is not None:
            self._hold_job.cancel()
            self._hold_job = None

    # ----- Output -----
    def _render(self, exact_seconds: Optional[float] = None, now_ms: Optional[float] = None) -> None:
        if now_ms is None:
            now_ms = self.clock()
        frame = self.pipeline.render(self.engine.snapshot(), self.settings, now_ms, exact_seconds)
        if frame is not None:
            self._emit(frame)

    def _emit(self, frame: RenderedFrame) -> None:
        try:
            if frame.title != self._last_title:
                self.sink.set_title(self.instance_id, frame.title)
                self._last_title = frame.title
            self.sink.set_image(self.instance_id, frame.image)
        except Exception:
            logger.exception(f"[{self.instance_id}] host sink rejected frame")
