# -*- coding: utf-8 -*-

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from core.scheduler import Scheduler
from core.settings import resolve
from domain.models import EventKind, HostEvent
from services.sound_service import SoundPlayer
from services.timer_service import HostSink, TimerInstance, wall_clock_ms

logger = logging.getLogger(__name__)

RawSettings = Optional[Mapping[str, Any]]


class InstanceRegistry:
    """
    The one table of live timers, keyed by the host's opaque instance id.
    Instances share nothing with each other.
    """

    def __init__(
        self,
        sink: HostSink,
        scheduler: Scheduler,
        sound: Optional[SoundPlayer] = None,
        clock: Callable[[], float] = wall_clock_ms,
        in_image_numeral: bool = True,
    ):
        self.sink = sink
        self.scheduler = scheduler
        self.sound = sound or SoundPlayer()
        self.clock = clock
        self.in_image_numeral = in_image_numeral

        self._instances: Dict[str, TimerInstance] = {}

    def __len__(self) -> int:
        return len(self._instances)

    def __contains__(self, instance_id: str) -> bool:
        return instance_id in self._instances

    def ids(self) -> List[str]:
        return list(self._instances)

    def get(self, instance_id: str) -> Optional[TimerInstance]:
        return self._instances.get(instance_id)

    def get_or_create(self, instance_id: str, raw: RawSettings = None) -> TimerInstance:
        inst = self._instances.get(instance_id)
        if inst is None:
            inst = TimerInstance(
                instance_id,
                sink=self.sink,
                scheduler=self.scheduler,
                sound=self.sound,
                clock=self.clock,
                settings=resolve(raw),
                in_image_numeral=self.in_image_numeral,
            )
            self._instances[instance_id] = inst
            logger.info(f"Timer instance created: {instance_id}")
        return inst

    def remove(self, instance_id: str) -> bool:
        inst = self._instances.pop(instance_id, None)
        if inst is None:
            return False
        inst.dispose()
        logger.info(f"Timer instance removed: {instance_id}")
        return True

    def close(self) -> None:
        for instance_id in self.ids():
            self.remove(instance_id)

    # ----- Host events -----
    def dispatch(self, event: HostEvent) -> None:
        handlers = {
            EventKind.APPEAR: self.appear,
            EventKind.DISAPPEAR: lambda iid, _raw: self.disappear(iid),
            EventKind.SETTINGS_CHANGED: self.settings_changed,
            EventKind.PRESS_DOWN: self.press_down,
            EventKind.PRESS_UP: self.press_up,
        }
        handlers[event.kind](event.instance_id, event.settings)

    def appear(self, instance_id: str, raw: RawSettings = None) -> None:
        self.get_or_create(instance_id, raw).appear(resolve(raw))

    def disappear(self, instance_id: str) -> None:
        self.remove(instance_id)

    def settings_changed(self, instance_id: str, raw: RawSettings = None) -> None:
        self.get_or_create(instance_id, raw).apply_settings(resolve(raw))

    # settings on a press only seed a new instance; appear and
    # settings_changed are the only events that replace them
    def press_down(self, instance_id: str, raw: RawSettings = None) -> None:
        self.get_or_create(instance_id, raw).press_down()

    def press_up(self, instance_id: str, raw: RawSettings = None) -> None:
        self.get_or_create(instance_id, raw).press_up()
