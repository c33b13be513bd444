# -*- coding: utf-8 -*-

import asyncio
import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 50  # 20 updates per second


class Job:
    """
    Handle for a scheduled callback. cancel() is always safe to call.
    Periodic jobs re-arm themselves after each run, like a Tk after() loop.
    """

    def __init__(self, scheduler: "Scheduler", delay_ms: int, fn: Callable[[], Any], repeat: bool):
        self._scheduler = scheduler
        self._delay_ms = delay_ms
        self._fn = fn
        self._repeat = repeat
        self._token: Any = None
        self._cancelled = False
        self._done = False

    @property
    def active(self) -> bool:
        return not (self._cancelled or self._done)

    def _arm(self) -> None:
        self._token = self._scheduler._call_later(self._delay_ms, self._run)

    def _run(self) -> None:
        self._token = None
        if not self.active:
            return
        try:
            self._fn()
        finally:
            if self._repeat:
                # the callback may have cancelled us
                if self.active:
                    self._arm()
            else:
                self._done = True

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        if self._token is not None:
            self._scheduler._cancel(self._token)
            self._token = None


class Scheduler:
    """Backends implement _call_later / _cancel."""

    def once(self, delay_ms: int, fn: Callable[[], Any]) -> Job:
        job = Job(self, delay_ms, fn, repeat=False)
        job._arm()
        return job

    def every(self, interval_ms: int, fn: Callable[[], Any]) -> Job:
        job = Job(self, interval_ms, fn, repeat=True)
        job._arm()
        return job

    def _call_later(self, delay_ms: int, fn: Callable[[], None]) -> Any:
        raise NotImplementedError

    def _cancel(self, token: Any) -> None:
        raise NotImplementedError


class TkScheduler(Scheduler):
    """Runs callbacks on the Tk event loop through widget.after()."""

    def __init__(self, widget):
        self.widget = widget

    def _call_later(self, delay_ms: int, fn: Callable[[], None]) -> Any:
        return self.widget.after(delay_ms, fn)

    def _cancel(self, token: Any) -> None:
        try:
            self.widget.after_cancel(token)
        except Exception:
            # widget already destroyed
            logger.debug(f"after_cancel({token!r}) ignored")


class AsyncioScheduler(Scheduler):
    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.loop = loop or asyncio.get_running_loop()

    def _call_later(self, delay_ms: int, fn: Callable[[], None]) -> Any:
        return self.loop.call_later(delay_ms / 1000, fn)

    def _cancel(self, token: Any) -> None:
        token.cancel()
