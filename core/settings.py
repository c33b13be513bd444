# -*- coding: utf-8 -*-

"""Normalizes raw host settings into bounded TimerSettings."""

import logging
import re
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from domain.models import TimerSettings

logger = logging.getLogger(__name__)

DEFAULT_WORK_MINUTES = 25
DEFAULT_BREAK_MINUTES = 5
DEFAULT_CYCLE_COUNT = 4
MIN_CYCLES = 1
MAX_CYCLES = 4
DEFAULT_SOUND_ENABLED = False

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_TRUE_WORDS = {"true", "1", "on", "yes"}
_FALSE_WORDS = {"false", "0", "off", "no"}


def parse_int(value: Any) -> Optional[int]:
    """
    Integer-prefix parsing: "12abc" -> 12, "3.7" -> 3, "  7" -> 7.
    Returns None when nothing numeric can be read.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return None
        return int(value)
    if isinstance(value, str):
        m = _INT_PREFIX.match(value)
        if m:
            return int(m.group(1))
    return None


def parse_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    return None


class RawTimerSettings(BaseModel):
    """Settings as the host stores them (mostly strings)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    work_minutes: int = Field(DEFAULT_WORK_MINUTES, alias="workTime")
    break_minutes: int = Field(DEFAULT_BREAK_MINUTES, alias="breakTime")
    cycle_count: int = Field(DEFAULT_CYCLE_COUNT, alias="numCycles")
    sound_enabled: bool = Field(DEFAULT_SOUND_ENABLED, alias="soundEnabled")

    @field_validator("work_minutes", mode="before")
    @classmethod
    def _work(cls, v: Any) -> int:
        parsed = parse_int(v)
        return DEFAULT_WORK_MINUTES if parsed is None or parsed < 1 else parsed

    @field_validator("break_minutes", mode="before")
    @classmethod
    def _break(cls, v: Any) -> int:
        parsed = parse_int(v)
        return DEFAULT_BREAK_MINUTES if parsed is None or parsed < 1 else parsed

    @field_validator("cycle_count", mode="before")
    @classmethod
    def _cycles(cls, v: Any) -> int:
        parsed = parse_int(v)
        if parsed is None:
            parsed = DEFAULT_CYCLE_COUNT
        return min(MAX_CYCLES, max(MIN_CYCLES, parsed))

    @field_validator("sound_enabled", mode="before")
    @classmethod
    def _sound(cls, v: Any) -> bool:
        parsed = parse_bool(v)
        return DEFAULT_SOUND_ENABLED if parsed is None else parsed

    def to_settings(self) -> TimerSettings:
        return TimerSettings(
            work_minutes=self.work_minutes,
            break_minutes=self.break_minutes,
            cycle_count=self.cycle_count,
            sound_enabled=self.sound_enabled,
        )


def resolve(raw: Optional[Mapping[str, Any]]) -> TimerSettings:
    """Never raises: missing or junk fields fall back to defaults."""
    if not isinstance(raw, Mapping):
        raw = {}
    try:
        return RawTimerSettings.model_validate(dict(raw)).to_settings()
    except ValidationError as e:
        logger.warning(f"Unusable timer settings {raw!r}, using defaults: {e}")
        return TimerSettings()
