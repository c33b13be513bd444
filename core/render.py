# -*- coding: utf-8 -*-

"""
Turns engine state into visual parameters and decides whether a redraw is
worth sending. The render callback runs at tick cadence; only frames whose
quantized signature changed reach the host.
"""

import math
from typing import Optional

from core.timer_engine import EngineSnapshot, total_seconds_for_phase
from core.timer_view import generate_svg, to_data_uri
from domain.models import RenderedFrame, RenderSignature, TimerSettings, TimerVisuals

PROGRESS_STEPS = 400  # ring circumference ~195px, half-pixel precision
OPACITY_STEPS = 20  # 0.05 increments
PULSE_PERIOD_DIVISOR_MS = 600  # sin(now / 600): ~3.77s period


def format_time(seconds: int) -> str:
    """Bare number: seconds below a minute, whole minutes otherwise."""
    seconds = max(0, int(seconds))
    if seconds < 60:
        return f"{seconds}"
    return f"{seconds // 60}"


def quantize(value: float, steps: int = OPACITY_STEPS) -> float:
    # round half away from zero, values here are never negative
    return math.floor(value * steps + 0.5) / steps


def _wave(now_ms: float) -> float:
    return math.sin(now_ms / PULSE_PERIOD_DIVISOR_MS)


def compute_visuals(
    snap: EngineSnapshot,
    settings: TimerSettings,
    now_ms: float,
    exact_seconds: Optional[float] = None,
) -> TimerVisuals:
    secs = exact_seconds if exact_seconds is not None else float(snap.remaining_sec)
    total = total_seconds_for_phase(snap.phase, settings)
    progress = max(0.0, min(1.0, secs / total)) if total > 0 else 0.0

    is_running = snap.phase.is_running
    is_paused = snap.phase.is_paused

    # cross-fade the numeral across the minutes/seconds boundary
    content_opacity = 1.0
    if is_running and 60 <= secs < 61:
        content_opacity = secs - 60

    # whole glyph fades out right before completion
    global_opacity = 1.0
    if is_running and secs < 2:
        global_opacity = min(1.0, max(0.0, secs))

    pulse_opacity = 1.0
    if is_paused:
        pulse_opacity = quantize(0.75 + 0.25 * _wave(now_ms))

    indicator_opacity = 1.0
    if is_running:
        indicator_opacity = quantize(0.6 + 0.4 * _wave(now_ms))

    return TimerVisuals(
        progress=progress,
        title=format_time(snap.remaining_sec),
        is_seconds=snap.remaining_sec < 60,
        content_opacity=content_opacity,
        global_opacity=global_opacity,
        pulse_opacity=pulse_opacity,
        indicator_opacity=indicator_opacity,
    )


def make_signature(visuals: TimerVisuals, snap: EngineSnapshot) -> RenderSignature:
    return RenderSignature(
        progress_step=int(math.floor(visuals.progress * PROGRESS_STEPS + 0.5)),
        title=visuals.title,
        content_opacity=quantize(visuals.content_opacity),
        global_opacity=quantize(visuals.global_opacity),
        pulse_opacity=visuals.pulse_opacity,
        indicator_opacity=visuals.indicator_opacity,
        phase=snap.phase,
        cycle_index=snap.cycle_index,
    )


class RenderPipeline:
    """One per timer instance; remembers the last signature it emitted."""

    def __init__(self, in_image_numeral: bool = True):
        self.in_image_numeral = in_image_numeral
        self.last_signature: Optional[RenderSignature] = None

    def invalidate(self) -> None:
        self.last_signature = None

    def render(
        self,
        snap: EngineSnapshot,
        settings: TimerSettings,
        now_ms: float,
        exact_seconds: Optional[float] = None,
    ) -> Optional[RenderedFrame]:
        visuals = compute_visuals(snap, settings, now_ms, exact_seconds)
        signature = make_signature(visuals, snap)

        if signature == self.last_signature:
            return None
        self.last_signature = signature

        svg = generate_svg(
            visuals,
            phase=snap.phase,
            cycle_count=settings.cycle_count,
            cycle_index=snap.cycle_index,
            draw_numeral=self.in_image_numeral,
        )
        title = "" if self.in_image_numeral else visuals.title
        return RenderedFrame(title=title, image=to_data_uri(svg), signature=signature)
