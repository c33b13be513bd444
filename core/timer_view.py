# -*- coding: utf-8 -*-

import base64
import math

from domain.models import TimerPhase, TimerVisuals

CANVAS = 72
CENTER = 36
RING_RADIUS = 31
RING_WIDTH = 8

DOT_RADIUS = 3
DOT_SPACING = 8
DOT_ROW_Y = 52

# warm for work, cool for break
WORK_GRADIENT = ("#FF512F", "#DD2476")
BREAK_GRADIENT = ("#11998e", "#38ef7d")
COMPLETED_DOT_COLOR = BREAK_GRADIENT[0]
UPCOMING_DOT_OPACITY = 0.2


def _n(value: float) -> str:
    # compact, stable number formatting for attributes
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def _numeral_layout(text: str, is_seconds: bool):
    """(font_size, y_offset) for the numeral; y is tuned by eye around 36."""
    if is_seconds:
        return 20, 7
    if len(text) > 2:
        return 24, 9
    return 28, 9


def _ring(progress: float, pulse_opacity: float) -> str:
    circ = 2 * math.pi * RING_RADIUS
    offset = circ * (1 - progress)
    # mirrored so the arc runs clockwise from 12 o'clock as it shrinks
    return (
        f'<g transform="translate({CANVAS}, 0) scale(-1, 1)" opacity="{_n(pulse_opacity)}">'
        f'<circle cx="{CENTER}" cy="{CENTER}" r="{RING_RADIUS}" stroke="url(#grad)" '
        f'stroke-width="{RING_WIDTH}" fill="none" '
        f'stroke-dasharray="{_n(circ)}" stroke-dashoffset="{_n(offset)}" '
        f'transform="rotate(-90 {CENTER} {CENTER})" stroke-linecap="round" />'
        f"</g>"
    )


def _numeral(visuals: TimerVisuals) -> str:
    font_size, y_offset = _numeral_layout(visuals.title, visuals.is_seconds)
    return (
        f'<text x="{CENTER}" y="{CENTER + y_offset}" font-family="sans-serif" '
        f'font-weight="bold" font-size="{font_size}" fill="white" '
        f'opacity="{_n(visuals.content_opacity)}" text-anchor="middle">{visuals.title}</text>'
    )


def _indicators(cycle_count: int, cycle_index: int, indicator_opacity: float) -> str:
    total_width = (cycle_count - 1) * DOT_SPACING
    start_x = CENTER - total_width / 2
    dots = []
    for i in range(cycle_count):
        cx = _n(start_x + i * DOT_SPACING)
        if i < cycle_index:
            dots.append(f'<circle cx="{cx}" cy="{DOT_ROW_Y}" r="{DOT_RADIUS}" fill="{COMPLETED_DOT_COLOR}" />')
        elif i == cycle_index:
            dots.append(
                f'<circle cx="{cx}" cy="{DOT_ROW_Y}" r="{DOT_RADIUS}" fill="url(#grad)" '
                f'opacity="{_n(indicator_opacity)}" />'
            )
        else:
            dots.append(
                f'<circle cx="{cx}" cy="{DOT_ROW_Y}" r="{DOT_RADIUS}" fill="white" '
                f'opacity="{_n(UPCOMING_DOT_OPACITY)}" />'
            )
    return "".join(dots)


def generate_svg(
    visuals: TimerVisuals,
    phase: TimerPhase,
    cycle_count: int,
    cycle_index: int,
    draw_numeral: bool = True,
) -> str:
    start, end = WORK_GRADIENT if phase.is_work else BREAK_GRADIENT
    defs = (
        "<defs>"
        '<linearGradient id="grad" x1="0%" y1="0%" x2="100%" y2="100%">'
        f'<stop offset="0%" style="stop-color:{start};stop-opacity:1" />'
        f'<stop offset="100%" style="stop-color:{end};stop-opacity:1" />'
        "</linearGradient>"
        "</defs>"
    )
    body = _ring(visuals.progress, visuals.pulse_opacity)
    if draw_numeral:
        body += _numeral(visuals)
    body += _indicators(cycle_count, cycle_index, visuals.indicator_opacity)

    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{CANVAS}" height="{CANVAS}" '
        f'viewBox="0 0 {CANVAS} {CANVAS}">'
        f"{defs}"
        f'<g opacity="{_n(visuals.global_opacity)}">{body}</g>'
        "</svg>"
    )


def to_data_uri(svg: str) -> str:
    payload = base64.b64encode(svg.encode("utf-8")).decode("ascii")
    return f"data:image/svg+xml;base64,{payload}"
