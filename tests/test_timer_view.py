# -*- coding: utf-8 -*-

import base64

from core.timer_view import BREAK_GRADIENT, WORK_GRADIENT, generate_svg, to_data_uri
from domain.models import TimerPhase, TimerVisuals


def _visuals(**overrides) -> TimerVisuals:
    values = dict(
        progress=1.0,
        title="25",
        is_seconds=False,
        content_opacity=1.0,
        global_opacity=1.0,
        pulse_opacity=1.0,
        indicator_opacity=1.0,
    )
    values.update(overrides)
    return TimerVisuals(**values)


def test_canvas_and_ring() -> None:
    svg = generate_svg(_visuals(), TimerPhase.IDLE_WORK, cycle_count=4, cycle_index=0)
    assert svg.startswith('<svg xmlns="http://www.w3.org/2000/svg" width="72" height="72"')
    assert 'viewBox="0 0 72 72"' in svg
    assert 'r="31"' in svg
    assert 'stroke-linecap="round"' in svg
    assert 'stroke-dashoffset="0"' in svg
    assert 'rotate(-90 36 36)' in svg


def test_half_progress_offsets_half_the_circumference() -> None:
    svg = generate_svg(_visuals(progress=0.5), TimerPhase.RUNNING_WORK, 4, 0)
    assert 'stroke-dasharray="194.7787"' in svg
    assert 'stroke-dashoffset="97.3894"' in svg


def test_phase_family_picks_gradient() -> None:
    work = generate_svg(_visuals(), TimerPhase.PAUSED_WORK, 4, 0)
    rest = generate_svg(_visuals(), TimerPhase.RUNNING_BREAK, 4, 0)
    assert all(color in work for color in WORK_GRADIENT)
    assert all(color in rest for color in BREAK_GRADIENT)
    assert WORK_GRADIENT[0] not in rest


def test_cycle_dots() -> None:
    svg = generate_svg(_visuals(indicator_opacity=0.6), TimerPhase.RUNNING_WORK, cycle_count=4, cycle_index=2)
    # one ring + four dots
    assert svg.count("<circle") == 5
    assert svg.count('fill="#11998e"') == 2
    assert svg.count('fill="url(#grad)" opacity="0.6"') == 1
    assert svg.count('fill="white" opacity="0.2"') == 1


def test_dot_row_is_centered() -> None:
    svg = generate_svg(_visuals(), TimerPhase.IDLE_WORK, cycle_count=1, cycle_index=0)
    assert 'cx="36" cy="52"' in svg


def test_numeral_sizes() -> None:
    minutes = generate_svg(_visuals(title="25"), TimerPhase.IDLE_WORK, 4, 0)
    long_minutes = generate_svg(_visuals(title="120"), TimerPhase.IDLE_WORK, 4, 0)
    seconds = generate_svg(_visuals(title="42", is_seconds=True), TimerPhase.RUNNING_WORK, 4, 0)
    assert 'font-size="28"' in minutes
    assert 'font-size="24"' in long_minutes
    assert 'font-size="20"' in seconds and 'y="43"' in seconds


def test_numeral_can_be_left_to_the_title() -> None:
    svg = generate_svg(_visuals(), TimerPhase.IDLE_WORK, 4, 0, draw_numeral=False)
    assert "<text" not in svg


def test_opacities_are_written() -> None:
    svg = generate_svg(
        _visuals(global_opacity=0.35, pulse_opacity=0.55, content_opacity=0.25),
        TimerPhase.PAUSED_BREAK,
        4,
        0,
    )
    assert '<g opacity="0.35">' in svg
    assert 'scale(-1, 1)" opacity="0.55"' in svg
    assert 'opacity="0.25" text-anchor="middle"' in svg


def test_data_uri_round_trip() -> None:
    svg = generate_svg(_visuals(), TimerPhase.IDLE_WORK, 4, 0)
    uri = to_data_uri(svg)
    prefix = "data:image/svg+xml;base64,"
    assert uri.startswith(prefix)
    assert base64.b64decode(uri[len(prefix):]).decode("utf-8") == svg
