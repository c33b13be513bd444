# -*- coding: utf-8 -*-

import pytest

from domain.models import EventKind, HostEvent, TimerPhase

P = TimerPhase
SHORT = {"workTime": "1", "breakTime": "1", "numCycles": "2", "soundEnabled": True}


def _tap(registry, scheduler, instance_id: str, raw=None) -> None:
    registry.press_down(instance_id, raw)
    scheduler.advance(100)
    registry.press_up(instance_id, raw)


def test_appear_creates_instance_and_draws(registry, sink) -> None:
    registry.appear("a", {"workTime": "10"})
    assert "a" in registry
    assert len(registry) == 1
    inst = registry.get("a")
    assert inst.get_snapshot().phase == P.IDLE_WORK
    assert inst.get_snapshot().remaining_sec == 600
    assert len(sink.images_for("a")) == 1


def test_get_or_create_returns_same_instance(registry) -> None:
    first = registry.get_or_create("a")
    assert registry.get_or_create("a") is first
    assert registry.ids() == ["a"]


def test_appear_again_resets(registry, scheduler) -> None:
    registry.appear("a", {})
    _tap(registry, scheduler, "a")
    assert registry.get("a").get_snapshot().phase == P.RUNNING_WORK

    registry.appear("a", {})
    assert registry.get("a").get_snapshot().phase == P.IDLE_WORK
    assert scheduler.pending() == 0


def test_dispatch_routes_every_event_kind(registry, scheduler) -> None:
    registry.dispatch(HostEvent(EventKind.APPEAR, "a", SHORT))
    registry.dispatch(HostEvent(EventKind.PRESS_DOWN, "a", SHORT))
    scheduler.advance(100)
    registry.dispatch(HostEvent(EventKind.PRESS_UP, "a", SHORT))
    assert registry.get("a").get_snapshot().phase == P.RUNNING_WORK

    registry.dispatch(HostEvent(EventKind.SETTINGS_CHANGED, "a", {"workTime": "7"}))
    snap = registry.get("a").get_snapshot()
    assert snap.phase == P.IDLE_WORK
    assert snap.remaining_sec == 420

    registry.dispatch(HostEvent(EventKind.DISAPPEAR, "a"))
    assert "a" not in registry


def test_settings_change_uses_latest_values(registry) -> None:
    registry.appear("a", {})
    registry.settings_changed("a", {"workTime": "40", "numCycles": "9"})
    inst = registry.get("a")
    assert inst.settings.work_minutes == 40
    assert inst.settings.cycle_count == 4
    assert inst.get_snapshot().remaining_sec == 2400


def test_presses_keep_current_settings(registry, scheduler) -> None:
    registry.appear("a", {"workTime": "3"})
    _tap(registry, scheduler, "a", raw=None)
    _tap(registry, scheduler, "a", raw={"workTime": "9"})
    inst = registry.get("a")
    assert inst.settings.work_minutes == 3
    assert inst.get_snapshot().remaining_sec == 180


def test_disappear_stops_all_work_for_that_id(registry, scheduler, sink, sound) -> None:
    registry.appear("a", SHORT)
    _tap(registry, scheduler, "a", SHORT)
    registry.press_down("a", SHORT)

    registry.disappear("a")
    assert "a" not in registry
    assert scheduler.pending() == 0

    images = len(sink.images_for("a"))
    scheduler.advance(5 * 60_000)
    assert len(sink.images_for("a")) == images
    assert sound.plays == 0


def test_disappear_unknown_id_is_noop(registry) -> None:
    registry.disappear("ghost")
    assert registry.remove("ghost") is False
    assert len(registry) == 0


def test_instances_are_independent(registry, scheduler) -> None:
    registry.appear("a", SHORT)
    registry.appear("b", {"workTime": "2"})
    _tap(registry, scheduler, "a", SHORT)

    scheduler.advance(61_000)

    a = registry.get("a").get_snapshot()
    b = registry.get("b").get_snapshot()
    assert a.phase == P.IDLE_BREAK
    assert b.phase == P.IDLE_WORK
    assert b.remaining_sec == 120

    registry.disappear("a")
    assert registry.ids() == ["b"]


def test_completion_sound_follows_settings(registry, scheduler, sound) -> None:
    registry.appear("loud", SHORT)
    registry.appear("quiet", dict(SHORT, soundEnabled=False))
    _tap(registry, scheduler, "loud")
    _tap(registry, scheduler, "quiet")
    scheduler.advance(61_000)
    assert sound.plays == 1


def test_close_disposes_everything(registry, scheduler) -> None:
    for iid in ("a", "b", "c"):
        registry.appear(iid, {})
        _tap(registry, scheduler, iid)
    assert scheduler.pending() == 3

    registry.close()
    assert len(registry) == 0
    assert scheduler.pending() == 0


@pytest.mark.parametrize("kind", [EventKind.PRESS_DOWN, EventKind.PRESS_UP, EventKind.SETTINGS_CHANGED])
def test_events_for_unseen_id_create_it(registry, kind) -> None:
    registry.dispatch(HostEvent(kind, "late", {}))
    assert "late" in registry


def test_press_settings_do_not_break_cycle_index(registry, scheduler) -> None:
    four_cycles = dict(SHORT, numCycles="4")
    registry.appear("a", four_cycles)
    for _ in range(3):
        _tap(registry, scheduler, "a", four_cycles)
        scheduler.advance(61_000)
        _tap(registry, scheduler, "a", four_cycles)
        scheduler.advance(61_000)
    inst = registry.get("a")
    assert inst.get_snapshot().cycle_index == 3

    _tap(registry, scheduler, "a", dict(SHORT, numCycles="2"))

    snap = inst.get_snapshot()
    assert snap.phase == P.RUNNING_WORK
    assert inst.settings.cycle_count == 4
    assert snap.cycle_index < inst.settings.cycle_count


def test_fewer_cycles_take_effect_through_settings_change(registry, scheduler) -> None:
    registry.appear("a", SHORT)
    _tap(registry, scheduler, "a")
    registry.settings_changed("a", dict(SHORT, numCycles="1"))
    inst = registry.get("a")
    assert inst.settings.cycle_count == 1
    assert inst.get_snapshot().cycle_index == 0
    assert inst.get_snapshot().phase == P.IDLE_WORK
