# -*- coding: utf-8 -*-

import pytest

from conftest import FakePresentation, Recorder
from core.break_scheduler import BreakScheduler
from domain.models import Phase, TimerSettings
from services.session_orchestrator import SessionOrchestrator


class FakeLoginItems:
    def __init__(self):
        self.synced = []

    def sync(self, enabled):
        self.synced.append(enabled)
        return True


@pytest.fixture
def short_scheduler(clock):
    return BreakScheduler(clock, TimerSettings(work_minutes=1, break_minutes=2))


@pytest.fixture
def presentation():
    return FakePresentation()


@pytest.fixture
def orchestrator(short_scheduler, presentation):
    return SessionOrchestrator(short_scheduler, presentation=presentation)


@pytest.fixture
def events(short_scheduler, orchestrator):
    rec = Recorder()
    short_scheduler.subscribe(rec)
    return rec


def test_work_completion_starts_break(orchestrator, short_scheduler, clock):
    orchestrator.start_work()
    clock.tick(60)
    assert short_scheduler.remaining_seconds == 0
    assert short_scheduler.phase == Phase.WORKING

    clock.tick()

    assert short_scheduler.phase == Phase.BREAKING
    assert short_scheduler.remaining_seconds == 120
    assert short_scheduler.is_armed
    assert clock.is_armed


def test_break_completion_starts_work(orchestrator, short_scheduler, clock):
    short_scheduler.start_break()
    clock.tick(121)

    assert short_scheduler.phase == Phase.WORKING
    assert short_scheduler.remaining_seconds == 60
    assert short_scheduler.is_armed


def test_full_cycle_keeps_alternating(orchestrator, short_scheduler, clock, events):
    orchestrator.start_work()
    clock.tick(61 + 121 + 61)

    phases = [e[1] for e in events.of("state")]
    assert phases == [Phase.WORKING, Phase.BREAKING, Phase.WORKING, Phase.BREAKING]
    assert len(events.of("completed")) == 3
    assert short_scheduler.remaining_seconds == 120


def test_completion_outside_active_phase_is_ignored(orchestrator, short_scheduler):
    orchestrator.on_completed()
    assert short_scheduler.phase == Phase.STOPPED

    short_scheduler.start_work()
    short_scheduler.pause()
    orchestrator.on_completed()
    assert short_scheduler.phase == Phase.PAUSED
    assert short_scheduler.remaining_seconds == 60


def test_request_postpone_during_break(orchestrator, short_scheduler, clock, presentation):
    short_scheduler.start_break()
    clock.tick(30)
    presentation.calls.clear()

    orchestrator.request_postpone(5)

    assert short_scheduler.phase == Phase.WORKING
    assert short_scheduler.remaining_seconds == 300
    assert ("hide_break",) in presentation.calls


def test_request_postpone_outside_break_is_noop(orchestrator, short_scheduler, clock):
    orchestrator.start_work()
    clock.tick(10)

    orchestrator.request_postpone(10)

    assert short_scheduler.phase == Phase.WORKING
    assert short_scheduler.remaining_seconds == 50


def test_skip_break_starts_full_work(orchestrator, short_scheduler, clock, events):
    short_scheduler.update_settings(TimerSettings(work_minutes=25, break_minutes=5))
    short_scheduler.start_break()
    clock.tick(45)
    events.clear()

    orchestrator.request_skip_break()

    assert short_scheduler.phase == Phase.WORKING
    assert short_scheduler.remaining_seconds == 1500
    states = events.of("state")
    assert len(states) == 2
    assert states[-1] == ("state", Phase.WORKING, 1500)


@pytest.mark.parametrize("setup", ["stopped", "working", "paused"])
def test_skip_break_outside_break_is_noop(orchestrator, short_scheduler, clock, events, setup):
    if setup != "stopped":
        short_scheduler.start_work()
        clock.tick(5)
    if setup == "paused":
        short_scheduler.pause()
    before = short_scheduler.snapshot()
    events.clear()

    orchestrator.request_skip_break()

    assert short_scheduler.snapshot() == before
    assert events.events == []


def test_commands_forward_to_scheduler(orchestrator, short_scheduler, clock):
    orchestrator.start_work()
    clock.tick(3)
    orchestrator.pause()
    assert short_scheduler.phase == Phase.PAUSED
    orchestrator.resume()
    assert short_scheduler.phase == Phase.WORKING
    assert short_scheduler.remaining_seconds == 57
    orchestrator.stop()
    assert short_scheduler.phase == Phase.STOPPED

    orchestrator.update_settings(TimerSettings(work_minutes=3, break_minutes=1))
    assert short_scheduler.settings.work_minutes == 3
    assert short_scheduler.phase == Phase.STOPPED


def test_break_start_shows_overlay(orchestrator, short_scheduler, presentation):
    short_scheduler.start_break()
    assert presentation.calls == [
        ("show_state", Phase.BREAKING, 120),
        ("show_break", 120),
    ]


def test_break_ticks_update_overlay(orchestrator, short_scheduler, clock, presentation):
    short_scheduler.start_break()
    presentation.calls.clear()

    clock.tick(2)

    assert presentation.calls == [
        ("show_state", Phase.BREAKING, 119),
        ("update_break", 119),
        ("show_state", Phase.BREAKING, 118),
        ("update_break", 118),
    ]


def test_work_ticks_only_update_status(orchestrator, short_scheduler, clock, presentation):
    short_scheduler.start_work()
    presentation.calls.clear()

    clock.tick(1)

    assert presentation.calls == [("show_state", Phase.WORKING, 59)]


@pytest.mark.parametrize("command", ["start_work", "stop"])
def test_work_and_stop_hide_overlay(orchestrator, short_scheduler, presentation, command):
    short_scheduler.start_break()
    presentation.calls.clear()

    getattr(orchestrator, command)()

    assert ("hide_break",) in presentation.calls


def test_pausing_a_break_keeps_overlay(orchestrator, short_scheduler, clock, presentation):
    short_scheduler.start_break()
    clock.tick(10)
    presentation.calls.clear()

    orchestrator.pause()

    assert presentation.names() == ["show_state"]


def test_pausing_a_finished_break_hides_overlay(
    orchestrator, short_scheduler, clock, presentation
):
    short_scheduler.start_break()
    clock.tick(120)
    assert short_scheduler.remaining_seconds == 0
    presentation.calls.clear()

    orchestrator.pause()

    assert presentation.calls == [
        ("show_state", Phase.PAUSED, 0),
        ("hide_break",),
    ]


def test_resumed_work_at_zero_moves_to_break(orchestrator, short_scheduler, clock, events):
    orchestrator.start_work()
    clock.tick(60)
    orchestrator.pause()
    orchestrator.resume()
    events.clear()

    clock.tick()

    assert events.of("tick") == []
    assert len(events.of("completed")) == 1
    assert short_scheduler.phase == Phase.BREAKING
    assert short_scheduler.remaining_seconds == 120


def test_break_end_hides_overlay(orchestrator, short_scheduler, clock, presentation):
    short_scheduler.start_break()
    presentation.calls.clear()

    clock.tick(121)

    assert ("hide_break",) in presentation.calls
    assert short_scheduler.phase == Phase.WORKING


def test_attach_pushes_current_state(short_scheduler, presentation):
    orch = SessionOrchestrator(short_scheduler)
    short_scheduler.start_work()

    orch.attach(presentation)

    assert presentation.calls == [("show_state", Phase.WORKING, 60)]


def test_runs_without_presentation(short_scheduler, clock):
    orch = SessionOrchestrator(short_scheduler)
    orch.start_work()
    clock.tick(61)
    assert short_scheduler.phase == Phase.BREAKING
    orch.request_skip_break()
    assert short_scheduler.phase == Phase.WORKING


def test_close_unsubscribes(short_scheduler, clock):
    orch = SessionOrchestrator(short_scheduler)
    orch.close()
    short_scheduler.start_work()
    clock.tick(61)
    assert short_scheduler.phase == Phase.WORKING
    assert not short_scheduler.is_armed


def test_apply_settings_persists_and_restarts_work(short_scheduler, clock, settings_store):
    login_items = FakeLoginItems()
    orch = SessionOrchestrator(
        short_scheduler, settings_store=settings_store, login_items=login_items
    )
    orch.start_work()
    clock.tick(20)

    new = TimerSettings(work_minutes=45, break_minutes=10, start_at_login=True)
    orch.apply_settings(new)

    assert settings_store.load() == new
    assert short_scheduler.settings == new
    assert login_items.synced == [True]
    assert short_scheduler.phase == Phase.WORKING
    assert short_scheduler.remaining_seconds == 45 * 60
