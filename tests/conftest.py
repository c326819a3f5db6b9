# -*- coding: utf-8 -*-

from typing import Callable, Optional

import pytest

from core.break_scheduler import BreakScheduler
from domain.models import TimerSettings
from storage.db import Database
from storage.repos import AppStateRepo, SettingsStore


class ManualClock:
    """Tick source driven by the test."""

    def __init__(self):
        self.callback: Optional[Callable[[], None]] = None
        self.arm_count = 0
        self.disarm_count = 0

    @property
    def is_armed(self) -> bool:
        return self.callback is not None

    def arm(self, callback):
        self.callback = callback
        self.arm_count += 1

    def disarm(self):
        self.callback = None
        self.disarm_count += 1

    def tick(self, n: int = 1):
        for _ in range(n):
            if self.callback is not None:
                self.callback()


class Recorder:
    def __init__(self):
        self.events = []

    def on_state_changed(self, phase, remaining_sec):
        self.events.append(("state", phase, remaining_sec))

    def on_tick(self, remaining_sec):
        self.events.append(("tick", remaining_sec))

    def on_completed(self):
        self.events.append(("completed",))

    def of(self, kind):
        return [e for e in self.events if e[0] == kind]

    def clear(self):
        self.events.clear()


class FakePresentation:
    def __init__(self):
        self.calls = []

    def show_state(self, snap):
        self.calls.append(("show_state", snap.phase, snap.remaining_seconds))

    def show_break(self, remaining_sec):
        self.calls.append(("show_break", remaining_sec))

    def update_break(self, remaining_sec):
        self.calls.append(("update_break", remaining_sec))

    def hide_break(self):
        self.calls.append(("hide_break",))

    def names(self):
        return [c[0] for c in self.calls]


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def settings():
    return TimerSettings(work_minutes=25, break_minutes=5, start_at_login=False)


@pytest.fixture
def scheduler(clock, settings):
    return BreakScheduler(clock, settings=settings)


@pytest.fixture
def recorder(scheduler):
    rec = Recorder()
    scheduler.subscribe(rec)
    return rec


@pytest.fixture
def db():
    database = Database(db_path=":memory:")
    database.init_schema()
    yield database
    database.close()


@pytest.fixture
def state_repo(db):
    return AppStateRepo(db)


@pytest.fixture
def settings_store(state_repo):
    return SettingsStore(state_repo)
