# -*- coding: utf-8 -*-

import logging
from typing import Optional, Protocol

from core.break_scheduler import BreakScheduler
from domain.models import Phase, SchedulerSnapshot, TimerSettings
from services.login_item import LoginItemRegistrar
from storage.repos import SettingsStore

logger = logging.getLogger(__name__)


class Presentation(Protocol):
    def show_state(self, snap: SchedulerSnapshot) -> None: ...

    def show_break(self, remaining_sec: int) -> None: ...

    def update_break(self, remaining_sec: int) -> None: ...

    def hide_break(self) -> None: ...


class SessionOrchestrator:
    """
    Orchestrates:
    - work -> break -> work cycling on scheduler completion
    - user intents from the UI (postpone, skip, pause, ...)
    - settings persistence + login item sync on save
    - pushing explicit state to the presentation
    """

    def __init__(
        self,
        scheduler: BreakScheduler,
        settings_store: Optional[SettingsStore] = None,
        login_items: Optional[LoginItemRegistrar] = None,
        presentation: Optional[Presentation] = None,
    ):
        self.scheduler = scheduler
        self.settings_store = settings_store
        self.login_items = login_items
        self.presentation = presentation

        # subscribe first so the phase decision runs before any other listener
        self._unsubscribe = self.scheduler.subscribe(self)

    def attach(self, presentation: Optional[Presentation]) -> None:
        self.presentation = presentation
        if presentation is not None:
            presentation.show_state(self.scheduler.snapshot())

    def close(self) -> None:
        self._unsubscribe()

    # ----- Scheduler notifications -----
    def on_state_changed(self, phase: Phase, remaining_sec: int) -> None:
        p = self.presentation
        if p is None:
            return
        p.show_state(self.scheduler.snapshot())
        if phase == Phase.BREAKING:
            p.show_break(remaining_sec)
        elif phase == Phase.PAUSED:
            if remaining_sec == 0:
                p.hide_break()
        else:
            p.hide_break()

    def on_tick(self, remaining_sec: int) -> None:
        p = self.presentation
        if p is None:
            return
        p.show_state(self.scheduler.snapshot())
        if self.scheduler.phase == Phase.BREAKING:
            p.update_break(remaining_sec)

    def on_completed(self) -> None:
        phase = self.scheduler.phase
        if phase == Phase.WORKING:
            logger.info("work finished, starting break")
            self.scheduler.start_break()
        elif phase == Phase.BREAKING:
            logger.info("break finished, back to work")
            if self.presentation is not None:
                self.presentation.hide_break()
            self.scheduler.start_work()
        else:
            logger.warning("completion in phase %s ignored", phase.value)

    # ----- User intents -----
    def start_work(self) -> None:
        self.scheduler.start_work()

    def pause(self) -> None:
        self.scheduler.pause()

    def resume(self) -> None:
        self.scheduler.resume()

    def stop(self) -> None:
        self.scheduler.stop()

    def request_postpone(self, minutes: int) -> None:
        was_breaking = self.scheduler.phase == Phase.BREAKING
        logger.info("postpone requested: %d min", minutes)
        self.scheduler.postpone(minutes)
        if was_breaking and self.presentation is not None:
            self.presentation.hide_break()

    def request_skip_break(self) -> None:
        if self.presentation is not None:
            self.presentation.hide_break()
        if self.scheduler.phase != Phase.BREAKING:
            logger.debug("skip ignored in phase %s", self.scheduler.phase.value)
            return
        logger.info("skipping break")
        self.scheduler.pause()
        self.scheduler.start_work()

    def update_settings(self, settings: TimerSettings) -> None:
        self.scheduler.update_settings(settings)

    def apply_settings(self, settings: TimerSettings) -> None:
        """
        Settings window "Save": persist, apply, sync login item, and start a
        new work timer with the new durations.
        """
        if self.settings_store is not None:
            self.settings_store.save(settings)
        self.scheduler.update_settings(settings)
        if self.login_items is not None:
            self.login_items.sync(settings.start_at_login)
        self.scheduler.start_work()
