# -*- coding: utf-8 -*-

import logging
from typing import Any, Callable, List

from core.clock import Clock
from domain.models import Phase, SchedulerSnapshot, TimerSettings

logger = logging.getLogger(__name__)

StateListener = Callable[[Phase, int], None]
TickListener = Callable[[int], None]
CompletionListener = Callable[[], None]


class BreakScheduler:
    """
    Work/break countdown state machine (no Tkinter).

    - owns phase, remaining seconds and the clock arming
    - emits on_state_changed(phase, remaining), on_tick(remaining), on_completed()
    - completion only reports "time is up"; choosing the next phase is the
      orchestrator's job

    All methods must be called from one thread (the clock's thread).
    """

    def __init__(self, clock: Clock, settings: TimerSettings = TimerSettings.DEFAULT):
        self.clock = clock
        self._settings = settings

        self._phase = Phase.STOPPED
        self._remaining_sec = 0
        self._last_active_phase = Phase.WORKING
        self._armed = False

        self._on_state_changed: List[StateListener] = []
        self._on_tick: List[TickListener] = []
        self._on_completed: List[CompletionListener] = []

    # ----- Subscriptions -----
    def add_state_listener(self, fn: StateListener) -> Callable[[], None]:
        return self._add(self._on_state_changed, fn)

    def add_tick_listener(self, fn: TickListener) -> Callable[[], None]:
        return self._add(self._on_tick, fn)

    def add_completion_listener(self, fn: CompletionListener) -> Callable[[], None]:
        return self._add(self._on_completed, fn)

    def subscribe(self, listener: Any) -> Callable[[], None]:
        """
        Register any object implementing one or more of on_state_changed,
        on_tick, on_completed. Returns a function that removes all of them.
        """
        removers = []
        for name, bucket in (
            ("on_state_changed", self._on_state_changed),
            ("on_tick", self._on_tick),
            ("on_completed", self._on_completed),
        ):
            fn = getattr(listener, name, None)
            if callable(fn):
                removers.append(self._add(bucket, fn))

        def unsubscribe() -> None:
            for remove in removers:
                remove()

        return unsubscribe

    @staticmethod
    def _add(bucket: list, fn: Callable) -> Callable[[], None]:
        bucket.append(fn)

        def remove() -> None:
            if fn in bucket:
                bucket.remove(fn)

        return remove

    def _emit(self, bucket: list, *args) -> None:
        # copy: listeners may (un)subscribe or issue commands while we iterate
        for fn in list(bucket):
            try:
                fn(*args)
            except Exception:
                logger.exception("scheduler listener %r failed", fn)

    def _emit_state_change(self) -> None:
        self._emit(self._on_state_changed, self._phase, self._remaining_sec)

    # ----- Read-only state -----
    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def remaining_seconds(self) -> int:
        return self._remaining_sec

    @property
    def last_active_phase(self) -> Phase:
        return self._last_active_phase

    @property
    def settings(self) -> TimerSettings:
        return self._settings

    @property
    def is_armed(self) -> bool:
        return self._armed

    def snapshot(self) -> SchedulerSnapshot:
        return SchedulerSnapshot(
            phase=self._phase,
            remaining_seconds=self._remaining_sec,
            last_active_phase=self._last_active_phase,
            is_armed=self._armed,
        )

    # ----- Commands -----
    def start_work(self) -> None:
        self._start_phase(Phase.WORKING, self._settings.work_seconds)

    def start_break(self) -> None:
        self._start_phase(Phase.BREAKING, self._settings.break_seconds)

    def pause(self) -> None:
        if not self._phase.is_active:
            logger.debug("pause ignored in phase %s", self._phase.value)
            return
        self._last_active_phase = self._phase
        self._disarm()
        self._phase = Phase.PAUSED
        logger.info(
            "paused %s with %ds left", self._last_active_phase.value, self._remaining_sec
        )
        self._emit_state_change()

    def resume(self) -> None:
        if self._phase != Phase.PAUSED:
            logger.debug("resume ignored in phase %s", self._phase.value)
            return
        self._phase = self._last_active_phase
        self._arm()
        logger.info("resumed %s with %ds left", self._phase.value, self._remaining_sec)
        self._emit_state_change()

    def stop(self) -> None:
        self._disarm()
        self._phase = Phase.STOPPED
        self._remaining_sec = 0
        logger.info("stopped")
        self._emit_state_change()

    def postpone(self, minutes: int) -> None:
        """
        End the current break and start a fresh work phase of exactly
        `minutes`. The break's remaining time is discarded, not added.
        """
        if self._phase != Phase.BREAKING:
            logger.debug("postpone ignored in phase %s", self._phase.value)
            return
        if isinstance(minutes, bool) or not isinstance(minutes, int) or minutes < 1:
            raise ValueError(f"postpone minutes must be a positive integer, got {minutes!r}")
        self.pause()
        self._start_phase(Phase.WORKING, minutes * 60)

    def update_settings(self, settings: TimerSettings) -> None:
        # read only when a phase starts; the running countdown is untouched
        self._settings = settings
        logger.info(
            "settings updated: work=%dm break=%dm at_login=%s",
            settings.work_minutes,
            settings.break_minutes,
            settings.start_at_login,
        )

    def tick(self) -> None:
        """
        Clock callback. Ticks arriving while disarmed are stale and ignored.
        """
        if not self._armed:
            logger.debug("stale tick ignored in phase %s", self._phase.value)
            return

        if self._remaining_sec > 0:
            self._remaining_sec -= 1
            self._emit(self._on_tick, self._remaining_sec)
            return

        self._disarm()
        logger.info("%s phase completed", self._phase.value)
        self._emit(self._on_completed)

    # ----- Internals -----
    def _start_phase(self, phase: Phase, seconds: int) -> None:
        self._disarm()
        self._phase = phase
        self._last_active_phase = phase
        self._remaining_sec = int(seconds)
        self._arm()
        logger.info("started %s: %ds", phase.value, self._remaining_sec)
        self._emit_state_change()

    def _arm(self) -> None:
        self._armed = True
        self.clock.arm(self.tick)

    def _disarm(self) -> None:
        self._armed = False
        self.clock.disarm()
