# -*- coding: utf-8 -*-

import logging
import tkinter as tk
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class Clock(Protocol):
    """
    Periodic tick source. While armed, calls the callback about once a second.
    """

    @property
    def is_armed(self) -> bool: ...

    def arm(self, callback: Callable[[], None]) -> None: ...

    def disarm(self) -> None: ...


class TkClock:
    """
    1 Hz ticker on the Tk event loop (widget.after).
    Ticks and UI commands therefore run on the same thread.
    """

    def __init__(self, widget, interval_ms: int = 1000):
        self.widget = widget
        self.interval_ms = int(interval_ms)

        self._callback: Optional[Callable[[], None]] = None
        self._job = None
        # bumped on every arm/disarm; a job from an older arming is dropped
        self._generation = 0

    @property
    def is_armed(self) -> bool:
        return self._callback is not None

    def arm(self, callback: Callable[[], None]) -> None:
        self.disarm()
        self._callback = callback
        self._schedule(self._generation)

    def disarm(self) -> None:
        self._generation += 1
        self._callback = None
        if self._job is not None:
            try:
                self.widget.after_cancel(self._job)
            except tk.TclError:
                logger.debug("after_cancel failed for job %r", self._job)
            self._job = None

    def _schedule(self, generation: int) -> None:
        self._job = self.widget.after(self.interval_ms, lambda: self._fire(generation))

    def _fire(self, generation: int) -> None:
        if generation != self._generation or self._callback is None:
            logger.debug("dropping stale clock job (generation %d)", generation)
            return
        self._job = None
        # schedule first so a callback that disarms cancels the next job
        self._schedule(generation)
        self._callback()
