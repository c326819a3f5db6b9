# -*- coding: utf-8 -*-

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict


class Phase(str, Enum):
    WORKING = "working"
    BREAKING = "breaking"
    PAUSED = "paused"
    STOPPED = "stopped"

    @property
    def is_active(self) -> bool:
        return self in (Phase.WORKING, Phase.BREAKING)


def _positive_int(name: str, value: Any) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise ValueError(f"{name} must be >= 1, got {value}")
    return value


@dataclass(frozen=True)
class TimerSettings:
    work_minutes: int = 25
    break_minutes: int = 5
    start_at_login: bool = False

    DEFAULT: ClassVar["TimerSettings"]

    def __post_init__(self):
        _positive_int("work_minutes", self.work_minutes)
        _positive_int("break_minutes", self.break_minutes)
        if not isinstance(self.start_at_login, bool):
            raise ValueError(
                f"start_at_login must be a bool, got {self.start_at_login!r}"
            )

    @property
    def work_seconds(self) -> int:
        return self.work_minutes * 60

    @property
    def break_seconds(self) -> int:
        return self.break_minutes * 60

    def to_payload(self) -> Dict[str, Any]:
        return {
            "workDurationMinutes": self.work_minutes,
            "breakDurationMinutes": self.break_minutes,
            "startAtLogin": self.start_at_login,
        }

    @classmethod
    def from_payload(cls, payload: Any) -> "TimerSettings":
        """
        Inverse of to_payload(). Raises ValueError for anything that is not
        a complete, well-typed payload.
        """
        if not isinstance(payload, dict):
            raise ValueError("settings payload must be an object")
        try:
            work = payload["workDurationMinutes"]
            brk = payload["breakDurationMinutes"]
            at_login = payload["startAtLogin"]
        except KeyError as e:
            raise ValueError(f"settings payload missing {e.args[0]!r}") from e
        return cls(work_minutes=work, break_minutes=brk, start_at_login=at_login)


TimerSettings.DEFAULT = TimerSettings(work_minutes=25, break_minutes=5, start_at_login=False)


@dataclass(frozen=True)
class SchedulerSnapshot:
    phase: Phase
    remaining_seconds: int
    last_active_phase: Phase  # WORKING | BREAKING
    is_armed: bool

    @property
    def is_active(self) -> bool:
        return self.phase.is_active
