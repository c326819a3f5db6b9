# -*- coding: utf-8 -*-

from typing import List

from domain.models import Phase, SchedulerSnapshot

WORK_ICON = "💼"
BREAK_ICON = "☕️"
PAUSED_ICON = "⏰"
IDLE_ICON = "⏸️"
NO_TIME = "--:--"


def format_time(seconds: int) -> str:
    m = max(0, seconds) // 60
    s = max(0, seconds) % 60
    return f"{m:02d}:{s:02d}"


def status_text(snap: SchedulerSnapshot) -> str:
    if snap.phase == Phase.WORKING:
        return f"{WORK_ICON} {format_time(snap.remaining_seconds)}"
    if snap.phase == Phase.BREAKING:
        return f"{BREAK_ICON} {format_time(snap.remaining_seconds)}"
    if snap.phase == Phase.PAUSED:
        if snap.remaining_seconds > 0:
            return f"{PAUSED_ICON} {format_time(snap.remaining_seconds)}"
        return f"{IDLE_ICON} {NO_TIME}"
    return f"{PAUSED_ICON} {NO_TIME}"


def status_tooltip(snap: SchedulerSnapshot) -> str:
    t = format_time(snap.remaining_seconds)
    if snap.phase == Phase.WORKING:
        return f"Work time: {t} remaining"
    if snap.phase == Phase.BREAKING:
        return f"Break time: {t} remaining"
    if snap.phase == Phase.PAUSED:
        return "Timer is paused. Click to resume or start a new timer."
    return "BreakTime is stopped. Click to start a new timer."


def menu_commands(phase: Phase) -> List[str]:
    """
    Command ids offered by the status menu for a phase, in display order.
    """
    if phase.is_active:
        cmds = ["pause", "stop"]
    elif phase == Phase.PAUSED:
        cmds = ["resume", "stop"]
    else:
        cmds = ["start_work"]
    return cmds + ["settings", "quit"]


MENU_LABELS = {
    "start_work": "Start Work Timer",
    "pause": "Pause Timer",
    "resume": "Resume Timer",
    "stop": "Stop Timer",
    "settings": "Settings...",
    "quit": "Quit",
}


def break_subtitle(remaining_sec: int) -> str:
    if remaining_sec > 60:
        return "Rest your eyes and stretch"
    return "Break ending soon..."
