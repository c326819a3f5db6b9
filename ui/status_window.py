# -*- coding: utf-8 -*-

import logging
import tkinter as tk
from tkinter import ttk
from typing import Callable, Dict, Optional

from domain.models import SchedulerSnapshot, TimerSettings
from services.session_orchestrator import SessionOrchestrator
from storage.repos import SettingsStore
from ui.break_overlay import BreakOverlay
from ui.format import MENU_LABELS, menu_commands, status_text, status_tooltip
from ui.settings_window import SettingsWindow

logger = logging.getLogger(__name__)


class StatusWindow:
    """
    Small always-on-top status indicator + command menu.
    Implements the orchestrator's Presentation interface (together with the
    break overlay it owns).
    """

    def __init__(
        self,
        root: tk.Tk,
        orchestrator: SessionOrchestrator,
        settings_store: SettingsStore,
        on_quit: Optional[Callable[[], None]] = None,
    ):
        self.root = root
        self.orchestrator = orchestrator
        self.settings_store = settings_store
        self.on_quit = on_quit or self.root.destroy

        self._settings_win: Optional[SettingsWindow] = None
        self._last_phase = None

        self.root.title("BreakTime")
        self.root.resizable(False, False)
        try:
            self.root.attributes("-topmost", True)
        except tk.TclError:
            logger.debug("topmost not supported")
        self.root.protocol("WM_DELETE_WINDOW", self._quit)

        self._build_ui()

        self.overlay = BreakOverlay(
            self.root,
            on_postpone=self.orchestrator.request_postpone,
            on_skip=self.orchestrator.request_skip_break,
        )

        self._actions: Dict[str, Callable[[], None]] = {
            "start_work": self.orchestrator.start_work,
            "pause": self.orchestrator.pause,
            "resume": self.orchestrator.resume,
            "stop": self.orchestrator.stop,
            "settings": self._show_settings,
            "quit": self._quit,
        }

    def _build_ui(self):
        outer = ttk.Frame(self.root, padding=10)
        outer.pack(fill="both", expand=True)

        self.status_var = tk.StringVar(value="")
        self.tooltip_var = tk.StringVar(value="")

        self.status_label = ttk.Label(
            outer, textvariable=self.status_var, font=("DejaVu Sans Mono", 20, "bold")
        )
        self.status_label.pack(anchor="w")
        ttk.Label(outer, textvariable=self.tooltip_var, foreground="#6B7280").pack(
            anchor="w", pady=(2, 8)
        )

        self.btns = ttk.Frame(outer)
        self.btns.pack(anchor="w")

        self.menu = tk.Menu(self.root, tearoff=0)
        for w in (self.root, self.status_label):
            w.bind("<Button-3>", self._popup_menu)

    # ----- Menu -----
    def _rebuild_commands(self, snap: SchedulerSnapshot):
        for child in self.btns.winfo_children():
            child.destroy()
        self.menu.delete(0, "end")

        cmds = menu_commands(snap.phase)
        col = 0
        for cmd in cmds:
            if cmd in ("settings", "quit"):
                continue
            ttk.Button(
                self.btns, text=MENU_LABELS[cmd], command=self._actions[cmd]
            ).grid(row=0, column=col, padx=(0, 6))
            col += 1
        ttk.Button(self.btns, text="⚙", width=3, command=self._show_settings).grid(
            row=0, column=col
        )

        for cmd in cmds:
            if cmd in ("settings", "quit"):
                self.menu.add_separator()
            self.menu.add_command(label=MENU_LABELS[cmd], command=self._actions[cmd])

    def _popup_menu(self, event):
        try:
            self.menu.tk_popup(event.x_root, event.y_root)
        finally:
            self.menu.grab_release()

    # ----- Presentation -----
    def show_state(self, snap: SchedulerSnapshot) -> None:
        self.status_var.set(status_text(snap))
        self.tooltip_var.set(status_tooltip(snap))
        if snap.phase != self._last_phase:
            self._last_phase = snap.phase
            self._rebuild_commands(snap)

    def show_break(self, remaining_sec: int) -> None:
        self.overlay.show(remaining_sec)

    def update_break(self, remaining_sec: int) -> None:
        self.overlay.update(remaining_sec)

    def hide_break(self) -> None:
        self.overlay.hide()

    # ----- Actions -----
    def _show_settings(self):
        if self._settings_win is not None and self._settings_win.is_open:
            self._settings_win.focus()
            return
        self._settings_win = SettingsWindow(
            self.root,
            settings=self.settings_store.load(),
            on_save=self._on_settings_saved,
        )

    def _on_settings_saved(self, settings: TimerSettings):
        self.orchestrator.apply_settings(settings)
        self._settings_win = None

    def _quit(self):
        logger.info("quit requested")
        self.orchestrator.stop()
        self.on_quit()
