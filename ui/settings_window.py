# -*- coding: utf-8 -*-

import tkinter as tk
from tkinter import ttk
from typing import Callable

from domain.models import TimerSettings


class SettingsWindow:
    def __init__(
        self,
        master: tk.Misc,
        settings: TimerSettings,
        on_save: Callable[[TimerSettings], None],
    ):
        self.on_save = on_save
        self.is_open = True

        self.win = tk.Toplevel(master)
        self.win.title("BreakTime Settings")
        self.win.resizable(False, False)
        self.win.protocol("WM_DELETE_WINDOW", self.close)

        self.work_var = tk.StringVar(value=str(settings.work_minutes))
        self.break_var = tk.StringVar(value=str(settings.break_minutes))
        self.login_var = tk.BooleanVar(value=settings.start_at_login)
        self.err_var = tk.StringVar(value="")

        self._build_ui()
        self.focus()

    def _build_ui(self):
        f = ttk.Frame(self.win, padding=16)
        f.pack(fill="both", expand=True)
        f.columnconfigure(1, weight=1)

        ttk.Label(f, text="Work duration (minutes)").grid(row=0, column=0, sticky="w")
        ttk.Spinbox(f, from_=1, to=240, width=6, textvariable=self.work_var).grid(
            row=0, column=1, sticky="e", pady=4
        )

        ttk.Label(f, text="Break duration (minutes)").grid(row=1, column=0, sticky="w")
        ttk.Spinbox(f, from_=1, to=120, width=6, textvariable=self.break_var).grid(
            row=1, column=1, sticky="e", pady=4
        )

        ttk.Checkbutton(f, text="Start at login", variable=self.login_var).grid(
            row=2, column=0, columnspan=2, sticky="w", pady=(8, 4)
        )

        ttk.Label(f, textvariable=self.err_var, foreground="red").grid(
            row=3, column=0, columnspan=2, sticky="w"
        )

        btns = ttk.Frame(f)
        btns.grid(row=4, column=0, columnspan=2, sticky="e", pady=(10, 0))
        ttk.Button(btns, text="Cancel", command=self.close).pack(side="right")
        ttk.Button(btns, text="Save", command=self._save).pack(side="right", padx=(0, 6))

        self.win.bind("<Return>", lambda e: self._save())
        self.win.bind("<Escape>", lambda e: self.close())

    def _save(self):
        try:
            settings = TimerSettings(
                work_minutes=int(self.work_var.get()),
                break_minutes=int(self.break_var.get()),
                start_at_login=bool(self.login_var.get()),
            )
        except ValueError as e:
            self.err_var.set(str(e))
            return
        self.close()
        self.on_save(settings)

    def focus(self):
        self.win.deiconify()
        self.win.lift()
        self.win.focus_force()

    def close(self):
        self.is_open = False
        self.win.destroy()
