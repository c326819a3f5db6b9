# -*- coding: utf-8 -*-

import logging
import tkinter as tk
from typing import Callable

from tkinterweb import HtmlFrame

from ui.format import break_subtitle, format_time
from ui.markdown_renderer import MarkdownRenderer, MarkdownTheme

logger = logging.getLogger(__name__)

BREAK_TIPS_MD = """\
**Step away from the screen.**

- Look at something 20 feet away
- Roll your shoulders and stretch your wrists
- Drink some water
"""


class BreakOverlay:
    """
    Full-screen break prompt. Hidden until show().
    Buttons forward user intents; the overlay never touches the scheduler.
    """

    def __init__(
        self,
        master: tk.Misc,
        on_postpone: Callable[[int], None],
        on_skip: Callable[[], None],
    ):
        self.on_postpone = on_postpone
        self.on_skip = on_skip

        self.bg = "#111827"
        self.panel = "#FFFFFF"
        self.text = "#111827"
        self.muted = "#6B7280"

        self._visible = False
        self._last_displayed = -1

        self.win = tk.Toplevel(master)
        self.win.withdraw()
        self.win.overrideredirect(True)
        self.win.configure(bg=self.bg)
        # swallow close attempts; the break ends via the buttons or the timer
        self.win.protocol("WM_DELETE_WINDOW", lambda: None)

        self._md = MarkdownRenderer(
            MarkdownTheme(text=self.text, muted=self.muted, panel=self.panel)
        )
        self._build_ui()

    def _build_ui(self):
        card = tk.Frame(self.win, bg=self.panel, padx=40, pady=30)
        card.place(relx=0.5, rely=0.5, anchor="center", relwidth=0.6, relheight=0.7)

        tk.Label(
            card,
            text="BreakTime ☕️",
            bg=self.panel,
            fg=self.text,
            font=("Montserrat", 36, "bold"),
        ).pack(pady=(10, 6))

        self.subtitle_var = tk.StringVar(value=break_subtitle(0))
        tk.Label(
            card,
            textvariable=self.subtitle_var,
            bg=self.panel,
            fg=self.muted,
            font=("Montserrat", 14),
        ).pack()

        self.time_var = tk.StringVar(value=format_time(0))
        tk.Label(
            card,
            textvariable=self.time_var,
            bg=self.panel,
            fg=self.text,
            font=("DejaVu Sans Mono", 72, "bold"),
        ).pack(pady=(20, 10))

        self.tips = HtmlFrame(card, horizontal_scrollbar=False, vertical_scrollbar="auto")
        self.tips.pack(fill="both", expand=True, pady=(0, 10))
        self._render_tips(BREAK_TIPS_MD)

        btns = tk.Frame(card, bg=self.panel)
        btns.pack(pady=(10, 0))

        tk.Button(
            btns, text="Postpone 5 min", width=16, command=lambda: self.on_postpone(5)
        ).grid(row=0, column=0, padx=10)
        tk.Button(
            btns, text="Postpone 10 min", width=16, command=lambda: self.on_postpone(10)
        ).grid(row=0, column=1, padx=10)
        tk.Button(btns, text="Skip Break", width=16, command=self.on_skip).grid(
            row=1, column=0, columnspan=2, pady=(12, 0)
        )

    def _render_tips(self, md_text: str):
        html = self._md.to_html(md_text)
        try:
            self.tips.load_html(html)
        except tk.TclError:
            logger.exception("could not render break tips")

    # ---- Presentation ----
    @property
    def is_visible(self) -> bool:
        return self._visible

    def show(self, remaining_sec: int):
        self.update(remaining_sec)
        if self._visible:
            return
        self._visible = True

        w = self.win.winfo_screenwidth()
        h = self.win.winfo_screenheight()
        self.win.geometry(f"{w}x{h}+0+0")
        self.win.deiconify()
        try:
            self.win.attributes("-topmost", True)
            self.win.attributes("-alpha", 0.96)
        except tk.TclError:
            # not every window manager supports these
            logger.debug("topmost/alpha not supported")
        self.win.lift()
        self.win.focus_force()
        # grab so keystrokes and clicks don't leak to the status window
        try:
            self.win.grab_set()
        except tk.TclError:
            logger.debug("grab_set failed")

    def update(self, remaining_sec: int):
        if remaining_sec == self._last_displayed:
            return
        self._last_displayed = remaining_sec
        self.time_var.set(format_time(remaining_sec))
        self.subtitle_var.set(break_subtitle(remaining_sec))

    def hide(self):
        if not self._visible:
            return
        self._visible = False
        self._last_displayed = -1
        try:
            self.win.grab_release()
        except tk.TclError:
            logger.debug("grab_release failed")
        self.win.withdraw()
