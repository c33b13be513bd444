# -*- coding: utf-8 -*-

import tkinter as tk
from tkinter import ttk
from typing import Callable

from tkinterweb import HtmlFrame

from core.timer_engine import EngineSnapshot
from domain.models import TimerPhase

_KEY_HTML = (
    '<html><body style="margin:0;padding:0;background:#000;">'
    '<img src="{src}" width="72" height="72" />'
    "</body></html>"
)

PHASE_LABELS = {
    TimerPhase.IDLE_WORK: "Ready to work",
    TimerPhase.RUNNING_WORK: "Working",
    TimerPhase.PAUSED_WORK: "Work paused",
    TimerPhase.IDLE_BREAK: "Ready for break",
    TimerPhase.RUNNING_BREAK: "On break",
    TimerPhase.PAUSED_BREAK: "Break paused",
}


class KeyPreview(ttk.Frame):
    """One simulated hardware key: mouse press/release in, image + title out."""

    def __init__(
        self,
        master,
        instance_id: str,
        on_press: Callable[[str], None],
        on_release: Callable[[str], None],
    ):
        super().__init__(master, padding=6)

        self.instance_id = instance_id
        self.on_press = on_press
        self.on_release = on_release

        self._build_ui()

    def _build_ui(self):
        self.columnconfigure(0, weight=1)

        self.screen = HtmlFrame(self, vertical_scrollbar=False, horizontal_scrollbar=False)
        self.screen.configure(width=80, height=80)
        self.screen.grid(row=0, column=0)

        self.title_var = tk.StringVar(value="")
        self.phase_var = tk.StringVar(value=PHASE_LABELS[TimerPhase.IDLE_WORK])

        ttk.Label(self, textvariable=self.title_var, font=("Sans", 11, "bold")).grid(
            row=1, column=0, pady=(4, 0)
        )
        ttk.Label(self, textvariable=self.phase_var).grid(row=2, column=0)
        ttk.Label(self, text=self.instance_id, foreground="gray").grid(row=3, column=0)

        # the whole tile acts as the key
        for w in (self, self.screen):
            w.bind("<ButtonPress-1>", lambda e: self.on_press(self.instance_id), add="+")
            w.bind("<ButtonRelease-1>", lambda e: self.on_release(self.instance_id), add="+")

    # ----- Host output -----
    def show_title(self, text: str):
        self.title_var.set(text)

    def show_image(self, data_uri: str):
        self.screen.load_html(_KEY_HTML.format(src=data_uri))

    def show_phase(self, snap: EngineSnapshot):
        self.phase_var.set(PHASE_LABELS[snap.phase])
