# -*- coding: utf-8 -*-

import logging
import tkinter as tk
from tkinter import ttk
from typing import Any, Dict, Optional

from core.settings import DEFAULT_BREAK_MINUTES, DEFAULT_CYCLE_COUNT, DEFAULT_WORK_MINUTES, MAX_CYCLES, MIN_CYCLES
from domain.models import EventKind, HostEvent
from services.registry import InstanceRegistry
from services.timer_service import HostSink
from ui.key_preview import KeyPreview

logger = logging.getLogger(__name__)

MAX_KEYS = 8


class PreviewWindow(HostSink):
    """
    Desktop stand-in for the hardware host: delivers appear / press /
    settings events and shows whatever the timers draw.
    """

    def __init__(
        self,
        keys: int = 3,
        work_minutes: int = DEFAULT_WORK_MINUTES,
        break_minutes: int = DEFAULT_BREAK_MINUTES,
        cycles: int = DEFAULT_CYCLE_COUNT,
        sound: bool = False,
    ):
        self.root = tk.Tk()
        self.root.title("Interval Timer Keys")
        self.root.resizable(False, False)

        self.registry: Optional[InstanceRegistry] = None
        self._initial_keys = max(1, min(MAX_KEYS, keys))
        self._keys: Dict[str, KeyPreview] = {}
        self._next_key = 1

        self.work_var = tk.StringVar(value=str(work_minutes))
        self.break_var = tk.StringVar(value=str(break_minutes))
        self.cycles_var = tk.StringVar(value=str(cycles))
        self.sound_var = tk.BooleanVar(value=sound)

        self._build_ui()
        self.root.protocol("WM_DELETE_WINDOW", self._on_close)

    def _build_ui(self):
        outer = ttk.Frame(self.root, padding=10)
        outer.pack(fill="both", expand=True)

        # TOP: settings panel
        panel = ttk.Labelframe(outer, text="Settings", padding=10)
        panel.grid(row=0, column=0, sticky="ew")

        ttk.Label(panel, text="Work (min)").grid(row=0, column=0, sticky="w")
        ttk.Spinbox(panel, from_=1, to=180, width=5, textvariable=self.work_var).grid(
            row=0, column=1, padx=(6, 12)
        )
        ttk.Label(panel, text="Break (min)").grid(row=0, column=2, sticky="w")
        ttk.Spinbox(panel, from_=1, to=60, width=5, textvariable=self.break_var).grid(
            row=0, column=3, padx=(6, 12)
        )
        ttk.Label(panel, text="Cycles").grid(row=0, column=4, sticky="w")
        ttk.Spinbox(panel, from_=MIN_CYCLES, to=MAX_CYCLES, width=3, textvariable=self.cycles_var).grid(
            row=0, column=5, padx=(6, 12)
        )
        ttk.Checkbutton(panel, text="Sound", variable=self.sound_var).grid(row=0, column=6)
        ttk.Button(panel, text="Apply", command=self._apply_settings).grid(row=0, column=7, padx=(12, 0))

        # MIDDLE: keys
        self.deck = ttk.Frame(outer, padding=(0, 10))
        self.deck.grid(row=1, column=0, sticky="ew")

        # BOTTOM: add / remove
        actions = ttk.Frame(outer)
        actions.grid(row=2, column=0, sticky="ew")
        ttk.Button(actions, text="Add key", command=self.add_key).pack(side="left")
        ttk.Button(actions, text="Remove key", command=self.remove_last_key).pack(side="left", padx=(6, 0))
        ttk.Label(actions, text="Click: start / pause   Hold 1.5s: reset / skip", foreground="gray").pack(
            side="right"
        )

    def attach(self, registry: InstanceRegistry):
        self.registry = registry
        for _ in range(self._initial_keys):
            self.add_key()

    def run(self):
        self.root.mainloop()

    # ----- HostSink -----
    def set_title(self, instance_id: str, text: str) -> None:
        key = self._keys.get(instance_id)
        if key is not None:
            key.show_title(text)

    def set_image(self, instance_id: str, image: str) -> None:
        key = self._keys.get(instance_id)
        if key is not None:
            key.show_image(image)

    # ----- Keys -----
    def raw_settings(self) -> Dict[str, Any]:
        # same shape the hardware host stores: numbers as strings
        return {
            "workTime": self.work_var.get(),
            "breakTime": self.break_var.get(),
            "numCycles": self.cycles_var.get(),
            "soundEnabled": bool(self.sound_var.get()),
        }

    def add_key(self):
        if self.registry is None or len(self._keys) >= MAX_KEYS:
            return
        instance_id = f"key-{self._next_key}"
        self._next_key += 1

        key = KeyPreview(self.deck, instance_id, on_press=self._press, on_release=self._release)
        key.grid(row=0, column=len(self._keys), padx=4)
        self._keys[instance_id] = key

        self._send(EventKind.APPEAR, instance_id)
        inst = self.registry.get(instance_id)
        if inst is not None:
            inst.set_on_phase_change(key.show_phase)

    def remove_last_key(self):
        if not self._keys:
            return
        instance_id = list(self._keys)[-1]
        self._send(EventKind.DISAPPEAR, instance_id)
        self._keys.pop(instance_id).destroy()

    # ----- Events -----
    def _send(self, kind: EventKind, instance_id: str):
        if self.registry is None:
            return
        settings = self.raw_settings() if kind in (EventKind.APPEAR, EventKind.SETTINGS_CHANGED) else None
        self.registry.dispatch(HostEvent(kind, instance_id, settings))

    def _press(self, instance_id: str):
        self._send(EventKind.PRESS_DOWN, instance_id)

    def _release(self, instance_id: str):
        self._send(EventKind.PRESS_UP, instance_id)

    def _apply_settings(self):
        logger.info(f"Applying settings to {len(self._keys)} key(s): {self.raw_settings()}")
        for instance_id in list(self._keys):
            self._send(EventKind.SETTINGS_CHANGED, instance_id)

    def _on_close(self):
        if self.registry is not None:
            self.registry.close()
        self.root.destroy()
