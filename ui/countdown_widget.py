# -*- coding: utf-8 -*-

import tkinter as tk
from tkinter import ttk

from core.countdown_engine import EngineSnapshot
from domain.models import RunState
from services.countdown_service import CountdownService

_STATE_TEXT = {
    RunState.IDLE: "Ready",
    RunState.RUNNING: "Running...",
    RunState.PAUSED: "Paused",
    RunState.COMPLETED: "Time's up!",
}


class CountdownWidget(ttk.Frame):
    def __init__(self, master, countdown_service: CountdownService):
        super().__init__(master)

        self.countdown_service = countdown_service

        self._build_ui()

        # wire callbacks from service -> widget UI
        self.countdown_service.set_on_tick(self._on_tick)
        self.countdown_service.set_on_state_change(self._on_state_change)
        self.countdown_service.set_on_complete(self._on_complete)

        # initial render
        self._render(self.countdown_service.get_snapshot())
        self._update_buttons()

    def _build_ui(self):
        self.columnconfigure(0, weight=1)

        self.hours_var = tk.IntVar(value=0)
        self.minutes_var = tk.IntVar(value=5)
        self.seconds_var = tk.IntVar(value=0)
        self.time_var = tk.StringVar(value="00:00")
        self.info_var = tk.StringVar(value="Pick a time and press Set")
        self.progress_var = tk.DoubleVar(value=0.0)

        title = ttk.Label(self, text="Countdown", font=("Sans", 12, "bold"))
        title.grid(row=0, column=0, sticky="w", pady=(0, 6))

        picker = ttk.Frame(self)
        picker.grid(row=1, column=0, sticky="w")
        for col, (label, var, top) in enumerate(
            (
                ("h", self.hours_var, 23),
                ("m", self.minutes_var, 59),
                ("s", self.seconds_var, 59),
            )
        ):
            ttk.Spinbox(
                picker, from_=0, to=top, width=3, textvariable=var, wrap=True
            ).grid(row=0, column=col * 2)
            ttk.Label(picker, text=label).grid(row=0, column=col * 2 + 1, padx=(2, 8))
        self.set_btn = ttk.Button(picker, text="Set", command=self._configure)
        self.set_btn.grid(row=0, column=6)

        self.time_label = ttk.Label(
            self, textvariable=self.time_var, font=("Sans", 32, "bold")
        )
        self.time_label.grid(row=2, column=0, sticky="w", pady=(8, 4))

        self.progress = ttk.Progressbar(
            self, variable=self.progress_var, maximum=1.0, mode="determinate"
        )
        self.progress.grid(row=3, column=0, sticky="ew")

        self.info_label = ttk.Label(self, textvariable=self.info_var)
        self.info_label.grid(row=4, column=0, sticky="w", pady=(4, 10))

        btns = ttk.Frame(self)
        btns.grid(row=5, column=0, sticky="w")

        self.start_btn = ttk.Button(btns, text="Start", command=self._start_or_resume)
        self.pause_btn = ttk.Button(btns, text="Pause", command=self._pause)
        self.reset_btn = ttk.Button(btns, text="Reset", command=self._reset)

        self.start_btn.grid(row=0, column=0, padx=(0, 6))
        self.pause_btn.grid(row=0, column=1, padx=(0, 6))
        self.reset_btn.grid(row=0, column=2)

    def _update_buttons(self):
        snap = self.countdown_service.get_snapshot()

        # Set only when nothing is active
        if snap.state in (RunState.IDLE, RunState.COMPLETED):
            self.set_btn.state(["!disabled"])
        else:
            self.set_btn.state(["disabled"])

        if snap.state == RunState.PAUSED:
            self.start_btn.configure(text="Resume")
            self.start_btn.state(["!disabled"])
        elif snap.state == RunState.IDLE and snap.remaining_sec > 0:
            self.start_btn.configure(text="Start")
            self.start_btn.state(["!disabled"])
        else:
            self.start_btn.configure(text="Start")
            self.start_btn.state(["disabled"])

        if snap.state == RunState.RUNNING:
            self.pause_btn.state(["!disabled"])
        else:
            self.pause_btn.state(["disabled"])

        if snap.total_sec > 0 and snap.state != RunState.IDLE:
            self.reset_btn.state(["!disabled"])
        else:
            self.reset_btn.state(["disabled"])

    def _read_picker(self):
        try:
            return (
                self.hours_var.get(),
                self.minutes_var.get(),
                self.seconds_var.get(),
            )
        except tk.TclError:
            # non-numeric text in a spinbox
            return None

    def _configure(self):
        hms = self._read_picker()
        if hms is None or not self.countdown_service.configure(*hms):
            self.info_var.set("Pick a non-zero time.")

    def _start_or_resume(self):
        if self.countdown_service.state == RunState.PAUSED:
            self.countdown_service.resume()
        else:
            self.countdown_service.start()

    def _pause(self):
        self.countdown_service.pause()

    def _reset(self):
        self.countdown_service.reset()

    # ---- Service callbacks ----
    def _on_tick(self, snap: EngineSnapshot):
        self._render(snap)

    def _on_state_change(self, snap: EngineSnapshot):
        self._render(snap)
        self._update_buttons()

    def _on_complete(self, snap: EngineSnapshot):
        self._render(snap)
        self._update_buttons()
        self.bell()

    def _render(self, snap: EngineSnapshot):
        self.time_var.set(snap.formatted)
        self.progress_var.set(snap.progress)
        if snap.total_sec == 0:
            self.info_var.set("Pick a time and press Set")
        else:
            self.info_var.set(_STATE_TEXT[snap.state])
