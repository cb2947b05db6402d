# -*- coding: utf-8 -*-

import tkinter as tk
from typing import Any, Callable, Optional


class TkScheduler:
    """
    One-shot callbacks on the Tk event loop (widget.after / after_cancel).
    """

    def __init__(self, widget: tk.Misc):
        self.widget = widget

    def call_later(self, delay_ms: int, fn: Callable[[], None]) -> Any:
        return self.widget.after(max(0, int(delay_ms)), fn)

    def cancel(self, job: Optional[Any]) -> None:
        if job is None:
            return
        try:
            self.widget.after_cancel(job)
        except tk.TclError:
            # job already fired or widget destroyed
            pass
