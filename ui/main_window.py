# -*- coding: utf-8 -*-

import logging
import tkinter as tk
from tkinter import ttk
from typing import Callable

from services.countdown_service import CountdownService
from ui.countdown_widget import CountdownWidget

logger = logging.getLogger(__name__)


class MainWindow:
    def __init__(
        self,
        root: tk.Tk,
        countdown_service: CountdownService,
        on_close: Callable[[], None],
    ):
        self.root = root
        self.countdown_service = countdown_service
        self.on_close = on_close

        self.root.title("Countdown")
        self.root.geometry("320x240")

        self._suspended = False

        self._build_ui()

        # minimise/restore == app background/foreground
        self.root.bind("<Unmap>", self._on_unmap)
        self.root.bind("<Map>", self._on_map)
        self.root.protocol("WM_DELETE_WINDOW", self._close)

    def _build_ui(self):
        outer = ttk.Frame(self.root, padding=10)
        outer.pack(fill="both", expand=True)

        self.countdown = CountdownWidget(outer, countdown_service=self.countdown_service)
        self.countdown.pack(fill="both", expand=True)

    def run(self):
        self.root.mainloop()

    # ----- suspend / resume -----
    def _on_unmap(self, event=None):
        # <Unmap> is also delivered for child widgets
        if event is not None and event.widget is not self.root:
            return
        if self._suspended:
            return
        self._suspended = True
        logger.debug("window unmapped, suspending")
        self.countdown_service.on_suspend()

    def _on_map(self, event=None):
        if event is not None and event.widget is not self.root:
            return
        if not self._suspended:
            return
        self._suspended = False
        logger.debug("window mapped, resuming")
        self.countdown_service.on_resume()

    def _close(self):
        self.countdown_service.shutdown()
        self.on_close()
        self.root.destroy()
