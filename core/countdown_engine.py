# -*- coding: utf-8 -*-

import logging
from dataclasses import dataclass
from typing import Optional

from domain.models import RunState, SavedCountdown

logger = logging.getLogger(__name__)


def format_time(seconds: int) -> str:
    seconds = max(0, int(seconds))
    h = seconds // 3600
    m = (seconds % 3600) // 60
    s = seconds % 60
    if seconds >= 3600:
        return f"{h:02d}:{m:02d}:{s:02d}"
    return f"{m:02d}:{s:02d}"


@dataclass(frozen=True)
class EngineSnapshot:
    total_sec: int
    remaining_sec: int
    state: RunState

    @property
    def formatted(self) -> str:
        return format_time(self.remaining_sec)

    @property
    def progress(self) -> float:
        if self.total_sec <= 0:
            return 0.0
        return min(1.0, max(0.0, 1.0 - self.remaining_sec / self.total_sec))


class CountdownEngine:
    """
    Pure countdown state machine (no Tkinter, no clock).
    Wall-clock values are passed in by the caller; the service drives tick().
    Guarded operations return False and change nothing when their
    precondition does not hold.
    """

    def __init__(self):
        self.total_sec = 0
        self.remaining_sec = 0
        self.state = RunState.IDLE
        self.suspended_at: Optional[float] = None
        self._remaining_at_suspend = 0

    def snapshot(self) -> EngineSnapshot:
        return EngineSnapshot(
            total_sec=self.total_sec,
            remaining_sec=self.remaining_sec,
            state=self.state,
        )

    def configure(self, hours: int, minutes: int, seconds: int) -> bool:
        hours, minutes, seconds = int(hours), int(minutes), int(seconds)
        if min(hours, minutes, seconds) < 0:
            logger.debug("configure rejected: negative field")
            return False
        if hours == 0 and minutes == 0 and seconds == 0:
            logger.debug("configure rejected: zero duration")
            return False
        if self.state in (RunState.RUNNING, RunState.PAUSED):
            # total is fixed while a countdown is active
            logger.debug("configure rejected: countdown is %s", self.state.value)
            return False

        self.total_sec = hours * 3600 + minutes * 60 + seconds
        self.remaining_sec = self.total_sec
        self.state = RunState.IDLE
        self.suspended_at = None
        return True

    def start(self) -> bool:
        if self.state != RunState.IDLE or self.remaining_sec <= 0:
            return False
        self.state = RunState.RUNNING
        return True

    def pause(self) -> bool:
        if self.state != RunState.RUNNING:
            return False
        self.state = RunState.PAUSED
        self.suspended_at = None
        return True

    def resume(self) -> bool:
        if self.state != RunState.PAUSED or self.remaining_sec <= 0:
            return False
        self.state = RunState.RUNNING
        return True

    def reset(self) -> None:
        self.remaining_sec = self.total_sec
        self.state = RunState.IDLE
        self.suspended_at = None

    def tick(self) -> bool:
        """
        Returns True if the countdown completed on this tick.
        """
        if self.state != RunState.RUNNING:
            return False

        if self.remaining_sec > 0:
            self.remaining_sec -= 1

        if self.remaining_sec <= 0:
            self._complete()
            return True
        return False

    def on_suspend(self, now: float) -> None:
        if self.state == RunState.RUNNING:
            self.suspended_at = float(now)
            self._remaining_at_suspend = self.remaining_sec

    def on_resume(self, now: float) -> bool:
        """
        Reconcile the wall-clock gap since on_suspend().
        Returns True if the countdown completed during the gap.
        """
        if self.state != RunState.RUNNING or self.suspended_at is None:
            return False

        # a clock that went backwards counts as no time passed
        elapsed = max(0, int(float(now) - self.suspended_at))
        self.suspended_at = None
        # ticks that still fired during the gap are superseded by the wall clock
        self.remaining_sec = max(0, self._remaining_at_suspend - elapsed)

        if self.remaining_sec == 0:
            self._complete()
            return True
        return False

    def formatted_time(self) -> str:
        return format_time(self.remaining_sec)

    def progress(self) -> float:
        return self.snapshot().progress

    # ----- snapshot store support -----
    def to_saved(self) -> SavedCountdown:
        return SavedCountdown(
            remaining_sec=self.remaining_sec,
            total_sec=self.total_sec,
            state=self.state,
            suspended_at=self.suspended_at,
        )

    def restore(self, saved: SavedCountdown) -> None:
        total = max(0, int(saved.total_sec))
        remaining = min(total, max(0, int(saved.remaining_sec)))

        self.total_sec = total
        self.remaining_sec = remaining
        self.state = saved.state
        self.suspended_at = (
            saved.suspended_at if saved.state == RunState.RUNNING else None
        )
        self._remaining_at_suspend = remaining

        if self.state in (RunState.RUNNING, RunState.PAUSED) and remaining == 0:
            self._complete()

    def _complete(self) -> None:
        self.remaining_sec = 0
        self.state = RunState.COMPLETED
        self.suspended_at = None
