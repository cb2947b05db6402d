# -*- coding: utf-8 -*-

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class RunState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


@dataclass
class SavedCountdown:
    remaining_sec: int
    total_sec: int
    state: RunState
    suspended_at: Optional[float]  # unix ts, only set while running


@dataclass(frozen=True)
class Alert:
    title: str = "Countdown Finished"
    body: str = "Your configured time has elapsed."
