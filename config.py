# config.py
# -*- coding: utf-8 -*-

import os
from dataclasses import dataclass
from typing import Mapping, Optional

# --- DEFAULTS ---
DB_PATH = "countdown.db"
LOG_LEVEL = "INFO"
TICK_INTERVAL_MS = 1000  # one tick == one second of countdown

# --- COMPLETION ALERT ---
NOTIFY_COMMAND = "notify-send"
ALERT_TITLE = "Countdown Finished"
ALERT_BODY = "Your configured time has elapsed."


@dataclass(frozen=True)
class Settings:
    db_path: str = DB_PATH
    log_level: str = LOG_LEVEL
    tick_interval_ms: int = TICK_INTERVAL_MS
    notify_command: str = NOTIFY_COMMAND
    alert_title: str = ALERT_TITLE
    alert_body: str = ALERT_BODY


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ
    return Settings(
        db_path=env.get("COUNTDOWN_DB") or DB_PATH,
        log_level=(env.get("COUNTDOWN_LOG_LEVEL") or LOG_LEVEL).upper(),
        notify_command=env.get("COUNTDOWN_NOTIFY_COMMAND") or NOTIFY_COMMAND,
    )
