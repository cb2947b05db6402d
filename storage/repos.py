# storage/repos.py
#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import logging
from typing import Dict, Optional

from domain.models import RunState, SavedCountdown
from storage.db import Database

logger = logging.getLogger(__name__)


class AppStateRepo:
    def __init__(self, db: Database):
        self.db = db

    def get(self, key: str) -> Optional[str]:
        row = self.db.conn.execute(
            "SELECT value FROM app_state WHERE key=?",
            (key,),
        ).fetchone()
        return row["value"] if row else None

    def set_many(self, values: Dict[str, str]) -> None:
        self.db.conn.executemany(
            """
            INSERT INTO app_state(key, value) VALUES(?, ?)
            ON CONFLICT(key) DO UPDATE SET value=excluded.value
            """,
            list(values.items()),
        )
        self.db.conn.commit()

    def delete_prefix(self, prefix: str) -> None:
        self.db.conn.execute(
            "DELETE FROM app_state WHERE key LIKE ?", (prefix + "%",)
        )
        self.db.conn.commit()


class CountdownStateRepo:
    """
    Transient countdown snapshot on top of the app_state key-value table.
    """

    PREFIX = "countdown."
    K_REMAINING = PREFIX + "remaining_sec"
    K_TOTAL = PREFIX + "total_sec"
    K_STATE = PREFIX + "state"
    K_SUSPENDED_AT = PREFIX + "suspended_at"

    def __init__(self, state_repo: AppStateRepo):
        self.state_repo = state_repo

    def save(self, saved: SavedCountdown) -> None:
        self.state_repo.set_many(
            {
                self.K_REMAINING: str(int(saved.remaining_sec)),
                self.K_TOTAL: str(int(saved.total_sec)),
                self.K_STATE: saved.state.value,
                # empty string == not suspended
                self.K_SUSPENDED_AT: (
                    repr(float(saved.suspended_at))
                    if saved.suspended_at is not None
                    else ""
                ),
            }
        )

    def load(self) -> Optional[SavedCountdown]:
        raw_state = self.state_repo.get(self.K_STATE)
        if raw_state is None:
            return None

        raw_remaining = self.state_repo.get(self.K_REMAINING)
        raw_total = self.state_repo.get(self.K_TOTAL)
        raw_suspended = self.state_repo.get(self.K_SUSPENDED_AT) or ""

        try:
            return SavedCountdown(
                remaining_sec=int(raw_remaining),
                total_sec=int(raw_total),
                state=RunState(raw_state),
                suspended_at=float(raw_suspended) if raw_suspended else None,
            )
        except (TypeError, ValueError):
            logger.warning(
                "ignoring corrupt countdown snapshot: state=%r remaining=%r total=%r",
                raw_state,
                raw_remaining,
                raw_total,
            )
            return None

    def clear(self) -> None:
        self.state_repo.delete_prefix(self.PREFIX)
