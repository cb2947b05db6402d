# -*- coding: utf-8 -*-

import logging
import time
from typing import Any, Callable, Optional

from core.countdown_engine import CountdownEngine, EngineSnapshot
from domain.models import Alert, RunState
from services.notification_service import NotificationService
from storage.repos import CountdownStateRepo

logger = logging.getLogger(__name__)


class CountdownService:
    """
    Orchestrates:
    - CountdownEngine state
    - the single per-second tick job
    - the pending completion alert
    - the suspend/resume snapshot in the key-value store
    - Callbacks for UI
    """

    def __init__(
        self,
        scheduler,
        notifications: NotificationService,
        state_repo: CountdownStateRepo,
        clock: Callable[[], float] = time.time,
        alert: Alert = Alert(),
        tick_interval_ms: int = 1000,
    ):
        self.scheduler = scheduler
        self.notifications = notifications
        self.state_repo = state_repo
        self.clock = clock
        self.alert = alert
        self.tick_interval_ms = int(tick_interval_ms)

        self.engine = CountdownEngine()

        self._tick_job: Optional[Any] = None

        self._on_tick: Optional[Callable[[EngineSnapshot], None]] = None
        self._on_state_change: Optional[Callable[[EngineSnapshot], None]] = None
        self._on_complete: Optional[Callable[[EngineSnapshot], None]] = None

    # ----- Callbacks -----
    def set_on_tick(self, fn: Callable[[EngineSnapshot], None]) -> None:
        self._on_tick = fn

    def set_on_state_change(self, fn: Callable[[EngineSnapshot], None]) -> None:
        self._on_state_change = fn

    def set_on_complete(self, fn: Callable[[EngineSnapshot], None]) -> None:
        self._on_complete = fn

    def _emit_tick(self) -> None:
        if self._on_tick:
            self._on_tick(self.engine.snapshot())

    def _emit_state_change(self) -> None:
        if self._on_state_change:
            self._on_state_change(self.engine.snapshot())

    def _emit_complete(self) -> None:
        if self._on_complete:
            self._on_complete(self.engine.snapshot())

    # ----- Public API -----
    def get_snapshot(self) -> EngineSnapshot:
        return self.engine.snapshot()

    @property
    def state(self) -> RunState:
        return self.engine.state

    def formatted_time(self) -> str:
        return self.engine.formatted_time()

    def progress(self) -> float:
        return self.engine.progress()

    def configure(self, hours: int, minutes: int, seconds: int) -> bool:
        if not self.engine.configure(hours, minutes, seconds):
            return False
        logger.info("configured %ss", self.engine.total_sec)
        self._emit_state_change()
        return True

    def start(self) -> bool:
        if not self.engine.start():
            return False
        logger.info("started with %ss remaining", self.engine.remaining_sec)
        self._arm()
        self._emit_state_change()
        return True

    def pause(self) -> bool:
        if not self.engine.pause():
            return False
        self._stop_tick_loop()
        self.notifications.cancel_all()
        # a snapshot taken before the pause would reconcile paused time
        self.state_repo.clear()
        logger.info("paused at %ss", self.engine.remaining_sec)
        self._emit_state_change()
        return True

    def resume(self) -> bool:
        if not self.engine.resume():
            return False
        self.state_repo.clear()
        logger.info("resumed with %ss remaining", self.engine.remaining_sec)
        self._arm()
        self._emit_state_change()
        return True

    def reset(self) -> None:
        self._stop_tick_loop()
        self.notifications.cancel_all()
        self.engine.reset()
        self.state_repo.clear()
        logger.info("reset")
        self._emit_state_change()

    def tick(self) -> None:
        """
        One-second step. Safe to call from a stale job: does nothing
        unless the countdown is running.
        """
        if self.engine.state != RunState.RUNNING:
            return

        completed = self.engine.tick()
        self._emit_tick()

        if completed:
            self._handle_complete()

    def on_suspend(self) -> None:
        self.engine.on_suspend(self.clock())
        if self.engine.state in (RunState.RUNNING, RunState.PAUSED):
            self.state_repo.save(self.engine.to_saved())
            logger.debug("snapshot saved at %ss", self.engine.remaining_sec)

    def on_resume(self) -> None:
        saved = self.state_repo.load()
        self.state_repo.clear()

        if self.engine.state != RunState.RUNNING:
            return

        if saved is not None and saved.state == RunState.RUNNING:
            self.engine.restore(saved)

        if self.engine.on_resume(self.clock()):
            logger.info("countdown elapsed while suspended")
            self._handle_complete()
            return

        self._ensure_tick_loop()
        self._emit_tick()

    def restore(self) -> bool:
        """
        Pick up a countdown left running or paused by a previous launch.
        Returns True if one was restored.
        """
        saved = self.state_repo.load()
        self.state_repo.clear()
        if saved is None or saved.state not in (RunState.RUNNING, RunState.PAUSED):
            return False

        self.engine.restore(saved)
        if self.engine.state == RunState.COMPLETED:
            self._handle_complete(alert_if_unarmed=True)
            return True

        if self.engine.state == RunState.RUNNING:
            if self.engine.on_resume(self.clock()):
                logger.info("countdown elapsed while closed")
                self._handle_complete(alert_if_unarmed=True)
                return True
            self._arm()

        logger.info(
            "restored %s countdown with %ss remaining",
            self.engine.state.value,
            self.engine.remaining_sec,
        )
        self._emit_state_change()
        return True

    def shutdown(self) -> None:
        # keep a snapshot so the next launch can restore()
        self.on_suspend()
        self._stop_tick_loop()
        self.notifications.cancel_all()

    # ----- internals -----
    def _arm(self) -> None:
        self._stop_tick_loop()
        self._ensure_tick_loop()
        self.notifications.schedule(self.engine.remaining_sec, self.alert)

    def _handle_complete(self, alert_if_unarmed: bool = False) -> None:
        self._stop_tick_loop()
        if not self.notifications.fire_pending_now() and alert_if_unarmed:
            self.notifications.notify(self.alert)
        self.state_repo.clear()
        logger.info("countdown completed")
        self._emit_state_change()
        self._emit_complete()

    def _ensure_tick_loop(self) -> None:
        if self._tick_job is None:
            self._tick_job = self.scheduler.call_later(
                self.tick_interval_ms, self._tick_once
            )

    def _stop_tick_loop(self) -> None:
        if self._tick_job is not None:
            self.scheduler.cancel(self._tick_job)
            self._tick_job = None

    def _tick_once(self) -> None:
        self._tick_job = None
        if self.engine.state != RunState.RUNNING:
            return
        self.tick()
        if self.engine.state == RunState.RUNNING:
            self._ensure_tick_loop()
