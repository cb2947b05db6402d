# -*- coding: utf-8 -*-

import logging
import subprocess
from typing import Any, Callable, Optional

from domain.models import Alert

logger = logging.getLogger(__name__)


class NotifySendSender:
    """
    Desktop notification through the freedesktop `notify-send` command.
    """

    def __init__(self, command: str = "notify-send", app_name: str = "Countdown"):
        self.command = command
        self.app_name = app_name

    def __call__(self, alert: Alert) -> None:
        try:
            subprocess.run(
                [self.command, "-a", self.app_name, alert.title, alert.body],
                check=True,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                timeout=5,
            )
        except (OSError, subprocess.SubprocessError) as e:
            # countdown still completes locally
            logger.warning("notification %r not delivered: %s", alert.title, e)


class NotificationService:
    """
    Keeps at most one pending completion alert.
    """

    def __init__(self, scheduler, sender: Callable[[Alert], None]):
        self.scheduler = scheduler
        self.sender = sender

        self._pending_job: Optional[Any] = None
        self._pending_alert: Optional[Alert] = None

    @property
    def has_pending(self) -> bool:
        return self._pending_alert is not None

    def notify(self, alert: Alert) -> None:
        logger.info("notify: %s", alert.title)
        self.sender(alert)

    def schedule(self, delay_sec: int, alert: Alert) -> None:
        self.cancel_all()
        delay_ms = max(0, int(delay_sec)) * 1000
        self._pending_alert = alert
        self._pending_job = self.scheduler.call_later(delay_ms, self._fire)
        logger.debug("alert scheduled in %ss", delay_sec)

    def cancel_all(self) -> None:
        if self._pending_job is not None:
            self.scheduler.cancel(self._pending_job)
        self._pending_job = None
        self._pending_alert = None

    def fire_pending_now(self) -> bool:
        """
        Deliver the pending alert immediately. Returns False if nothing
        was pending (already delivered or never armed).
        """
        if not self.has_pending:
            return False
        alert = self._pending_alert
        self.cancel_all()
        self.notify(alert)
        return True

    def _fire(self) -> None:
        alert = self._pending_alert
        self._pending_job = None
        self._pending_alert = None
        if alert is not None:
            self.notify(alert)
