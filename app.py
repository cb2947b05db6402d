#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import logging
import tkinter as tk

from config import load_settings
from domain.models import Alert
from services.countdown_service import CountdownService
from services.notification_service import NotificationService, NotifySendSender
from services.scheduler import TkScheduler
from storage.db import Database
from storage.repos import AppStateRepo, CountdownStateRepo
from ui.main_window import MainWindow


def main():
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    db = Database(db_path=settings.db_path)
    db.init_schema()

    state_repo = CountdownStateRepo(AppStateRepo(db))

    root = tk.Tk()
    scheduler = TkScheduler(root)

    notifications = NotificationService(
        scheduler, NotifySendSender(command=settings.notify_command)
    )
    countdown_service = CountdownService(
        scheduler,
        notifications,
        state_repo,
        alert=Alert(title=settings.alert_title, body=settings.alert_body),
        tick_interval_ms=settings.tick_interval_ms,
    )

    app = MainWindow(root, countdown_service, on_close=db.close)
    countdown_service.restore()
    app.run()


if __name__ == "__main__":
    main()
