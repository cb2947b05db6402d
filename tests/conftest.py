# -*- coding: utf-8 -*-

import itertools

import pytest

from domain.models import Alert
from services.countdown_service import CountdownService
from services.notification_service import NotificationService
from storage.db import Database
from storage.repos import AppStateRepo, CountdownStateRepo


class ManualScheduler:
    """Scheduler double: jobs only run when the test advances time."""

    def __init__(self):
        self.now_ms = 0
        self.jobs = {}
        self._ids = itertools.count(1)

    def call_later(self, delay_ms, fn):
        job = next(self._ids)
        self.jobs[job] = (self.now_ms + int(delay_ms), fn)
        return job

    def cancel(self, job):
        self.jobs.pop(job, None)

    def advance(self, ms):
        target = self.now_ms + ms
        while True:
            due = [(t, j) for j, (t, _) in self.jobs.items() if t <= target]
            if not due:
                break
            t, job = min(due)
            _, fn = self.jobs.pop(job)
            self.now_ms = t
            fn()
        self.now_ms = target

    def advance_sec(self, seconds):
        self.advance(seconds * 1000)


class FakeClock:
    def __init__(self, start=1_700_000_000.0):
        self.now = start

    def __call__(self):
        return self.now


class RecordingSender:
    def __init__(self):
        self.sent = []

    def __call__(self, alert):
        self.sent.append(alert)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sender():
    return RecordingSender()


@pytest.fixture
def db():
    d = Database(":memory:")
    d.init_schema()
    yield d
    d.close()


@pytest.fixture
def state_repo(db):
    return CountdownStateRepo(AppStateRepo(db))


@pytest.fixture
def notifications(scheduler, sender):
    return NotificationService(scheduler, sender)


@pytest.fixture
def service(scheduler, notifications, state_repo, clock):
    return CountdownService(scheduler, notifications, state_repo, clock=clock, alert=Alert())
