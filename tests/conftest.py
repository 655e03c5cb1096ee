import random

import pytest


class FakeHandle:
    def __init__(self, when, fn):
        self.when = when
        self.fn = fn
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """call_later/cancel in virtual seconds, like an asyncio loop."""

    def __init__(self):
        self.now = 0.0
        self.handles = []

    def call_later(self, delay, fn):
        handle = FakeHandle(self.now + delay, fn)
        self.handles.append(handle)
        return handle

    def pending(self):
        return [h for h in self.handles if not h.cancelled]

    def advance(self, seconds):
        end = self.now + seconds
        while True:
            due = [h for h in self.pending() if h.when <= end + 1e-9]
            if not due:
                break
            handle = min(due, key=lambda h: h.when)
            self.handles.remove(handle)
            self.now = handle.when
            handle.fn()
        self.now = end


@pytest.fixture()
def scheduler():
    return FakeScheduler()


@pytest.fixture()
def rng():
    return random.Random(1234)
