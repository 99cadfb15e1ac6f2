import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


class FakeClock:
    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class FakeTimer:
    def __init__(self, name, on_tick, log):
        self.name = name
        self.on_tick = on_tick
        self.log = log
        self.cancelled = False

    def cancel(self):
        self.cancelled = True
        self.log.append(("cancel", self.name))


class FakeTimerFactory:
    """Records start/cancel order so restart sequencing can be asserted."""

    def __init__(self):
        self.log = []
        self.timers = []

    def __call__(self, on_tick):
        timer = FakeTimer(len(self.timers) + 1, on_tick, self.log)
        self.timers.append(timer)
        self.log.append(("start", timer.name))
        return timer


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def timers():
    return FakeTimerFactory()


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication
    return QApplication.instance() or QApplication([])
