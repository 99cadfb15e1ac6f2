# core/chrono.py
from PySide6.QtCore import QObject, QTimer, Signal


class CountdownTimer(QObject):
    """
    Repeating one-second tick source for a single round.
    Once cancelled it never fires again, even if a timeout was already queued.
    """
    ticked = Signal()
    cancelled = Signal()

    def __init__(self, on_tick=None, interval_ms: int = 1000, parent=None):
        super().__init__(parent)
        self._active = False
        self._on_tick = on_tick
        self._fired = 0

        self._tick = QTimer(self)
        self._tick.setInterval(interval_ms)
        self._tick.timeout.connect(self._on_timeout)

    @classmethod
    def started(cls, on_tick, interval_ms: int = 1000, parent=None) -> "CountdownTimer":
        timer = cls(on_tick, interval_ms=interval_ms, parent=parent)
        timer.start()
        return timer

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def fired(self) -> int:
        return self._fired

    def start(self):
        self._active = True
        self._tick.start()

    def cancel(self):
        if self._active:
            self._active = False
            self._tick.stop()
            self.cancelled.emit()

    def _on_timeout(self):
        if not self._active:
            return
        self._fired += 1
        if self._on_tick is not None:
            self._on_tick()
        self.ticked.emit()
