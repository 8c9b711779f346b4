"""Scheduling port for the timer engine.

The engine only needs two things from its environment: a monotonic clock
reading in milliseconds and a way to ask for a single cancellable callback
"soon".  ``QtScheduler`` provides both from the Qt event loop; tests swap in
a fake clock that they advance by hand.
"""

from __future__ import annotations

from typing import Callable, Protocol

from PyQt6.QtCore import QElapsedTimer, QObject, QTimer

TICK_INTERVAL_MS = 100

ScheduledCallback = Callable[[float], None]


class Scheduler(Protocol):
    def now(self) -> float:
        """Monotonic time in milliseconds."""
        ...

    def schedule(self, callback: ScheduledCallback) -> object:
        """Arrange for ``callback(now())`` to run once; return a handle."""
        ...

    def cancel(self, handle: object) -> None:
        """Drop a pending callback.  Unknown or fired handles are ignored."""
        ...


class QtScheduler(QObject):
    """Scheduler backed by ``QElapsedTimer`` and single-shot ``QTimer``s."""

    def __init__(
        self,
        parent: QObject | None = None,
        interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._interval_ms = interval_ms
        self._clock = QElapsedTimer()
        self._clock.start()

    def now(self) -> float:
        return self._clock.nsecsElapsed() / 1_000_000

    def schedule(self, callback: ScheduledCallback) -> QTimer:
        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.setInterval(self._interval_ms)
        timer.timeout.connect(lambda: self._fire(timer, callback))
        timer.start()
        return timer

    def cancel(self, handle: object) -> None:
        if isinstance(handle, QTimer):
            handle.stop()
            handle.deleteLater()

    def _fire(self, timer: QTimer, callback: ScheduledCallback) -> None:
        timer.deleteLater()
        callback(self.now())
