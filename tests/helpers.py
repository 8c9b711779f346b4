"""Shared test helpers for Focus Flow."""

from focusflow.timer.engine import TimerEngine


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeScheduler:
    """Hand-driven scheduler: time only moves when a test says so."""

    def __init__(self, start: float = 0.0):
        self.time_ms = start
        self._pending: dict[int, object] = {}
        self._next_handle = 0
        self.cancelled = 0

    def now(self) -> float:
        return self.time_ms

    def schedule(self, callback) -> int:
        self._next_handle += 1
        self._pending[self._next_handle] = callback
        return self._next_handle

    def cancel(self, handle) -> None:
        if self._pending.pop(handle, None) is not None:
            self.cancelled += 1

    @property
    def pending(self) -> int:
        return len(self._pending)

    def fire(self) -> None:
        """Run every callback pending right now, at the current time."""
        due = list(self._pending.values())
        self._pending.clear()
        for callback in due:
            callback(self.time_ms)

    def advance(self, ms: float, step: float | None = None) -> None:
        """Move the clock forward ``ms``, firing callbacks every ``step`` ms
        (or once at the end when ``step`` is None)."""
        if step is None:
            self.time_ms += ms
            self.fire()
            return
        target = self.time_ms + ms
        while self.time_ms < target:
            self.time_ms = min(target, self.time_ms + step)
            self.fire()


def complete_session(engine: TimerEngine, scheduler: FakeScheduler) -> None:
    """Fast-complete a running countdown by jumping past its end."""
    scheduler.advance(engine.total_seconds * 1000 + 1)
