"""Timer package."""

from .engine import (
    TimerEngine,
    TimerState,
    Tick,
    Completion,
    clamp_seconds,
    MIN_SECONDS,
    MAX_SECONDS,
    DEFAULT_SECONDS,
)
from .scheduler import QtScheduler, Scheduler, TICK_INTERVAL_MS

__all__ = [
    "TimerEngine",
    "TimerState",
    "Tick",
    "Completion",
    "clamp_seconds",
    "MIN_SECONDS",
    "MAX_SECONDS",
    "DEFAULT_SECONDS",
    "QtScheduler",
    "Scheduler",
    "TICK_INTERVAL_MS",
]
