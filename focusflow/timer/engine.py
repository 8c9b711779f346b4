"""Countdown state machine for Focus Flow.

States
------
IDLE       Not running — waiting for the user to start.
RUNNING    Counting down.
PAUSED     Frozen; elapsed time is remembered.
COMPLETE   The countdown reached zero.

Transitions
-----------
IDLE → RUNNING          (start)
RUNNING → PAUSED        (pause)
PAUSED → RUNNING        (resume)
RUNNING → COMPLETE      (remaining reaches 0, detected on a callback)
COMPLETE → RUNNING      (start again)
Any → IDLE              (reset)

Remaining time is always re-derived from absolute monotonic elapsed time,
never from per-callback deltas, so irregular scheduling cannot make the
clock drift.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable

from PyQt6.QtCore import QObject, pyqtSignal

from .scheduler import Scheduler

logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class TimerState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETE = "complete"


# ── constants ─────────────────────────────────────────────────────────────

MIN_SECONDS = 30
MAX_SECONDS = 90 * 60
DEFAULT_SECONDS = 25 * 60


def clamp_seconds(value: object) -> int:
    """Normalise a requested duration to ``[MIN_SECONDS, MAX_SECONDS]``.

    Anything that is not a finite number falls back to ``DEFAULT_SECONDS``.
    """
    try:
        seconds = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return DEFAULT_SECONDS
    if not math.isfinite(seconds):
        return DEFAULT_SECONDS
    return int(min(MAX_SECONDS, max(MIN_SECONDS, seconds)))


# ── event payloads ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Tick:
    remaining_seconds: float
    total_seconds: int
    state: TimerState


@dataclass(frozen=True)
class Completion:
    started_at: datetime | None
    ended_at: datetime
    total_seconds: int


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Drift-corrected countdown driven by a :class:`Scheduler`.

    Signals
    -------
    tick(Tick)
        Emitted on every state-affecting command and on every scheduler
        callback while running.
    state_changed(new_state: TimerState)
        Emitted once per actual transition, after the accompanying tick.
    session_completed(Completion)
        Emitted exactly once when a countdown reaches zero.
    """

    tick = pyqtSignal(object)
    state_changed = pyqtSignal(object)
    session_completed = pyqtSignal(object)

    def __init__(
        self,
        scheduler: Scheduler,
        total_seconds: int = DEFAULT_SECONDS,
        parent: QObject | None = None,
        *,
        wall_clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        super().__init__(parent)
        self._scheduler = scheduler
        self._wall_clock = wall_clock

        # ── duration / elapsed bookkeeping (milliseconds) ─────────────
        self._total_ms: int = clamp_seconds(total_seconds) * 1000
        self._elapsed_base_ms: float = 0.0
        self._remaining_ms: float = float(self._total_ms)

        # ── markers ───────────────────────────────────────────────────
        self._run_start: float | None = None
        self._started_at: datetime | None = None
        self._pending: object | None = None

        self._state: TimerState = TimerState.IDLE

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def total_seconds(self) -> int:
        return self._total_ms // 1000

    @property
    def remaining_seconds(self) -> float:
        """Seconds left as of the last command or scheduler callback."""
        return self._remaining_ms / 1000

    @property
    def percent_complete(self) -> float:
        """0.0 → 1.0 progress through the countdown."""
        if self._total_ms <= 0:
            return 0.0
        return max(0.0, min(1.0, 1 - self._remaining_ms / self._total_ms))

    @property
    def is_running(self) -> bool:
        return self._state == TimerState.RUNNING

    @property
    def started_at(self) -> datetime | None:
        return self._started_at

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def configure(self, seconds: object) -> None:
        """Set the countdown length.  Ignored mid-session; use
        :meth:`set_duration` to change a running or paused countdown."""
        if self._state in (TimerState.RUNNING, TimerState.PAUSED):
            logger.debug("configure(%r) ignored while %s", seconds, self._state.value)
            return
        self._total_ms = clamp_seconds(seconds) * 1000
        self._elapsed_base_ms = 0.0
        self._remaining_ms = float(self._total_ms)
        self._emit_tick()

    def start(self) -> None:
        """Begin a countdown.  Only valid from IDLE or COMPLETE."""
        if self._state not in (TimerState.IDLE, TimerState.COMPLETE):
            return
        self._cancel_pending()
        self._elapsed_base_ms = 0.0
        self._remaining_ms = float(self._total_ms)
        self._started_at = self._wall_clock()
        self._run_start = self._scheduler.now()
        self._transition(TimerState.RUNNING)
        self._schedule_next()

    def pause(self) -> None:
        if self._state != TimerState.RUNNING:
            return
        self._fold_live_elapsed(self._scheduler.now())
        self._run_start = None
        self._cancel_pending()
        self._transition(TimerState.PAUSED)

    def resume(self) -> None:
        if self._state != TimerState.PAUSED:
            return
        self._run_start = self._scheduler.now()
        self._transition(TimerState.RUNNING)
        self._schedule_next()

    def reset(self) -> None:
        """Abandon the countdown and return to IDLE with the full duration."""
        self._cancel_pending()
        self._elapsed_base_ms = 0.0
        self._remaining_ms = float(self._total_ms)
        self._started_at = None
        self._run_start = None
        self._transition(TimerState.IDLE)

    def set_duration(self, seconds: object) -> None:
        """Change the countdown length, preserving remaining time mid-session."""
        if self._state in (TimerState.IDLE, TimerState.COMPLETE):
            self.configure(seconds)
            return

        new_total_ms = clamp_seconds(seconds) * 1000
        if self._state == TimerState.RUNNING:
            now = self._scheduler.now()
            self._fold_live_elapsed(now)
            self._run_start = now

        remaining_ms = self._remaining_ms
        self._total_ms = new_total_ms
        self._elapsed_base_ms = max(0.0, min(new_total_ms, new_total_ms - remaining_ms))
        self._remaining_ms = new_total_ms - self._elapsed_base_ms
        self._emit_tick()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _on_scheduled(self, timestamp: float) -> None:
        self._pending = None
        if self._state != TimerState.RUNNING:
            return
        if self._run_start is None:
            self._run_start = timestamp
        elapsed = self._elapsed_base_ms + (timestamp - self._run_start)
        elapsed = max(0.0, min(float(self._total_ms), elapsed))
        self._remaining_ms = self._total_ms - elapsed
        if self._remaining_ms <= 0:
            self._complete()
            return
        self._emit_tick()
        self._schedule_next()

    def _complete(self) -> None:
        self._cancel_pending()
        self._elapsed_base_ms = float(self._total_ms)
        self._remaining_ms = 0.0
        self._run_start = None
        ended_at = self._wall_clock()
        self._transition(TimerState.COMPLETE)
        logger.info("Countdown of %ds complete", self.total_seconds)
        self.session_completed.emit(Completion(
            started_at=self._started_at,
            ended_at=ended_at,
            total_seconds=self.total_seconds,
        ))

    def _fold_live_elapsed(self, now: float) -> None:
        if self._run_start is None:
            return
        elapsed = self._elapsed_base_ms + (now - self._run_start)
        self._elapsed_base_ms = max(0.0, min(float(self._total_ms), elapsed))
        self._remaining_ms = self._total_ms - self._elapsed_base_ms

    def _schedule_next(self) -> None:
        self._pending = self._scheduler.schedule(self._on_scheduled)

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._scheduler.cancel(self._pending)
            self._pending = None

    def _transition(self, new_state: TimerState) -> None:
        """Set the state, emit a tick, then announce the change (if any)."""
        changed = new_state != self._state
        self._state = new_state
        self._emit_tick()
        if changed:
            logger.debug("Timer state → %s", new_state.value)
            self.state_changed.emit(new_state)

    def _emit_tick(self) -> None:
        self.tick.emit(Tick(
            remaining_seconds=self.remaining_seconds,
            total_seconds=self.total_seconds,
            state=self._state,
        ))
