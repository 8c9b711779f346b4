"""In-place editing of the countdown display.

The user clicks the ``MM:SS`` clock and types over it.  ``DurationEditor``
owns the edit session: it remembers the pre-edit text for Escape, pauses a
running countdown, turns keys/paste/cut into buffer edits and, on commit,
hands a validated duration to the timer engine.

The editor talks to the engine only through ``set_duration``, ``reset``,
``pause``, ``state`` and ``total_seconds``.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from PyQt6.QtCore import QObject, pyqtSignal

from ..timer.engine import TimerEngine, TimerState, clamp_seconds
from .buffer import (
    DeleteBackward,
    DeleteForward,
    DeleteRange,
    EditCommand,
    InsertDigits,
    SelectionRange,
    apply_edit,
    digits_only,
    format_clock,
    parse_duration_text,
    sanitize_paste,
    to_digit_range,
)

logger = logging.getLogger(__name__)


class KeyResult(Enum):
    HANDLED = "handled"
    PASSTHROUGH = "passthrough"
    SUPPRESSED = "suppressed"
    COMMITTED = "committed"
    CANCELLED = "cancelled"


COMMIT_KEYS = frozenset({"Enter", "Return"})
NAVIGATION_KEYS = frozenset({"Left", "Right", "Up", "Down", "Home", "End", "Tab"})
DIGITS = frozenset("0123456789")


class DurationEditor(QObject):
    """Edit session over the rendered countdown text.

    Signals
    -------
    text_changed(str)
        The rendered text changed (edit, redraw or display update).
    selection_changed(start: int, end: int)
        The selection/caret moved, in rendered-text offsets.
    editing_changed(editing: bool)
        An edit session began or ended.
    duration_committed(seconds: int)
        A new duration was applied to the engine and should be persisted.
    """

    text_changed = pyqtSignal(str)
    selection_changed = pyqtSignal(int, int)
    editing_changed = pyqtSignal(bool)
    duration_committed = pyqtSignal(int)

    def __init__(
        self,
        engine: TimerEngine,
        parent: QObject | None = None,
        *,
        clipboard: Callable[[str], None] | None = None,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._clipboard = clipboard
        self._committed_seconds: int = engine.total_seconds
        self._text: str = format_clock(engine.remaining_seconds)
        self._selection = SelectionRange(len(self._text), len(self._text))
        self._backup: str | None = None
        self._editing: bool = False

    # ── properties ───────────────────────────────────────────────────────

    @property
    def text(self) -> str:
        return self._text

    @property
    def digits(self) -> str:
        return digits_only(self._text)

    @property
    def selection(self) -> SelectionRange:
        return self._selection

    @property
    def is_editing(self) -> bool:
        return self._editing

    @property
    def committed_seconds(self) -> int:
        return self._committed_seconds

    # ── display ──────────────────────────────────────────────────────────

    def display(self, remaining_seconds: float) -> None:
        """Show the engine's remaining time.  Ignored mid-edit."""
        if self._editing:
            return
        self._set_text(format_clock(remaining_seconds))

    # ── edit session ─────────────────────────────────────────────────────

    def begin_edit(self) -> None:
        if self._editing:
            return
        self._backup = self._text
        self._editing = True
        self.editing_changed.emit(True)
        if self._engine.state == TimerState.RUNNING:
            self._engine.pause()
        self.select(0, len(self._text))

    def commit(self) -> None:
        """Parse the edited text and apply it (Enter or focus loss)."""
        if not self._editing:
            return
        self._finish_edit()

        seconds = parse_duration_text(self._text)
        if seconds is None:
            logger.debug("Discarding unparsable duration %r", self._text)
            self._set_text(format_clock(self._committed_seconds))
            if self._engine.state != TimerState.IDLE:
                self._engine.reset()
            return

        seconds = clamp_seconds(seconds)
        changed = seconds != self._engine.total_seconds
        self._committed_seconds = seconds
        if changed:
            self._engine.set_duration(seconds)
            self._engine.reset()
        elif self._engine.state != TimerState.IDLE:
            self._engine.reset()
        self._set_text(format_clock(seconds))
        if changed:
            logger.info("Duration set to %ds", seconds)
            self.duration_committed.emit(seconds)

    def cancel(self) -> None:
        """Restore the pre-edit text verbatim (Escape)."""
        if not self._editing:
            return
        backup = self._backup
        self._finish_edit()
        if backup is not None:
            self._set_text(backup)

    def _finish_edit(self) -> None:
        self._editing = False
        self._backup = None
        self.editing_changed.emit(False)

    # ── keys ─────────────────────────────────────────────────────────────

    def handle_key(self, key: str) -> KeyResult:
        """Filter one key press.

        ``key`` is either a named key (``"Enter"``, ``"Escape"``,
        ``"Backspace"``, ``"Delete"``, ``"Left"``…) or the typed character.
        """
        if key in COMMIT_KEYS:
            self.commit()
            return KeyResult.COMMITTED
        if key == "Escape":
            self.cancel()
            return KeyResult.CANCELLED
        if key == "Backspace":
            self.delete_backward()
            return KeyResult.HANDLED
        if key == "Delete":
            self.delete_forward()
            return KeyResult.HANDLED
        if key in NAVIGATION_KEYS:
            return KeyResult.PASSTHROUGH
        if key in DIGITS:
            self.insert_text(key)
            return KeyResult.HANDLED
        if key == ":" and ":" not in self._text and self._text:
            self._insert_colon()
            return KeyResult.HANDLED
        return KeyResult.SUPPRESSED

    def _insert_colon(self) -> None:
        start, end = self._selection.start, self._selection.end
        self._set_text(self._text[:start] + ":" + self._text[end:])
        self.select(start + 1, start + 1)

    # ── structured edits ─────────────────────────────────────────────────

    def select(self, start: int, end: int) -> None:
        length = len(self._text)
        start = max(0, min(length, start))
        end = max(0, min(length, end))
        if start > end:
            start, end = end, start
        selection = SelectionRange(start, end)
        if selection != self._selection:
            self._selection = selection
            self.selection_changed.emit(start, end)

    def apply(self, command: EditCommand) -> None:
        """Run one edit command against the digit buffer."""
        digit_range = to_digit_range(self._text, self._selection)
        result = apply_edit(self.digits, digit_range, command)
        self._set_text(result.text)
        self.select(result.caret_offset, result.caret_offset)

    def set_text(self, text: str, caret: int | None = None) -> None:
        """Replace the edit text verbatim, e.g. with an input method's
        committed composition.  Nothing is normalised until commit."""
        if not self._editing:
            return
        self._set_text(text)
        caret = len(text) if caret is None else caret
        self.select(caret, caret)

    def insert_text(self, text: str) -> None:
        self.apply(InsertDigits(text))

    def delete_backward(self) -> None:
        self.apply(DeleteBackward())

    def delete_forward(self) -> None:
        self.apply(DeleteForward())

    def delete_selection(self) -> None:
        self.apply(DeleteRange())

    def paste(self, text: str) -> None:
        sanitized = sanitize_paste(text)
        if not digits_only(sanitized):
            return
        self.apply(InsertDigits(sanitized))

    def cut(self) -> None:
        if self._selection.collapsed:
            return
        selected = self._text[self._selection.start:self._selection.end]
        if self._clipboard is not None:
            self._clipboard(selected)
        self.delete_selection()

    # ── internal ─────────────────────────────────────────────────────────

    def _set_text(self, text: str) -> None:
        if text == self._text:
            return
        self._text = text
        self.text_changed.emit(text)
        if self._selection.end > len(text):
            self.select(len(text), len(text))
