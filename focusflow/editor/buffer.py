"""Digit-buffer model behind the editable ``MM:SS`` countdown.

The visible text is always five characters, ``MM:SS``.  Underneath it sits
a four-digit buffer ``MMSS``; every keystroke, deletion, cut and paste is
expressed as one of a small, closed set of edit commands and applied to
that buffer by :func:`apply_edit`.  Nothing here knows about widgets.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

DIGIT_COUNT = 4
COLON_INDEX = 2
RENDERED_LENGTH = 5
PASTE_LIMIT = 5

_NON_DIGITS = re.compile(r"[^0-9]")
_NON_CLOCK = re.compile(r"[^0-9:]")


# ── ranges ───────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class SelectionRange:
    """Character offsets into the rendered text (colon included)."""

    start: int
    end: int

    @property
    def collapsed(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True)
class DigitRange:
    """Offsets into the digit buffer (colon ignored), ``0..4``."""

    start: int
    end: int

    @property
    def collapsed(self) -> bool:
        return self.start == self.end


# ── edit commands ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class InsertDigits:
    """Replace the current selection with ``text`` (typed or pasted)."""

    text: str


@dataclass(frozen=True)
class DeleteBackward:
    pass


@dataclass(frozen=True)
class DeleteForward:
    pass


@dataclass(frozen=True)
class DeleteRange:
    """Remove exactly the selected digits."""


@dataclass(frozen=True)
class ReplaceRange:
    """Replace an explicit digit range, ignoring the current selection."""

    start: int
    end: int
    digits: str


EditCommand = Union[InsertDigits, DeleteBackward, DeleteForward, DeleteRange, ReplaceRange]


@dataclass(frozen=True)
class EditResult:
    digits: str
    caret: int  # digit index

    @property
    def text(self) -> str:
        return render_digits(self.digits)

    @property
    def caret_offset(self) -> int:
        return digit_to_char_offset(self.caret)


# ── helpers ──────────────────────────────────────────────────────────────


def digits_only(text: str) -> str:
    return _NON_DIGITS.sub("", text)


def normalize_digits(digits: str) -> str:
    """Truncate or right-pad with ``'0'`` to exactly four digits."""
    return digits[:DIGIT_COUNT].ljust(DIGIT_COUNT, "0")


def render_digits(digits: str) -> str:
    digits = normalize_digits(digits)
    return f"{digits[:COLON_INDEX]}:{digits[COLON_INDEX:]}"


def format_clock(seconds: float) -> str:
    """``MM:SS`` for a (possibly fractional) number of seconds, floored."""
    whole = int(max(0.0, seconds))
    minutes, secs = divmod(whole, 60)
    return f"{minutes:02d}:{secs:02d}"


def to_digit_range(text: str, selection: SelectionRange) -> DigitRange:
    """Count digit characters before each end of ``selection``."""
    start = max(0, min(len(text), selection.start))
    end = max(start, min(len(text), selection.end))
    digit_start = len(digits_only(text[:start]))
    digit_end = len(digits_only(text[:end]))
    return DigitRange(min(digit_start, DIGIT_COUNT), min(digit_end, DIGIT_COUNT))


def digit_to_char_offset(index: int) -> int:
    """Map a digit index back into the rendered text, skipping the colon."""
    index = max(0, min(DIGIT_COUNT, index))
    return index + 1 if index >= COLON_INDEX else index


def sanitize_paste(text: str) -> str:
    """Keep digits and the first colon only, at most five characters."""
    cleaned = _NON_CLOCK.sub("", text)
    head, colon, tail = cleaned.partition(":")
    return (head + colon + tail.replace(":", ""))[:PASTE_LIMIT]


# ── transformer ──────────────────────────────────────────────────────────


def apply_edit(digits: str, selection: DigitRange, command: EditCommand) -> EditResult:
    """Apply one edit command to the four-digit buffer.

    The selection is spliced out, the command's digits (max four) are
    spliced in, and the result is truncated/padded back to four digits.
    The caret lands right after the last inserted digit.
    """
    digits = normalize_digits(digits_only(digits))
    inserted = ""

    if isinstance(command, ReplaceRange):
        selection = DigitRange(command.start, command.end)
        inserted = command.digits
    elif isinstance(command, InsertDigits):
        inserted = command.text
    elif isinstance(command, DeleteBackward):
        if selection.collapsed:
            if selection.start <= 0:
                return EditResult(digits, 0)
            selection = DigitRange(selection.start - 1, selection.start)
    elif isinstance(command, DeleteForward):
        if selection.collapsed:
            if selection.start >= DIGIT_COUNT:
                return EditResult(digits, DIGIT_COUNT)
            selection = DigitRange(selection.start, selection.start + 1)
    elif not isinstance(command, DeleteRange):
        raise TypeError(f"unknown edit command: {command!r}")

    start = max(0, min(DIGIT_COUNT, selection.start))
    end = max(start, min(DIGIT_COUNT, selection.end))
    inserted = digits_only(inserted)[:DIGIT_COUNT]

    spliced = digits[:start] + inserted + digits[end:]
    caret = min(start + len(inserted), DIGIT_COUNT)
    return EditResult(normalize_digits(spliced), caret)


# ── parsing ──────────────────────────────────────────────────────────────


def parse_duration_text(text: str) -> int | None:
    """Turn edited clock text into seconds, or ``None`` if unusable.

    ``"MM:SS"`` → minutes and seconds (seconds clamped to 0–59, only the
    first two digits after the colon count).  Text without a colon is a
    number of minutes.  Range clamping is left to the caller.
    """
    cleaned = _NON_CLOCK.sub("", text)
    if not cleaned:
        return None

    if ":" in cleaned:
        minutes_part, _, seconds_part = cleaned.partition(":")
        if not minutes_part:
            return None
        seconds_digits = digits_only(seconds_part)[:2]
        minutes = int(minutes_part)
        seconds = int(seconds_digits) if seconds_digits else 0
        return minutes * 60 + max(0, min(59, seconds))

    return int(cleaned) * 60
