"""Editable countdown display."""

from .buffer import (
    DigitRange,
    SelectionRange,
    InsertDigits,
    DeleteBackward,
    DeleteForward,
    DeleteRange,
    ReplaceRange,
    EditResult,
    apply_edit,
    format_clock,
    parse_duration_text,
    sanitize_paste,
)
from .duration_editor import DurationEditor, KeyResult

__all__ = [
    "DigitRange",
    "SelectionRange",
    "InsertDigits",
    "DeleteBackward",
    "DeleteForward",
    "DeleteRange",
    "ReplaceRange",
    "EditResult",
    "apply_edit",
    "format_clock",
    "parse_duration_text",
    "sanitize_paste",
    "DurationEditor",
    "KeyResult",
]
