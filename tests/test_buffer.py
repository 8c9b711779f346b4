"""Tests for the digit buffer behind the editable clock.

Pure functions only — no Qt needed.
"""

import pytest

from focusflow.editor.buffer import (
    DigitRange, SelectionRange,
    InsertDigits, DeleteBackward, DeleteForward, DeleteRange, ReplaceRange,
    apply_edit, digit_to_char_offset, format_clock, normalize_digits,
    parse_duration_text, render_digits, sanitize_paste, to_digit_range,
)


# ═══════════════════════════════════════════════════════════════════════
#  RENDERING
# ═══════════════════════════════════════════════════════════════════════


class TestRendering:

    @pytest.mark.parametrize("seconds, text", [
        (0, "00:00"),
        (59.99, "00:59"),
        (725, "12:05"),
        (1500, "25:00"),
        (1499.2, "24:59"),
        (5400, "90:00"),
        (-3, "00:00"),
    ])
    def test_format_clock(self, seconds, text):
        assert format_clock(seconds) == text

    def test_render_digits_always_five_chars(self):
        assert render_digits("1205") == "12:05"
        assert render_digits("1") == "10:00"
        assert render_digits("123456") == "12:34"

    def test_normalize_pads_and_truncates(self):
        assert normalize_digits("") == "0000"
        assert normalize_digits("12") == "1200"
        assert normalize_digits("98765") == "9876"


# ═══════════════════════════════════════════════════════════════════════
#  SELECTION MAPPING
# ═══════════════════════════════════════════════════════════════════════


class TestSelectionMapping:

    @pytest.mark.parametrize("start, end, expected", [
        (0, 5, DigitRange(0, 4)),
        (0, 0, DigitRange(0, 0)),
        (2, 2, DigitRange(2, 2)),
        (3, 3, DigitRange(2, 2)),
        (1, 4, DigitRange(1, 3)),
        (2, 3, DigitRange(2, 2)),
        (5, 5, DigitRange(4, 4)),
    ])
    def test_colon_is_transparent(self, start, end, expected):
        assert to_digit_range("25:00", SelectionRange(start, end)) == expected

    def test_out_of_range_offsets_are_clamped(self):
        assert to_digit_range("25:00", SelectionRange(-2, 40)) == DigitRange(0, 4)

    @pytest.mark.parametrize("index, offset", [(0, 0), (1, 1), (2, 3), (3, 4), (4, 5)])
    def test_digit_to_char_offset_skips_colon(self, index, offset):
        assert digit_to_char_offset(index) == offset


# ═══════════════════════════════════════════════════════════════════════
#  EDIT COMMANDS
# ═══════════════════════════════════════════════════════════════════════


class TestApplyEdit:

    def test_typing_over_full_selection(self):
        result = apply_edit("2500", DigitRange(0, 4), InsertDigits("1"))
        assert result.digits == "1000"
        assert result.caret == 1
        assert result.text == "10:00"
        assert result.caret_offset == 1

    def test_insert_shifts_and_truncates(self):
        result = apply_edit("1200", DigitRange(1, 1), InsertDigits("9"))
        assert result.digits == "1920"
        assert result.caret_offset == 3

    def test_insert_uses_at_most_four_digits(self):
        result = apply_edit("0000", DigitRange(0, 4), InsertDigits("123456"))
        assert result.digits == "1234"
        assert result.caret == 4
        assert result.caret_offset == 5

    def test_insert_ignores_non_digits(self):
        result = apply_edit("0000", DigitRange(0, 4), InsertDigits("4a:5"))
        assert result.digits == "4500"
        assert result.caret == 2

    def test_backward_delete_collapsed(self):
        result = apply_edit("1234", DigitRange(2, 2), DeleteBackward())
        assert result.digits == "1340"
        assert result.caret == 1

    def test_backward_delete_at_start_is_noop(self):
        result = apply_edit("1234", DigitRange(0, 0), DeleteBackward())
        assert result.digits == "1234"
        assert result.caret == 0

    def test_forward_delete_collapsed(self):
        result = apply_edit("1234", DigitRange(2, 2), DeleteForward())
        assert result.digits == "1240"
        assert result.caret == 2

    def test_forward_delete_at_end_is_noop(self):
        result = apply_edit("1234", DigitRange(4, 4), DeleteForward())
        assert result.digits == "1234"
        assert result.caret == 4

    @pytest.mark.parametrize("command", [DeleteBackward(), DeleteForward(), DeleteRange()])
    def test_range_delete_removes_spanned_digits(self, command):
        result = apply_edit("1234", DigitRange(1, 3), command)
        assert result.digits == "1400"
        assert result.caret == 1

    def test_replace_range_ignores_selection(self):
        result = apply_edit("1234", DigitRange(0, 0), ReplaceRange(2, 4, "59"))
        assert result.digits == "1259"
        assert result.caret == 4

    def test_buffer_is_always_four_digits(self):
        digits, selection = "2500", DigitRange(0, 4)
        for command in (
            InsertDigits("7"), DeleteBackward(), DeleteForward(),
            InsertDigits("12345"), DeleteRange(), ReplaceRange(0, 4, ""),
        ):
            result = apply_edit(digits, selection, command)
            assert len(result.digits) == 4
            digits, selection = result.digits, DigitRange(result.caret, result.caret)

    def test_unknown_command_rejected(self):
        with pytest.raises(TypeError):
            apply_edit("1234", DigitRange(0, 0), "delete")  # type: ignore[arg-type]


# ═══════════════════════════════════════════════════════════════════════
#  PASTE / PARSE
# ═══════════════════════════════════════════════════════════════════════


class TestPasteAndParse:

    @pytest.mark.parametrize("raw, cleaned", [
        ("ab1:2cd", "1:2"),
        ("12:34:56", "12:34"),
        ("  45 min", "45"),
        ("1:2:3", "1:23"),
        ("hello", ""),
        ("123456789", "12345"),
    ])
    def test_sanitize_paste(self, raw, cleaned):
        assert sanitize_paste(raw) == cleaned

    @pytest.mark.parametrize("text, seconds", [
        ("12:05", 725),
        ("25:00", 1500),
        ("00:05", 5),
        ("1:7", 67),
        ("10:99", 659),
        ("10:", 600),
        ("45", 2700),
        ("5:123", 312),
        ("x12:3y0", 750),
    ])
    def test_parse_valid(self, text, seconds):
        assert parse_duration_text(text) == seconds

    @pytest.mark.parametrize("text", ["", "abc", ":30", "::"])
    def test_parse_invalid(self, text):
        assert parse_duration_text(text) is None
