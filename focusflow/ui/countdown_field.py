"""The editable ``MM:SS`` clock in the middle of the progress ring.

A thin ``QLineEdit`` skin over :class:`DurationEditor`: Qt key, clipboard,
mouse and focus events are translated into editor calls, and the editor's
text/selection signals are mirrored back into the widget.  The widget
never edits its own text.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QKeySequence
from PyQt6.QtWidgets import QApplication, QLineEdit, QWidget

from ..editor.duration_editor import DurationEditor, KeyResult


_NAMED_KEYS: dict[int, str] = {
    key.value: name for key, name in (
        (Qt.Key.Key_Return, "Return"),
        (Qt.Key.Key_Enter, "Enter"),
        (Qt.Key.Key_Escape, "Escape"),
        (Qt.Key.Key_Backspace, "Backspace"),
        (Qt.Key.Key_Delete, "Delete"),
        (Qt.Key.Key_Left, "Left"),
        (Qt.Key.Key_Right, "Right"),
        (Qt.Key.Key_Up, "Up"),
        (Qt.Key.Key_Down, "Down"),
        (Qt.Key.Key_Home, "Home"),
        (Qt.Key.Key_End, "End"),
        (Qt.Key.Key_Tab, "Tab"),
    )
}


class CountdownField(QLineEdit):
    """Countdown display that turns into a duration editor on focus."""

    def __init__(self, editor: DurationEditor, parent: QWidget | None = None) -> None:
        super().__init__(editor.text, parent)
        self._editor = editor
        self._select_on_release = False

        self.setObjectName("countdownField")
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setDragEnabled(False)
        self.setAcceptDrops(False)
        self.setContextMenuPolicy(Qt.ContextMenuPolicy.NoContextMenu)
        self.setToolTip("Click to set the session length")
        self.setFixedWidth(200)

        editor.text_changed.connect(self._on_editor_text)
        editor.selection_changed.connect(self._apply_selection)

    # ── editor → widget ──────────────────────────────────────────────

    def _on_editor_text(self, text: str) -> None:
        if self.text() != text:
            self.setText(text)
        if self._editor.is_editing:
            selection = self._editor.selection
            self._apply_selection(selection.start, selection.end)

    def _apply_selection(self, start: int, end: int) -> None:
        if end > start:
            self.setSelection(start, end - start)
        else:
            self.setCursorPosition(start)

    # ── widget → editor ──────────────────────────────────────────────

    def _push_selection(self) -> None:
        if self.hasSelectedText():
            start = self.selectionStart()
            self._editor.select(start, start + len(self.selectedText()))
        else:
            pos = self.cursorPosition()
            self._editor.select(pos, pos)

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        if not self._editor.is_editing:
            self._editor.begin_edit()

        if event.matches(QKeySequence.StandardKey.Paste):
            self._push_selection()
            self._editor.paste(QApplication.clipboard().text())
            event.accept()
            return
        if event.matches(QKeySequence.StandardKey.Cut):
            self._push_selection()
            self._editor.cut()
            event.accept()
            return
        if (
            event.matches(QKeySequence.StandardKey.Copy)
            or event.matches(QKeySequence.StandardKey.SelectAll)
        ):
            super().keyPressEvent(event)
            self._push_selection()
            return

        key = _NAMED_KEYS.get(event.key(), event.text())
        self._push_selection()
        result = self._editor.handle_key(key)
        if result == KeyResult.PASSTHROUGH:
            super().keyPressEvent(event)
            self._push_selection()
        elif result in (KeyResult.COMMITTED, KeyResult.CANCELLED):
            self.clearFocus()
            event.accept()
        else:
            event.accept()

    def inputMethodEvent(self, event) -> None:  # type: ignore[override]
        commit = event.commitString()
        if commit:
            if not self._editor.is_editing:
                self._editor.begin_edit()
            self._push_selection()
            selection = self._editor.selection
            text = self._editor.text
            self._editor.set_text(
                text[:selection.start] + commit + text[selection.end:],
                selection.start + len(commit),
            )
        event.accept()

    def mouseReleaseEvent(self, event) -> None:  # type: ignore[override]
        super().mouseReleaseEvent(event)
        if self._select_on_release:
            self._select_on_release = False
            selection = self._editor.selection
            self._apply_selection(selection.start, selection.end)
            return
        if self._editor.is_editing:
            self._push_selection()

    def focusInEvent(self, event) -> None:  # type: ignore[override]
        super().focusInEvent(event)
        if not self._editor.is_editing:
            self._editor.begin_edit()
            self._select_on_release = (
                event.reason() == Qt.FocusReason.MouseFocusReason
            )
            selection = self._editor.selection
            self._apply_selection(selection.start, selection.end)

    def focusOutEvent(self, event) -> None:  # type: ignore[override]
        super().focusOutEvent(event)
        self._editor.commit()
