"""Session history widget — the History tab.

Lists every completed session, newest first, with its time span, length,
and the task list as it stood when the countdown ended.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QFrame, QPushButton,
    QScrollArea, QMessageBox,
)
from sqlalchemy.exc import SQLAlchemyError

from .. import records
from ..database.models import FocusSession

logger = logging.getLogger(__name__)

EMPTY_TEXT = "No sessions yet — finish a focus round to see it here."


def format_stamp(dt: datetime) -> str:
    """``Mar 2, 2026 9:05 AM``, without platform-specific strftime flags."""
    return f"{dt:%b} {dt.day}, {dt.year} {dt.hour % 12 or 12}:{dt:%M %p}"


def format_span(sess: FocusSession) -> str:
    ended = format_stamp(sess.ended_at)
    if sess.started_at is None:
        return ended
    return f"{format_stamp(sess.started_at)} – {ended}"


class SessionHistoryWidget(QWidget):
    """Displays recorded focus sessions."""

    def __init__(
        self,
        parent: QWidget | None = None,
        *,
        confirm: Callable[[], bool] | None = None,
    ) -> None:
        super().__init__(parent)
        self._confirm = confirm or self._ask_clear
        self._row_widgets: list[QWidget] = []
        self._build_ui()
        self.refresh()

    # ── build ─────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 8, 0, 0)
        layout.setSpacing(6)

        header_row = QHBoxLayout()
        header = QLabel("Session History")
        header_row.addWidget(header, 1)
        self._clear_btn = QPushButton("Clear History", self)
        self._clear_btn.setObjectName("dangerButton")
        self._clear_btn.clicked.connect(self.clear_history)
        header_row.addWidget(self._clear_btn)
        layout.addLayout(header_row)

        self._empty_label = QLabel(EMPTY_TEXT)
        self._empty_label.setObjectName("mutedLabel")
        self._empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._empty_label)

        self._scroll = QScrollArea(self)
        self._scroll.setWidgetResizable(True)
        container = QWidget(self._scroll)
        self._rows_container = QVBoxLayout(container)
        self._rows_container.setAlignment(Qt.AlignmentFlag.AlignTop)
        self._rows_container.setSpacing(8)
        self._scroll.setWidget(container)
        layout.addWidget(self._scroll)

    # ── refresh ───────────────────────────────────────────────────────

    def refresh(self) -> None:
        """Reload sessions from the database.  On failure the current rows stay."""
        try:
            sessions = records.list_sessions()
        except SQLAlchemyError:
            logger.warning("Unable to load session history", exc_info=True)
            return

        for w in self._row_widgets:
            w.setParent(None)
            w.deleteLater()
        self._row_widgets.clear()

        self._empty_label.setVisible(not sessions)
        self._scroll.setVisible(bool(sessions))
        self._clear_btn.setEnabled(bool(sessions))

        for sess in sessions:
            row = self._make_row(sess)
            self._rows_container.addWidget(row)
            self._row_widgets.append(row)

    @property
    def row_count(self) -> int:
        return len(self._row_widgets)

    def clear_history(self) -> None:
        if not self._row_widgets or not self._confirm():
            return
        try:
            removed = records.clear_sessions()
        except SQLAlchemyError:
            logger.warning("Unable to clear session history", exc_info=True)
            return
        logger.info("Cleared %d session(s)", removed)
        self.refresh()

    # ── row builder ───────────────────────────────────────────────────

    def _make_row(self, sess: FocusSession) -> QWidget:
        frame = QFrame(self)
        frame.setObjectName("card")
        col = QVBoxLayout(frame)
        col.setContentsMargins(12, 8, 12, 8)
        col.setSpacing(4)

        top = QHBoxLayout()
        time_lbl = QLabel(format_span(sess))
        dur_lbl = QLabel(records.format_duration(sess.total_seconds))
        dur_lbl.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        top.addWidget(time_lbl, 1)
        top.addWidget(dur_lbl)
        col.addLayout(top)

        if not sess.tasks:
            meta = QLabel("No tasks captured this round.")
            meta.setObjectName("mutedLabel")
            col.addWidget(meta)
            return frame

        summary = QLabel(
            f"{sess.completed_count} of {sess.total_tasks} tasks checked off."
        )
        summary.setObjectName("mutedLabel")
        col.addWidget(summary)
        for task in sess.tasks:
            mark = "✓" if task.done else "○"
            col.addWidget(QLabel(f"{mark}  {task.text}"))
        return frame

    def _ask_clear(self) -> bool:
        reply = QMessageBox.question(
            self,
            "Clear history?",
            "Clear all recorded sessions?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        return reply == QMessageBox.StandardButton.Yes
