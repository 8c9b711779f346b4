"""Task list widget — the Tasks tab.

New tasks go on top.  Ticking a checkbox or pressing "Clear" writes
straight through to the database and re-renders the list.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit, QPushButton,
    QCheckBox, QFrame, QScrollArea,
)
from sqlalchemy.exc import SQLAlchemyError

from .. import records
from ..database.models import Task

logger = logging.getLogger(__name__)

PLACEHOLDER_TEXT = "Add a few tasks you want to stay focused on."


class TaskListWidget(QWidget):
    """Editable to-do list backed by :mod:`focusflow.records`."""

    tasks_changed = pyqtSignal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._row_widgets: list[QWidget] = []
        self._open_count = 0
        self._build_ui()
        self.refresh()

    # ── build ─────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 8, 0, 0)
        layout.setSpacing(8)

        form = QHBoxLayout()
        self._input = QLineEdit(self)
        self._input.setPlaceholderText("What do you want to get done?")
        self._input.setMaxLength(records.TASK_TEXT_LIMIT)
        self._input.returnPressed.connect(self._on_add)
        self._add_btn = QPushButton("Add", self)
        self._add_btn.setObjectName("secondaryButton")
        self._add_btn.clicked.connect(self._on_add)
        form.addWidget(self._input)
        form.addWidget(self._add_btn)
        layout.addLayout(form)

        scroll = QScrollArea(self)
        scroll.setWidgetResizable(True)
        container = QWidget(scroll)
        self._rows = QVBoxLayout(container)
        self._rows.setAlignment(Qt.AlignmentFlag.AlignTop)
        self._rows.setSpacing(4)
        scroll.setWidget(container)
        layout.addWidget(scroll)

        self._placeholder = QLabel(PLACEHOLDER_TEXT, container)
        self._placeholder.setObjectName("mutedLabel")
        self._placeholder.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._rows.addWidget(self._placeholder)

    # ── refresh ───────────────────────────────────────────────────────

    def refresh(self) -> None:
        """Reload tasks from the database.  On failure the current rows stay."""
        try:
            tasks = records.list_tasks()
        except SQLAlchemyError:
            logger.warning("Unable to load tasks", exc_info=True)
            return

        for w in self._row_widgets:
            w.setParent(None)
            w.deleteLater()
        self._row_widgets.clear()

        self._open_count = sum(1 for t in tasks if not t.done)
        self._placeholder.setVisible(not tasks)
        for task in tasks:
            row = self._make_row(task)
            self._rows.addWidget(row)
            self._row_widgets.append(row)

    @property
    def row_count(self) -> int:
        return len(self._row_widgets)

    @property
    def open_count(self) -> int:
        """Tasks not yet ticked off, as of the last refresh."""
        return self._open_count

    def _make_row(self, task: Task) -> QWidget:
        frame = QFrame(self)
        row = QHBoxLayout(frame)
        row.setContentsMargins(8, 4, 8, 4)

        checkbox = QCheckBox(task.text, frame)
        checkbox.setChecked(bool(task.done))
        checkbox.toggled.connect(
            lambda checked, task_id=task.id: self._on_toggled(task_id, checked)
        )

        remove_btn = QPushButton("Clear", frame)
        remove_btn.setObjectName("secondaryButton")
        remove_btn.clicked.connect(lambda _=False, task_id=task.id: self._on_remove(task_id))

        row.addWidget(checkbox, 1)
        row.addWidget(remove_btn)
        return frame

    # ── slots ─────────────────────────────────────────────────────────

    def _on_add(self) -> None:
        text = self._input.text()
        try:
            task = records.add_task(text)
        except SQLAlchemyError:
            logger.warning("Unable to save task", exc_info=True)
            return
        if task is None:
            return
        self._input.clear()
        self._input.setFocus()
        self._changed()

    def _on_toggled(self, task_id: int, done: bool) -> None:
        try:
            records.set_task_done(task_id, done)
        except SQLAlchemyError:
            logger.warning("Unable to update task %s", task_id, exc_info=True)
        self._changed()

    def _on_remove(self, task_id: int) -> None:
        try:
            records.remove_task(task_id)
        except SQLAlchemyError:
            logger.warning("Unable to remove task %s", task_id, exc_info=True)
        self._changed()

    def _changed(self) -> None:
        self.refresh()
        self.tasks_changed.emit()
