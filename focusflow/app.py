"""Main application window for Focus Flow."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QTabWidget, QStatusBar,
)
from sqlalchemy.exc import SQLAlchemyError

from . import records
from .editor.buffer import format_clock
from .editor.duration_editor import DurationEditor
from .encouragement import get_completion_message, get_start_message
from .settings import Settings, load_settings, save_settings
from .timer.engine import TimerEngine, TimerState, Tick, Completion
from .timer.scheduler import QtScheduler
from .ui.session_history import SessionHistoryWidget
from .ui.styles import build_stylesheet, get_palette
from .ui.task_list import TaskListWidget
from .ui.timer_widget import TimerWidget

logger = logging.getLogger(__name__)

BASE_TITLE = "Focus Flow"


def window_title(tick: Tick) -> str:
    """Title bar text mirroring the countdown."""
    if tick.state == TimerState.RUNNING:
        return f"{BASE_TITLE} • {format_clock(tick.remaining_seconds)}"
    if tick.state == TimerState.COMPLETE:
        return f"{BASE_TITLE} • Done!"
    return BASE_TITLE


def tasks_tab_title(open_count: int) -> str:
    return f"Tasks ({open_count})" if open_count else "Tasks"


class FocusFlowApp(QMainWindow):
    """Main application window.

    Owns the one scheduler, timer engine and duration editor for the
    lifetime of the application and wires them to the tabs.
    """

    TAB_FOCUS, TAB_TASKS, TAB_HISTORY = range(3)

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self.setWindowTitle(BASE_TITLE)
        self.setMinimumSize(420, 560)

        self._geometry_save_timer = QTimer(self)
        self._geometry_save_timer.setSingleShot(True)
        self._geometry_save_timer.setInterval(500)
        self._geometry_save_timer.timeout.connect(self._save_geometry)

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = settings or load_settings()
        self.resize(self._settings.window_width, self._settings.window_height)
        if self._settings.window_x is not None and self._settings.window_y is not None:
            self.move(self._settings.window_x, self._settings.window_y)

        # ── core ──────────────────────────────────────────────────────
        self._scheduler = QtScheduler(self)
        self._timer_engine = TimerEngine(
            self._scheduler, self._settings.last_duration_seconds, self,
        )
        self._editor = DurationEditor(
            self._timer_engine, self,
            clipboard=lambda text: QApplication.clipboard().setText(text),
        )

        self.setStyleSheet(build_stylesheet(get_palette()))

        # ── central widget ────────────────────────────────────────────
        central = QWidget()
        self.setCentralWidget(central)
        root_layout = QVBoxLayout(central)
        root_layout.setContentsMargins(16, 12, 16, 12)

        self._tabs = QTabWidget(central)
        root_layout.addWidget(self._tabs)

        self._timer_widget = TimerWidget(self._timer_engine, self._editor, self._tabs)
        self._task_list = TaskListWidget(self._tabs)
        self._session_history = SessionHistoryWidget(self._tabs)

        self._tabs.addTab(self._timer_widget, "Focus")
        self._tabs.addTab(self._task_list, tasks_tab_title(self._task_list.open_count))
        self._tabs.addTab(self._session_history, "History")
        self._tabs.currentChanged.connect(self._on_tab_changed)

        self._status_bar = QStatusBar(self)
        self.setStatusBar(self._status_bar)
        self._status_bar.showMessage(get_start_message())

        # ── signals ───────────────────────────────────────────────────
        self._timer_engine.tick.connect(self._on_tick)
        self._timer_engine.session_completed.connect(self._on_session_completed)
        self._editor.duration_committed.connect(self._on_duration_committed)
        self._task_list.tasks_changed.connect(self._on_tasks_changed)

        self._timer_engine.reset()

    # ══════════════════════════════════════════════════════════════════
    #  ACCESSORS
    # ══════════════════════════════════════════════════════════════════

    @property
    def timer_engine(self) -> TimerEngine:
        return self._timer_engine

    @property
    def editor(self) -> DurationEditor:
        return self._editor

    # ══════════════════════════════════════════════════════════════════
    #  SLOTS
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self, tick: Tick) -> None:
        title = window_title(tick)
        if self.windowTitle() != title:
            self.setWindowTitle(title)

    def _on_session_completed(self, completion: Completion) -> None:
        try:
            records.record_session(completion)
        except SQLAlchemyError:
            logger.warning("Unable to record completed session", exc_info=True)
        message = get_completion_message()
        self._timer_widget.show_message(message)
        self._status_bar.showMessage(
            f"Session complete — {records.format_duration(completion.total_seconds)}",
            5000,
        )
        self._session_history.refresh()
        QApplication.beep()

    def _on_duration_committed(self, seconds: int) -> None:
        self._settings.last_duration_seconds = seconds
        save_settings(self._settings)
        self._status_bar.showMessage(
            f"Session length set to {records.format_duration(seconds)}", 3000,
        )

    def _on_tasks_changed(self) -> None:
        self._tabs.setTabText(self.TAB_TASKS, tasks_tab_title(self._task_list.open_count))

    def _on_tab_changed(self, index: int) -> None:
        if index == self.TAB_HISTORY:
            self._session_history.refresh()
        elif index == self.TAB_TASKS:
            self._task_list.refresh()

    # ══════════════════════════════════════════════════════════════════
    #  KEYBOARD
    # ══════════════════════════════════════════════════════════════════

    def _on_space(self) -> None:
        """Start, pause, or resume the timer."""
        state = self._timer_engine.state
        if state in (TimerState.IDLE, TimerState.COMPLETE):
            self._timer_engine.start()
        elif state == TimerState.PAUSED:
            self._timer_engine.resume()
        else:
            self._timer_engine.pause()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """Space toggles the timer when no text field has focus."""
        if (
            event.key() == Qt.Key.Key_Space
            and not event.modifiers()
            and self._tabs.currentIndex() == self.TAB_FOCUS
        ):
            self._on_space()
            event.accept()
            return
        super().keyPressEvent(event)

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW GEOMETRY
    # ══════════════════════════════════════════════════════════════════

    def _save_geometry(self) -> None:
        geo = self.geometry()
        self._settings.window_x = geo.x()
        self._settings.window_y = geo.y()
        self._settings.window_width = geo.width()
        self._settings.window_height = geo.height()
        save_settings(self._settings)

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._geometry_save_timer.start()

    def moveEvent(self, event) -> None:  # type: ignore[override]
        super().moveEvent(event)
        self._geometry_save_timer.start()

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._geometry_save_timer.stop()
        self._save_geometry()
        event.accept()
