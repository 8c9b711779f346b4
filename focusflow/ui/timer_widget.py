"""Main timer display widget — the Focus tab.

Layout (top → bottom):
    - ProgressRing with the editable countdown in its centre
    - Control row: Start / Pause / Resume / Reset
    - Encouragement line (shown after a session completes)
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QFrame, QSizePolicy,
)

from ..editor.duration_editor import DurationEditor
from ..timer.engine import TimerEngine, TimerState, Tick
from .countdown_field import CountdownField
from .progress_ring import ProgressRing


class TimerWidget(QWidget):
    """The timer card shown in the Focus tab."""

    def __init__(
        self,
        engine: TimerEngine,
        editor: DurationEditor,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._editor = editor
        self._build_ui()
        self._connect_signals()
        self._ring.set_percent(engine.percent_complete)
        self._on_state_changed(engine.state)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        ring_row = QHBoxLayout()
        ring_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._ring = ProgressRing(card)
        self._ring.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)
        self._ring.setFixedSize(300, 300)
        self._countdown = CountdownField(self._editor, self._ring)
        self._ring.set_centre_widget(self._countdown)
        ring_row.addWidget(self._ring)
        layout.addLayout(ring_row)

        layout.addSpacing(12)

        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._start_btn = QPushButton("Start Focus", card)
        self._start_btn.setObjectName("primaryButton")
        self._pause_btn = QPushButton("Pause", card)
        self._pause_btn.setObjectName("secondaryButton")
        self._resume_btn = QPushButton("Resume", card)
        self._resume_btn.setObjectName("secondaryButton")
        self._reset_btn = QPushButton("Reset", card)
        self._reset_btn.setObjectName("dangerButton")

        for btn in (self._start_btn, self._pause_btn, self._resume_btn, self._reset_btn):
            btn_row.addWidget(btn)
        layout.addLayout(btn_row)

        layout.addSpacing(12)

        self._message = QLabel("", card)
        self._message.setObjectName("encouragementLabel")
        self._message.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._message.setWordWrap(True)
        layout.addWidget(self._message)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_btn.clicked.connect(self._on_start)
        self._pause_btn.clicked.connect(self._engine.pause)
        self._resume_btn.clicked.connect(self._engine.resume)
        self._reset_btn.clicked.connect(self._engine.reset)

        self._engine.tick.connect(self._on_tick)
        self._engine.state_changed.connect(self._on_state_changed)

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_start(self) -> None:
        if self._engine.state in (TimerState.IDLE, TimerState.COMPLETE):
            self._message.clear()
            self._engine.start()

    def _on_tick(self, tick: Tick) -> None:
        self._editor.display(tick.remaining_seconds)
        self._ring.set_percent(self._engine.percent_complete)

    def _on_state_changed(self, state: TimerState) -> None:
        running = state == TimerState.RUNNING
        paused = state == TimerState.PAUSED

        self._start_btn.setEnabled(not (running or paused))
        self._pause_btn.setEnabled(running)
        self._resume_btn.setEnabled(paused)
        self._start_btn.setText(
            "Restart Focus" if state == TimerState.COMPLETE else "Start Focus"
        )
        if state == TimerState.IDLE:
            self._ring.set_percent(0.0)
        self._ring.apply_state(state)

    # ── public ────────────────────────────────────────────────────────────

    def show_message(self, text: str) -> None:
        self._message.setText(text)

    @property
    def countdown(self) -> CountdownField:
        return self._countdown
