"""Circular progress ring around the countdown.

The arc grows clockwise from twelve o'clock as the session runs and fades
between the per-state colours in ``STATE_COLORS``.  The editable clock is a
child widget centred inside the ring; the ring only paints the arc and a
small state caption beneath the clock.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, QRectF, QVariantAnimation, QEasingCurve, QParallelAnimationGroup
from PyQt6.QtGui import QPainter, QPen, QColor, QConicalGradient, QFont
from PyQt6.QtWidgets import QWidget, QVBoxLayout

from ..timer.engine import TimerState
from .styles import STATE_COLORS


STATE_LABELS: dict[TimerState, str] = {
    TimerState.IDLE:     "READY",
    TimerState.RUNNING:  "FOCUS",
    TimerState.PAUSED:   "PAUSED",
    TimerState.COMPLETE: "DONE",
}

FADE_MS = 400


class ProgressRing(QWidget):
    """Painted progress arc with a slot for a centre widget."""

    MARGIN = 20
    THICKNESS = 10

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._percent = 0.0
        self._state = TimerState.IDLE

        start, end = STATE_COLORS[TimerState.IDLE]
        self._colors = [QColor(start), QColor(end)]

        self._fade = QParallelAnimationGroup(self)
        self._fades: list[QVariantAnimation] = []
        for index in range(2):
            anim = QVariantAnimation(self)
            anim.setDuration(FADE_MS)
            anim.setEasingCurve(QEasingCurve.Type.OutCubic)
            anim.valueChanged.connect(
                lambda value, index=index: self._set_color(index, value)
            )
            self._fade.addAnimation(anim)
            self._fades.append(anim)

        self._centre = QVBoxLayout(self)
        self._centre.setAlignment(Qt.AlignmentFlag.AlignCenter)

    def set_centre_widget(self, widget: QWidget) -> None:
        self._centre.addWidget(widget, alignment=Qt.AlignmentFlag.AlignCenter)

    @property
    def percent(self) -> float:
        return self._percent

    @property
    def state_label(self) -> str:
        return STATE_LABELS[self._state]

    def set_percent(self, percent: float) -> None:
        percent = max(0.0, min(1.0, percent))
        if percent != self._percent:
            self._percent = percent
            self.update()

    def apply_state(self, state: TimerState) -> None:
        """Switch the caption and fade the arc towards the state's colours."""
        self._state = state
        self._fade.stop()
        for anim, current, target in zip(self._fades, self._colors, STATE_COLORS[state]):
            anim.setStartValue(QColor(current))
            anim.setEndValue(QColor(target))
        self._fade.start()
        self.update()

    def _set_color(self, index: int, value: object) -> None:
        if isinstance(value, QColor):
            self._colors[index] = value
            self.update()

    # ── painting ─────────────────────────────────────────────────────────

    def paintEvent(self, event) -> None:  # type: ignore[override]
        side = min(self.width(), self.height()) - 2 * self.MARGIN
        if side <= 0:
            return
        rect = QRectF(
            (self.width() - side) / 2, (self.height() - side) / 2, side, side,
        )
        start, end = self._colors

        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        track = QColor(start)
        track.setAlpha(40)
        painter.setPen(QPen(track, self.THICKNESS))
        painter.drawEllipse(rect)

        if self._percent > 0:
            gradient = QConicalGradient(rect.center(), 90)
            gradient.setColorAt(0.0, start)
            gradient.setColorAt(1.0, end)
            pen = QPen(gradient, self.THICKNESS)
            pen.setCapStyle(Qt.PenCapStyle.RoundCap)
            painter.setPen(pen)
            # 1/16th degrees, negative span runs clockwise
            painter.drawArc(rect, 90 * 16, -round(self._percent * 360 * 16))

        caption = QFont()
        caption.setPixelSize(12)
        caption.setWeight(QFont.Weight.DemiBold)
        caption.setLetterSpacing(QFont.SpacingType.AbsoluteSpacing, 2)
        painter.setFont(caption)
        painter.setPen(start)
        caption_rect = QRectF(rect)
        caption_rect.moveTop(rect.top() + side * 0.18)
        painter.drawText(caption_rect, Qt.AlignmentFlag.AlignCenter, self.state_label)
        painter.end()
