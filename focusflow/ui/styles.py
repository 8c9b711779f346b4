"""Colours, fonts and the QSS stylesheet for Focus Flow.

A single light theme.  Widgets opt into the non-default looks below by
``setObjectName``: ``card``, ``countdownField``, ``primaryButton``,
``secondaryButton``, ``dangerButton``, ``mutedLabel`` and
``encouragementLabel``.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..timer.engine import TimerState

# Ring gradient (start, end) per timer state.
STATE_COLORS: dict[TimerState, tuple[str, str]] = {
    TimerState.IDLE:     ("#B8C4D6", "#D5DDE8"),
    TimerState.RUNNING:  ("#3D7EEA", "#6FB3F2"),
    TimerState.PAUSED:   ("#E0A340", "#F0C77A"),
    TimerState.COMPLETE: ("#2FA36B", "#7FD1A4"),
}


@dataclass(frozen=True)
class Palette:
    window: str = "#F4F6FA"
    card: str = "#FFFFFF"
    field: str = "#EEF1F6"
    border: str = "#DCE2EC"
    text: str = "#1F2937"
    muted: str = "#6B7280"
    accent: str = "#3D7EEA"
    accent_hover: str = "#2F69CC"
    success: str = "#2FA36B"
    danger: str = "#D9534F"


PALETTE = Palette()

FONT_CANDIDATES = (".AppleSystemUIFont", "SF Pro Text", "Inter", "Segoe UI")
FALLBACK_FONT = "Helvetica Neue"

_font_family: str | None = None


def get_palette() -> Palette:
    return PALETTE


def resolve_font_family() -> str:
    """First installed font from ``FONT_CANDIDATES``.

    Needs a running QApplication; the result is cached.
    """
    global _font_family
    if _font_family is None:
        from PyQt6.QtGui import QFontDatabase
        installed = set(QFontDatabase.families())
        _font_family = next(
            (name for name in FONT_CANDIDATES if name in installed), FALLBACK_FONT,
        )
    return _font_family


def build_stylesheet(p: Palette) -> str:
    font = resolve_font_family()
    return f"""
    QWidget {{
        background: {p.window};
        color: {p.text};
        font-family: "{font}", "{FALLBACK_FONT}", Arial;
        font-size: 14px;
    }}

    QFrame#card {{
        background: {p.card};
        border: 1px solid {p.border};
        border-radius: 16px;
    }}

    /* countdown */
    QLineEdit#countdownField {{
        background: transparent;
        border: none;
        font-size: 56px;
        font-weight: 600;
        color: {p.text};
    }}
    QLineEdit#countdownField:focus {{
        color: {p.accent};
        selection-background-color: {p.field};
        selection-color: {p.accent};
    }}

    QLineEdit {{
        background: {p.field};
        border: 1px solid transparent;
        border-radius: 8px;
        padding: 7px 12px;
    }}
    QLineEdit:focus {{ border-color: {p.accent}; }}

    /* buttons */
    QPushButton {{
        border-radius: 8px;
        padding: 8px 18px;
        font-weight: 600;
    }}
    QPushButton#primaryButton {{
        background: {p.accent};
        color: {p.card};
        border: none;
        padding: 10px 26px;
    }}
    QPushButton#primaryButton:hover {{ background: {p.accent_hover}; }}
    QPushButton#secondaryButton {{
        background: {p.card};
        border: 1px solid {p.border};
    }}
    QPushButton#secondaryButton:hover {{ border-color: {p.accent}; }}
    QPushButton#dangerButton {{
        background: transparent;
        color: {p.danger};
        border: 1px solid {p.border};
    }}
    QPushButton#dangerButton:hover {{ border-color: {p.danger}; }}
    QPushButton:disabled {{
        background: {p.field};
        color: {p.muted};
        border-color: {p.field};
    }}

    /* tabs */
    QTabWidget::pane {{ border: none; }}
    QTabBar::tab {{
        background: transparent;
        color: {p.muted};
        padding: 8px 20px;
        border-bottom: 2px solid transparent;
    }}
    QTabBar::tab:selected {{
        color: {p.text};
        border-bottom-color: {p.accent};
    }}

    QScrollArea {{ border: none; }}
    QCheckBox {{ spacing: 10px; }}

    QLabel#mutedLabel {{ color: {p.muted}; font-size: 12px; }}
    QLabel#encouragementLabel {{ color: {p.success}; font-size: 14px; }}

    QStatusBar {{
        color: {p.muted};
        font-size: 12px;
        border-top: 1px solid {p.border};
    }}
    """
