"""UI package."""

from .timer_widget import TimerWidget
from .countdown_field import CountdownField
from .progress_ring import ProgressRing
from .task_list import TaskListWidget
from .session_history import SessionHistoryWidget

__all__ = [
    "TimerWidget",
    "CountdownField",
    "ProgressRing",
    "TaskListWidget",
    "SessionHistoryWidget",
]
