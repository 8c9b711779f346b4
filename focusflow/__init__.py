"""Focus Flow — a focus timer with a task list and session log."""

__version__ = "0.1.0"
