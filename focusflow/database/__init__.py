"""Database package."""

from .db import configure_engine, get_session, init_db
from .models import Task, FocusSession, SessionTask

__all__ = [
    "configure_engine",
    "get_session",
    "init_db",
    "Task",
    "FocusSession",
    "SessionTask",
]
