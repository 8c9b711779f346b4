"""Task list and session log persistence.

Tasks are kept newest-first.  When a countdown completes, the current task
list is copied into the session record so the history shows what was on
the list at the time, even after tasks are later edited or removed.
"""

from __future__ import annotations

import logging

from sqlalchemy.orm import selectinload

from .database.db import get_session
from .database.models import FocusSession, SessionTask, Task
from .timer.engine import Completion

logger = logging.getLogger(__name__)

TASK_TEXT_LIMIT = 255


# ── tasks ────────────────────────────────────────────────────────────────


def list_tasks() -> list[Task]:
    with get_session() as db:
        return db.query(Task).order_by(Task.id.desc()).all()


def add_task(text: str) -> Task | None:
    """Add a task to the top of the list.  Blank text is ignored."""
    text = text.strip()[:TASK_TEXT_LIMIT]
    if not text:
        return None
    with get_session() as db:
        task = Task(text=text, done=False)
        db.add(task)
        db.flush()
        return task


def set_task_done(task_id: int, done: bool) -> bool:
    """Tick or untick a task.  Returns False if it no longer exists."""
    with get_session() as db:
        task = db.get(Task, task_id)
        if task is None:
            return False
        task.done = done
        return True


def remove_task(task_id: int) -> bool:
    with get_session() as db:
        task = db.get(Task, task_id)
        if task is None:
            return False
        db.delete(task)
        return True


# ── sessions ─────────────────────────────────────────────────────────────


def record_session(completion: Completion) -> FocusSession:
    """Store a completed countdown with a snapshot of the task list."""
    with get_session() as db:
        tasks = db.query(Task).order_by(Task.id.desc()).all()
        record = FocusSession(
            started_at=completion.started_at,
            ended_at=completion.ended_at,
            total_seconds=completion.total_seconds,
            completed_count=sum(1 for t in tasks if t.done),
            total_tasks=len(tasks),
        )
        record.tasks = [
            SessionTask(position=i, text=t.text, done=t.done)
            for i, t in enumerate(tasks)
        ]
        db.add(record)
        db.flush()
        logger.info(
            "Recorded %ds session (%d/%d tasks done)",
            record.total_seconds, record.completed_count, record.total_tasks,
        )
        return record


def list_sessions() -> list[FocusSession]:
    """All recorded sessions, newest first, with their task snapshots."""
    with get_session() as db:
        return (
            db.query(FocusSession)
            .options(selectinload(FocusSession.tasks))
            .order_by(FocusSession.ended_at.desc(), FocusSession.id.desc())
            .all()
        )


def clear_sessions() -> int:
    """Delete every session record.  Returns how many were removed."""
    with get_session() as db:
        sessions = db.query(FocusSession).all()
        for record in sessions:
            db.delete(record)
        return len(sessions)


# ── formatting ───────────────────────────────────────────────────────────


def format_duration(seconds: int) -> str:
    """``"25 min"`` for whole minutes, ``"12m 5s"`` otherwise."""
    minutes, rest = divmod(max(0, int(seconds)), 60)
    if rest == 0:
        return f"{minutes} min"
    return f"{minutes}m {rest}s"
