"""SQLAlchemy ORM models for Focus Flow."""

from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, ForeignKey
)
from sqlalchemy.orm import DeclarativeBase, relationship


class Base(DeclarativeBase):
    pass


class Task(Base):
    """One entry on the to-do list."""

    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    text = Column(String(255), nullable=False)
    done = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    def __repr__(self) -> str:
        return f"<Task id={self.id} done={self.done} text={self.text!r}>"


class FocusSession(Base):
    """A completed countdown plus the task list as it stood at the end."""

    __tablename__ = "focus_sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    started_at = Column(DateTime, nullable=True)
    ended_at = Column(DateTime, nullable=False, default=datetime.now)
    total_seconds = Column(Integer, nullable=False, default=0)
    completed_count = Column(Integer, nullable=False, default=0)
    total_tasks = Column(Integer, nullable=False, default=0)

    tasks = relationship(
        "SessionTask",
        back_populates="session",
        order_by="SessionTask.position",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return (
            f"<FocusSession id={self.id} total={self.total_seconds}s "
            f"tasks={self.completed_count}/{self.total_tasks}>"
        )


class SessionTask(Base):
    """Snapshot of a task captured when a session completed."""

    __tablename__ = "session_tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(
        Integer, ForeignKey("focus_sessions.id", ondelete="CASCADE"), nullable=False,
    )
    position = Column(Integer, nullable=False, default=0)
    text = Column(String(255), nullable=False)
    done = Column(Boolean, nullable=False, default=False)

    session = relationship("FocusSession", back_populates="tasks")

    def __repr__(self) -> str:
        return f"<SessionTask session={self.session_id} done={self.done}>"
