"""SQLite engine and session handling.

The engine is built on first use from ``database_url()``, which points at
``focusflow.db`` in the app-support directory unless ``FOCUSFLOW_DB_URL``
says otherwise.  Tests call ``configure_engine("sqlite:///:memory:")``.
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from ..settings import APP_SUPPORT_DIR
from .models import Base

logger = logging.getLogger(__name__)

DB_PATH = APP_SUPPORT_DIR / "focusflow.db"

_engine: Engine | None = None
_session_factory: sessionmaker | None = None


def database_url() -> str:
    override = os.environ.get("FOCUSFLOW_DB_URL")
    if override:
        return override
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{DB_PATH}"


def _enable_foreign_keys(dbapi_connection, _record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def configure_engine(url: str | None = None) -> Engine:
    """(Re)build the engine and session factory for ``url``."""
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    url = url or database_url()
    _engine = create_engine(url, connect_args={"check_same_thread": False})
    event.listen(_engine, "connect", _enable_foreign_keys)
    _session_factory = sessionmaker(bind=_engine, expire_on_commit=False)
    logger.debug("Database engine configured for %s", url)
    return _engine


def _get_engine() -> Engine:
    return _engine if _engine is not None else configure_engine()


def init_db() -> None:
    """Create any missing tables."""
    Base.metadata.create_all(_get_engine())


@contextmanager
def get_session() -> Iterator[Session]:
    """Session scope: commit on success, roll back and re-raise on error."""
    _get_engine()
    session = _session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
