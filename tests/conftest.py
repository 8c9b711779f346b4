"""Shared pytest fixtures for Focus Flow tests."""

import os
import sys
from datetime import datetime, timedelta

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication  # noqa: E402

from focusflow.database.db import configure_engine, init_db  # noqa: E402
from focusflow.editor.duration_editor import DurationEditor  # noqa: E402
from focusflow.timer.engine import TimerEngine  # noqa: E402

from helpers import FakeScheduler  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture(autouse=True)
def settings_path(tmp_path, monkeypatch):
    """Keep settings writes out of the real app-support directory."""
    path = tmp_path / "settings.json"
    monkeypatch.setattr("focusflow.settings.SETTINGS_PATH", path)
    monkeypatch.setattr("focusflow.settings.APP_SUPPORT_DIR", tmp_path)
    return path


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def wall_clock():
    """Deterministic wall clock advancing one minute per reading."""
    readings = iter(
        datetime(2026, 3, 2, 9, 0) + timedelta(minutes=i) for i in range(10_000)
    )
    return lambda: next(readings)


@pytest.fixture
def engine(qapp, scheduler, wall_clock):
    """Fresh 25-minute TimerEngine driven by the fake scheduler."""
    return TimerEngine(scheduler, 1500, wall_clock=wall_clock)


@pytest.fixture
def clipboard():
    """Stands in for the system clipboard; collects copied text."""
    return []


@pytest.fixture
def editor(engine, clipboard):
    return DurationEditor(engine, clipboard=clipboard.append)
