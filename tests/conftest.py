"""Pytest configuration and shared fixtures for HabitPulse tests.

Provides database fixtures, a habit factory and a configured app context so
repository, state and CLI tests never touch the real data directory.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest
from sqlmodel import Session, create_engine

from habitpulse.config import BaseConfig
from habitpulse.context import create_app_context
from habitpulse.infra.database import create_session_factory, init_database
from habitpulse.infra.repositories import SQLModelHabitRepository
from habitpulse.models import Habit, RepeatCycle, SupervisionMethod
from habitpulse.services.habits import HabitService


# =============================================================================
# Configuration
# =============================================================================


@pytest.fixture
def test_config(tmp_path, monkeypatch) -> BaseConfig:
    """Config pointing at a throwaway data directory."""

    monkeypatch.setenv("HABITPULSE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("HABITPULSE_DATABASE_URL", raising=False)
    monkeypatch.delenv("HABITPULSE_DEV_MODE", raising=False)
    return BaseConfig()


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated temporary SQLite database for each test.

    Yields:
        Engine: SQLModel engine with the current schema
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    init_database(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Plain session for arranging rows directly."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the one the app context builds."""
    return create_session_factory(db_engine)


@pytest.fixture
def habit_gateway(session_factory) -> SQLModelHabitRepository:
    return SQLModelHabitRepository(session_factory)


@pytest.fixture
def habit_repo(habit_gateway) -> HabitService:
    return HabitService(habit_gateway)


@pytest.fixture
def app_context(test_config):
    """Fully wired application context on a temporary data directory."""
    ctx = create_app_context(test_config)
    yield ctx
    ctx.dispose()


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def habit_factory(habit_gateway):
    """Factory for creating stored habits.

    Returns:
        Callable: Function that inserts a Habit and returns the stored row
    """

    def _create_habit(
        title: str = "Exercise",
        repeat_cycle: RepeatCycle = RepeatCycle.DAILY,
        repeat_days: list[int] | None = None,
        reminder_times: list[str] | None = None,
        notes: str = "",
        supervision_method: SupervisionMethod = SupervisionMethod.LOCAL_NOTIFICATION_ONLY,
        supervisor_phone_numbers: list[str] | None = None,
        completed: bool = False,
        completion_count: int = 0,
        created_date: int | None = None,
    ) -> Habit:
        """Insert a habit with sensible defaults.

        Args:
            title: Habit title
            repeat_cycle: DAILY or WEEKLY
            repeat_days: Weekday numbers for weekly habits
            reminder_times: "HH:MM" strings (defaults to ["07:00"])
            created_date: Epoch milliseconds, for ordering tests

        Returns:
            Habit: The row as read back from storage
        """
        habit = Habit(
            title=title,
            repeat_cycle=repeat_cycle,
            repeat_days=repeat_days or [],
            reminder_times=reminder_times if reminder_times is not None else ["07:00"],
            notes=notes,
            supervision_method=supervision_method,
            supervisor_phone_numbers=supervisor_phone_numbers or [],
            completed=completed,
            completion_count=completion_count,
        )
        if created_date is not None:
            habit.created_date = created_date
        habit_id = habit_gateway.insert(habit)
        return habit_gateway.get_by_id(habit_id)

    return _create_habit
