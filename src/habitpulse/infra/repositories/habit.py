"""SQLModel implementation of Habit repository."""

from __future__ import annotations

from typing import Callable, ContextManager, Optional

from sqlmodel import Session, select

from ...logging_config import get_logger
from ...models.habit import Habit, now_millis

logger = get_logger(__name__)

# Columns replaced by a full-record update; id and created_date never change.
_REPLACEABLE_FIELDS = (
    "title",
    "repeat_cycle",
    "repeat_days",
    "reminder_times",
    "notes",
    "supervision_method",
    "supervisor_phone_numbers",
    "completed",
    "completion_count",
)


def _detached_copy(habit: Habit) -> Habit:
    """Return a fresh, unsaved Habit carrying the given habit's values."""
    values = {name: getattr(habit, name) for name in _REPLACEABLE_FIELDS}
    for name in ("repeat_days", "reminder_times", "supervisor_phone_numbers"):
        values[name] = list(values[name])
    return Habit(**values, created_date=habit.created_date or now_millis())


class SQLModelHabitRepository:
    """SQLModel-based habit storage gateway."""

    def __init__(self, session_factory: Callable[[], ContextManager[Session]]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_all(self) -> list[Habit]:
        """List every habit, newest first."""
        with self.session_factory() as session:
            statement = select(Habit).order_by(
                Habit.created_date.desc(), Habit.id.desc()  # type: ignore[union-attr]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def get_by_id(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        with self.session_factory() as session:
            obj = session.get(Habit, habit_id)
            if obj:
                session.expunge(obj)
            return obj

    def insert(self, habit: Habit) -> int:
        """Insert a new row; any ID already on ``habit`` is ignored."""
        with self.session_factory() as session:
            row = _detached_copy(habit)
            session.add(row)
            session.commit()
            session.refresh(row)
            if row.id is None:
                raise RuntimeError("Insert did not assign a habit ID")
            return row.id

    def update(self, habit: Habit) -> None:
        """Replace the stored record matching ``habit.id``."""
        with self.session_factory() as session:
            row = session.get(Habit, habit.id) if habit.id else None
            if row is None:
                logger.warning("Update skipped, habit not found", extra={"habit_id": habit.id})
                return
            source = _detached_copy(habit)
            for name in _REPLACEABLE_FIELDS:
                setattr(row, name, getattr(source, name))
            session.add(row)
            session.commit()

    def delete_by_id(self, habit_id: int) -> None:
        """Delete a habit by ID."""
        with self.session_factory() as session:
            row = session.get(Habit, habit_id)
            if row:
                session.delete(row)
                session.commit()

    def delete(self, habit: Habit) -> None:
        """Delete the given habit."""
        if habit.is_persisted:
            self.delete_by_id(habit.id)

    # Completion fields
    def set_completed(self, habit_id: int, completed: bool) -> None:
        """Set the completed flag without touching the count."""
        with self.session_factory() as session:
            row = session.get(Habit, habit_id)
            if row is None:
                return
            row.completed = completed
            session.add(row)
            session.commit()

    def set_completed_with_increment(self, habit_id: int, completed: bool) -> None:
        """Set the completed flag and bump the count when it is set to True."""
        with self.session_factory() as session:
            row = session.get(Habit, habit_id)
            if row is None:
                return
            row.completed = completed
            if completed:
                row.completion_count += 1
            session.add(row)
            session.commit()

    def set_completion_count(self, habit_id: int, completion_count: int) -> None:
        """Overwrite the cumulative completion count."""
        if completion_count < 0:
            raise ValueError("completion_count must be >= 0")
        with self.session_factory() as session:
            row = session.get(Habit, habit_id)
            if row is None:
                return
            row.completion_count = completion_count
            session.add(row)
            session.commit()
