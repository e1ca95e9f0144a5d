"""Cached list of habits for display."""

from __future__ import annotations

from typing import Optional

from ..domain.repositories.habit import HabitRepository
from ..logging_config import get_logger
from ..models.habit import Habit

logger = get_logger(__name__)


class HabitListState:
    """Snapshot of every stored habit, reloaded after each mutation.

    Every repository call returns only once its write has committed, so the
    reload that follows always sees it.
    """

    def __init__(self, repository: HabitRepository, *, autoload: bool = True):
        self.repository = repository
        self._habits: list[Habit] = []
        if autoload:
            self.load_habits()

    @property
    def habits(self) -> list[Habit]:
        return list(self._habits)

    def load_habits(self) -> list[Habit]:
        """Replace the cache with a fresh read, newest first."""
        self._habits = self.repository.get_all()
        logger.debug("Habit list reloaded", extra={"count": len(self._habits)})
        return self.habits

    def find(self, habit_id: int) -> Optional[Habit]:
        """Look a habit up in the cached snapshot."""
        return next((habit for habit in self._habits if habit.id == habit_id), None)

    def add_habit(self, habit: Habit) -> int:
        habit_id = self.repository.insert(habit)
        self.load_habits()
        return habit_id

    def update_habit(self, habit: Habit) -> None:
        self.repository.update(habit)
        self.load_habits()

    def delete_habit(self, habit: Habit) -> None:
        self.repository.delete(habit)
        self.load_habits()

    def delete_by_id(self, habit_id: int) -> None:
        self.repository.delete_by_id(habit_id)
        self.load_habits()

    def update_completed(self, habit_id: int, completed: bool) -> None:
        """Mark a habit done or not done.

        Marking done also bumps the completion count, but only when the cached
        habit was not already done; undoing leaves the count where it was.
        """
        current = self.find(habit_id)
        if completed and current is not None and current.completed:
            self.repository.set_completed(habit_id, True)
        elif completed:
            self.repository.set_completed_with_increment(habit_id, True)
        else:
            self.repository.set_completed(habit_id, False)
        self.load_habits()

    def toggle_completed(self, habit_id: int) -> Optional[bool]:
        """Flip the completed flag of a cached habit; returns the new value."""
        habit = self.find(habit_id)
        if habit is None:
            return None
        self.update_completed(habit_id, not habit.completed)
        return not habit.completed


__all__ = ["HabitListState"]
