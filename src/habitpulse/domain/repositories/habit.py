"""Habit repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.habit import Habit


class HabitRepository(Protocol):
    """Persistence contract consumed by the habit form and list state."""

    def get_all(self) -> list[Habit]:
        """List every habit, newest first."""
        ...

    def get_by_id(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        ...

    def insert(self, habit: Habit) -> int:
        """Persist a new habit and return its assigned ID."""
        ...

    def update(self, habit: Habit) -> None:
        """Replace the stored record that has the habit's ID."""
        ...

    def delete_by_id(self, habit_id: int) -> None:
        """Delete a habit by ID."""
        ...

    def delete(self, habit: Habit) -> None:
        """Delete the given habit."""
        ...

    # Completion fields
    def set_completed(self, habit_id: int, completed: bool) -> None:
        """Set the completed flag without touching the count."""
        ...

    def set_completed_with_increment(self, habit_id: int, completed: bool) -> None:
        """Set the completed flag, bumping the count when it becomes True."""
        ...

    def set_completion_count(self, habit_id: int, completion_count: int) -> None:
        """Overwrite the cumulative completion count."""
        ...
