"""Habit repository façade used by the form and list state."""

from __future__ import annotations

from typing import Optional

from ..domain.repositories.habit import HabitRepository
from ..logging_config import get_logger
from ..models.habit import Habit

logger = get_logger(__name__)


class HabitService:
    """Pass-through over a storage gateway.

    Adds no rules of its own: every call goes straight to the gateway and any
    storage error reaches the caller unchanged. Mutations are logged.
    """

    def __init__(self, gateway: HabitRepository):
        self.gateway = gateway

    def get_all(self) -> list[Habit]:
        return self.gateway.get_all()

    def get_by_id(self, habit_id: int) -> Optional[Habit]:
        return self.gateway.get_by_id(habit_id)

    def insert(self, habit: Habit) -> int:
        habit_id = self.gateway.insert(habit)
        logger.info("Habit created", extra={"habit_id": habit_id})
        return habit_id

    def update(self, habit: Habit) -> None:
        self.gateway.update(habit)
        logger.info("Habit updated", extra={"habit_id": habit.id})

    def delete_by_id(self, habit_id: int) -> None:
        self.gateway.delete_by_id(habit_id)
        logger.info("Habit deleted", extra={"habit_id": habit_id})

    def delete(self, habit: Habit) -> None:
        self.gateway.delete(habit)
        logger.info("Habit deleted", extra={"habit_id": habit.id})

    def set_completed(self, habit_id: int, completed: bool) -> None:
        self.gateway.set_completed(habit_id, completed)
        logger.info("Habit completion set", extra={"habit_id": habit_id, "completed": completed})

    def set_completed_with_increment(self, habit_id: int, completed: bool) -> None:
        self.gateway.set_completed_with_increment(habit_id, completed)
        logger.info(
            "Habit completion set with increment",
            extra={"habit_id": habit_id, "completed": completed},
        )

    def set_completion_count(self, habit_id: int, completion_count: int) -> None:
        self.gateway.set_completion_count(habit_id, completion_count)
        logger.info(
            "Habit completion count set",
            extra={"habit_id": habit_id, "completion_count": completion_count},
        )


__all__ = ["HabitService"]
