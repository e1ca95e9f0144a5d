"""SQLModel table exports."""

from .habit import (
    ALL_DAYS,
    NOTES_MAX_LENGTH,
    PHONE_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    Habit,
    RepeatCycle,
    SupervisionMethod,
)

__all__ = [
    "ALL_DAYS",
    "Habit",
    "NOTES_MAX_LENGTH",
    "PHONE_MAX_LENGTH",
    "RepeatCycle",
    "SupervisionMethod",
    "TITLE_MAX_LENGTH",
]
