"""In-memory view state for habit editing and listing."""

from .habit_form import FormError, HabitForm, SaveResult
from .habit_list import HabitListState

__all__ = ["FormError", "HabitForm", "HabitListState", "SaveResult"]
