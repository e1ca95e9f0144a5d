"""Edit-session state for creating or editing a single habit.

``HabitForm`` holds one mutable draft. Setters shape input as it arrives
(newline stripping, truncation, sorting, de-duplication); nothing touches
storage until ``save`` or ``load_for_edit``. A draft without an ID is a new
habit and saving inserts it; after ``load_for_edit`` saving updates the
loaded record.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from ..domain.repositories.habit import HabitRepository
from ..logging_config import get_logger
from ..models.habit import (
    ALL_DAYS,
    NOTES_MAX_LENGTH,
    PHONE_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    Habit,
    RepeatCycle,
    SupervisionMethod,
)
from ..services.validation import clean_single_line, is_phone_valid

logger = get_logger(__name__)


class FormError(str, Enum):
    """Reasons a draft cannot be saved."""

    BLANK_TITLE = "BLANK_TITLE"
    NO_DAYS_SELECTED = "NO_DAYS_SELECTED"
    MISSING_REMINDER_TIME = "MISSING_REMINDER_TIME"
    NO_SUPERVISORS = "NO_SUPERVISORS"
    BLANK_SUPERVISOR_PHONE = "BLANK_SUPERVISOR_PHONE"
    INVALID_SUPERVISOR_PHONE = "INVALID_SUPERVISOR_PHONE"
    TOO_MANY_WEEKLY_TIMES = "TOO_MANY_WEEKLY_TIMES"


@dataclass(frozen=True)
class SaveResult:
    """Outcome of ``HabitForm.save``."""

    habit_id: Optional[int] = None
    inserted: bool = False
    errors: tuple[FormError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


class HabitForm:
    """Mutable draft of a habit being created or edited."""

    def __init__(self, repository: HabitRepository):
        self.repository = repository
        self.reset_form()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def id(self) -> Optional[int]:
        return self._id

    @property
    def is_editing(self) -> bool:
        return bool(self._id)

    @property
    def title(self) -> str:
        return self._title

    @property
    def repeat_cycle(self) -> RepeatCycle:
        return self._repeat_cycle

    @property
    def selected_days(self) -> list[int]:
        return list(self._selected_days)

    @property
    def reminder_times(self) -> list[str]:
        return list(self._reminder_times)

    @property
    def notes(self) -> str:
        return self._notes

    @property
    def supervision_method(self) -> SupervisionMethod:
        return self._supervision_method

    @property
    def supervisor_phone_numbers(self) -> list[str]:
        return list(self._supervisor_phone_numbers)

    @property
    def completed(self) -> bool:
        return self._completed

    @property
    def completion_count(self) -> int:
        return self._completion_count

    # ------------------------------------------------------------------
    # Field setters
    # ------------------------------------------------------------------
    def set_title(self, title: str) -> None:
        self._title = clean_single_line(title, TITLE_MAX_LENGTH)

    def set_repeat_cycle(self, repeat_cycle: RepeatCycle) -> None:
        """Switch cycle and reset the schedule that belonged to the old one.

        ============  =====================  ==============
        new cycle     selected days          reminder times
        ============  =====================  ==============
        WEEKLY        all seven (0..6)       cleared
        DAILY         cleared                cleared
        ============  =====================  ==============
        """
        self._repeat_cycle = RepeatCycle(repeat_cycle)
        if self._repeat_cycle == RepeatCycle.WEEKLY:
            self._selected_days = list(ALL_DAYS)
        else:
            self._selected_days = []
        self._reminder_times = []

    def set_selected_day(self, day: int, selected: bool) -> None:
        if day not in ALL_DAYS:
            raise ValueError(f"Day must be between 0 and 6, got {day}")
        if selected:
            if day not in self._selected_days:
                self._selected_days.append(day)
                self._selected_days.sort()
        elif day in self._selected_days:
            self._selected_days.remove(day)

    def add_reminder_time(self, reminder_time: str) -> None:
        """Add a time, keeping the list unique and sorted. Duplicates are ignored."""
        if reminder_time in self._reminder_times:
            return
        self._reminder_times.append(reminder_time)
        self._reminder_times.sort()

    def remove_reminder_time(self, reminder_time: str) -> None:
        if reminder_time in self._reminder_times:
            self._reminder_times.remove(reminder_time)

    def set_reminder_times(self, reminder_times: Iterable[str]) -> None:
        self._reminder_times = list(reminder_times)

    def apply_reminder_time(self, reminder_time: str) -> bool:
        """Apply a time picked by the user for the current cycle.

        Daily habits collect several times; weekly habits share one time, so
        the pick replaces whatever was there. Returns False, changing nothing,
        when the time is already set.
        """
        if reminder_time in self._reminder_times:
            return False
        if self._repeat_cycle == RepeatCycle.WEEKLY:
            self.set_reminder_times([reminder_time])
        else:
            self.add_reminder_time(reminder_time)
        return True

    def set_notes(self, notes: str) -> None:
        self._notes = (notes or "")[:NOTES_MAX_LENGTH]

    def set_supervision_method(self, method: SupervisionMethod) -> None:
        # Switching to SMS leaves the supervisor list alone; callers add numbers.
        self._supervision_method = SupervisionMethod(method)

    def add_supervisor_phone_number(self, phone: str) -> None:
        self._supervisor_phone_numbers.append(clean_single_line(phone, PHONE_MAX_LENGTH))

    def remove_supervisor_phone_number(self, phone: str) -> None:
        if phone in self._supervisor_phone_numbers:
            self._supervisor_phone_numbers.remove(phone)

    def update_supervisor_phone_number(self, index: int, phone: str) -> None:
        if 0 <= index < len(self._supervisor_phone_numbers):
            self._supervisor_phone_numbers[index] = clean_single_line(phone, PHONE_MAX_LENGTH)

    def set_supervisor_phone_numbers(self, phones: Iterable[str]) -> None:
        self._supervisor_phone_numbers = list(phones)

    def can_add_supervisor_phone_number(self, phone: str) -> bool:
        """Gate for the "add supervisor" action: non-blank, valid, not a duplicate."""
        clean = clean_single_line(phone, PHONE_MAX_LENGTH)
        if not clean.strip() or not is_phone_valid(clean):
            return False
        return clean not in self._supervisor_phone_numbers

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def reset_form(self) -> None:
        self._id: Optional[int] = None
        self._title = ""
        self._repeat_cycle = RepeatCycle.DAILY
        self._selected_days: list[int] = []
        self._reminder_times: list[str] = []
        self._notes = ""
        self._supervision_method = SupervisionMethod.LOCAL_NOTIFICATION_ONLY
        self._supervisor_phone_numbers: list[str] = []
        self._completed = False
        self._completion_count = 0
        self._created_date: Optional[int] = None

    def load_habit(self, habit: Habit) -> None:
        """Overwrite every draft field from ``habit``."""
        self._id = habit.id
        self._title = habit.title
        self._repeat_cycle = RepeatCycle(habit.repeat_cycle)
        self._selected_days = sorted(habit.repeat_days)
        self._reminder_times = list(habit.reminder_times)
        self._notes = habit.notes
        self._supervision_method = SupervisionMethod(habit.supervision_method)
        self._supervisor_phone_numbers = list(habit.supervisor_phone_numbers)
        self._completed = habit.completed
        self._completion_count = habit.completion_count
        self._created_date = habit.created_date

    def load_for_edit(self, habit_id: int) -> bool:
        """Load a stored habit into the draft. Returns False if it does not exist."""
        habit = self.repository.get_by_id(habit_id)
        if habit is None:
            logger.info("Habit not found for edit", extra={"habit_id": habit_id})
            return False
        self.load_habit(habit)
        return True

    # ------------------------------------------------------------------
    # Validation and persistence
    # ------------------------------------------------------------------
    def validate(self) -> list[FormError]:
        """Return every rule the draft currently breaks, in field order."""
        errors: list[FormError] = []
        if not self._title.strip():
            errors.append(FormError.BLANK_TITLE)
        if self._repeat_cycle == RepeatCycle.WEEKLY and not self._selected_days:
            errors.append(FormError.NO_DAYS_SELECTED)
        if not self._reminder_times:
            errors.append(FormError.MISSING_REMINDER_TIME)
        if self._supervision_method == SupervisionMethod.SMS_REPORTING:
            if not self._supervisor_phone_numbers:
                errors.append(FormError.NO_SUPERVISORS)
            elif any(not phone.strip() for phone in self._supervisor_phone_numbers):
                errors.append(FormError.BLANK_SUPERVISOR_PHONE)
        return errors

    def is_form_valid(self) -> bool:
        return not self.validate()

    def build_habit(self) -> Habit:
        """Build the record ``save`` would persist from the current draft."""
        weekly = self._repeat_cycle == RepeatCycle.WEEKLY
        sms = self._supervision_method == SupervisionMethod.SMS_REPORTING
        habit = Habit(
            id=self._id or None,
            title=self._title,
            repeat_cycle=self._repeat_cycle,
            repeat_days=list(self._selected_days) if weekly else [],
            reminder_times=list(self._reminder_times),
            notes=self._notes,
            supervision_method=self._supervision_method,
            supervisor_phone_numbers=list(self._supervisor_phone_numbers) if sms else [],
            completed=self._completed if self._id else False,
            completion_count=self._completion_count if self._id else 0,
        )
        if self._id and self._created_date is not None:
            habit.created_date = self._created_date
        return habit

    def save(self) -> SaveResult:
        """Persist the draft, then reset it.

        Nothing is written and the draft stays as it is when validation
        fails; the result lists the reasons instead.
        """
        errors = self.validate()
        if self._supervision_method == SupervisionMethod.SMS_REPORTING and any(
            phone.strip() and not is_phone_valid(phone)
            for phone in self._supervisor_phone_numbers
        ):
            errors.append(FormError.INVALID_SUPERVISOR_PHONE)
        # Weekly habits share a single reminder time across their days.
        if self._repeat_cycle == RepeatCycle.WEEKLY and len(self._reminder_times) > 1:
            errors.append(FormError.TOO_MANY_WEEKLY_TIMES)
        if errors:
            logger.info(
                "Habit save rejected",
                extra={"habit_id": self._id, "errors": [error.value for error in errors]},
            )
            return SaveResult(habit_id=self._id, errors=tuple(errors))

        habit = self.build_habit()
        if self._id:
            self.repository.update(habit)
            result = SaveResult(habit_id=self._id, inserted=False)
        else:
            result = SaveResult(habit_id=self.repository.insert(habit), inserted=True)

        self.reset_form()
        return result


__all__ = ["FormError", "HabitForm", "SaveResult"]
