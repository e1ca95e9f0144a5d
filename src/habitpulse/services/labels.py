"""Human-readable labels for habit enums and summaries."""

from __future__ import annotations

from ..models.habit import Habit, RepeatCycle, SupervisionMethod

REPEAT_CYCLE_OPTIONS: list[tuple[RepeatCycle, str]] = [
    (RepeatCycle.DAILY, "Daily"),
    (RepeatCycle.WEEKLY, "Weekly"),
]

SUPERVISION_METHOD_OPTIONS: list[tuple[SupervisionMethod, str]] = [
    (SupervisionMethod.LOCAL_NOTIFICATION_ONLY, "No supervision, local notification only"),
    (SupervisionMethod.SMS_REPORTING, "SMS reporting"),
]

# Index matches the stored day number (0 = Monday).
WEEKDAY_LABELS: tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

_REPEAT_CYCLE_LABELS = dict(REPEAT_CYCLE_OPTIONS)
_SUPERVISION_METHOD_LABELS = dict(SUPERVISION_METHOD_OPTIONS)


def repeat_cycle_label(cycle: RepeatCycle) -> str:
    return _REPEAT_CYCLE_LABELS[RepeatCycle(cycle)]


def supervision_method_label(method: SupervisionMethod) -> str:
    return _SUPERVISION_METHOD_LABELS[SupervisionMethod(method)]


def weekday_label(day: int) -> str:
    """Short weekday name for a stored day number."""

    if not 0 <= day < len(WEEKDAY_LABELS):
        raise ValueError(f"Day must be between 0 and 6, got {day}")
    return WEEKDAY_LABELS[day]


def describe_schedule(habit: Habit) -> str:
    """One-line schedule summary, e.g. ``Daily • 07:00, 21:30``."""

    if habit.repeat_cycle == RepeatCycle.WEEKLY:
        days = ", ".join(weekday_label(day) for day in habit.repeat_days)
        time_text = habit.reminder_times[0] if habit.reminder_times else ""
        return f"{days} • {time_text}"
    return f"{repeat_cycle_label(RepeatCycle.DAILY)} • {', '.join(habit.reminder_times)}"


def describe_supervision(habit: Habit) -> str:
    if habit.supervision_method == SupervisionMethod.SMS_REPORTING:
        numbers = ", ".join(habit.supervisor_phone_numbers)
        return f"Supervision: SMS to {numbers}" if numbers else "Supervision: SMS"
    return "Supervision: local notification"


__all__ = [
    "REPEAT_CYCLE_OPTIONS",
    "SUPERVISION_METHOD_OPTIONS",
    "WEEKDAY_LABELS",
    "describe_schedule",
    "describe_supervision",
    "repeat_cycle_label",
    "supervision_method_label",
    "weekday_label",
]
