"""Command-line front end for HabitPulse."""

from __future__ import annotations

from typing import Optional, Sequence

import click

from .config import BaseConfig, DevConfig
from .context import AppContext, create_app_context
from .logging_config import setup_logging
from .models.habit import ALL_DAYS, Habit, RepeatCycle, SupervisionMethod
from .services.labels import WEEKDAY_LABELS, describe_schedule, describe_supervision
from .services.validation import is_time_valid
from .state import HabitForm

_DAY_CHOICE = click.Choice(WEEKDAY_LABELS, case_sensitive=False)
_CYCLE_CHOICE = click.Choice([cycle.value.lower() for cycle in RepeatCycle], case_sensitive=False)


def _day_numbers(days: Sequence[str]) -> list[int]:
    lookup = {label.lower(): index for index, label in enumerate(WEEKDAY_LABELS)}
    return sorted({lookup[day.lower()] for day in days})


def _format_habit(habit: Habit) -> str:
    mark = "x" if habit.completed else " "
    lines = [
        f"[{mark}] #{habit.id} {habit.title} ({habit.completion_count} completed)",
        f"    {describe_schedule(habit)}",
        f"    {describe_supervision(habit)}",
    ]
    if habit.notes:
        lines.append(f"    Notes: {habit.notes}")
    return "\n".join(lines)


def _fill_form(
    form: HabitForm,
    *,
    title: Optional[str],
    cycle: Optional[str],
    days: Sequence[str],
    times: Sequence[str],
    notes: Optional[str],
    phones: Sequence[str],
    local_only: bool,
) -> None:
    """Drive the form the way an interactive editor would."""

    if title is not None:
        form.set_title(title)
    if cycle is not None and RepeatCycle(cycle.upper()) != form.repeat_cycle:
        form.set_repeat_cycle(RepeatCycle(cycle.upper()))

    if days:
        if form.repeat_cycle != RepeatCycle.WEEKLY:
            raise click.BadParameter("Days only apply to weekly habits", param_hint="--day")
        wanted = _day_numbers(days)
        for day in ALL_DAYS:
            form.set_selected_day(day, day in wanted)

    if times:
        if form.repeat_cycle == RepeatCycle.WEEKLY and len(times) > 1:
            raise click.BadParameter("Weekly habits share a single time", param_hint="--time")
        form.set_reminder_times([])
        for value in times:
            if not is_time_valid(value):
                raise click.BadParameter(f"{value!r} is not HH:MM", param_hint="--time")
            if not form.apply_reminder_time(value):
                click.echo(f"Reminder time {value} already exists, skipped")

    if notes is not None:
        form.set_notes(notes)

    if local_only:
        form.set_supervision_method(SupervisionMethod.LOCAL_NOTIFICATION_ONLY)
    elif phones:
        form.set_supervision_method(SupervisionMethod.SMS_REPORTING)
        form.set_supervisor_phone_numbers([])
        for phone in phones:
            if not form.can_add_supervisor_phone_number(phone):
                raise click.BadParameter(
                    f"{phone!r} is not a valid or new phone number", param_hint="--sms"
                )
            form.add_supervisor_phone_number(phone)


def _save_form(app: AppContext) -> int:
    result = app.habit_form.save()
    if not result.ok or result.habit_id is None:
        reasons = ", ".join(error.value for error in result.errors)
        raise click.ClickException(f"Habit not saved: {reasons}")
    app.habit_list.load_habits()
    return result.habit_id


def _require_habit(app: AppContext, habit_id: int) -> Habit:
    habit = app.habit_list.find(habit_id)
    if habit is None:
        raise click.ClickException(f"Habit {habit_id} not found")
    return habit


def _habit_options(func):
    """Options shared by ``add`` and ``edit``."""

    options = [
        click.option("--title", help="Habit title (max 200 characters)."),
        click.option("--cycle", type=_CYCLE_CHOICE, help="Repeat cycle."),
        click.option("--day", "days", multiple=True, type=_DAY_CHOICE, help="Weekday for weekly habits."),
        click.option("--time", "times", multiple=True, help="Reminder time as HH:MM."),
        click.option("--notes", help="Free-form notes."),
        click.option("--sms", "phones", multiple=True, help="Supervisor phone number for SMS reports."),
        click.option("--local", "local_only", is_flag=True, help="Only notify locally."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.option("--dev", is_flag=True, default=False, help="Verbose console logging.")
@click.pass_context
def main(ctx: click.Context, dev: bool) -> None:
    """Track daily and weekly habits."""

    config = DevConfig() if dev else BaseConfig()
    setup_logging(config)
    app = create_app_context(config)
    ctx.call_on_close(app.dispose)
    ctx.obj = app


@main.command("list")
@click.pass_obj
def list_habits(app: AppContext) -> None:
    """List habits, newest first."""

    habits = app.habit_list.habits
    if not habits:
        click.echo("No habits yet.")
        return
    for habit in habits:
        click.echo(_format_habit(habit))


@main.command("show")
@click.argument("habit_id", type=int)
@click.pass_obj
def show_habit(app: AppContext, habit_id: int) -> None:
    """Show a single habit."""

    click.echo(_format_habit(_require_habit(app, habit_id)))


@main.command("add")
@_habit_options
@click.pass_obj
def add_habit(app: AppContext, title, cycle, days, times, notes, phones, local_only) -> None:
    """Create a habit."""

    form = app.habit_form
    form.reset_form()
    _fill_form(
        form,
        title=title or "",
        cycle=cycle,
        days=days,
        times=times,
        notes=notes,
        phones=phones,
        local_only=local_only,
    )
    habit_id = _save_form(app)
    click.echo(f"Created habit #{habit_id}")


@main.command("edit")
@click.argument("habit_id", type=int)
@_habit_options
@click.pass_obj
def edit_habit(app: AppContext, habit_id, title, cycle, days, times, notes, phones, local_only) -> None:
    """Change an existing habit."""

    form = app.habit_form
    if not form.load_for_edit(habit_id):
        raise click.ClickException(f"Habit {habit_id} not found")
    _fill_form(
        form,
        title=title,
        cycle=cycle,
        days=days,
        times=times,
        notes=notes,
        phones=phones,
        local_only=local_only,
    )
    _save_form(app)
    click.echo(f"Updated habit #{habit_id}")


@main.command("done")
@click.argument("habit_id", type=int)
@click.pass_obj
def mark_done(app: AppContext, habit_id: int) -> None:
    """Mark a habit complete."""

    habit = _require_habit(app, habit_id)
    if habit.completed:
        click.echo(f"Habit #{habit_id} is already complete")
        return
    app.habit_list.update_completed(habit_id, True)
    click.echo(f"Completed #{habit_id} ({app.habit_list.find(habit_id).completion_count} total)")


@main.command("undo")
@click.argument("habit_id", type=int)
@click.pass_obj
def mark_undone(app: AppContext, habit_id: int) -> None:
    """Clear a habit's completed flag."""

    _require_habit(app, habit_id)
    app.habit_list.update_completed(habit_id, False)
    click.echo(f"Habit #{habit_id} marked not done")


@main.command("set-count")
@click.argument("habit_id", type=int)
@click.argument("count", type=click.IntRange(min=0))
@click.pass_obj
def set_count(app: AppContext, habit_id: int, count: int) -> None:
    """Overwrite a habit's completion count."""

    _require_habit(app, habit_id)
    app.habit_repo.set_completion_count(habit_id, count)
    app.habit_list.load_habits()
    click.echo(f"Habit #{habit_id} completion count set to {count}")


@main.command("delete")
@click.argument("habit_id", type=int)
@click.confirmation_option(prompt="Delete this habit permanently?")
@click.pass_obj
def delete_habit(app: AppContext, habit_id: int) -> None:
    """Delete a habit."""

    _require_habit(app, habit_id)
    app.habit_list.delete_by_id(habit_id)
    click.echo(f"Deleted habit #{habit_id}")


if __name__ == "__main__":  # pragma: no cover
    main()
