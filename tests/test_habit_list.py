"""Tests for the cached habit list."""

from __future__ import annotations

import pytest

from habitpulse.models import Habit
from habitpulse.state import HabitListState


@pytest.fixture
def habit_list(habit_repo) -> HabitListState:
    return HabitListState(habit_repo)


class TestLoading:
    def test_empty_store(self, habit_list):
        assert habit_list.habits == []

    def test_autoload_reads_newest_first(self, habit_repo, habit_factory):
        habit_factory(title="Old", created_date=1_000)
        habit_factory(title="New", created_date=2_000)

        state = HabitListState(habit_repo)

        assert [habit.title for habit in state.habits] == ["New", "Old"]

    def test_autoload_disabled(self, habit_repo, habit_factory):
        habit_factory()

        state = HabitListState(habit_repo, autoload=False)

        assert state.habits == []
        assert len(state.load_habits()) == 1

    def test_snapshot_is_a_copy(self, habit_list, habit_factory):
        habit_factory()
        habit_list.load_habits()

        habit_list.habits.clear()

        assert len(habit_list.habits) == 1

    def test_find(self, habit_list, habit_factory):
        habit = habit_factory(title="Walk")
        habit_list.load_habits()

        assert habit_list.find(habit.id).title == "Walk"
        assert habit_list.find(habit.id + 100) is None


class TestMutations:
    def test_add_habit_reloads(self, habit_list):
        habit_id = habit_list.add_habit(Habit(title="Journal", reminder_times=["22:00"]))

        assert [habit.id for habit in habit_list.habits] == [habit_id]

    def test_update_habit_reloads(self, habit_list, habit_factory):
        habit = habit_factory(title="Journal")
        habit_list.load_habits()
        habit.title = "Journal before bed"

        habit_list.update_habit(habit)

        assert habit_list.find(habit.id).title == "Journal before bed"

    def test_delete_habit_and_delete_by_id(self, habit_list, habit_factory):
        first = habit_factory(title="First")
        second = habit_factory(title="Second")
        habit_list.load_habits()

        habit_list.delete_habit(first)
        assert [habit.id for habit in habit_list.habits] == [second.id]

        habit_list.delete_by_id(second.id)
        assert habit_list.habits == []


class TestCompletion:
    def test_mark_done_increments(self, habit_list, habit_factory):
        habit = habit_factory(completion_count=3)
        habit_list.load_habits()

        habit_list.update_completed(habit.id, True)

        reloaded = habit_list.find(habit.id)
        assert reloaded.completed is True
        assert reloaded.completion_count == 4

    def test_undo_keeps_count(self, habit_list, habit_factory):
        habit = habit_factory(completed=True, completion_count=4)
        habit_list.load_habits()

        habit_list.update_completed(habit.id, False)

        reloaded = habit_list.find(habit.id)
        assert reloaded.completed is False
        assert reloaded.completion_count == 4

    def test_toggle_sequence(self, habit_list, habit_factory):
        habit = habit_factory(completion_count=3)
        habit_list.load_habits()

        assert habit_list.toggle_completed(habit.id) is True
        assert habit_list.find(habit.id).completion_count == 4

        assert habit_list.toggle_completed(habit.id) is False
        assert habit_list.find(habit.id).completion_count == 4

        assert habit_list.toggle_completed(habit.id) is True
        assert habit_list.find(habit.id).completion_count == 5

    def test_mark_done_twice_counts_once(self, habit_list, habit_factory):
        habit = habit_factory(completed=True, completion_count=4)
        habit_list.load_habits()

        habit_list.update_completed(habit.id, True)

        reloaded = habit_list.find(habit.id)
        assert reloaded.completed is True
        assert reloaded.completion_count == 4

    def test_toggle_unknown_habit(self, habit_list):
        assert habit_list.toggle_completed(42) is None

    def test_mark_done_is_visible_right_away(self, habit_repo, habit_factory):
        """A second list over the same store sees the write without waiting."""
        habit = habit_factory()
        writer = HabitListState(habit_repo)
        reader = HabitListState(habit_repo)

        writer.update_completed(habit.id, True)

        assert reader.load_habits()[0].completed is True
