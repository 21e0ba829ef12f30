"""Tests for habit streak calculations.

Covers the day-by-day current streak walk done by the data manager and the
pure ``longest_streak`` helper used for the longest streak:
- Consecutive days
- Gaps in habit completion
- Missing today
- Several completions on one day
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

from habittracker.services.analytics import longest_streak


def _days_back(start: datetime, *offsets: int) -> list[datetime]:
    return [start - timedelta(days=offset) for offset in offsets]


class TestCurrentStreak:
    """Tests for the current consecutive day streak."""

    def test_no_completions_returns_zero(self, manager, habit_factory):
        """Habit with no completions should have zero current streak."""
        habit = habit_factory(name="Exercise")

        assert manager.get_completion_streak(habit) == 0

    def test_single_completion_today_returns_one(self, manager, habit_factory, today):
        habit = habit_factory(name="Exercise")
        manager.set_completion(habit, today, True)

        assert manager.get_completion_streak(habit) == 1

    def test_three_days_ending_today(self, manager, habit_factory, today):
        """Today, yesterday and the day before, with a gap three days ago."""
        habit = habit_factory(name="Meditation")
        for day in _days_back(today, 0, 1, 2, 4, 5):
            manager.set_completion(habit, day, True)

        assert manager.get_completion_streak(habit) == 3

    def test_missing_today_returns_zero(self, manager, habit_factory, today):
        """If today's completion is missing, the streak is 0 even with yesterday done."""
        habit = habit_factory(name="Reading")
        for day in _days_back(today, 1, 2, 3):
            manager.set_completion(habit, day, True)

        assert manager.get_completion_streak(habit) == 0

    def test_time_of_day_does_not_matter(self, manager, habit_factory, today):
        """Completions late or early in a day still count for that day."""
        habit = habit_factory(name="Stretch")
        midnight = today.replace(hour=0, minute=0)
        manager.create_habit_completion(habit, midnight + timedelta(minutes=1))
        manager.create_habit_completion(habit, midnight - timedelta(minutes=1))

        assert manager.get_completion_streak(habit) == 2

    def test_other_habits_do_not_contribute(self, manager, habit_factory, today):
        habit = habit_factory(name="Run")
        other = habit_factory(name="Swim")
        manager.set_completion(habit, today, True)
        manager.set_completion(other, today - timedelta(days=1), True)

        assert manager.get_completion_streak(habit) == 1

    def test_streak_crosses_month_boundary(self, manager, clock, habit_factory):
        clock.current = datetime(2024, 3, 2, 9, 0)
        habit = habit_factory(name="Journal")
        for day in _days_back(clock.current, 0, 1, 2, 3):
            manager.set_completion(habit, day, True)

        assert manager.get_completion_streak(habit) == 4


class TestLongestStreak:
    """Tests for the longest historical streak."""

    def test_no_completions_returns_zero(self, manager, habit_factory):
        habit = habit_factory(name="Exercise")

        assert manager.get_longest_streak(habit) == 0

    def test_longest_run_in_the_past(self, manager, habit_factory, today):
        habit = habit_factory(name="Reading")
        # Run of 2 ending today, run of 4 a week earlier.
        for day in _days_back(today, 0, 1, 7, 8, 9, 10):
            manager.set_completion(habit, day, True)

        assert manager.get_longest_streak(habit) == 4
        assert manager.get_completion_streak(habit) == 2


class TestLongestStreakHelper:
    """Tests for the pure longest-streak helper."""

    def test_empty_input(self):
        assert longest_streak([]) == 0

    def test_multiple_runs_returns_longest(self):
        days = [date(2024, 1, d) for d in (1, 2, 3, 10, 11, 12, 13, 14, 15, 20, 21, 22)]

        assert longest_streak(days) == 6

    def test_duplicate_days_collapse(self):
        days = [
            datetime(2024, 1, 1, 8, 0),
            datetime(2024, 1, 1, 20, 0),
            datetime(2024, 1, 2, 9, 0),
        ]

        assert longest_streak(days) == 2

    def test_unordered_input(self):
        days = [date(2024, 1, 5), date(2024, 1, 3), date(2024, 1, 4), date(2024, 1, 1)]

        assert longest_streak(days) == 3
