"""Pytest configuration and shared fixtures for HabitTracker tests.

Each test gets its own in-memory record store, a data manager bound to a
controllable clock, and factories for habits and categories.
"""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from habittracker.config import TestConfig
from habittracker.infra.database import Store
from habittracker.models import Habit, HabitCategory
from habittracker.services.data_manager import HabitDataManager

# Friday afternoon; far enough from midnight that day arithmetic is unambiguous.
FIXED_NOW = datetime(2024, 3, 15, 14, 30)


class FakeClock:
    """Callable clock returning a settable local time."""

    def __init__(self, now: datetime) -> None:
        self.current = now

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current += timedelta(**kwargs)
        return self.current


@pytest.fixture(autouse=True)
def _isolated_data_dir(tmp_path, monkeypatch):
    """Keep config side effects (data dir, logs) inside the test's tmp dir."""

    monkeypatch.setenv("HABITTRACKER_DATA_DIR", str(tmp_path / "instance"))
    monkeypatch.delenv("HABITTRACKER_DATABASE_URL", raising=False)


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def config(tmp_path) -> TestConfig:
    return TestConfig(data_dir=tmp_path)


@pytest.fixture
def store(config):
    """Open an isolated in-memory store for a single test.

    Yields:
        Store: opened store, closed again after the test
    """
    with Store(config) as opened:
        yield opened


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(FIXED_NOW)


@pytest.fixture
def manager(store, clock) -> HabitDataManager:
    return HabitDataManager(store, clock=clock)


@pytest.fixture
def today(clock) -> datetime:
    return clock.current


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def category_factory(manager):
    """Factory for creating persisted categories."""

    def _create_category(name: str = "Health", color: str | None = "blue") -> HabitCategory:
        return manager.create_habit_category(name, color=color)

    return _create_category


@pytest.fixture
def habit_factory(manager, clock):
    """Factory for creating persisted habits.

    The clock moves forward a minute per habit so creation order is stable.
    """

    def _create_habit(
        name: str = "Test Habit",
        description: str | None = "Test habit description",
        frequency: str = "daily",
        is_active: bool = True,
        category: HabitCategory | None = None,
    ) -> Habit:
        clock.advance(minutes=1)
        return manager.create_habit(
            name,
            description=description,
            frequency=frequency,
            is_active=is_active,
            category=category,
        )

    return _create_habit
