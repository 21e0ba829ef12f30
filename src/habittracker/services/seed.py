"""Sample data used for demos and UI previews."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .data_manager import HabitDataManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeedSummary:
    """Counts of records inserted by ``seed_preview_data``."""

    categories: int
    habits: int
    completions: int


def seed_preview_data(manager: HabitDataManager, *, force: bool = False) -> SeedSummary:
    """Insert one category, habit and completion for today.

    Skipped when habits already exist unless ``force`` is set, so re-running
    a seed does not duplicate the sample.
    """

    if not force and manager.fetch_all_habits():
        logger.info("Seed skipped: habits already present")
        return SeedSummary(categories=0, habits=0, completions=0)

    category = manager.create_habit_category("Health", color="blue")
    habit = manager.create_habit(
        "Drink 8 glasses of water",
        description="Stay hydrated throughout the day",
        frequency="daily",
        is_active=True,
        category=category,
    )
    manager.create_habit_completion(habit, manager.now(), notes="Completed successfully")
    logger.info("Seeded preview data")
    return SeedSummary(categories=1, habits=1, completions=1)


__all__ = ["SeedSummary", "seed_preview_data"]
