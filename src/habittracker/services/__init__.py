"""Service layer: data manager, analytics helpers and seeding."""

from .analytics import completion_percentage, longest_streak
from .data_manager import HabitDataManager
from .seed import SeedSummary, seed_preview_data

__all__ = [
    "HabitDataManager",
    "SeedSummary",
    "completion_percentage",
    "longest_streak",
    "seed_preview_data",
]
