"""SQLModel table exports."""

from .category import HabitCategory
from .completion import HabitCompletion
from .habit import Frequency, Habit

__all__ = [
    "Frequency",
    "Habit",
    "HabitCategory",
    "HabitCompletion",
]
