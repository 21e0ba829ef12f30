"""Concrete repository implementations using SQLModel."""

from .category import SQLModelCategoryRepository
from .completion import SQLModelCompletionRepository
from .habit import SQLModelHabitRepository

__all__ = [
    "SQLModelCategoryRepository",
    "SQLModelCompletionRepository",
    "SQLModelHabitRepository",
]
