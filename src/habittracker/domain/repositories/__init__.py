"""Repository protocol definitions for domain layer."""

from .category import CategoryRepository
from .completion import CompletionRepository
from .habit import HabitRepository

__all__ = [
    "CategoryRepository",
    "CompletionRepository",
    "HabitRepository",
]
