"""Habit repository protocol."""

from __future__ import annotations

import uuid
from typing import Any, Optional, Protocol

from ...models.habit import Habit


class HabitRepository(Protocol):
    """Repository for managing habit entities."""

    def get_by_id(self, habit_id: uuid.UUID) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        ...

    def list_all(self, include_inactive: bool = True) -> list[Habit]:
        """List habits, newest first."""
        ...

    def list_active(self) -> list[Habit]:
        """List only active habits."""
        ...

    def list_by_category(self, category_id: uuid.UUID) -> list[Habit]:
        """List habits assigned to a category."""
        ...

    def create(self, habit: Habit) -> Habit:
        """Create a new habit."""
        ...

    def update(self, habit_id: uuid.UUID, changes: dict[str, Any]) -> Optional[Habit]:
        """Apply field changes to a stored habit."""
        ...

    def delete(self, habit_id: uuid.UUID) -> bool:
        """Delete a habit together with its completions."""
        ...
