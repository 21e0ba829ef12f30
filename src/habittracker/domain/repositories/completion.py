"""Completion repository protocol."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Optional, Protocol

from ...models.completion import HabitCompletion


class CompletionRepository(Protocol):
    """Repository for habit completion records."""

    def list_for_habit(self, habit_id: uuid.UUID) -> list[HabitCompletion]:
        """List a habit's completions, newest first."""
        ...

    def list_between(
        self, start: datetime, end: datetime, *, habit_id: Optional[uuid.UUID] = None
    ) -> list[HabitCompletion]:
        """List completions with ``start <= completion_date <= end``, newest first."""
        ...

    def count_in_interval(self, habit_id: uuid.UUID, start: datetime, end: datetime) -> int:
        """Count completions with ``start <= completion_date < end``."""
        ...

    def find_in_interval(
        self, habit_id: uuid.UUID, start: datetime, end: datetime
    ) -> Optional[HabitCompletion]:
        """First completion with ``start <= completion_date < end``."""
        ...

    def create(self, completion: HabitCompletion) -> HabitCompletion:
        """Create a completion without checking for same-day duplicates."""
        ...

    def set_state(
        self, habit_id: uuid.UUID, start: datetime, end: datetime, completed: bool, *, at: datetime
    ) -> bool:
        """Ensure a completion exists (or not) inside ``[start, end)``."""
        ...

    def update(self, completion_id: uuid.UUID, changes: dict[str, Any]) -> Optional[HabitCompletion]:
        """Apply field changes to a stored completion, keeping one per habit and day."""
        ...

    def delete(self, completion_id: uuid.UUID) -> bool:
        """Delete a completion by ID."""
        ...
