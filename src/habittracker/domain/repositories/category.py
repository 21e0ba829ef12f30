"""Category repository protocol."""

from __future__ import annotations

import uuid
from typing import Any, Optional, Protocol

from ...models.category import HabitCategory


class CategoryRepository(Protocol):
    """Repository for managing category entities."""

    def list_all(self) -> list[HabitCategory]:
        """List all categories by name."""
        ...

    def create(self, category: HabitCategory) -> HabitCategory:
        """Create a new category."""
        ...

    def update(self, category_id: uuid.UUID, changes: dict[str, Any]) -> Optional[HabitCategory]:
        """Apply field changes to a stored category."""
        ...

    def delete(self, category_id: uuid.UUID) -> bool:
        """Delete a category, detaching it from its habits."""
        ...
