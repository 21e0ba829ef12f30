"""SQLModel implementation of Category repository."""

from __future__ import annotations

import uuid
from typing import Any, Callable, Optional

from sqlalchemy import update as sa_update
from sqlmodel import Session, select

from ...models.category import HabitCategory
from ...models.habit import Habit
from ..database import read_scope, write_scope


class SQLModelCategoryRepository:
    """SQLModel-based category repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def list_all(self) -> list[HabitCategory]:
        """List all categories."""
        with read_scope(self.session_factory, "categories") as session:
            statement = select(HabitCategory).order_by(HabitCategory.name)  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, category: HabitCategory) -> HabitCategory:
        """Create a new category."""
        with write_scope(self.session_factory, "category") as session:
            session.add(category)
            session.commit()
            session.refresh(category)
            session.expunge(category)
            return category

    def update(self, category_id: uuid.UUID, changes: dict[str, Any]) -> Optional[HabitCategory]:
        """Apply ``changes`` to the stored category; ``None`` when it is gone."""
        with write_scope(self.session_factory, "category") as session:
            category = session.get(HabitCategory, category_id)
            if category is None:
                return None
            for field, value in changes.items():
                setattr(category, field, value)
            session.add(category)
            session.commit()
            session.refresh(category)
            session.expunge(category)
            return category

    def delete(self, category_id: uuid.UUID) -> bool:
        """Delete a category by ID.

        Habits pointing at the category are left uncategorised rather than
        removed; both writes share one transaction.
        """
        with write_scope(self.session_factory, "category deletion") as session:
            category = session.get(HabitCategory, category_id)
            if category is None:
                return False
            session.connection().execute(
                sa_update(Habit).where(Habit.category_id == category_id).values(category_id=None)
            )
            session.delete(category)
            session.commit()
            return True
