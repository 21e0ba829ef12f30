"""SQLModel implementation of Habit repository."""

from __future__ import annotations

import uuid
from typing import Any, Callable, Optional

from sqlalchemy import delete as sa_delete
from sqlmodel import Session, select

from ...models.completion import HabitCompletion
from ...models.habit import Habit
from ..database import read_scope, write_scope


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, habit_id: uuid.UUID) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        with read_scope(self.session_factory, "habit") as session:
            obj = session.get(Habit, habit_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, include_inactive: bool = True) -> list[Habit]:
        """List habits, newest first."""
        with read_scope(self.session_factory, "habits") as session:
            statement = select(Habit).order_by(Habit.created_date.desc())  # type: ignore

            if not include_inactive:
                statement = statement.where(Habit.is_active == True)  # noqa: E712

            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_active(self) -> list[Habit]:
        """List only active habits."""
        return self.list_all(include_inactive=False)

    def list_by_category(self, category_id: uuid.UUID) -> list[Habit]:
        """List habits assigned to a category, newest first."""
        with read_scope(self.session_factory, "habits by category") as session:
            statement = (
                select(Habit)
                .where(Habit.category_id == category_id)
                .order_by(Habit.created_date.desc())  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, habit: Habit) -> Habit:
        """Create a new habit."""
        with write_scope(self.session_factory, "habit") as session:
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def update(self, habit_id: uuid.UUID, changes: dict[str, Any]) -> Optional[Habit]:
        """Apply ``changes`` to the stored habit; ``None`` when it is gone."""
        with write_scope(self.session_factory, "habit") as session:
            habit = session.get(Habit, habit_id)
            if habit is None:
                return None
            for field, value in changes.items():
                setattr(habit, field, value)
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def delete(self, habit_id: uuid.UUID) -> bool:
        """Delete a habit and its completions in one transaction."""
        with write_scope(self.session_factory, "habit deletion") as session:
            habit = session.get(Habit, habit_id)
            if habit is None:
                return False
            session.connection().execute(
                sa_delete(HabitCompletion).where(HabitCompletion.habit_id == habit_id)
            )
            session.delete(habit)
            session.commit()
            return True
