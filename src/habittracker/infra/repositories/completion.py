"""SQLModel implementation of the habit completion repository."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Callable, Optional

from sqlalchemy import func
from sqlmodel import Session, select

from ...dates import day_bounds
from ...models.completion import HabitCompletion
from ..database import read_scope, write_scope


def _in_interval(habit_id: uuid.UUID, start: datetime, end: datetime):
    """``WHERE`` clauses for a habit's completions inside ``[start, end)``."""

    return (
        HabitCompletion.habit_id == habit_id,
        HabitCompletion.completion_date >= start,
        HabitCompletion.completion_date < end,
    )


class SQLModelCompletionRepository:
    """SQLModel-based completion repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def list_for_habit(self, habit_id: uuid.UUID) -> list[HabitCompletion]:
        """Return all completions for a habit, newest first."""
        with read_scope(self.session_factory, "completions") as session:
            statement = (
                select(HabitCompletion)
                .where(HabitCompletion.habit_id == habit_id)
                .order_by(HabitCompletion.completion_date.desc())  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_between(
        self, start: datetime, end: datetime, *, habit_id: Optional[uuid.UUID] = None
    ) -> list[HabitCompletion]:
        """Completions dated within ``[start, end]`` (both inclusive), newest first."""
        with read_scope(self.session_factory, "completions for date range") as session:
            statement = (
                select(HabitCompletion)
                .where(HabitCompletion.completion_date >= start)
                .where(HabitCompletion.completion_date <= end)
                .order_by(HabitCompletion.completion_date.desc())  # type: ignore
            )
            if habit_id is not None:
                statement = statement.where(HabitCompletion.habit_id == habit_id)
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def count_in_interval(self, habit_id: uuid.UUID, start: datetime, end: datetime) -> int:
        """Count a habit's completions with ``start <= completion_date < end``."""
        with read_scope(self.session_factory, "completion count") as session:
            statement = (
                select(func.count())
                .select_from(HabitCompletion)
                .where(*_in_interval(habit_id, start, end))
            )
            return int(session.exec(statement).one())

    def find_in_interval(
        self, habit_id: uuid.UUID, start: datetime, end: datetime
    ) -> Optional[HabitCompletion]:
        """First completion of a habit inside ``[start, end)``."""
        with read_scope(self.session_factory, "completion") as session:
            statement = (
                select(HabitCompletion)
                .where(*_in_interval(habit_id, start, end))
                .order_by(HabitCompletion.completion_date)  # type: ignore
                .limit(1)
            )
            obj = session.exec(statement).first()
            if obj:
                session.expunge(obj)
            return obj

    def create(self, completion: HabitCompletion) -> HabitCompletion:
        """Insert a completion as given; no same-day duplicate check."""
        with write_scope(self.session_factory, "completion") as session:
            session.add(completion)
            session.commit()
            session.refresh(completion)
            session.expunge(completion)
            return completion

    def set_state(
        self,
        habit_id: uuid.UUID,
        start: datetime,
        end: datetime,
        completed: bool,
        *,
        at: datetime,
    ) -> bool:
        """Make the habit completed (or not) inside ``[start, end)``.

        The lookup and the insert/delete run in the same transaction. An
        existing completion is kept untouched, so its notes survive repeated
        calls. Returns the resulting completion state.
        """
        with write_scope(self.session_factory, "completion state") as session:
            existing = session.exec(
                select(HabitCompletion)
                .where(*_in_interval(habit_id, start, end))
                .order_by(HabitCompletion.completion_date)  # type: ignore
                .limit(1)
            ).first()

            if completed and existing is None:
                session.add(HabitCompletion(habit_id=habit_id, completion_date=at, notes=None))
            elif not completed and existing is not None:
                session.delete(existing)
            session.commit()
            return completed

    def update(self, completion_id: uuid.UUID, changes: dict[str, Any]) -> Optional[HabitCompletion]:
        """Apply ``changes`` to the stored completion; ``None`` when it is gone.

        Moving a completion onto a day that already has another completion of
        the same habit raises ``ValueError`` and leaves the record unchanged.
        """
        with write_scope(self.session_factory, "completion") as session:
            completion = session.get(HabitCompletion, completion_id)
            if completion is None:
                return None
            if "completion_date" in changes:
                start, end = day_bounds(changes["completion_date"])
                clash = session.exec(
                    select(HabitCompletion.id)
                    .where(*_in_interval(completion.habit_id, start, end))
                    .where(HabitCompletion.id != completion_id)
                    .limit(1)
                ).first()
                if clash is not None:
                    raise ValueError(
                        f"Habit {completion.habit_id} already has a completion on "
                        f"{start.date().isoformat()}"
                    )
            for field, value in changes.items():
                setattr(completion, field, value)
            session.add(completion)
            session.commit()
            session.refresh(completion)
            session.expunge(completion)
            return completion

    def delete(self, completion_id: uuid.UUID) -> bool:
        """Delete a completion by ID."""
        with write_scope(self.session_factory, "completion deletion") as session:
            completion = session.get(HabitCompletion, completion_id)
            if completion is None:
                return False
            session.delete(completion)
            session.commit()
            return True
