"""Data manager mediating between the record store and its callers.

``HabitDataManager`` is the only component that mutates records. Every call
runs synchronously in a short-lived session and returns detached records or
plain values. Write failures raise ``StoreWriteError`` after being logged;
read failures are logged and degrade to an empty result.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Optional, Union

from sqlalchemy import delete as sa_delete

from ..dates import DateLike, day_bounds, days_ago, start_of_day, to_local_naive
from ..domain.repositories import CategoryRepository, CompletionRepository, HabitRepository
from ..errors import RecordNotFoundError, StoreReadError
from ..infra.database import Store, write_scope
from ..infra.repositories import (
    SQLModelCategoryRepository,
    SQLModelCompletionRepository,
    SQLModelHabitRepository,
)
from ..models import Frequency, Habit, HabitCategory, HabitCompletion
from .analytics import completion_percentage, longest_streak

logger = logging.getLogger(__name__)

HabitRef = Union[Habit, uuid.UUID]
CategoryRef = Union[HabitCategory, uuid.UUID]
CompletionRef = Union[HabitCompletion, uuid.UUID]


def _id_of(ref: Any) -> uuid.UUID:
    """Accept either a record or its identifier."""

    if isinstance(ref, uuid.UUID):
        return ref
    record_id = getattr(ref, "id", None)
    if not isinstance(record_id, uuid.UUID):
        raise TypeError(f"Expected a record or UUID, got {type(ref).__name__}")
    return record_id


def _require_name(name: str, kind: str) -> str:
    if name is None or not str(name).strip():
        raise ValueError(f"{kind} name must not be empty")
    return name


def _sync(target: Any, source: Any, fields) -> None:
    """Mirror persisted values onto the caller's copy of a record."""

    if isinstance(target, uuid.UUID):
        return
    for field in fields:
        setattr(target, field, getattr(source, field))


class HabitDataManager:
    """CRUD, completion toggling and analytics for habits."""

    def __init__(self, store: Store, *, clock: Callable[[], datetime] = datetime.now) -> None:
        self.store = store.open()
        self._clock = clock
        session_factory = self.store.session_factory
        self.habits: HabitRepository = SQLModelHabitRepository(session_factory)
        self.categories: CategoryRepository = SQLModelCategoryRepository(session_factory)
        self.completions: CompletionRepository = SQLModelCompletionRepository(session_factory)

    def now(self) -> datetime:
        """Current local time according to the injected clock."""
        return to_local_naive(self._clock())

    # ------------------------------------------------------------------
    # Habits
    # ------------------------------------------------------------------
    def create_habit(
        self,
        name: str,
        description: Optional[str] = None,
        frequency: Frequency | str = Frequency.daily,
        is_active: bool = True,
        category: Optional[CategoryRef] = None,
    ) -> Habit:
        """Create and persist a habit. Trimming ``name`` is up to the caller."""

        habit = Habit(
            name=_require_name(name, "Habit"),
            description=description,
            frequency=Frequency.parse(frequency),
            is_active=is_active,
            created_date=self.now(),
            category_id=_id_of(category) if category is not None else None,
        )
        created = self.habits.create(habit)
        logger.info("Created habit %s", created.name, extra={"habit_id": str(created.id)})
        return created

    def get_habit(self, habit_id: uuid.UUID) -> Optional[Habit]:
        try:
            return self.habits.get_by_id(habit_id)
        except StoreReadError:
            return None

    def fetch_all_habits(self) -> list[Habit]:
        """All habits, newest first."""
        try:
            return self.habits.list_all()
        except StoreReadError:
            return []

    def fetch_active_habits(self) -> list[Habit]:
        """Active habits, newest first."""
        try:
            return self.habits.list_active()
        except StoreReadError:
            return []

    def fetch_habits(self, category: CategoryRef) -> list[Habit]:
        """Habits assigned to ``category``, newest first."""
        try:
            return self.habits.list_by_category(_id_of(category))
        except StoreReadError:
            return []

    def update_habit(
        self,
        habit: HabitRef,
        name: Optional[str] = None,
        description: Optional[str] = None,
        frequency: Frequency | str | None = None,
        is_active: Optional[bool] = None,
        category: Optional[CategoryRef] = None,
    ) -> Habit:
        """Overwrite only the fields that were supplied."""

        changes: dict[str, Any] = {}
        if name is not None:
            changes["name"] = _require_name(name, "Habit")
        if description is not None:
            changes["description"] = description
        if frequency is not None:
            changes["frequency"] = Frequency.parse(frequency)
        if is_active is not None:
            changes["is_active"] = is_active
        if category is not None:
            changes["category_id"] = _id_of(category)

        habit_id = _id_of(habit)
        updated = self.habits.update(habit_id, changes)
        if updated is None:
            raise RecordNotFoundError("Habit", habit_id)
        _sync(habit, updated, changes)
        return updated

    def delete_habit(self, habit: HabitRef) -> bool:
        """Delete a habit along with its completions."""

        habit_id = _id_of(habit)
        deleted = self.habits.delete(habit_id)
        if deleted:
            logger.info("Deleted habit", extra={"habit_id": str(habit_id)})
        return deleted

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------
    def create_habit_category(self, name: str, color: Optional[str] = None) -> HabitCategory:
        category = HabitCategory(
            name=_require_name(name, "Category"), color=color, created_date=self.now()
        )
        return self.categories.create(category)

    def fetch_all_categories(self) -> list[HabitCategory]:
        """All categories ordered by name."""
        try:
            return self.categories.list_all()
        except StoreReadError:
            return []

    def update_category(
        self,
        category: CategoryRef,
        name: Optional[str] = None,
        color: Optional[str] = None,
    ) -> HabitCategory:
        changes: dict[str, Any] = {}
        if name is not None:
            changes["name"] = _require_name(name, "Category")
        if color is not None:
            changes["color"] = color

        category_id = _id_of(category)
        updated = self.categories.update(category_id, changes)
        if updated is None:
            raise RecordNotFoundError("HabitCategory", category_id)
        _sync(category, updated, changes)
        return updated

    def delete_category(self, category: CategoryRef) -> bool:
        """Delete a category; its habits stay, uncategorised."""

        category_id = _id_of(category)
        deleted = self.categories.delete(category_id)
        if deleted:
            logger.info("Deleted category", extra={"category_id": str(category_id)})
        return deleted

    # ------------------------------------------------------------------
    # Completions
    # ------------------------------------------------------------------
    def create_habit_completion(
        self,
        habit: HabitRef,
        date: Optional[DateLike] = None,
        notes: Optional[str] = None,
    ) -> HabitCompletion:
        """Record a completion as-is.

        Does not check for an existing completion on the same day; use
        ``set_completion`` to keep one completion per day.
        """

        completion = HabitCompletion(
            habit_id=_id_of(habit),
            completion_date=to_local_naive(date) if date is not None else self.now(),
            notes=notes,
        )
        return self.completions.create(completion)

    def fetch_completions(self, habit: HabitRef) -> list[HabitCompletion]:
        """A habit's completions, newest first."""
        try:
            return self.completions.list_for_habit(_id_of(habit))
        except StoreReadError:
            return []

    def fetch_completions_between(self, start: DateLike, end: DateLike) -> list[HabitCompletion]:
        """Completions of any habit dated within ``[start, end]``, newest first."""
        try:
            return self.completions.list_between(to_local_naive(start), to_local_naive(end))
        except StoreReadError:
            return []

    def is_habit_completed(self, habit: HabitRef, on: DateLike) -> bool:
        """Whether the habit has a completion on the local day containing ``on``."""

        start, end = day_bounds(on)
        try:
            return self.completions.count_in_interval(_id_of(habit), start, end) > 0
        except StoreReadError:
            return False

    def find_completion(self, habit: HabitRef, on: DateLike) -> Optional[HabitCompletion]:
        start, end = day_bounds(on)
        try:
            return self.completions.find_in_interval(_id_of(habit), start, end)
        except StoreReadError:
            return None

    def set_completion(self, habit: HabitRef, on: DateLike, completed: bool) -> bool:
        """Idempotently mark ``habit`` done (or not done) on the day of ``on``.

        A completion is created only when none exists for that day, and an
        existing one keeps its notes. Returns the resulting state.
        """

        start, end = day_bounds(on)
        return self.completions.set_state(
            _id_of(habit), start, end, completed, at=to_local_naive(on)
        )

    def update_completion(
        self,
        completion: CompletionRef,
        date: Optional[DateLike] = None,
        notes: Optional[str] = None,
    ) -> HabitCompletion:
        """Change a completion's date or notes.

        Raises ``ValueError`` when ``date`` falls on a day that already has
        another completion of the same habit.
        """

        changes: dict[str, Any] = {}
        if date is not None:
            changes["completion_date"] = to_local_naive(date)
        if notes is not None:
            changes["notes"] = notes

        completion_id = _id_of(completion)
        updated = self.completions.update(completion_id, changes)
        if updated is None:
            raise RecordNotFoundError("HabitCompletion", completion_id)
        _sync(completion, updated, changes)
        return updated

    def delete_completion(self, completion: CompletionRef) -> bool:
        return self.completions.delete(_id_of(completion))

    # ------------------------------------------------------------------
    # Analytics & statistics
    # ------------------------------------------------------------------
    def get_completion_streak(self, habit: HabitRef) -> int:
        """Consecutive completed days ending today.

        Issues one lookup per day of the streak, walking back from today; a
        missing completion today means a streak of 0.
        """

        cursor = start_of_day(self.now())
        streak = 0
        while self.is_habit_completed(habit, cursor):
            streak += 1
            cursor = days_ago(cursor, 1)
        return streak

    def get_longest_streak(self, habit: HabitRef) -> int:
        """Longest run of consecutive completed days in the habit's history."""

        days = [c.completion_date for c in self.fetch_completions(habit)]
        return longest_streak(days)

    def get_completion_percentage(self, habit: HabitRef, days: int) -> float:
        """Completions in the trailing ``days`` window as a percentage of ``days``.

        The window covers the ``days`` whole days before today: it runs from
        the start of the day ``days`` days ago up to and including the first
        instant of today. Completions logged later today are not counted.
        """

        if days <= 0:
            raise ValueError("days must be a positive number of days")
        today = start_of_day(self.now())
        start = days_ago(today, days)
        try:
            count = len(self.completions.list_between(start, today, habit_id=_id_of(habit)))
        except StoreReadError:
            count = 0
        return completion_percentage(count, days)

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------
    def delete_all_data(self) -> None:
        """Remove every completion, habit and category in one transaction."""

        with write_scope(self.store.session_factory, "bulk deletion") as session:
            connection = session.connection()
            for model in (HabitCompletion, Habit, HabitCategory):
                connection.execute(sa_delete(model))
            session.commit()
        logger.warning("All habit data deleted")


__all__ = ["HabitDataManager"]
