"""Habit tracking data structures."""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum
from typing import ClassVar, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class Frequency(str, Enum):
    """How often a habit is expected to be completed."""

    daily = "daily"
    weekly = "weekly"

    @classmethod
    def parse(cls, value: "Frequency | str") -> "Frequency":
        """Coerce user input into a member, rejecting unknown cadences."""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            allowed = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown frequency {value!r}; expected one of: {allowed}") from exc


class Habit(SQLModel, table=True):
    """A user-defined recurring activity tracked for completion."""

    __tablename__: ClassVar[str] = "habit"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(nullable=False, max_length=80, index=True)
    description: Optional[str] = Field(default=None, max_length=255)
    frequency: Frequency = Field(default=Frequency.daily, nullable=False)
    is_active: bool = Field(default=True, nullable=False, index=True)
    created_date: datetime = Field(
        default_factory=datetime.now, sa_type=DateTime, nullable=False, index=True
    )

    # Deleting a category leaves its habits uncategorised.
    category_id: Optional[uuid.UUID] = Field(
        default=None, foreign_key="habit_category.id", ondelete="SET NULL", index=True
    )
