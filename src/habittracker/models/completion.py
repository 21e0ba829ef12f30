"""Completion records for habits."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import ClassVar, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class HabitCompletion(SQLModel, table=True):
    """A habit performed on a calendar day.

    ``completion_date`` keeps the time of day it was recorded at, but only the
    local calendar day is meaningful. At most one completion should exist per
    habit and day; ``set_completion`` and ``update_completion`` maintain that.
    """

    __tablename__: ClassVar[str] = "habit_completion"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    habit_id: uuid.UUID = Field(
        foreign_key="habit.id", ondelete="CASCADE", nullable=False, index=True
    )
    completion_date: datetime = Field(
        default_factory=datetime.now, sa_type=DateTime, nullable=False, index=True
    )
    notes: Optional[str] = Field(default=None, max_length=500)
