"""Habit category definitions."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import ClassVar, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class HabitCategory(SQLModel, table=True):
    """Named grouping applied to zero or more habits."""

    __tablename__: ClassVar[str] = "habit_category"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(nullable=False, max_length=64, index=True)
    color: Optional[str] = Field(default=None, max_length=32)
    created_date: datetime = Field(
        default_factory=datetime.now, sa_type=DateTime, nullable=False
    )
