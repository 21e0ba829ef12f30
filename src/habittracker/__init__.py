"""HabitTracker: habit, category and completion records with streak analytics."""

from __future__ import annotations

from .config import BaseConfig, TestConfig
from .infra.database import Store
from .services.data_manager import HabitDataManager

__all__ = ["BaseConfig", "HabitDataManager", "Store", "TestConfig"]
