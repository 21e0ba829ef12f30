"""Error taxonomy for the record store and data manager."""

from __future__ import annotations


class HabitTrackerError(Exception):
    """Base class for all habit tracker failures."""


class StoreInitError(HabitTrackerError):
    """The record store could not be opened or its schema created.

    Only raised while bootstrapping; callers are expected to abort startup.
    """


class RecordNotFoundError(HabitTrackerError, LookupError):
    """The record passed to an update no longer exists in the store."""

    def __init__(self, kind: str, record_id: object) -> None:
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} {record_id} not found")


class StoreWriteError(HabitTrackerError):
    """A commit against the record store failed and was rolled back."""

    def __init__(self, operation: str, cause: BaseException | None = None) -> None:
        self.operation = operation
        self.cause = cause
        message = f"Failed to persist {operation}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class StoreReadError(HabitTrackerError):
    """A query against the record store failed."""

    def __init__(self, operation: str, cause: BaseException | None = None) -> None:
        self.operation = operation
        self.cause = cause
        message = f"Failed to read {operation}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


__all__ = [
    "HabitTrackerError",
    "RecordNotFoundError",
    "StoreInitError",
    "StoreReadError",
    "StoreWriteError",
]
