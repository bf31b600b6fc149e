from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid (e.g. a malformed month string)."""


class StorageError(DomainError):
    """Raised when a backing store fails. Callers may retry the whole event."""

    retryable = True


class DuplicateRecordError(StorageError):
    """Raised when a record already exists for a (user_id, work_date) key."""

    def __init__(self, user_id: Optional[str] = None, work_date: Any = None):
        if user_id is None:
            message = "duplicate key"
        else:
            message = f"attendance record already exists for {user_id} on {work_date}"
        super().__init__(message)
        self.user_id = user_id
        self.work_date = work_date


class ConflictError(ValidationError):
    """Raised when a request clashes with data that already exists (e.g. a second leave on one day)."""
