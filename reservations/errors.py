"""Typed failures raised by the reservation engine.

Every domain rule violation surfaces to the immediate caller as one of the
four categories below. ``code`` identifies the specific rule so a request
layer can map it to a user-facing message without parsing text.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    MISSING_FIELD = "missing_field"
    INVALID_FORMAT = "invalid_format"
    INVALID_RANGE = "invalid_range"
    OUT_OF_WINDOW = "out_of_window"
    PAST_TIME = "past_time"
    NOT_FOUND = "not_found"
    ROOM_UNAVAILABLE = "room_unavailable"
    CAPACITY_EXCEEDED = "capacity_exceeded"
    SLOT_TAKEN = "slot_taken"
    QUOTA_EXCEEDED = "quota_exceeded"
    SLOT_OPEN = "slot_open"
    WAITLIST_FULL = "waitlist_full"
    DUPLICATE_ENTRY = "duplicate_entry"
    STORAGE_FAILURE = "storage_failure"
    INTERNAL = "internal"


class ReservationError(Exception):
    """Base class for all engine failures."""

    default_code = ErrorCode.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        code: Optional[ErrorCode] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = dict(details or {})

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"


class ValidationError(ReservationError):
    """Malformed or missing input; caller-fixable, no side effects."""

    default_code = ErrorCode.INVALID_FORMAT


class NotFoundError(ReservationError):
    """A room, user, reservation or waitlist entry does not exist."""

    default_code = ErrorCode.NOT_FOUND

    def __init__(self, kind: str, identifier: Any, message: Optional[str] = None) -> None:
        super().__init__(
            message or f"{kind.capitalize()} {identifier} not found",
            code=ErrorCode.NOT_FOUND,
            details={"kind": kind, "id": identifier},
        )
        self.kind = kind
        self.identifier = identifier


class ConflictError(ReservationError):
    """The request is well formed but violates a booking rule."""

    default_code = ErrorCode.SLOT_TAKEN


class InternalError(ReservationError):
    """Unexpected failure; the message never carries internal detail."""

    default_code = ErrorCode.INTERNAL

    def __init__(self, message: str = "An internal error occurred", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class StorageError(InternalError):
    """Raised by repositories when a collection cannot be read or written."""

    default_code = ErrorCode.STORAGE_FAILURE

    def __init__(self, message: str = "Storage operation failed", **kwargs: Any) -> None:
        kwargs.setdefault("code", ErrorCode.STORAGE_FAILURE)
        super().__init__(message, **kwargs)


__all__ = [
    "ErrorCode",
    "ReservationError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "InternalError",
    "StorageError",
]
