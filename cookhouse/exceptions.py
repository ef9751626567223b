"""
Internal error taxonomy.

Clients only ever see a route's generic message; the kind recorded here is
what ends up in the logs.
"""

import enum
from typing import Optional


class ErrorKind(str, enum.Enum):
    CONFLICT = "conflict"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"


class CookHouseError(Exception):
    """Base class for application errors."""

    kind = ErrorKind.UNKNOWN

    def __init__(self, message: str, kind: Optional[ErrorKind] = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"


class StoreError(CookHouseError):
    """A persistence gateway call failed."""


class StoreConflictError(StoreError):
    """A uniqueness constraint rejected the write."""

    kind = ErrorKind.CONFLICT


class StoreUnavailableError(StoreError):
    """The store could not be reached in time."""

    kind = ErrorKind.UNAVAILABLE


class NotificationError(CookHouseError):
    """A transactional email could not be delivered."""
