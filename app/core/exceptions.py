"""
Domain exceptions raised by the calendar services.

Routers translate these into HTTP responses:
- ValidationError -> 400
- NotFoundError -> 404
- InternalError -> 500
"""

from typing import List, Optional


class CalendarError(Exception):
    """Base exception for academic calendar and holiday rules."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CalendarError, ValueError):
    """Invalid date ordering or a scope-overlap conflict."""

    def __init__(self, message: str, conflicts: Optional[List[str]] = None):
        super().__init__(message)
        self.conflicts = conflicts or []


class NotFoundError(CalendarError, LookupError):
    """Target record is missing or soft-deleted."""


class InternalError(CalendarError):
    """Unexpected failure while composing a report."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
