"""Domain-specific errors for the program engine.

Most degraded input is tolerated and reported through diagnostics rather
than raised. These types cover the cases that fail fast.
"""

from __future__ import annotations

from datetime import date


class EngineError(Exception):
    """Base exception for all program engine errors."""

    pass


class InvalidRangeError(EngineError):
    """Raised when a date range ends before it starts.

    Attributes:
        start: Range start date
        end: Range end date
    """

    def __init__(self, start: date, end: date) -> None:
        self.start = start
        self.end = end
        super().__init__(f"Invalid date range: end {end.isoformat()} is before start {start.isoformat()}")


class RecordParseError(EngineError, ValueError):
    """Raised when a record field cannot be parsed at ingestion.

    Subclasses ValueError so pydantic reports it as a validation error.
    """

    pass
