"""ISO-8601 parsing for record ingestion.

Dates and timestamps arrive as strings at the boundary. They are parsed once,
when a record model is validated, and the engine works on `date` and
UTC-aware `datetime` values from then on.
"""

from __future__ import annotations

from datetime import UTC, date, datetime, time

from coachboard.programs.errors import RecordParseError


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Normalize datetime to UTC-aware.

    Naive datetimes are taken as UTC. Aware datetimes are converted to UTC.

    Args:
        dt: Datetime to normalize (may be naive or aware)

    Returns:
        UTC-aware datetime, or None if input was None
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def _parse_iso_string(value: str) -> date | datetime:
    text = value.strip()
    try:
        if "T" in text or " " in text:
            return datetime.fromisoformat(text.replace("Z", "+00:00"))
        return date.fromisoformat(text)
    except ValueError as e:
        raise RecordParseError(f"Invalid ISO-8601 value: {value!r}") from e


def parse_timestamp(value: datetime | date | str | None) -> datetime | None:
    """Parse a timestamp field into a UTC-aware datetime.

    Args:
        value: ISO string, datetime, date or None. Empty strings count as None.

    Returns:
        UTC-aware datetime, or None when the value is missing

    Raises:
        RecordParseError: If a string value is not valid ISO-8601
    """
    if value is None:
        return None
    if isinstance(value, str):
        if not value.strip():
            return None
        value = _parse_iso_string(value)
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=UTC)
    raise RecordParseError(f"Unsupported timestamp value: {value!r}")


def parse_date(value: datetime | date | str | None) -> date | None:
    """Parse a date field, truncating any time component.

    Date-time strings keep the calendar date they were written with, so
    "2024-03-04T23:30:00-05:00" is March 4th.

    Args:
        value: ISO string, datetime, date or None. Empty strings count as None.

    Returns:
        Calendar date, or None when the value is missing

    Raises:
        RecordParseError: If a string value is not valid ISO-8601
    """
    if value is None:
        return None
    if isinstance(value, str):
        if not value.strip():
            return None
        value = _parse_iso_string(value)
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise RecordParseError(f"Unsupported date value: {value!r}")


def as_date(value: date | datetime) -> date:
    """Drop the time component of a datetime; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def day_timestamp(day: date) -> float:
    """POSIX timestamp of midnight UTC on the given day."""
    return datetime.combine(day, time.min, tzinfo=UTC).timestamp()
