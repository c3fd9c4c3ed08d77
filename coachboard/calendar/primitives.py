"""Calendar primitives for block and phase date arithmetic.

Week boundaries default to Monday-Sunday (ISO week). All functions are pure:
the same input always gives the same output, and no wall-clock state is read.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING

from coachboard.programs.errors import InvalidRangeError
from coachboard.programs.parsing import as_date

if TYPE_CHECKING:
    from coachboard.programs.types import Block

MONDAY = 0
SUNDAY = 6
DAYS_PER_WEEK = 7


def enumerate_days(start: date | datetime, end: date | datetime) -> list[date]:
    """Return every calendar day from start to end, both inclusive.

    Args:
        start: First day
        end: Last day

    Returns:
        Ordered list of days

    Raises:
        InvalidRangeError: If end is before start
    """
    first = as_date(start)
    last = as_date(end)
    if last < first:
        raise InvalidRangeError(first, last)
    return [first + timedelta(days=offset) for offset in range((last - first).days + 1)]


def week_start(day: date | datetime, week_starts_on: int = MONDAY) -> date:
    """Return the first day of the calendar week containing day."""
    d = as_date(day)
    return d - timedelta(days=(d.weekday() - week_starts_on) % DAYS_PER_WEEK)


def week_end(day: date | datetime, week_starts_on: int = MONDAY) -> date:
    """Return the last day of the calendar week containing day."""
    return week_start(day, week_starts_on) + timedelta(days=DAYS_PER_WEEK - 1)


def days_between(start: date | datetime, end: date | datetime) -> int:
    """Signed number of whole days from start to end."""
    return (as_date(end) - as_date(start)).days


def week_index(day: date | datetime, reference_start: date | datetime, week_starts_on: int = MONDAY) -> int | None:
    """1-indexed week number of day, counted from the week containing reference_start.

    Returns:
        Week number, or None if day falls in a week before the reference week
    """
    weeks = days_between(week_start(reference_start, week_starts_on), week_start(day, week_starts_on)) // DAYS_PER_WEEK
    if weeks < 0:
        return None
    return weeks + 1


def day_index_in_block(day: date | datetime, block: Block) -> int | None:
    """1-indexed day offset of day inside block, or None before the block starts."""
    offset = days_between(block.start_date, day)
    if offset < 0:
        return None
    return offset + 1


def block_position(day_index: int) -> tuple[int, int]:
    """Convert a 1-indexed day offset into a (week, day) pair, both 1-indexed.

    Day 1 is week 1 day 1, day 8 is week 2 day 1.
    """
    if day_index < 1:
        raise ValueError(f"day_index must be >= 1, got {day_index}")
    zero_based = day_index - 1
    return zero_based // DAYS_PER_WEEK + 1, zero_based % DAYS_PER_WEEK + 1
