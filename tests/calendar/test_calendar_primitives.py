"""Tests for calendar primitives."""

from datetime import UTC, date, datetime, timedelta

import pytest

from coachboard.calendar.primitives import (
    SUNDAY,
    block_position,
    day_index_in_block,
    days_between,
    enumerate_days,
    week_end,
    week_index,
    week_start,
)
from coachboard.programs.errors import InvalidRangeError


class TestEnumerateDays:
    """Tests for inclusive day enumeration."""

    def test_inclusive_range(self):
        days = enumerate_days(date(2024, 3, 1), date(2024, 3, 3))
        assert days == [date(2024, 3, 1), date(2024, 3, 2), date(2024, 3, 3)]

    def test_single_day(self):
        assert enumerate_days(date(2024, 3, 1), date(2024, 3, 1)) == [date(2024, 3, 1)]

    def test_crosses_leap_day(self):
        days = enumerate_days(date(2024, 2, 28), date(2024, 3, 1))
        assert date(2024, 2, 29) in days
        assert len(days) == 3

    def test_end_before_start_raises(self):
        with pytest.raises(InvalidRangeError) as exc_info:
            enumerate_days(date(2024, 3, 5), date(2024, 3, 1))
        assert exc_info.value.start == date(2024, 3, 5)
        assert exc_info.value.end == date(2024, 3, 1)

    def test_restartable(self):
        """Iterating the result twice yields the same days."""
        days = enumerate_days(date(2024, 3, 1), date(2024, 3, 10))
        assert list(days) == list(days)

    def test_accepts_datetimes(self):
        days = enumerate_days(datetime(2024, 3, 1, 18, 30, tzinfo=UTC), date(2024, 3, 2))
        assert days == [date(2024, 3, 1), date(2024, 3, 2)]


class TestWeekBoundaries:
    """Tests for week start/end normalization."""

    def test_week_start_is_monday(self):
        # 2024-03-13 is a Wednesday
        assert week_start(date(2024, 3, 13)) == date(2024, 3, 11)

    def test_week_start_of_monday_is_itself(self):
        assert week_start(date(2024, 3, 11)) == date(2024, 3, 11)

    def test_week_start_of_sunday(self):
        assert week_start(date(2024, 3, 17)) == date(2024, 3, 11)

    def test_week_start_on_sunday(self):
        assert week_start(date(2024, 3, 13), week_starts_on=SUNDAY) == date(2024, 3, 10)

    def test_week_start_drops_time(self):
        assert week_start(datetime(2024, 3, 13, 23, 59, tzinfo=UTC)) == date(2024, 3, 11)

    def test_week_end_is_sunday(self):
        assert week_end(date(2024, 3, 13)) == date(2024, 3, 17)


class TestWeekIndex:
    """Tests for week numbering relative to a reference start."""

    def test_same_week_is_one(self):
        assert week_index(date(2024, 3, 17), date(2024, 3, 13)) == 1

    def test_following_monday_is_week_two(self):
        assert week_index(date(2024, 3, 18), date(2024, 3, 13)) == 2

    def test_before_reference_week_is_none(self):
        assert week_index(date(2024, 3, 10), date(2024, 3, 13)) is None

    def test_monotonic_non_decreasing(self):
        reference = date(2024, 3, 13)
        indices = [week_index(reference + timedelta(days=offset), reference) for offset in range(60)]
        assert all(a <= b for a, b in zip(indices, indices[1:]))


class TestDayIndexInBlock:
    """Tests for day offsets inside a block."""

    def test_start_date_is_day_one(self, make_block):
        block = make_block(start_date=date(2024, 3, 6))
        assert day_index_in_block(block.start_date, block) == 1

    def test_start_date_is_day_one_for_every_block(self, make_block):
        for offset in range(0, 40, 3):
            block = make_block(start_date=date(2024, 1, 1) + timedelta(days=offset))
            assert day_index_in_block(block.start_date, block) == 1

    def test_later_day(self, make_block):
        block = make_block(start_date=date(2024, 3, 6))
        assert day_index_in_block(date(2024, 3, 13), block) == 8

    def test_before_start_is_none(self, make_block):
        block = make_block(start_date=date(2024, 3, 6))
        assert day_index_in_block(date(2024, 3, 5), block) is None


class TestHelpers:
    def test_days_between_signed(self):
        assert days_between(date(2024, 3, 1), date(2024, 3, 8)) == 7
        assert days_between(date(2024, 3, 8), date(2024, 3, 1)) == -7

    def test_block_position(self):
        assert block_position(1) == (1, 1)
        assert block_position(7) == (1, 7)
        assert block_position(8) == (2, 1)
        assert block_position(28) == (4, 7)

    def test_block_position_rejects_zero(self):
        with pytest.raises(ValueError, match="day_index"):
            block_position(0)
