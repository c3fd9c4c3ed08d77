"""Unit tests for roster filtering and per-block filter markers."""

from datetime import UTC, date, datetime

import pytest

from coachboard.programs.types import FilterState
from coachboard.roster.filters import (
    ATHLETE_PREDICATES,
    apply_filters,
    athlete_matches,
    block_matches_filters,
    mark_matching_blocks,
)


@pytest.fixture
def mixed_entry(make_block, make_entry):
    """Active Pre-Season block 1 and complete In-Season block 2."""
    return make_entry(
        "Ava",
        blocks=[
            make_block(block_number=1, status="active", season="Pre-Season"),
            make_block(block_number=2, status="complete", season="In-Season"),
        ],
    )


class TestCategorySemantics:
    """Test any-block-per-category matching."""

    def test_categories_matched_by_different_blocks(self, mixed_entry, today):
        filters = FilterState(block_statuses=["active"], seasons=["In-Season"])
        assert athlete_matches(mixed_entry, filters, today) is True

    def test_no_block_marked_when_none_satisfies_all(self, mixed_entry, today):
        filters = FilterState(block_statuses=["active"], seasons=["In-Season"])
        assert mark_matching_blocks(mixed_entry, filters, today) == {"block-1": False, "block-2": False}

    def test_values_within_category_are_ored(self, mixed_entry, today):
        filters = FilterState(seasons=["Off-Season", "In-Season"])
        assert athlete_matches(mixed_entry, filters, today) is True

    def test_categories_are_anded(self, mixed_entry, today):
        filters = FilterState(block_statuses=["active"], seasons=["Off-Season"])
        assert athlete_matches(mixed_entry, filters, today) is False

    def test_every_category_has_a_predicate(self):
        assert len(ATHLETE_PREDICATES) == 11


class TestApplyFilters:
    """Test roster-level filtering."""

    def test_empty_filter_keeps_everyone_in_order(self, make_entry, today):
        roster = [make_entry("Zoe"), make_entry("Ava"), make_entry("Mia")]
        assert apply_filters(roster, FilterState(), today) == roster

    def test_idempotent(self, make_block, make_entry, today):
        roster = [
            make_entry("Ava", blocks=[make_block(status="active")]),
            make_entry("Ben", blocks=[make_block(status="draft")]),
            make_entry("Cal"),
        ]
        filters = FilterState(block_statuses=["active", "draft"])
        once = apply_filters(roster, filters, today)
        assert [e.athlete.name for e in once] == ["Ava", "Ben"]
        assert apply_filters(once, filters, today) == once

    def test_input_not_modified(self, make_entry, today):
        roster = [make_entry("Ava"), make_entry("Ben")]
        apply_filters(roster, FilterState(search_query="ava"), today)
        assert [e.athlete.name for e in roster] == ["Ava", "Ben"]

    def test_search_query_is_case_insensitive_substring(self, make_entry, today):
        roster = [make_entry("Ava Smith"), make_entry("Ben Jones")]
        result = apply_filters(roster, FilterState(search_query="  SMI "), today)
        assert [e.athlete.name for e in result] == ["Ava Smith"]

    def test_athlete_status(self, make_entry, today):
        roster = [make_entry("Ava", status="injured"), make_entry("Ben"), make_entry("Cal", status="rehabbing")]
        result = apply_filters(roster, FilterState(athlete_statuses=["injured", "rehabbing"]), today)
        assert [e.athlete.name for e in result] == ["Ava", "Cal"]

    def test_sub_season(self, make_block, make_entry, today):
        roster = [
            make_entry("Ava", blocks=[make_block(sub_season="Early")]),
            make_entry("Ben", blocks=[make_block()]),
        ]
        result = apply_filters(roster, FilterState(sub_seasons=["Early"]), today)
        assert [e.athlete.name for e in result] == ["Ava"]

    def test_program_status(self, make_block, make_entry, today):
        roster = [
            make_entry("Ava", blocks=[make_block(status="active")]),
            make_entry("Ben", blocks=[make_block(status="draft")]),
            make_entry("Cal", blocks=[make_block(status="complete")]),
        ]
        result = apply_filters(roster, FilterState(program_statuses=["draft", "pending"]), today)
        assert [e.athlete.name for e in result] == ["Ben", "Cal"]


class TestUrgencyFilter:
    """Test urgency filter values."""

    def test_no_active_block(self, make_block, make_entry, today):
        roster = [
            make_entry("Ava"),
            make_entry("Ben", blocks=[make_block(block_number=1, status="draft"), make_block(block_number=2, status="complete")]),
            make_entry("Cal", blocks=[make_block(status="active")]),
        ]
        result = apply_filters(roster, FilterState(urgency=["no-active-block"]), today)
        assert [e.athlete.name for e in result] == ["Ava", "Ben"]

    def test_overdue(self, make_block, make_entry, today):
        roster = [
            make_entry("Ava", blocks=[make_block(next_block_due=date(2024, 3, 10))]),
            make_entry("Ben", blocks=[make_block(next_block_due=date(2024, 3, 18))]),
            make_entry("Cal", blocks=[make_block()]),
        ]
        result = apply_filters(roster, FilterState(urgency=["overdue"]), today)
        assert [e.athlete.name for e in result] == ["Ava"]

    def test_due_this_week_includes_today(self, make_block, make_entry, today):
        roster = [
            make_entry("Ava", blocks=[make_block(next_block_due=today)]),
            make_entry("Ben", blocks=[make_block(next_block_due=date(2024, 3, 20))]),
            make_entry("Cal", blocks=[make_block(next_block_due=date(2024, 3, 21))]),
            make_entry("Dan", blocks=[make_block(next_block_due=date(2024, 3, 12))]),
        ]
        result = apply_filters(roster, FilterState(urgency=["due-this-week"]), today)
        assert [e.athlete.name for e in result] == ["Ava", "Ben"]

    def test_values_are_ored(self, make_block, make_entry, today):
        roster = [
            make_entry("Ava"),
            make_entry("Ben", blocks=[make_block(status="active", next_block_due=date(2024, 4, 30))]),
            make_entry("Cal", blocks=[make_block(status="active", next_block_due=today)]),
        ]
        result = apply_filters(roster, FilterState(urgency=["no-active-block", "later"]), today)
        assert [e.athlete.name for e in result] == ["Ava", "Ben"]


class TestDateBoundFilters:
    """Test inclusive date bounds."""

    def test_next_block_due_bounds_inclusive(self, make_block, make_entry, today):
        roster = [
            make_entry("Ava", blocks=[make_block(next_block_due=date(2024, 3, 15))]),
            make_entry("Ben", blocks=[make_block(next_block_due=date(2024, 3, 20))]),
            make_entry("Cal", blocks=[make_block(next_block_due=date(2024, 3, 21))]),
            make_entry("Dan", blocks=[make_block()]),
        ]
        filters = FilterState(next_block_due_start=date(2024, 3, 15), next_block_due_end=date(2024, 3, 20))
        assert [e.athlete.name for e in apply_filters(roster, filters, today)] == ["Ava", "Ben"]

    def test_open_ended_bound(self, make_block, make_entry, today):
        roster = [
            make_entry("Ava", blocks=[make_block(next_block_due=date(2024, 3, 15))]),
            make_entry("Ben", blocks=[make_block(next_block_due=date(2024, 3, 25))]),
        ]
        filters = FilterState(next_block_due_start="2024-03-20")
        assert [e.athlete.name for e in apply_filters(roster, filters, today)] == ["Ben"]

    def test_last_activity_uses_latest_timestamp(self, make_block, make_entry, today):
        roster = [
            make_entry(
                "Ava",
                blocks=[
                    make_block(
                        last_submission=datetime(2024, 3, 1, 8, 0, tzinfo=UTC),
                        last_modification=datetime(2024, 3, 12, 8, 0, tzinfo=UTC),
                    )
                ],
            ),
            make_entry("Ben", blocks=[make_block(last_submission=datetime(2024, 3, 1, 8, 0, tzinfo=UTC))]),
        ]
        filters = FilterState(last_activity_start=date(2024, 3, 10))
        assert [e.athlete.name for e in apply_filters(roster, filters, today)] == ["Ava"]

    def test_last_entry_and_recent_edit(self, make_block, make_entry, today):
        roster = [
            make_entry("Ava", blocks=[make_block(last_submission="2024-03-12T08:00:00Z")]),
            make_entry("Ben", blocks=[make_block(last_modification="2024-03-12T08:00:00Z")]),
        ]
        recent = date(2024, 3, 11)
        assert [e.athlete.name for e in apply_filters(roster, FilterState(last_entry_start=recent), today)] == ["Ava"]
        assert [e.athlete.name for e in apply_filters(roster, FilterState(recent_edit_start=recent), today)] == ["Ben"]


class TestBlockMarkers:
    """Test per-block "matches active filter" markers."""

    def test_marks_matching_block(self, mixed_entry, today):
        filters = FilterState(block_statuses=["active"])
        assert mark_matching_blocks(mixed_entry, filters, today) == {"block-1": True, "block-2": False}

    def test_nothing_marked_without_block_scoped_filter(self, mixed_entry, today):
        filters = FilterState(athlete_statuses=["injured"], search_query="ava")
        assert mark_matching_blocks(mixed_entry, filters, today) == {"block-1": False, "block-2": False}

    def test_no_active_block_alone_marks_nothing(self, make_block, today):
        block = make_block(status="draft")
        assert block_matches_filters(block, FilterState(urgency=["no-active-block"]), today) is False

    def test_marker_combines_urgency_and_status(self, make_block, make_entry, today):
        entry = make_entry(
            "Ava",
            blocks=[
                make_block(block_number=1, status="active", next_block_due=date(2024, 3, 10)),
                make_block(block_number=2, status="draft", next_block_due=date(2024, 3, 10)),
            ],
        )
        filters = FilterState(block_statuses=["draft"], urgency=["overdue", "no-active-block"])
        assert mark_matching_blocks(entry, filters, today) == {"block-1": False, "block-2": True}
