"""Roster filtering.

Each filter category is a named predicate. Block-scoped categories pass when
*any* block satisfies them, and each category is evaluated independently:
an athlete with an active Pre-Season block and a complete In-Season block
passes {block status: active, season: In-Season}, because each category is
matched by a different block. Categories are AND-ed at the athlete level;
values inside a category are OR-ed.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import date, datetime

from loguru import logger

from coachboard.config.settings import settings
from coachboard.programs.parsing import as_date
from coachboard.programs.types import Block, FilterState, RosterEntry
from coachboard.progress.status import last_modification, last_submission, program_status
from coachboard.progress.urgency import classify_urgency, days_until

NO_ACTIVE_BLOCK = "no-active-block"
DUE_THIS_WEEK = "due-this-week"


def _within(day: date, start: date | None, end: date | None) -> bool:
    """Inclusive calendar-day bound check; an unset bound does not constrain."""
    if start is not None and day < start:
        return False
    return end is None or day <= end


# Block-level predicates


def block_matches_status(block: Block, filter_state: FilterState) -> bool:
    return block.status in filter_state.block_statuses


def block_matches_season(block: Block, filter_state: FilterState) -> bool:
    return block.season in filter_state.seasons


def block_matches_sub_season(block: Block, filter_state: FilterState) -> bool:
    return block.sub_season is not None and block.sub_season in filter_state.sub_seasons


def block_matches_urgency_value(block: Block, value: str, reference_today: date | datetime) -> bool:
    """Whether a block's nextBlockDue falls in one positive urgency bucket."""
    if block.next_block_due is None:
        return False
    if value == DUE_THIS_WEEK:
        return 0 <= days_until(block.next_block_due, reference_today) <= settings.urgency_this_week_days
    return classify_urgency(block.next_block_due, reference_today) == value


def block_matches_urgency(block: Block, filter_state: FilterState, reference_today: date | datetime) -> bool:
    return any(
        block_matches_urgency_value(block, value, reference_today) for value in filter_state.block_urgency_values
    )


def block_matches_next_block_due(block: Block, filter_state: FilterState) -> bool:
    if block.next_block_due is None:
        return False
    return _within(block.next_block_due, filter_state.next_block_due_start, filter_state.next_block_due_end)


def block_matches_last_activity(block: Block, filter_state: FilterState) -> bool:
    timestamps = block.activity_timestamps
    if not timestamps:
        return False
    return _within(as_date(max(timestamps)), filter_state.last_activity_start, filter_state.last_activity_end)


# Athlete-level predicates


def matches_athlete_status(entry: RosterEntry, filter_state: FilterState, reference_today: date | datetime) -> bool:
    if not filter_state.athlete_statuses:
        return True
    return entry.athlete.status in filter_state.athlete_statuses


def matches_search_query(entry: RosterEntry, filter_state: FilterState, reference_today: date | datetime) -> bool:
    query = filter_state.search_query.strip().lower()
    if not query:
        return True
    return query in entry.athlete.name.lower()


def matches_block_status(entry: RosterEntry, filter_state: FilterState, reference_today: date | datetime) -> bool:
    if not filter_state.block_statuses:
        return True
    return any(block_matches_status(block, filter_state) for block in entry.blocks)


def matches_season(entry: RosterEntry, filter_state: FilterState, reference_today: date | datetime) -> bool:
    if not filter_state.seasons:
        return True
    return any(block_matches_season(block, filter_state) for block in entry.blocks)


def matches_sub_season(entry: RosterEntry, filter_state: FilterState, reference_today: date | datetime) -> bool:
    if not filter_state.sub_seasons:
        return True
    return any(block_matches_sub_season(block, filter_state) for block in entry.blocks)


def matches_urgency(entry: RosterEntry, filter_state: FilterState, reference_today: date | datetime) -> bool:
    """Urgency values are OR-ed.

    "no-active-block" passes when the athlete has no active block at all;
    every other value passes when some block's nextBlockDue is in that bucket.
    """
    if not filter_state.urgency:
        return True
    for value in filter_state.urgency:
        if value == NO_ACTIVE_BLOCK:
            if not any(block.status == "active" for block in entry.blocks):
                return True
        elif any(block_matches_urgency_value(block, value, reference_today) for block in entry.blocks):
            return True
    return False


def matches_next_block_due(entry: RosterEntry, filter_state: FilterState, reference_today: date | datetime) -> bool:
    if filter_state.next_block_due_start is None and filter_state.next_block_due_end is None:
        return True
    return any(block_matches_next_block_due(block, filter_state) for block in entry.blocks)


def matches_last_activity(entry: RosterEntry, filter_state: FilterState, reference_today: date | datetime) -> bool:
    if filter_state.last_activity_start is None and filter_state.last_activity_end is None:
        return True
    return any(block_matches_last_activity(block, filter_state) for block in entry.blocks)


def matches_program_status(entry: RosterEntry, filter_state: FilterState, reference_today: date | datetime) -> bool:
    if not filter_state.program_statuses:
        return True
    return program_status(entry.blocks) in filter_state.program_statuses


def matches_last_entry(entry: RosterEntry, filter_state: FilterState, reference_today: date | datetime) -> bool:
    """Most recent athlete submission (across all blocks) falls within the bounds."""
    if filter_state.last_entry_start is None and filter_state.last_entry_end is None:
        return True
    latest = last_submission(entry.blocks)
    if latest is None:
        return False
    return _within(as_date(latest), filter_state.last_entry_start, filter_state.last_entry_end)


def matches_recent_edit(entry: RosterEntry, filter_state: FilterState, reference_today: date | datetime) -> bool:
    """Most recent coach modification (across all blocks) falls within the bounds."""
    if filter_state.recent_edit_start is None and filter_state.recent_edit_end is None:
        return True
    latest = last_modification(entry.blocks)
    if latest is None:
        return False
    return _within(as_date(latest), filter_state.recent_edit_start, filter_state.recent_edit_end)


AthletePredicate = Callable[[RosterEntry, FilterState, date | datetime], bool]

ATHLETE_PREDICATES: tuple[AthletePredicate, ...] = (
    matches_search_query,
    matches_athlete_status,
    matches_block_status,
    matches_season,
    matches_sub_season,
    matches_last_activity,
    matches_next_block_due,
    matches_program_status,
    matches_last_entry,
    matches_recent_edit,
    matches_urgency,
)


def athlete_matches(entry: RosterEntry, filter_state: FilterState, reference_today: date | datetime) -> bool:
    """Conjunction of every category predicate."""
    return all(predicate(entry, filter_state, reference_today) for predicate in ATHLETE_PREDICATES)


def apply_filters(
    roster: Iterable[RosterEntry],
    filter_state: FilterState,
    reference_today: date | datetime,
) -> list[RosterEntry]:
    """Return the roster entries that satisfy every active filter category.

    Input order is preserved. Applying the same filter twice gives the same
    result as applying it once.
    """
    entries = list(roster)
    if filter_state.is_empty():
        return entries
    filtered = [entry for entry in entries if athlete_matches(entry, filter_state, reference_today)]
    logger.debug(f"[ROSTER] Filtered roster from {len(entries)} to {len(filtered)} athletes")
    return filtered


def block_matches_filters(block: Block, filter_state: FilterState, reference_today: date | datetime) -> bool:
    """Whether a single block satisfies every active block-scoped category.

    False when no block-scoped category is active, so nothing is highlighted.
    """
    if not filter_state.has_block_scoped_filters():
        return False
    checks: list[bool] = []
    if filter_state.block_statuses:
        checks.append(block_matches_status(block, filter_state))
    if filter_state.seasons:
        checks.append(block_matches_season(block, filter_state))
    if filter_state.sub_seasons:
        checks.append(block_matches_sub_season(block, filter_state))
    if filter_state.block_urgency_values:
        checks.append(block_matches_urgency(block, filter_state, reference_today))
    if filter_state.next_block_due_start is not None or filter_state.next_block_due_end is not None:
        checks.append(block_matches_next_block_due(block, filter_state))
    if filter_state.last_activity_start is not None or filter_state.last_activity_end is not None:
        checks.append(block_matches_last_activity(block, filter_state))
    return all(checks)


def mark_matching_blocks(
    entry: RosterEntry,
    filter_state: FilterState,
    reference_today: date | datetime,
) -> dict[str, bool]:
    """Per-block "matches active filter" markers, keyed by block id."""
    return {block.id: block_matches_filters(block, filter_state, reference_today) for block in entry.blocks}
