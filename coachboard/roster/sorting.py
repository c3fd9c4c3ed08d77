"""Roster sorting.

One key per athlete per sort field. Ties always fall back to an ascending,
case-sensitive name compare, whatever the direction.

Missing values use explicit sentinels rather than 0, which would sort an
undated athlete as the most urgent:

- nextActionDate: no date is +inf and always sorts last, in either direction
- lastActivity: no activity is +inf and follows the direction (last under
  asc, first under desc)
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from datetime import date, datetime
from functools import cmp_to_key
from typing import Any

from loguru import logger

from coachboard.programs.parsing import as_date, day_timestamp
from coachboard.programs.types import RosterEntry, SortState
from coachboard.progress.completion import phase_progress
from coachboard.progress.status import last_entry_days_ago, last_modification, program_status, sub_season_status
from coachboard.progress.urgency import block_countdown

MISSING = math.inf

# Undated pending-signoff blocks are the most urgent to sign off.
NEEDS_SIGNOFF_UNDATED = 0.0

_PROGRAM_STATUS_ORDER = {"active": 1, "pending": 2, "draft": 3}


def athlete_name_key(entry: RosterEntry, reference_today: date | datetime) -> str:
    return entry.athlete.name


def next_action_key(entry: RosterEntry, reference_today: date | datetime) -> float:
    """Earliest of today (if any block awaits sign-off) and every nextBlockDue."""
    candidates = [day_timestamp(block.next_block_due) for block in entry.blocks if block.next_block_due is not None]
    if any(block.status == "pending-signoff" for block in entry.blocks):
        candidates.append(day_timestamp(as_date(reference_today)))
    return min(candidates, default=MISSING)


def last_activity_key(entry: RosterEntry, reference_today: date | datetime) -> float:
    """Latest modification or submission timestamp across blocks."""
    return max((ts.timestamp() for block in entry.blocks for ts in block.activity_timestamps), default=MISSING)


def phase_progress_key(entry: RosterEntry, reference_today: date | datetime) -> float:
    return phase_progress(entry)


def sub_season_status_key(entry: RosterEntry, reference_today: date | datetime) -> tuple[bool, str]:
    """Season label; athletes without a current block come before any label when ascending."""
    status = sub_season_status(entry.blocks)
    return status is not None, status or ""


def block_progress_key(entry: RosterEntry, reference_today: date | datetime) -> float:
    days_remaining = block_countdown(entry.blocks, reference_today).days_remaining
    return MISSING if days_remaining is None else float(days_remaining)


def program_status_key(entry: RosterEntry, reference_today: date | datetime) -> int:
    return _PROGRAM_STATUS_ORDER[program_status(entry.blocks)]


def last_entry_day_key(entry: RosterEntry, reference_today: date | datetime) -> float:
    days_ago = last_entry_days_ago(entry.blocks, reference_today)
    return MISSING if days_ago is None else float(days_ago)


def last_modification_day_key(entry: RosterEntry, reference_today: date | datetime) -> float:
    # Never-edited athletes sort as the oldest edit.
    latest = last_modification(entry.blocks)
    return -math.inf if latest is None else latest.timestamp()


SortKey = Callable[[RosterEntry, date | datetime], Any]

SORT_KEYS: dict[str, SortKey] = {
    "athleteName": athlete_name_key,
    "nextActionDate": next_action_key,
    "lastActivity": last_activity_key,
    "phaseProgress": phase_progress_key,
    "subSeasonStatus": sub_season_status_key,
    "blockProgress": block_progress_key,
    "programStatus": program_status_key,
    "lastEntryDay": last_entry_day_key,
    "lastModificationDay": last_modification_day_key,
}

# Fields whose missing value sorts last regardless of direction.
_PINNED_LAST_FIELDS = frozenset({"nextActionDate"})


def _compare_values(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def _sorted_by_key(
    keyed: list[tuple[RosterEntry, Any]],
    descending: bool,
    pin_missing_last: bool,
) -> list[RosterEntry]:
    def compare(left: tuple[RosterEntry, Any], right: tuple[RosterEntry, Any]) -> int:
        left_entry, left_key = left
        right_entry, right_key = right
        if pin_missing_last:
            left_missing = left_key == MISSING
            right_missing = right_key == MISSING
            if left_missing != right_missing:
                return 1 if left_missing else -1
        result = _compare_values(left_key, right_key)
        if result != 0:
            return -result if descending else result
        return _compare_values(left_entry.athlete.name, right_entry.athlete.name)

    return [entry for entry, _ in sorted(keyed, key=cmp_to_key(compare))]


def sort_roster(
    roster: Iterable[RosterEntry],
    sort_state: SortState,
    reference_today: date | datetime,
) -> list[RosterEntry]:
    """Order roster entries by one sort field.

    Args:
        roster: Entries to order
        sort_state: Field and direction
        reference_today: The caller's "today" (used by date-derived keys)

    Returns:
        New list; the input is not modified. Re-sorting the result by the same
        state yields the same order.
    """
    key_fn = SORT_KEYS[sort_state.sort_field]
    keyed = [(entry, key_fn(entry, reference_today)) for entry in roster]
    ordered = _sorted_by_key(
        keyed,
        descending=sort_state.direction == "desc",
        pin_missing_last=sort_state.sort_field in _PINNED_LAST_FIELDS,
    )
    logger.debug(f"[ROSTER] Sorted {len(ordered)} athletes by {sort_state.sort_field} {sort_state.direction}")
    return ordered


def needs_signoff_key(entry: RosterEntry) -> float | None:
    """Sign-off urgency of an athlete, or None when nothing awaits sign-off.

    The earliest nextBlockDue among pending-signoff blocks. Any undated
    pending block makes the athlete maximally urgent.
    """
    pending = [block for block in entry.blocks if block.status == "pending-signoff"]
    if not pending:
        return None
    if any(block.next_block_due is None for block in pending):
        return NEEDS_SIGNOFF_UNDATED
    return min(day_timestamp(block.next_block_due) for block in pending if block.next_block_due is not None)


def sort_needs_signoff(roster: Iterable[RosterEntry]) -> list[RosterEntry]:
    """Athletes with blocks awaiting sign-off, most urgent first.

    Replaces the regular sort state for the needs-signoff view.
    """
    keyed: list[tuple[RosterEntry, Any]] = []
    for entry in roster:
        key = needs_signoff_key(entry)
        if key is not None:
            keyed.append((entry, key))
    ordered = _sorted_by_key(keyed, descending=False, pin_missing_last=False)
    logger.debug(f"[ROSTER] {len(ordered)} athletes awaiting sign-off")
    return ordered
