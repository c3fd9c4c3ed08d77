"""Roster status helpers derived from an athlete's blocks."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, datetime

from coachboard.calendar.primitives import days_between
from coachboard.config.settings import settings
from coachboard.programs.types import Block, Phase, ProgramStatus
from coachboard.progress.urgency import current_block_summary

DELETABLE_STATUSES = frozenset({"draft", "pending-signoff"})


def last_submission(blocks: Iterable[Block]) -> datetime | None:
    """Most recent athlete submission across blocks."""
    return max((block.last_submission for block in blocks if block.last_submission is not None), default=None)


def last_modification(blocks: Iterable[Block]) -> datetime | None:
    """Most recent coach modification across blocks."""
    return max((block.last_modification for block in blocks if block.last_modification is not None), default=None)


def last_activity(blocks: Iterable[Block]) -> datetime | None:
    """Most recent modification or submission across blocks."""
    return max((ts for block in blocks for ts in block.activity_timestamps), default=None)


def last_entry_days_ago(blocks: Iterable[Block], reference_today: date | datetime) -> int | None:
    """Whole days since the athlete last submitted data, or None if they never have."""
    latest = last_submission(blocks)
    if latest is None:
        return None
    return days_between(latest, reference_today)


def program_status(blocks: Sequence[Block]) -> ProgramStatus:
    """Collapse an athlete's blocks into a single program status.

    Rules:
        - Any active block: active
        - Otherwise any draft block: draft
        - Otherwise: pending
    """
    if current_block_summary(blocks) is not None:
        return "active"
    if any(block.status == "draft" for block in blocks):
        return "draft"
    return "pending"


def sub_season_status(blocks: Sequence[Block]) -> str | None:
    """Season of the current block, with Pre-Season counted as In-Season."""
    current = current_block_summary(blocks)
    if current is None:
        return None
    if current.season == "Off-Season":
        return "Off-Season"
    return "In-Season"


def program_position(blocks: Sequence[Block], phase: Phase | None) -> str | None:
    """Position label such as "P1 B3(4) W2 D2".

    The count in parentheses is the number of blocks passed in. Week and day
    come from the current block's currentDay and default to 1.
    """
    current = current_block_summary(blocks)
    if current is None or phase is None:
        return None
    week = current.current_day.week if current.current_day else 1
    day = current.current_day.day if current.current_day else 1
    return f"P{phase.phase_number} B{current.block_number}({len(blocks)}) W{week} D{day}"


def has_pacing_warning(blocks: Sequence[Block], reference_today: date | datetime) -> bool:
    """Whether the current block's last submission is older than the pacing window."""
    current = current_block_summary(blocks)
    if current is None or current.last_submission is None:
        return False
    return days_between(current.last_submission, reference_today) > settings.pacing_warning_days


def can_delete_block(block: Block) -> bool:
    """Only draft and pending-signoff blocks may be deleted."""
    return block.status in DELETABLE_STATUSES
