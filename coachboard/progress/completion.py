"""Completion and program-length summaries for blocks.

Missing counts are "unknown", not zero: callers render a dash for None.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from coachboard.calendar.primitives import DAYS_PER_WEEK, days_between
from coachboard.programs.diagnostics import Diagnostics, IssueCode, report_issue
from coachboard.programs.types import Block, RosterEntry


@dataclass(frozen=True)
class CompletionSummary:
    """Counts behind a "12/28 days - 43%" style label."""

    days_complete: int
    days_available: int
    percent: int | None


@dataclass(frozen=True)
class ProgramTimelineSummary:
    block_count: int
    total_weeks: int


@dataclass(frozen=True)
class BlockCounts:
    total: int
    draft: int
    pending_signoff: int
    active: int
    complete: int


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def block_completion(block: Block, diagnostics: Diagnostics | None = None) -> int | None:
    """Percentage of the block's available days that are complete.

    Args:
        block: Block to measure
        diagnostics: Optional collector, told when daysComplete exceeds daysAvailable

    Returns:
        Integer percentage clamped to [0, 100], or None when daysAvailable is
        missing or not positive. A negative or missing daysComplete counts as 0.
    """
    if block.days_available is None or block.days_available <= 0:
        return None
    complete = max(block.days_complete or 0, 0)
    if complete > block.days_available:
        report_issue(
            diagnostics,
            IssueCode.COMPLETION_OVERFLOW,
            f"Block {block.block_number} has {complete} days complete of {block.days_available} available",
            block_id=block.id,
        )
    percent = _round_half_up(complete / block.days_available * 100)
    return min(100, max(0, percent))


def completion_summary(block: Block) -> CompletionSummary | None:
    """Raw counts and percentage, or None when either count is missing."""
    if block.days_available is None or block.days_complete is None:
        return None
    return CompletionSummary(
        days_complete=block.days_complete,
        days_available=block.days_available,
        percent=block_completion(block),
    )


def program_timeline_summary(blocks: Sequence[Block]) -> ProgramTimelineSummary:
    """Number of blocks and whole weeks spanned from the earliest start to the latest end."""
    if not blocks:
        return ProgramTimelineSummary(block_count=0, total_weeks=0)
    earliest_start = min(block.start_date for block in blocks)
    latest_end = max(block.end_date for block in blocks)
    span_days = max(0, days_between(earliest_start, latest_end))
    return ProgramTimelineSummary(
        block_count=len(blocks),
        total_weeks=math.ceil(span_days / DAYS_PER_WEEK),
    )


def phase_progress(entry: RosterEntry) -> float:
    """Completed share of the current phase's available days.

    Sums daysComplete over daysAvailable across the current phase's blocks.
    Missing or negative counts contribute 0. Returns 0.0 when nothing is
    available.
    """
    blocks = entry.current_phase_blocks
    available = sum(max(block.days_available or 0, 0) for block in blocks)
    if available == 0:
        return 0.0
    complete = sum(max(block.days_complete or 0, 0) for block in blocks)
    return complete / available


def block_counts(blocks: Iterable[Block]) -> BlockCounts:
    statuses = [block.status for block in blocks]
    return BlockCounts(
        total=len(statuses),
        draft=statuses.count("draft"),
        pending_signoff=statuses.count("pending-signoff"),
        active=statuses.count("active"),
        complete=statuses.count("complete"),
    )
