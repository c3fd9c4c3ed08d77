"""Next-action urgency and current-block resolution.

Every function takes the caller's reference day explicitly. Dates are
compared as whole calendar days.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum

from loguru import logger

from coachboard.calendar.primitives import days_between
from coachboard.config.settings import settings
from coachboard.programs.diagnostics import Diagnostics, IssueCode, report_issue
from coachboard.programs.parsing import as_date
from coachboard.programs.types import Block


class Urgency(StrEnum):
    """How soon the next block is due."""

    OVERDUE = "overdue"
    TODAY = "today"
    THIS_WEEK = "thisWeek"
    LATER = "later"


class CountdownSeverity(StrEnum):
    """Colour band for days remaining in the current block."""

    OVERDUE = "overdue"  # 0 or fewer days left
    URGENT = "urgent"  # 1-3 days
    WARNING = "warning"  # 4-7 days
    NOTICE = "notice"  # 8-14 days
    OK = "ok"


@dataclass(frozen=True)
class NextAction:
    """Earliest upcoming block due date and its urgency.

    `text` is the ISO due date; wording is left to presentation.
    """

    text: str | None
    urgency: Urgency | None
    due_date: date | None = None
    block_id: str | None = None


@dataclass(frozen=True)
class BlockCountdown:
    days_remaining: int | None
    needs_action: bool
    severity: CountdownSeverity | None


def days_until(due: date | datetime, reference_today: date | datetime) -> int:
    """Whole days from reference_today to due; negative when due is in the past."""
    return days_between(reference_today, due)


def classify_urgency(
    due: date | datetime,
    reference_today: date | datetime,
    this_week_days: int | None = None,
) -> Urgency:
    """Classify a due date against today.

    Rules:
        - d < 0: overdue
        - d == 0: today
        - 1 <= d <= this_week_days (default 7): thisWeek
        - otherwise: later
    """
    window = settings.urgency_this_week_days if this_week_days is None else this_week_days
    d = days_until(due, reference_today)
    if d < 0:
        return Urgency.OVERDUE
    if d == 0:
        return Urgency.TODAY
    if d <= window:
        return Urgency.THIS_WEEK
    return Urgency.LATER


def next_action(blocks: Iterable[Block], reference_today: date | datetime) -> NextAction:
    """Find the earliest nextBlockDue across blocks and classify it.

    Blocks without a due date are ignored. Ties on the due date go to the
    lowest block number.

    Returns:
        NextAction, with text and urgency None when no block has a due date
    """
    dated = [(block.next_block_due, block) for block in blocks if block.next_block_due is not None]
    if not dated:
        return NextAction(text=None, urgency=None)
    due, nearest = min(dated, key=lambda pair: (pair[0], pair[1].block_number))
    return NextAction(
        text=due.isoformat(),
        urgency=classify_urgency(due, reference_today),
        due_date=due,
        block_id=nearest.id,
    )


def active_blocks(blocks: Iterable[Block]) -> list[Block]:
    """Active blocks ordered by block number."""
    return sorted((block for block in blocks if block.status == "active"), key=lambda block: block.block_number)


def current_block_summary(
    blocks: Iterable[Block],
    diagnostics: Diagnostics | None = None,
    athlete_id: str | None = None,
) -> Block | None:
    """Return the athlete's active block.

    When more than one block is active the lowest block number wins and the
    violation is reported; this never raises.
    """
    actives = active_blocks(blocks)
    if not actives:
        return None
    if len(actives) > 1:
        report_issue(
            diagnostics,
            IssueCode.MULTIPLE_ACTIVE_BLOCKS,
            f"{len(actives)} active blocks ({', '.join(str(b.block_number) for b in actives)}); "
            f"using block {actives[0].block_number}",
            athlete_id=athlete_id,
            block_id=actives[0].id,
        )
    return actives[0]


def _countdown_severity(days_remaining: int) -> CountdownSeverity:
    if days_remaining <= 0:
        return CountdownSeverity.OVERDUE
    if days_remaining <= 3:
        return CountdownSeverity.URGENT
    if days_remaining <= 7:
        return CountdownSeverity.WARNING
    if days_remaining <= 14:
        return CountdownSeverity.NOTICE
    return CountdownSeverity.OK


def block_countdown(blocks: Sequence[Block], reference_today: date | datetime) -> BlockCountdown:
    """Days until the current block ends.

    Past-due blocks report 0 days remaining and always need action.
    """
    current = current_block_summary(blocks)
    if current is None:
        return BlockCountdown(days_remaining=None, needs_action=False, severity=None)

    remaining = max(0, days_until(current.end_date, reference_today))
    needs_action = remaining <= settings.block_end_action_days
    logger.debug(
        f"[PROGRESS] Block {current.block_number} ends {current.end_date.isoformat()}, {remaining} days remaining",
        reference_today=as_date(reference_today).isoformat(),
    )
    return BlockCountdown(
        days_remaining=remaining,
        needs_action=needs_action,
        severity=_countdown_severity(remaining),
    )
