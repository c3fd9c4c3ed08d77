"""Timeline derivation for an athlete's blocks.

Turns a list of blocks (optionally grouped into phases) into a day-by-day,
week-grouped grid annotated with block and phase membership. The grid says
nothing about how it is rendered.

Same inputs -> same output. No side effects beyond logging.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from loguru import logger

from coachboard.calendar.primitives import day_index_in_block, enumerate_days, week_index, week_start
from coachboard.config.settings import settings
from coachboard.programs.diagnostics import Diagnostics, IssueCode, report_issue
from coachboard.programs.errors import InvalidRangeError
from coachboard.programs.parsing import as_date
from coachboard.programs.types import Block, Phase

# Phase grouping key for blocks without a phase_id: they all belong to one
# inferred phase.
_INFERRED_PHASE = "__inferred__"


@dataclass(frozen=True)
class TimelineDay:
    """One calendar day of the timeline grid.

    Attributes:
        day: Calendar date
        block_id: Owning block, or None for unprogrammed days
        block_number: Owning block's number
        phase_id: Owning phase, when it can be resolved
        phase_number: Owning phase's number, when phases were supplied
        week_index: Week of the owning block containing this day (1-indexed)
        day_index_in_block: Day offset inside the owning block (1-indexed)
        program_week: Week number relative to the start of the grid
        is_block_transition: Day is the start date of some block
        is_phase_transition: Day starts the first block of a new phase grouping
        is_after_last_programmed: First day after the last programmed block,
            flagged only when today is past that block
        is_today: Day equals the reference day
    """

    day: date
    block_id: str | None
    block_number: int | None
    phase_id: str | None
    phase_number: int | None
    week_index: int | None
    day_index_in_block: int | None
    program_week: int | None
    is_block_transition: bool
    is_phase_transition: bool
    is_after_last_programmed: bool
    is_today: bool

    @property
    def is_programmed(self) -> bool:
        return self.block_id is not None


@dataclass(frozen=True)
class TimelineWeek:
    """A run of consecutive days sharing the same week start.

    Block labels are read off the first day of the run. A run may straddle a
    block boundary when a block starts mid-week.
    """

    week_start: date
    days: tuple[TimelineDay, ...]
    program_week: int | None
    block_id: str | None
    block_number: int | None
    week_index: int | None
    day_index_in_block: int | None
    starts_new_block: bool


@dataclass(frozen=True)
class TimelineModel:
    """Derived calendar for one athlete."""

    start: date
    end: date
    reference_today: date
    days: tuple[TimelineDay, ...]
    weeks: tuple[TimelineWeek, ...]
    blocks: tuple[Block, ...]
    skipped_block_count: int

    def day(self, value: date | datetime) -> TimelineDay | None:
        """Look up the grid entry for a calendar day, or None outside the grid."""
        offset = (as_date(value) - self.start).days
        if offset < 0 or offset >= len(self.days):
            return None
        return self.days[offset]

    @property
    def first_unprogrammed_day(self) -> date | None:
        """The day flagged as "no programming exists here yet", if any."""
        return next((d.day for d in self.days if d.is_after_last_programmed), None)


def _valid_blocks(
    blocks: Iterable[Block],
    diagnostics: Diagnostics | None,
    athlete_id: str | None,
) -> tuple[list[tuple[Block, list[date]]], int]:
    """Split blocks into (block, days) pairs and a count of malformed ranges."""
    valid: list[tuple[Block, list[date]]] = []
    skipped = 0
    for block in blocks:
        try:
            block_days = enumerate_days(block.start_date, block.end_date)
        except InvalidRangeError as e:
            skipped += 1
            report_issue(
                diagnostics,
                IssueCode.INVALID_BLOCK_RANGE,
                f"Block {block.block_number} excluded from timeline: {e}",
                athlete_id=athlete_id,
                block_id=block.id,
            )
            continue
        valid.append((block, block_days))
    valid.sort(key=lambda pair: (pair[0].start_date, pair[0].block_number))
    return valid, skipped


def _assign_owners(
    valid: Sequence[tuple[Block, list[date]]],
    diagnostics: Diagnostics | None,
    athlete_id: str | None,
) -> dict[date, Block]:
    """Map each programmed day to its block. The earlier block keeps overlapping days."""
    owners: dict[date, Block] = {}
    for block, block_days in valid:
        overlapped_with: set[str] = set()
        for d in block_days:
            current = owners.get(d)
            if current is None:
                owners[d] = block
            elif current.id not in overlapped_with:
                overlapped_with.add(current.id)
                report_issue(
                    diagnostics,
                    IssueCode.OVERLAPPING_BLOCKS,
                    f"Block {block.block_number} overlaps block {current.block_number} from {d.isoformat()}",
                    athlete_id=athlete_id,
                    block_id=block.id,
                )
    return owners


def _check_block_order(
    ordered: Sequence[Block],
    diagnostics: Diagnostics | None,
    athlete_id: str | None,
) -> None:
    last_number_by_phase: dict[str | None, int] = {}
    for block in ordered:
        previous = last_number_by_phase.get(block.phase_id)
        if previous is not None and block.block_number <= previous:
            report_issue(
                diagnostics,
                IssueCode.BLOCK_NUMBER_ORDER,
                f"Block {block.block_number} starts after block {previous} in the same phase",
                athlete_id=athlete_id,
                block_id=block.id,
            )
        last_number_by_phase[block.phase_id] = block.block_number


def _resolve_phase(day: date, block: Block | None, phases: Sequence[Phase], phase_by_id: dict[str, Phase]) -> Phase | None:
    if block is not None and block.phase_id is not None:
        phase = phase_by_id.get(block.phase_id)
        if phase is not None:
            return phase
    for phase in phases:
        if phase.start_date <= day and (phase.end_date is None or day <= phase.end_date):
            return phase
    return None


def derive_timeline(
    blocks: Iterable[Block],
    reference_today: date | datetime,
    phases: Sequence[Phase] | None = None,
    pad_days: int | None = None,
    week_starts_on: int | None = None,
    diagnostics: Diagnostics | None = None,
    athlete_id: str | None = None,
) -> TimelineModel:
    """Derive the day/week grid for an athlete's blocks.

    Args:
        blocks: Blocks to lay out, in any order
        reference_today: The caller's "today"
        phases: Optional phase grouping; blocks are matched by phase_id
        pad_days: Days shown before the first and after the last block
            (default: settings.timeline_pad_days)
        week_starts_on: First weekday of a week row, 0=Monday
            (default: settings.week_starts_on)
        diagnostics: Optional collector for skipped or inconsistent blocks
        athlete_id: Athlete the blocks belong to, used when reporting issues

    Returns:
        TimelineModel covering the padded block range, or the default planning
        horizon around today when there is nothing to lay out

    Rules:
        - Blocks with end before start are excluded and counted, never raised
        - Overlapping days belong to the block that starts first
        - is_after_last_programmed marks exactly one day
        - A block start whose phase_id differs from the previous block's is a
          phase transition; blocks without a phase_id share one inferred phase

    Raises:
        ValueError: If pad_days is negative
    """
    pad = settings.timeline_pad_days if pad_days is None else pad_days
    if pad < 0:
        raise ValueError(f"pad_days must be >= 0, got {pad}")
    first_weekday = settings.week_starts_on if week_starts_on is None else week_starts_on
    today = as_date(reference_today)

    valid, skipped = _valid_blocks(blocks, diagnostics, athlete_id)
    ordered = [block for block, _ in valid]
    _check_block_order(ordered, diagnostics, athlete_id)

    gap_day: date | None = None
    if not ordered:
        start = today - timedelta(days=settings.timeline_horizon_before_days)
        end = today + timedelta(days=settings.timeline_horizon_after_days)
    else:
        last_end = max(block.end_date for block in ordered)
        start = ordered[0].start_date - timedelta(days=pad)
        end = last_end + timedelta(days=pad)
        if today > last_end:
            gap_day = last_end + timedelta(days=1)
            end = max(end, gap_day)

    owners = _assign_owners(valid, diagnostics, athlete_id)
    block_starts = {block.start_date for block in ordered}
    phase_list = list(phases or [])
    phase_by_id = {phase.id: phase for phase in phase_list}
    group_by_phase = phases is not None

    days: list[TimelineDay] = []
    last_phase_key: str | None = None
    for d in enumerate_days(start, end):
        block = owners.get(d)
        phase = _resolve_phase(d, block, phase_list, phase_by_id) if group_by_phase else None

        is_phase_transition = False
        if block is not None:
            phase_key = block.phase_id or _INFERRED_PHASE
            is_phase_transition = block.start_date == d and phase_key != last_phase_key
            last_phase_key = phase_key

        if phase is not None:
            phase_id: str | None = phase.id
        else:
            phase_id = block.phase_id if block is not None else None

        days.append(
            TimelineDay(
                day=d,
                block_id=block.id if block is not None else None,
                block_number=block.block_number if block is not None else None,
                phase_id=phase_id,
                phase_number=phase.phase_number if phase is not None else None,
                week_index=week_index(d, block.start_date, first_weekday) if block is not None else None,
                day_index_in_block=day_index_in_block(d, block) if block is not None else None,
                program_week=week_index(d, start, first_weekday),
                is_block_transition=d in block_starts,
                is_phase_transition=is_phase_transition,
                is_after_last_programmed=d == gap_day,
                is_today=d == today,
            )
        )

    weeks = _group_weeks(days, first_weekday)

    logger.debug(
        f"[TIMELINE] Derived {len(days)} days in {len(weeks)} weeks from {len(ordered)} blocks "
        f"({skipped} skipped), range={start.isoformat()}..{end.isoformat()}",
        athlete_id=athlete_id,
    )

    return TimelineModel(
        start=start,
        end=end,
        reference_today=today,
        days=tuple(days),
        weeks=weeks,
        blocks=tuple(ordered),
        skipped_block_count=skipped,
    )


def _group_weeks(days: Sequence[TimelineDay], week_starts_on: int) -> tuple[TimelineWeek, ...]:
    """Partition consecutive days into week rows."""
    runs: list[list[TimelineDay]] = []
    current_start: date | None = None
    for d in days:
        start = week_start(d.day, week_starts_on)
        if start != current_start:
            runs.append([])
            current_start = start
        runs[-1].append(d)

    weeks: list[TimelineWeek] = []
    previous_block_id: str | None = None
    for run in runs:
        first = run[0]
        starts_new_block = (
            previous_block_id is not None and first.block_id is not None and first.block_id != previous_block_id
        )
        weeks.append(
            TimelineWeek(
                week_start=week_start(first.day, week_starts_on),
                days=tuple(run),
                program_week=first.program_week,
                block_id=first.block_id,
                block_number=first.block_number,
                week_index=first.week_index,
                day_index_in_block=first.day_index_in_block,
                starts_new_block=starts_new_block,
            )
        )
        previous_block_id = first.block_id
    return tuple(weeks)
