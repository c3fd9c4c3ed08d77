"""Roster display list assembly.

Combines tab selection, filtering, sorting and per-block filter markers into
the rows a roster screen shows.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum

from loguru import logger

from coachboard.programs.diagnostics import Diagnostics
from coachboard.programs.parsing import as_date
from coachboard.programs.types import Block, FilterState, RosterEntry, SortState
from coachboard.progress.status import has_pacing_warning
from coachboard.progress.urgency import NextAction, current_block_summary, next_action
from coachboard.roster.filters import apply_filters, mark_matching_blocks
from coachboard.roster.sorting import sort_needs_signoff, sort_roster


class RosterTab(StrEnum):
    """Roster tabs.

    ALL: every athlete
    PENDING: something is due today or earlier, or the athlete is off-pace
    CURRENT: a live active block that has not ended
    UPCOMING: unpublished draft programming
    NEEDS_SIGNOFF: blocks awaiting sign-off, ordered by sign-off urgency
    """

    ALL = "all"
    PENDING = "pending"
    CURRENT = "current"
    UPCOMING = "upcoming"
    NEEDS_SIGNOFF = "needs-signoff"


@dataclass(frozen=True)
class RosterRow:
    """One displayed athlete with the view state derived for it."""

    entry: RosterEntry
    block_matches: dict[str, bool]
    current_block: Block | None
    next_action: NextAction

    @property
    def matching_block_ids(self) -> list[str]:
        return [block_id for block_id, matched in self.block_matches.items() if matched]


def matches_tab(entry: RosterEntry, tab: RosterTab, reference_today: date | datetime) -> bool:
    today = as_date(reference_today)
    if tab == RosterTab.ALL:
        return True
    if tab == RosterTab.PENDING:
        has_due = any(block.next_block_due is not None and block.next_block_due <= today for block in entry.blocks)
        return has_due or has_pacing_warning(entry.blocks, today)
    if tab == RosterTab.CURRENT:
        return any(block.status == "active" and block.end_date >= today for block in entry.blocks)
    if tab == RosterTab.UPCOMING:
        return any(block.status == "draft" for block in entry.blocks)
    if tab == RosterTab.NEEDS_SIGNOFF:
        return any(block.status == "pending-signoff" for block in entry.blocks)
    raise ValueError(f"Unknown roster tab: {tab}")


def build_roster_view(
    roster: Iterable[RosterEntry],
    reference_today: date | datetime,
    filter_state: FilterState | None = None,
    sort_state: SortState | None = None,
    tab: RosterTab | str = RosterTab.ALL,
    diagnostics: Diagnostics | None = None,
) -> list[RosterRow]:
    """Produce the ordered display rows for a roster screen.

    Args:
        roster: Every athlete fetched for the screen
        reference_today: The caller's "today"
        filter_state: Active filters (default: none)
        sort_state: Sort field and direction (default: athlete name ascending).
            Ignored on the needs-signoff tab, which has its own ordering.
        tab: Roster tab to show
        diagnostics: Optional collector for invariant violations

    Returns:
        One RosterRow per displayed athlete, in display order
    """
    selected_tab = RosterTab(tab)
    filters = filter_state or FilterState()
    entries = [entry for entry in roster if matches_tab(entry, selected_tab, reference_today)]
    filtered = apply_filters(entries, filters, reference_today)

    if selected_tab == RosterTab.NEEDS_SIGNOFF:
        ordered = sort_needs_signoff(filtered)
    else:
        ordered = sort_roster(filtered, sort_state or SortState(), reference_today)

    rows = [
        RosterRow(
            entry=entry,
            block_matches=mark_matching_blocks(entry, filters, reference_today),
            current_block=current_block_summary(entry.blocks, diagnostics=diagnostics, athlete_id=entry.athlete.id),
            next_action=next_action(entry.blocks, reference_today),
        )
        for entry in ordered
    ]
    logger.info(f"[ROSTER] tab={selected_tab.value} showing {len(rows)} athletes")
    return rows
