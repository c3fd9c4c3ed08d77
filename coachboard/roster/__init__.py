"""Roster module - filtering, sorting and display rows for a roster of athletes."""

from coachboard.roster.filters import (
    ATHLETE_PREDICATES,
    apply_filters,
    athlete_matches,
    block_matches_filters,
    mark_matching_blocks,
)
from coachboard.roster.sorting import SORT_KEYS, needs_signoff_key, sort_needs_signoff, sort_roster
from coachboard.roster.views import RosterRow, RosterTab, build_roster_view, matches_tab

__all__ = [
    "ATHLETE_PREDICATES",
    "SORT_KEYS",
    "RosterRow",
    "RosterTab",
    "apply_filters",
    "athlete_matches",
    "block_matches_filters",
    "build_roster_view",
    "mark_matching_blocks",
    "matches_tab",
    "needs_signoff_key",
    "sort_needs_signoff",
    "sort_roster",
]
