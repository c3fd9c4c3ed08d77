"""Program records - athletes, phases, blocks and roster filter/sort state.

This module provides:
- Frozen record models parsed from camelCase, ISO-8601 JSON
- The engine error hierarchy
- The diagnostics channel for tolerated invariant violations
"""

from coachboard.programs.diagnostics import Diagnostics, EngineIssue, IssueCode, report_issue
from coachboard.programs.errors import EngineError, InvalidRangeError, RecordParseError
from coachboard.programs.types import (
    Athlete,
    AthleteStatus,
    Block,
    BlockStatus,
    CurrentDay,
    FilterState,
    Phase,
    ProgramStatus,
    RosterEntry,
    Season,
    SortDirection,
    SortField,
    SortState,
    UrgencyFilterValue,
)

__all__ = [
    "Athlete",
    "AthleteStatus",
    "Block",
    "BlockStatus",
    "CurrentDay",
    "Diagnostics",
    "EngineError",
    "EngineIssue",
    "FilterState",
    "InvalidRangeError",
    "IssueCode",
    "Phase",
    "ProgramStatus",
    "RecordParseError",
    "RosterEntry",
    "Season",
    "SortDirection",
    "SortField",
    "SortState",
    "UrgencyFilterValue",
    "report_issue",
]
