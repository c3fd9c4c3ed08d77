"""Progress module - completion, urgency and status derived from blocks.

This module provides:
- Block completion percentages and program length summaries
- Next-action urgency classification against an explicit "today"
- Current block resolution that tolerates several active blocks
- Roster status helpers (program status, last activity, pacing)
"""

from coachboard.progress.completion import (
    BlockCounts,
    CompletionSummary,
    ProgramTimelineSummary,
    block_completion,
    block_counts,
    completion_summary,
    phase_progress,
    program_timeline_summary,
)
from coachboard.progress.status import (
    can_delete_block,
    has_pacing_warning,
    last_activity,
    last_entry_days_ago,
    last_modification,
    last_submission,
    program_position,
    program_status,
    sub_season_status,
)
from coachboard.progress.urgency import (
    BlockCountdown,
    CountdownSeverity,
    NextAction,
    Urgency,
    block_countdown,
    classify_urgency,
    current_block_summary,
    days_until,
    next_action,
)

__all__ = [
    "BlockCountdown",
    "BlockCounts",
    "CompletionSummary",
    "CountdownSeverity",
    "NextAction",
    "ProgramTimelineSummary",
    "Urgency",
    "block_completion",
    "block_countdown",
    "block_counts",
    "can_delete_block",
    "classify_urgency",
    "completion_summary",
    "current_block_summary",
    "days_until",
    "has_pacing_warning",
    "last_activity",
    "last_entry_days_ago",
    "last_modification",
    "last_submission",
    "next_action",
    "phase_progress",
    "program_position",
    "program_status",
    "program_timeline_summary",
    "sub_season_status",
]
