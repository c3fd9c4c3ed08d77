"""Record types for athletes, phases and blocks.

Records arrive camelCase and JSON-shaped (`phaseNumber`, `startDate`, ...).
Models accept either the camelCase alias or the snake_case field name, parse
ISO-8601 strings once at validation, and are frozen: the engine only reads
them and returns new derived values.

Range and count fields are deliberately not constrained here. A block whose
end precedes its start, or a negative `daysComplete`, is still a valid
record; the engine tolerates it where it is used.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from coachboard.programs.parsing import parse_date, parse_timestamp

AthleteStatus = Literal["injured", "rehabbing", "lingering-issues"]
BlockStatus = Literal["draft", "pending-signoff", "active", "complete"]
Season = Literal["Pre-Season", "In-Season", "Off-Season"]
ProgramStatus = Literal["active", "pending", "draft"]

# Urgency values accepted by the roster filter. "due-this-week" is the
# roster page's combined bucket (due today through seven days out).
UrgencyFilterValue = Literal["overdue", "today", "thisWeek", "later", "no-active-block", "due-this-week"]

SortField = Literal[
    "athleteName",
    "nextActionDate",
    "lastActivity",
    "phaseProgress",
    "subSeasonStatus",
    "blockProgress",
    "programStatus",
    "lastEntryDay",
    "lastModificationDay",
]
SortDirection = Literal["asc", "desc"]


class RecordModel(BaseModel):
    """Base for all engine input records."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Athlete(RecordModel):
    id: str
    name: str
    status: AthleteStatus | None = None
    photo: str | None = None


class CurrentDay(RecordModel):
    """Position of the athlete inside a block (1-indexed)."""

    week: int
    day: int
    block: int | None = None


class Phase(RecordModel):
    id: str
    phase_number: int
    start_date: date
    end_date: date | None = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _parse_dates(cls, value: object) -> object:
        if isinstance(value, (str, date)):
            return parse_date(value)
        return value


class Block(RecordModel):
    """A single training cycle inside a phase.

    Attributes:
        block_number: Position of the block inside its phase
        season: Season the block is programmed for
        sub_season: Optional refinement (e.g., "Early", "Mid", "Late")
        duration: Programmed length in weeks
        days_available: Days of programming available in the block
        days_complete: Days the athlete has completed
        next_block_due: When the following block needs review or sign-off
        last_modification: When the coach last changed the block
        last_submission: When the athlete last submitted data
    """

    id: str
    phase_id: str | None = None
    block_number: int
    name: str = ""
    season: Season
    sub_season: str | None = None
    start_date: date
    end_date: date
    duration: int = 1
    status: BlockStatus
    days_available: int | None = None
    days_complete: int | None = None
    current_day: CurrentDay | None = None
    next_block_due: date | None = None
    last_modification: datetime | None = None
    last_submission: datetime | None = None

    @field_validator("start_date", "end_date", "next_block_due", mode="before")
    @classmethod
    def _parse_dates(cls, value: object) -> object:
        if isinstance(value, (str, date)):
            return parse_date(value)
        return value

    @field_validator("last_modification", "last_submission", mode="before")
    @classmethod
    def _parse_timestamps(cls, value: object) -> object:
        if isinstance(value, (str, date)):
            return parse_timestamp(value)
        return value

    @property
    def activity_timestamps(self) -> list[datetime]:
        """Coach modification and athlete submission times that are set."""
        return [ts for ts in (self.last_modification, self.last_submission) if ts is not None]


class RosterEntry(RecordModel):
    """One athlete as shown on the roster, with the phases and blocks fetched for them.

    `current_phase_id` is the externally supplied "current phase" flag. When
    it is not set, every block in the entry counts as the current phase.
    """

    athlete: Athlete
    phases: list[Phase] = Field(default_factory=list)
    blocks: list[Block] = Field(default_factory=list)
    current_phase_id: str | None = None

    @property
    def current_phase(self) -> Phase | None:
        if self.current_phase_id is None:
            return None
        return next((phase for phase in self.phases if phase.id == self.current_phase_id), None)

    @property
    def current_phase_blocks(self) -> list[Block]:
        if self.current_phase_id is None:
            return list(self.blocks)
        return [block for block in self.blocks if block.phase_id == self.current_phase_id]


class FilterState(RecordModel):
    """Accepted values per roster filter category.

    An empty list or an unset bound means "no constraint" for that category.
    Date bounds are inclusive calendar days.
    """

    athlete_statuses: list[AthleteStatus] = Field(default_factory=list)
    block_statuses: list[BlockStatus] = Field(default_factory=list)
    seasons: list[Season] = Field(default_factory=list)
    sub_seasons: list[str] = Field(default_factory=list)
    urgency: list[UrgencyFilterValue] = Field(default_factory=list)
    program_statuses: list[ProgramStatus] = Field(default_factory=list)
    next_block_due_start: date | None = None
    next_block_due_end: date | None = None
    last_activity_start: date | None = None
    last_activity_end: date | None = None
    last_entry_start: date | None = None
    last_entry_end: date | None = None
    recent_edit_start: date | None = None
    recent_edit_end: date | None = None
    search_query: str = ""

    @field_validator(
        "next_block_due_start",
        "next_block_due_end",
        "last_activity_start",
        "last_activity_end",
        "last_entry_start",
        "last_entry_end",
        "recent_edit_start",
        "recent_edit_end",
        mode="before",
    )
    @classmethod
    def _parse_bounds(cls, value: object) -> object:
        if isinstance(value, (str, date)):
            return parse_date(value)
        return value

    @property
    def block_urgency_values(self) -> list[str]:
        """Urgency values that are evaluated per block (everything but no-active-block)."""
        return [value for value in self.urgency if value != "no-active-block"]

    def has_block_scoped_filters(self) -> bool:
        """Whether any category that is matched against individual blocks is active."""
        return bool(
            self.block_statuses
            or self.seasons
            or self.sub_seasons
            or self.block_urgency_values
            or self.next_block_due_start
            or self.next_block_due_end
            or self.last_activity_start
            or self.last_activity_end
        )

    def is_empty(self) -> bool:
        return not (
            self.athlete_statuses
            or self.program_statuses
            or self.urgency
            or self.last_entry_start
            or self.last_entry_end
            or self.recent_edit_start
            or self.recent_edit_end
            or self.search_query.strip()
            or self.has_block_scoped_filters()
        )


class SortState(RecordModel):
    sort_field: SortField = "athleteName"
    direction: SortDirection = "asc"
