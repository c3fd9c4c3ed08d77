"""Diagnostics channel for tolerated invariant violations.

The engine never raises on invariant violations (several active blocks,
overlapping blocks, out-of-order block numbers). It degrades
deterministically and records what it saw here, so callers can forward the
issues to their own logging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from loguru import logger


class IssueCode(StrEnum):
    """Machine-readable codes for tolerated input problems."""

    INVALID_BLOCK_RANGE = "INVALID_BLOCK_RANGE"
    OVERLAPPING_BLOCKS = "OVERLAPPING_BLOCKS"
    BLOCK_NUMBER_ORDER = "BLOCK_NUMBER_ORDER"
    MULTIPLE_ACTIVE_BLOCKS = "MULTIPLE_ACTIVE_BLOCKS"
    COMPLETION_OVERFLOW = "COMPLETION_OVERFLOW"


@dataclass(frozen=True)
class EngineIssue:
    """A single tolerated problem found while deriving view state."""

    code: IssueCode
    message: str
    athlete_id: str | None = None
    block_id: str | None = None


@dataclass
class Diagnostics:
    """Caller-owned collector for engine issues."""

    issues: list[EngineIssue] = field(default_factory=list)

    def add(self, issue: EngineIssue) -> None:
        self.issues.append(issue)

    def codes(self) -> list[IssueCode]:
        return [issue.code for issue in self.issues]

    def has(self, code: IssueCode) -> bool:
        return any(issue.code == code for issue in self.issues)


def report_issue(
    diagnostics: Diagnostics | None,
    code: IssueCode,
    message: str,
    athlete_id: str | None = None,
    block_id: str | None = None,
) -> None:
    """Log an issue and record it on the collector when one is supplied.

    Args:
        diagnostics: Optional collector owned by the caller
        code: Issue code
        message: Human-readable description
        athlete_id: Athlete the issue belongs to, if known
        block_id: Block the issue belongs to, if known
    """
    logger.warning(f"[DIAGNOSTICS] {code.value}: {message}", athlete_id=athlete_id, block_id=block_id)
    if diagnostics is not None:
        diagnostics.add(EngineIssue(code=code, message=message, athlete_id=athlete_id, block_id=block_id))
