"""Root conftest for all tests.

This file makes shared fixtures available across all test modules.
"""

from datetime import date, timedelta

import pytest

from coachboard.programs.types import Athlete, Block, Phase, RosterEntry


@pytest.fixture
def today() -> date:
    """Stable reference day (a Wednesday) used instead of the wall clock."""
    return date(2024, 3, 13)


@pytest.fixture
def make_block():
    """Factory for Block records with sensible defaults.

    Usage:
        block = make_block(block_number=2, status="draft")
    """

    def _make_block(**overrides) -> Block:
        block_number = overrides.get("block_number", 1)
        start = overrides.pop("start_date", date(2024, 3, 4))
        fields = {
            "id": f"block-{block_number}",
            "phase_id": "phase-1",
            "block_number": block_number,
            "name": f"Block {block_number}",
            "season": "Pre-Season",
            "start_date": start,
            "end_date": start + timedelta(days=27),
            "duration": 4,
            "status": "active",
        }
        fields.update(overrides)
        return Block(**fields)

    return _make_block


@pytest.fixture
def make_entry():
    """Factory for RosterEntry records.

    Usage:
        entry = make_entry("Ava", blocks=[...], status="injured")
    """

    def _make_entry(
        name: str,
        blocks: list[Block] | None = None,
        status: str | None = None,
        athlete_id: str | None = None,
        phases: list[Phase] | None = None,
        current_phase_id: str | None = None,
    ) -> RosterEntry:
        return RosterEntry(
            athlete=Athlete(id=athlete_id or name.lower(), name=name, status=status),
            phases=phases or [],
            blocks=blocks or [],
            current_phase_id=current_phase_id,
        )

    return _make_entry
