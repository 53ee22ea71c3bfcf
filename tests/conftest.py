"""Common test fixtures."""

from __future__ import annotations

from typing import Callable

import pytest

from weekplan.io.proposal_reader import proposal_to_schedule
from weekplan.models.company import CompanyConstraints
from weekplan.models.employee import EmployeeConstraint
from weekplan.models.engine_config import EngineConfig
from weekplan.models.schedule import Schedule, ScheduleProposal

FULL_DAY = ["08:00-12:00", "13:00-17:00"]


@pytest.fixture
def engine_config() -> EngineConfig:
    """Config with the built-in defaults, independent of the environment."""
    return EngineConfig()


@pytest.fixture
def team() -> list[EmployeeConstraint]:
    """Three full-time employees without rest days or exceptions."""
    return [
        EmployeeConstraint(id="e1", name="Alice Martin", email="alice@example.com", weekly_hours=35),
        EmployeeConstraint(id="e2", name="Jean Dupont", email="jean@example.com", weekly_hours=35),
        EmployeeConstraint(id="e3", name="Chloé Bernard", email="chloe@example.com", weekly_hours=35),
    ]


@pytest.fixture
def weekday_company() -> CompanyConstraints:
    """Open Monday-Friday 08:00-12:00 / 13:00-17:00, two staff required."""
    days = ["monday", "tuesday", "wednesday", "thursday", "friday"]
    return CompanyConstraints(
        opening_days=days,
        opening_hours=[{"day": d, "hours": list(FULL_DAY)} for d in days],
        min_staff_simultaneously=2,
    )


@pytest.fixture
def make_schedule(team) -> Callable[[dict[str, dict[str, list[str]]]], Schedule]:
    """Build a Schedule for ``team`` from day -> name -> tokens."""

    def _make(days: dict[str, dict[str, list[str]]]) -> Schedule:
        schedule, warnings = proposal_to_schedule(ScheduleProposal(days=days), team)
        assert warnings == []
        return schedule

    return _make


@pytest.fixture
def compliant_tokens() -> dict[str, dict[str, list[str]]]:
    """Each employee works four 8h days (32h) with one staggered day off."""
    return {
        "monday": {"Alice Martin": FULL_DAY, "Jean Dupont": FULL_DAY, "Chloé Bernard": FULL_DAY},
        "tuesday": {"Alice Martin": FULL_DAY, "Jean Dupont": FULL_DAY, "Chloé Bernard": FULL_DAY},
        "wednesday": {"Alice Martin": FULL_DAY, "Jean Dupont": FULL_DAY},
        "thursday": {"Alice Martin": FULL_DAY, "Chloé Bernard": FULL_DAY},
        "friday": {"Jean Dupont": FULL_DAY, "Chloé Bernard": FULL_DAY},
    }
