"""weekplan MCP Server.

Exposes the weekly schedule constraint engine as MCP tools so that the
planning assistant (or any MCP client) can validate model proposals and
fall back to a deterministic schedule without going through HTTP routes.

Every tool is a thin adapter: parse arguments -> call the engine ->
serialize the result. The server keeps no state between calls.

Usage:
    python -m weekplan.mcp              # stdio mode
    fastmcp run weekplan/mcp/server.py  # via CLI
"""

from __future__ import annotations

from typing import Any

from fastmcp import FastMCP

from weekplan.agents.conductor import ConductorAgent
from weekplan.agents.generator import GeneratorAgent
from weekplan.agents.validator import ValidatorAgent, coerce_check_set
from weekplan.checks.registry import get_registry
from weekplan.dates.day_keys import DayVocabulary
from weekplan.dates.iso_week import daily_dates, resolve_week
from weekplan.dates.slots import duration_minutes, format_slot, parse_slot
from weekplan.errors import WeekPlanError
from weekplan.io.schedule_writer import schedule_to_tokens, weekly_minutes
from weekplan.models.check import CheckSet
from weekplan.models.company import CompanyConstraints
from weekplan.models.employee import EmployeeConstraint
from weekplan.models.schedule import ScheduleProposal

# ---------------------------------------------------------------------------
# Server instance
# ---------------------------------------------------------------------------
mcp = FastMCP(
    name="weekplan",
    instructions="""
    weekplan validates and generates weekly team schedules.

    Basic flow:
    1. list_checks -> see which rules are enforced
    2. validate_schedule -> warnings for a proposed schedule
    3. plan_week -> validated proposal, or deterministic fallback when the
       proposal is missing or malformed

    Schedules are {day: {employee name: ["HH:MM-HH:MM", ...]}} with English
    or French day names. Warnings are advisory and never block a schedule.
    """,
)


def _error(message: str) -> dict[str, Any]:
    return {"status": "error", "message": message}


def _parse_inputs(
    employees: list[dict[str, Any]], company: dict[str, Any]
) -> tuple[list[EmployeeConstraint], CompanyConstraints]:
    return (
        [EmployeeConstraint.model_validate(e) for e in employees],
        CompanyConstraints.model_validate(company),
    )


# ---------------------------------------------------------------------------
# Tool 1: parse_time_slot
# ---------------------------------------------------------------------------
@mcp.tool
def parse_time_slot(token: str) -> dict[str, Any]:
    """Parse an "HH:MM-HH:MM" slot token.

    Args:
        token: Slot token, e.g. "08:00-12:30"

    Returns:
        start/end minutes and duration, or an error message
    """
    try:
        slot = parse_slot(token)
    except WeekPlanError as e:
        return _error(str(e))
    return {
        "status": "ok",
        "slot": format_slot(slot),
        "start_minute": slot.start,
        "end_minute": slot.end,
        "duration_minutes": duration_minutes(slot),
    }


# ---------------------------------------------------------------------------
# Tool 2: resolve_iso_week
# ---------------------------------------------------------------------------
@mcp.tool
def resolve_iso_week(year: int, week_number: int) -> dict[str, Any]:
    """Resolve an ISO week to its calendar dates.

    Args:
        year: Calendar year (2020-2030)
        week_number: ISO week number (1-53)

    Returns:
        week_start (Monday), week_end (Sunday) and the date of every weekday
    """
    try:
        week = resolve_week(year, week_number)
    except WeekPlanError as e:
        return _error(str(e))
    return {
        "status": "ok",
        "week_start": week.week_start.isoformat(),
        "week_end": week.week_end.isoformat(),
        "dates": {d.value: dt.isoformat() for d, dt in daily_dates(week.week_start).items()},
    }


# ---------------------------------------------------------------------------
# Tool 3: list_checks
# ---------------------------------------------------------------------------
@mcp.tool
def list_checks() -> dict[str, Any]:
    """List every available check and the check sets that use them.

    Returns:
        Checks grouped by category, with parameter defaults
    """
    checks = {
        category: [
            {
                "id": t.check_id,
                "name": t.name,
                "description": t.description,
                "parameters": t.defaults(),
            }
            for t in templates
        ]
        for category, templates in get_registry().categories().items()
    }
    return {
        "status": "ok",
        "checks": checks,
        "check_sets": {
            "default": [c.check_id for c in CheckSet.default_set().checks],
            "strict": [c.check_id for c in CheckSet.strict_set().checks],
        },
    }


# ---------------------------------------------------------------------------
# Tool 4: validate_schedule
# ---------------------------------------------------------------------------
@mcp.tool
def validate_schedule(
    schedule: dict[str, dict[str, list[str]]],
    employees: list[dict[str, Any]],
    company: dict[str, Any],
    year: int,
    week_number: int,
    check_set: str = "default",
) -> dict[str, Any]:
    """Validate a proposed schedule against the team's constraints.

    Args:
        schedule: {day: {employee name: ["HH:MM-HH:MM", ...]}}
        employees: Employee constraints (id, name, email, restDay, weeklyHours, exceptions)
        company: Company constraints (openingDays, openingHours, minStaffSimultaneously)
        year: Calendar year
        week_number: ISO week number
        check_set: "default" (four core checks) or "strict"

    Returns:
        Warnings, grouped per check
    """
    try:
        emps, comp = _parse_inputs(employees, company)
        validator = ValidatorAgent()
        report = validator.validate(
            ScheduleProposal(days=schedule), emps, comp, year, week_number,
            check_set=coerce_check_set(check_set, validator.config),
        )
    except (WeekPlanError, ValueError, KeyError) as e:
        return _error(str(e))
    return {
        "status": "ok",
        "warning_count": report.warning_count,
        "warnings": [w.model_dump(mode="json") for w in report.warnings],
        "checks": {r.check_id: len(r.warnings) for r in report.check_results},
    }


# ---------------------------------------------------------------------------
# Tool 5: generate_fallback_schedule
# ---------------------------------------------------------------------------
@mcp.tool
def generate_fallback_schedule(
    employees: list[dict[str, Any]],
    company: dict[str, Any],
    year: int,
    week_number: int,
    vocabulary: str = "english",
) -> dict[str, Any]:
    """Generate the deterministic fallback schedule.

    Args:
        employees: Employee constraints
        company: Company constraints
        year: Calendar year
        week_number: ISO week number
        vocabulary: Day names in the output, "english" or "french"

    Returns:
        The schedule and weekly minutes per employee
    """
    try:
        emps, comp = _parse_inputs(employees, company)
        schedule = GeneratorAgent().generate(emps, comp, year, week_number)
        vocab = DayVocabulary(vocabulary)
    except (WeekPlanError, ValueError) as e:
        return _error(str(e))
    return {
        "status": "ok",
        "schedule": schedule_to_tokens(schedule, vocab),
        "weekly_minutes": weekly_minutes(schedule),
    }


# ---------------------------------------------------------------------------
# Tool 6: plan_week
# ---------------------------------------------------------------------------
@mcp.tool
def plan_week(
    employees: list[dict[str, Any]],
    company: dict[str, Any],
    year: int,
    week_number: int,
    proposal: str | dict[str, Any] | None = None,
    check_set: str = "default",
    vocabulary: str = "english",
) -> dict[str, Any]:
    """Validate an external proposal, or fall back to generation.

    Args:
        employees: Employee constraints
        company: Company constraints
        year: Calendar year
        week_number: ISO week number
        proposal: Model output (JSON text, fenced or not) or an already decoded object
        check_set: "default" or "strict"
        vocabulary: Day names in the output, "english" or "french"

    Returns:
        The final schedule, where it came from, and all warnings
    """
    try:
        emps, comp = _parse_inputs(employees, company)
        conductor = ConductorAgent()
        result = conductor.plan_week(
            emps, comp, year, week_number, proposal=proposal,
            check_set=coerce_check_set(check_set, conductor.config),
        )
        vocab = DayVocabulary(vocabulary)
    except (WeekPlanError, ValueError, KeyError) as e:
        return _error(str(e))
    return {
        "status": "ok",
        "source": result.source.value,
        "week_start": result.week.week_start.isoformat(),
        "week_end": result.week.week_end.isoformat(),
        "schedule": schedule_to_tokens(result.schedule, vocab),
        "warnings": [w.model_dump(mode="json") for w in result.warnings],
    }


if __name__ == "__main__":
    mcp.run()
