"""ValidatorAgent - validates schedules against the configured checks."""

from __future__ import annotations

from typing import Any

from weekplan.agents.base import BaseAgent
from weekplan.checks.base import CompiledCheck
from weekplan.checks.context import ScheduleContext
from weekplan.checks.registry import get_registry
from weekplan.dates.iso_week import resolve_week
from weekplan.io.proposal_reader import proposal_to_schedule
from weekplan.models.check import CheckSet
from weekplan.models.company import CompanyConstraints
from weekplan.models.employee import EmployeeConstraint, ensure_unique_names
from weekplan.models.engine_config import EngineConfig, get_engine_config
from weekplan.models.schedule import Schedule, ScheduleProposal
from weekplan.models.validation import CheckResult, ScheduleWarning, ValidationReport


class ValidatorAgent(BaseAgent):
    """Runs every enabled check and collects all warnings.

    Checks never short-circuit each other, so the report always holds the
    complete set of findings. Only an invalid week or duplicate employee
    names raise.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or get_engine_config()

    @property
    def name(self) -> str:
        return "validator"

    def compile_checks(self, check_set: CheckSet | None = None) -> list[CompiledCheck]:
        check_set = check_set or CheckSet.named(self.config.check_set, self.config)
        return get_registry().compile_set(check_set)

    def validate(
        self,
        schedule: Schedule | ScheduleProposal,
        employees: list[EmployeeConstraint],
        company: CompanyConstraints,
        year: int,
        week_number: int,
        check_set: CheckSet | None = None,
    ) -> ValidationReport:
        ensure_unique_names(employees)
        week = resolve_week(year, week_number, self.config)

        all_warnings: list[ScheduleWarning] = []
        if isinstance(schedule, ScheduleProposal):
            schedule, parse_warnings = proposal_to_schedule(schedule, employees)
            all_warnings.extend(parse_warnings)

        ctx = ScheduleContext(
            schedule=schedule,
            employees=employees,
            company=company,
            week=week,
            default_opening_hours=self.config.default_opening_hours,
        )

        check_results: list[CheckResult] = []
        for check in self.compile_checks(check_set):
            found = check(ctx)
            check_results.append(
                CheckResult(check_id=check.check_id, check_name=check.name, warnings=found)
            )
            all_warnings.extend(found)

        return ValidationReport(warnings=all_warnings, check_results=check_results)

    def _handle_validate(self, payload: dict[str, Any]) -> dict[str, Any]:
        employees = [EmployeeConstraint.model_validate(e) for e in payload["employees"]]
        company = CompanyConstraints.model_validate(payload["company"])
        schedule = payload["schedule"]
        if not isinstance(schedule, (Schedule, ScheduleProposal)):
            schedule = ScheduleProposal(days=schedule)
        report = self.validate(
            schedule, employees, company, payload["year"], payload["week_number"],
            check_set=coerce_check_set(payload.get("check_set"), self.config),
        )
        return {"validation_report": report}


def validate_schedule(
    schedule: Schedule | ScheduleProposal,
    employees: list[EmployeeConstraint],
    company: CompanyConstraints,
    year: int,
    week_number: int,
    check_set: CheckSet | None = None,
    config: EngineConfig | None = None,
) -> list[ScheduleWarning]:
    """Validate a schedule and return its warnings (possibly empty)."""
    report = ValidatorAgent(config).validate(
        schedule, employees, company, year, week_number, check_set=check_set
    )
    return report.warnings


def coerce_check_set(
    value: CheckSet | str | dict[str, Any] | None, config: EngineConfig
) -> CheckSet | None:
    """Accept a check set, a check set name, or its dict form."""
    if value is None or isinstance(value, CheckSet):
        return value
    if isinstance(value, str):
        return CheckSet.named(value, config)
    return CheckSet.model_validate(value)
