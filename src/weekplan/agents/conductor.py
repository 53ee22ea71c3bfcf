"""ConductorAgent - orchestrates the full planning pipeline."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from loguru import logger

from weekplan.agents.base import BaseAgent
from weekplan.agents.generator import GeneratorAgent
from weekplan.agents.validator import ValidatorAgent, coerce_check_set
from weekplan.dates.iso_week import resolve_week
from weekplan.io.proposal_reader import proposal_to_schedule, read_proposal
from weekplan.io.schedule_writer import schedule_to_tokens
from weekplan.models.check import CheckSet
from weekplan.models.company import CompanyConstraints
from weekplan.models.employee import EmployeeConstraint, ensure_unique_names
from weekplan.models.engine_config import EngineConfig, get_engine_config
from weekplan.models.request import PlanRequest
from weekplan.models.schedule import PlanResult, ScheduleProposal, ScheduleSource
from weekplan.models.validation import ScheduleWarning


class ConductorAgent(BaseAgent):
    """Chooses between the external proposal and the fallback, then validates."""

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or get_engine_config()
        self._validator = ValidatorAgent(self.config)
        self._generator = GeneratorAgent(self.config)

    @property
    def name(self) -> str:
        return "conductor"

    def plan_week(
        self,
        employees: list[EmployeeConstraint],
        company: CompanyConstraints,
        year: int,
        week_number: int,
        proposal: str | bytes | Mapping[str, Any] | ScheduleProposal | None = None,
        check_set: CheckSet | None = None,
    ) -> PlanResult:
        """Run the pipeline: resolve week -> read proposal -> validate or generate.

        The fallback is validated as well, so the caller always gets the
        complete warning list for the schedule it receives.

        Raises:
            DuplicateEmployeeError: If two employees share a name.
            InvalidWeekError: If no dates can be derived for the week.
        """
        # 1. Hard failures first: nothing below is meaningful without them
        ensure_unique_names(employees)
        week = resolve_week(year, week_number, self.config)

        # 2. Proposal, or fallback when absent or malformed
        parsed = read_proposal(proposal)
        warnings: list[ScheduleWarning] = []
        if parsed is not None:
            logger.info(f"Validating external proposal for {year}-W{week_number:02d}")
            source = ScheduleSource.PROPOSAL
            schedule, warnings = proposal_to_schedule(parsed, employees)
        else:
            if proposal is not None:
                logger.warning(f"Unusable proposal for {year}-W{week_number:02d}, using fallback")
            source = ScheduleSource.FALLBACK
            schedule = self._generator.generate(employees, company, year, week_number)

        # 3. Validate
        report = self._validator.validate(
            schedule, employees, company, year, week_number, check_set=check_set
        )
        warnings.extend(report.warnings)

        logger.info(
            f"Planned {year}-W{week_number:02d} from {source.value} "
            f"with {len(warnings)} warning(s)"
        )
        return PlanResult(schedule=schedule, warnings=warnings, source=source, week=week)

    def _handle_plan_week(self, payload: dict[str, Any]) -> dict[str, Any]:
        request = PlanRequest.model_validate(payload)
        result = self.plan_week(
            employees=request.employees,
            company=request.company_constraints,
            year=request.year,
            week_number=request.week_number,
            proposal=request.proposal,
            check_set=coerce_check_set(payload.get("check_set"), self.config),
        )
        return {
            "plan_result": result,
            "schedule": schedule_to_tokens(result.schedule),
        }
