"""GeneratorAgent - produces the fallback schedule."""

from __future__ import annotations

from typing import Any

from weekplan.agents.base import BaseAgent
from weekplan.generation.fallback import FallbackGenerator
from weekplan.models.company import CompanyConstraints
from weekplan.models.employee import EmployeeConstraint
from weekplan.models.engine_config import EngineConfig, get_engine_config
from weekplan.models.schedule import Schedule


class GeneratorAgent(BaseAgent):
    """Wraps ``FallbackGenerator`` behind the agent interface."""

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or get_engine_config()

    @property
    def name(self) -> str:
        return "generator"

    def generate(
        self,
        employees: list[EmployeeConstraint],
        company: CompanyConstraints,
        year: int,
        week_number: int,
    ) -> Schedule:
        return FallbackGenerator(employees, company, self.config).run(year, week_number)

    def _handle_generate(self, payload: dict[str, Any]) -> dict[str, Any]:
        employees = [EmployeeConstraint.model_validate(e) for e in payload["employees"]]
        company = CompanyConstraints.model_validate(payload["company"])
        schedule = self.generate(employees, company, payload["year"], payload["week_number"])
        return {"schedule": schedule}
