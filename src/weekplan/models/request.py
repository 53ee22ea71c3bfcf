"""Planning request model, the wire shape accepted by adapters."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from weekplan.models.company import CompanyConstraints
from weekplan.models.employee import EmployeeConstraint, ensure_unique_names


class PlanRequest(BaseModel):
    """Everything needed to plan one team's week.

    Extra keys of the client payload (team id, preferences) are ignored.
    Employee names key the schedule and must be unique.
    """

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel, extra="ignore")

    employees: list[EmployeeConstraint] = Field(min_length=1)
    company_constraints: CompanyConstraints
    week_number: int
    year: int
    proposal: Any = Field(
        default=None, description="Raw proposal: JSON text or day -> name -> tokens"
    )

    @model_validator(mode="after")
    def _unique_names(self) -> PlanRequest:
        ensure_unique_names(self.employees)
        return self
