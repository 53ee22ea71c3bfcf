"""Employee constraint models."""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from weekplan.dates.day_keys import to_canonical
from weekplan.errors import DuplicateEmployeeError
from weekplan.models.calendar import Weekday


class ExceptionType(str, Enum):
    """Kinds of per-date employee exceptions."""

    UNAVAILABLE = "unavailable"
    REDUCED = "reduced"
    TRAINING = "training"
    SICK = "sick"
    VACATION = "vacation"

    @property
    def blocks_work(self) -> bool:
        """True when the employee must not be scheduled at all that day."""
        return self in BLOCKING_EXCEPTION_TYPES


BLOCKING_EXCEPTION_TYPES = frozenset(
    {ExceptionType.UNAVAILABLE, ExceptionType.SICK, ExceptionType.VACATION}
)


class EmployeeException(BaseModel):
    """A dated absence or restriction supplied with the request."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    date: dt.date
    type: ExceptionType
    reason: str = ""

    @field_validator("date", mode="before")
    @classmethod
    def _date_only(cls, value: Any) -> Any:
        # Accept full ISO timestamps ("2024-03-04T00:00:00.000Z") as sent by clients
        if isinstance(value, dt.datetime):
            return value.date()
        if isinstance(value, str) and len(value) > 10 and value[10] in "T ":
            return value[:10]
        return value


class EmployeeConstraint(BaseModel):
    """Scheduling constraints for a single employee."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    id: str = Field(min_length=1)
    name: str = Field(min_length=1, description="Display name, key of the schedule")
    email: str = ""
    rest_day: Weekday | None = Field(default=None, description="Mandatory weekly rest day")
    weekly_hours: float | None = Field(
        default=None, ge=10, le=60, description="Contractual hours per week"
    )
    preferred_hours: list[str] = Field(default_factory=list)
    exceptions: list[EmployeeException] = Field(default_factory=list)
    allow_split_shifts: bool | None = None

    @field_validator("rest_day", mode="before")
    @classmethod
    def _canonical_rest_day(cls, value: Any) -> Any:
        if value in ("", None):
            return None
        return to_canonical(value)

    def exceptions_on(self, day: dt.date) -> list[EmployeeException]:
        return [e for e in self.exceptions if e.date == day]

    def is_blocked_on(self, day: dt.date) -> bool:
        return any(e.type.blocks_work for e in self.exceptions_on(day))

    def is_reduced_on(self, day: dt.date) -> bool:
        return any(e.type == ExceptionType.REDUCED for e in self.exceptions_on(day))


def ensure_unique_names(employees: list[EmployeeConstraint]) -> None:
    """Raise ``DuplicateEmployeeError`` when two employees share a name."""
    seen: set[str] = set()
    duplicates: dict[str, None] = {}
    for emp in employees:
        if emp.name in seen:
            duplicates.setdefault(emp.name, None)
        seen.add(emp.name)
    if duplicates:
        raise DuplicateEmployeeError(list(duplicates))
