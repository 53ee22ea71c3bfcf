"""Schedule data models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from weekplan.models.calendar import WEEKDAYS, Weekday, WeekRange
from weekplan.models.validation import ScheduleWarning

MINUTES_PER_DAY = 24 * 60


class TimeSlot(BaseModel):
    """A working interval inside one day, in minutes since midnight."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0, lt=MINUTES_PER_DAY)
    end: int = Field(ge=0, lt=MINUTES_PER_DAY)

    @model_validator(mode="after")
    def _check_order(self) -> TimeSlot:
        if self.end <= self.start:
            raise ValueError("slot end must be after start (slots never cross midnight)")
        return self

    def __str__(self) -> str:
        return (
            f"{self.start // 60:02d}:{self.start % 60:02d}"
            f"-{self.end // 60:02d}:{self.end % 60:02d}"
        )


DaySlots = dict[str, list[TimeSlot]]


class Schedule(BaseModel):
    """Weekday -> employee name -> slots worked that day.

    A missing or empty slot list means the employee does not work that day.
    """

    days: dict[Weekday, DaySlots] = Field(default_factory=dict)

    @classmethod
    def empty(cls, employee_names: list[str]) -> Schedule:
        """Schedule with an empty entry for every employee on every weekday."""
        return cls(days={day: {name: [] for name in employee_names} for day in WEEKDAYS})

    def slots_for(self, day: Weekday, employee: str) -> list[TimeSlot]:
        return list(self.days.get(day, {}).get(employee, []))

    def working_on(self, day: Weekday) -> list[str]:
        """Names of employees with at least one slot on ``day``."""
        return [name for name, slots in self.days.get(day, {}).items() if slots]

    def employee_names(self) -> list[str]:
        names: dict[str, None] = {}
        for day in WEEKDAYS:
            for name in self.days.get(day, {}):
                names.setdefault(name, None)
        return list(names)

    def week_of(self, employee: str) -> dict[Weekday, list[TimeSlot]]:
        """All slots of one employee, keyed by weekday in canonical order."""
        return {day: self.slots_for(day, employee) for day in WEEKDAYS}


class ScheduleProposal(BaseModel):
    """Raw day -> employee name -> slot tokens, as proposed by an external source.

    Day keys may use any supported vocabulary and tokens are unparsed.
    """

    days: dict[str, dict[str, list[str]]] = Field(default_factory=dict)


class ScheduleSource(str, Enum):
    """Where the returned schedule came from."""

    PROPOSAL = "proposal"
    FALLBACK = "fallback"


class PlanResult(BaseModel):
    """Final schedule of a planning run and its advisory warnings."""

    schedule: Schedule
    warnings: list[ScheduleWarning] = Field(default_factory=list)
    source: ScheduleSource
    week: WeekRange
