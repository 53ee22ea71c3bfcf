"""Company-wide opening calendar and staffing constraints."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from weekplan.dates.day_keys import to_canonical
from weekplan.models.calendar import Weekday

DEFAULT_WORKING_DAYS: tuple[Weekday, ...] = (
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
)
DEFAULT_OPENING_HOURS: tuple[str, ...] = ("08:00-12:00", "13:00-17:00")


class OpeningHours(BaseModel):
    """Opening windows for one weekday."""

    day: Weekday
    hours: list[str] = Field(default_factory=list, description="'HH:MM-HH:MM' windows")

    @field_validator("day", mode="before")
    @classmethod
    def _canonical_day(cls, value: Any) -> Any:
        return to_canonical(value)


class RoleConstraint(BaseModel):
    """Role coverage requirement (carried through, not enforced)."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    role: str = Field(min_length=1)
    required_at: list[str] = Field(default_factory=list)


class CompanyConstraints(BaseModel):
    """Opening calendar and staffing rules of the company."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    opening_days: list[Weekday] = Field(default_factory=list)
    opening_hours: list[OpeningHours] = Field(default_factory=list)
    min_staff_simultaneously: int | None = Field(default=None, ge=1)
    min_hours_per_day: float | None = Field(default=None, ge=1, le=12)
    max_hours_per_day: float | None = Field(default=None, ge=4, le=12)
    lunch_break_duration: int | None = Field(
        default=None, ge=30, le=120, description="Minutes"
    )
    mandatory_lunch_break: bool | None = None
    role_constraints: list[RoleConstraint] = Field(default_factory=list)

    @field_validator("opening_days", mode="before")
    @classmethod
    def _canonical_days(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [to_canonical(v) for v in value]
        return value

    def working_days(self) -> list[Weekday]:
        """Opening days in canonical order; Monday-Friday when none are given."""
        days = set(self.opening_days) if self.opening_days else set(DEFAULT_WORKING_DAYS)
        return [d for d in Weekday if d in days]

    def hours_for(
        self, day: Weekday, default_hours: tuple[str, ...] | list[str] = DEFAULT_OPENING_HOURS
    ) -> list[str]:
        """Opening-hour tokens for ``day``.

        With no ``opening_hours`` at all every working day uses
        ``default_hours``. Otherwise a working day without an entry has no
        hours.
        """
        if day not in self.working_days():
            return []
        if not self.opening_hours:
            return list(default_hours)
        hours: list[str] = []
        for entry in self.opening_hours:
            if entry.day == day:
                hours.extend(entry.hours)
        return hours

    def is_closed(
        self, day: Weekday, default_hours: tuple[str, ...] | list[str] = DEFAULT_OPENING_HOURS
    ) -> bool:
        """True when nothing needs to be staffed on ``day``."""
        return not self.hours_for(day, default_hours)
