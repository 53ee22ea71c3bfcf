"""Calendar models: weekdays and resolved ISO weeks."""

from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Weekday(str, Enum):
    """ISO weekday, Monday first. Definition order is iteration order."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @property
    def ordinal(self) -> int:
        """Fixed position 0 (Monday) .. 6 (Sunday)."""
        return _ORDER.index(self)

    @classmethod
    def from_ordinal(cls, ordinal: int) -> Weekday:
        return _ORDER[ordinal]

    @property
    def is_weekend(self) -> bool:
        return self in (Weekday.SATURDAY, Weekday.SUNDAY)


_ORDER: list[Weekday] = list(Weekday)

WEEKDAYS: tuple[Weekday, ...] = tuple(_ORDER)


class WeekRange(BaseModel):
    """A resolved ISO week."""

    model_config = ConfigDict(frozen=True)

    year: int
    week_number: int = Field(ge=1, le=53)
    week_start: date = Field(description="Monday of the ISO week")
    week_end: date = Field(description="Sunday of the ISO week")

    def contains(self, day: date) -> bool:
        return self.week_start <= day <= self.week_end
