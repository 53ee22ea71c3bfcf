"""Exceptions raised by the scheduling engine."""

from __future__ import annotations


class WeekPlanError(Exception):
    """Base class for engine errors."""


class SlotParseError(WeekPlanError, ValueError):
    """A time-slot token is not a valid ``HH:MM-HH:MM`` range."""

    kind = "MalformedSlot"

    def __init__(self, token: object, reason: str) -> None:
        self.token = token
        self.reason = reason
        super().__init__(f"Malformed slot {token!r}: {reason}")


class InvalidWeekError(WeekPlanError, ValueError):
    """No calendar dates can be derived for the requested (year, week)."""

    def __init__(self, year: object, week_number: object, reason: str) -> None:
        self.year = year
        self.week_number = week_number
        super().__init__(f"Invalid week {year}-W{week_number}: {reason}")


class DuplicateEmployeeError(WeekPlanError, ValueError):
    """Two employees share a display name, which keys the schedule."""

    def __init__(self, names: list[str]) -> None:
        self.names = names
        super().__init__(f"Duplicate employee names: {', '.join(names)}")
