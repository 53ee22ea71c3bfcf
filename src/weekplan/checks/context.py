"""Evaluation context shared by all checks."""

from __future__ import annotations

from datetime import date
from functools import cached_property

import numpy as np
from numpy.typing import NDArray

from weekplan.dates.iso_week import daily_dates
from weekplan.dates.slots import parse_valid_slots, total_minutes
from weekplan.models.calendar import WEEKDAYS, Weekday, WeekRange
from weekplan.models.company import DEFAULT_OPENING_HOURS, CompanyConstraints
from weekplan.models.employee import EmployeeConstraint
from weekplan.models.schedule import Schedule, TimeSlot


class ScheduleContext:
    """Read-only view of one schedule, its constraints and its week.

    Derived arrays are computed lazily and cached; the schedule itself is
    never modified.
    """

    def __init__(
        self,
        schedule: Schedule,
        employees: list[EmployeeConstraint],
        company: CompanyConstraints,
        week: WeekRange,
        default_opening_hours: list[str] | tuple[str, ...] = DEFAULT_OPENING_HOURS,
    ) -> None:
        self.schedule = schedule
        self.employees = employees
        self.company = company
        self.week = week
        self.default_opening_hours = tuple(default_opening_hours)

    @property
    def num_employees(self) -> int:
        return len(self.employees)

    @cached_property
    def dates(self) -> dict[Weekday, date]:
        return daily_dates(self.week.week_start)

    def slots(self, employee: EmployeeConstraint, day: Weekday) -> list[TimeSlot]:
        return self.schedule.slots_for(day, employee.name)

    @cached_property
    def minutes_matrix(self) -> NDArray[np.int_]:
        """Worked minutes, shape=(num_employees, 7), rows in employee order."""
        matrix = np.zeros((self.num_employees, len(WEEKDAYS)), dtype=int)
        for row, emp in enumerate(self.employees):
            for day in WEEKDAYS:
                matrix[row, day.ordinal] = total_minutes(self.slots(emp, day))
        return matrix

    @property
    def working_matrix(self) -> NDArray[np.bool_]:
        """True where the employee has at least one slot that day."""
        return self.minutes_matrix > 0

    def staffed_days(self) -> list[Weekday]:
        """Opening days that are not full closures."""
        return [
            d for d in self.company.working_days()
            if not self.company.is_closed(d, self.default_opening_hours)
        ]

    def opening_windows(self, day: Weekday) -> list[TimeSlot]:
        """Parsed opening-hour windows of ``day``; malformed tokens are skipped."""
        windows, _ = parse_valid_slots(self.company.hours_for(day, self.default_opening_hours))
        return windows
