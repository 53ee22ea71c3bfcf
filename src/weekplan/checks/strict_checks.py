"""Stricter, time-window aware checks.

Not part of the default check set: enabling them changes the warnings a
reviewer sees for the same schedule, so callers opt in with the ``strict``
check set.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from weekplan.checks.base import CheckFunction, CheckTemplate
from weekplan.checks.context import ScheduleContext
from weekplan.dates.slots import format_slot, format_time, slots_overlap
from weekplan.models.calendar import WEEKDAYS
from weekplan.models.check import ParameterDef, ParameterType
from weekplan.models.schedule import MINUTES_PER_DAY
from weekplan.models.validation import ScheduleWarning


class SlotOverlapCheck(CheckTemplate):
    """An employee's slots on one day must not overlap."""

    @property
    def check_id(self) -> str:
        return "slot_overlap"

    @property
    def name(self) -> str:
        return "Overlapping slots"

    @property
    def category(self) -> str:
        return "strict"

    @property
    def description(self) -> str:
        return "Flags overlapping slots of the same employee on the same day"

    def compile(self, params: dict[str, Any]) -> CheckFunction:
        def check_fn(ctx: ScheduleContext) -> list[ScheduleWarning]:
            warnings: list[ScheduleWarning] = []
            for emp in ctx.employees:
                for day in WEEKDAYS:
                    slots = sorted(ctx.slots(emp, day), key=lambda s: (s.start, s.end))
                    for prev, cur in zip(slots, slots[1:]):
                        if slots_overlap(prev, cur):
                            warnings.append(
                                ScheduleWarning(
                                    check_id=self.check_id,
                                    employee=emp.name,
                                    day=day,
                                    message=(
                                        f"{emp.name} has overlapping slots on {day.value}: "
                                        f"{format_slot(prev)} and {format_slot(cur)}"
                                    ),
                                )
                            )
            return warnings

        return check_fn


class SimultaneousStaffingCheck(CheckTemplate):
    """Minimum staff must be present at every minute of the opening windows."""

    @property
    def check_id(self) -> str:
        return "simultaneous_staffing"

    @property
    def name(self) -> str:
        return "Simultaneous staffing"

    @property
    def category(self) -> str:
        return "strict"

    @property
    def description(self) -> str:
        return "Checks presence minute by minute inside each opening window"

    @property
    def parameters(self) -> list[ParameterDef]:
        return [
            ParameterDef(
                name="default_min_staff",
                display_name="Minimum staff when the company sets none",
                param_type=ParameterType.INT,
                default=1,
                min_value=1,
            ),
        ]

    def compile(self, params: dict[str, Any]) -> CheckFunction:
        default_min_staff = int(params["default_min_staff"])

        def check_fn(ctx: ScheduleContext) -> list[ScheduleWarning]:
            required = ctx.company.min_staff_simultaneously or default_min_staff
            warnings: list[ScheduleWarning] = []
            for day in ctx.staffed_days():
                # Head count per minute; an employee counts once even with overlapping slots
                presence = np.zeros(MINUTES_PER_DAY, dtype=int)
                for emp in ctx.employees:
                    present = np.zeros(MINUTES_PER_DAY, dtype=bool)
                    for slot in ctx.slots(emp, day):
                        present[slot.start:slot.end] = True
                    presence += present
                for window in ctx.opening_windows(day):
                    segment = presence[window.start:window.end]
                    observed = int(segment.min())
                    if observed >= required:
                        continue
                    first_gap = window.start + int(np.argmax(segment < required))
                    warnings.append(
                        ScheduleWarning(
                            check_id=self.check_id,
                            day=day,
                            observed=observed,
                            required=required,
                            message=(
                                f"{day.value} {format_slot(window)}: only {observed} "
                                f"employee(s) present from {format_time(first_gap)}, "
                                f"{required} required"
                            ),
                        )
                    )
            return warnings

        return check_fn


class DailyHoursCheck(CheckTemplate):
    """Daily totals must respect the company's min/max hours per day."""

    @property
    def check_id(self) -> str:
        return "daily_hours"

    @property
    def name(self) -> str:
        return "Daily hour limits"

    @property
    def category(self) -> str:
        return "strict"

    @property
    def description(self) -> str:
        return "Compares each working day's hours with min/max hours per day"

    def compile(self, params: dict[str, Any]) -> CheckFunction:
        def check_fn(ctx: ScheduleContext) -> list[ScheduleWarning]:
            max_hours = ctx.company.max_hours_per_day
            min_hours = ctx.company.min_hours_per_day
            if max_hours is None and min_hours is None:
                return []
            minutes = ctx.minutes_matrix
            warnings: list[ScheduleWarning] = []
            for row, emp in enumerate(ctx.employees):
                for day in WEEKDAYS:
                    worked = int(minutes[row, day.ordinal])
                    if worked == 0:
                        continue
                    hours = worked / 60.0
                    if max_hours is not None and hours > max_hours:
                        limit, word = max_hours, "above the maximum"
                    elif min_hours is not None and hours < min_hours:
                        limit, word = min_hours, "below the minimum"
                    else:
                        continue
                    warnings.append(
                        ScheduleWarning(
                            check_id=self.check_id,
                            employee=emp.name,
                            day=day,
                            observed=round(hours, 2),
                            required=limit,
                            message=(
                                f"{emp.name} works {hours:.2f}h on {day.value}, "
                                f"{word} of {limit:g}h per day"
                            ),
                        )
                    )
            return warnings

        return check_fn


class OpeningHoursCheck(CheckTemplate):
    """Every slot must fall inside one opening window of its day."""

    @property
    def check_id(self) -> str:
        return "opening_hours"

    @property
    def name(self) -> str:
        return "Within opening hours"

    @property
    def category(self) -> str:
        return "strict"

    @property
    def description(self) -> str:
        return "Flags slots outside the opening windows, including closed days"

    def compile(self, params: dict[str, Any]) -> CheckFunction:
        def check_fn(ctx: ScheduleContext) -> list[ScheduleWarning]:
            warnings: list[ScheduleWarning] = []
            for day in WEEKDAYS:
                windows = ctx.opening_windows(day)
                for emp in ctx.employees:
                    for slot in ctx.slots(emp, day):
                        if any(w.start <= slot.start and slot.end <= w.end for w in windows):
                            continue
                        where = "a closed day" if not windows else "opening hours"
                        warnings.append(
                            ScheduleWarning(
                                check_id=self.check_id,
                                employee=emp.name,
                                day=day,
                                message=(
                                    f"{emp.name} slot {format_slot(slot)} on {day.value} "
                                    f"is outside {where}"
                                ),
                            )
                        )
            return warnings

        return check_fn


class LunchBreakCheck(CheckTemplate):
    """Long working days need a break between slots when breaks are mandatory."""

    @property
    def check_id(self) -> str:
        return "lunch_break"

    @property
    def name(self) -> str:
        return "Lunch break"

    @property
    def category(self) -> str:
        return "strict"

    @property
    def description(self) -> str:
        return "Requires a gap of the break duration on days longer than a threshold"

    @property
    def parameters(self) -> list[ParameterDef]:
        return [
            ParameterDef(
                name="min_worked_hours",
                display_name="Hours worked above which a break is required",
                param_type=ParameterType.FLOAT,
                default=6.0,
                min_value=1.0,
                max_value=12.0,
            ),
            ParameterDef(
                name="default_break_minutes",
                display_name="Break duration when the company sets none",
                param_type=ParameterType.INT,
                default=60,
                min_value=30,
                max_value=120,
            ),
        ]

    def compile(self, params: dict[str, Any]) -> CheckFunction:
        threshold_minutes = float(params["min_worked_hours"]) * 60
        default_break = int(params["default_break_minutes"])

        def check_fn(ctx: ScheduleContext) -> list[ScheduleWarning]:
            if not ctx.company.mandatory_lunch_break:
                return []
            required_break = ctx.company.lunch_break_duration or default_break
            minutes = ctx.minutes_matrix
            warnings: list[ScheduleWarning] = []
            for row, emp in enumerate(ctx.employees):
                for day in WEEKDAYS:
                    if minutes[row, day.ordinal] <= threshold_minutes:
                        continue
                    slots = sorted(ctx.slots(emp, day), key=lambda s: s.start)
                    longest_gap = max(
                        (cur.start - prev.end for prev, cur in zip(slots, slots[1:])),
                        default=0,
                    )
                    if longest_gap >= required_break:
                        continue
                    warnings.append(
                        ScheduleWarning(
                            check_id=self.check_id,
                            employee=emp.name,
                            day=day,
                            observed=max(longest_gap, 0),
                            required=required_break,
                            message=(
                                f"{emp.name} has no {required_break}-minute break on "
                                f"{day.value} (longest gap {max(longest_gap, 0)} min)"
                            ),
                        )
                    )
            return warnings

        return check_fn


class DailyRestCheck(CheckTemplate):
    """Consecutive working days need a minimum overnight rest."""

    @property
    def check_id(self) -> str:
        return "daily_rest"

    @property
    def name(self) -> str:
        return "Daily rest"

    @property
    def category(self) -> str:
        return "strict"

    @property
    def description(self) -> str:
        return "Rest between the last slot of a day and the first slot of the next day"

    @property
    def parameters(self) -> list[ParameterDef]:
        return [
            ParameterDef(
                name="min_rest_hours",
                display_name="Minimum rest between two working days (hours)",
                param_type=ParameterType.FLOAT,
                default=11.0,
                min_value=0.0,
                max_value=24.0,
            ),
        ]

    def compile(self, params: dict[str, Any]) -> CheckFunction:
        min_rest = float(params["min_rest_hours"]) * 60

        def check_fn(ctx: ScheduleContext) -> list[ScheduleWarning]:
            warnings: list[ScheduleWarning] = []
            for emp in ctx.employees:
                # Only pairs inside the week; the previous week is not known here
                for day, next_day in zip(WEEKDAYS, WEEKDAYS[1:]):
                    today = ctx.slots(emp, day)
                    tomorrow = ctx.slots(emp, next_day)
                    if not today or not tomorrow:
                        continue
                    last_end = max(s.end for s in today)
                    first_start = min(s.start for s in tomorrow)
                    rest = MINUTES_PER_DAY - last_end + first_start
                    if rest >= min_rest:
                        continue
                    hours = rest / 60.0
                    warnings.append(
                        ScheduleWarning(
                            check_id=self.check_id,
                            employee=emp.name,
                            day=next_day,
                            observed=round(hours, 2),
                            required=min_rest / 60.0,
                            message=(
                                f"{emp.name} rests {hours:.2f}h between {day.value} and "
                                f"{next_day.value}, {min_rest / 60.0:g}h required"
                            ),
                        )
                    )
            return warnings

        return check_fn
