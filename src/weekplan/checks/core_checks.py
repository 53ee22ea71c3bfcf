"""Core validation passes: rest days, exceptions, staffing and contract hours."""

from __future__ import annotations

from typing import Any

from weekplan.checks.base import CheckFunction, CheckTemplate
from weekplan.checks.context import ScheduleContext
from weekplan.dates.iso_week import weekday_of
from weekplan.dates.slots import format_slot
from weekplan.models.check import ParameterDef, ParameterType
from weekplan.models.validation import ScheduleWarning


class RestDayCheck(CheckTemplate):
    """Employees must not work on their mandatory rest day."""

    @property
    def check_id(self) -> str:
        return "rest_day"

    @property
    def name(self) -> str:
        return "Mandatory rest day"

    @property
    def category(self) -> str:
        return "core"

    @property
    def description(self) -> str:
        return "Flags employees scheduled on their configured rest day"

    def compile(self, params: dict[str, Any]) -> CheckFunction:
        def check_fn(ctx: ScheduleContext) -> list[ScheduleWarning]:
            warnings: list[ScheduleWarning] = []
            for emp in ctx.employees:
                if emp.rest_day is None:
                    continue
                slots = ctx.slots(emp, emp.rest_day)
                if not slots:
                    continue
                tokens = ", ".join(format_slot(s) for s in slots)
                warnings.append(
                    ScheduleWarning(
                        check_id=self.check_id,
                        employee=emp.name,
                        day=emp.rest_day,
                        message=(
                            f"{emp.name} is scheduled on rest day "
                            f"{emp.rest_day.value}: {tokens}"
                        ),
                    )
                )
            return warnings

        return check_fn


class ExceptionDayCheck(CheckTemplate):
    """Employees must not work on days blocked by an exception."""

    @property
    def check_id(self) -> str:
        return "exception_days"

    @property
    def name(self) -> str:
        return "Blocking exceptions"

    @property
    def category(self) -> str:
        return "core"

    @property
    def description(self) -> str:
        return (
            "Flags work on dates with an unavailable, sick or vacation exception. "
            "Reduced and training exceptions are not checked"
        )

    def compile(self, params: dict[str, Any]) -> CheckFunction:
        def check_fn(ctx: ScheduleContext) -> list[ScheduleWarning]:
            warnings: list[ScheduleWarning] = []
            for emp in ctx.employees:
                for exc in emp.exceptions:
                    if not exc.type.blocks_work or not ctx.week.contains(exc.date):
                        continue
                    day = weekday_of(exc.date)
                    slots = ctx.slots(emp, day)
                    if not slots:
                        continue
                    tokens = ", ".join(format_slot(s) for s in slots)
                    reason = f" ({exc.reason})" if exc.reason else ""
                    warnings.append(
                        ScheduleWarning(
                            check_id=self.check_id,
                            employee=emp.name,
                            day=day,
                            message=(
                                f"{emp.name} has a {exc.type.value} exception on "
                                f"{exc.date.isoformat()}{reason} but is scheduled "
                                f"{day.value}: {tokens}"
                            ),
                        )
                    )
            return warnings

        return check_fn


class MinStaffingCheck(CheckTemplate):
    """Each staffed opening day needs a minimum number of working employees.

    This is a coverage count over the whole day, not a check of presence at
    the same time; see ``SimultaneousStaffingCheck`` for that.
    """

    @property
    def check_id(self) -> str:
        return "min_staffing"

    @property
    def name(self) -> str:
        return "Minimum staffing"

    @property
    def category(self) -> str:
        return "core"

    @property
    def description(self) -> str:
        return "Counts employees with at least one slot on each opening day"

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
            working = ctx.working_matrix
            warnings: list[ScheduleWarning] = []
            for day in ctx.staffed_days():
                observed = int(working[:, day.ordinal].sum())
                if observed < required:
                    warnings.append(
                        ScheduleWarning(
                            check_id=self.check_id,
                            day=day,
                            observed=observed,
                            required=required,
                            message=(
                                f"{day.value}: {observed} employee(s) scheduled, "
                                f"{required} required"
                            ),
                        )
                    )
            return warnings

        return check_fn


class ContractHoursCheck(CheckTemplate):
    """Weekly hours must stay within a tolerance band of the contract."""

    @property
    def check_id(self) -> str:
        return "contract_hours"

    @property
    def name(self) -> str:
        return "Contractual hours"

    @property
    def category(self) -> str:
        return "core"

    @property
    def description(self) -> str:
        return "Compares scheduled weekly hours to contractual hours"

    @property
    def parameters(self) -> list[ParameterDef]:
        return [
            ParameterDef(
                name="default_weekly_hours",
                display_name="Contract hours when the employee has none",
                param_type=ParameterType.FLOAT,
                default=35.0,
                min_value=10,
                max_value=60,
            ),
            ParameterDef(
                name="tolerance_ratio",
                display_name="Tolerance (ratio of contract hours)",
                param_type=ParameterType.FLOAT,
                default=0.10,
                min_value=0.0,
                max_value=1.0,
            ),
        ]

    def compile(self, params: dict[str, Any]) -> CheckFunction:
        default_hours = float(params["default_weekly_hours"])
        tolerance_ratio = float(params["tolerance_ratio"])

        def check_fn(ctx: ScheduleContext) -> list[ScheduleWarning]:
            weekly_minutes = ctx.minutes_matrix.sum(axis=1)
            warnings: list[ScheduleWarning] = []
            for row, emp in enumerate(ctx.employees):
                contract = emp.weekly_hours if emp.weekly_hours is not None else default_hours
                actual = float(weekly_minutes[row]) / 60.0
                tolerance = contract * tolerance_ratio
                # 1e-9 absorbs float noise exactly on the band edge
                if abs(actual - contract) <= tolerance + 1e-9:
                    continue
                warnings.append(
                    ScheduleWarning(
                        check_id=self.check_id,
                        employee=emp.name,
                        observed=round(actual, 2),
                        required=contract,
                        message=(
                            f"{emp.name}: {actual:.2f}h scheduled vs {contract:g}h "
                            f"contractual (tolerance ±{tolerance:.2f}h)"
                        ),
                    )
                )
            return warnings

        return check_fn
