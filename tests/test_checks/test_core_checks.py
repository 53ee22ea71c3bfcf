"""Tests for the four core validation passes."""

from __future__ import annotations

import pytest

from weekplan.checks.context import ScheduleContext
from weekplan.checks.registry import get_registry
from weekplan.dates.iso_week import resolve_week
from weekplan.models.calendar import Weekday
from weekplan.models.check import CheckConfig
from weekplan.models.company import CompanyConstraints
from weekplan.models.employee import EmployeeConstraint

YEAR, WEEK = 2024, 10  # Monday 2024-03-04
FULL_DAY = ["08:00-12:00", "13:00-17:00"]


def _run(check_id, schedule, employees, company, **params):
    compiled = get_registry().compile_config(CheckConfig(check_id=check_id, parameters=params))
    ctx = ScheduleContext(schedule, employees, company, resolve_week(YEAR, WEEK))
    return compiled.check_fn(ctx)


class TestRestDayCheck:
    def test_work_on_rest_day_is_flagged(self, make_schedule, weekday_company):
        employees = [
            EmployeeConstraint(id="e1", name="Alice Martin", rest_day="mercredi"),
            EmployeeConstraint(id="e2", name="Jean Dupont"),
            EmployeeConstraint(id="e3", name="Chloé Bernard"),
        ]
        schedule = make_schedule({"wednesday": {"Alice Martin": FULL_DAY, "Jean Dupont": FULL_DAY}})
        warnings = _run("rest_day", schedule, employees, weekday_company)
        assert len(warnings) == 1
        assert warnings[0].employee == "Alice Martin"
        assert warnings[0].day == Weekday.WEDNESDAY
        assert "08:00-12:00, 13:00-17:00" in warnings[0].message

    def test_empty_rest_day_is_fine(self, make_schedule, weekday_company):
        employees = [EmployeeConstraint(id="e1", name="Alice Martin", rest_day="wednesday")]
        schedule = make_schedule({"wednesday": {"Alice Martin": []}})
        assert _run("rest_day", schedule, employees, weekday_company) == []


class TestExceptionDayCheck:
    def _employee(self, exc_type, when="2024-03-06"):
        return EmployeeConstraint(
            id="e1",
            name="Alice Martin",
            exceptions=[{"date": when, "type": exc_type, "reason": "congés"}],
        )

    @pytest.mark.parametrize("exc_type", ["unavailable", "sick", "vacation"])
    def test_blocking_exception_flagged(self, make_schedule, weekday_company, exc_type):
        schedule = make_schedule({"wednesday": {"Alice Martin": FULL_DAY}})
        warnings = _run("exception_days", schedule, [self._employee(exc_type)], weekday_company)
        assert len(warnings) == 1
        assert warnings[0].day == Weekday.WEDNESDAY
        assert "2024-03-06" in warnings[0].message
        assert "congés" in warnings[0].message

    @pytest.mark.parametrize("exc_type", ["reduced", "training"])
    def test_non_blocking_exception_ignored(self, make_schedule, weekday_company, exc_type):
        schedule = make_schedule({"wednesday": {"Alice Martin": FULL_DAY}})
        assert _run("exception_days", schedule, [self._employee(exc_type)], weekday_company) == []

    def test_exception_outside_week_ignored(self, make_schedule, weekday_company):
        schedule = make_schedule({"wednesday": {"Alice Martin": FULL_DAY}})
        employee = self._employee("vacation", when="2024-03-13")
        assert _run("exception_days", schedule, [employee], weekday_company) == []

    def test_timestamp_dates_accepted(self, make_schedule, weekday_company):
        schedule = make_schedule({"wednesday": {"Alice Martin": FULL_DAY}})
        employee = self._employee("sick", when="2024-03-06T00:00:00.000Z")
        assert len(_run("exception_days", schedule, [employee], weekday_company)) == 1


class TestMinStaffingCheck:
    def test_single_short_day_reported_once(self, team, make_schedule):
        company = CompanyConstraints(
            opening_days=["monday", "tuesday"], min_staff_simultaneously=3
        )
        schedule = make_schedule(
            {
                "monday": {"Alice Martin": FULL_DAY, "Jean Dupont": FULL_DAY},
                "tuesday": {"Alice Martin": FULL_DAY, "Jean Dupont": FULL_DAY, "Chloé Bernard": FULL_DAY},
            }
        )
        warnings = _run("min_staffing", schedule, team, company)
        assert len(warnings) == 1
        assert warnings[0].day == Weekday.MONDAY
        assert warnings[0].observed == 2
        assert warnings[0].required == 3

    def test_defaults_when_company_sets_none(self, team, make_schedule):
        company = CompanyConstraints(opening_days=["monday"])
        schedule = make_schedule({"monday": {"Alice Martin": FULL_DAY}})
        assert _run("min_staffing", schedule, team, company) == []
        warnings = _run("min_staffing", schedule, team, company, default_min_staff=2)
        assert [w.observed for w in warnings] == [1]

    def test_days_without_opening_hours_are_not_staffed(self, team, make_schedule):
        company = CompanyConstraints(
            opening_days=["monday", "saturday"],
            opening_hours=[{"day": "monday", "hours": FULL_DAY}],
            min_staff_simultaneously=1,
        )
        schedule = make_schedule({"monday": {"Alice Martin": FULL_DAY}})
        assert _run("min_staffing", schedule, team, company) == []

    def test_enough_staff_every_day(self, team, make_schedule, weekday_company):
        schedule = make_schedule({d: {"Alice Martin": FULL_DAY, "Jean Dupont": FULL_DAY} for d in
                                  ["monday", "tuesday", "wednesday", "thursday", "friday"]})
        assert _run("min_staffing", schedule, team, weekday_company) == []


class TestContractHoursCheck:
    def _schedule(self, make_schedule, last_day):
        days = {d: {"Alice Martin": FULL_DAY} for d in ["monday", "tuesday", "wednesday", "thursday"]}
        days["friday"] = {"Alice Martin": last_day}
        return make_schedule(days)

    @pytest.mark.parametrize(
        "last_day",
        [
            [],                                  # 32h
            ["08:00-11:00"],                     # 35h
            ["08:00-14:30"],                     # 38.5h, upper edge
        ],
    )
    def test_within_tolerance(self, make_schedule, weekday_company, last_day):
        employees = [EmployeeConstraint(id="e1", name="Alice Martin", weekly_hours=35)]
        schedule = self._schedule(make_schedule, last_day)
        assert _run("contract_hours", schedule, employees, weekday_company) == []

    def test_lower_edge_is_inclusive(self, make_schedule, weekday_company):
        employees = [EmployeeConstraint(id="e1", name="Alice Martin", weekly_hours=35)]
        days = {d: {"Alice Martin": FULL_DAY} for d in ["monday", "tuesday", "wednesday"]}
        days["thursday"] = {"Alice Martin": ["08:00-12:00", "13:00-16:30"]}  # 31.5h
        assert _run("contract_hours", make_schedule(days), employees, weekday_company) == []

    def test_outside_tolerance(self, make_schedule, weekday_company):
        employees = [EmployeeConstraint(id="e1", name="Alice Martin", weekly_hours=35)]
        schedule = self._schedule(make_schedule, ["08:00-14:45"])  # 38.75h
        warnings = _run("contract_hours", schedule, employees, weekday_company)
        assert len(warnings) == 1
        assert warnings[0].observed == 38.75
        assert warnings[0].required == 35

    def test_default_contract_applies(self, make_schedule, weekday_company):
        employees = [EmployeeConstraint(id="e1", name="Alice Martin")]
        schedule = make_schedule({"monday": {"Alice Martin": FULL_DAY}})
        warnings = _run("contract_hours", schedule, employees, weekday_company)
        assert len(warnings) == 1
        assert warnings[0].required == 35
        assert warnings[0].observed == 8

    def test_tolerance_parameter(self, make_schedule, weekday_company):
        employees = [EmployeeConstraint(id="e1", name="Alice Martin", weekly_hours=35)]
        days = {d: {"Alice Martin": FULL_DAY} for d in ["monday", "tuesday", "wednesday"]}
        days["thursday"] = {"Alice Martin": ["08:00-14:00"]}  # 30h
        schedule = make_schedule(days)
        assert len(_run("contract_hours", schedule, employees, weekday_company)) == 1
        assert _run("contract_hours", schedule, employees, weekday_company, tolerance_ratio=0.2) == []
