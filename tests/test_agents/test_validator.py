"""Tests for ValidatorAgent."""

from __future__ import annotations

import pytest

from weekplan.agents.validator import ValidatorAgent, coerce_check_set, validate_schedule
from weekplan.errors import InvalidWeekError
from weekplan.models.calendar import Weekday
from weekplan.models.check import CORE_CHECK_IDS, STRICT_CHECK_IDS, CheckSet
from weekplan.models.employee import EmployeeConstraint
from weekplan.models.engine_config import EngineConfig
from weekplan.models.schedule import ScheduleProposal
from weekplan.models.validation import ValidationReport

YEAR, WEEK = 2024, 10  # Monday 2024-03-04
FULL_DAY = ["08:00-12:00", "13:00-17:00"]


@pytest.fixture
def validator(engine_config) -> ValidatorAgent:
    return ValidatorAgent(engine_config)


class TestValidatorAgent:
    def test_compliant_schedule(self, validator, team, weekday_company, make_schedule, compliant_tokens):
        report = validator.validate(make_schedule(compliant_tokens), team, weekday_company, YEAR, WEEK)
        assert report.is_clean
        assert [r.check_id for r in report.check_results] == list(CORE_CHECK_IDS)
        assert all(r.passed for r in report.check_results)

    def test_all_passes_run_without_short_circuit(self, validator, weekday_company, make_schedule):
        employees = [
            EmployeeConstraint(id="e1", name="Alice Martin", rest_day="monday", weekly_hours=35),
            EmployeeConstraint(
                id="e2",
                name="Jean Dupont",
                weekly_hours=35,
                exceptions=[{"date": "2024-03-04", "type": "sick"}],
            ),
            EmployeeConstraint(id="e3", name="Chloé Bernard", weekly_hours=35),
        ]
        schedule = make_schedule({"monday": {"Alice Martin": FULL_DAY, "Jean Dupont": FULL_DAY}})
        report = validator.validate(schedule, employees, weekday_company, YEAR, WEEK)
        assert len(report.for_check("rest_day")) == 1
        assert len(report.for_check("exception_days")) == 1
        # Tuesday-Friday have nobody
        assert [w.day for w in report.for_check("min_staffing")] == [
            Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY, Weekday.FRIDAY,
        ]
        assert len(report.for_check("contract_hours")) == 3

    def test_does_not_modify_schedule(self, validator, team, weekday_company, make_schedule):
        schedule = make_schedule({"monday": {"Alice Martin": ["08:00-12:00", "11:00-13:00"]}})
        before = schedule.model_dump()
        validator.validate(schedule, team, weekday_company, YEAR, WEEK, check_set=CheckSet.strict_set())
        assert schedule.model_dump() == before

    def test_strict_set(self, validator, team, weekday_company, make_schedule, compliant_tokens):
        report = validator.validate(
            make_schedule(compliant_tokens), team, weekday_company, YEAR, WEEK,
            check_set=CheckSet.strict_set(),
        )
        assert [r.check_id for r in report.check_results] == list(CORE_CHECK_IDS) + list(STRICT_CHECK_IDS)
        assert report.is_clean

    def test_proposal_parse_warnings_come_first(self, validator, team, weekday_company, compliant_tokens):
        days = dict(compliant_tokens)
        days["samedi"] = {"Inconnu": ["09:00-10:00"]}
        report = validator.validate(ScheduleProposal(days=days), team, weekday_company, YEAR, WEEK)
        assert [w.check_id for w in report.warnings] == ["unknown_employee"]

    def test_invalid_week_raises(self, validator, team, weekday_company, make_schedule):
        with pytest.raises(InvalidWeekError):
            validator.validate(make_schedule({}), team, weekday_company, 2025, 54)

    def test_tolerance_from_environment(self, monkeypatch, team, weekday_company, make_schedule):
        monkeypatch.setenv("WEEKPLAN_HOURS_TOLERANCE", "0.2")
        config = EngineConfig()
        assert config.hours_tolerance == 0.2
        days = {d: {"Alice Martin": FULL_DAY} for d in ["monday", "tuesday", "wednesday"]}
        days["thursday"] = {"Alice Martin": ["08:00-14:00"]}  # 30h
        warnings = validate_schedule(
            make_schedule(days), team[:1], weekday_company, YEAR, WEEK,
            check_set=CheckSet.default_set(config), config=config,
        )
        assert [w.check_id for w in warnings] == ["min_staffing"] * 5


class TestProcess:
    def test_validate_action(self, validator, compliant_tokens):
        result = validator.process(
            "validate",
            {
                "schedule": compliant_tokens,
                "employees": [
                    {"id": "e1", "name": "Alice Martin", "weeklyHours": 35},
                    {"id": "e2", "name": "Jean Dupont", "weeklyHours": 35},
                    {"id": "e3", "name": "Chloé Bernard", "weeklyHours": 35},
                ],
                "company": {"openingDays": ["lundi", "mardi", "mercredi", "jeudi", "vendredi"],
                            "minStaffSimultaneously": 2},
                "year": YEAR,
                "week_number": WEEK,
                "check_set": "strict",
            },
        )
        report = result["validation_report"]
        assert isinstance(report, ValidationReport)
        assert report.is_clean

    def test_unknown_action(self, validator):
        with pytest.raises(ValueError, match="does not support"):
            validator.process("optimize", {})


class TestCoerceCheckSet:
    def test_forms(self, engine_config):
        assert coerce_check_set(None, engine_config) is None
        assert coerce_check_set("strict", engine_config).name == "strict"
        check_set = coerce_check_set({"name": "custom", "checks": [{"check_id": "rest_day"}]}, engine_config)
        assert [c.check_id for c in check_set.checks] == ["rest_day"]
        with pytest.raises(KeyError):
            coerce_check_set("lenient", engine_config)
