"""Tests for the check registry and check sets."""

from __future__ import annotations

import pytest

from weekplan.checks.context import ScheduleContext
from weekplan.checks.core_checks import RestDayCheck
from weekplan.checks.registry import CheckRegistry, get_registry
from weekplan.dates.iso_week import resolve_week
from weekplan.models.check import CORE_CHECK_IDS, STRICT_CHECK_IDS, CheckConfig, CheckSet
from weekplan.models.engine_config import EngineConfig
from weekplan.models.schedule import Schedule


class TestCheckRegistry:
    def test_all_checks_registered(self):
        ids = [t.check_id for t in get_registry().list_all()]
        assert ids == list(CORE_CHECK_IDS) + list(STRICT_CHECK_IDS)

    def test_categories(self):
        registry = get_registry()
        assert [t.check_id for t in registry.list_by_category("core")] == list(CORE_CHECK_IDS)
        assert [t.check_id for t in registry.list_by_category("strict")] == list(STRICT_CHECK_IDS)

    def test_unknown_check(self):
        with pytest.raises(KeyError, match="Unknown check"):
            get_registry().get("no_such_check")

    def test_categories_keep_registration_order(self):
        grouped = get_registry().categories()
        assert list(grouped) == ["core", "strict"]
        assert [t.check_id for t in grouped["strict"]] == list(STRICT_CHECK_IDS)
        assert get_registry().list_by_category("experimental") == []

    def test_duplicate_registration_rejected(self):
        registry = CheckRegistry()
        registry.register(RestDayCheck())
        with pytest.raises(ValueError, match="already registered"):
            registry.register(RestDayCheck())

    def test_unknown_parameter_rejected(self):
        with pytest.raises(KeyError, match="tolerance"):
            get_registry().compile_config(
                CheckConfig(check_id="rest_day", parameters={"tolerance": 1})
            )

    def test_compiled_check_is_callable(self, team, weekday_company):
        compiled = get_registry().compile_config(CheckConfig(check_id="min_staffing"))
        schedule = Schedule.empty([e.name for e in team])
        ctx = ScheduleContext(schedule, team, weekday_company, resolve_week(2024, 10))
        assert len(compiled(ctx)) == 5

    def test_compile_merges_defaults(self):
        compiled = get_registry().compile_config(
            CheckConfig(check_id="contract_hours", parameters={"tolerance_ratio": 0.2})
        )
        assert compiled.parameters == {"default_weekly_hours": 35.0, "tolerance_ratio": 0.2}

    def test_disabled_checks_skipped(self):
        check_set = CheckSet.default_set()
        check_set.checks[0].enabled = False
        compiled = get_registry().compile_set(check_set)
        assert [c.check_id for c in compiled] == list(CORE_CHECK_IDS[1:])


class TestCheckSet:
    def test_default_set_is_core_only(self):
        assert [c.check_id for c in CheckSet.default_set().checks] == list(CORE_CHECK_IDS)

    def test_strict_set_extends_core(self):
        ids = [c.check_id for c in CheckSet.strict_set().checks]
        assert ids == list(CORE_CHECK_IDS) + list(STRICT_CHECK_IDS)

    def test_config_feeds_parameters(self):
        config = EngineConfig(default_min_staff=2, hours_tolerance=0.05, default_weekly_hours=39)
        checks = {c.check_id: c for c in CheckSet.strict_set(config).checks}
        assert checks["min_staffing"].parameters == {"default_min_staff": 2}
        assert checks["simultaneous_staffing"].parameters == {"default_min_staff": 2}
        assert checks["contract_hours"].parameters == {
            "default_weekly_hours": 39,
            "tolerance_ratio": 0.05,
        }

    def test_named(self):
        assert CheckSet.named("strict").name == "strict"
        with pytest.raises(KeyError):
            CheckSet.named("lenient")
