"""Deterministic fallback schedule generation.

Used when no usable external proposal exists. Trades optimality for
determinism: every employee gets an entry on every weekday.
"""

from __future__ import annotations

from loguru import logger

from weekplan.dates.iso_week import daily_dates, resolve_week
from weekplan.dates.slots import parse_slot, parse_time, parse_valid_slots
from weekplan.models.calendar import Weekday
from weekplan.models.company import CompanyConstraints
from weekplan.models.employee import EmployeeConstraint, ensure_unique_names
from weekplan.models.engine_config import EngineConfig, get_engine_config
from weekplan.models.schedule import Schedule, TimeSlot


class FallbackGenerator:
    """Builds a schedule from opening hours, exceptions and a rest rotation.

    For employee ``i`` on the ``day_index``-th working day, the rotation key
    ``(i + day_index) % rotation_cycle`` gives one rest day per cycle when it
    equals ``rotation_cycle - 1``. Per working day, in priority order:

    0. working day without opening hours -> closed, off for everyone
    1. mandatory rest day -> off
    2. unavailable / sick / vacation exception -> off
    3. reduced exception -> morning slots only
    4. rotation rest day -> off
    5. otherwise the day's opening hours verbatim
    """

    def __init__(
        self,
        employees: list[EmployeeConstraint],
        company: CompanyConstraints,
        config: EngineConfig | None = None,
    ) -> None:
        self.employees = employees
        self.company = company
        self.config = config or get_engine_config()

    def run(self, year: int, week_number: int) -> Schedule:
        cfg = self.config
        ensure_unique_names(self.employees)
        week = resolve_week(year, week_number, cfg)
        dates = daily_dates(week.week_start)
        working_days = self.company.working_days()
        opening = {day: self._opening_slots(day) for day in working_days}
        cutoff = parse_time(cfg.reduced_cutoff)
        rest_key = cfg.rotation_cycle - 1

        schedule = Schedule.empty([e.name for e in self.employees])
        for i, emp in enumerate(self.employees):
            for day_index, day in enumerate(working_days):
                if not opening[day]:
                    continue
                date = dates[day]
                if emp.rest_day == day:
                    logger.debug(f"{emp.name}: rest day {day.value}")
                    continue
                if emp.is_blocked_on(date):
                    logger.debug(f"{emp.name}: blocking exception on {date}")
                    continue
                if emp.is_reduced_on(date):
                    morning = [s for s in opening[day] if s.start < cutoff]
                    schedule.days[day][emp.name] = morning or [parse_slot(cfg.reduced_default_slot)]
                    continue
                if (i + day_index) % cfg.rotation_cycle == rest_key:
                    logger.debug(f"{emp.name}: rotation rest on {day.value}")
                    continue
                schedule.days[day][emp.name] = list(opening[day])

        logger.info(
            f"Fallback schedule for {year}-W{week_number:02d}: "
            f"{len(self.employees)} employee(s), {len(working_days)} working day(s)"
        )
        return schedule

    def _opening_slots(self, day: Weekday) -> list[TimeSlot]:
        tokens = self.company.hours_for(day, self.config.default_opening_hours)
        slots, errors = parse_valid_slots(tokens)
        for err in errors:
            logger.warning(f"Skipping opening hours on {day.value}: {err}")
        return slots


def generate_fallback(
    employees: list[EmployeeConstraint],
    company: CompanyConstraints,
    year: int,
    week_number: int,
    config: EngineConfig | None = None,
) -> Schedule:
    """Generate the deterministic fallback schedule for one ISO week."""
    return FallbackGenerator(employees, company, config).run(year, week_number)
