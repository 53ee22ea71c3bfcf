"""ISO-8601 week resolution.

Week 1 is the week containing January 4th and every week starts on a
Monday, so week 1 may begin in the previous calendar year and week 52/53
may end in the next one.
"""

from __future__ import annotations

from datetime import date, timedelta

from weekplan.errors import InvalidWeekError
from weekplan.models.calendar import WEEKDAYS, Weekday, WeekRange
from weekplan.models.engine_config import EngineConfig, get_engine_config


def resolve_week(year: int, week_number: int, config: EngineConfig | None = None) -> WeekRange:
    """Monday and Sunday of ISO week ``week_number`` of ``year``.

    Week 53 of a year with only 52 ISO weeks is the Monday after week 52,
    i.e. the first week of the next ISO year.

    Raises:
        InvalidWeekError: If the week number is outside 1-53 or the year is
            outside the supported range.
    """
    cfg = config or get_engine_config()
    if isinstance(year, bool) or not isinstance(year, int):
        raise InvalidWeekError(year, week_number, "year must be an integer")
    if isinstance(week_number, bool) or not isinstance(week_number, int):
        raise InvalidWeekError(year, week_number, "week number must be an integer")
    if not cfg.min_year <= year <= cfg.max_year:
        raise InvalidWeekError(
            year, week_number, f"year must be within {cfg.min_year}-{cfg.max_year}"
        )
    if not 1 <= week_number <= 53:
        raise InvalidWeekError(year, week_number, "week number must be within 1-53")
    week_start = date.fromisocalendar(year, 1, 1) + timedelta(weeks=week_number - 1)
    return WeekRange(
        year=year,
        week_number=week_number,
        week_start=week_start,
        week_end=week_start + timedelta(days=6),
    )


def daily_dates(week_start: date) -> dict[Weekday, date]:
    """The seven consecutive dates starting at ``week_start``."""
    return {day: week_start + timedelta(days=day.ordinal) for day in WEEKDAYS}


def weekday_of(day: date) -> Weekday:
    return Weekday.from_ordinal(day.weekday())


def iso_weeks_in_year(year: int) -> int:
    """52 or 53. December 28th always falls in the last ISO week."""
    return date(year, 12, 28).isocalendar()[1]
