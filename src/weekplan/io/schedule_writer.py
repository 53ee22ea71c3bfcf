"""Serializing schedules back to slot tokens."""

from __future__ import annotations

from weekplan.dates.day_keys import DayVocabulary, from_canonical
from weekplan.dates.slots import format_slot, total_minutes
from weekplan.models.calendar import WEEKDAYS
from weekplan.models.schedule import Schedule


def schedule_to_tokens(
    schedule: Schedule,
    vocabulary: DayVocabulary = DayVocabulary.ENGLISH,
) -> dict[str, dict[str, list[str]]]:
    """Day -> employee name -> ``"HH:MM-HH:MM"`` tokens, days in weekday order."""
    result: dict[str, dict[str, list[str]]] = {}
    for day in WEEKDAYS:
        by_employee = schedule.days.get(day, {})
        result[from_canonical(day, vocabulary)] = {
            name: [format_slot(s) for s in slots] for name, slots in by_employee.items()
        }
    return result


def employee_week_view(
    schedule: Schedule,
    employee: str,
    vocabulary: DayVocabulary = DayVocabulary.ENGLISH,
) -> dict[str, list[str]]:
    """One employee's week as day -> tokens, the per-employee document shape."""
    return {
        from_canonical(day, vocabulary): [format_slot(s) for s in slots]
        for day, slots in schedule.week_of(employee).items()
    }


def weekly_minutes(schedule: Schedule) -> dict[str, int]:
    """Total scheduled minutes per employee."""
    return {
        name: sum(total_minutes(slots) for slots in schedule.week_of(name).values())
        for name in schedule.employee_names()
    }
