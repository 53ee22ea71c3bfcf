"""Time-slot tokens: parsing, formatting and durations.

Tokens look like ``"08:00-12:30"``: two zero-padded ``HH:MM`` times inside
one day, start strictly before end.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from pydantic import ValidationError

from weekplan.errors import SlotParseError
from weekplan.models.schedule import TimeSlot

_TIME_RE = re.compile(r"([0-9]{2}):([0-9]{2})")
_SLOT_RE = re.compile(r"([0-9]{2}):([0-9]{2})-([0-9]{2}):([0-9]{2})")


def _to_minutes(hh: str, mm: str, token: object) -> int:
    hours, minutes = int(hh), int(mm)
    if hours > 23:
        raise SlotParseError(token, f"hour {hh} out of range 00-23")
    if minutes > 59:
        raise SlotParseError(token, f"minute {mm} out of range 00-59")
    return hours * 60 + minutes


def parse_time(token: str) -> int:
    """Parse ``"HH:MM"`` into minutes since midnight."""
    if not isinstance(token, str):
        raise SlotParseError(token, "not a string")
    m = _TIME_RE.fullmatch(token)
    if m is None:
        raise SlotParseError(token, "expected HH:MM")
    return _to_minutes(m.group(1), m.group(2), token)


def format_time(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def parse_slot(token: str) -> TimeSlot:
    """Parse ``"HH:MM-HH:MM"`` into a ``TimeSlot``.

    Raises:
        SlotParseError: On any deviation from the format, out-of-range
            fields, or when start is not strictly before end.
    """
    if not isinstance(token, str):
        raise SlotParseError(token, "not a string")
    m = _SLOT_RE.fullmatch(token)
    if m is None:
        raise SlotParseError(token, "expected HH:MM-HH:MM")
    start = _to_minutes(m.group(1), m.group(2), token)
    end = _to_minutes(m.group(3), m.group(4), token)
    if start >= end:
        raise SlotParseError(token, "start must be before end")
    try:
        return TimeSlot(start=start, end=end)
    except ValidationError as exc:
        raise SlotParseError(token, str(exc)) from exc


def format_slot(slot: TimeSlot) -> str:
    return f"{format_time(slot.start)}-{format_time(slot.end)}"


def duration_minutes(slot: TimeSlot) -> int:
    return slot.end - slot.start


def total_minutes(slots: Iterable[TimeSlot]) -> int:
    """Sum of slot durations. Overlapping slots are counted twice."""
    return sum(duration_minutes(s) for s in slots)


def slots_overlap(a: TimeSlot, b: TimeSlot) -> bool:
    """True when the two half-open intervals share at least one minute."""
    return a.start < b.end and b.start < a.end


def parse_valid_slots(tokens: Iterable[str]) -> tuple[list[TimeSlot], list[SlotParseError]]:
    """Parse every token, collecting failures instead of stopping at the first."""
    slots: list[TimeSlot] = []
    errors: list[SlotParseError] = []
    for token in tokens:
        try:
            slots.append(parse_slot(token))
        except SlotParseError as exc:
            errors.append(exc)
    return slots, errors
