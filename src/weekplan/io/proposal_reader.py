"""Reading externally produced schedule proposals.

The schedule-generation model answers with JSON shaped
``{"lundi": {"Alice Martin": ["08:00-12:00", ...]}, ...}``, sometimes wrapped
in a markdown code fence. Anything that is not day -> name -> list of
strings is treated as if no proposal had been made.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import Any

from loguru import logger
from pydantic import ValidationError

from weekplan.dates.day_keys import detect_vocabulary, to_canonical
from weekplan.dates.slots import parse_valid_slots
from weekplan.models.calendar import Weekday
from weekplan.models.employee import EmployeeConstraint
from weekplan.models.schedule import Schedule, ScheduleProposal
from weekplan.models.validation import ScheduleWarning

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


def _strip_fences(text: str) -> str:
    return _FENCE_RE.sub("", text).strip()


def _normalize(data: Any) -> Any:
    """Treat null days and null slot lists as empty, leave the rest to validation."""
    if not isinstance(data, Mapping):
        return data
    days: dict[Any, Any] = {}
    for day, employees in data.items():
        if employees is None:
            employees = {}
        if isinstance(employees, Mapping):
            employees = {name: ([] if slots is None else slots) for name, slots in employees.items()}
        days[day] = employees
    return days


def read_proposal(raw: str | bytes | Mapping[str, Any] | ScheduleProposal | None) -> ScheduleProposal | None:
    """Parse a raw proposal, returning ``None`` when it is absent or malformed."""
    if raw is None:
        return None
    if isinstance(raw, ScheduleProposal):
        return raw
    data: Any = raw
    if isinstance(raw, bytes):
        data = raw.decode("utf-8", errors="replace")
    if isinstance(data, str):
        text = _strip_fences(data)
        if not text:
            return None
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning(f"Discarding proposal: invalid JSON ({e.msg} at {e.pos})")
            return None
    if not isinstance(data, Mapping):
        logger.warning(f"Discarding proposal: expected an object, got {type(data).__name__}")
        return None
    try:
        proposal = ScheduleProposal(days=_normalize(data))
    except ValidationError as e:
        logger.warning(f"Discarding proposal: not day -> employee -> slots ({e.error_count()} errors)")
        return None
    vocabulary = detect_vocabulary(list(proposal.days))
    logger.debug(f"Proposal day keys: {vocabulary.value if vocabulary else 'mixed or unknown'}")
    return proposal


def proposal_to_schedule(
    proposal: ScheduleProposal,
    employees: list[EmployeeConstraint],
) -> tuple[Schedule, list[ScheduleWarning]]:
    """Convert a proposal into a ``Schedule`` over the known employees.

    Unknown day keys, unknown employee names and malformed slot tokens are
    reported as warnings and left out of the schedule.
    """
    known = [e.name for e in employees]
    known_set = set(known)
    schedule = Schedule.empty(known)
    warnings: list[ScheduleWarning] = []
    unknown_names: dict[str, None] = {}

    for key, by_employee in proposal.days.items():
        day = to_canonical(key)
        if not isinstance(day, Weekday):
            warnings.append(
                ScheduleWarning(
                    check_id="unknown_day",
                    message=f"Ignoring unknown day key {key!r} in proposal",
                )
            )
            continue
        for name, tokens in by_employee.items():
            if name not in known_set:
                unknown_names.setdefault(name, None)
                continue
            slots, errors = parse_valid_slots(tokens)
            schedule.days[day][name].extend(slots)
            for err in errors:
                warnings.append(
                    ScheduleWarning(
                        check_id="malformed_slot",
                        employee=name,
                        day=day,
                        message=f"{name} on {day.value}: {err}",
                    )
                )

    for name in unknown_names:
        warnings.append(
            ScheduleWarning(
                check_id="unknown_employee",
                employee=name,
                message=f"Ignoring slots for {name!r}, who is not part of the team",
            )
        )
    return schedule, warnings
