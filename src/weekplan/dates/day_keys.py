"""Day-name vocabularies and the canonical weekday mapping.

Upstream collaborators (the schedule-generation model, stored documents)
spell days in French; the API surface and ``Weekday`` use ISO English
names. Both vocabularies are total over the seven weekdays.
"""

from __future__ import annotations

from enum import Enum

from weekplan.models.calendar import Weekday


class DayVocabulary(str, Enum):
    """Supported day-naming vocabularies."""

    ENGLISH = "english"
    FRENCH = "french"


_DAY_NAMES: dict[DayVocabulary, dict[Weekday, str]] = {
    DayVocabulary.ENGLISH: {day: day.value for day in Weekday},
    DayVocabulary.FRENCH: {
        Weekday.MONDAY: "lundi",
        Weekday.TUESDAY: "mardi",
        Weekday.WEDNESDAY: "mercredi",
        Weekday.THURSDAY: "jeudi",
        Weekday.FRIDAY: "vendredi",
        Weekday.SATURDAY: "samedi",
        Weekday.SUNDAY: "dimanche",
    },
}

# Reverse lookup across every vocabulary
_TO_CANONICAL: dict[str, Weekday] = {
    name: day for names in _DAY_NAMES.values() for day, name in names.items()
}


def to_canonical(key: str | Weekday) -> Weekday | str:
    """Map a day key from any vocabulary to its ``Weekday``.

    Unknown keys are returned unchanged so that partially migrated callers
    keep working; callers decide whether a leftover string is an error.
    """
    if isinstance(key, Weekday):
        return key
    if not isinstance(key, str):
        return key
    return _TO_CANONICAL.get(key.strip().lower(), key)


def from_canonical(day: Weekday, vocabulary: DayVocabulary = DayVocabulary.ENGLISH) -> str:
    """Spell ``day`` in the requested vocabulary."""
    return _DAY_NAMES[DayVocabulary(vocabulary)][Weekday(day)]


def vocabulary_keys(vocabulary: DayVocabulary) -> list[str]:
    """All day keys of a vocabulary in weekday order."""
    names = _DAY_NAMES[DayVocabulary(vocabulary)]
    return [names[day] for day in Weekday]


def detect_vocabulary(keys: list[str]) -> DayVocabulary | None:
    """Return the vocabulary every key belongs to, if there is exactly one."""
    for vocabulary, names in _DAY_NAMES.items():
        spelled = set(names.values())
        if keys and all(k.strip().lower() in spelled for k in keys):
            return vocabulary
    return None
