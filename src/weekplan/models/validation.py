"""Validation result models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from weekplan.models.calendar import Weekday


class WarningSeverity(str, Enum):
    """Severity of a validation finding.

    Every finding of the engine is soft: it is surfaced to the human
    approver and never blocks schedule creation.
    """

    SOFT = "soft"


class ScheduleWarning(BaseModel):
    """A single advisory finding about a schedule."""

    check_id: str
    message: str
    severity: WarningSeverity = WarningSeverity.SOFT
    employee: str | None = Field(default=None, description="Employee name, if any")
    day: Weekday | None = None
    observed: float | None = None
    required: float | None = None


class CheckResult(BaseModel):
    """Findings of a single check."""

    check_id: str
    check_name: str
    warnings: list[ScheduleWarning] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.warnings


class ValidationReport(BaseModel):
    """Complete validation report for a schedule."""

    warnings: list[ScheduleWarning] = Field(default_factory=list)
    check_results: list[CheckResult] = Field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.warnings

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    def for_check(self, check_id: str) -> list[ScheduleWarning]:
        return [w for w in self.warnings if w.check_id == check_id]
