"""Check configuration models."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from weekplan.models.engine_config import EngineConfig


class ParameterType(str, Enum):
    """Types of check parameters."""

    INT = "int"
    FLOAT = "float"
    BOOL = "bool"


class ParameterDef(BaseModel):
    """Definition of a check parameter."""

    name: str
    display_name: str
    param_type: ParameterType
    default: Any
    min_value: float | None = None
    max_value: float | None = None
    description: str = ""


class CheckConfig(BaseModel):
    """A single check with caller-specified parameters."""

    check_id: str
    enabled: bool = True
    parameters: dict[str, Any] = Field(default_factory=dict)


CORE_CHECK_IDS: tuple[str, ...] = (
    "rest_day",
    "exception_days",
    "min_staffing",
    "contract_hours",
)
STRICT_CHECK_IDS: tuple[str, ...] = (
    "slot_overlap",
    "simultaneous_staffing",
    "daily_hours",
    "opening_hours",
    "lunch_break",
    "daily_rest",
)


class CheckSet(BaseModel):
    """An ordered collection of check configurations."""

    name: str = "default"
    checks: list[CheckConfig] = Field(default_factory=list)

    @classmethod
    def default_set(cls, config: EngineConfig | None = None) -> CheckSet:
        """The four core passes: rest day, exceptions, staffing, contract hours."""
        return cls(name="default", checks=_core_checks(config))

    @classmethod
    def strict_set(cls, config: EngineConfig | None = None) -> CheckSet:
        """Core passes followed by time-window aware checks."""
        checks = _core_checks(config)
        staffing = checks[CORE_CHECK_IDS.index("min_staffing")].parameters
        for cid in STRICT_CHECK_IDS:
            params = dict(staffing) if cid == "simultaneous_staffing" else {}
            checks.append(CheckConfig(check_id=cid, parameters=params))
        return cls(name="strict", checks=checks)

    @classmethod
    def named(cls, name: str, config: EngineConfig | None = None) -> CheckSet:
        if name == "default":
            return cls.default_set(config)
        if name == "strict":
            return cls.strict_set(config)
        raise KeyError(f"Unknown check set: {name}. Available: default, strict")


def _core_checks(config: EngineConfig | None) -> list[CheckConfig]:
    staffing: dict[str, Any] = {}
    hours: dict[str, Any] = {}
    if config is not None:
        staffing = {"default_min_staff": config.default_min_staff}
        hours = {
            "default_weekly_hours": config.default_weekly_hours,
            "tolerance_ratio": config.hours_tolerance,
        }
    return [
        CheckConfig(check_id="rest_day"),
        CheckConfig(check_id="exception_days"),
        CheckConfig(check_id="min_staffing", parameters=staffing),
        CheckConfig(check_id="contract_hours", parameters=hours),
    ]
