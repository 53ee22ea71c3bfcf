"""Engine configuration."""

from __future__ import annotations

import re
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from weekplan.models.company import DEFAULT_OPENING_HOURS

_HHMM = re.compile(r"([01][0-9]|2[0-3]):[0-5][0-9]")


class EngineConfig(BaseSettings):
    """Tunable numbers of the engine, overridable with ``WEEKPLAN_*`` variables."""

    model_config = SettingsConfigDict(env_prefix="WEEKPLAN_", extra="ignore")

    default_weekly_hours: float = Field(default=35.0, ge=10, le=60)
    hours_tolerance: float = Field(
        default=0.10, ge=0.0, le=1.0, description="Accepted deviation, ratio of contract hours"
    )
    default_min_staff: int = Field(default=1, ge=1)
    rotation_cycle: int = Field(
        default=5, ge=2, description="Working days per rotation cycle; the last one is rest"
    )
    reduced_cutoff: str = Field(
        default="10:00", description="Reduced days keep only slots starting before this time"
    )
    reduced_default_slot: str = "08:00-12:00"
    default_opening_hours: list[str] = Field(default_factory=lambda: list(DEFAULT_OPENING_HOURS))
    min_year: int = 2020
    max_year: int = 2030
    check_set: str = Field(default="default", description="'default' or 'strict'")

    @field_validator("reduced_cutoff")
    @classmethod
    def _validate_cutoff(cls, value: str) -> str:
        if not _HHMM.fullmatch(value):
            raise ValueError(f"reduced_cutoff must be HH:MM, got {value!r}")
        return value


@lru_cache(maxsize=1)
def get_engine_config() -> EngineConfig:
    """Process-wide configuration read from the environment once."""
    return EngineConfig()
