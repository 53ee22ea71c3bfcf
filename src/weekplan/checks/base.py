"""Check templates and their compiled form."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable

from weekplan.checks.context import ScheduleContext
from weekplan.models.check import ParameterDef
from weekplan.models.validation import ScheduleWarning

# A compiled check: schedule context in, warnings out (empty when it passes)
CheckFunction = Callable[[ScheduleContext], list[ScheduleWarning]]


class CheckTemplate(ABC):
    """One scheduling rule, parameterised and compiled before use.

    Compiling binds the parameters once, so the returned function can be
    run against any number of schedule contexts without re-reading them.
    """

    @property
    @abstractmethod
    def check_id(self) -> str:
        """Stable id used in check sets and in ``ScheduleWarning.check_id``."""

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def category(self) -> str:
        """``core`` (always run) or ``strict`` (opt-in)."""

    @property
    @abstractmethod
    def description(self) -> str: ...

    @property
    def parameters(self) -> list[ParameterDef]:
        return []

    def defaults(self) -> dict[str, Any]:
        """Parameter name -> default value."""
        return {p.name: p.default for p in self.parameters}

    @abstractmethod
    def compile(self, params: dict[str, Any]) -> CheckFunction:
        """Bind ``params`` (every declared parameter present) into a check function."""


@dataclass
class CompiledCheck:
    """A template bound to concrete parameters, ready to run."""

    check_id: str
    name: str
    check_fn: CheckFunction
    parameters: dict[str, Any]

    def __call__(self, ctx: ScheduleContext) -> list[ScheduleWarning]:
        return self.check_fn(ctx)
