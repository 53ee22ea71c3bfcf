"""Check registry: lookup, grouping and compilation of check templates."""

from __future__ import annotations

from weekplan.checks.base import CheckTemplate, CompiledCheck
from weekplan.models.check import CheckConfig, CheckSet


class CheckRegistry:
    """All known check templates, in registration order.

    Registration order is the order checks are listed and grouped in, so
    core passes registered first are also reported first.
    """

    def __init__(self) -> None:
        self._templates: dict[str, CheckTemplate] = {}

    def register(self, template: CheckTemplate) -> None:
        if template.check_id in self._templates:
            raise ValueError(f"Check already registered: {template.check_id}")
        self._templates[template.check_id] = template

    def get(self, check_id: str) -> CheckTemplate:
        try:
            return self._templates[check_id]
        except KeyError:
            available = ", ".join(sorted(self._templates))
            raise KeyError(f"Unknown check: {check_id}. Available: {available}") from None

    def list_all(self) -> list[CheckTemplate]:
        return list(self._templates.values())

    def list_by_category(self, category: str) -> list[CheckTemplate]:
        return self.categories().get(category, [])

    def categories(self) -> dict[str, list[CheckTemplate]]:
        """Templates grouped by category ("core", "strict")."""
        grouped: dict[str, list[CheckTemplate]] = {}
        for template in self._templates.values():
            grouped.setdefault(template.category, []).append(template)
        return grouped

    def compile_config(self, config: CheckConfig) -> CompiledCheck:
        """Compile one configured check; parameters not given fall back to defaults.

        Raises:
            KeyError: For an unknown check id or a parameter the check does
                not declare.
        """
        template = self.get(config.check_id)
        params = template.defaults()
        unknown = sorted(set(config.parameters) - set(params))
        if unknown:
            raise KeyError(
                f"Unknown parameter(s) for {config.check_id}: {', '.join(unknown)}. "
                f"Accepted: {', '.join(params) or 'none'}"
            )
        params.update(config.parameters)
        return CompiledCheck(
            check_id=config.check_id,
            name=template.name,
            check_fn=template.compile(params),
            parameters=params,
        )

    def compile_set(self, check_set: CheckSet) -> list[CompiledCheck]:
        """Compile the enabled checks of ``check_set``, keeping its order."""
        return [self.compile_config(c) for c in check_set.checks if c.enabled]


_global_registry: CheckRegistry | None = None


def get_registry() -> CheckRegistry:
    """Process-wide registry with every built-in check, created on first use."""
    global _global_registry
    if _global_registry is None:
        _global_registry = _create_default_registry()
    return _global_registry


def _create_default_registry() -> CheckRegistry:
    from weekplan.checks.core_checks import (
        ContractHoursCheck,
        ExceptionDayCheck,
        MinStaffingCheck,
        RestDayCheck,
    )
    from weekplan.checks.strict_checks import (
        DailyHoursCheck,
        DailyRestCheck,
        LunchBreakCheck,
        OpeningHoursCheck,
        SimultaneousStaffingCheck,
        SlotOverlapCheck,
    )

    registry = CheckRegistry()
    for template_cls in [
        # Core passes, always run
        RestDayCheck,
        ExceptionDayCheck,
        MinStaffingCheck,
        ContractHoursCheck,
        # Opt-in through the "strict" check set
        SlotOverlapCheck,
        SimultaneousStaffingCheck,
        DailyHoursCheck,
        OpeningHoursCheck,
        LunchBreakCheck,
        DailyRestCheck,
    ]:
        registry.register(template_cls())
    return registry
