"""Heuristic base and the fact map the advisory generators evaluate.

Suggestions, insights and quick fixes are declared as data: each
template carries a list of :class:`RuleCondition` checked by the same
evaluator used for code rules, against the flat facts built here.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from necassist.analyzers.base import AnalysisContext
from necassist.models.analysis import Violation
from necassist.models.rule import Operator, RuleCondition
from necassist.rules.conditions import all_conditions_met


class Heuristic(BaseModel):
    """A named, condition-gated advisory template."""

    model_config = ConfigDict(frozen=True)

    key: str
    conditions: list[RuleCondition] = Field(default_factory=list)

    def applies(self, facts: Mapping[str, Any]) -> bool:
        return all_conditions_met(self.conditions, facts)


H = TypeVar("H", bound=Heuristic)


def select(templates: Iterable[H], facts: Mapping[str, Any]) -> list[H]:
    """Return the templates whose conditions hold, in declaration order."""
    return [t for t in templates if t.applies(facts)]


def when(field: str, operator: str, value: Any = None) -> RuleCondition:
    """Shorthand for declaring a template condition."""
    return RuleCondition(field=field, operator=Operator(operator), value=value)


def build_facts(ctx: AnalysisContext, violations: Sequence[Violation]) -> dict[str, Any]:
    """Flatten the design snapshot, config and violations into facts."""
    config = ctx.config
    component_types = sorted({c.type for c in ctx.components})
    return {
        "service_size": ctx.service.service_size,
        "calculated_service_size": ctx.service.calculated_service_size,
        "component_types": component_types,
        "has_surge_protector": "surge_protector" in component_types,
        "breaker_count": sum(1 for c in ctx.components if c.type == "breaker"),
        "evse_load_count": len(ctx.load_state.evse),
        "evse_load_ids": [load.id for load in ctx.load_state.evse],
        "violation_count": len(violations),
        "violation_rule_ids": sorted({v.rule_id for v in violations}),
        "violation_sections": sorted({v.section for v in violations}),
        "nec_version": config.nec_version,
        "experience_level": config.experience_level.value,
        "focus_areas": [area.value for area in config.focus_areas],
        "include_recommendations": config.include_recommendations,
        "include_educational_content": config.include_educational_content,
    }
