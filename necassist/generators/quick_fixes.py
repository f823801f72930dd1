"""Quick-fix generator — one-step remedies keyed on violated rules."""

from __future__ import annotations

from typing import Any, Mapping

from necassist.generators.heuristics import Heuristic, select, when
from necassist.models.analysis import QuickFix


class QuickFixTemplate(Heuristic):
    quick_fix: QuickFix


def _for_rule(rule_id: str, **fields: Any) -> QuickFixTemplate:
    return QuickFixTemplate(
        key=rule_id,
        conditions=[when("violation_rule_ids", "contains", rule_id)],
        quick_fix=QuickFix(rule_id=rule_id, **fields),
    )


QUICK_FIX_TEMPLATES: list[QuickFixTemplate] = [
    _for_rule(
        "nec_210_8",
        description="Add GFCI Protection",
        action="Install GFCI circuit breaker or GFCI receptacle",
        impact="Eliminates critical safety violation",
        difficulty="easy",
    ),
    _for_rule(
        "nec_310_15",
        description="Upsize Conductors",
        action="Specify next larger conductor size",
        impact="Ensures adequate ampacity and safety",
        difficulty="moderate",
    ),
    _for_rule(
        "nec_250_118",
        description="Add Equipment Grounding Conductor",
        action="Add a ground terminal and run an EGC with the circuit conductors",
        impact="Restores a fault-current path to trip the protective device",
        difficulty="easy",
    ),
    _for_rule(
        "nec_625_22",
        description="Specify Outdoor-Rated EVSE Enclosure",
        action="Set the EVSE enclosure type to NEMA 3R or better",
        impact="Clears the EVSE weather-protection violation",
        difficulty="easy",
    ),
]


def generate_quick_fixes(
    facts: Mapping[str, Any],
    templates: list[QuickFixTemplate] | None = None,
) -> list[QuickFix]:
    chosen = select(templates if templates is not None else QUICK_FIX_TEMPLATES, facts)
    return [template.quick_fix.model_copy() for template in chosen]
