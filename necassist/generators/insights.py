"""Insight generator — short educational notes tied to the analysis."""

from __future__ import annotations

from typing import Any, Mapping

from necassist.generators.heuristics import Heuristic, select, when
from necassist.models.analysis import Insight


class InsightTemplate(Heuristic):
    insight: Insight


INSIGHT_TEMPLATES: list[InsightTemplate] = [
    InsightTemplate(
        key="gfci_safety",
        conditions=[when("violation_sections", "contains", "210.8")],
        insight=Insight(
            type="warning",
            title="GFCI Protection Critical for Safety",
            content=(
                "GFCI devices can prevent fatal electrical shock by detecting ground "
                "faults and disconnecting power in milliseconds."
            ),
            nec_section="210.8",
            learn_more="Review NEC Article 210.8 for complete GFCI requirements",
        ),
    ),
    InsightTemplate(
        key="future_expansion",
        conditions=[when("include_educational_content", "==", True)],
        insight=Insight(
            type="best_practice",
            title="Plan for Future Expansion",
            content="Reserve 25% of panel spaces and 25% of service capacity for future electrical loads.",
            nec_section="220.87",
            learn_more="Consider future needs when sizing electrical systems",
        ),
    ),
    InsightTemplate(
        key="conductor_sizing",
        insight=Insight(
            type="tip",
            title="Conductor Sizing Factors",
            content=(
                "Apply temperature correction and adjustment factors when sizing "
                "conductors. Standard ampacity tables assume 30°C ambient and no more "
                "than 3 current-carrying conductors."
            ),
            nec_section="310.15(B)",
            learn_more="See NEC Table 310.15(B)(2)(a) for temperature corrections",
        ),
    ),
]


def generate_insights(
    facts: Mapping[str, Any],
    templates: list[InsightTemplate] | None = None,
) -> list[Insight]:
    chosen = select(templates if templates is not None else INSIGHT_TEMPLATES, facts)
    return [template.insight.model_copy() for template in chosen]
