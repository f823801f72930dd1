"""Suggestion engine — improvements beyond strict compliance."""

from __future__ import annotations

from typing import Any, Mapping

from necassist.config import SURGE_PROTECTION_THRESHOLD_AMPS
from necassist.generators.heuristics import Heuristic, select, when
from necassist.models.analysis import Implementation, Suggestion


class SuggestionTemplate(Heuristic):
    suggestion: Suggestion
    applicable_components_fact: str | None = None
    """Fact whose value replaces ``applicable_components`` when set."""

    def build(self, facts: Mapping[str, Any]) -> Suggestion:
        if self.applicable_components_fact is None:
            return self.suggestion.model_copy(deep=True)
        return self.suggestion.model_copy(
            update={"applicable_components": tuple(facts.get(self.applicable_components_fact) or ())},
            deep=True,
        )


SUGGESTION_TEMPLATES: list[SuggestionTemplate] = [
    SuggestionTemplate(
        key="surge_protection",
        conditions=[
            when("calculated_service_size", ">=", SURGE_PROTECTION_THRESHOLD_AMPS),
            when("has_surge_protector", "==", False),
        ],
        suggestion=Suggestion(
            id="suggestion_surge_protection",
            type="improvement",
            priority="medium",
            title="Add Surge Protection Device",
            description="Install Type 1 or Type 2 surge protective device for service entrance",
            benefit="Protects entire electrical system from voltage surges",
            implementation=Implementation(
                steps=[
                    "Select appropriate SPD rating",
                    "Install in service panel or adjacent enclosure",
                    "Connect to service grounding electrode",
                    "Add SPD overcurrent protection",
                ],
                requirements=["SPD device", "Mounting space", "Grounding connection"],
                time_estimate="2-3 hours",
                skill_level="intermediate",
            ),
            nec_sections=["230.67", "285.25"],
            related_standards=["UL 1449"],
            applicable_components=["service_panel"],
            conditions=["Service >= 100A", "No existing SPD"],
        ),
    ),
    SuggestionTemplate(
        key="load_management",
        conditions=[when("evse_load_count", ">", 1)],
        applicable_components_fact="evse_load_ids",
        suggestion=Suggestion(
            id="suggestion_load_management",
            type="optimization",
            priority="high",
            title="Implement EVSE Load Management",
            description="Use load management system to optimize multiple EVSE installations",
            benefit="Reduces service size requirements and installation costs",
            implementation=Implementation(
                steps=[
                    "Install load management controller",
                    "Configure EVSE sharing protocols",
                    "Set load priorities and limits",
                    "Test system operation",
                ],
                requirements=["Load management system", "Compatible EVSE units"],
                time_estimate="4-6 hours",
                skill_level="advanced",
            ),
            nec_sections=["625.41", "625.42"],
            related_standards=["UL 2594"],
            conditions=["Multiple EVSE installations", "Service capacity constraints"],
        ),
    ),
    SuggestionTemplate(
        key="energy_monitoring",
        suggestion=Suggestion(
            id="suggestion_energy_monitoring",
            type="best_practice",
            priority="low",
            title="Add Energy Monitoring System",
            description="Install smart meters or monitoring devices for energy usage tracking",
            benefit="Enables energy management and cost optimization",
            implementation=Implementation(
                steps=[
                    "Select monitoring system",
                    "Install current transformers",
                    "Configure data collection",
                    "Set up user interface",
                ],
                requirements=["Monitoring hardware", "Network connectivity"],
                time_estimate="3-4 hours",
                skill_level="intermediate",
            ),
            nec_sections=["230.82"],
            related_standards=["IEEE 1547"],
            applicable_components=["service_panel"],
            conditions=["Smart home integration desired"],
        ),
    ),
    SuggestionTemplate(
        key="continuous_load_training",
        conditions=[
            when("experience_level", "in", ["student", "apprentice"]),
            when("violation_rule_ids", "contains", "nec_210_19_a_1"),
        ],
        suggestion=Suggestion(
            id="suggestion_continuous_load_training",
            type="education",
            priority="medium",
            title="Review Continuous Load Sizing",
            description="Work through the 125% continuous load rule using the flagged EVSE circuits",
            benefit="Avoids the most common conductor and breaker sizing error on EV charger installs",
            implementation=Implementation(
                steps=[
                    "Identify loads that run three hours or more",
                    "Compute load current from watts and voltage",
                    "Multiply by 1.25 and pick the next standard breaker size",
                    "Select a conductor whose ampacity meets the breaker rating",
                ],
                requirements=["NEC Article 210", "NEC Article 625"],
                time_estimate="30 minutes",
                skill_level="basic",
            ),
            nec_sections=["210.19(A)(1)", "210.20(A)", "625.41"],
            conditions=["Continuous load violation present", "Student or apprentice user"],
        ),
    ),
]


def generate_suggestions(
    facts: Mapping[str, Any],
    templates: list[SuggestionTemplate] | None = None,
) -> list[Suggestion]:
    """Build suggestions for every applicable template.

    Returns an empty list when recommendations are switched off.
    """
    if not facts.get("include_recommendations", True):
        return []
    chosen = select(templates if templates is not None else SUGGESTION_TEMPLATES, facts)
    return [template.build(facts) for template in chosen]
