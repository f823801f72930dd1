"""System-requirement analyzer: panel space."""

from __future__ import annotations

import math

from necassist.analyzers.base import AnalysisContext, Analyzer
from necassist.config import ASSUMED_PANEL_SPACES, PANEL_FILL_RATIO
from necassist.models.analysis import Resolution, Severity, Text, Violation


def panel_fill_limit(spaces: int = ASSUMED_PANEL_SPACES) -> int:
    """Largest breaker count that stays within the 80% fill guideline."""
    return math.floor(spaces * PANEL_FILL_RATIO)


class SystemRequirementAnalyzer(Analyzer):
    """Design-wide checks that look at the component set as a whole."""

    @property
    def name(self) -> str:
        return "system"

    def analyze(self, ctx: AnalysisContext) -> list[Violation]:
        breakers = sum(1 for c in ctx.components if c.type == "breaker")
        limit = panel_fill_limit()
        if breakers <= limit:
            return []
        return [
            Violation(
                id="violation_panel_fill",
                rule_id="nec_408_35",
                section="408.35",
                severity=Severity.MAJOR,
                title="Panel Space Limitation",
                description=f"Panel approaching capacity ({breakers}/{ASSUMED_PANEL_SPACES} spaces)",
                current_value=Text(value=f"{breakers} circuits"),
                required_value=Text(value=f"Less than {limit} circuits recommended"),
                resolution=Resolution(
                    steps=[
                        "Add subpanel for additional circuits",
                        "Combine compatible loads where permitted",
                        "Use larger panel with more spaces",
                        "Consider future expansion needs",
                    ],
                    alternatives=[
                        "Use tandem breakers where permitted",
                        "Relocate some loads to existing spare capacity",
                    ],
                    estimated_effort="high",
                    cost="medium",
                ),
                explanation="Panels should not be filled to capacity to allow for future expansion.",
                why_it_matters="Overcrowded panels are difficult to work on and limit future additions.",
                common_mistakes=[
                    "Not planning for future expansion",
                    "Using all available spaces initially",
                    "Not considering space requirements for larger breakers",
                ],
            )
        ]
