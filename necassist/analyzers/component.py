"""Component analyzer: interrupting ratings, equipment grounding, EVSE enclosures."""

from __future__ import annotations

from necassist.analyzers.base import AnalysisContext, Analyzer
from necassist.config import SHORT_CIRCUIT_RATING_THRESHOLD_AMPS
from necassist.models.analysis import Resolution, Severity, Text, Violation
from necassist.models.design import Component


def _coordinate(component: Component) -> tuple[float, float] | None:
    if component.position is None:
        return None
    return (component.position.x, component.position.y)


def _display_name(component: Component) -> str:
    return component.label or component.id


class ComponentAnalyzer(Analyzer):
    """Checks each diagram component against its equipment rules."""

    @property
    def name(self) -> str:
        return "component"

    def analyze(self, ctx: AnalysisContext) -> list[Violation]:
        violations: list[Violation] = []
        for component in ctx.components:
            ctx.check_cancelled()
            if (
                component.amperage > SHORT_CIRCUIT_RATING_THRESHOLD_AMPS
                and not component.specifications.short_circuit_rating
            ):
                violations.append(self._short_circuit_violation(ctx, component))
            if not component.has_ground_terminal() and component.category != "control":
                violations.append(self._grounding_violation(ctx, component))
            if component.type == "evse" and "3" not in (component.specifications.enclosure_type or ""):
                violations.append(self._enclosure_violation(ctx, component))
        return violations

    # NEC 110.9
    def _short_circuit_violation(self, ctx: AnalysisContext, component: Component) -> Violation:
        return Violation(
            id=f"violation_short_circuit_{component.id}",
            rule_id="nec_110_9",
            section="110.9",
            severity=Severity.MAJOR,
            title="Short Circuit Rating Required",
            description=f'Component "{_display_name(component)}" requires short circuit current rating',
            current_value=Text(value="No rating specified"),
            required_value=Text(value="Short circuit rating required"),
            component=component.id,
            coordinate=_coordinate(component),
            resolution=Resolution(
                steps=[
                    "Obtain available fault current from utility",
                    "Calculate fault current at component location",
                    "Verify component short circuit rating meets or exceeds calculated value",
                    "Use series rating if applicable",
                ],
                alternatives=[
                    "Use current limiting devices",
                    "Install fault current limiters",
                    "Relocate to lower fault current location",
                ],
                estimated_effort="medium",
                cost="medium",
            ),
            explanation="Equipment must be rated to safely interrupt available fault current.",
            why_it_matters="Inadequate ratings can result in equipment explosion and fire.",
            common_mistakes=[
                "Not obtaining utility fault current data",
                "Ignoring series rating opportunities",
                "Using inadequately rated equipment",
            ],
            examples=ctx.examples(["A 200A main panel fed from a 22kA utility transformer needs 22kA SCCR."]),
        )

    # NEC 250.118
    def _grounding_violation(self, ctx: AnalysisContext, component: Component) -> Violation:
        return Violation(
            id=f"violation_grounding_{component.id}",
            rule_id="nec_250_118",
            section="250.118",
            severity=Severity.CRITICAL,
            title="Equipment Grounding Required",
            description=f'Component "{_display_name(component)}" missing equipment grounding connection',
            current_value=Text(value="No grounding terminal"),
            required_value=Text(value="Equipment grounding conductor required"),
            component=component.id,
            coordinate=_coordinate(component),
            resolution=Resolution(
                steps=[
                    "Add equipment grounding conductor",
                    "Connect to equipment grounding terminal",
                    "Verify grounding electrode system",
                    "Test grounding continuity",
                ],
                alternatives=[
                    "Use self-grounding devices where permitted",
                    "Install GFCI protection in lieu of grounding (limited applications)",
                ],
                estimated_effort="medium",
                cost="low",
            ),
            explanation="Equipment grounding provides safety path for fault current and voltage stabilization.",
            why_it_matters="Proper grounding prevents shock hazards and ensures protective device operation.",
            common_mistakes=[
                "Omitting equipment grounding conductor",
                "Using inadequate grounding methods",
                "Not maintaining grounding continuity",
            ],
        )

    # NEC 625.22
    def _enclosure_violation(self, ctx: AnalysisContext, component: Component) -> Violation:
        return Violation(
            id=f"violation_evse_enclosure_{component.id}",
            rule_id="nec_625_22",
            section="625.22",
            severity=Severity.MAJOR,
            title="EVSE Enclosure Rating",
            description=f'EVSE "{_display_name(component)}" requires weather-resistant enclosure',
            current_value=Text(value=component.specifications.enclosure_type or "Not specified"),
            required_value=Text(value="NEMA 3R or better for outdoor use"),
            component=component.id,
            coordinate=_coordinate(component),
            resolution=Resolution(
                steps=[
                    "Specify appropriate NEMA-rated enclosure",
                    "Verify environmental conditions",
                    "Install proper mounting hardware",
                    "Ensure proper drainage",
                ],
                alternatives=[
                    "Install in covered area with NEMA 1 enclosure",
                    "Use weatherproof cover for existing enclosure",
                ],
                estimated_effort="low",
                cost="low",
            ),
            explanation="EVSE equipment exposed to weather requires appropriate protection.",
            why_it_matters="Inadequate protection can lead to equipment failure and safety hazards.",
            common_mistakes=[
                "Using indoor-rated equipment outdoors",
                "Inadequate mounting or drainage",
                "Not considering environmental conditions",
            ],
            examples=ctx.examples(["A NEMA 3R enclosure meets the outdoor rating for a driveway charger."]),
        )
