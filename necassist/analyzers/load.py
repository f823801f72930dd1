"""Load-calculation analyzer: service sizing, continuous loads, GFCI."""

from __future__ import annotations

import logging

from necassist.analyzers.base import AnalysisContext, Analyzer
from necassist.config import CONTINUOUS_LOAD_FACTOR, DEFAULT_LOAD_VOLTAGE, GFCI_LOCATIONS
from necassist.models.analysis import Amperage, Resolution, Severity, Text, Violation
from necassist.models.design import Load
from necassist.models.rule import Operator, RuleCondition
from necassist.rules.conditions import all_conditions_met, condition_values

logger = logging.getLogger(__name__)


def infer_location(load: Load, keywords: list[str]) -> str | None:
    """Return the load's location, falling back to description keywords."""
    if load.location is not None:
        return load.location.value
    description = load.description.lower()
    for keyword in keywords:
        if keyword in description:
            return keyword
    return None


def continuous_amperage(load: Load) -> tuple[float, float]:
    """Return (load amps, required amps at 125%)."""
    amps = load.watts / (load.voltage or DEFAULT_LOAD_VOLTAGE)
    return amps, amps * CONTINUOUS_LOAD_FACTOR


class LoadCalculationAnalyzer(Analyzer):
    """Checks the computed service against the loads it must carry."""

    @property
    def name(self) -> str:
        return "load_calculation"

    def analyze(self, ctx: AnalysisContext) -> list[Violation]:
        violations: list[Violation] = []
        service_violation = self._check_service_size(ctx)
        if service_violation is not None:
            violations.append(service_violation)
        violations.extend(self._check_continuous_loads(ctx))
        violations.extend(self._check_gfci(ctx))
        return violations

    # NEC 220.82
    def _check_service_size(self, ctx: AnalysisContext) -> Violation | None:
        service = ctx.service
        if service.calculated_service_size <= service.service_size:
            return None
        return Violation(
            id="violation_service_size",
            rule_id="nec_220_82",
            section="220.82",
            severity=Severity.CRITICAL,
            title="Service Size Inadequate",
            description=(
                f"Calculated load ({service.calculated_service_size:g}A) exceeds "
                f"service capacity ({service.service_size:g}A)"
            ),
            current_value=Amperage(value=service.service_size),
            required_value=Amperage(value=service.calculated_service_size),
            resolution=Resolution(
                steps=[
                    "Upgrade service panel to higher amperage rating",
                    "Verify utility service capacity",
                    "Update service entrance conductors",
                    "Update meter base if required",
                ],
                alternatives=[
                    "Reduce connected loads",
                    "Implement load management system",
                    "Phase installation over time",
                ],
                estimated_effort="high",
                cost="high",
            ),
            explanation=(
                "The service panel must be sized to handle the calculated electrical "
                "load with appropriate safety margin."
            ),
            why_it_matters="Undersized service can lead to overheating, equipment damage, and fire hazards.",
            common_mistakes=[
                "Not accounting for future load growth",
                "Forgetting motor starting current requirements",
                "Improper application of demand factors",
            ],
            examples=ctx.examples([
                "A 100A service with a 120A calculated load needs a 125A or 150A upgrade.",
            ]),
        )

    # NEC 210.19(A)(1)
    def _check_continuous_loads(self, ctx: AnalysisContext) -> list[Violation]:
        violations: list[Violation] = []
        loads = [*ctx.load_state.evse]
        loads.extend(
            load
            for load in (*ctx.load_state.general, *ctx.load_state.hvac, *ctx.load_state.solar_battery)
            if load.continuous_duty
        )
        for load in loads:
            ctx.check_cancelled()
            amps, required = continuous_amperage(load)
            # Fires for every non-zero continuous load.
            if not (amps > 0 and required > amps):
                continue
            violations.append(
                Violation(
                    id=f"violation_continuous_load_{load.id}",
                    rule_id="nec_210_19_a_1",
                    section="210.19(A)(1)",
                    severity=Severity.MAJOR,
                    title="125% Continuous Load Factor Required",
                    description=f'Load "{load.description}" requires 125% sizing for continuous operation',
                    current_value=Amperage(value=amps),
                    required_value=Amperage(value=required),
                    load=load.id,
                    resolution=Resolution(
                        steps=[
                            "Apply 125% factor to continuous loads",
                            "Size conductors and overcurrent protection accordingly",
                            "Verify terminal temperature ratings",
                        ],
                        alternatives=[
                            "Use load management to avoid continuous operation",
                            "Install timer controls for non-continuous use",
                        ],
                        estimated_effort="medium",
                        cost="medium",
                    ),
                    explanation=(
                        "Continuous loads (operating for 3+ hours) must be calculated at "
                        "125% for conductor and overcurrent protection sizing."
                    ),
                    why_it_matters="Prevents conductor overheating and ensures safe long-term operation.",
                    common_mistakes=[
                        "Forgetting to apply continuous load factor",
                        "Misidentifying continuous vs non-continuous loads",
                    ],
                    examples=ctx.examples([
                        "A 48A EV charger needs a 60A circuit: 48A x 1.25 = 60A.",
                    ]),
                )
            )
        return violations

    # NEC 210.8
    def _check_gfci(self, ctx: AnalysisContext) -> list[Violation]:
        rule = ctx.rule("nec_210_8")
        conditions = list(rule.conditions) if rule is not None else []
        keywords = [str(v).lower() for v in condition_values(conditions, "location")]
        if not keywords:
            keywords = list(GFCI_LOCATIONS)
            conditions = [RuleCondition(field="location", operator=Operator.IN, value=keywords)]

        violations: list[Violation] = []
        for load in ctx.load_state.general:
            ctx.check_cancelled()
            location = infer_location(load, keywords)
            if not all_conditions_met(conditions, {"location": location}):
                continue
            if load.gfci_protected or "gfci" in load.description.lower():
                continue
            logger.debug("Load %s at %s lacks GFCI protection", load.id, location)
            violations.append(
                Violation(
                    id=f"violation_gfci_{load.id}",
                    rule_id="nec_210_8",
                    section="210.8",
                    severity=Severity.CRITICAL,
                    title="GFCI Protection Required",
                    description=f'Load "{load.description}" requires GFCI protection based on location',
                    current_value=Text(value="No GFCI protection specified"),
                    required_value=Text(value="GFCI protection required"),
                    load=load.id,
                    resolution=Resolution(
                        steps=[
                            "Install GFCI circuit breaker",
                            "Use GFCI receptacles",
                            "Verify proper wiring connections",
                            "Test GFCI functionality",
                        ],
                        alternatives=[
                            "Use portable GFCI devices (temporary solution)",
                            "Relocate equipment to non-GFCI area if possible",
                        ],
                        estimated_effort="low",
                        cost="low",
                    ),
                    explanation="GFCI protection is required in wet and damp locations to prevent electrical shock.",
                    why_it_matters="GFCI protection can prevent fatal electrical shock in hazardous locations.",
                    common_mistakes=[
                        "Not identifying all GFCI-required locations",
                        "Using wrong type of GFCI device",
                        "Improper GFCI wiring",
                    ],
                    examples=ctx.examples([
                        "Kitchen countertop receptacles need GFCI protection.",
                    ]),
                )
            )
        return violations
