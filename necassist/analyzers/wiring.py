"""Wiring analyzer: conductor ampacity and voltage drop."""

from __future__ import annotations

import logging

from necassist.analyzers.base import AnalysisContext, Analyzer
from necassist.config import (
    CONTINUOUS_LOAD_FACTOR,
    MAX_BRANCH_VOLTAGE_DROP,
    MAX_COMBINED_VOLTAGE_DROP,
    VOLTAGE_DROP_ASSUMED_CURRENT,
    VOLTAGE_DROP_ASSUMED_VOLTAGE,
)
from necassist.models.analysis import Amperage, Percentage, Resolution, Severity, Violation
from necassist.models.design import Component, Conductor, Connection
from necassist.tables import get_ampacity, get_resistance, next_size_for

logger = logging.getLogger(__name__)


def is_continuous(component: Component) -> bool:
    """EVSE, flagged components, and (legacy) labels mentioning 'continuous'."""
    return (
        component.type == "evse"
        or component.continuous_duty
        or "continuous" in component.label.lower()
    )


def required_ampacity(connection: Connection, components_by_id: dict[str, Component]) -> float:
    """Ampacity the destination component needs, 0 if it is not on the diagram."""
    destination = components_by_id.get(connection.to_component)
    if destination is None:
        return 0.0
    factor = CONTINUOUS_LOAD_FACTOR if is_continuous(destination) else 1.0
    return destination.amperage * factor


def voltage_drop(conductor: Conductor) -> float:
    """Fractional voltage drop at the assumed 20 A / 240 V operating point.

    drop = (2 * R_per_kft * length_ft * I) / 1000 / V

    A conductor with no run length has no drop.
    """
    resistance = get_resistance(conductor.size, conductor.material)
    length = conductor.length_ft or 0.0
    volts_dropped = (2 * resistance * length * VOLTAGE_DROP_ASSUMED_CURRENT) / 1000
    return volts_dropped / VOLTAGE_DROP_ASSUMED_VOLTAGE


class WiringAnalyzer(Analyzer):
    """Checks every connection's conductor against the load it feeds."""

    @property
    def name(self) -> str:
        return "wiring"

    def analyze(self, ctx: AnalysisContext) -> list[Violation]:
        violations: list[Violation] = []
        for connection in ctx.connections:
            ctx.check_cancelled()
            conductor = connection.conductor
            ampacity = get_ampacity(conductor.size, conductor.material)
            required = required_ampacity(connection, ctx.components_by_id)
            if ampacity < required:
                violations.append(self._undersized_violation(ctx, connection, ampacity, required))

            if conductor.length_ft:
                drop = voltage_drop(conductor)
                limit = MAX_BRANCH_VOLTAGE_DROP if connection.type == "power" else MAX_COMBINED_VOLTAGE_DROP
                if drop > limit:
                    violations.append(self._voltage_drop_violation(ctx, connection, drop, limit))
        return violations

    # NEC 310.15(B)(16)
    def _undersized_violation(
        self,
        ctx: AnalysisContext,
        connection: Connection,
        ampacity: float,
        required: float,
    ) -> Violation:
        conductor = connection.conductor
        logger.debug(
            "Connection %s: %s %s carries %.1fA, needs %.1fA",
            connection.id, conductor.size, conductor.material, ampacity, required,
        )
        steps = [
            "Calculate actual load current",
            "Apply temperature and bundling corrections",
            "Select conductor with adequate ampacity",
            "Verify voltage drop requirements",
        ]
        minimum = next_size_for(required, conductor.material)
        if minimum is not None:
            steps.insert(2, f"Use {minimum} {conductor.material} or larger")
        return Violation(
            id=f"violation_conductor_size_{connection.id}",
            rule_id="nec_310_15",
            section="310.15(B)(16)",
            severity=Severity.CRITICAL,
            title="Conductor Undersized",
            description=f'Conductor "{conductor.size}" insufficient for {required:g}A load',
            current_value=Amperage(value=ampacity),
            required_value=Amperage(value=required),
            component=connection.to_component or None,
            circuit=connection.id,
            resolution=Resolution(
                steps=steps,
                alternatives=[
                    "Reduce load current",
                    "Improve installation conditions",
                    "Use multiple parallel conductors",
                ],
                estimated_effort="high",
                cost="medium",
            ),
            explanation="Conductors must be sized to carry load current safely without overheating.",
            why_it_matters="Undersized conductors can overheat, causing fires and equipment damage.",
            common_mistakes=[
                "Not applying correction factors",
                "Using nominal vs. actual ampacities",
                "Ignoring terminal temperature limitations",
            ],
            examples=ctx.examples(["A 48A EVSE needs 60A of ampacity: 6 AWG copper (65A) qualifies."]),
        )

    # NEC 210.19(A)(1) informational note
    def _voltage_drop_violation(
        self,
        ctx: AnalysisContext,
        connection: Connection,
        drop: float,
        limit: float,
    ) -> Violation:
        return Violation(
            id=f"violation_voltage_drop_{connection.id}",
            rule_id="nec_210_19_fpn",
            section="210.19(A)(1) FPN",
            severity=Severity.MINOR,
            title="Excessive Voltage Drop",
            description=f"{drop * 100:.1f}% voltage drop exceeds recommended limits",
            current_value=Percentage(value=drop * 100),
            required_value=Percentage(value=limit * 100),
            component=connection.to_component or None,
            circuit=connection.id,
            resolution=Resolution(
                steps=[
                    "Increase conductor size",
                    "Reduce circuit length",
                    "Verify actual load current",
                    "Consider voltage drop at full load",
                ],
                alternatives=[
                    "Install closer distribution panel",
                    "Use higher voltage circuit",
                    "Reduce connected load",
                ],
                estimated_effort="medium",
                cost="medium",
            ),
            explanation="Excessive voltage drop reduces equipment efficiency and can cause malfunction.",
            why_it_matters="Proper voltage levels ensure equipment operates as designed.",
            common_mistakes=[
                "Not calculating voltage drop",
                "Using improper resistance values",
                "Ignoring actual operating conditions",
            ],
        )
