"""Built-in NEC rule dataset loaded by the rule repository."""

from __future__ import annotations

from necassist.config import GFCI_LOCATIONS
from necassist.models.rule import (
    Applicability,
    CodeRule,
    Operator,
    RuleCategory,
    RuleCondition,
    RuleRequirement,
    RuleSeverity,
    RuleVersion,
)

SEED_RULES: list[CodeRule] = [
    CodeRule(
        id="nec_210_8",
        section="210.8",
        title="Ground-Fault Circuit-Interrupter Protection for Personnel",
        description="GFCI protection requirements for bathrooms, kitchens, garages and other wet or damp locations",
        category=RuleCategory.SAFETY,
        severity=RuleSeverity.MANDATORY,
        applicability=Applicability.ALL,
        versions=[
            RuleVersion(
                year="2020",
                text="Ground-fault circuit-interrupter protection for personnel shall be provided as required in 210.8(A) through (F).",
                changes="Extended dwelling requirements to all 125-250 V receptacles.",
            ),
            RuleVersion(
                year="2023",
                text="Ground-fault circuit-interrupter protection for personnel shall be provided as required in 210.8(A) through (F).",
            ),
        ],
        conditions=[
            RuleCondition(field="location", operator=Operator.IN, value=list(GFCI_LOCATIONS)),
        ],
        requirements=[
            RuleRequirement(description="Install GFCI protection for receptacles in specified locations"),
        ],
        related_sections=["215.9", "590.6"],
        references=["UL 943", "UL 1053"],
    ),
    CodeRule(
        id="nec_220_82",
        section="220.82",
        title="Optional Calculation for One-Family Dwellings",
        description="Simplified method for calculating dwelling unit service loads",
        category=RuleCategory.CALCULATION,
        applicability=Applicability.RESIDENTIAL,
        versions=[
            RuleVersion(
                year="2023",
                text="This section provides an optional calculation method for one-family dwellings.",
            ),
        ],
        conditions=[
            RuleCondition(field="application", operator=Operator.EQ, value="residential"),
        ],
        requirements=[
            RuleRequirement(
                description="First 10 kVA at 100%, remainder at 40%",
                formula="(first_10kva * 1.0) + (remaining_kva * 0.4)",
                parameters=["first_10kva", "remaining_kva"],
            ),
            RuleRequirement(description="Service rating shall not be less than the calculated load"),
        ],
        related_sections=["220.83", "220.87", "230.42"],
    ),
    CodeRule(
        id="nec_210_19_a_1",
        section="210.19(A)(1)",
        title="Branch-Circuit Conductors for Continuous Loads",
        description="Conductors supplying continuous loads sized at 125 percent of the continuous load",
        category=RuleCategory.CALCULATION,
        versions=[
            RuleVersion(
                year="2023",
                text="The minimum branch-circuit conductor size shall have an ampacity not less than the noncontinuous load plus 125 percent of the continuous load.",
            ),
        ],
        conditions=[
            RuleCondition(field="continuous", operator=Operator.EQ, value=True),
            RuleCondition(field="amperage", operator=Operator.GT, value=0, unit="A"),
        ],
        requirements=[
            RuleRequirement(
                description="Apply 125% factor to continuous loads",
                formula="required_amps = (watts / voltage) * 1.25",
                parameters=["watts", "voltage"],
                exceptions=["Assemblies listed for operation at 100 percent of their rating"],
            ),
        ],
        related_sections=["215.2(A)(1)", "625.41"],
    ),
    CodeRule(
        id="nec_110_9",
        section="110.9",
        title="Interrupting Rating",
        description="Equipment intended to interrupt current at fault levels shall have an adequate interrupting rating",
        category=RuleCategory.PROTECTION,
        versions=[
            RuleVersion(
                year="2023",
                text="Equipment intended to interrupt current at fault levels shall have an interrupting rating at nominal circuit voltage at least equal to the current that is available at the line terminals of the equipment.",
            ),
        ],
        conditions=[
            RuleCondition(field="amperage", operator=Operator.GT, value=100, unit="A"),
        ],
        requirements=[
            RuleRequirement(description="Specify a short-circuit current rating at or above the available fault current"),
        ],
        related_sections=["110.10", "110.24"],
        references=["UL 67", "UL 489"],
    ),
    CodeRule(
        id="nec_250_118",
        section="250.118",
        title="Types of Equipment Grounding Conductors",
        description="Permitted equipment grounding conductor types for grounding equipment",
        category=RuleCategory.GROUNDING,
        versions=[
            RuleVersion(
                year="2023",
                text="The equipment grounding conductor run with or enclosing the circuit conductors shall be one or more or a combination of the listed types.",
            ),
        ],
        conditions=[
            RuleCondition(field="category", operator=Operator.NE, value="control"),
        ],
        requirements=[
            RuleRequirement(description="Provide an equipment grounding conductor to all non-control equipment"),
        ],
        related_sections=["250.122", "250.4"],
    ),
    CodeRule(
        id="nec_625_22",
        section="625.22",
        title="Personnel Protection System",
        description="EVSE enclosure and personnel protection requirements for electric vehicle supply equipment",
        category=RuleCategory.INSTALLATION,
        versions=[
            RuleVersion(
                year="2023",
                text="The EVSE shall have a listed system of protection against electric shock of personnel.",
            ),
        ],
        conditions=[
            RuleCondition(field="type", operator=Operator.EQ, value="evse"),
        ],
        requirements=[
            RuleRequirement(description="Use NEMA 3R or better enclosure for outdoor EVSE"),
        ],
        related_sections=["625.50", "110.28"],
        references=["UL 2231", "UL 2594"],
    ),
    CodeRule(
        id="nec_310_15",
        section="310.15(B)(16)",
        title="Ampacities of Insulated Conductors",
        description="Conductor ampacity shall not be less than the load served",
        category=RuleCategory.WIRING,
        versions=[
            RuleVersion(
                year="2017",
                text="Ampacities shall be as specified in Table 310.15(B)(16).",
            ),
            RuleVersion(
                year="2023",
                text="Ampacities shall be as specified in Table 310.16 as modified by correction and adjustment factors.",
                changes="Table renumbered from 310.15(B)(16) to 310.16.",
            ),
        ],
        requirements=[
            RuleRequirement(
                description="Conductor ampacity shall meet the load, at 125% for continuous loads",
                formula="ampacity >= load_amps * (1.25 if continuous else 1.0)",
                parameters=["ampacity", "load_amps"],
            ),
        ],
        related_sections=["310.16", "240.4"],
    ),
    CodeRule(
        id="nec_210_19_fpn",
        section="210.19(A)(1) FPN",
        title="Voltage Drop Recommendation",
        description="Informational note recommending limits on branch-circuit and feeder voltage drop",
        category=RuleCategory.WIRING,
        severity=RuleSeverity.RECOMMENDED,
        versions=[
            RuleVersion(
                year="2023",
                text="Conductors for branch circuits sized to prevent a voltage drop exceeding 3 percent, and 5 percent combined with the feeder, provide reasonable efficiency of operation.",
            ),
        ],
        requirements=[
            RuleRequirement(
                description="Keep branch voltage drop at or below 3%, combined at or below 5%",
                formula="drop = (2 * resistance * length * current) / 1000 / voltage",
                parameters=["resistance", "length", "current", "voltage"],
            ),
        ],
        related_sections=["215.2(A)(1)"],
    ),
    CodeRule(
        id="nec_408_35",
        section="408.35",
        title="Number of Overcurrent Devices on One Panelboard",
        description="Panelboard shall not contain more overcurrent devices than it was designed for",
        category=RuleCategory.INSTALLATION,
        versions=[
            RuleVersion(
                year="2023",
                text="A panelboard shall be provided with physical means to prevent the installation of more overcurrent devices than that number for which the panelboard was designed, rated, and listed.",
            ),
        ],
        conditions=[
            RuleCondition(field="breaker_count", operator=Operator.GT, value=33),
        ],
        requirements=[
            RuleRequirement(description="Leave at least 20% of panel spaces free for expansion"),
        ],
        related_sections=["408.36", "220.87"],
    ),
    CodeRule(
        id="nec_230_67",
        section="230.67",
        title="Surge Protection",
        description="Services supplying dwelling units shall be provided with a surge protective device",
        category=RuleCategory.PROTECTION,
        applicability=Applicability.RESIDENTIAL,
        versions=[
            RuleVersion(
                year="2020",
                text="All services supplying dwelling units shall be provided with a surge-protective device (SPD).",
                changes="New requirement.",
            ),
            RuleVersion(
                year="2023",
                text="All services supplying dwelling units shall be provided with a surge-protective device (SPD).",
            ),
        ],
        conditions=[
            RuleCondition(field="calculated_service_size", operator=Operator.GE, value=100, unit="A"),
        ],
        requirements=[
            RuleRequirement(description="Install a Type 1 or Type 2 SPD integral to or adjacent to the service equipment"),
        ],
        related_sections=["285.25"],
        references=["UL 1449"],
    ),
    CodeRule(
        id="nec_625_42",
        section="625.42",
        title="Rating",
        description="EVSE with adjustable settings and energy management systems for EV charging",
        category=RuleCategory.CALCULATION,
        severity=RuleSeverity.RECOMMENDED,
        versions=[
            RuleVersion(
                year="2023",
                text="Where an automatic load management system is used, the maximum equipment load on a service and feeder shall be the maximum load permitted by the automatic load management system.",
            ),
        ],
        conditions=[
            RuleCondition(field="evse_load_count", operator=Operator.GT, value=1),
        ],
        requirements=[
            RuleRequirement(description="Size service and feeders to the load management system setpoint"),
        ],
        related_sections=["625.41", "750.30"],
        references=["UL 916"],
    ),
]
