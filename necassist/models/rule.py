"""CodeRule — a versioned NEC rule held by the rule repository."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RuleCategory(str, Enum):
    SAFETY = "safety"
    INSTALLATION = "installation"
    CALCULATION = "calculation"
    PROTECTION = "protection"
    GROUNDING = "grounding"
    WIRING = "wiring"


class RuleSeverity(str, Enum):
    """Whether the code mandates or merely recommends the rule."""

    MANDATORY = "mandatory"
    RECOMMENDED = "recommended"
    INFORMATIONAL = "informational"


class Applicability(str, Enum):
    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    INDUSTRIAL = "industrial"
    ALL = "all"


class Operator(str, Enum):
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="
    EQ = "=="
    NE = "!="
    CONTAINS = "contains"
    IN = "in"


class RuleVersion(BaseModel):
    """Rule text as published in a single code year."""

    model_config = ConfigDict(frozen=True)

    year: str
    text: str
    changes: str | None = None


class RuleCondition(BaseModel):
    """A single predicate over a named fact."""

    model_config = ConfigDict(frozen=True)

    field: str
    """Fact name, e.g. 'location', 'amperage', 'evse_load_count'."""

    operator: Operator
    value: Any = None
    unit: str | None = None


class RuleRequirement(BaseModel):
    """What the code requires once a rule applies."""

    model_config = ConfigDict(frozen=True)

    description: str
    formula: str | None = None
    parameters: list[str] = Field(default_factory=list)
    exceptions: list[str] = Field(default_factory=list)


class CodeRule(BaseModel):
    """A single NEC rule.  Immutable once loaded."""

    model_config = ConfigDict(frozen=True)

    id: str
    """Stable identifier, e.g. 'nec_210_8'."""

    section: str
    """Hierarchical section reference, e.g. '210.8' or '310.15(B)(16)'."""

    title: str
    description: str = ""
    category: RuleCategory
    severity: RuleSeverity = RuleSeverity.MANDATORY
    applicability: Applicability = Applicability.ALL

    versions: list[RuleVersion] = Field(default_factory=list)
    conditions: list[RuleCondition] = Field(default_factory=list)
    requirements: list[RuleRequirement] = Field(default_factory=list)

    related_sections: list[str] = Field(default_factory=list)
    references: list[str] = Field(default_factory=list)

    def text_for(self, year: str) -> str | None:
        """Return the rule text for *year*, or the latest earlier edition."""
        candidates = [v for v in self.versions if v.year <= year]
        if not candidates:
            return None
        return max(candidates, key=lambda v: v.year).text

    @property
    def years(self) -> list[str]:
        return sorted(v.year for v in self.versions)
