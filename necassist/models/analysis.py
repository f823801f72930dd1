"""Analysis output models: violations, suggestions, insights, quick fixes."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_analysis_id() -> str:
    return f"analysis_{uuid.uuid4().hex[:12]}"


class Severity(str, Enum):
    """Violation severity, distinct from a rule's mandatory/advisory class."""

    CRITICAL = "critical"
    MAJOR = "major"
    MINOR = "minor"
    WARNING = "warning"


# -- Measured values ---------------------------------------------------------


class Amperage(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["amperage"] = "amperage"
    value: float

    def __str__(self) -> str:
        return f"{self.value:.1f}A"


class Percentage(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["percentage"] = "percentage"
    value: float
    """Percent, e.g. 3.2 for 3.2%."""

    def __str__(self) -> str:
        return f"{self.value:.1f}%"


class Text(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    value: str

    def __str__(self) -> str:
        return self.value


class Boolean(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["boolean"] = "boolean"
    value: bool

    def __str__(self) -> str:
        return "yes" if self.value else "no"


MeasuredValue = Annotated[
    Union[Amperage, Percentage, Text, Boolean],
    Field(discriminator="kind"),
]


# -- Violations --------------------------------------------------------------


class Resolution(BaseModel):
    """How to bring a design back into compliance."""

    model_config = ConfigDict(frozen=True)

    steps: tuple[str, ...] = Field(default_factory=tuple)
    alternatives: tuple[str, ...] = Field(default_factory=tuple)
    estimated_effort: str = "medium"
    """'low', 'medium', 'high'."""

    cost: str | None = None
    """'none', 'low', 'medium', 'high'."""


class Violation(BaseModel):
    """A single code violation found in the design."""

    model_config = ConfigDict(frozen=True)

    id: str
    rule_id: str
    section: str
    severity: Severity

    title: str
    description: str
    current_value: MeasuredValue
    required_value: MeasuredValue

    component: str | None = None
    load: str | None = None
    circuit: str | None = None
    coordinate: tuple[float, float] | None = None

    resolution: Resolution = Field(default_factory=Resolution)

    explanation: str = ""
    why_it_matters: str = ""
    common_mistakes: tuple[str, ...] = Field(default_factory=tuple)
    examples: tuple[str, ...] = Field(default_factory=tuple)


# -- Suggestions, insights, quick fixes ---------------------------------------


class Implementation(BaseModel):
    model_config = ConfigDict(frozen=True)

    steps: tuple[str, ...] = Field(default_factory=tuple)
    requirements: tuple[str, ...] = Field(default_factory=tuple)
    time_estimate: str = ""
    skill_level: str = "intermediate"
    """'basic', 'intermediate', 'advanced'."""


class Suggestion(BaseModel):
    """An improvement that is not required for compliance."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: str
    """'improvement', 'optimization', 'best_practice', 'education'."""

    priority: str = "medium"
    """'high', 'medium', 'low'."""

    title: str
    description: str
    benefit: str = ""
    implementation: Implementation = Field(default_factory=Implementation)

    nec_sections: tuple[str, ...] = Field(default_factory=tuple)
    related_standards: tuple[str, ...] = Field(default_factory=tuple)
    applicable_components: tuple[str, ...] = Field(default_factory=tuple)
    conditions: tuple[str, ...] = Field(default_factory=tuple)


class Insight(BaseModel):
    """An educational note shown alongside the analysis."""

    model_config = ConfigDict(frozen=True)

    type: str
    """'tip', 'warning', 'info', 'best_practice'."""

    title: str
    content: str
    nec_section: str | None = None
    learn_more: str | None = None


class QuickFix(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: str
    action: str
    impact: str
    difficulty: str = "easy"
    """'easy', 'moderate', 'complex'."""

    rule_id: str | None = None


class AnalyzerFailure(BaseModel):
    """A sub-analyzer that raised during an isolated run."""

    model_config = ConfigDict(frozen=True)

    analyzer: str
    error: str


# -- Analysis snapshot -------------------------------------------------------


class RealTimeAnalysis(BaseModel):
    """Immutable result of one compliance analysis run."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(default_factory=_utc_now)
    analysis_id: str = Field(default_factory=new_analysis_id)

    overall_compliance: int = Field(default=100, ge=0, le=100)
    """Compliance score, 0-100."""

    critical_violations: int = Field(default=0, ge=0)
    major_violations: int = Field(default=0, ge=0)
    minor_violations: int = Field(default=0, ge=0)
    warnings: int = Field(default=0, ge=0)

    violations: tuple[Violation, ...] = Field(default_factory=tuple)
    suggestions: tuple[Suggestion, ...] = Field(default_factory=tuple)
    insights: tuple[Insight, ...] = Field(default_factory=tuple)
    quick_fixes: tuple[QuickFix, ...] = Field(default_factory=tuple)

    partial: bool = False
    """True when one or more sub-analyzers failed and were skipped."""

    failures: tuple[AnalyzerFailure, ...] = Field(default_factory=tuple)

    @model_validator(mode="after")
    def _counts_match_violations(self) -> RealTimeAnalysis:
        expected = {
            Severity.CRITICAL: self.critical_violations,
            Severity.MAJOR: self.major_violations,
            Severity.MINOR: self.minor_violations,
            Severity.WARNING: self.warnings,
        }
        for severity, count in expected.items():
            actual = sum(1 for v in self.violations if v.severity is severity)
            if actual != count:
                raise ValueError(
                    f"{severity.value} count {count} does not match "
                    f"{actual} {severity.value} violation(s)"
                )
        return self

    def to_markdown(self) -> str:
        """Render the analysis as a Markdown compliance report."""
        from necassist.report import render_markdown

        return render_markdown(self)

    def to_json(self) -> str:
        return self.model_dump_json(indent=2)


# -- Interaction log and capabilities -----------------------------------------


class InteractionType(str, Enum):
    VIOLATION_RESOLVED = "violation_resolved"
    SUGGESTION_APPLIED = "suggestion_applied"
    RULE_VIEWED = "rule_viewed"
    FEEDBACK_GIVEN = "feedback_given"


class UserInteraction(BaseModel):
    """A recorded user action.  Stored only; never read by the analyzers."""

    model_config = ConfigDict(frozen=True)

    type: InteractionType
    timestamp: datetime = Field(default_factory=_utc_now)
    data: Any = None


class EngineCapabilities(BaseModel):
    state: str
    is_initialized: bool
    rule_count: int
    supported_versions: list[str]
    analysis_history: int
    user_interactions: int
