"""Pydantic models for rules, design snapshots, configuration and results."""

from necassist.models.analysis import (
    Amperage,
    AnalyzerFailure,
    Boolean,
    EngineCapabilities,
    Insight,
    InteractionType,
    Percentage,
    QuickFix,
    RealTimeAnalysis,
    Resolution,
    Severity,
    Suggestion,
    Text,
    UserInteraction,
    Violation,
)
from necassist.models.config import AssistantConfig
from necassist.models.design import (
    Component,
    ComponentSpecs,
    Conductor,
    Connection,
    Load,
    LoadState,
    LocationKind,
    ServiceCalculation,
    Terminal,
)
from necassist.models.rule import CodeRule, RuleCondition, RuleRequirement, RuleVersion

__all__ = [
    "Amperage",
    "AnalyzerFailure",
    "AssistantConfig",
    "Boolean",
    "CodeRule",
    "Component",
    "ComponentSpecs",
    "Conductor",
    "Connection",
    "EngineCapabilities",
    "Insight",
    "InteractionType",
    "Load",
    "LoadState",
    "LocationKind",
    "Percentage",
    "QuickFix",
    "RealTimeAnalysis",
    "Resolution",
    "RuleCondition",
    "RuleRequirement",
    "RuleVersion",
    "ServiceCalculation",
    "Severity",
    "Suggestion",
    "Terminal",
    "Text",
    "UserInteraction",
    "Violation",
]
