"""Compliance sub-analyzers."""

from necassist.analyzers.base import AnalysisContext, Analyzer, CancellationToken
from necassist.analyzers.component import ComponentAnalyzer
from necassist.analyzers.load import LoadCalculationAnalyzer
from necassist.analyzers.system import SystemRequirementAnalyzer
from necassist.analyzers.wiring import WiringAnalyzer


def default_analyzers() -> list[Analyzer]:
    """The built-in analyzers, in reporting order."""
    return [
        LoadCalculationAnalyzer(),
        ComponentAnalyzer(),
        WiringAnalyzer(),
        SystemRequirementAnalyzer(),
    ]


__all__ = [
    "AnalysisContext",
    "Analyzer",
    "CancellationToken",
    "ComponentAnalyzer",
    "LoadCalculationAnalyzer",
    "SystemRequirementAnalyzer",
    "WiringAnalyzer",
    "default_analyzers",
]
