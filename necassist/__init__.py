"""necassist — real-time NEC compliance analysis for electrical designs."""

__version__ = "1.0.0"

from necassist.analyzers import CancellationToken
from necassist.engine import ComplianceAssistant
from necassist.errors import (
    AnalysisCancelled,
    AnalysisError,
    ConfigurationError,
    DesignTooLargeError,
    InitializationError,
    NecAssistError,
    RepositoryNotReadyError,
)
from necassist.models import (
    AssistantConfig,
    CodeRule,
    Component,
    Conductor,
    Connection,
    Load,
    LoadState,
    RealTimeAnalysis,
    ServiceCalculation,
    Severity,
    Violation,
)
from necassist.rules import RepositoryState, RuleRepository

__all__ = [
    "__version__",
    "AnalysisCancelled",
    "AnalysisError",
    "AssistantConfig",
    "CancellationToken",
    "CodeRule",
    "ComplianceAssistant",
    "Component",
    "Conductor",
    "ConfigurationError",
    "Connection",
    "DesignTooLargeError",
    "InitializationError",
    "Load",
    "LoadState",
    "NecAssistError",
    "RealTimeAnalysis",
    "RepositoryNotReadyError",
    "RepositoryState",
    "RuleRepository",
    "ServiceCalculation",
    "Severity",
    "Violation",
]
