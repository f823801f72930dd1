"""Exception hierarchy for the compliance assistant."""

from __future__ import annotations


class NecAssistError(Exception):
    """Base class for all necassist errors."""


class InitializationError(NecAssistError):
    """Raised when the rule dataset cannot be loaded."""


class RepositoryNotReadyError(NecAssistError):
    """Raised when the rule repository is still initializing."""


class ConfigurationError(NecAssistError):
    """Raised for invalid assistant configuration."""


class AnalysisError(NecAssistError):
    """Raised when a compliance analysis cannot complete.

    Parameters
    ----------
    message:
        Human-readable failure description.
    analyzer:
        Name of the sub-analyzer that failed, if any.
    """

    def __init__(self, message: str, analyzer: str | None = None) -> None:
        super().__init__(message)
        self.analyzer = analyzer


class DesignTooLargeError(AnalysisError):
    """Raised when a design exceeds the configured item bound."""


class AnalysisCancelled(AnalysisError):
    """Raised when a cancellation token is triggered mid-analysis."""
