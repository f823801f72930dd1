"""Analyzer interface and the shared per-run analysis context."""

from __future__ import annotations

import abc
import threading
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any

from necassist.errors import AnalysisCancelled
from necassist.models.analysis import Violation
from necassist.models.config import AssistantConfig
from necassist.models.design import Component, Connection, LoadState, ServiceCalculation
from necassist.models.rule import CodeRule
from necassist.rules.repository import RuleRepository


class CancellationToken:
    """Cooperative cancellation flag checked by analyzers between entities."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@dataclass
class AnalysisContext:
    """Read-only view of one design snapshot plus the loaded rules."""

    load_state: LoadState
    service: ServiceCalculation
    components: list[Component]
    connections: list[Connection]
    config: AssistantConfig
    rules: RuleRepository
    cancel_token: CancellationToken | None = None
    extras: dict[str, Any] = field(default_factory=dict)

    @cached_property
    def components_by_id(self) -> dict[str, Component]:
        return {c.id: c for c in self.components}

    def rule(self, rule_id: str) -> CodeRule | None:
        return self.rules.get_rule_by_id(rule_id)

    def examples(self, examples: list[str]) -> list[str]:
        """Worked examples for a violation, only when the config shows them."""
        return list(examples) if self.config.show_examples else []

    def check_cancelled(self) -> None:
        """Raise :class:`AnalysisCancelled` if the caller cancelled the run."""
        if self.cancel_token is not None and self.cancel_token.cancelled:
            raise AnalysisCancelled("Compliance analysis was cancelled")


class Analyzer(abc.ABC):
    """Base class for the compliance sub-analyzers."""

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Short analyzer identifier."""

    @abc.abstractmethod
    def analyze(self, ctx: AnalysisContext) -> list[Violation]:
        """Evaluate one slice of the design.

        Returns the violations found (empty if compliant).  Must not
        modify anything reachable from *ctx*.
        """
