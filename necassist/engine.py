"""ComplianceAssistant — main entry point for real-time NEC compliance analysis.

Usage::

    from necassist import ComplianceAssistant

    assistant = ComplianceAssistant()
    assistant.initialize()
    analysis = assistant.analyze_compliance(load_state, service, components, connections)
"""

from __future__ import annotations

import logging
from typing import Any

from necassist import config as settings
from necassist.analyzers import AnalysisContext, Analyzer, CancellationToken, default_analyzers
from necassist.errors import (
    AnalysisCancelled,
    AnalysisError,
    ConfigurationError,
    DesignTooLargeError,
)
from necassist.generators import (
    build_facts,
    generate_insights,
    generate_quick_fixes,
    generate_suggestions,
)
from necassist.history import AnalysisHistory, InteractionLog
from necassist.models.analysis import (
    AnalyzerFailure,
    EngineCapabilities,
    InteractionType,
    RealTimeAnalysis,
    Severity,
    UserInteraction,
    Violation,
)
from necassist.models.config import AssistantConfig, load_default_config
from necassist.models.design import (
    Component,
    Connection,
    LoadState,
    ServiceCalculation,
    coerce_list,
)
from necassist.models.rule import CodeRule
from necassist.rules.repository import RepositoryState, RuleRepository
from necassist.scoring import compliance_score, count_by_severity

logger = logging.getLogger(__name__)


class ComplianceAssistant:
    """Evaluate electrical designs against the NEC rule repository.

    Each instance owns its rule repository, active analysis, history and
    interaction log; nothing is shared between instances.

    Parameters
    ----------
    repository:
        Rule repository to use.  Defaults to one backed by the built-in
        seed rules.
    defaults:
        Engine-level config that per-call overrides are merged onto.
        Defaults to :func:`load_default_config`.
    analyzers:
        Sub-analyzers to run, in order.  Defaults to the four built-ins.
    strict:
        If *True*, any analyzer failure aborts the run with
        :class:`AnalysisError`.  Otherwise the failing analyzer is
        skipped and the result is marked partial.
    max_design_items:
        Upper bound on loads + components + connections per call.  Must
        be at least 1; defaults to ``NECASSIST_MAX_DESIGN_ITEMS`` or 10,000.
    max_history:
        Optional cap on retained analyses.
    """

    def __init__(
        self,
        repository: RuleRepository | None = None,
        *,
        defaults: AssistantConfig | None = None,
        analyzers: list[Analyzer] | None = None,
        strict: bool = False,
        max_design_items: int | None = None,
        max_history: int | None = None,
    ) -> None:
        self.repository = repository or RuleRepository()
        self.defaults = defaults or load_default_config()
        self.analyzers = analyzers if analyzers is not None else default_analyzers()
        self.strict = strict
        if max_design_items is None:
            max_design_items = settings.max_design_items()
        elif max_design_items < 1:
            raise ConfigurationError(f"max_design_items must be at least 1, got {max_design_items}")
        self.max_design_items = max_design_items
        self.history = AnalysisHistory(max_entries=max_history)
        self.interactions = InteractionLog()

    def initialize(self) -> None:
        """Load the rule repository.  Safe to call more than once."""
        self.repository.initialize()

    # -- Analysis ------------------------------------------------------------

    def analyze_compliance(
        self,
        load_state: LoadState | dict[str, Any],
        service: ServiceCalculation | dict[str, Any],
        components: list[Component] | list[dict[str, Any]] | None = None,
        connections: list[Connection] | list[dict[str, Any]] | None = None,
        config: AssistantConfig | dict[str, Any] | None = None,
        *,
        cancel_token: CancellationToken | None = None,
    ) -> RealTimeAnalysis:
        """Run a full compliance analysis of one design snapshot.

        Parameters
        ----------
        load_state:
            Loads from the load calculator, grouped by category.
        service:
            Rated and calculated service size.
        components, connections:
            Single-line diagram contents.
        config:
            Per-call overrides merged over the engine defaults.
        cancel_token:
            Optional token; cancelling it aborts the run.

        Returns
        -------
        RealTimeAnalysis

        Raises
        ------
        InitializationError
            If the rule repository failed to load.
        RepositoryNotReadyError
            If the repository is still initializing.
        ConfigurationError
            If *config* is invalid.
        AnalysisError
            On a size-limit breach, cancellation, or (in strict mode)
            any analyzer failure.
        """
        if self.repository.state is RepositoryState.UNINITIALIZED:
            self.initialize()
        self.repository.require_ready()

        final_config = self.defaults.merged(config)
        self._check_size(load_state, components, connections)
        ctx = AnalysisContext(
            load_state=_as_model(LoadState, load_state),
            service=_as_model(ServiceCalculation, service),
            components=coerce_list(Component, components),
            connections=coerce_list(Connection, connections),
            config=final_config,
            rules=self.repository,
            cancel_token=cancel_token,
        )

        logger.info(
            "Analyzing design: %d loads, %d components, %d connections (NEC %s, %s)",
            len(ctx.load_state.all_loads()), len(ctx.components), len(ctx.connections),
            final_config.nec_version, final_config.jurisdiction,
        )

        violations, failures = self._run_analyzers(ctx)

        facts = build_facts(ctx, violations)
        suggestions = generate_suggestions(facts)
        insights = generate_insights(facts)
        quick_fixes = generate_quick_fixes(facts)

        counts = count_by_severity(violations)
        analysis = RealTimeAnalysis(
            overall_compliance=compliance_score(counts),
            critical_violations=counts[Severity.CRITICAL],
            major_violations=counts[Severity.MAJOR],
            minor_violations=counts[Severity.MINOR],
            warnings=counts[Severity.WARNING],
            violations=violations,
            suggestions=suggestions,
            insights=insights,
            quick_fixes=quick_fixes,
            partial=bool(failures),
            failures=failures,
        )
        self.history.record(analysis)

        logger.info(
            "Compliance analysis %s completed: %d%% compliant, %d violations, "
            "%d suggestions, %d insights",
            analysis.analysis_id, analysis.overall_compliance, len(violations),
            len(suggestions), len(insights),
        )
        return analysis

    def _check_size(
        self,
        load_state: LoadState | dict[str, Any],
        components: list[Any] | None,
        connections: list[Any] | None,
    ) -> None:
        """Bound the design before any of it is validated."""
        if isinstance(load_state, LoadState):
            loads = len(load_state.all_loads())
        else:
            loads = sum(
                len(group)
                for group in (load_state.get(name) for name in LoadState.model_fields)
                if isinstance(group, (list, tuple))
            )
        items = loads + len(components or ()) + len(connections or ())
        if items > self.max_design_items:
            raise DesignTooLargeError(
                f"Design has {items} items; limit is {self.max_design_items}"
            )

    def _run_analyzers(
        self, ctx: AnalysisContext,
    ) -> tuple[list[Violation], list[AnalyzerFailure]]:
        violations: list[Violation] = []
        failures: list[AnalyzerFailure] = []
        for analyzer in self.analyzers:
            ctx.check_cancelled()
            try:
                found = analyzer.analyze(ctx)
            except AnalysisCancelled:
                raise
            except Exception as exc:
                if self.strict:
                    raise AnalysisError(
                        f"Compliance analysis failed in {analyzer.name}: {exc}",
                        analyzer=analyzer.name,
                    ) from exc
                logger.warning("Analyzer %s failed; result will be partial", analyzer.name, exc_info=True)
                failures.append(AnalyzerFailure(analyzer=analyzer.name, error=str(exc)))
                continue
            logger.debug("Analyzer %s found %d violations", analyzer.name, len(found))
            violations.extend(found)
        return violations, failures

    # -- Accessors -----------------------------------------------------------

    @property
    def active_analysis(self) -> RealTimeAnalysis | None:
        return self.history.active

    def get_analysis_history(self) -> list[RealTimeAnalysis]:
        return self.history.entries()

    def get_rule(self, section: str) -> CodeRule | None:
        """Look up a rule by code section, e.g. '210.8'."""
        return self.repository.get_rule(section)

    def search_rules(self, keyword: str) -> list[CodeRule]:
        return self.repository.search_rules(keyword)

    def record_user_interaction(
        self, type: InteractionType | str, data: Any = None,
    ) -> UserInteraction:
        """Append a user action to the interaction log."""
        return self.interactions.record(type, data)

    def get_interactions(self, **filters: Any) -> list[UserInteraction]:
        return self.interactions.get_interactions(**filters)

    def get_capabilities(self) -> EngineCapabilities:
        return EngineCapabilities(
            state=self.repository.state.value,
            is_initialized=self.repository.is_ready,
            rule_count=self.repository.count(),
            supported_versions=list(settings.SUPPORTED_CODE_YEARS),
            analysis_history=len(self.history),
            user_interactions=len(self.interactions),
        )


def _as_model(model: Any, value: Any) -> Any:
    return value if isinstance(value, model) else model.model_validate(value)
