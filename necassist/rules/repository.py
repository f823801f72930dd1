"""RuleRepository — read-only, in-memory store of NEC code rules.

Rules are loaded once by :meth:`RuleRepository.initialize` and indexed by
identifier and by section.  After a successful load the repository is
never mutated, so concurrent analyses can share it without locking.
"""

from __future__ import annotations

import json
import logging
import threading
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Iterable

from pydantic import ValidationError

from necassist.errors import InitializationError, RepositoryNotReadyError
from necassist.models.rule import CodeRule

logger = logging.getLogger(__name__)

RuleLoader = Callable[[], Iterable[CodeRule | dict[str, Any]]]


class RepositoryState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"


def _seed_loader() -> list[CodeRule]:
    from necassist.rules.seed_data import SEED_RULES

    return list(SEED_RULES)


class RuleRepository:
    """In-memory rule repository with an explicit lifecycle.

    Parameters
    ----------
    loader:
        Callable returning the rule dataset as :class:`CodeRule` objects
        or plain dicts.  Defaults to the built-in seed rules.
    """

    def __init__(self, loader: RuleLoader | None = None) -> None:
        self._loader: RuleLoader = loader or _seed_loader
        self._lock = threading.Lock()
        self._state = RepositoryState.UNINITIALIZED
        self._by_id: dict[str, CodeRule] = {}
        self._by_section: dict[str, CodeRule] = {}
        self.last_error: str | None = None

    @classmethod
    def from_json(cls, path: str | Path) -> RuleRepository:
        """Create a repository that loads its rules from a JSON array file."""
        rules_path = Path(path)

        def _load() -> list[dict[str, Any]]:
            data = json.loads(rules_path.read_text(encoding="utf-8"))
            if not isinstance(data, list):
                raise ValueError(f"{rules_path} must contain a JSON array of rules")
            return data

        return cls(loader=_load)

    # -- Lifecycle -----------------------------------------------------------

    @property
    def state(self) -> RepositoryState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is RepositoryState.READY

    def initialize(self) -> None:
        """Load and index the rule dataset.

        Returns immediately once ready, even while another call holds
        the lock.  A call made while another thread is loading is
        rejected rather than queued.

        Raises
        ------
        RepositoryNotReadyError
            If initialization is already in progress.
        InitializationError
            If the dataset cannot be loaded or contains duplicate ids.
        """
        if self._state is RepositoryState.READY:
            return
        if not self._lock.acquire(blocking=False):
            raise RepositoryNotReadyError("Rule repository initialization already in progress")
        try:
            if self._state is RepositoryState.READY:
                return
            self._state = RepositoryState.INITIALIZING
            logger.info("Initializing NEC rule repository...")
            try:
                by_id, by_section = self._build_indexes(self._loader())
            except Exception as exc:
                self._state = RepositoryState.FAILED
                self.last_error = str(exc)
                logger.error("Rule repository initialization failed: %s", exc)
                if isinstance(exc, InitializationError):
                    raise
                raise InitializationError(f"Rule repository initialization failed: {exc}") from exc

            self._by_id = by_id
            self._by_section = by_section
            self.last_error = None
            self._state = RepositoryState.READY
            logger.info("Rule repository initialized with %d rules", len(by_id))
        finally:
            self._lock.release()

    @staticmethod
    def _build_indexes(
        raw_rules: Iterable[CodeRule | dict[str, Any]],
    ) -> tuple[dict[str, CodeRule], dict[str, CodeRule]]:
        by_id: dict[str, CodeRule] = {}
        by_section: dict[str, CodeRule] = {}
        for raw in raw_rules:
            try:
                rule = raw if isinstance(raw, CodeRule) else CodeRule.model_validate(raw)
            except ValidationError as exc:
                raise InitializationError(f"Invalid rule definition: {exc}") from exc
            if rule.id in by_id:
                raise InitializationError(f"Duplicate rule id {rule.id!r}")
            by_id[rule.id] = rule
            by_section.setdefault(rule.section, rule)
        return by_id, by_section

    def require_ready(self) -> None:
        """Raise unless the repository has loaded successfully."""
        if self._state is RepositoryState.READY:
            return
        if self._state is RepositoryState.INITIALIZING:
            raise RepositoryNotReadyError("Rule repository is still initializing")
        if self._state is RepositoryState.FAILED:
            raise InitializationError(
                f"Rule repository failed to initialize: {self.last_error}; call initialize() to retry"
            )
        raise RepositoryNotReadyError("Rule repository has not been initialized")

    # -- Queries -------------------------------------------------------------

    def get_rule(self, section: str) -> CodeRule | None:
        """Fetch the rule for a code section, e.g. '210.8'."""
        return self._by_section.get(section)

    def get_rule_by_id(self, rule_id: str) -> CodeRule | None:
        return self._by_id.get(rule_id)

    def search_rules(self, keyword: str) -> list[CodeRule]:
        """Case-insensitive keyword search over title, description and section."""
        term = keyword.lower()
        return [
            rule
            for rule in self._by_id.values()
            if term in rule.title.lower()
            or term in rule.description.lower()
            or term in rule.section.lower()
        ]

    def all_rules(self) -> list[CodeRule]:
        return list(self._by_id.values())

    def count(self) -> int:
        return len(self._by_id)

    def supported_years(self) -> list[str]:
        """Code years that at least one loaded rule has text for."""
        return sorted({v.year for rule in self._by_id.values() for v in rule.versions})
