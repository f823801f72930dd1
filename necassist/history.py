"""Append-only analysis history and user interaction log.

Both stores are in memory and guarded by a lock so concurrent analyses
never interleave their appends.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Any

from necassist.models.analysis import InteractionType, RealTimeAnalysis, UserInteraction

logger = logging.getLogger(__name__)


class AnalysisHistory:
    """Active-analysis pointer plus the ordered list of past analyses.

    Parameters
    ----------
    max_entries:
        Optional cap; the oldest analyses are dropped beyond it.
    """

    def __init__(self, max_entries: int | None = None) -> None:
        self._lock = threading.Lock()
        self._entries: list[RealTimeAnalysis] = []
        self._active: RealTimeAnalysis | None = None
        self.max_entries = max_entries

    def record(self, analysis: RealTimeAnalysis) -> None:
        """Make *analysis* active and append it to the history."""
        with self._lock:
            self._active = analysis
            self._entries.append(analysis)
            if self.max_entries is not None and len(self._entries) > self.max_entries:
                del self._entries[: len(self._entries) - self.max_entries]

    @property
    def active(self) -> RealTimeAnalysis | None:
        return self._active

    def entries(self) -> list[RealTimeAnalysis]:
        """Return a copy of the history, oldest first."""
        with self._lock:
            return list(self._entries)

    def get(self, analysis_id: str) -> RealTimeAnalysis | None:
        with self._lock:
            for entry in self._entries:
                if entry.analysis_id == analysis_id:
                    return entry
        return None

    def __len__(self) -> int:
        return len(self._entries)


class InteractionLog:
    """Recorded user actions.  Stored for later retrieval only."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._events: list[UserInteraction] = []

    def record(self, type: InteractionType | str, data: Any = None) -> UserInteraction:
        interaction = UserInteraction(type=InteractionType(type), data=data)
        with self._lock:
            self._events.append(interaction)
        logger.debug("Recorded user interaction: %s", interaction.type.value)
        return interaction

    def get_interactions(
        self,
        type: InteractionType | str | None = None,
        since: datetime | None = None,
        limit: int | None = None,
    ) -> list[UserInteraction]:
        """Return interactions, oldest first, with optional filtering.

        Parameters
        ----------
        type:
            Only interactions of this type.
        since:
            Only interactions at or after this timestamp.
        limit:
            Return at most this many of the most recent matches.
        """
        wanted = InteractionType(type) if type is not None else None
        with self._lock:
            events = list(self._events)
        if wanted is not None:
            events = [e for e in events if e.type is wanted]
        if since is not None:
            events = [e for e in events if e.timestamp >= since]
        if limit is not None:
            events = events[-limit:] if limit > 0 else []
        return events

    def __len__(self) -> int:
        return len(self._events)
