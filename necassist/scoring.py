"""Compliance score calculation."""

from __future__ import annotations

from typing import Iterable

from necassist.config import VIOLATION_PENALTY
from necassist.models.analysis import Severity, Violation


def count_by_severity(violations: Iterable[Violation]) -> dict[Severity, int]:
    """Count violations per severity; every severity is present in the result."""
    counts = {severity: 0 for severity in Severity}
    for violation in violations:
        counts[violation.severity] += 1
    return counts


def compliance_score(counts: dict[Severity, int]) -> int:
    """Return the 0-100 compliance score.

    Critical, major and minor violations each cost the same flat
    penalty; warnings do not count.
    """
    total = counts[Severity.CRITICAL] + counts[Severity.MAJOR] + counts[Severity.MINOR]
    if total == 0:
        return 100
    return max(0, 100 - VIOLATION_PENALTY * total)
