"""Condition evaluation shared by code rules and the advisory generators."""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Mapping

from necassist.models.rule import Operator, RuleCondition


def _resolve_path(facts: Mapping[str, Any], path: str) -> Any:
    """Resolve a dot-notation path against nested mappings.

    Example: _resolve_path({"service": {"calculated": 120}}, "service.calculated")
    returns 120.
    """
    current: Any = facts
    for part in path.split("."):
        if isinstance(current, Mapping):
            current = current.get(part)
        else:
            return None
        if current is None:
            return None
    return current


def _normalise(value: Any) -> Any:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, str):
        return value.lower()
    return value


def _coerce_numeric(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (ValueError, TypeError):
        return None


def evaluate_condition(condition: RuleCondition, facts: Mapping[str, Any]) -> bool:
    """Return True if *condition* holds for *facts*.

    Missing facts never satisfy a condition, except for ``!=``.
    ``contains`` is a case-insensitive substring test on strings and a
    membership test on sequences; ``in`` tests the fact against a sequence.
    """
    actual = _resolve_path(facts, condition.field)
    expected = condition.value
    op = condition.operator

    if op in (Operator.GT, Operator.LT, Operator.GE, Operator.LE):
        a = _coerce_numeric(actual)
        b = _coerce_numeric(expected)
        if a is None or b is None:
            return False
        if op is Operator.GT:
            return a > b
        if op is Operator.LT:
            return a < b
        if op is Operator.GE:
            return a >= b
        return a <= b

    if op is Operator.EQ:
        return actual is not None and _normalise(actual) == _normalise(expected)

    if op is Operator.NE:
        return actual is None or _normalise(actual) != _normalise(expected)

    if op is Operator.CONTAINS:
        if actual is None:
            return False
        if isinstance(actual, str):
            return str(_normalise(expected)) in actual.lower()
        if isinstance(actual, Iterable):
            return _normalise(expected) in {_normalise(item) for item in actual}
        return False

    if op is Operator.IN:
        if actual is None or not isinstance(expected, Iterable) or isinstance(expected, str):
            return False
        return _normalise(actual) in {_normalise(item) for item in expected}

    return False


def all_conditions_met(conditions: Iterable[RuleCondition], facts: Mapping[str, Any]) -> bool:
    """Return True if every condition holds.  An empty list always holds."""
    return all(evaluate_condition(c, facts) for c in conditions)


def condition_values(conditions: Iterable[RuleCondition], field: str) -> list[Any]:
    """Collect the ``in``-list values a rule declares for *field*."""
    values: list[Any] = []
    for cond in conditions:
        if cond.field == field and cond.operator is Operator.IN:
            values.extend(cond.value or [])
    return values
