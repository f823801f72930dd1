"""NEC rule repository and condition evaluation."""

from necassist.rules.conditions import all_conditions_met, evaluate_condition
from necassist.rules.repository import RepositoryState, RuleRepository

__all__ = ["RepositoryState", "RuleRepository", "all_conditions_met", "evaluate_condition"]
