"""Advisory generators: suggestions, insights and quick fixes."""

from necassist.generators.heuristics import Heuristic, build_facts
from necassist.generators.insights import generate_insights
from necassist.generators.quick_fixes import generate_quick_fixes
from necassist.generators.suggestions import generate_suggestions

__all__ = [
    "Heuristic",
    "build_facts",
    "generate_insights",
    "generate_quick_fixes",
    "generate_suggestions",
]
