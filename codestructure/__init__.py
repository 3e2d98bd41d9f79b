"""
codestructure

Structural metrics for a single source file: per-function cyclomatic
complexity, nesting depth, length and parameter count, plus dead code,
deep nesting and weak typing locations.
"""

__version__ = "1.0.0"

from codestructure.analysis import analyze_structure
from codestructure.core.languages import LanguageFamily, classify
from codestructure.core.models import CodeStructure, FunctionInfo

__all__ = [
    "analyze_structure",
    "classify",
    "CodeStructure",
    "FunctionInfo",
    "LanguageFamily",
]
