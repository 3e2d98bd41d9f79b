"""
Result data structures for structural analysis.

Both analyzers return the same shapes so callers never need to know which
strategy produced a result.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from codestructure.core.languages import LanguageFamily


ANONYMOUS = "<anonymous>"


@dataclass(frozen=True)
class FunctionInfo:
    """Structural information about a single function or method."""
    name: str
    start_line: int
    end_line: int
    line_count: int
    parameter_count: int
    cyclomatic_complexity: int
    max_nesting_depth: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "line_count": self.line_count,
            "parameter_count": self.parameter_count,
            "cyclomatic_complexity": self.cyclomatic_complexity,
            "max_nesting_depth": self.max_nesting_depth,
        }


@dataclass(frozen=True)
class CodeStructure:
    """
    Structural analysis result for one source file.

    ``file_cyclomatic_complexity`` is the sum over all functions and never
    drops below 1. The three line lists are sorted and free of duplicates.
    """
    language: LanguageFamily
    total_lines: int
    functions: List[FunctionInfo] = field(default_factory=list)
    file_cyclomatic_complexity: int = 1
    max_nesting_depth: int = 0
    dead_code_lines: List[int] = field(default_factory=list)
    deep_nest_lines: List[int] = field(default_factory=list)
    type_any_lines: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "language": self.language.value,
            "total_lines": self.total_lines,
            "functions": [f.to_dict() for f in self.functions],
            "file_cyclomatic_complexity": self.file_cyclomatic_complexity,
            "max_nesting_depth": self.max_nesting_depth,
            "dead_code_lines": list(self.dead_code_lines),
            "deep_nest_lines": list(self.deep_nest_lines),
            "type_any_lines": list(self.type_any_lines),
        }
