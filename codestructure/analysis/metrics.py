"""
File-level rollups shared by every analyzer.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from codestructure.core.languages import LanguageFamily
from codestructure.core.models import CodeStructure, FunctionInfo


def count_lines(code: str) -> int:
    return len(code.split("\n"))


def aggregate(functions: Sequence[FunctionInfo]) -> Tuple[int, int]:
    """
    Return ``(file_cyclomatic_complexity, max_nesting_depth)``.

    Complexity is the sum over all functions with a floor of 1; nesting is
    the maximum with a floor of 0.
    """
    complexity = sum(f.cyclomatic_complexity for f in functions) or 1
    nesting = max((f.max_nesting_depth for f in functions), default=0)
    return max(complexity, 1), max(nesting, 0)


def unique_lines(lines: Iterable[int], total_lines: int) -> List[int]:
    """Sorted, duplicate-free line numbers within ``[1, total_lines]``."""
    return sorted({line for line in lines if 1 <= line <= total_lines})


def _clamp(line: int, total_lines: int) -> int:
    return min(max(line, 1), total_lines)


def clamp_function(info: FunctionInfo, total_lines: int) -> FunctionInfo:
    start = _clamp(info.start_line, total_lines)
    end = max(_clamp(info.end_line, total_lines), start)
    if start == info.start_line and end == info.end_line:
        return info
    return FunctionInfo(
        name=info.name,
        start_line=start,
        end_line=end,
        line_count=info.line_count,
        parameter_count=info.parameter_count,
        cyclomatic_complexity=info.cyclomatic_complexity,
        max_nesting_depth=info.max_nesting_depth,
    )


def build_structure(
    language: LanguageFamily,
    total_lines: int,
    functions: Sequence[FunctionInfo],
    dead_code_lines: Iterable[int] = (),
    deep_nest_lines: Iterable[int] = (),
    type_any_lines: Iterable[int] = (),
) -> CodeStructure:
    functions = [clamp_function(f, total_lines) for f in functions]
    complexity, nesting = aggregate(functions)
    return CodeStructure(
        language=language,
        total_lines=total_lines,
        functions=functions,
        file_cyclomatic_complexity=complexity,
        max_nesting_depth=nesting,
        dead_code_lines=unique_lines(dead_code_lines, total_lines),
        deep_nest_lines=unique_lines(deep_nest_lines, total_lines),
        type_any_lines=unique_lines(type_any_lines, total_lines),
    )


def minimal_structure(code: str, language: LanguageFamily) -> CodeStructure:
    """Degraded result for languages (or failures) with no analysis available."""
    return build_structure(language, count_lines(code), [])
