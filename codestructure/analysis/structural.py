"""
Structural analysis for languages without a bundled grammar.

A scope-tracking line scanner for Python, Rust, Go, Java and C#. It is not a
parser: function boundaries come from brace depth (Rust, Go, Java, C#) or
indentation (Python), and every metric is derived from raw source lines.
"""

import logging
from typing import List, Optional

from codestructure.analysis.metrics import build_structure
from codestructure.analysis.patterns import (
    CONTROL_KEYWORDS,
    MODIFIER_KEYWORDS,
    WEAK_TYPE_COMMENT_PREFIXES,
    LanguagePatterns,
    patterns_for,
)
from codestructure.core.languages import LanguageFamily, is_brace_language
from codestructure.core.models import CodeStructure, FunctionInfo

logger = logging.getLogger(__name__)

# Assumed width of one Python indentation level
INDENT_UNIT = 4

# Python lines indented this far (five levels) are deeply nested
PYTHON_DEEP_INDENT = 5 * INDENT_UNIT

# Brace depth above which a line is deeply nested
BRACE_DEEP_DEPTH = 5

RECEIVER_NAMES = ("self", "cls")


def analyze_structurally(code: str, family: LanguageFamily) -> CodeStructure:
    """
    Analyse source lines for one of the heuristic language families.

    Missing pattern tables degrade to no functions and empty line lists.
    """
    lines = code.split("\n")
    patterns = patterns_for(family)

    if patterns is None:
        logger.debug("No structural patterns for %s", family.value)
        return build_structure(family, len(lines), [])

    if is_brace_language(family):
        functions = extract_brace_functions(lines, patterns)
        dead_code_lines = detect_dead_code_braces(lines, patterns)
        deep_nest_lines = detect_deep_nesting_braces(lines, patterns)
    else:
        functions = extract_python_functions(lines, patterns)
        dead_code_lines = detect_dead_code_python(lines, patterns)
        deep_nest_lines = detect_deep_nesting_python(lines, patterns)
    type_any_lines = detect_weak_types(lines, patterns)

    logger.debug(
        "Structural analysis of %s source found %d function(s)", family.value, len(functions)
    )
    return build_structure(
        family,
        len(lines),
        functions,
        dead_code_lines,
        deep_nest_lines,
        type_any_lines,
    )


def _is_comment(stripped: str, patterns: LanguagePatterns) -> bool:
    return stripped.startswith(patterns.comment_prefixes)


def _indent_of(line: str) -> int:
    return len(line) - len(line.lstrip())


# --- Function extraction -----------------------------------------------------

def _match_signature(line: str, patterns: LanguagePatterns):
    if patterns.function is None or "(" not in line:
        return None
    match = patterns.function.match(line)
    if match is None:
        return None
    words = line.split()
    first_word = words[0].split("(")[0] if words else ""
    if first_word in MODIFIER_KEYWORDS:
        # `synchronized void inc() {` but not `synchronized (lock) {`
        rest = line.lstrip()[len(first_word):]
        if rest.lstrip().startswith("("):
            return None
        return _match_signature(rest, patterns)
    if match.group(1) in CONTROL_KEYWORDS or first_word in CONTROL_KEYWORDS:
        return None
    return match


def extract_brace_functions(lines: List[str], patterns: LanguagePatterns) -> List[FunctionInfo]:
    """
    Find functions in a brace-delimited language.

    From a signature line, scan forward to the first ``{`` and follow brace
    depth until it returns to zero. Scanning resumes after the body, so
    functions declared inside a body are folded into the enclosing one.
    """
    functions: List[FunctionInfo] = []
    i = 0
    while i < len(lines):
        match = _match_signature(lines[i], patterns)
        if match is None:
            i += 1
            continue

        brace_start = i
        while brace_start < len(lines) and "{" not in lines[brace_start]:
            brace_start += 1
        if brace_start >= len(lines):
            # Declaration without a body (interface method, extern fn, ...)
            i += 1
            continue

        end_idx = _find_brace_end(lines, brace_start)
        params = match.group(2).strip()
        start_line = i + 1
        end_line = end_idx + 1
        body = lines[i:end_idx + 1]

        functions.append(FunctionInfo(
            name=match.group(1),
            start_line=start_line,
            end_line=end_line,
            line_count=end_line - start_line + 1,
            parameter_count=len(params.split(",")) if params else 0,
            cyclomatic_complexity=compute_complexity(body, patterns),
            max_nesting_depth=compute_brace_nesting(body),
        ))
        i = end_idx + 1

    return functions


def _find_brace_end(lines: List[str], brace_start: int) -> int:
    depth = 0
    for j in range(brace_start, len(lines)):
        depth += lines[j].count("{") - lines[j].count("}")
        if depth <= 0:
            return j
    # Unterminated body runs to the end of the file
    return len(lines) - 1


def extract_python_functions(lines: List[str], patterns: LanguagePatterns) -> List[FunctionInfo]:
    """
    Find every ``def`` / ``async def``, nested ones included.

    The body runs until the first non-blank, non-comment line indented at or
    below the ``def``. ``end_line`` is the 0-based index of that line, which
    makes ``line_count = end_line - start_line``.
    """
    functions: List[FunctionInfo] = []
    if patterns.function is None:
        return functions

    for i, line in enumerate(lines):
        match = patterns.function.match(line)
        if match is None:
            continue

        base_indent = len(match.group(1))
        params = [p.strip() for p in match.group(3).split(",")]
        params = [p for p in params if p and _parameter_name(p) not in RECEIVER_NAMES]

        end_idx = i + 1
        while end_idx < len(lines):
            stripped = lines[end_idx].strip()
            if not stripped or _is_comment(stripped, patterns):
                end_idx += 1
                continue
            if _indent_of(lines[end_idx]) <= base_indent:
                break
            end_idx += 1

        start_line = i + 1
        end_line = end_idx
        body = lines[i:end_idx]

        functions.append(FunctionInfo(
            name=match.group(2),
            start_line=start_line,
            end_line=end_line,
            line_count=end_line - start_line,
            parameter_count=len(params),
            cyclomatic_complexity=compute_complexity(body, patterns),
            max_nesting_depth=compute_indent_nesting(body, patterns),
        ))

    return functions


def _parameter_name(param: str) -> str:
    return param.split(":")[0].split("=")[0].strip()


# --- Per-function metrics ----------------------------------------------------

def compute_complexity(lines: List[str], patterns: Optional[LanguagePatterns]) -> int:
    """McCabe complexity: 1 plus every decision-point match on non-comment lines."""
    complexity = 1
    if patterns is None or patterns.decision is None:
        return complexity
    for line in lines:
        if _is_comment(line.strip(), patterns):
            continue
        complexity += len(patterns.decision.findall(line))
    return complexity


def compute_brace_nesting(lines: List[str]) -> int:
    depth = 0
    max_depth = 0
    for line in lines:
        for ch in line:
            if ch == "{":
                depth += 1
                max_depth = max(max_depth, depth)
            elif ch == "}":
                depth -= 1
    # The function body's own brace is not nesting
    return max(0, max_depth - 1)


def compute_indent_nesting(lines: List[str], patterns: LanguagePatterns) -> int:
    if not lines:
        return 0
    base_indent = _indent_of(lines[0])
    max_depth = 0
    for line in lines:
        stripped = line.strip()
        if not stripped or _is_comment(stripped, patterns):
            continue
        depth = (_indent_of(line) - base_indent) // INDENT_UNIT
        max_depth = max(max_depth, depth)
    return max_depth


# --- File-wide detectors -----------------------------------------------------

def detect_dead_code_braces(lines: List[str], patterns: LanguagePatterns) -> List[int]:
    """
    Flag lines after a terminal statement in the same brace scope.

    ``unreachable_at_depth`` arms when a terminal statement is seen and
    disarms when the brace closing that scope is reached. The closing-brace
    line itself is never flagged.
    """
    dead: List[int] = []
    if patterns.terminal is None:
        return dead

    depth = 0
    unreachable_at_depth = -1

    for i, line in enumerate(lines):
        stripped = line.strip()
        if not stripped or _is_comment(stripped, patterns):
            continue

        for ch in line:
            if ch == "{":
                depth += 1
            elif ch == "}":
                if unreachable_at_depth == depth:
                    unreachable_at_depth = -1
                depth -= 1

        if unreachable_at_depth >= 0 and depth >= unreachable_at_depth:
            if stripped != "}":
                dead.append(i + 1)
            continue

        if patterns.terminal.match(stripped):
            unreachable_at_depth = depth

    return dead


def detect_dead_code_python(lines: List[str], patterns: LanguagePatterns) -> List[int]:
    """
    Flag lines indented deeper than a preceding terminal statement.

    A line at or below the terminal statement's indentation resets the
    state and is itself never flagged.
    """
    dead: List[int] = []
    if patterns.terminal is None:
        return dead

    threshold: Optional[int] = None

    for i, line in enumerate(lines):
        stripped = line.strip()
        if not stripped or _is_comment(stripped, patterns):
            continue
        indent = _indent_of(line)

        if threshold is not None:
            if indent > threshold:
                dead.append(i + 1)
                continue
            threshold = None

        if patterns.terminal.match(stripped):
            threshold = indent

    return dead


def detect_deep_nesting_python(lines: List[str], patterns: LanguagePatterns) -> List[int]:
    deep: List[int] = []
    for i, line in enumerate(lines):
        stripped = line.strip()
        if not stripped or _is_comment(stripped, patterns):
            continue
        if _indent_of(line) >= PYTHON_DEEP_INDENT:
            deep.append(i + 1)
    return deep


def detect_deep_nesting_braces(lines: List[str], patterns: LanguagePatterns) -> List[int]:
    deep: List[int] = []
    depth = 0
    for i, line in enumerate(lines):
        depth += line.count("{") - line.count("}")
        stripped = line.strip()
        if depth > BRACE_DEEP_DEPTH and stripped and not _is_comment(stripped, patterns):
            deep.append(i + 1)
    return deep


def detect_weak_types(lines: List[str], patterns: LanguagePatterns) -> List[int]:
    weak: List[int] = []
    if patterns.weak_type is None:
        return weak
    for i, line in enumerate(lines):
        if line.strip().startswith(WEAK_TYPE_COMMENT_PREFIXES):
            continue
        if patterns.weak_type.search(line):
            weak.append(i + 1)
    return weak
