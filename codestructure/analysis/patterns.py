"""
Per-language regex tables for the structural (non-grammar) analyzer.

The tables are built once at import time and exposed through read-only
mappings; nothing writes to them afterwards.
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Pattern, Tuple

from codestructure.core.languages import LanguageFamily


@dataclass(frozen=True)
class LanguagePatterns:
    """Regexes describing one language family."""
    # Brace families capture (name, parameters); Python captures
    # (indent, name, parameters).
    function: Optional[Pattern[str]]
    decision: Optional[Pattern[str]]
    terminal: Optional[Pattern[str]]
    weak_type: Optional[Pattern[str]]
    comment_prefixes: Tuple[str, ...]


BRACE_COMMENT_PREFIXES = ("//", "/*", "*")
PYTHON_COMMENT_PREFIXES = ("#",)

# Words a brace-language signature regex can capture as a "name" that are
# really statements (``else if (x) {``, ``return foo(x);``).
CONTROL_KEYWORDS = frozenset({
    "if", "else", "for", "foreach", "while", "do", "switch", "case", "catch",
    "return", "throw", "new", "delete", "using", "lock", "fixed", "match",
    "loop", "select", "go", "defer", "await", "yield", "sizeof", "typeof",
    "nameof", "synchronized",
})

# Keywords that also open a declaration as a modifier
# (`synchronized void run()`, C# `new public void Run()`).
MODIFIER_KEYWORDS = frozenset({"synchronized", "new"})

# Weak-type scanning skips only these; a Rust or Go line may start with `*`.
WEAK_TYPE_COMMENT_PREFIXES = ("//", "/*", "#")

_BRACE_TERMINAL = re.compile(
    r"^\s*(?:return|throw|break|continue|panic!?|unreachable!|"
    r"Environment\.Exit|System\.exit|os\.Exit|process::exit)(?=[\s;(!]|$)"
)


PATTERNS: Mapping[LanguageFamily, LanguagePatterns] = MappingProxyType({
    LanguageFamily.PYTHON: LanguagePatterns(
        function=re.compile(
            r"^(\s*)(?:async\s+)?def\s+(\w+)\s*\(([^)]*(?:\([^)]*\)[^)]*)*)\)\s*(?:->.*)?:"
        ),
        decision=re.compile(r"\b(?:if|elif|for|while|except|and|or|assert|case)\b"),
        terminal=re.compile(r"^\s*(?:return|raise|break|continue|sys\.exit|os\._exit|exit|quit)\b"),
        weak_type=re.compile(r"\bAny\b|\btyping\.Any\b|\bcast\s*\("),
        comment_prefixes=PYTHON_COMMENT_PREFIXES,
    ),
    LanguageFamily.RUST: LanguagePatterns(
        function=re.compile(
            r"^\s*(?:pub(?:\s*\([^)]*\))?\s+)?(?:default\s+)?(?:const\s+)?(?:async\s+)?"
            r"(?:unsafe\s+)?(?:extern\s+\"[^\"]*\"\s+)?fn\s+(\w+)\s*(?:<[^>]*>)?\s*\(([^)]*)\)"
        ),
        decision=re.compile(
            r"\b(?:if|for|while|loop|match)\b|=>|&&|\|\||\.unwrap_or\b|\.map_or\b"
        ),
        terminal=_BRACE_TERMINAL,
        weak_type=re.compile(r"\bunsafe\b|\bas\s+\*(?:const|mut)\b"),
        comment_prefixes=BRACE_COMMENT_PREFIXES,
    ),
    LanguageFamily.GO: LanguagePatterns(
        function=re.compile(r"^\s*func\s+(?:\([^)]*\)\s*)?(\w+)\s*(?:\[[^\]]*\])?\s*\(([^)]*)\)"),
        decision=re.compile(r"\b(?:if|for|switch|case|select)\b|&&|\|\|"),
        terminal=_BRACE_TERMINAL,
        weak_type=re.compile(r"\binterface\s*\{\s*\}|\bany\b"),
        comment_prefixes=BRACE_COMMENT_PREFIXES,
    ),
    LanguageFamily.JAVA: LanguagePatterns(
        function=re.compile(
            r"^\s*(?:(?:public|private|protected|static|final|abstract|synchronized|native|default)\s+)*"
            r"(?:<[^>]*>\s*)?\w[\w<>,\s\[\]?.]*\s+(\w+)\s*\(([^)]*)\)"
        ),
        decision=re.compile(r"\b(?:if|for|while|do|case|catch)\b|&&|\|\||\s\?\s"),
        terminal=_BRACE_TERMINAL,
        weak_type=re.compile(r"\bObject\b(?!\s*\.class)|\bClass<\?>"),
        comment_prefixes=BRACE_COMMENT_PREFIXES,
    ),
    LanguageFamily.CSHARP: LanguagePatterns(
        function=re.compile(
            r"^\s*(?:(?:public|private|protected|internal|static|virtual|override|abstract|"
            r"async|sealed|extern|unsafe|new|partial)\s+)*\w[\w<>,\s\[\]?.]*\s+(\w+)\s*"
            r"(?:<[^>]*>)?\s*\(([^)]*)\)"
        ),
        decision=re.compile(r"\b(?:if|for|foreach|while|do|case|catch)\b|&&|\|\||\?\?|\s\?\s"),
        terminal=_BRACE_TERMINAL,
        weak_type=re.compile(r"\bdynamic\b|\bobject\b"),
        comment_prefixes=BRACE_COMMENT_PREFIXES,
    ),
})


def patterns_for(family: LanguageFamily) -> Optional[LanguagePatterns]:
    return PATTERNS.get(family)
