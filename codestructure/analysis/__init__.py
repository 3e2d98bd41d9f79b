"""
Structural analysis entry point.

Routes JavaScript/TypeScript to the tree-sitter analyzer and Python, Rust,
Go, Java and C# to the line-based structural analyzer. Anything else gets a
minimal result.
"""

import logging
from typing import Union

from codestructure.analysis.grammar import analyze_grammar
from codestructure.analysis.metrics import aggregate, build_structure, minimal_structure
from codestructure.analysis.structural import analyze_structurally
from codestructure.core.languages import LanguageFamily, classify, is_js_ts
from codestructure.core.models import CodeStructure

logger = logging.getLogger(__name__)


def analyze_structure(code: Union[str, bytes], language: str) -> CodeStructure:
    """
    Analyse source code structurally.

    Returns function metrics (complexity, nesting, length, parameters), dead
    code lines, deep nesting lines and weak-typing lines. Never raises: an
    analyzer failure is logged and reported as the minimal result.

    Args:
        code: Source text. Bytes are decoded as UTF-8 with replacement.
        language: Free-form language identifier ("ts", "Python", "c#", ...).
    """
    if isinstance(code, bytes):
        code = code.decode("utf-8", errors="replace")
    elif not isinstance(code, str):
        code = "" if code is None else str(code)

    family = classify(language)

    try:
        if is_js_ts(family):
            return analyze_grammar(code, family)
        if family in (
            LanguageFamily.PYTHON,
            LanguageFamily.RUST,
            LanguageFamily.GO,
            LanguageFamily.JAVA,
            LanguageFamily.CSHARP,
        ):
            return analyze_structurally(code, family)
    except Exception:
        logger.warning(
            "Structural analysis failed for %s source; returning minimal result",
            family.value,
            exc_info=True,
        )
        return minimal_structure(code, family)

    logger.debug("Unsupported language %r; returning minimal result", language)
    return minimal_structure(code, family)


__all__ = [
    "aggregate",
    "analyze_grammar",
    "analyze_structure",
    "analyze_structurally",
    "build_structure",
    "minimal_structure",
]
