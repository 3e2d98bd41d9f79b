"""
Language classification.

Maps free-form language identifiers and file paths onto the closed set of
language families the analyzers understand.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional


class LanguageFamily(str, Enum):
    """Supported language families."""
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    PYTHON = "python"
    RUST = "rust"
    GO = "go"
    JAVA = "java"
    CSHARP = "csharp"
    UNKNOWN = "unknown"


LANGUAGE_ALIASES: Dict[str, LanguageFamily] = {
    "javascript": LanguageFamily.JAVASCRIPT,
    "js": LanguageFamily.JAVASCRIPT,
    "jsx": LanguageFamily.JAVASCRIPT,
    "mjs": LanguageFamily.JAVASCRIPT,
    "cjs": LanguageFamily.JAVASCRIPT,
    "node": LanguageFamily.JAVASCRIPT,
    "ecmascript": LanguageFamily.JAVASCRIPT,
    "typescript": LanguageFamily.TYPESCRIPT,
    "ts": LanguageFamily.TYPESCRIPT,
    "tsx": LanguageFamily.TYPESCRIPT,
    "mts": LanguageFamily.TYPESCRIPT,
    "cts": LanguageFamily.TYPESCRIPT,
    "python": LanguageFamily.PYTHON,
    "py": LanguageFamily.PYTHON,
    "python3": LanguageFamily.PYTHON,
    "pyw": LanguageFamily.PYTHON,
    "rust": LanguageFamily.RUST,
    "rs": LanguageFamily.RUST,
    "go": LanguageFamily.GO,
    "golang": LanguageFamily.GO,
    "java": LanguageFamily.JAVA,
    "csharp": LanguageFamily.CSHARP,
    "c#": LanguageFamily.CSHARP,
    "cs": LanguageFamily.CSHARP,
    "c-sharp": LanguageFamily.CSHARP,
    "c_sharp": LanguageFamily.CSHARP,
}

# Language detection by file extension
LANGUAGE_EXTENSIONS: Dict[LanguageFamily, List[str]] = {
    LanguageFamily.JAVASCRIPT: [".js", ".jsx", ".mjs", ".cjs"],
    LanguageFamily.TYPESCRIPT: [".ts", ".tsx", ".mts", ".cts"],
    LanguageFamily.PYTHON: [".py", ".pyw"],
    LanguageFamily.RUST: [".rs"],
    LanguageFamily.GO: [".go"],
    LanguageFamily.JAVA: [".java"],
    LanguageFamily.CSHARP: [".cs"],
}

# Reverse mapping for quick lookup
EXTENSION_TO_LANGUAGE: Dict[str, LanguageFamily] = {}
for _family, _exts in LANGUAGE_EXTENSIONS.items():
    for _ext in _exts:
        EXTENSION_TO_LANGUAGE[_ext] = _family


def classify(identifier: object) -> LanguageFamily:
    """
    Normalise a user-supplied language identifier to a LanguageFamily.

    Matching is case-insensitive, ignores surrounding whitespace and accepts
    a leading dot (".ts"). Anything unrecognised, including non-string
    input, maps to ``LanguageFamily.UNKNOWN``.
    """
    if isinstance(identifier, LanguageFamily):
        return identifier
    if not isinstance(identifier, str):
        return LanguageFamily.UNKNOWN
    key = identifier.strip().lower()
    if key.startswith("."):
        key = key[1:]
    return LANGUAGE_ALIASES.get(key, LanguageFamily.UNKNOWN)


def is_js_ts(family: LanguageFamily) -> bool:
    return family in (LanguageFamily.JAVASCRIPT, LanguageFamily.TYPESCRIPT)


def is_brace_language(family: LanguageFamily) -> bool:
    """True for every supported family except Python."""
    return family not in (LanguageFamily.PYTHON, LanguageFamily.UNKNOWN)


def language_for_path(path: str) -> Optional[LanguageFamily]:
    return EXTENSION_TO_LANGUAGE.get(Path(path).suffix.lower())
