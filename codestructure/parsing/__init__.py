"""Tree-sitter parsing for the grammar-aware analyzer."""

from codestructure.parsing.treesitter import (
    LANGUAGE_SPECS,
    LanguageSpec,
    ParsedSource,
    get_language,
    parse_source,
)

__all__ = [
    "LANGUAGE_SPECS",
    "LanguageSpec",
    "ParsedSource",
    "get_language",
    "parse_source",
]
