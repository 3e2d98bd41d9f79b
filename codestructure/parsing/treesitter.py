from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

from codestructure.core.errors import ParserInitializationError
from codestructure.core.languages import LanguageFamily

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LanguageSpec:
    name: str
    function_node_types: frozenset[str]
    block_node_types: frozenset[str]
    statement_block_types: frozenset[str]
    branch_node_types: frozenset[str]
    logical_operators: frozenset[str]
    nesting_node_types: frozenset[str]
    terminal_node_types: frozenset[str]
    binding_node_types: frozenset[str]
    comment_types: frozenset[str]
    weak_type_tokens: frozenset[str]


_ECMASCRIPT_SPEC = dict(
    function_node_types=frozenset({
        "function_declaration",
        "generator_function_declaration",
        "function_expression",
        "generator_function",
        "arrow_function",
        "method_definition",
    }),
    block_node_types=frozenset({
        "statement_block",
        "if_statement",
        "for_statement",
        "for_in_statement",
        "while_statement",
        "do_statement",
        "switch_statement",
        "try_statement",
    }),
    statement_block_types=frozenset({"statement_block"}),
    branch_node_types=frozenset({
        "if_statement",
        "for_statement",
        "for_in_statement",
        "while_statement",
        "do_statement",
        "switch_case",
        "catch_clause",
        "ternary_expression",
    }),
    logical_operators=frozenset({"&&", "||", "??"}),
    nesting_node_types=frozenset({
        "if_statement",
        "for_statement",
        "for_in_statement",
        "while_statement",
        "do_statement",
        "switch_statement",
        "try_statement",
        "arrow_function",
        "function_expression",
        "generator_function",
    }),
    terminal_node_types=frozenset({
        "return_statement",
        "throw_statement",
        "break_statement",
        "continue_statement",
    }),
    binding_node_types=frozenset({
        "variable_declarator",
        "pair",
        "assignment_expression",
        "field_definition",
        "public_field_definition",
    }),
    comment_types=frozenset({"comment", "html_comment"}),
    weak_type_tokens=frozenset({"any"}),
)

LANGUAGE_SPECS = {
    LanguageFamily.JAVASCRIPT: LanguageSpec(name="javascript", **_ECMASCRIPT_SPEC),
    LanguageFamily.TYPESCRIPT: LanguageSpec(name="typescript", **_ECMASCRIPT_SPEC),
}


@dataclass(frozen=True)
class ParsedSource:
    language: LanguageFamily
    source: bytes
    tree: Tree
    spec: LanguageSpec

    @property
    def root(self) -> Node:
        return self.tree.root_node


@lru_cache(maxsize=None)
def get_language(family: LanguageFamily, jsx: bool = False) -> Language:
    """
    Load the tree-sitter grammar for a family, once per process.

    ``jsx`` selects the TSX dialect for TypeScript; the JavaScript grammar
    accepts JSX already.
    """
    try:
        if family == LanguageFamily.TYPESCRIPT and jsx:
            return Language(tree_sitter_typescript.language_tsx())
        if family == LanguageFamily.TYPESCRIPT:
            return Language(tree_sitter_typescript.language_typescript())
        if family == LanguageFamily.JAVASCRIPT:
            return Language(tree_sitter_javascript.language())
    except Exception as e:
        logger.error("Failed to load tree-sitter grammar for %s: %s", family.value, e)
        raise ParserInitializationError(f"Cannot load grammar for {family.value}: {e}") from e
    raise ParserInitializationError(f"No tree-sitter grammar bundled for {family.value}")


def parse_source(text: str, family: LanguageFamily) -> ParsedSource:
    """
    Parse source text with the grammar for ``family``.

    Tree-sitter recovers from syntax errors by inserting ERROR and MISSING
    nodes, so a tree is always produced.
    """
    spec = LANGUAGE_SPECS[family]
    source = text.encode("utf-8", errors="replace")
    # One parser per call; parsers hold mutable state and are not shared.
    tree = Parser(get_language(family)).parse(source)
    if family == LanguageFamily.TYPESCRIPT and tree.root_node.has_error:
        # `.ts` and `.tsx` share a family; JSX only parses with the TSX grammar.
        tsx_tree = Parser(get_language(family, jsx=True)).parse(source)
        if _error_count(tsx_tree.root_node) < _error_count(tree.root_node):
            logger.debug("Re-parsed TypeScript input with the TSX grammar")
            tree = tsx_tree
    if tree.root_node.has_error:
        logger.debug("Parse of %s input recovered from syntax errors", family.value)
    return ParsedSource(language=family, source=source, tree=tree, spec=spec)


def iter_nodes(node: Node) -> Iterable[Node]:
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def _error_count(node: Node) -> int:
    return sum(1 for current in iter_nodes(node) if current.is_error or current.is_missing)


def node_text(parsed: ParsedSource, node: Node) -> str:
    return parsed.source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def start_line(node: Node) -> int:
    return node.start_point[0] + 1


def end_line(node: Node) -> int:
    return node.end_point[0] + 1
