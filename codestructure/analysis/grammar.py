"""
Syntax-tree analysis for JavaScript and TypeScript.

Parses with tree-sitter and derives function metrics, dead code, deep
nesting and ``any`` usage from a single walk of the tree.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from tree_sitter import Node

from codestructure.analysis.metrics import build_structure, count_lines
from codestructure.core.languages import LanguageFamily
from codestructure.core.models import ANONYMOUS, CodeStructure, FunctionInfo
from codestructure.parsing.treesitter import (
    LanguageSpec,
    ParsedSource,
    end_line,
    iter_nodes,
    node_text,
    parse_source,
    start_line,
)

logger = logging.getLogger(__name__)

# Block-like nodes deeper than this are reported as deep nesting.
DEEP_NEST_DEPTH = 4


def analyze_grammar(code: str, family: LanguageFamily) -> CodeStructure:
    parsed = parse_source(code, family)
    spec = parsed.spec

    functions: List[FunctionInfo] = []
    dead_code_lines: List[int] = []
    deep_nest_lines: List[int] = []
    type_any_lines: List[int] = []

    stack = [(parsed.root, 0)]
    while stack:
        node, depth = stack.pop()
        block_like = node.is_named and node.type in spec.block_node_types

        if block_like and depth > DEEP_NEST_DEPTH:
            deep_nest_lines.append(start_line(node))
            deep_nest_lines.extend(
                start_line(child)
                for child in node.named_children
                if child.type not in spec.comment_types
            )

        if node.is_named and node.type in spec.function_node_types:
            functions.append(_analyze_function(parsed, node))

        if node.type in spec.statement_block_types:
            dead_code_lines.extend(_unreachable_statements(spec, node))

        if _is_weak_type(parsed, node):
            type_any_lines.append(start_line(node))

        child_depth = depth + 1 if block_like else depth
        stack.extend((child, child_depth) for child in reversed(node.children))

    logger.debug(
        "Grammar analysis of %s source found %d function(s)", family.value, len(functions)
    )
    return build_structure(
        family,
        count_lines(code),
        functions,
        dead_code_lines,
        deep_nest_lines,
        type_any_lines,
    )


def _analyze_function(parsed: ParsedSource, node: Node) -> FunctionInfo:
    first = start_line(node)
    last = end_line(node)
    return FunctionInfo(
        name=_function_name(parsed, node) or ANONYMOUS,
        start_line=first,
        end_line=last,
        line_count=last - first + 1,
        parameter_count=_parameter_count(parsed.spec, node),
        cyclomatic_complexity=_cyclomatic(parsed.spec, node),
        max_nesting_depth=_max_nesting(parsed.spec, node),
    )


def _function_name(parsed: ParsedSource, node: Node) -> str:
    name_node = node.child_by_field_name("name")
    if name_node is not None:
        return node_text(parsed, name_node)

    # Anonymous: borrow the name of whatever the function is bound to.
    child = node
    parent = node.parent
    while parent is not None and parent.type == "parenthesized_expression":
        child = parent
        parent = parent.parent
    if parent is None or parent.type not in parsed.spec.binding_node_types:
        return ""

    if parent.type == "variable_declarator":
        value, target = parent.child_by_field_name("value"), parent.child_by_field_name("name")
    elif parent.type == "pair":
        value, target = parent.child_by_field_name("value"), parent.child_by_field_name("key")
    elif parent.type == "assignment_expression":
        value, target = parent.child_by_field_name("right"), parent.child_by_field_name("left")
    else:
        value = parent.child_by_field_name("value")
        target = parent.child_by_field_name("property") or parent.child_by_field_name("name")

    if value is None or target is None or value != child:
        return ""
    return _binding_name(parsed, target)


def _binding_name(parsed: ParsedSource, target: Node) -> str:
    if target.type == "member_expression":
        prop = target.child_by_field_name("property")
        return node_text(parsed, prop) if prop is not None else ""
    if target.type in ("string", "number"):
        return node_text(parsed, target).strip("'\"`")
    if target.type in (
        "identifier",
        "property_identifier",
        "private_property_identifier",
        "shorthand_property_identifier",
    ):
        return node_text(parsed, target)
    return ""


def _parameter_count(spec: LanguageSpec, node: Node) -> int:
    params = node.child_by_field_name("parameters")
    if params is not None:
        return sum(1 for child in params.named_children if child.type not in spec.comment_types)
    # Arrow functions with a single unparenthesised parameter.
    if node.child_by_field_name("parameter") is not None:
        return 1
    return 0


def _cyclomatic(spec: LanguageSpec, node: Node) -> int:
    complexity = 1
    for child in node.children:
        for current in iter_nodes(child):
            if not current.is_named:
                continue
            if current.type in spec.branch_node_types:
                complexity += 1
            elif current.type == "binary_expression":
                operator = _operator(current)
                if operator in spec.logical_operators:
                    complexity += 1
    return complexity


def _operator(node: Node) -> Optional[str]:
    operator = node.child_by_field_name("operator")
    return operator.type if operator is not None else None


def _max_nesting(spec: LanguageSpec, node: Node) -> int:
    max_depth = 0
    stack = [(child, 0) for child in reversed(node.children)]
    while stack:
        current, depth = stack.pop()
        if current.is_named and current.type in spec.nesting_node_types:
            depth += 1
            max_depth = max(max_depth, depth)
        stack.extend((child, depth) for child in reversed(current.children))
    return max_depth


def _unreachable_statements(spec: LanguageSpec, block: Node) -> List[int]:
    lines = []
    unreachable = False
    for statement in block.named_children:
        if statement.type in spec.comment_types:
            continue
        if unreachable:
            lines.append(start_line(statement))
        if statement.type in spec.terminal_node_types:
            unreachable = True
    return lines


def _is_weak_type(parsed: ParsedSource, node: Node) -> bool:
    if node.type not in ("predefined_type", "type_identifier"):
        return False
    return node_text(parsed, node) in parsed.spec.weak_type_tokens
