"""Complexity tree construction.

Builds the ComplexityNode tree of one file:

    file
    ├── class Foo            (decision points in field initializers)
    │   ├── method bar       (callable weight + decision points)
    │   │   └── arrow <anonymous>
    │   └── constructor constructor
    └── function helper

A decision point belongs to the innermost callable or class containing it;
top-level ones stay on the file node.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import tree_sitter

from ..exceptions import ParsingError
from ..file_ops import read_source
from ..logging_config import get_logger
from .languages import LanguageTarget
from .model import DEFAULT_RULES, ComplexityNode, ComplexityRules
from .treesitter_parser import TreeSitterParser, node_text

logger = get_logger(__name__)

CALLABLE_TYPES = {
    "function_declaration": "function",
    "generator_function_declaration": "function",
    "function_expression": "function",
    "function": "function",
    "generator_function": "function",
    "arrow_function": "arrow",
    "method_definition": "method",
}

CLASS_TYPES = ("class_declaration", "abstract_class_declaration", "class")

LOOP_TYPES = ("for_statement", "for_in_statement", "while_statement", "do_statement")

LOGICAL_OPERATORS = ("&&", "||", "??")
LOGICAL_ASSIGNMENTS = ("&&=", "||=", "??=")

ANONYMOUS = "<anonymous>"

_default_parser = TreeSitterParser()


def decision_weight(node: tree_sitter.Node, rules: ComplexityRules) -> int:
    """Complexity a single node adds to its enclosing callable."""
    kind = node.type
    if kind == "if_statement":
        return rules.branch
    if kind in LOOP_TYPES:
        return rules.loop
    if kind == "switch_case":
        return rules.case
    if kind == "catch_clause":
        return rules.catch
    if kind == "ternary_expression":
        return rules.conditional
    if kind == "binary_expression":
        operator = node.child_by_field_name("operator")
        if operator is not None and operator.type in LOGICAL_OPERATORS:
            return rules.logical
    if kind == "augmented_assignment_expression":
        operator = node.child_by_field_name("operator")
        if operator is not None and operator.type in LOGICAL_ASSIGNMENTS:
            return rules.logical
    return 0


class ComplexityTreeBuilder:
    """Turns a parse tree into a ComplexityNode tree."""

    def __init__(self, rules: ComplexityRules = DEFAULT_RULES):
        self.rules = rules

    def build(self, root: tree_sitter.Node, name: str) -> ComplexityNode:
        own, children = self._scan(root)
        return ComplexityNode(name=name, kind="file", complexity=own, children=children)

    def _scan(self, node: tree_sitter.Node) -> tuple[int, tuple[ComplexityNode, ...]]:
        """Own decision points of ``node`` and its nested classes/callables."""
        own = 0
        children: list[ComplexityNode] = []
        stack = list(reversed(node.children))
        while stack:
            child = stack.pop()
            if child.type in CALLABLE_TYPES:
                children.append(self._callable(child))
            elif child.type in CLASS_TYPES:
                children.append(self._class(child))
            else:
                own += decision_weight(child, self.rules)
                stack.extend(reversed(child.children))
        return own, tuple(children)

    def _class(self, node: tree_sitter.Node) -> ComplexityNode:
        own, children = self._scan(node)
        return ComplexityNode(
            name=node_text(node.child_by_field_name("name")) or ANONYMOUS,
            kind="class",
            complexity=own,
            children=children,
            line=node.start_point[0] + 1,
        )

    def _callable(self, node: tree_sitter.Node) -> ComplexityNode:
        own, children = self._scan(node)
        name = _callable_name(node)
        kind = CALLABLE_TYPES[node.type]
        if kind == "method":
            if name == "constructor":
                kind = "constructor"
            elif any(child.type in ("get", "set") for child in node.children):
                kind = "accessor"
        return ComplexityNode(
            name=name,
            kind=kind,
            complexity=self.rules.callable + own,
            children=children,
            line=node.start_point[0] + 1,
        )


def _callable_name(node: tree_sitter.Node) -> str:
    name = node.child_by_field_name("name")
    if name is not None:
        return node_text(name)
    # const handler = () => { ... }
    parent = node.parent
    if parent is not None and parent.type == "variable_declarator":
        return node_text(parent.child_by_field_name("name")) or ANONYMOUS
    return ANONYMOUS


def get_complexity_tree(
    path: Path,
    rules: ComplexityRules = DEFAULT_RULES,
    target: LanguageTarget = LanguageTarget.TYPESCRIPT,
    parser: Optional[TreeSitterParser] = None,
) -> ComplexityNode:
    """Complexity tree of one source file.

    Raises:
        FileAccessError: If the file cannot be read
        ParsingError: If the grammar cannot parse the file
    """
    text = read_source(path)
    tree = (parser or _default_parser).parse(text.encode("utf-8"), target)
    if tree is None:
        raise ParsingError(str(path), target.value, "grammar failed to produce a tree")
    if tree.root_node.has_error:
        logger.debug(f"{path}: syntax errors, complexity counted on the recovered tree")
    return ComplexityTreeBuilder(rules).build(tree.root_node, str(path))
