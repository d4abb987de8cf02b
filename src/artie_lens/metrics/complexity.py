"""Weighted method complexity (WMC): summing a file's complexity tree."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Union

from ..scanning.languages import LanguageTarget
from ..scanning.model import DEFAULT_RULES, ComplexityNode, ComplexityRules

ComplexityModel = Callable[[Path, ComplexityRules, LanguageTarget], ComplexityNode]


def aggregate_complexity(root: ComplexityNode) -> int:
    """Sum the own complexity of every node in the tree.

    Iterative fold so deeply nested closures cannot hit the recursion limit.
    Addition is associative, so the visiting order does not matter.
    """
    total = 0
    stack = [root]
    while stack:
        node = stack.pop()
        total += node.complexity
        stack.extend(node.children)
    return total


def compute_wmc(
    path: Union[str, Path],
    complexity_model: ComplexityModel,
    target: LanguageTarget,
    rules: ComplexityRules = DEFAULT_RULES,
) -> int:
    """WMC of one file: total complexity of its tree."""
    tree = complexity_model(Path(path), rules, target)
    return aggregate_complexity(tree)
