"""Lack of cohesion of methods (LCOM).

Variant of the classic LCOM1: count method pairs that share no referenced
property (P) and pairs that share at least one (Q); LCOM = max(0, P - Q).

A property counts as referenced by a method when the method's body text
contains ``this.<name>``. The check is textual, so a comment or string that
mentions ``this.count`` counts, and ``this.counter`` also matches a property
named ``count``.
"""

from __future__ import annotations

from itertools import combinations

from ..scanning.model import ClassModel, MethodModel


def referenced_properties(method: MethodModel, properties: tuple[str, ...]) -> frozenset[str]:
    """Declared properties whose field access appears in the method body."""
    return frozenset(name for name in properties if f"this.{name}" in method.body)


def compute_lcom(class_model: ClassModel) -> int:
    """LCOM score of one class; 0 when it has fewer than two methods."""
    methods = class_model.methods
    if len(methods) < 2:
        return 0

    usage = [referenced_properties(m, class_model.properties) for m in methods]

    shared = 0
    unshared = 0
    for first, second in combinations(usage, 2):
        if first & second:
            shared += 1
        else:
            unshared += 1

    return max(0, unshared - shared)
