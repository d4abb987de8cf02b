"""Tests for artie_lens.metrics.complexity (WMC aggregation)."""

from pathlib import Path

from artie_lens.metrics import aggregate_complexity, compute_wmc
from artie_lens.scanning.languages import LanguageTarget
from artie_lens.scanning.model import DEFAULT_RULES, ComplexityNode, ComplexityRules


def _tree():
    return ComplexityNode(
        name="file.ts",
        kind="file",
        complexity=1,
        children=(
            ComplexityNode(
                name="Foo",
                kind="class",
                children=(
                    ComplexityNode("a", "method", 3),
                    ComplexityNode("b", "method", 2, children=(ComplexityNode("<anonymous>", "arrow", 1),)),
                ),
            ),
            ComplexityNode("helper", "function", 4),
        ),
    )


class TestAggregateComplexity:
    def test_sums_every_node(self):
        assert aggregate_complexity(_tree()) == 11

    def test_single_node(self):
        assert aggregate_complexity(ComplexityNode("f.ts", "file")) == 0

    def test_child_order_does_not_matter(self):
        tree = _tree()
        reordered = ComplexityNode(tree.name, tree.kind, tree.complexity, tuple(reversed(tree.children)))
        assert aggregate_complexity(reordered) == aggregate_complexity(tree)

    def test_deep_nesting(self):
        """Deep trees do not hit the recursion limit."""
        node = ComplexityNode("leaf", "arrow", 1)
        for _ in range(5000):
            node = ComplexityNode("f", "arrow", 1, children=(node,))
        assert aggregate_complexity(node) == 5001


class TestComputeWmc:
    def test_uses_complexity_model(self):
        calls = []

        def model(path, rules, target):
            calls.append((path, rules, target))
            return _tree()

        assert compute_wmc("src/file.ts", model, LanguageTarget.TYPESCRIPT) == 11
        assert calls == [(Path("src/file.ts"), DEFAULT_RULES, LanguageTarget.TYPESCRIPT)]

    def test_passes_rules_through(self):
        rules = ComplexityRules(callable=2)
        seen = {}

        def model(path, r, target):
            seen["rules"] = r
            return ComplexityNode("f.ts", "file")

        compute_wmc(Path("f.ts"), model, LanguageTarget.TSX, rules)
        assert seen["rules"] is rules
