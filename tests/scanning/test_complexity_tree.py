"""Tests for artie_lens.scanning.complexity (complexity tree construction)."""

import pytest

from artie_lens.exceptions import FileAccessError
from artie_lens.metrics import aggregate_complexity
from artie_lens.scanning.complexity import get_complexity_tree
from artie_lens.scanning.languages import LanguageTarget
from artie_lens.scanning.model import ComplexityRules


def _tree(tmp_path, source, name="a.ts", rules=None, target=LanguageTarget.TYPESCRIPT):
    path = tmp_path / name
    path.write_text(source, encoding="utf-8")
    if rules is None:
        return get_complexity_tree(path, target=target)
    return get_complexity_tree(path, rules, target)


class TestComplexityTree:
    def test_function_decision_points(self, tmp_path):
        source = """\
function helper(x: number) {
  if (x > 0 && x < 10) {
    return x
  }
  return x ? 1 : 0
}
"""
        tree = _tree(tmp_path, source)
        assert tree.kind == "file"
        assert tree.complexity == 0
        (helper,) = tree.children
        assert (helper.name, helper.kind, helper.complexity, helper.line) == ("helper", "function", 4, 1)
        assert aggregate_complexity(tree) == 4

    def test_class_methods_and_nested_arrows(self, tmp_path):
        source = """\
class Foo {
  run(items: number[]) {
    for (const i of items) {
      try { work(i) } catch (e) { log(e) }
    }
    items.forEach((i) => i || 0)
  }

  get size() { return 1 }

  constructor() {}
}
"""
        tree = _tree(tmp_path, source)
        (foo,) = tree.children
        assert (foo.name, foo.kind, foo.complexity) == ("Foo", "class", 0)
        run, size, ctor = foo.children
        assert (run.name, run.kind, run.complexity) == ("run", "method", 3)
        assert [(c.kind, c.complexity) for c in run.children] == [("arrow", 2)]
        assert (size.kind, size.complexity) == ("accessor", 1)
        assert (ctor.kind, ctor.complexity) == ("constructor", 1)
        assert aggregate_complexity(tree) == 7

    def test_switch_cases(self, tmp_path):
        source = """\
export const pick = (n: number) => {
  switch (n) {
    case 1: return 'a'
    case 2: return 'b'
    default: return 'c'
  }
}
"""
        (pick,) = _tree(tmp_path, source).children
        assert (pick.name, pick.kind, pick.complexity) == ("pick", "arrow", 3)

    def test_loops(self, tmp_path):
        source = """\
function loops(xs: number[]) {
  for (let i = 0; i < 3; i++) {}
  for (const k in xs) {}
  while (false) {}
  do {} while (false)
}
"""
        (loops,) = _tree(tmp_path, source).children
        assert loops.complexity == 5

    def test_logical_assignment_and_nullish(self, tmp_path):
        source = "function f(a?: number) {\n  a ??= 1\n  return a ?? 2\n}\n"
        (f,) = _tree(tmp_path, source).children
        assert f.complexity == 3

    def test_arithmetic_is_not_a_decision(self, tmp_path):
        source = "function f(a: number) {\n  return a + 1 > 2 ? a * 2 : a - 1\n}\n"
        (f,) = _tree(tmp_path, source).children
        assert f.complexity == 2

    def test_top_level_code_stays_on_file(self, tmp_path):
        tree = _tree(tmp_path, "if (ready) {\n  start()\n}\n")
        assert tree.complexity == 1
        assert tree.children == ()

    def test_custom_rules(self, tmp_path):
        source = "function f(x) {\n  if (x) { return 1 }\n  return x && 2\n}\n"
        rules = ComplexityRules(callable=2, branch=3)
        (f,) = _tree(tmp_path, source, rules=rules).children
        assert f.complexity == 2 + 3 + 1

    def test_javascript(self, tmp_path):
        source = "const g = function () {\n  if (a || b) {}\n}\n"
        tree = _tree(tmp_path, source, name="a.js", target=LanguageTarget.JAVASCRIPT)
        (g,) = tree.children
        assert (g.name, g.kind, g.complexity) == ("g", "function", 3)

    def test_empty_file(self, tmp_path):
        tree = _tree(tmp_path, "")
        assert aggregate_complexity(tree) == 0

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileAccessError):
            get_complexity_tree(tmp_path / "missing.ts")
