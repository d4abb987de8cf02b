"""Tests for artie_lens.metrics.coupling (CBO) against a stub resolver."""

from artie_lens.metrics import collect_dependencies, compute_cbo
from artie_lens.metrics.coupling import add_dependency
from artie_lens.scanning.model import ClassModel, Declaration, SourceFileModel, Symbol

CLASS = Declaration("Repository", "class", "repo.ts")
INTERFACE = Declaration("Clock", "interface", "clock.ts")


class StubResolver:
    """Resolves plain strings through a lookup table."""

    def __init__(self, table):
        self.table = table
        self.resolved = []

    def resolve_type(self, node):
        self.resolved.append(node)
        return self.table.get(node)

    def declarations_of(self, symbol):
        return list(symbol.declarations)


class StubProgram:
    def __init__(self, files, resolver):
        self.files = files
        self.type_checker = resolver

    def resolve_file(self, path):
        return self.files.get(str(path))


TABLE = {
    "repo": Symbol("Repository", (CLASS,)),
    "clock": Symbol("Clock", (INTERFACE,)),
    "ambient": Symbol("Ambient"),
    "string": None,
    "merged": Symbol("Merged", (INTERFACE, Declaration("Merged", "class", "m.ts"), Declaration("Other", "class", "o.ts"))),
}


class TestAddDependency:
    def test_class_declaration_recorded(self):
        deps = set()
        add_dependency(TABLE["repo"], StubResolver(TABLE), deps)
        assert deps == {"Repository"}

    def test_no_declarations_records_own_name(self):
        deps = set()
        add_dependency(TABLE["ambient"], StubResolver(TABLE), deps)
        assert deps == {"Ambient"}

    def test_non_class_declarations_skipped(self):
        deps = set()
        add_dependency(TABLE["clock"], StubResolver(TABLE), deps)
        assert deps == set()

    def test_only_first_class_declaration(self):
        deps = set()
        add_dependency(TABLE["merged"], StubResolver(TABLE), deps)
        assert deps == {"Merged"}


class TestCollectDependencies:
    def test_ambient_constructor_parameter(self):
        """One class, one parameter of an undeclared type, no heritage: CBO 1."""
        cls = ClassModel(name="Service", constructor_parameters=("ambient",))
        assert collect_dependencies([cls], StubResolver(TABLE)) == {"Ambient"}

    def test_all_reference_kinds(self):
        cls = ClassModel(
            name="Service",
            constructor_parameters=("repo", "string"),
            property_initializers=("clock",),
            heritage=("ambient",),
            member_count=3,
        )
        assert collect_dependencies([cls], StubResolver(TABLE)) == {"Repository", "Ambient"}

    def test_deduplicated_across_classes(self):
        a = ClassModel(name="A", constructor_parameters=("repo",))
        b = ClassModel(name="B", heritage=("repo",), member_count=1)
        assert collect_dependencies([a, b], StubResolver(TABLE)) == {"Repository"}

    def test_order_independent(self):
        a = ClassModel(name="A", constructor_parameters=("repo", "clock"))
        b = ClassModel(name="B", heritage=("ambient",), member_count=1)
        resolver = StubResolver(TABLE)
        assert collect_dependencies([a, b], resolver) == collect_dependencies([b, a], resolver)

    def test_unnamed_class_skipped(self):
        cls = ClassModel(name=None, constructor_parameters=("repo",))
        resolver = StubResolver(TABLE)
        assert collect_dependencies([cls], resolver) == set()
        assert resolver.resolved == []

    def test_heritage_without_members(self):
        """An empty class body leaves its extends/implements clauses unvisited."""
        cls = ClassModel(name="Child", heritage=("repo",))
        resolver = StubResolver(TABLE)
        assert collect_dependencies([cls], resolver) == set()
        assert resolver.resolved == []

    def test_heritage_with_one_member(self):
        cls = ClassModel(name="Child", heritage=("repo", "ambient"), member_count=1)
        assert collect_dependencies([cls], StubResolver(TABLE)) == {"Repository", "Ambient"}


class TestComputeCbo:
    def test_file_level_count(self):
        source = SourceFileModel(
            path="/p/a.ts",
            text="",
            classes=(
                ClassModel(name="A", constructor_parameters=("repo",)),
                ClassModel(name="B", constructor_parameters=("ambient",)),
            ),
        )
        program = StubProgram({"/p/a.ts": source}, StubResolver(TABLE))
        assert compute_cbo("/p/a.ts", program) == 2

    def test_unknown_file_scores_zero(self):
        program = StubProgram({}, StubResolver(TABLE))
        assert compute_cbo("/p/missing.ts", program) == 0

    def test_file_without_classes(self):
        program = StubProgram({"/p/a.ts": SourceFileModel("/p/a.ts", "const x = 1")}, StubResolver(TABLE))
        assert compute_cbo("/p/a.ts", program) == 0
