"""Coupling between objects (CBO).

Counts the distinct classes a file's classes depend on through constructor
parameters, initialized properties and extends/implements clauses. The
dependency set is shared by every class in the file, so CBO is a file-level
figure. Heritage clauses of a class with an empty body are not visited.

Resolution goes through a SymbolResolver. A reference that resolves to no
symbol, or to a symbol whose declarations include no class, is skipped.
A symbol with no declarations at all (ambient or external) is recorded under
its own name.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Optional, Protocol, Union

from ..scanning.model import ClassModel, Declaration, SourceFileModel, Symbol


class SymbolResolver(Protocol):
    """Type resolution capability supplied by a language front-end."""

    def resolve_type(self, node: Any) -> Optional[Symbol]: ...

    def declarations_of(self, symbol: Symbol) -> list[Declaration]: ...


class ProgramModel(Protocol):
    """A built program: parsed files plus their resolver."""

    @property
    def type_checker(self) -> SymbolResolver: ...

    def resolve_file(self, path: Union[str, Path]) -> Optional[SourceFileModel]: ...


def add_dependency(symbol: Symbol, resolver: SymbolResolver, dependencies: set[str]) -> None:
    """Record the class a symbol stands for.

    Only the first class declaration is recorded.
    """
    declarations = resolver.declarations_of(symbol)
    if not declarations:
        dependencies.add(symbol.name)
        return

    for declaration in declarations:
        if declaration.is_class and declaration.name:
            dependencies.add(declaration.name)
            return


def _add_references(
    nodes: Iterable[Any], resolver: SymbolResolver, dependencies: set[str]
) -> None:
    for node in nodes:
        symbol = resolver.resolve_type(node)
        if symbol is not None:
            add_dependency(symbol, resolver, dependencies)


def collect_dependencies(
    classes: Iterable[ClassModel], resolver: SymbolResolver
) -> set[str]:
    """Dependency names of all named classes, merged into one set."""
    dependencies: set[str] = set()

    for class_model in classes:
        if not class_model.name:
            continue
        _add_references(class_model.constructor_parameters, resolver, dependencies)
        _add_references(class_model.property_initializers, resolver, dependencies)
        # Heritage is only visited through a member; an empty body adds nothing
        if class_model.member_count:
            _add_references(class_model.heritage, resolver, dependencies)

    return dependencies


def compute_cbo(path: Union[str, Path], program: ProgramModel) -> int:
    """CBO of one file; 0 when the program does not contain it."""
    source_file = program.resolve_file(path)
    if source_file is None:
        return 0

    dependencies = collect_dependencies(source_file.classes, program.type_checker)
    return len(dependencies)
