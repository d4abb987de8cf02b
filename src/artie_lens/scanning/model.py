"""Program model types handed from the front-end to the metrics engine.

The metrics engine only ever sees these values:
    - ClassModel / MethodModel: per-class view used by LCOM and CBO
    - SourceFileModel: a parsed file and its top-level classes
    - Symbol / Declaration: what a type reference resolves to
    - ComplexityNode / ComplexityRules: the complexity tree used by WMC

Nodes stored on ClassModel (heritage, constructor parameters, property
initializers) are opaque to the engine. They are only passed back to the
SymbolResolver that produced them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class MethodModel:
    """A method declaration.

    Attributes:
        name: Method name as written (``#private`` names keep the ``#``)
        body: Body text including braces; empty for abstract methods
    """

    name: str
    body: str


@dataclass(frozen=True)
class ClassModel:
    """Read-only view of a class declaration.

    Attributes:
        name: Class name, None for ``export default class { ... }``
        methods: Method declarations in source order (no constructor or accessors)
        properties: Declared property names in source order
        heritage: Type references listed in extends/implements clauses
        constructor_parameters: Parameter nodes of every constructor signature
        property_initializers: Initializer expressions of property declarations
        member_count: Number of class body members of any kind (constructors,
            accessors, index signatures and static blocks included)
        line: 1-indexed line of the declaration
    """

    name: Optional[str]
    methods: tuple[MethodModel, ...] = ()
    properties: tuple[str, ...] = ()
    heritage: tuple[Any, ...] = ()
    constructor_parameters: tuple[Any, ...] = ()
    property_initializers: tuple[Any, ...] = ()
    member_count: int = 0
    line: int = 0


@dataclass(frozen=True)
class SourceFileModel:
    """A parsed source file.

    Attributes:
        path: Absolute file path
        text: File content
        classes: Top-level class declarations in source order
    """

    path: str
    text: str
    classes: tuple[ClassModel, ...] = ()


@dataclass(frozen=True)
class Declaration:
    """Where a symbol is declared.

    Attributes:
        name: Declared name
        kind: One of "class", "interface", "enum", "type_alias", "function",
            "variable", "namespace", "type_parameter"
        path: Declaring file, or "lib" for built-in library declarations
    """

    name: str
    kind: str
    path: str

    @property
    def is_class(self) -> bool:
        return self.kind == "class"


@dataclass(frozen=True)
class Symbol:
    """A resolved name. No declarations means an ambient/external symbol."""

    name: str
    declarations: tuple[Declaration, ...] = ()


@dataclass(frozen=True)
class ComplexityRules:
    """Weights of the constructs that add cyclomatic complexity.

    Every callable (function, method, constructor, accessor, arrow function)
    starts at ``callable``; each decision point inside its own body adds its
    weight.
    """

    callable: int = 1
    branch: int = 1
    loop: int = 1
    case: int = 1
    catch: int = 1
    conditional: int = 1
    logical: int = 1


DEFAULT_RULES = ComplexityRules()


@dataclass(frozen=True)
class ComplexityNode:
    """A node of a file's complexity tree.

    Attributes:
        name: File path, class name or callable name
        kind: "file", "class", "function", "method", "arrow", ...
        complexity: Own complexity, excluding children
        children: Nested classes and callables
        line: 1-indexed start line (0 for the file node)
    """

    name: str
    kind: str
    complexity: int = 0
    children: tuple[ComplexityNode, ...] = field(default_factory=tuple)
    line: int = 0
