"""Program model built from tree-sitter parse trees.

build_program() parses every file once and produces:
    - one SourceFileModel per file, holding its top-level ClassModels
    - a SymbolTable indexing every top-level declaration of the program

The SymbolTable is the SymbolResolver handed to the CBO collector. It resolves
by name only: there is no module scoping, so equal names declared in two files
share one symbol. Resolution follows the type checker's observable outcome for
the references CBO looks at:

    Foo, ns.Foo, Foo<T>         declarations of Foo (import aliases followed)
    Foo[], [..]                 lib Array (an interface, never counted)
    string, 'a' | 'b', () => T  nothing
    T (type parameter)          a type-parameter declaration
    new Foo(), x as Foo         declarations of Foo
    Unknown                     a symbol with no declarations (ambient)

Calls and member accesses resolve to nothing; return types are not inferred.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

import tree_sitter

from ..exceptions import ParsingError, ProgramBuildError
from ..file_ops import read_source
from ..logging_config import get_logger
from .languages import LanguageTarget, language_target_for
from .model import ClassModel, Declaration, MethodModel, SourceFileModel, Symbol
from .project import CompilerOptions, load_compiler_options
from .treesitter_parser import TreeSitterParser, node_text

logger = get_logger(__name__)

CLASS_DECLARATIONS = ("class_declaration", "abstract_class_declaration")

PARAMETER_TYPES = (
    "required_parameter",
    "optional_parameter",
    "identifier",
    "assignment_pattern",
    "object_pattern",
    "array_pattern",
    "rest_pattern",
)

FIELD_TYPES = ("public_field_definition", "field_definition")

# Named class body children that are not class members
NON_MEMBERS = ("comment", "decorator")

# Types that never carry a class symbol.
OPAQUE_TYPES = frozenset(
    {
        "predefined_type",
        "literal_type",
        "union_type",
        "intersection_type",
        "function_type",
        "constructor_type",
        "object_type",
        "tuple_type",
        "conditional_type",
        "template_literal_type",
        "index_type_query",
        "lookup_type",
        "this_type",
        "infer_type",
        "existential_type",
    }
)

# Global declarations of the TypeScript standard library. All are interfaces
# (or interface + var pairs), so none of them ever counts as a dependency.
LIB_TYPES = frozenset(
    {
        "Array", "ArrayBuffer", "ArrayLike", "AsyncGenerator", "AsyncIterable",
        "AsyncIterableIterator", "AsyncIterator", "Awaited", "BigInt", "BigInt64Array",
        "BigUint64Array", "Boolean", "ConstructorParameters", "DataView", "Date", "Error",
        "EvalError", "Exclude", "Extract", "Float32Array", "Float64Array", "Function",
        "Generator", "InstanceType", "Int16Array", "Int32Array", "Int8Array", "Intl",
        "Iterable", "IterableIterator", "Iterator", "JSON", "Map", "Math", "NonNullable",
        "Number", "Object", "Omit", "Parameters", "Partial", "Pick", "Promise",
        "PromiseLike", "Proxy", "RangeError", "Readonly", "ReadonlyArray", "ReadonlyMap",
        "ReadonlySet", "Record", "ReferenceError", "Reflect", "RegExp", "Required",
        "ReturnType", "Set", "SharedArrayBuffer", "String", "Symbol", "SyntaxError",
        "TemplateStringsArray", "ThisType", "TypeError", "URIError", "Uint16Array",
        "Uint32Array", "Uint8Array", "Uint8ClampedArray", "WeakMap", "WeakRef", "WeakSet",
    }
)

LIB_PATH = "lib"


@dataclass(frozen=True)
class NodeRef:
    """A syntax node stored on a ClassModel, tagged with its file and role.

    role is "parameter", "initializer" or "heritage".
    """

    path: str
    node: tree_sitter.Node
    role: str


class SymbolTable:
    """Name-based SymbolResolver over a program's top-level declarations."""

    def __init__(self) -> None:
        self._declarations: dict[str, list[Declaration]] = {}
        self._aliases: dict[str, dict[str, str]] = {}

    def add(self, declaration: Declaration) -> None:
        self._declarations.setdefault(declaration.name, []).append(declaration)

    def add_alias(self, path: str, local: str, imported: str) -> None:
        self._aliases.setdefault(path, {})[local] = imported

    def declarations_of(self, symbol: Symbol) -> list[Declaration]:
        return list(symbol.declarations)

    def resolve_type(self, ref: NodeRef) -> Optional[Symbol]:
        if ref.role == "parameter":
            return self._resolve_parameter(ref.node, ref.path)
        if ref.role == "heritage":
            return self._resolve_heritage(ref.node, ref.path)
        return self._resolve_expression(ref.node, ref.path)

    def lookup(self, name: str, path: str) -> Symbol:
        """Symbol for a type name as seen from ``path``."""
        name = self._aliases.get(path, {}).get(name, name)
        declarations = self._declarations.get(name)
        if declarations:
            return Symbol(name, tuple(declarations))
        if name in LIB_TYPES:
            return Symbol(name, (Declaration(name, "interface", LIB_PATH),))
        return Symbol(name)

    def _lookup_type(self, name_node: tree_sitter.Node, path: str) -> Symbol:
        name = node_text(name_node)
        if _is_type_parameter(name_node, name):
            return Symbol(name, (Declaration(name, "type_parameter", path),))
        return self.lookup(name, path)

    def _resolve_parameter(self, node: tree_sitter.Node, path: str) -> Optional[Symbol]:
        if node.type == "assignment_pattern":
            return self._resolve_expression(node.child_by_field_name("right"), path)

        annotation = node.child_by_field_name("type")
        if annotation is not None:
            return self._resolve_type_node(annotation, path)

        default = node.child_by_field_name("value")
        if default is not None:
            return self._resolve_expression(default, path)
        return None

    def _resolve_type_node(self, node: Optional[tree_sitter.Node], path: str) -> Optional[Symbol]:
        if node is None or node.type in OPAQUE_TYPES:
            return None

        if node.type in ("type_annotation", "parenthesized_type", "readonly_type"):
            return self._resolve_type_node(_first_named(node), path)
        if node.type == "type_identifier":
            return self._lookup_type(node, path)
        if node.type == "nested_type_identifier":
            return self._lookup_type(node.child_by_field_name("name"), path)
        if node.type == "generic_type":
            return self._resolve_type_node(node.child_by_field_name("name"), path)
        if node.type == "array_type":
            return self.lookup("Array", path)
        if node.type == "type_query":
            return self._resolve_expression(_first_named(node), path)
        return None

    def _resolve_expression(self, node: Optional[tree_sitter.Node], path: str) -> Optional[Symbol]:
        if node is None:
            return None

        if node.type in ("parenthesized_expression", "non_null_expression"):
            return self._resolve_expression(_first_named(node), path)
        if node.type in ("as_expression", "satisfies_expression"):
            # `x as const` has no type node
            if len(node.named_children) < 2:
                return None
            return self._resolve_type_node(node.named_children[-1], path)
        if node.type == "type_assertion":
            type_arguments = _first_named(node)
            return self._resolve_type_node(_first_named(type_arguments), path)
        if node.type == "new_expression":
            return self._resolve_constructor(node.child_by_field_name("constructor"), path)
        if node.type == "array":
            return self.lookup("Array", path)
        if node.type == "regex":
            return self.lookup("RegExp", path)
        if node.type == "identifier":
            # typeof SomeClass: only names declared in the program are known
            symbol = self.lookup(node_text(node), path)
            return symbol if symbol.declarations and symbol.declarations[0].path != LIB_PATH else None
        return None

    def _resolve_constructor(self, node: Optional[tree_sitter.Node], path: str) -> Optional[Symbol]:
        if node is None:
            return None
        if node.type == "identifier":
            return self._lookup_type(node, path)
        if node.type == "member_expression":
            return self._lookup_type(node.child_by_field_name("property"), path)
        return None

    def _resolve_heritage(self, node: tree_sitter.Node, path: str) -> Optional[Symbol]:
        if node.type in ("identifier", "member_expression"):
            return self._resolve_constructor(node, path)
        return self._resolve_type_node(node, path)


class Program:
    """Parsed files plus the resolver shared by all of them."""

    def __init__(
        self,
        options: CompilerOptions,
        files: dict[str, SourceFileModel],
        symbols: SymbolTable,
    ) -> None:
        self.options = options
        self._files = files
        self._symbols = symbols

    @property
    def type_checker(self) -> SymbolTable:
        return self._symbols

    @property
    def source_files(self) -> list[SourceFileModel]:
        return list(self._files.values())

    def resolve_file(self, path: Union[str, Path]) -> Optional[SourceFileModel]:
        return self._files.get(str(Path(path)))


def build_program(
    config_path: Path,
    files: Iterable[Union[str, Path]],
    parser: Optional[TreeSitterParser] = None,
) -> Program:
    """Parse files into a Program using the compiler options of ``config_path``.

    JavaScript files are left out unless the project sets ``allowJs``; the
    program then does not resolve them and their CBO is 0.

    Raises:
        InvalidConfigError: If the project config cannot be read
        FileAccessError: If a source file cannot be read
        ProgramBuildError: If a file cannot be parsed
    """
    options = load_compiler_options(config_path)
    parser = parser or TreeSitterParser()
    symbols = SymbolTable()
    sources: dict[str, SourceFileModel] = {}

    for file in files:
        path = Path(file)
        target = language_target_for(path)
        if target is LanguageTarget.JAVASCRIPT and not options.allow_js:
            logger.debug(f"Skipping {path}: allowJs is not set")
            continue

        text = read_source(path)
        tree = parser.parse(text.encode("utf-8"), target)
        if tree is None:
            raise ProgramBuildError(f"cannot parse {path} as {target.value}", config_path)

        key = str(path)
        _index_declarations(tree.root_node.named_children, key, symbols)
        _index_imports(tree.root_node, key, symbols)
        sources[key] = SourceFileModel(
            path=key,
            text=text,
            classes=tuple(_extract_classes(tree.root_node, key)),
        )

    logger.debug(f"Program built: {len(sources)} files, target {options.target.name}")
    return Program(options, sources, symbols)


def parse_source_file(
    path: Union[str, Path], parser: Optional[TreeSitterParser] = None
) -> SourceFileModel:
    """Parse one file into its class models, outside of any program.

    Used where no type information is needed (LCOM). The references stored on
    the models can still be resolved by a SymbolTable.

    Raises:
        FileAccessError: If the file cannot be read
        ParsingError: If the grammar cannot parse the file
    """
    path = Path(path)
    target = language_target_for(path)
    text = read_source(path)
    tree = (parser or TreeSitterParser()).parse(text.encode("utf-8"), target)
    if tree is None:
        raise ParsingError(str(path), target.value, "grammar failed to produce a tree")
    key = str(path)
    return SourceFileModel(path=key, text=text, classes=tuple(_extract_classes(tree.root_node, key)))


def top_level_classes(root: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
    """Class declaration nodes directly under the program, unwrapping exports.

    Anonymous ``export default class {}`` yields a class expression node.
    """
    for statement in root.named_children:
        if statement.type in CLASS_DECLARATIONS:
            yield statement
        elif statement.type == "export_statement":
            declaration = statement.child_by_field_name("declaration")
            value = statement.child_by_field_name("value")
            if declaration is not None and declaration.type in CLASS_DECLARATIONS:
                yield declaration
            elif value is not None and value.type == "class":
                yield value
        elif statement.type == "ambient_declaration":
            for child in statement.named_children:
                if child.type in CLASS_DECLARATIONS:
                    yield child


def parse_class(node: tree_sitter.Node, path: str) -> ClassModel:
    """Build the ClassModel of one class node."""
    name_node = node.child_by_field_name("name")
    methods: list[MethodModel] = []
    properties: list[str] = []
    parameters: list[NodeRef] = []
    initializers: list[NodeRef] = []

    body = node.child_by_field_name("body")
    members = body.named_children if body is not None else []
    for member in members:
        if member.type == "method_definition":
            name = node_text(member.child_by_field_name("name"))
            if name == "constructor":
                parameters.extend(_parameter_refs(member, path))
            elif not _is_accessor(member):
                methods.append(MethodModel(name, node_text(member.child_by_field_name("body"))))
        elif member.type == "method_signature":
            if node_text(member.child_by_field_name("name")) == "constructor":
                parameters.extend(_parameter_refs(member, path))
        elif member.type == "abstract_method_signature":
            methods.append(MethodModel(node_text(member.child_by_field_name("name")), ""))
        elif member.type in FIELD_TYPES:
            name_field = member.child_by_field_name("name") or member.child_by_field_name("property")
            properties.append(node_text(name_field))
            value = member.child_by_field_name("value")
            if value is not None:
                initializers.append(NodeRef(path, value, "initializer"))

    return ClassModel(
        name=node_text(name_node) or None,
        methods=tuple(methods),
        properties=tuple(properties),
        heritage=tuple(NodeRef(path, ref, "heritage") for ref in _heritage_nodes(node)),
        constructor_parameters=tuple(parameters),
        property_initializers=tuple(initializers),
        member_count=sum(1 for member in members if member.type not in NON_MEMBERS),
        line=node.start_point[0] + 1,
    )


def _extract_classes(root: tree_sitter.Node, path: str) -> Iterator[ClassModel]:
    for node in top_level_classes(root):
        yield parse_class(node, path)


def _is_accessor(method: tree_sitter.Node) -> bool:
    return any(child.type in ("get", "set") for child in method.children)


def _parameter_refs(method: tree_sitter.Node, path: str) -> Iterator[NodeRef]:
    parameters = method.child_by_field_name("parameters")
    if parameters is None:
        return
    for parameter in parameters.named_children:
        if parameter.type in PARAMETER_TYPES:
            yield NodeRef(path, parameter, "parameter")


def _heritage_nodes(node: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
    for child in node.named_children:
        if child.type != "class_heritage":
            continue
        for clause in child.named_children:
            if clause.type == "extends_clause":
                yield from clause.children_by_field_name("value")
            elif clause.type == "implements_clause":
                yield from (t for t in clause.named_children if t.type != "comment")
            elif clause.type != "comment":
                # JavaScript grammar: class_heritage holds the expression itself
                yield clause


def _is_type_parameter(node: tree_sitter.Node, name: str) -> bool:
    """True if ``name`` is a type parameter of an enclosing class or function."""
    parent = node.parent
    while parent is not None:
        type_parameters = parent.child_by_field_name("type_parameters")
        if type_parameters is not None:
            for parameter in type_parameters.named_children:
                if node_text(parameter.child_by_field_name("name")) == name:
                    return True
        parent = parent.parent
    return False


def _first_named(node: Optional[tree_sitter.Node]) -> Optional[tree_sitter.Node]:
    if node is None or not node.named_children:
        return None
    return node.named_children[0]


_DECLARATION_KINDS = {
    "class_declaration": "class",
    "abstract_class_declaration": "class",
    "interface_declaration": "interface",
    "enum_declaration": "enum",
    "type_alias_declaration": "type_alias",
    "function_declaration": "function",
    "generator_function_declaration": "function",
    "function_signature": "function",
}


def _index_declarations(
    statements: Iterable[tree_sitter.Node], path: str, symbols: SymbolTable
) -> None:
    for statement in statements:
        kind = _DECLARATION_KINDS.get(statement.type)
        if kind is not None:
            name = node_text(statement.child_by_field_name("name"))
            if name:
                symbols.add(Declaration(name, kind, path))
        elif statement.type in ("lexical_declaration", "variable_declaration"):
            for declarator in statement.named_children:
                if declarator.type == "variable_declarator":
                    name_node = declarator.child_by_field_name("name")
                    if name_node is not None and name_node.type == "identifier":
                        symbols.add(Declaration(node_text(name_node), "variable", path))
        elif statement.type in ("internal_module", "module"):
            name = node_text(statement.child_by_field_name("name")).strip("'\"")
            if name:
                symbols.add(Declaration(name, "namespace", path))
            body = statement.child_by_field_name("body")
            if body is not None:
                _index_declarations(body.named_children, path, symbols)
        elif statement.type in ("export_statement", "ambient_declaration", "expression_statement"):
            # export/declare wrappers; namespaces parse as expression statements
            _index_declarations(statement.named_children, path, symbols)


def _index_imports(root: tree_sitter.Node, path: str, symbols: SymbolTable) -> None:
    for statement in root.named_children:
        if statement.type != "import_statement":
            continue
        for clause in statement.named_children:
            if clause.type != "import_clause":
                continue
            for group in clause.named_children:
                if group.type != "named_imports":
                    continue
                for specifier in group.named_children:
                    if specifier.type != "import_specifier":
                        continue
                    alias = specifier.child_by_field_name("alias")
                    if alias is not None:
                        symbols.add_alias(
                            path,
                            node_text(alias),
                            node_text(specifier.child_by_field_name("name")),
                        )
