"""TypeScript/JavaScript front-end: parsing, program model and complexity trees."""

from .complexity import ComplexityTreeBuilder, get_complexity_tree
from .languages import LanguageTarget, language_target_for
from .model import (
    DEFAULT_RULES,
    ClassModel,
    ComplexityNode,
    ComplexityRules,
    Declaration,
    MethodModel,
    SourceFileModel,
    Symbol,
)
from .program import Program, SymbolTable, build_program, parse_source_file
from .project import CompilerOptions, ScriptTarget, find_project_config, load_compiler_options
from .treesitter_parser import TreeSitterParser

__all__ = [
    "LanguageTarget",
    "language_target_for",
    "TreeSitterParser",
    "ClassModel",
    "MethodModel",
    "SourceFileModel",
    "Declaration",
    "Symbol",
    "ComplexityRules",
    "ComplexityNode",
    "DEFAULT_RULES",
    "CompilerOptions",
    "ScriptTarget",
    "find_project_config",
    "load_compiler_options",
    "Program",
    "SymbolTable",
    "build_program",
    "parse_source_file",
    "ComplexityTreeBuilder",
    "get_complexity_tree",
]
