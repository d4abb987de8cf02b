"""Tree-sitter parser wrapper.

One parser per dialect, created lazily and reused:

    parser = TreeSitterParser()
    tree = parser.parse(code_bytes, LanguageTarget.TYPESCRIPT)
"""

from __future__ import annotations

from typing import Any, Callable, Optional

import tree_sitter
import tree_sitter_javascript
import tree_sitter_typescript

from .languages import LanguageTarget

# tree-sitter >= 0.23 grammars return a PyCapsule wrapped by Language()
_GRAMMARS: dict[LanguageTarget, Callable[[], Any]] = {
    LanguageTarget.TYPESCRIPT: tree_sitter_typescript.language_typescript,
    LanguageTarget.TSX: tree_sitter_typescript.language_tsx,
    LanguageTarget.JAVASCRIPT: tree_sitter_javascript.language,
}


def get_supported_languages() -> list[str]:
    """Dialects with a bundled grammar."""
    return [target.value for target in _GRAMMARS]


class TreeSitterParser:
    """Wrapper around tree-sitter for the TypeScript family of grammars."""

    def __init__(self) -> None:
        self._parsers: dict[LanguageTarget, tree_sitter.Parser] = {}

    def _parser_for(self, target: LanguageTarget) -> tree_sitter.Parser:
        parser = self._parsers.get(target)
        if parser is None:
            language = tree_sitter.Language(_GRAMMARS[target]())
            parser = tree_sitter.Parser(language)
            self._parsers[target] = parser
        return parser

    def parse(self, code: bytes, target: LanguageTarget) -> Optional[tree_sitter.Tree]:
        """Parse code and return its syntax tree.

        tree-sitter recovers from syntax errors, so a tree is returned for
        malformed input too; None only means the grammar could not run.
        """
        try:
            return self._parser_for(target).parse(code)
        except ValueError:
            return None

    def is_language_supported(self, language: str) -> bool:
        return language in get_supported_languages()


def node_text(node: Optional[tree_sitter.Node]) -> str:
    """Decoded source text of a node ("" for None)."""
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")
