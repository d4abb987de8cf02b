"""Source dialects understood by the front-end."""

from enum import Enum
from pathlib import Path
from typing import Union


class LanguageTarget(str, Enum):
    """Grammar a file is parsed with."""

    TYPESCRIPT = "typescript"
    TSX = "tsx"
    JAVASCRIPT = "javascript"


EXTENSIONS: dict[str, LanguageTarget] = {
    ".ts": LanguageTarget.TYPESCRIPT,
    ".mts": LanguageTarget.TYPESCRIPT,
    ".cts": LanguageTarget.TYPESCRIPT,
    ".tsx": LanguageTarget.TSX,
    ".js": LanguageTarget.JAVASCRIPT,
    ".jsx": LanguageTarget.JAVASCRIPT,
    ".mjs": LanguageTarget.JAVASCRIPT,
    ".cjs": LanguageTarget.JAVASCRIPT,
}


def language_target_for(filepath: Union[str, Path]) -> LanguageTarget:
    """Pick the grammar for a file by extension.

    Unknown extensions are parsed as TypeScript, a superset of JavaScript.
    """
    return EXTENSIONS.get(Path(filepath).suffix.lower(), LanguageTarget.TYPESCRIPT)
