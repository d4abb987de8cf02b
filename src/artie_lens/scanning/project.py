"""Project (tsconfig) discovery and compiler options.

CBO and WMC need a tsconfig*.json in the analyzed directory. Only the options
the front-end uses are read; ``extends`` chains with relative paths are
followed, with the extending file taking precedence.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Any

from ..exceptions import InvalidConfigError, ProjectConfigNotFoundError
from ..logging_config import get_logger

logger = get_logger(__name__)

# Strings are matched first so "//" inside a string value survives.
_JSONC_TOKENS = re.compile(r'("(?:\\.|[^"\\])*")|//[^\n]*|/\*.*?\*/', re.DOTALL)
_TRAILING_COMMA = re.compile(r",(\s*[}\]])")

_MAX_EXTENDS_DEPTH = 16


class ScriptTarget(IntEnum):
    """ECMAScript target from compilerOptions.target."""

    ES3 = 0
    ES5 = 1
    ES2015 = 2
    ES2016 = 3
    ES2017 = 4
    ES2018 = 5
    ES2019 = 6
    ES2020 = 7
    ES2021 = 8
    ES2022 = 9
    ES2023 = 10
    ESNEXT = 99

    @classmethod
    def parse(cls, value: Any) -> ScriptTarget:
        """Map a tsconfig target string; unknown or missing values give ES2015."""
        if isinstance(value, str):
            name = value.strip().upper()
            if name == "ES6":
                return cls.ES2015
            if name in cls.__members__:
                return cls[name]
        return cls.ES2015


@dataclass(frozen=True)
class CompilerOptions:
    """The subset of compilerOptions the front-end reads."""

    target: ScriptTarget = ScriptTarget.ES2015
    allow_js: bool = False


def find_project_config(directory: Path) -> Path:
    """First tsconfig*.json directly inside ``directory`` (sorted by name).

    Raises:
        ProjectConfigNotFoundError: If there is none
    """
    candidates = sorted(
        entry
        for entry in directory.iterdir()
        if entry.is_file() and entry.name.startswith("tsconfig") and entry.name.endswith(".json")
    )
    if not candidates:
        raise ProjectConfigNotFoundError(directory)
    return candidates[0]


def parse_jsonc(text: str) -> Any:
    """Parse JSON that may contain comments and trailing commas (tsconfig style)."""
    stripped = _JSONC_TOKENS.sub(lambda m: m.group(1) or "", text)
    return json.loads(_TRAILING_COMMA.sub(r"\1", stripped))


def _read_raw_options(config_path: Path, depth: int = 0) -> dict[str, Any]:
    try:
        data = parse_jsonc(config_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise InvalidConfigError(str(config_path), "<unreadable>", f"cannot read file: {e}")
    except json.JSONDecodeError as e:
        raise InvalidConfigError(str(config_path), "<invalid json>", f"Failed to read tsconfig.json: {e}")

    if not isinstance(data, dict):
        raise InvalidConfigError(str(config_path), type(data).__name__, "expected a JSON object")

    options: dict[str, Any] = {}
    parent = data.get("extends")
    if isinstance(parent, str) and parent.startswith(".") and depth < _MAX_EXTENDS_DEPTH:
        parent_path = (config_path.parent / parent).resolve()
        if parent_path.suffix != ".json":
            parent_path = parent_path.with_name(parent_path.name + ".json")
        if parent_path.is_file():
            options.update(_read_raw_options(parent_path, depth + 1))
        else:
            logger.debug(f"tsconfig extends target not found: {parent_path}")

    compiler_options = data.get("compilerOptions")
    if compiler_options is None:
        compiler_options = {}
    if not isinstance(compiler_options, dict):
        raise InvalidConfigError("compilerOptions", compiler_options, "expected a JSON object")
    options.update(compiler_options)
    return options


def load_compiler_options(config_path: Path) -> CompilerOptions:
    """Read compiler options from a tsconfig file.

    Raises:
        InvalidConfigError: If the file cannot be read or is not valid JSON(C)
    """
    raw = _read_raw_options(config_path)
    return CompilerOptions(
        target=ScriptTarget.parse(raw.get("target")),
        allow_js=bool(raw.get("allowJs", False)),
    )
