"""
File operations for artie-lens.

Source discovery with include/exclude globs and checked file reads.
"""

import os
import re
from collections.abc import Generator
from pathlib import Path
from typing import Iterable

from .exceptions import FileAccessError
from .logging_config import get_logger

logger = get_logger(__name__)


def read_source(filepath: Path, encoding: str = "utf-8", errors: str = "replace") -> str:
    """
    Read a source file.

    Args:
        filepath: File to read
        encoding: Text encoding
        errors: Decoding error handler; the default replaces undecodable
            bytes with U+FFFD so a stray byte never aborts a run

    Returns:
        File contents as string

    Raises:
        FileAccessError: If file cannot be read
    """
    try:
        with open(filepath, encoding=encoding, errors=errors) as f:
            return f.read()
    except OSError as e:
        raise FileAccessError(filepath, f"OS error: {e}")


# One path segment that does not start with a dot
_VISIBLE_SEGMENT = r"(?!\.)[^/]+"


def _normalize_pattern(pattern: str) -> str:
    pattern = pattern.replace("\\", "/")
    if pattern.startswith("./"):
        pattern = pattern[2:]
    return pattern.rstrip("/") or pattern


def _segment_to_regex(segment: str) -> str:
    regex = ""
    for position, char in enumerate(segment):
        if char == "*":
            piece = "[^/]*"
        elif char == "?":
            piece = "[^/]"
        else:
            piece = re.escape(char)
        if position == 0 and char in "*?":
            piece = r"(?!\.)" + piece
        regex += piece
    return regex


def glob_to_regex(pattern: str) -> re.Pattern[str]:
    """
    Compile a glob pattern with ``**`` support into an anchored regex.

    ``**/`` matches zero or more directories, ``*`` and ``?`` never cross ``/``.
    Wildcards never match a name starting with ``.``: ``**/*.ts`` skips
    ``.hidden.ts`` and everything under ``.cache/``, while ``.cache/*.ts``
    names the directory and matches.
    """
    segments = _normalize_pattern(pattern).split("/")
    last = len(segments) - 1

    regex = ""
    separator = ""
    for index, segment in enumerate(segments):
        if segment != "**":
            regex += separator + _segment_to_regex(segment)
        elif index < last:
            regex += f"{separator}(?:{_VISIBLE_SEGMENT}/)*"
            separator = ""
            continue
        elif separator:
            regex += f"(?:/{_VISIBLE_SEGMENT})*"
        else:
            regex += f"(?:{_VISIBLE_SEGMENT}(?:/{_VISIBLE_SEGMENT})*)?"
        separator = "/"
    return re.compile(f"^{regex}$")


def names_hidden_path(pattern: str) -> bool:
    """True if a pattern spells out a segment starting with ``.``."""
    return any(
        segment.startswith(".") and segment not in (".", "..")
        for segment in _normalize_pattern(pattern).split("/")
    )


def matches_glob(relative_path: str, pattern: str) -> bool:
    """Check if a relative path (forward slashes) matches a glob pattern."""
    return glob_to_regex(pattern).match(relative_path) is not None


def is_excluded(relative_path: str, excludes: Iterable[str]) -> bool:
    """
    Check a relative path against exclude patterns.

    A pattern excludes a file when it matches the path itself or any of its
    leading directories, so ``node_modules`` excludes the whole tree.
    """
    parts = relative_path.split("/")
    prefixes = ["/".join(parts[:i]) for i in range(1, len(parts) + 1)]
    for pattern in excludes:
        regex = glob_to_regex(pattern)
        if any(regex.match(prefix) for prefix in prefixes):
            return True
    return False


def scan_directory(
    root_dir: Path, follow_symlinks: bool = False, skip_hidden: bool = False
) -> Generator[Path, None, None]:
    """
    Yield regular files under a directory.

    Symlinked files and directories are skipped unless ``follow_symlinks``.
    With ``skip_hidden``, directories whose name starts with ``.`` are not
    entered.

    Raises:
        FileAccessError: If the directory cannot be scanned
    """

    def on_error(error: OSError) -> None:
        raise FileAccessError(root_dir, f"Directory scan failed: {error}")

    for dirpath, dirnames, filenames in os.walk(root_dir, onerror=on_error, followlinks=follow_symlinks):
        if skip_hidden:
            dirnames[:] = [name for name in dirnames if not name.startswith(".")]
        dirnames.sort()
        for name in sorted(filenames):
            path = Path(dirpath) / name
            if path.is_symlink() and not follow_symlinks:
                continue
            if path.is_file():
                yield path


def list_source_files(root: Path, includes: Iterable[str], excludes: Iterable[str]) -> list[Path]:
    """
    List source files under ``root``.

    Args:
        root: Directory the patterns are relative to
        includes: Glob patterns; entries starting with ``!`` act as excludes
        excludes: Glob patterns of files and directories to skip

    Returns:
        Sorted, de-duplicated absolute paths of regular files. Files and
        directories starting with ``.`` only match patterns that name them.

    Raises:
        FileAccessError: If ``root`` is not a readable directory
    """
    root = Path(root).resolve()
    if not root.is_dir():
        raise FileAccessError(root, "Not a directory")

    positive = [p for p in includes if not p.startswith("!")]
    negated = [p[1:] for p in includes if p.startswith("!")]
    all_excludes = [*excludes, *negated]

    found: set[Path] = set()
    skip_hidden = not any(names_hidden_path(pattern) for pattern in positive)
    for path in scan_directory(root, skip_hidden=skip_hidden):
        relative = path.relative_to(root).as_posix()
        if not any(matches_glob(relative, pattern) for pattern in positive):
            continue
        if is_excluded(relative, all_excludes):
            continue
        found.add(path)

    files = sorted(found)
    logger.debug(f"Found {len(files)} source files under {root}")
    return files
