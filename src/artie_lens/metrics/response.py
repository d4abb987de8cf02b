"""Response for a class (RFC): counting callable units in a file.

The shipped strategy is a lexical approximation. It counts occurrences of the
``function`` keyword plus lines that look like ``class ... name(``. It does not
resolve overloads, arrow-function properties or inherited members, and a
keyword inside a comment or string is counted like any other. Callers depend
only on the UnitCounter protocol, so a structural counter can replace it.
"""

from __future__ import annotations

import re
from typing import Protocol

# ASCII keeps \w and \b aligned with the original JavaScript-style pattern;
# without DOTALL, ".*" never crosses a newline.
FUNCTION_PATTERN = re.compile(r"\bfunction\b|\bclass\b.*\b\w+\s*\(", re.ASCII)


class UnitCounter(Protocol):
    """Counts callable units in raw source text."""

    def count(self, text: str) -> int: ...


class LexicalUnitCounter:
    """Regex-based approximation of the number of callable units."""

    def __init__(self, pattern: re.Pattern[str] = FUNCTION_PATTERN) -> None:
        self.pattern = pattern

    def count(self, text: str) -> int:
        return sum(1 for _ in self.pattern.finditer(text))


DEFAULT_COUNTER = LexicalUnitCounter()


def compute_rfc(text: str, counter: UnitCounter = DEFAULT_COUNTER) -> int:
    """RFC of one file's text."""
    return counter.count(text)
