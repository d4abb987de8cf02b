"""Output formatters for artie-lens."""

from .base import BaseFormatter
from .json_formatter import JsonFormatter
from .rich_formatter import METRIC_ADVICE, RichFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "rich": RichFormatter,
    "json": JsonFormatter,
}


def get_formatter(name: str) -> BaseFormatter:
    """Instantiate the formatter registered under ``name``.

    Raises:
        ValueError: If name is not one of FORMATTERS
    """
    try:
        return FORMATTERS[name]()
    except KeyError:
        choices = ", ".join(sorted(FORMATTERS))
        raise ValueError(f"Unknown formatter: {name!r}. Choose from: {choices}") from None


__all__ = [
    "BaseFormatter",
    "RichFormatter",
    "JsonFormatter",
    "METRIC_ADVICE",
    "FORMATTERS",
    "get_formatter",
]
