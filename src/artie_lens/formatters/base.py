"""Base formatter interface for artie-lens output rendering."""

from abc import ABC, abstractmethod
from typing import Sequence

from ..engine import MetricReport


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, reports: Sequence[MetricReport], elapsed: float) -> None:
        """Render reports to stdout."""

    @abstractmethod
    def format(self, reports: Sequence[MetricReport], elapsed: float) -> str:
        """Return formatted string representation of reports."""
