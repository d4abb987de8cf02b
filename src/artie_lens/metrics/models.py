"""Result models shared by the metric calculators and the report layer.

    Level           OK < WARNING < CRITICAL
    ThresholdConfig resolved warning/critical bands for one metric
    MetricResult    one measured subject (file path or class name)
    MetricInsights  aggregate statistics over a filtered result set
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Level(IntEnum):
    """Severity band of a measurement, ordered by severity."""

    OK = 0
    WARNING = 1
    CRITICAL = 2

    def __str__(self) -> str:
        return self.name

    @classmethod
    def from_name(cls, name: str) -> Level:
        """Parse a level name case-insensitively.

        Raises:
            ValueError: If the name is not a known level.
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            known = ", ".join(level.name for level in cls)
            raise ValueError(f"unknown level '{name}' (expected one of: {known})") from None


@dataclass(frozen=True)
class ThresholdConfig:
    """Resolved thresholds for one metric.

    ``warning <= critical`` is assumed but not enforced. When it does not hold
    every total at or above ``critical`` is CRITICAL and WARNING is never
    produced.
    """

    enabled: bool
    warning: float = 0
    critical: float = 0
    report_levels: frozenset[Level] = frozenset()

    def reports(self, level: Level) -> bool:
        """True if results at this level should be reported."""
        return level in self.report_levels


@dataclass(frozen=True)
class MetricResult:
    """A single measurement.

    Attributes:
        subject: Absolute file path (CBO, RFC, WMC) or class name (LCOM)
        total: Measured value
        label: Severity band of ``total``
    """

    subject: str
    total: int
    label: Level


@dataclass(frozen=True)
class MetricInsights:
    """Aggregate statistics over one metric's reported results.

    ``average`` and ``deviation`` are preformatted strings: two decimals for a
    non-empty result set, ``"0"`` for an empty one.
    """

    total: float
    max: float
    min: float
    average: str
    deviation: str

    @classmethod
    def empty(cls) -> MetricInsights:
        return cls(total=0, max=0, min=0, average="0", deviation="0")
