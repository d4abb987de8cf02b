"""Descriptive statistics over a metric's result set."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

import numpy as np

from .models import MetricInsights, MetricResult


def aggregate(results: Sequence[MetricResult]) -> MetricInsights:
    """Reduce results to total, max, min, average and standard deviation.

    The deviation is the population standard deviation
    sqrt(mean((x - mean)^2)), not the sample one. Nothing is filtered here;
    report-level filtering happens before this stage.

    Args:
        results: Measurements of one metric run

    Returns:
        MetricInsights; all zeros (with "0" strings) for an empty input
    """
    if not results:
        return MetricInsights.empty()

    values = np.array([r.total for r in results], dtype=float)
    total = values.sum()
    average = values.mean()
    deviation = values.std(ddof=0)

    return MetricInsights(
        total=_as_number(total),
        max=_as_number(values.max()),
        min=_as_number(values.min()),
        average=format_fixed(average),
        deviation=format_fixed(deviation),
    )


def _as_number(value: float) -> float:
    """Collapse whole numpy floats back to plain ints for display."""
    value = float(value)
    return int(value) if value.is_integer() else value


def format_fixed(value: float, places: int = 2) -> str:
    """Format with a fixed number of decimals, ties rounded up.

    Rounds the exact binary value of ``value``, so 0.125 gives "0.13" while
    1.005 (stored just below) gives "1.00".
    """
    quantum = Decimal(1).scaleb(-places)
    return str(Decimal(float(value)).quantize(quantum, rounding=ROUND_HALF_UP))
