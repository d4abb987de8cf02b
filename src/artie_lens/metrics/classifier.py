"""Threshold resolution and severity classification."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..exceptions import MetricNotFoundError, MissingThresholdError
from .models import Level, ThresholdConfig

if TYPE_CHECKING:
    from ..config import LensConfig


def classify(total: float, thresholds: ThresholdConfig) -> Level:
    """Map a metric total to its severity band.

    ``total >= critical`` is CRITICAL, else ``total >= warning`` is WARNING,
    else OK. Both bounds are inclusive.
    """
    if total >= thresholds.critical:
        return Level.CRITICAL
    if total >= thresholds.warning:
        return Level.WARNING
    return Level.OK


def resolve_thresholds(config: LensConfig, metric_name: str) -> ThresholdConfig:
    """Resolve one metric's thresholds, falling back to the configured defaults.

    Args:
        config: Loaded lens configuration
        metric_name: Metric key, matched case-insensitively

    Returns:
        ThresholdConfig. A disabled metric resolves to ``enabled=False`` without
        consulting its thresholds.

    Raises:
        MetricNotFoundError: If the metric is absent from the configuration
        MissingThresholdError: If a value is set neither on the metric nor in
            defaultThresholds
    """
    metric = config.metrics.get(metric_name.lower())
    if metric is None:
        raise MetricNotFoundError(metric_name)

    if not metric.enabled:
        return ThresholdConfig(enabled=False)

    defaults = config.default_thresholds
    warning = metric.warning if metric.warning is not None else defaults.warning
    critical = metric.critical if metric.critical is not None else defaults.critical
    levels = metric.levels if metric.levels is not None else defaults.levels

    if warning is None:
        raise MissingThresholdError(metric_name, "warning")
    if critical is None:
        raise MissingThresholdError(metric_name, "critical")
    if levels is None:
        raise MissingThresholdError(metric_name, "reportLevels")

    return ThresholdConfig(
        enabled=True,
        warning=warning,
        critical=critical,
        report_levels=frozenset(levels),
    )
