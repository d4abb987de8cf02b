"""Structural metrics engine: CBO, RFC, LCOM, WMC plus classification and stats."""

from .classifier import classify, resolve_thresholds
from .cohesion import compute_lcom
from .complexity import aggregate_complexity, compute_wmc
from .coupling import SymbolResolver, collect_dependencies, compute_cbo
from .models import Level, MetricInsights, MetricResult, ThresholdConfig
from .response import LexicalUnitCounter, UnitCounter, compute_rfc
from .statistics import aggregate

__all__ = [
    "Level",
    "MetricResult",
    "MetricInsights",
    "ThresholdConfig",
    "classify",
    "resolve_thresholds",
    "aggregate",
    "SymbolResolver",
    "collect_dependencies",
    "compute_cbo",
    "UnitCounter",
    "LexicalUnitCounter",
    "compute_rfc",
    "compute_lcom",
    "aggregate_complexity",
    "compute_wmc",
]
