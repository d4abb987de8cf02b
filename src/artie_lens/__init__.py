"""
Artie-Lens - structural metrics for TypeScript codebases

Computes coupling (CBO), response for a class (RFC), lack of cohesion (LCOM)
and weighted method complexity (WMC), classifies every measurement against
warning/critical thresholds and reports aggregate statistics.
"""

__version__ = "1.0.0"

from .config import LensConfig, load_config
from .engine import MetricReport, run_lens, run_metric
from .metrics import Level, MetricInsights, MetricResult

__all__ = [
    "run_lens",
    "run_metric",
    "MetricReport",
    "LensConfig",
    "load_config",
    "Level",
    "MetricResult",
    "MetricInsights",
]
