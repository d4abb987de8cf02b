"""Exception hierarchy for artie-lens."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    ParsingError,
    ProgramBuildError,
)
from .base import ArtieLensError
from .config import (
    ConfigExistsError,
    ConfigNotFoundError,
    ConfigurationError,
    InvalidConfigError,
    MetricNotFoundError,
    MissingThresholdError,
    ProjectConfigNotFoundError,
    UnsupportedMetricError,
)

__all__ = [
    "ArtieLensError",
    "AnalysisError",
    "FileAccessError",
    "ParsingError",
    "ProgramBuildError",
    "ConfigurationError",
    "ConfigNotFoundError",
    "ConfigExistsError",
    "InvalidConfigError",
    "MetricNotFoundError",
    "UnsupportedMetricError",
    "MissingThresholdError",
    "ProjectConfigNotFoundError",
]
