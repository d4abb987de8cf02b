"""Configuration exceptions: lens config file, metric settings, project config."""

from pathlib import Path
from typing import Any, List

from .base import ArtieLensError


class ConfigurationError(ArtieLensError):
    """Base class for configuration-related errors."""

    pass


class ConfigNotFoundError(ConfigurationError):
    """Raised when the lens configuration file does not exist."""

    def __init__(self, path: Path):
        super().__init__(
            f"Config file not found: {path}",
            details={"hint": "run `artie-lens init` to create one"},
        )
        self.path = path


class ConfigExistsError(ConfigurationError):
    """Raised when `init` would overwrite an existing configuration file."""

    def __init__(self, path: Path):
        super().__init__(f"The file {path.name} already exists in {path.parent}")
        self.path = path


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class MetricNotFoundError(ConfigurationError):
    """Raised when a metric name is absent from the configuration."""

    def __init__(self, metric_name: str):
        super().__init__(f"Metric {metric_name} not found.")
        self.metric_name = metric_name


class UnsupportedMetricError(ConfigurationError):
    """Raised when the configuration enables a metric no calculator exists for."""

    def __init__(self, metric_name: str, supported: List[str]):
        super().__init__(
            f"Unsupported metric: {metric_name}",
            details={"supported": ", ".join(supported)},
        )
        self.metric_name = metric_name
        self.supported = supported


class MissingThresholdError(ConfigurationError):
    """Raised when a threshold has neither a metric value nor a default."""

    def __init__(self, metric_name: str, key: str):
        super().__init__(
            f"Threshold '{key}' is not set for metric {metric_name}",
            details={"reason": "no metric value and no entry in defaultThresholds"},
        )
        self.metric_name = metric_name
        self.key = key


class ProjectConfigNotFoundError(ConfigurationError):
    """Raised when no tsconfig*.json exists in the analyzed directory."""

    def __init__(self, directory: Path):
        super().__init__(
            "tsconfig.json not found.",
            details={"directory": str(directory)},
        )
        self.directory = directory
