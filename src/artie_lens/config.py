"""Configuration loading and management for artie-lens.

The lens is configured by a JSON file (``.artierc.json`` by default):

    {
      "includes": ["**/*.ts", "!**/*.d.ts"],
      "excludes": ["**/*.test.ts", "node_modules", "dist", "scripts/**"],
      "options": {
        "defaultThresholds": {"warning": 10, "critical": 20,
                              "reportLevels": ["OK", "WARNING", "CRITICAL"]},
        "metrics": {"lcom": {"enabled": true, "warning": 5, "critical": 10}}
      }
    }

Per-metric values left out fall back to ``defaultThresholds`` when the
metric's thresholds are resolved (see metrics.classifier). ``levels`` is
accepted as an alias of ``reportLevels``.

Example:
    >>> config = LensConfig.from_dict(DEFAULT_CONFIG)
    >>> config.enabled_metrics()
    ['lcom', 'wmc', 'rfc', 'cbo']
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .exceptions import (
    ConfigExistsError,
    ConfigNotFoundError,
    FileAccessError,
    InvalidConfigError,
)
from .logging_config import get_logger
from .metrics.models import Level

logger = get_logger(__name__)

DEFAULT_CONFIG_NAME = ".artierc.json"

CONFIG_ENV_VAR = "ARTIE_LENS_CONFIG"

DEFAULT_INCLUDES = ("**/*.ts", "!**/*.d.ts")
DEFAULT_EXCLUDES = ("**/*.test.ts", "node_modules", "dist", "scripts/**")

# Template written by `artie-lens init`
DEFAULT_CONFIG: dict[str, Any] = {
    "includes": list(DEFAULT_INCLUDES),
    "excludes": list(DEFAULT_EXCLUDES),
    "options": {
        "defaultThresholds": {
            "warning": 10,
            "critical": 20,
            "reportLevels": ["OK", "WARNING", "CRITICAL"],
        },
        "metrics": {
            "lcom": {"enabled": True, "warning": 5, "critical": 10},
            "wmc": {"enabled": True, "warning": 10, "critical": 25},
            "rfc": {"enabled": True, "warning": 15, "critical": 30},
            "cbo": {"enabled": True},
        },
    },
}


@dataclass(frozen=True)
class Thresholds:
    """Threshold values; None means "not set here"."""

    warning: Optional[float] = None
    critical: Optional[float] = None
    levels: Optional[tuple[Level, ...]] = None

    @classmethod
    def from_dict(cls, data: Any, key: str) -> Thresholds:
        data = _expect_object(data, key)
        levels_key = "reportLevels" if "reportLevels" in data else "levels"
        return cls(
            warning=_number(data.get("warning"), f"{key}.warning"),
            critical=_number(data.get("critical"), f"{key}.critical"),
            levels=_levels(data.get(levels_key), f"{key}.{levels_key}"),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.warning is not None:
            result["warning"] = self.warning
        if self.critical is not None:
            result["critical"] = self.critical
        if self.levels is not None:
            result["reportLevels"] = [level.name for level in self.levels]
        return result


@dataclass(frozen=True)
class MetricSettings(Thresholds):
    """Settings of one metric: an on/off switch plus optional threshold overrides."""

    enabled: bool = False

    @classmethod
    def from_dict(cls, data: Any, key: str) -> MetricSettings:
        base = Thresholds.from_dict(data, key)
        enabled = data.get("enabled", False)
        if not isinstance(enabled, bool):
            raise InvalidConfigError(f"{key}.enabled", enabled, "expected true or false")
        return cls(
            warning=base.warning,
            critical=base.critical,
            levels=base.levels,
            enabled=enabled,
        )

    def to_dict(self) -> dict[str, Any]:
        return {"enabled": self.enabled, **super().to_dict()}


@dataclass(frozen=True)
class LensConfig:
    """Loaded lens configuration.

    Attributes:
        includes: Source glob patterns (``!`` prefix excludes)
        excludes: Glob patterns of files and directories to skip
        default_thresholds: Fallback thresholds for every metric
        metrics: Metric settings keyed by lowercase name, in declared order
    """

    includes: tuple[str, ...] = DEFAULT_INCLUDES
    excludes: tuple[str, ...] = DEFAULT_EXCLUDES
    default_thresholds: Thresholds = field(default_factory=Thresholds)
    metrics: dict[str, MetricSettings] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> LensConfig:
        """Build a config from parsed JSON.

        Raises:
            InvalidConfigError: If a value has the wrong shape
        """
        data = _expect_object(data, "<root>")
        options = _expect_object(data.get("options", {}), "options")

        metrics: dict[str, MetricSettings] = {}
        for name, settings in _expect_object(options.get("metrics", {}), "options.metrics").items():
            metrics[name.lower()] = MetricSettings.from_dict(settings, f"options.metrics.{name}")

        return cls(
            includes=_patterns(data.get("includes"), "includes", DEFAULT_INCLUDES),
            excludes=_patterns(data.get("excludes"), "excludes", DEFAULT_EXCLUDES),
            default_thresholds=Thresholds.from_dict(
                options.get("defaultThresholds", {}), "options.defaultThresholds"
            ),
            metrics=metrics,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "includes": list(self.includes),
            "excludes": list(self.excludes),
            "options": {
                "defaultThresholds": self.default_thresholds.to_dict(),
                "metrics": {name: m.to_dict() for name, m in self.metrics.items()},
            },
        }

    def enabled_metrics(self) -> list[str]:
        """Names of enabled metrics in declared order."""
        return [name for name, settings in self.metrics.items() if settings.enabled]


def _expect_object(value: Any, key: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise InvalidConfigError(key, value, "expected a JSON object")
    return value


def _number(value: Any, key: str) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidConfigError(key, value, "expected a number")
    return value


def _levels(value: Any, key: str) -> Optional[tuple[Level, ...]]:
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise InvalidConfigError(key, value, "expected a list of level names")
    try:
        return tuple(Level.from_name(v) for v in value)
    except ValueError as e:
        raise InvalidConfigError(key, value, str(e))


def _patterns(value: Any, key: str, default: tuple[str, ...]) -> tuple[str, ...]:
    if value is None:
        return default
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise InvalidConfigError(key, value, "expected a list of glob patterns")
    return tuple(value)


def load_config(config_file: Path) -> LensConfig:
    """Load the lens configuration from a JSON file.

    Args:
        config_file: Path of the configuration file

    Returns:
        Validated LensConfig instance

    Raises:
        ConfigNotFoundError: If the file does not exist
        InvalidConfigError: If the file is not valid JSON or has a wrong shape
    """
    if not config_file.is_file():
        raise ConfigNotFoundError(config_file)

    try:
        data = json.loads(config_file.read_text(encoding="utf-8"))
    except OSError as e:
        raise InvalidConfigError(str(config_file), "<unreadable>", f"cannot read file: {e}")
    except json.JSONDecodeError as e:
        raise InvalidConfigError(str(config_file), "<invalid json>", str(e))

    config = LensConfig.from_dict(data)
    logger.debug(f"Loaded config from {config_file}: metrics {config.enabled_metrics()}")
    return config


def write_default_config(config_file: Path) -> Path:
    """Write the default configuration template.

    Raises:
        ConfigExistsError: If the file already exists (it is left untouched)
        FileAccessError: If the file cannot be written
    """
    if config_file.exists():
        raise ConfigExistsError(config_file)

    try:
        config_file.write_text(json.dumps(DEFAULT_CONFIG, indent=2) + "\n", encoding="utf-8")
    except OSError as e:
        raise FileAccessError(config_file, f"Write failed: {e}")
    logger.debug(f"Wrote default config to {config_file}")
    return config_file
