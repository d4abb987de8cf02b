"""Metric runner.

Runs the enabled metrics of a LensConfig against a directory:

    config -> enabled metrics (declared order)
      -> resolve thresholds
      -> calculator: list files, measure, classify
      -> keep results whose level is reported
      -> aggregate

Each calculator lists, reads and parses its own files; nothing is shared
between metrics.

Example:
    >>> config = load_config(Path(".artierc.json"))
    >>> for report in run_lens(config, Path("src")):
    ...     print(report.name, report.insights.total)
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence

from .config import LensConfig
from .exceptions import FileAccessError, UnsupportedMetricError
from .file_ops import list_source_files, read_source
from .logging_config import get_logger
from .metrics import (
    MetricInsights,
    MetricResult,
    ThresholdConfig,
    aggregate,
    classify,
    compute_cbo,
    compute_lcom,
    compute_rfc,
    compute_wmc,
    resolve_thresholds,
)
from .scanning import (
    DEFAULT_RULES,
    TreeSitterParser,
    build_program,
    find_project_config,
    get_complexity_tree,
    language_target_for,
    load_compiler_options,
    parse_source_file,
)

logger = get_logger(__name__)

UNNAMED_CLASS = "[UnnamedClass]"

MetricCalculator = Callable[[Path, ThresholdConfig, Sequence[str], Sequence[str]], list[MetricResult]]


@dataclass(frozen=True)
class MetricReport:
    """Outcome of one metric run, ready for a formatter.

    Attributes:
        name: Metric key as configured (e.g. "cbo")
        thresholds: Resolved thresholds used for classification
        insights: Statistics over ``results``
        results: Reported results (already filtered by report level)
    """

    name: str
    thresholds: ThresholdConfig
    insights: MetricInsights
    results: tuple[MetricResult, ...]


def _measure(subject: str, total: int, thresholds: ThresholdConfig) -> MetricResult:
    return MetricResult(subject=subject, total=total, label=classify(total, thresholds))


def calculate_cbo(
    directory: Path, thresholds: ThresholdConfig, includes: Sequence[str], excludes: Sequence[str]
) -> list[MetricResult]:
    """CBO of every source file.

    Raises:
        ProjectConfigNotFoundError: If the directory has no tsconfig*.json
        ProgramBuildError: If the program model cannot be built
    """
    config_path = find_project_config(directory)
    files = list_source_files(directory, includes, excludes)
    if not files:
        return []

    program = build_program(config_path, files)
    return [_measure(str(file), compute_cbo(file, program), thresholds) for file in files]


def calculate_rfc(
    directory: Path, thresholds: ThresholdConfig, includes: Sequence[str], excludes: Sequence[str]
) -> list[MetricResult]:
    """RFC of every source file."""
    files = list_source_files(directory, includes, excludes)
    return [_measure(str(file), compute_rfc(read_source(file)), thresholds) for file in files]


def calculate_lcom(
    directory: Path, thresholds: ThresholdConfig, includes: Sequence[str], excludes: Sequence[str]
) -> list[MetricResult]:
    """LCOM of every top-level class, subject is the class name."""
    files = list_source_files(directory, includes, excludes)
    parser = TreeSitterParser()

    results = []
    for file in files:
        for class_model in parse_source_file(file, parser).classes:
            name = class_model.name or UNNAMED_CLASS
            results.append(_measure(name, compute_lcom(class_model), thresholds))
    return results


def calculate_wmc(
    directory: Path, thresholds: ThresholdConfig, includes: Sequence[str], excludes: Sequence[str]
) -> list[MetricResult]:
    """WMC of every source file.

    Raises:
        ProjectConfigNotFoundError: If the directory has no tsconfig*.json
    """
    config_path = find_project_config(directory)
    options = load_compiler_options(config_path)
    files = list_source_files(directory, includes, excludes)
    if not files:
        return []

    logger.debug(f"WMC: script target {options.target.name}")
    return [
        _measure(
            str(file),
            compute_wmc(file, get_complexity_tree, language_target_for(file), DEFAULT_RULES),
            thresholds,
        )
        for file in files
    ]


METRIC_CALCULATORS: dict[str, MetricCalculator] = {
    "cbo": calculate_cbo,
    "rfc": calculate_rfc,
    "lcom": calculate_lcom,
    "wmc": calculate_wmc,
}


def run_metric(name: str, config: LensConfig, directory: Path) -> MetricReport:
    """Run one metric and aggregate its reported results.

    The configuration is consulted first, so an unknown name that is also
    unconfigured reports as not found.

    Raises:
        MetricNotFoundError: If ``name`` is not configured
        UnsupportedMetricError: If no calculator exists for an enabled ``name``
    """
    thresholds = resolve_thresholds(config, name)
    if not thresholds.enabled:
        logger.debug(f"{name.upper()}: disabled, skipped")
        return MetricReport(name, thresholds, MetricInsights.empty(), ())

    calculator = METRIC_CALCULATORS.get(name.lower())
    if calculator is None:
        raise UnsupportedMetricError(name, sorted(METRIC_CALCULATORS))

    results = calculator(directory, thresholds, config.includes, config.excludes)
    reported = tuple(r for r in results if thresholds.reports(r.label))
    logger.info(f"{name.upper()}: {len(results)} measured, {len(reported)} reported")

    return MetricReport(
        name=name,
        thresholds=thresholds,
        insights=aggregate(reported),
        results=reported,
    )


def run_lens(
    config: LensConfig,
    directory: Path,
    metrics: Optional[Iterable[str]] = None,
) -> list[MetricReport]:
    """Run every enabled metric (or the given ones) in declared order.

    Any ArtieLensError aborts the whole run.

    Raises:
        FileAccessError: If ``directory`` is not a directory
    """
    names = list(metrics) if metrics is not None else config.enabled_metrics()
    directory = Path(directory).resolve()
    if not directory.is_dir():
        raise FileAccessError(directory, "Not a directory")
    logger.info(f"Running {', '.join(names) or 'no metrics'} on {directory}")

    start = time.perf_counter()
    reports = [run_metric(name, config, directory) for name in names]
    logger.debug(f"Lens finished in {time.perf_counter() - start:.3f}s")
    return reports
