"""Tests for artie_lens.engine (running configured metrics end to end)."""

from pathlib import Path

import pytest

from artie_lens.config import LensConfig
from artie_lens.engine import UNNAMED_CLASS, run_lens, run_metric
from artie_lens.exceptions import (
    FileAccessError,
    MetricNotFoundError,
    ProjectConfigNotFoundError,
    UnsupportedMetricError,
)
from artie_lens.metrics import Level


def _config(metrics, levels=("OK", "WARNING", "CRITICAL"), warning=10, critical=20):
    return LensConfig.from_dict(
        {
            "options": {
                "defaultThresholds": {
                    "warning": warning,
                    "critical": critical,
                    "reportLevels": list(levels),
                },
                "metrics": metrics,
            }
        }
    )


def _totals(report):
    return {Path(r.subject).name: r.total for r in report.results}


class TestRunLens:
    def test_sample_project(self, sample_project, default_config):
        reports = run_lens(default_config, sample_project)
        assert [r.name for r in reports] == ["lcom", "wmc", "rfc", "cbo"]
        lcom, wmc, rfc, cbo = reports

        assert {r.subject: r.total for r in lcom.results} == {
            "Logger": 0,
            "Repository": 0,
            "UserService": 1,
        }
        assert _totals(wmc) == {"logger.ts": 1, "repository.ts": 1, "service.ts": 5}
        assert _totals(rfc) == {"logger.ts": 0, "repository.ts": 0, "service.ts": 0}
        assert _totals(cbo) == {"logger.ts": 0, "repository.ts": 0, "service.ts": 3}
        assert all(r.label is Level.OK for report in reports for r in report.results)

    def test_insights(self, sample_project, default_config):
        (wmc,) = run_lens(default_config, sample_project, metrics=["wmc"])
        assert wmc.insights.total == 7
        assert wmc.insights.max == 5
        assert wmc.insights.min == 1
        assert wmc.insights.average == "2.33"
        assert wmc.insights.deviation == "1.89"

    def test_subjects_are_absolute_paths(self, sample_project, default_config):
        (rfc,) = run_lens(default_config, sample_project, metrics=["rfc"])
        assert all(Path(r.subject).is_absolute() for r in rfc.results)

    def test_no_metrics(self, tmp_path):
        assert run_lens(_config({}), tmp_path) == []

    def test_not_a_directory(self, tmp_path, default_config):
        path = tmp_path / "file.ts"
        path.write_text("", encoding="utf-8")
        with pytest.raises(FileAccessError):
            run_lens(default_config, path)

    def test_unsupported_metric(self, tmp_path):
        config = _config({"noc": {"enabled": True}})
        with pytest.raises(UnsupportedMetricError) as excinfo:
            run_lens(config, tmp_path)
        assert excinfo.value.supported == ["cbo", "lcom", "rfc", "wmc"]


class TestScenarios:
    def test_ambient_constructor_parameter(self, write_files, tmp_path):
        write_files(
            {
                "tsconfig.json": "{}",
                "a.ts": "export class A {\n  constructor(dep: Unknown) {}\n}\n",
            }
        )
        (cbo,) = run_lens(_config({"cbo": {"enabled": True}}), tmp_path)
        assert _totals(cbo) == {"a.ts": 1}
        assert cbo.insights.total == 1

    def test_disjoint_methods(self, write_files, tmp_path):
        source = """\
export class Split {
  a = 1
  b = 2
  first() { return this.a }
  second() { return this.b }
}
"""
        write_files({"split.ts": source})
        (lcom,) = run_lens(_config({"lcom": {"enabled": True}}), tmp_path)
        assert [(r.subject, r.total) for r in lcom.results] == [("Split", 1)]

    def test_unnamed_class(self, write_files, tmp_path):
        source = "export default class {\n  a() {}\n  b() {}\n}\n"
        write_files({"anon.ts": source})
        (lcom,) = run_lens(_config({"lcom": {"enabled": True}}), tmp_path)
        assert [r.subject for r in lcom.results] == [UNNAMED_CLASS]


class TestRunMetric:
    def test_report_levels_filter_before_aggregation(self, sample_project):
        config = _config(
            {"cbo": {"enabled": True, "warning": 1, "critical": 3}},
            levels=("WARNING", "CRITICAL"),
        )
        report = run_metric("cbo", config, sample_project.resolve())
        assert [(Path(r.subject).name, r.label) for r in report.results] == [
            ("service.ts", Level.CRITICAL)
        ]
        assert report.insights.total == 3
        assert report.insights.min == 3
        assert report.insights.deviation == "0.00"

    def test_nothing_reported(self, sample_project):
        config = _config({"wmc": {"enabled": True}}, levels=("CRITICAL",))
        report = run_metric("wmc", config, sample_project.resolve())
        assert report.results == ()
        assert report.insights.average == "0"

    def test_per_metric_levels_override_defaults(self, sample_project):
        config = _config({"wmc": {"enabled": True, "reportLevels": ["OK"]}}, levels=("CRITICAL",))
        report = run_metric("wmc", config, sample_project.resolve())
        assert len(report.results) == 3

    def test_disabled_metric(self, sample_project):
        config = _config({"cbo": {"enabled": False}})
        report = run_metric("cbo", config, sample_project)
        assert not report.thresholds.enabled
        assert report.results == ()

    def test_metric_not_configured(self, sample_project):
        with pytest.raises(MetricNotFoundError):
            run_metric("rfc", _config({}), sample_project)

    def test_unknown_unconfigured_metric_not_found(self, sample_project):
        with pytest.raises(MetricNotFoundError) as excinfo:
            run_metric("noc", _config({"cbo": {"enabled": True}}), sample_project)
        assert excinfo.value.message == "Metric noc not found."

    def test_unknown_disabled_metric_skipped(self, sample_project):
        report = run_metric("noc", _config({"noc": {"enabled": False}}), sample_project)
        assert report.results == ()

    def test_missing_project_config(self, write_files, tmp_path):
        write_files({"a.ts": "export class A {}\n"})
        config = _config({"cbo": {"enabled": True}, "wmc": {"enabled": True}})
        with pytest.raises(ProjectConfigNotFoundError):
            run_metric("cbo", config, tmp_path)
        with pytest.raises(ProjectConfigNotFoundError):
            run_metric("wmc", config, tmp_path)

    def test_rfc_without_project_config(self, write_files, tmp_path):
        write_files({"a.ts": "function a() {}\nfunction b() {}\n"})
        report = run_metric("rfc", _config({"rfc": {"enabled": True}}), tmp_path)
        assert _totals(report) == {"a.ts": 2}
