"""JSON formatter for artie-lens."""

import json
from dataclasses import asdict
from typing import Any, Sequence

from ..engine import MetricReport
from .base import BaseFormatter


def _report_to_dict(report: MetricReport) -> dict[str, Any]:
    thresholds = report.thresholds
    return {
        "metric": report.name,
        "thresholds": {
            "enabled": thresholds.enabled,
            "warning": thresholds.warning,
            "critical": thresholds.critical,
            "reportLevels": sorted(level.name for level in thresholds.report_levels),
        },
        "insights": asdict(report.insights),
        "results": [
            {"subject": r.subject, "total": r.total, "label": r.label.name}
            for r in report.results
        ],
    }


class JsonFormatter(BaseFormatter):
    """Render reports as JSON."""

    def render(self, reports: Sequence[MetricReport], elapsed: float) -> None:
        print(self.format(reports, elapsed))

    def format(self, reports: Sequence[MetricReport], elapsed: float) -> str:
        data = {
            "metrics": [_report_to_dict(r) for r in reports],
            "elapsed_seconds": round(elapsed, 3),
        }
        return json.dumps(data, indent=2, ensure_ascii=False)
