"""Rich terminal formatter for artie-lens."""

from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape

from ..engine import MetricReport
from ..metrics import Level, MetricInsights, MetricResult
from .base import BaseFormatter

LEVEL_STYLES = {
    Level.OK: "green",
    Level.WARNING: "yellow",
    Level.CRITICAL: "red",
}

# Advice printed under each result, per metric and level
METRIC_ADVICE: dict[str, dict[Level, str]] = {
    "lcom": {
        Level.OK: "Cohesion is healthy. Classes are focused.",
        Level.WARNING: "Cohesion is getting weaker → the class may be mixing multiple responsibilities.",
        Level.CRITICAL: "Very low cohesion → the class is handling too many concerns. "
        "Suggestion: split into smaller classes (SRP).",
    },
    "wmc": {
        Level.OK: "Complexity is under control.",
        Level.WARNING: "Complexity is increasing → consider extracting helper methods or simplifying logic.",
        Level.CRITICAL: "High complexity → difficult to test and maintain. "
        "Suggestion: refactor into smaller methods or delegate responsibilities to services.",
    },
    "cbo": {
        Level.OK: "Coupling level is acceptable.",
        Level.WARNING: "Coupling is getting higher → class depends on many others.",
        Level.CRITICAL: "High coupling → changes in other classes may easily break this one. "
        "Suggestion: apply Dependency Inversion or create interfaces.",
    },
    "rfc": {
        Level.OK: "Response set is small and manageable.",
        Level.WARNING: "Class exposes too many methods → consider reducing its interface.",
        Level.CRITICAL: "Very high number of accessible methods → too many responsibilities. "
        "Suggestion: encapsulate better and remove unnecessary methods.",
    },
}


def metric_advice(metric: str, level: Level) -> Optional[str]:
    return METRIC_ADVICE.get(metric.lower(), {}).get(level)


class RichFormatter(BaseFormatter):
    """Per-metric summary block followed by color-coded results."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False, soft_wrap=True)

    def render(self, reports: Sequence[MetricReport], elapsed: float) -> None:
        for report in reports:
            self._print_summary(report.name, report.insights)
            self._print_results(report.name, report.results)
        self.console.print(f"\nTotal time: {elapsed:.3f}s")

    def format(self, reports: Sequence[MetricReport], elapsed: float) -> str:
        with self.console.capture() as capture:
            self.render(reports, elapsed)
        return capture.get()

    def _print_summary(self, metric: str, insights: MetricInsights) -> None:
        self.console.print(f"\n📊 [bold]{metric.upper()} Metrics:[/bold]")
        self.console.print(f"- Total: {insights.total}")
        self.console.print(f"- Average: {insights.average}")
        self.console.print(f"- Maximum: {insights.max}")
        self.console.print(f"- Minimum: {insights.min}")
        self.console.print(f"- Standard Deviation: {insights.deviation}")

    def _print_results(self, metric: str, results: Sequence[MetricResult]) -> None:
        if not results:
            return

        self.console.print("\nFiles:")
        for result in results:
            style = LEVEL_STYLES[result.label]
            line = f"[{result.label.name}] {result.subject} → {result.total}"
            self.console.print(f"[{style}]{escape(line)}[/{style}]")
            advice = metric_advice(metric, result.label)
            if advice:
                self.console.print(f"   💡 {advice}")
