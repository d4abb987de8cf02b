"""Run CLI command -- compute the configured metrics for a directory."""

import time
from enum import Enum
from pathlib import Path
from typing import Optional

import typer

from . import app
from ._common import config_option, fail, resolve_config_path
from ..config import load_config
from ..engine import run_lens
from ..exceptions import ArtieLensError
from ..formatters import get_formatter
from ..logging_config import setup_logging


class OutputFormat(str, Enum):
    RICH = "rich"
    JSON = "json"


@app.command()
def run(
    directory: Optional[Path] = typer.Argument(
        None,
        help="Directory to analyze (default: current directory)",
        show_default=False,
    ),
    config: Optional[Path] = config_option(),
    output_format: OutputFormat = typer.Option(
        OutputFormat.RICH,
        "--format",
        "-f",
        help="Output format",
        case_sensitive=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
):
    """
    Run the lens for all metrics configured.

    [bold cyan]Examples:[/bold cyan]

      artie-lens run

      artie-lens run src

      artie-lens run src --format json --config lens.json
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)
    target = directory if directory is not None else Path.cwd()
    formatter = get_formatter(output_format.value)

    try:
        lens_config = load_config(resolve_config_path(config))
        start = time.perf_counter()
        reports = run_lens(lens_config, target)
        elapsed = time.perf_counter() - start
    except ArtieLensError as e:
        logger.debug("Run aborted", exc_info=True)
        fail(e)

    formatter.render(reports, elapsed)
