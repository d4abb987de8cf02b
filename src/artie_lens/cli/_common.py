"""Shared CLI helpers."""

from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..config import CONFIG_ENV_VAR, DEFAULT_CONFIG_NAME
from ..exceptions import ArtieLensError

console = Console(highlight=False, soft_wrap=True)


def config_option() -> Optional[Path]:
    return typer.Option(
        None,
        "--config",
        "-c",
        envvar=CONFIG_ENV_VAR,
        help=f"Path to the lens config file (default: ./{DEFAULT_CONFIG_NAME})",
        dir_okay=False,
    )


def resolve_config_path(config: Optional[Path] = None) -> Path:
    """Config file from the CLI option, else the default in the working directory."""
    return config if config is not None else Path.cwd() / DEFAULT_CONFIG_NAME


def fail(error: ArtieLensError) -> NoReturn:
    """Print an error without a traceback and exit with status 1."""
    console.print(f"[red]Error:[/red] {escape(str(error))}")
    raise typer.Exit(1)
