"""CLI entry point: the typer app and its subcommands."""

import sys
from typing import Optional, Sequence

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="artie-lens",
    help="Artie-Lens - structural metrics (CBO, RFC, LCOM, WMC) for TypeScript projects",
    add_completion=False,
    rich_markup_mode="rich",
)

COMMANDS = ("init", "run", "help")


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold cyan]Artie-Lens[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)


@app.callback()
def _callback(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """
    Artie-Lens - structural metrics (CBO, RFC, LCOM, WMC) for TypeScript projects.
    """


# Import subcommands to register them
from .init import init as _init  # noqa: F401, E402
from .run import run as _run  # noqa: F401, E402
from .usage import show_help as _show_help  # noqa: F401, E402


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Console script entry point.

    Anything that is not a known command or an option prints a warning and
    returns without running the app.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    if not args or (args[0] not in COMMANDS and not args[0].startswith("-")):
        console.print("[yellow]⚠️  Invalid command[/yellow]")
        return
    app(args=args, prog_name="artie-lens")
