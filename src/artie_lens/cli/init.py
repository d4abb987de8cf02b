"""Init CLI command -- write the default configuration file."""

from pathlib import Path
from typing import Optional

from rich.markup import escape

from . import app
from ._common import config_option, console, fail, resolve_config_path
from ..config import write_default_config
from ..exceptions import ArtieLensError, ConfigExistsError


@app.command()
def init(config: Optional[Path] = config_option()):
    """
    Initialize an .artierc.json file with default settings.

    An existing file is left untouched.

    [bold cyan]Examples:[/bold cyan]

      artie-lens init

      artie-lens init --config lens.json
    """
    path = resolve_config_path(config)
    try:
        write_default_config(path)
    except ConfigExistsError:
        console.print(
            f"[yellow]⚠️  The file {escape(path.name)} already exists in {escape(str(path.parent))}.[/yellow]"
        )
        return
    except ArtieLensError as e:
        fail(e)

    console.print(f"✅ File {escape(path.name)} created!")
