"""Help CLI command -- list the available commands."""

from . import app
from ._common import console


@app.command("help")
def show_help():
    """
    Show the available commands.
    """
    console.print("Artie-Lens\n")
    console.print("init - Initialize an .artierc.json file with default settings")
    console.print("run  - Run the lens for all metrics configured")
    console.print("help - Show this list")
