"""Command 'version' of sift"""

import platform

import typer

from sift import __version__
from sift.commands.session import data_file
from sift.utils.ui.console import get_console

app = typer.Typer()
console = get_console(highlight=False)


@app.command()
def version() -> None:
    """Show version information and the task file in use"""
    console.print(f"sift {__version__}")
    console.print(f"Python {platform.python_version()}")
    console.print(f"Task file: {data_file()}")
