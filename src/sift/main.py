"""Main entry point for the sift CLI."""

from pathlib import Path

import typer

from sift.commands import (
    add_command,
    config_command,
    delete_command,
    done_command,
    due_command,
    list_command,
    move_command,
    purge_command,
    rename_command,
    snooze_command,
    version_command,
)
from sift.commands.session import set_data_file
from sift.services.config_service import get_config_service
from sift.utils.exit_codes import ERROR_GENERAL
from sift.utils.logger import enable_console_logging
from sift.utils.typer_helpers import SuggestingGroup
from sift.utils.ui.console import set_color
from sift.utils.ui.formatters import format_error

app = typer.Typer(
    name="sift",
    cls=SuggestingGroup,
    help="Keep a short, ordered list of tasks in a single durable file",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    file: Path | None = typer.Option(
        None,
        "--file",
        envvar="SIFT_FILE",
        help="Task file to use instead of the configured one",
        dir_okay=False,
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Also print debug logging to stderr"
    ),
) -> None:
    """Keep a short, ordered list of tasks in a single durable file."""
    try:
        config = get_config_service().config
    except RuntimeError as e:
        format_error(str(e))
        raise typer.Exit(ERROR_GENERAL) from e
    set_color(config.output.color)
    set_data_file(file)
    if verbose:
        enable_console_logging()


# Task commands
app.command("list")(list_command.list_tasks)
app.command("add")(add_command.add_task)
app.command("done")(done_command.toggle_done)
app.command("snooze")(snooze_command.toggle_snooze)
app.command("rename")(rename_command.rename_task)
app.command("due")(due_command.set_due)
app.command("move")(move_command.move_task)
app.command("delete")(delete_command.delete_task)
app.command("purge")(purge_command.purge_completed)
app.command("version")(version_command.version)

app.add_typer(config_command.app, name="config", help="Configuration management")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
