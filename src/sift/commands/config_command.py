"""Configuration management commands."""

from typing import Any

import typer

from sift.services.config_service import get_config_service
from sift.utils.exit_codes import ERROR_INVALID_ARGS
from sift.utils.ui.console import get_console
from sift.utils.ui.formatters import format_info, format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(help="Configuration management commands")
console = get_console(highlight=False)


def parse_value(value: str) -> Any:
    """Convert a command line value to the type it most likely stands for."""
    lowered = value.lower()
    if lowered in ("none", "null"):
        return None
    if lowered in ("true", "false"):
        return lowered == "true"
    if value.isdigit():
        return int(value)
    return value


@app.command("show")
@command_wrapper
def show_config() -> None:
    """Show the current configuration."""
    config_svc = get_config_service()
    console.print_json(config_svc.config.model_dump_json())


@app.command("path")
@command_wrapper
def config_path() -> None:
    """Show where the configuration file lives."""
    console.print(str(get_config_service().config_path))


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., output.color)"),
) -> None:
    """Get a configuration value."""
    try:
        value = get_config_service().get(key)
    except KeyError as e:
        raise AppError(f"Unknown configuration key '{key}'", exit_code=ERROR_INVALID_ARGS) from e
    console.print(str(value))


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., snooze_days)"),
    value: str = typer.Argument(..., help="Configuration value ('none' to unset)"),
) -> None:
    """Set a configuration value."""
    parsed_value = parse_value(value)
    try:
        get_config_service().set(key, parsed_value)
    except KeyError as e:
        raise AppError(f"Unknown configuration key '{key}'", exit_code=ERROR_INVALID_ARGS) from e
    format_success(f"Configuration '{key}' set to '{parsed_value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        confirm = typer.confirm("Are you sure you want to reset the entire configuration?")
        if not confirm:
            format_info("Cancelled")
            raise typer.Exit(0)

    get_config_service().reset_config()
    format_success("Configuration reset to defaults")
