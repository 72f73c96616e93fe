"""Typer helper utilities."""

from collections.abc import Iterable
from difflib import get_close_matches

import click
import typer
from rich.markup import escape
from typer.core import TyperGroup

from sift.utils.exit_codes import ERROR_INVALID_ARGS
from sift.utils.ui.console import get_console


def suggest_commands(attempted: str, commands: Iterable[str], limit: int = 3) -> list[str]:
    """Return up to ``limit`` command names that look like ``attempted``."""
    return get_close_matches(attempted, list(commands), n=limit, cutoff=0.6)


class SuggestingGroup(TyperGroup):
    """Typer group that answers a mistyped command with the closest matches."""

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            if not args:
                raise
            suggestions = suggest_commands(args[0], self.list_commands(ctx))
            if not suggestions:
                raise

            console = get_console()
            console.print(
                f"[red]Error:[/red] unknown command '{escape(args[0])}' for '{ctx.info_name}'"
            )
            console.print(f"[yellow]Did you mean:[/yellow] {', '.join(suggestions)}")
            raise typer.Exit(ERROR_INVALID_ARGS) from e
