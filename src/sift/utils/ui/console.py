"""Console utilities for the sift CLI."""

from rich.console import Console

_consoles: dict[bool, Console] = {}
_color = True


def get_console(highlight: bool = True) -> Console:
    """Get the shared Rich Console for the given highlight mode."""
    console = _consoles.get(highlight)
    if console is None:
        console = Console(highlight=highlight, no_color=not _color)
        _consoles[highlight] = console
    return console


def set_color(enabled: bool) -> None:
    """Enable or disable colour on every console, including ones handed out already."""
    global _color
    _color = enabled
    for console in _consoles.values():
        console.no_color = not enabled
