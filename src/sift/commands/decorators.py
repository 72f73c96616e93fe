"""Decorators for command functions."""

import functools
import time
import traceback
from collections.abc import Callable

import typer

from sift.models import (
    CodecError,
    ContainerError,
    SiftError,
    StorageIOError,
    TaskNotFoundError,
)
from sift.utils.exit_codes import (
    ERROR_CORRUPT_DATA,
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
    ERROR_STORAGE,
    describe_exit_code,
)
from sift.utils.logger import get_logger
from sift.utils.ui.formatters import format_error


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def exit_code_for(error: Exception) -> int:
    """Map an exception to the exit code the CLI reports for it."""
    if isinstance(error, AppError):
        return error.exit_code
    if isinstance(error, (StorageIOError, ContainerError)):
        return ERROR_STORAGE
    if isinstance(error, CodecError):
        return ERROR_CORRUPT_DATA
    if isinstance(error, TaskNotFoundError):
        return ERROR_NOT_FOUND
    if isinstance(error, ValueError):
        return ERROR_INVALID_ARGS
    return ERROR_GENERAL


def command_wrapper(func: Callable):
    """Decorator to wrap command functions with logging and error reporting."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            result = func(*args, **kwargs)
            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except typer.Exit:
            # Re-raise Typer's own exits (like --help or explicit Exit(0))
            raise

        except (AppError, SiftError, ValueError) as e:
            elapsed = time.monotonic() - start
            code = exit_code_for(e)
            logger.error(
                "command failed: %s (%.3fs) - %s, exit %s",
                cmd,
                elapsed,
                str(e),
                describe_exit_code(code),
            )
            format_error(str(e))
            raise typer.Exit(code=code) from e

        except Exception as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                elapsed,
                str(e),
                traceback.format_exc(),
            )
            # Generic fallback for unexpected crashes
            format_error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=ERROR_GENERAL) from e

    return wrapper
