"""
CLI Error Handling
==================

Maps exceptions to messages and exit codes for the hp82240b command.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn, Optional

import click

from hp82240b.errors import PrinterError


class ExitCode(IntEnum):
    """Exit codes for the hp82240b command."""
    SUCCESS = 0
    RENDER_ERROR = 1     # Configuration, serial or rendering error
    INVALID_ARGS = 2     # Invalid arguments or missing files
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
    error_type: Optional[str] = None,
) -> NoReturn:
    """
    Report an exception and exit with the matching exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors
        error_type: Optional prefix for the error message (e.g., "Render")

    Raises:
        SystemExit: Always
    """
    if isinstance(error, PrinterError):
        prefix = f"{error_type} error: " if error_type else "Error: "
        click.echo(f"{prefix}{error}", err=True)
        sys.exit(ExitCode.RENDER_ERROR)

    elif isinstance(error, (click.BadParameter, FileNotFoundError, PermissionError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
