"""
CLI Error Handling
==================

Maps exceptions to messages and exit codes for the command-line tool.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from ie32to64.errors import ConfigurationError, TranslatorError


class ExitCode(IntEnum):
    """Exit codes for the CLI."""
    SUCCESS = 0
    CONVERSION_ERROR = 1  # Output written, but some lines could not be converted
    INVALID_ARGS = 2      # Invalid arguments, unreadable input or unwritable output
    INTERNAL_ERROR = 3    # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception and exit with the matching exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always
    """
    if isinstance(error, ConfigurationError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, TranslatorError):
        click.echo(f"Conversion error: {error}", err=True)
        sys.exit(ExitCode.CONVERSION_ERROR)

    elif isinstance(error, click.BadParameter):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, OSError):
        # Missing input, permission denied, unwritable output
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, UnicodeDecodeError):
        # Input is read as UTF-8
        click.echo(f"Error: input is not valid UTF-8: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
