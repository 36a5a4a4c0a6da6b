"""
hexconv Error Reporting
=======================

Maps the exceptions raised during a conversion to a message on stderr and
a process exit code:

- Record, file format and file access errors: exit 1
- Out-of-range settings and bad arguments: exit 2
- Anything else is a bug: exit 3, with a traceback under -v
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from hexconv.errors import IntelHexError, RecordDecodeError


class ExitCode(IntEnum):
    """Exit codes of the hexconv commands."""
    SUCCESS = 0
    CONVERSION_ERROR = 1  # Malformed record, not a HEX file, I/O failure
    INVALID_ARGS = 2      # Setting out of range, missing input file
    INTERNAL_ERROR = 3


def describe_error(error: Exception, error_type: str | None = None) -> tuple[str, ExitCode]:
    """
    Choose the message and exit code for an exception.

    Record errors already carry "file:line: error: ..." and the offending
    line, so they are shown as they are. Other conversion errors get an
    "<error_type> error: " prefix.

    Returns:
        (message, exit code)
    """
    if isinstance(error, RecordDecodeError):
        return str(error), ExitCode.CONVERSION_ERROR
    if isinstance(error, IntelHexError):
        prefix = f"{error_type} error: " if error_type else "Error: "
        return f"{prefix}{error}", ExitCode.CONVERSION_ERROR
    if isinstance(error, (click.BadParameter, ValueError, FileNotFoundError, PermissionError)):
        return f"Error: {error}", ExitCode.INVALID_ARGS
    return f"Internal error: {error}", ExitCode.INTERNAL_ERROR


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
    error_type: str | None = None
) -> NoReturn:
    """
    Report a failed hexconv command and exit.

    Args:
        error: The exception that ended the command
        verbose: Print a traceback for internal errors
        error_type: Prefix for conversion errors (e.g. "Conversion")

    Raises:
        SystemExit: Always
    """
    message, code = describe_error(error, error_type)
    click.echo(message, err=True)
    if code == ExitCode.INTERNAL_ERROR and verbose:
        traceback.print_exc()
    sys.exit(code)
