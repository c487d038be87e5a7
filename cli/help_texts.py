"""
Centralized Help Text Constants

This module provides all CLI help text constants for commands and options,
the process exit codes, and the single place where bundler errors are
reported to the user.
"""

from bundler.config.environment import EnvironmentVariables
from bundler.errors import (
    AccessDeniedError,
    BundleErrorInfo,
    DirectoryNotFoundError,
    InvalidOutputPathError,
    InvalidSortModeError,
    NoLanguagesSpecifiedError,
    NoMatchError,
)


# Exit codes for different error types
class ExitCodes:
    SUCCESS = 0
    GENERAL_ERROR = 1
    INVALID_ARGUMENT = 2
    NO_MATCHING_FILES = 3
    INVALID_CONFIGURATION = 4
    FILE_NOT_FOUND = 6
    PERMISSION_ERROR = 7


# Command help texts
BUNDLE_HELP = "Bundle code files to a single file."
CREATE_RSP_HELP = "Create a response file with a prepared bundle command."

# Option help texts - bundle command
BUNDLE_OUTPUT_HELP = (
    "File path and name of the bundle. Must end with .txt. "
    "Relative paths are resolved against the current directory."
)

BUNDLE_LANGUAGE_HELP = (
    "Programming languages to include, as file extensions without the dot "
    "(e.g. py, js, cs). Repeat the option or separate values with commas. "
    "Use 'all' to bundle every file."
)

BUNDLE_NOTE_HELP = "Write the source path of each file in the bundle as a comment."

BUNDLE_SORT_HELP = (
    "Order files by 'abc' (full path) or by 'type' (extension, then path). "
    "Leave empty to keep discovery order."
)

BUNDLE_REMOVE_EMPTY_LINES_HELP = "Delete empty and whitespace-only lines from every file."

BUNDLE_AUTHOR_HELP = "Write the author's name in a note at the top of the bundle."

CONFIG_HELP = (
    "Path to a settings file (.yaml). If not specified, looks for:\n"
    "  1. ./.code-bundler/config.yaml (project config)\n"
    "  2. ~/.code-bundler/config.yaml (user config)\n"
    "  3. Built-in defaults"
)

LOG_LEVEL_HELP = "Logging level for detailed output. Use DEBUG for troubleshooting."

CREATE_RSP_RUN_HELP = "Run the bundle right after the response file is written."


def exit_code_for(error: Exception) -> int:
    """Exit code matching an error's category."""
    if isinstance(error, (InvalidOutputPathError, NoLanguagesSpecifiedError, InvalidSortModeError)):
        return ExitCodes.INVALID_ARGUMENT
    if isinstance(error, NoMatchError):
        return ExitCodes.NO_MATCHING_FILES
    if isinstance(error, DirectoryNotFoundError):
        return ExitCodes.FILE_NOT_FOUND
    if isinstance(error, AccessDeniedError):
        return ExitCodes.PERMISSION_ERROR
    return ExitCodes.GENERAL_ERROR


def exit_with_error(error: Exception):
    """
    Report an error as one line on stderr and exit with its code.

    Args:
        error: The exception that ended the command
    """
    import click
    import logging
    import sys

    info = BundleErrorInfo.from_exception(error)
    logging.getLogger(__name__).debug(
        f"{info.error_type}: {info.message} details={info.details} suggestion={info.suggestion}"
    )
    click.echo(info.format_line(), err=True)
    sys.exit(exit_code_for(error))


def environment_help() -> str:
    """Epilog listing the CODE_BUNDLER_* variables, kept unwrapped by click."""
    lines = ["\b", "Environment variables:"]
    for name, description in EnvironmentVariables.get_variable_documentation().items():
        lines.append(f"  {name}  {description}")
    return "\n".join(lines)
