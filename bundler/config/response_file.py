"""
Response file support.

A response file is a replayable list of command-line arguments, one flag
(and its value) per line:

    --output "/home/me/my bundle.txt"
    --language py,js
    --note
    --sort abc
    --remove-empty-lines
    --author "Ada Lovelace"

Writing one is how the create-rsp wizard persists a BundleConfig. Passing
``@path`` anywhere on the command line expands it back into arguments.
"""

import logging
import shlex
from pathlib import Path
from typing import List, Sequence

from bundler.config.schema import SortMode, BundleConfig
from bundler.errors import ResponseFileError, translate_os_error


logger = logging.getLogger(__name__)

RESPONSE_FILE_EXTENSION = ".rsp"
RESPONSE_FILE_PREFIX = "@"

_QUOTE_TRIGGERS = set("\"'\\")


def quote_value(value: str) -> str:
    """Wrap a value in double quotes when it would not survive shell splitting."""
    if value and not any(ch.isspace() or ch in _QUOTE_TRIGGERS for ch in value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def format_response_lines(config: BundleConfig) -> List[str]:
    """Render a config as response file lines, in fixed order.

    Optional flags that are off (or empty) produce no line at all.
    """
    lines = [
        f"--output {quote_value(config.output_path)}",
        f"--language {quote_value(','.join(config.languages))}",
    ]
    if config.include_source_note:
        lines.append("--note")
    if config.sort_mode != SortMode.NONE:
        lines.append(f"--sort {quote_value(config.sort_mode.value)}")
    if config.remove_empty_lines:
        lines.append("--remove-empty-lines")
    if config.author:
        lines.append(f"--author {quote_value(config.author)}")
    return lines


def write_response_file(config: BundleConfig, path: str) -> str:
    """Write the response file for config and return its path.

    Raises:
        AccessDeniedError: path is not writable
        GenericIOError: any other write failure
    """
    lines = format_response_lines(config)
    try:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write("\n".join(lines) + "\n")
    except OSError as e:
        raise translate_os_error(e, path, "write") from e

    logger.info(f"Response file written: {path}")
    logger.debug(f"Response file contents: {lines}")
    return path


def read_response_file(path: str) -> List[str]:
    """Read a response file back into a flat argument list.

    Blank lines and lines starting with '#' are ignored. Each remaining line
    is split with POSIX shell rules, so double-quoted values keep their spaces.

    Raises:
        ResponseFileError: file is missing, unreadable, or badly quoted
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw_lines = f.read().splitlines()
    except OSError as e:
        raise ResponseFileError(f"Cannot read response file {path}: {e.strerror or e}", path=path) from e

    args: List[str] = []
    for number, line in enumerate(raw_lines, start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        try:
            args.extend(shlex.split(stripped, posix=True))
        except ValueError as e:
            raise ResponseFileError(
                f"Invalid quoting in response file {path}, line {number}: {e}",
                path=path,
            ) from e
    return args


def expand_response_files(args: Sequence[str]) -> List[str]:
    """Replace every '@path' argument with the arguments stored in that file.

    Expansion is not recursive: '@' arguments inside a response file are
    passed through as-is.
    """
    expanded: List[str] = []
    for arg in args:
        if arg.startswith(RESPONSE_FILE_PREFIX) and len(arg) > 1:
            response_path = arg[len(RESPONSE_FILE_PREFIX):]
            logger.debug(f"Expanding response file {response_path}")
            expanded.extend(read_response_file(response_path))
        else:
            expanded.append(arg)
    return expanded
