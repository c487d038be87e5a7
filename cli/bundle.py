"""
Bundle Subcommand Module

This module implements the bundle subcommand for the Code Bundler CLI.
It turns the command-line flags into a BundleConfig and hands it to the
Bundler core, which is shared with the create-rsp wizard.
"""

import logging
import re
import sys
import time
from typing import Iterable, List, Optional

import click

from bundler.bundler import Bundler, BundleResult
from bundler.config.environment import EnvironmentVariables
from bundler.config.manager import ConfigurationManager
from bundler.config.schema import BundleConfig, BundlerSettings
from bundler.errors import BundleError
from bundler.utils.logging_config import get_progress_context, logging_config

from .shared_options import output_option, language_option, config_option, log_level_option
from .help_texts import (
    BUNDLE_HELP, BUNDLE_OUTPUT_HELP, BUNDLE_LANGUAGE_HELP, BUNDLE_NOTE_HELP,
    BUNDLE_SORT_HELP, BUNDLE_REMOVE_EMPTY_LINES_HELP, BUNDLE_AUTHOR_HELP,
    CONFIG_HELP, LOG_LEVEL_HELP, ExitCodes, exit_with_error,
)


logger = logging.getLogger(__name__)


def split_language_values(values: Iterable[str]) -> List[str]:
    """Flatten repeated/comma separated --language values.

    A value that is blank is kept as-is so validation can reject it.
    """
    tokens: List[str] = []
    for value in values:
        parts = [part for part in re.split(r"[,\s]+", value or "") if part]
        if parts:
            tokens.extend(parts)
        else:
            tokens.append(value)
    return tokens


def build_bundle_config(
    output: Optional[str],
    languages: Iterable[str],
    note: bool = False,
    sort: Optional[str] = None,
    remove_empty_lines: bool = False,
    author: Optional[str] = None,
) -> BundleConfig:
    """Build a BundleConfig from raw option values.

    Raises:
        InvalidOutputPathError, NoLanguagesSpecifiedError, InvalidSortModeError
    """
    return BundleConfig(
        output_path=output,
        languages=split_language_values(languages),
        include_source_note=note,
        sort_mode=sort,
        remove_empty_lines=remove_empty_lines,
        author=author,
    )


def prepare_settings(config_file: Optional[str], log_level: Optional[str]) -> BundlerSettings:
    """Load settings and configure logging; exits on invalid settings."""
    manager = ConfigurationManager()
    overrides = {'log_level': log_level.lower() if log_level else None}
    try:
        settings = manager.load_settings(config_file=config_file, cli_overrides=overrides)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCodes.INVALID_CONFIGURATION)

    logging_config.configure_logging(level=settings.log_level, log_file=settings.log_file, force=True)
    logger.debug(f"Settings sources: {manager.list_sources(config_file) or ['defaults']}")
    logging_config.log_configuration_details(manager.settings_as_dict(settings))

    for message in EnvironmentVariables.validate_environment_setup():
        logger.warning(message)
    return settings


def run_bundle(config: BundleConfig, settings: BundlerSettings) -> BundleResult:
    """Run the Bundler core with progress reporting and timing."""
    bundler = Bundler(excluded_dirs=settings.excluded_dirs, encoding=settings.encoding)
    start = time.time()
    with get_progress_context("Bundling files") as progress:
        result = bundler.run(config, progress=progress)
    logging_config.log_operation_timing("Bundle", time.time() - start)
    return result


@click.command(help=BUNDLE_HELP)
@output_option(help=BUNDLE_OUTPUT_HELP)
@language_option(help=BUNDLE_LANGUAGE_HELP)
@click.option('--note', '-n', is_flag=True, help=BUNDLE_NOTE_HELP)
@click.option('--sort', '-s', default=None, help=BUNDLE_SORT_HELP)
@click.option('--remove-empty-lines', '-r', is_flag=True, help=BUNDLE_REMOVE_EMPTY_LINES_HELP)
@click.option('--author', '-a', default=None, help=BUNDLE_AUTHOR_HELP)
@config_option(help=CONFIG_HELP)
@log_level_option(help=LOG_LEVEL_HELP)
def bundle(output, languages, note, sort, remove_empty_lines, author, config, log_level):
    """
    Bundle code files from the current directory into a single file.

    Examples:
        # Every Python file, sorted by path, without blank lines
        code-bundler bundle -o bundle.txt -l py -s abc -r

        # C# and JavaScript with source notes and an author header
        code-bundler bundle -o out.txt -l cs,js --note --author "Ada Lovelace"

        # Replay a response file created by create-rsp
        code-bundler @mycli.rsp
    """
    settings = prepare_settings(config, log_level)

    if not (author or "").strip():
        author = settings.default_author

    try:
        bundle_config = build_bundle_config(output, languages, note, sort, remove_empty_lines, author)
        result = run_bundle(bundle_config, settings)
    except BundleError as e:
        exit_with_error(e)

    click.echo(f"Bundle file was created at: {result.output_path}")
