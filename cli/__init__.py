"""
CLI Package for Code Bundler

This package provides the command-line interface using Click groups and
subcommands. Each subcommand is implemented in its own module.

The main entry point is the main() group, which expands '@file.rsp'
arguments before parsing. The cli() function serves as the console script
entry point for setup.py.
"""

import os
import sys

import click
from dotenv import load_dotenv

from bundler import __version__
from bundler.config.response_file import expand_response_files
from bundler.errors import ResponseFileError
from bundler.utils.logging_config import configure_logging

# Load environment variables from .env files
# Priority: .env.dev (if exists) overrides .env
if os.path.exists('.env.dev'):
    load_dotenv('.env.dev')
elif os.path.exists('.env'):
    load_dotenv('.env')
from .bundle import bundle
from .create_rsp import create_rsp
from .help_texts import environment_help, exit_with_error

# Configure logging when CLI package is imported
configure_logging()


class ResponseFileGroup(click.Group):
    """Click group that replaces '@path' arguments with the contents of path."""

    def main(self, args=None, *rest, **kwargs):
        args = list(sys.argv[1:] if args is None else args)
        # 'code-bundler @file.rsp' replays the bundle command
        replay = bool(args) and args[0].startswith('@')
        try:
            args = expand_response_files(args)
        except ResponseFileError as e:
            exit_with_error(e)
        if replay and args and args[0] not in self.commands:
            args = ['bundle'] + args
        return super().main(args, *rest, **kwargs)


@click.group(cls=ResponseFileGroup, epilog=environment_help())
@click.version_option(version=__version__, prog_name='code-bundler')
def main():
    """Code Bundler CLI - Bundle source files into a single text file.

    Collects the files of the current directory tree, filters them by
    language, orders them, and writes them one after another into a .txt
    bundle. Use create-rsp to save a prepared command as a response file
    and replay it with 'code-bundler @file.rsp'.
    """
    pass

# Register subcommands
main.add_command(bundle)
main.add_command(create_rsp)

# Entry point for setup.py console script
def cli():
    """Console script entry point.

    This function is called when the code-bundler command is executed
    from the command line after installation via pip.
    """
    main(prog_name='code-bundler')
