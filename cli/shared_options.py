"""
Shared CLI Option Decorators

This module provides reusable Click decorators for common CLI options,
ensuring consistency across subcommands.
"""

import click


def output_option(help=None):
    """Decorator for the bundle output file option."""
    def decorator(f):
        return click.option(
            '--output', '-o',
            required=True,
            help=help or 'Output file path'
        )(f)
    return decorator


def language_option(help=None):
    """Decorator for the repeatable language option."""
    def decorator(f):
        return click.option(
            '--language', '-l',
            'languages',
            required=True,
            multiple=True,
            help=help or 'Languages to include'
        )(f)
    return decorator


def config_option(help=None):
    """Decorator for configuration file options."""
    def decorator(f):
        return click.option(
            '--config',
            default=None,
            type=click.Path(),
            help=help or 'Path to configuration file'
        )(f)
    return decorator


def log_level_option(help=None):
    """Decorator for logging level options."""
    def decorator(f):
        return click.option(
            '--log-level',
            default=None,
            type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
            help=help or 'Logging level'
        )(f)
    return decorator
