"""
CLI Module Main Entry Point

Allows the CLI package to be executed directly with:
    python -m cli @mycli.rsp
"""

from . import cli

if __name__ == '__main__':
    cli()
