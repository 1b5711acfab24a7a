"""CLI package for romshelf.

This package contains the Typer application and all subcommands.
"""

from romshelf.cli.main import app

__all__ = ["app"]
