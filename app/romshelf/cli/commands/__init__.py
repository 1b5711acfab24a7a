"""CLI commands for romshelf.

This package contains all subcommand implementations.
"""

from romshelf.cli.commands import config, meta, scan, sync, systems

__all__ = ["config", "meta", "scan", "sync", "systems"]
