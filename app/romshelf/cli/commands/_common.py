"""Shared helpers for CLI commands.

Loads the settings and the systems selected on the command line,
turning configuration errors into user-facing messages.
"""

import typer

from romshelf.core.settings import Settings, SettingsError, load_settings
from romshelf.core.systems import require_systems
from romshelf.models.systems import SystemConfig
from romshelf.utils.formatting import print_error


def require_settings() -> Settings:
    """Load settings or exit with an error message.

    Raises:
        typer.Exit: If the settings file is invalid.
    """
    try:
        return load_settings()
    except SettingsError as e:
        print_error(f"Failed to load settings: {e}")
        raise typer.Exit(code=1) from e


def select_systems(name: str | None) -> list[SystemConfig]:
    """Get the configured systems to operate on.

    Args:
        name: System name, or None for all systems.

    Returns:
        Selected system configurations.

    Raises:
        typer.Exit: If the systems file cannot be loaded or the system is unknown.
    """
    config = require_systems()

    if name is None:
        return list(config.systems)

    system = config.get(name)
    if system is None:
        known = ", ".join(s.name for s in config.systems) or "none"
        print_error(f"Unknown system: {name} (configured: {known})")
        raise typer.Exit(code=1)
    return [system]
