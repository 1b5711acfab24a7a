"""Settings commands.

Show and change the settings stored in settings.toml.
"""

from enum import Enum
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.table import Table

from romshelf.cli.commands._common import require_settings
from romshelf.core.paths import ensure_config_dir, get_settings_path
from romshelf.core.settings import Settings, SettingsError, save_settings
from romshelf.utils.formatting import console, print_error, print_success

app = typer.Typer(
    help="Show and change settings.",
    no_args_is_help=True,
)

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@app.command()
def show() -> None:
    """Show current settings."""
    settings = require_settings()
    defaults = Settings()

    table = Table(title="Settings", show_lines=False)
    table.add_column("Key", style="bold")
    table.add_column("Value")
    table.add_column("", style="dim")

    for key in Settings.model_fields:
        value = getattr(settings, key)
        display = value.value if isinstance(value, Enum) else str(value).lower()
        marker = "default" if value == getattr(defaults, key) else ""
        table.add_row(key, display, marker)

    console.print(table)


@app.command()
def path() -> None:
    """Print the settings file location."""
    typer.echo(str(get_settings_path()))


@app.command("set")
def set_value(
    key: Annotated[str, typer.Argument(help="Setting name (e.g. disable_gamelist_writes).")],
    value: Annotated[str, typer.Argument(help="New value.")],
) -> None:
    """Change a setting."""
    settings = require_settings()
    key = key.replace("-", "_")

    if key not in Settings.model_fields:
        known = ", ".join(Settings.model_fields)
        print_error(f"Unknown setting: {key} (known: {known})")
        raise typer.Exit(code=1)

    data = settings.model_dump()
    data[key] = _coerce(value)
    try:
        updated = Settings.model_validate(data)
    except ValidationError as e:
        print_error(f"Invalid value for {key}: {value}")
        raise typer.Exit(code=1) from e

    try:
        ensure_config_dir()
        saved = save_settings(updated)
    except (RuntimeError, SettingsError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"{key} = {value} ({saved})")


def _coerce(value: str) -> bool | str:
    """Turn on/off style strings into booleans, leave other strings alone."""
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return value
