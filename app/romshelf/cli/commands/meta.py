"""Metadata commands.

Show and edit the metadata of a single catalog entry. Edits are
written to the system's gamelist immediately.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from romshelf.catalog.errors import CatalogError, MetadataKeyError
from romshelf.catalog.metadata import validate_key
from romshelf.catalog.models import Entry, EntryKind
from romshelf.catalog.system import System
from romshelf.catalog.tree import resolve_entry
from romshelf.cli.commands._common import require_settings, select_systems
from romshelf.core.catalog import build_catalog
from romshelf.core.settings import Settings
from romshelf.gamelist.writer import save_gamelist
from romshelf.utils.formatting import console, print_error, print_success, print_warning

app = typer.Typer(
    help="Show and edit entry metadata.",
    no_args_is_help=True,
)

SystemArg = Annotated[str, typer.Argument(help="System name.")]
PathArg = Annotated[Path, typer.Argument(help="ROM file or folder path.")]


@app.command()
def show(system: SystemArg, path: PathArg) -> None:
    """Show the metadata of an entry."""
    settings = require_settings()
    catalog_system = _build(system, settings)
    entry = _require_entry(catalog_system, path, settings)

    table = Table(title=str(entry.path), show_lines=False)
    table.add_column("Key", style="bold")
    table.add_column("Label", style="dim")
    table.add_column("Value")
    table.add_column("", style="dim")

    for key, value in entry.metadata.items():
        marker = "default" if entry.metadata.is_default(key) else ""
        table.add_row(key, entry.metadata.display_name_for(key), value, marker)

    console.print(table)


@app.command("set")
def set_value(
    system: SystemArg,
    path: PathArg,
    key: Annotated[str, typer.Argument(help="Metadata key (e.g. name, desc, rating).")],
    value: Annotated[str, typer.Argument(help="New value.")],
) -> None:
    """Set a metadata value and save the gamelist."""
    settings = require_settings()
    if not settings.writes_enabled:
        print_error("Gamelist writes are disabled in the settings.")
        raise typer.Exit(code=1)

    try:
        validate_key(key)
    except MetadataKeyError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    catalog_system = _build(system, settings)
    entry = _require_entry(catalog_system, path, settings)

    if not entry.metadata.is_declared(key):
        print_warning(f"'{key}' is not a known {entry.kind.value} metadata key, storing it as-is.")

    entry.metadata.set(key, value)
    result = save_gamelist(catalog_system, settings)
    if not result.success:
        print_error(f"Failed to save gamelist: {result.error}")
        raise typer.Exit(code=1)

    print_success(f"Set {key} on {entry.path.name} ({result.path})")


def _build(name: str, settings: Settings) -> System:
    """Build the catalog of one system or exit."""
    config = select_systems(name)[0]
    build = build_catalog(config, settings)
    if build.load.error:
        print_error(build.load.error)
        raise typer.Exit(code=1)
    return build.system


def _require_entry(system: System, path: Path, settings: Settings) -> Entry:
    """Find or create the entry for ``path`` or exit."""
    target = path.expanduser().absolute()
    kind = EntryKind.FOLDER if target.is_dir() else EntryKind.GAME
    try:
        return resolve_entry(system, target, kind, folder_paths=settings.folder_paths)
    except CatalogError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
