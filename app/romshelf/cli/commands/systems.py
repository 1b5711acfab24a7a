"""Systems commands.

List, add and remove the emulated systems stored in systems.toml.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from romshelf.core.catalog import system_from_config
from romshelf.core.paths import get_systems_path
from romshelf.core.systems import (
    SystemsConfigError,
    SystemsConfigNotFoundError,
    load_systems_config,
    require_systems,
    save_systems_config,
)
from romshelf.models.systems import SystemConfig, SystemsConfig
from romshelf.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Manage configured systems.",
    no_args_is_help=True,
)


@app.command("list")
def list_systems() -> None:
    """List configured systems and their gamelist locations."""
    config = require_systems()

    if not config.systems:
        print_info("No systems configured.")
        return

    table = Table(title="Systems", show_lines=False)
    table.add_column("Name", style="bold")
    table.add_column("Full name")
    table.add_column("ROM directory", overflow="fold")
    table.add_column("Extensions", style="dim")
    table.add_column("Gamelist", style="dim", overflow="fold")

    for system_config in config.systems:
        system = system_from_config(system_config)
        table.add_row(
            system.name,
            system.full_name,
            str(system.root_path),
            " ".join(system.extensions) or "-",
            str(system.gamelist_path()),
        )

    console.print(table)


@app.command()
def add(
    name: Annotated[str, typer.Argument(help="System identifier (e.g. nes).")],
    path: Annotated[Path, typer.Argument(help="ROM directory.")],
    extensions: Annotated[
        list[str] | None,
        typer.Option("--ext", "-e", help="Game file extension (repeatable)."),
    ] = None,
    fullname: Annotated[
        str | None,
        typer.Option("--fullname", "-n", help="Display name."),
    ] = None,
    gamelist: Annotated[
        Path | None,
        typer.Option("--gamelist", "-g", help="Explicit gamelist.xml location."),
    ] = None,
) -> None:
    """Add a system to systems.toml."""
    try:
        config = load_systems_config()
    except SystemsConfigNotFoundError:
        config = SystemsConfig()
    except SystemsConfigError as e:
        print_error(f"Failed to load systems: {e}")
        raise typer.Exit(code=1) from e

    if config.get(name) is not None:
        print_error(f"System already configured: {name}")
        raise typer.Exit(code=1)

    try:
        system = SystemConfig(
            name=name,
            fullname=fullname,
            path=str(path.expanduser().absolute()),
            extensions=extensions or [],
            gamelist=str(gamelist.expanduser().absolute()) if gamelist else None,
        )
        updated = SystemsConfig(systems=[*config.systems, system])
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    try:
        saved = save_systems_config(updated)
    except SystemsConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Added system {name} ({saved})")


@app.command()
def remove(
    name: Annotated[str, typer.Argument(help="System identifier.")],
) -> None:
    """Remove a system from systems.toml. Its gamelist is left alone."""
    config = require_systems()
    if config.get(name) is None:
        print_error(f"Unknown system: {name}")
        raise typer.Exit(code=1)

    updated = SystemsConfig(systems=[s for s in config.systems if s.name != name])
    try:
        save_systems_config(updated)
    except SystemsConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Removed system {name} from {get_systems_path()}")
