"""Scan command implementation.

Builds the catalog of each configured system and shows a summary or
the full tree. Nothing is written.
"""

from typing import Annotated

import typer

from romshelf.catalog.models import EntryKind
from romshelf.cli.commands._common import require_settings, select_systems
from romshelf.core.catalog import build_catalog
from romshelf.utils.formatting import (
    build_catalog_tree,
    console,
    create_catalog_table,
    print_error,
    print_info,
    print_warning,
)

app = typer.Typer(
    help="Scan ROM directories and show the catalog.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def scan_systems(
    ctx: typer.Context,
    system: Annotated[
        str | None,
        typer.Option(
            "--system",
            "-s",
            help="Only scan this system.",
        ),
    ] = None,
    show_tree: Annotated[
        bool,
        typer.Option(
            "--tree",
            "-t",
            help="Show the catalog tree instead of the summary.",
        ),
    ] = False,
) -> None:
    """Scan ROM directories and load their gamelists.

    Examples:
        romshelf scan               # Summary of every system
        romshelf scan -s nes --tree # Catalog tree of one system
    """
    if ctx.invoked_subcommand is not None:
        return

    configs = select_systems(system)
    if not configs:
        print_info("No systems configured.")
        return

    settings = require_settings()
    table = create_catalog_table()
    failed = False

    for config in configs:
        build = build_catalog(config, settings)
        tree = build.system.tree

        if build.load.error:
            print_error(f"{config.name}: {build.load.error}")
            failed = True
        elif build.load.stale or build.load.unresolved:
            print_warning(
                f"{config.name}: {build.load.stale} stale and "
                f"{build.load.unresolved} unresolved gamelist entries skipped"
            )

        if show_tree:
            label = f"{build.system.full_name} ({build.system.root_path})"
            console.print(build_catalog_tree(tree, label))
            continue

        gamelist = str(build.load.path) if build.load.path.exists() else "-"
        table.add_row(
            config.name,
            str(tree.count(EntryKind.GAME)),
            str(tree.count(EntryKind.FOLDER)),
            str(build.load.loaded),
            str(build.load.stale),
            gamelist,
        )

    if not show_tree:
        console.print(table)

    if failed:
        raise typer.Exit(code=1)
