"""Sync command implementation.

Scans each configured system, loads its gamelist and writes the
reconciled gamelist back.
"""

from typing import Annotated

import typer
from rich.table import Table

from romshelf.cli.commands._common import require_settings, select_systems
from romshelf.core.catalog import build_catalog
from romshelf.gamelist.writer import GamelistSaveResult, save_gamelist
from romshelf.utils.formatting import console, print_info, print_success, print_warning

app = typer.Typer(
    help="Scan systems and write their gamelists.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def sync_systems(
    ctx: typer.Context,
    system: Annotated[
        str | None,
        typer.Option(
            "--system",
            "-s",
            help="Only sync this system.",
        ),
    ] = None,
) -> None:
    """Scan systems and rewrite their gamelist.xml files.

    Entries whose metadata equals the defaults are left out; gamelist
    entries for files that were not found are kept as they are.
    """
    if ctx.invoked_subcommand is not None:
        return

    configs = select_systems(system)
    if not configs:
        print_info("No systems configured.")
        return

    settings = require_settings()
    if not settings.writes_enabled:
        print_warning("Gamelist writes are disabled in the settings; nothing will be written.")

    results: list[tuple[str, GamelistSaveResult]] = []
    for config in configs:
        build = build_catalog(config, settings)
        if build.load.error:
            # Never overwrite a gamelist we could not read
            results.append(
                (config.name, GamelistSaveResult(path=build.load.path, error=build.load.error))
            )
            continue
        results.append((config.name, save_gamelist(build.system, settings)))

    _print_results(results)

    if any(not result.success for _, result in results):
        raise typer.Exit(code=1)


def _print_results(results: list[tuple[str, GamelistSaveResult]]) -> None:
    """Display save results."""
    table = Table(title="Gamelist Sync", show_lines=False)
    table.add_column("System", style="bold")
    table.add_column("Status", width=10)
    table.add_column("Written", justify="right")
    table.add_column("Kept", justify="right")
    table.add_column("Details", style="dim", overflow="fold")

    for name, result in results:
        if result.skipped:
            status = "[info]skipped[/]"
            detail = "writes disabled"
        elif result.success:
            status = "[success]saved[/]"
            detail = str(result.path)
        else:
            status = "[error]failed[/]"
            detail = result.error or "Unknown error"
        table.add_row(name, status, str(result.written), str(result.preserved), detail)

    console.print(table)

    saved = sum(1 for _, r in results if r.success and not r.skipped)
    failed = sum(1 for _, r in results if not r.success)
    if failed:
        print_warning(f"{saved} saved, {failed} failed")
    elif saved:
        print_success(f"All {saved} gamelist(s) saved.")
