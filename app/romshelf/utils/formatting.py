"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme
from rich.tree import Tree

if TYPE_CHECKING:
    from romshelf.catalog.models import CatalogTree, Entry

THEME = Theme(
    {
        "text": "#ffffff",
        "muted": "#b2bec3",
        "header": "#69B9A1",
        "bold_header": "bold #69B9A1",
        "border": "#29526d",
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "bold #f53263",
        "info": "#0ec1c8",
        "game": "#69B9A1",
        "folder": "bold #0e8ac8",
    }
)


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances
console = Console(theme=THEME, color_system=_detect_color_system())
err_console = Console(theme=THEME, stderr=True, color_system=_detect_color_system())


def create_catalog_table(title: str = "Catalog") -> Table:
    """Create a pre-configured table for per-system catalog summaries.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for catalog display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],  # Zebra striping for readability
    )
    table.add_column("System", style="bold", no_wrap=True)
    table.add_column("Games", style="info", justify="right")
    table.add_column("Folders", style="info", justify="right")
    table.add_column("Loaded", justify="right")
    table.add_column("Stale", justify="right")
    table.add_column("Gamelist", style="muted", overflow="fold")
    return table


def build_catalog_tree(tree: CatalogTree, label: str) -> Tree:
    """Render a catalog tree as a Rich tree.

    Entries show their display name; non-default metadata keys other
    than the name are listed in muted text.

    Args:
        tree: Catalog tree to render.
        label: Label of the root node.

    Returns:
        Rich Tree.
    """
    view = Tree(f"[bold_header]{escape(label)}[/]")
    _add_children(tree, tree.root, view)
    return view


def _add_children(tree: CatalogTree, entry: Entry, view: Tree) -> None:
    for child in tree.children(entry):
        extra = [key for key, _ in child.metadata.non_default_items() if key != "name"]
        suffix = f" [muted]({', '.join(extra)})[/]" if extra else ""
        name = escape(child.metadata.get("name") or child.name)
        if child.is_folder:
            branch = view.add(f"[folder]{name}/[/]{suffix}")
            _add_children(tree, child, branch)
        else:
            view.add(f"[game]{name}[/]{suffix}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
