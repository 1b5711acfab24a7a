"""Lookup-or-create of catalog entries by filesystem path.

Walks a system's tree one path component at a time, creating the
missing folders on the way to a game. Folders are only created as
ancestors of a game; a lookup that targets a folder never creates one.
"""

import logging
import os
from enum import Enum
from pathlib import Path

from romshelf.catalog.containment import is_contained_and_relative
from romshelf.catalog.errors import CatalogError, ContainmentError, StructureError
from romshelf.catalog.metadata import metadata_for
from romshelf.catalog.models import Entry, EntryKind
from romshelf.catalog.system import System

logger = logging.getLogger(__name__)


class FolderPathStyle(str, Enum):
    """How the path of an intermediate folder is built.

    Attributes:
        STEM: Parent path stem joined with the folder name. This is the
            historic gamelist behaviour and yields relative paths such as
            ``nes/hacks`` for ``/roms/nes/hacks``.
        FULL: Parent path joined with the folder name (``/roms/nes/hacks``).
    """

    STEM = "stem"
    FULL = "full"


def intermediate_folder_path(parent: Path, name: str, style: FolderPathStyle) -> Path:
    """Build the path of a folder created on the way to a game.

    Args:
        parent: Path of the folder the new folder is added to.
        name: Directory name of the new folder.
        style: Path construction style.

    Returns:
        Path for the new folder entry.
    """
    if style == FolderPathStyle.FULL:
        return parent / name
    # NOTE: stem join kept for compatibility with existing gamelists;
    # nested folders end up with relative paths.
    return Path(parent.stem) / name


def resolve_entry(
    system: System,
    path: str | os.PathLike[str],
    kind: EntryKind,
    *,
    folder_paths: FolderPathStyle = FolderPathStyle.STEM,
) -> Entry:
    """Find the entry for ``path`` in the system's tree, creating it if needed.

    Games and their missing ancestor folders are created. Folders are
    only ever found, never created.

    Args:
        system: System owning the tree.
        path: Filesystem path of the entry. Must exist.
        kind: Kind of entry being looked up.
        folder_paths: Path style for intermediate folders.

    Returns:
        The existing or newly created Entry.

    Raises:
        PathResolutionError: If ``path`` or the system root does not exist.
        ContainmentError: If ``path`` is outside the system root, or is the root.
        StructureError: If a folder lookup has no existing folder, or a game
            sits where a folder is needed.
    """
    tree = system.tree
    root = tree.root

    relative, contained = is_contained_and_relative(path, root.path)
    if not contained:
        msg = f'File path "{os.fspath(path)}" is outside system path "{system.root_path}"'
        raise ContainmentError(msg)

    components = relative.parts
    if not components:
        msg = f'File path "{os.fspath(path)}" is the root of system "{system.name}"'
        raise ContainmentError(msg)

    node = root
    last = len(components) - 1
    for depth, component in enumerate(components):
        child = tree.find_child(node, component)

        if depth == last:
            if child is not None:
                return child
            if kind == EntryKind.FOLDER:
                msg = f"Folder doesn't already exist, won't create: {os.fspath(path)}"
                raise StructureError(msg)
            entry_path = Path(path)
            return tree.add_child(node, kind, entry_path, metadata_for(kind, entry_path))

        if child is None:
            # Don't create folders unless they lead up to a game
            if kind == EntryKind.FOLDER:
                msg = f"Folder doesn't already exist, won't create: {os.fspath(path)}"
                raise StructureError(msg)
            folder_path = intermediate_folder_path(node.path, component, folder_paths)
            child = tree.add_child(
                node,
                EntryKind.FOLDER,
                folder_path,
                metadata_for(EntryKind.FOLDER, folder_path),
            )
        elif not child.is_folder:
            msg = f'"{child.path}" is a game, cannot hold "{os.fspath(path)}"'
            raise StructureError(msg)

        node = child

    # Unreachable: the loop returns or raises on the last component
    msg = f"Could not resolve entry for {os.fspath(path)}"
    raise StructureError(msg)


def find_or_create(
    system: System,
    path: str | os.PathLike[str],
    kind: EntryKind,
    *,
    folder_paths: FolderPathStyle = FolderPathStyle.STEM,
) -> Entry | None:
    """Find or create the entry for ``path``, reporting failures.

    Same as :func:`resolve_entry` but failures are logged and reported
    as ``None`` so callers can skip the path and carry on.

    Args:
        system: System owning the tree.
        path: Filesystem path of the entry.
        kind: Kind of entry being looked up.
        folder_paths: Path style for intermediate folders.

    Returns:
        The Entry, or None if it could not be found or created.
    """
    try:
        return resolve_entry(system, path, kind, folder_paths=folder_paths)
    except StructureError as e:
        logger.warning("gamelist: %s", e)
        return None
    except CatalogError as e:
        logger.error("%s", e)
        return None
