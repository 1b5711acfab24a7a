"""ROM directory scanner.

Populates a system's catalog tree from its ROM directory. Files whose
extension belongs to the system become games; directories become
folders and are dropped again if no game was found below them.
"""

import logging
from pathlib import Path

from romshelf.catalog.metadata import metadata_for
from romshelf.catalog.models import Entry, EntryKind
from romshelf.catalog.system import System

logger = logging.getLogger(__name__)


class GameScanner:
    """Scans a system's ROM directory into its catalog tree.

    Entries already present in the tree (matched by name) are reused,
    so scanning twice does not create duplicates.

    Args:
        system: System whose tree is populated.
    """

    def __init__(self, system: System) -> None:
        self._system = system

    def populate(self) -> int:
        """Scan the system root recursively.

        Returns:
            Number of games added to the tree.
        """
        root = self._system.tree.root
        if not root.path.is_dir():
            logger.warning(
                'System "%s" root directory does not exist: %s',
                self._system.name,
                root.path,
            )
            return 0

        return self._populate_folder(root, root.path.resolve())

    def _populate_folder(self, folder: Entry, canonical: Path) -> int:
        """Scan one directory into ``folder``.

        Args:
            folder: Folder entry receiving the children.
            canonical: Canonical path of the directory being scanned.

        Returns:
            Number of games added below ``folder``.
        """
        tree = self._system.tree
        try:
            children = sorted(folder.path.iterdir())
        except PermissionError:
            logger.warning("Permission denied scanning directory: %s", folder.path)
            return 0
        except OSError as e:
            logger.warning("Cannot scan directory %s: %s", folder.path, e)
            return 0

        added = 0
        for child_path in children:
            try:
                is_dir = child_path.is_dir()
            except OSError:
                logger.warning("Cannot determine type of: %s", child_path)
                continue

            if not is_dir:
                if not self._system.matches_extension(child_path):
                    continue
                if tree.find_child(folder, child_path.name) is None:
                    tree.add_child(
                        folder,
                        EntryKind.GAME,
                        child_path,
                        metadata_for(EntryKind.GAME, child_path),
                    )
                    added += 1
                continue

            child_canonical = child_path.resolve()
            if child_path.is_symlink() and self._is_recursive_link(child_canonical, canonical):
                logger.warning("Skipping recursive symlink: %s", child_path)
                continue

            sub = tree.find_child(folder, child_path.name)
            created = sub is None
            if sub is None:
                sub = tree.add_child(
                    folder,
                    EntryKind.FOLDER,
                    child_path,
                    metadata_for(EntryKind.FOLDER, child_path),
                )
            elif not sub.is_folder:
                continue

            added += self._populate_folder(sub, child_canonical)

            # Empty folders are never kept in the catalog
            if created and not sub.children:
                tree.remove_if_empty(sub)

        return added

    @staticmethod
    def _is_recursive_link(target: Path, current: Path) -> bool:
        """Check if a directory symlink points at the current directory or above it.

        Args:
            target: Canonical target of the symlink.
            current: Canonical path of the directory containing the link.

        Returns:
            True if following the link would loop.
        """
        return target == current or target in current.parents
