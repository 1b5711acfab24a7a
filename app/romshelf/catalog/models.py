"""Catalog domain models.

The catalog of a system is an ordered tree of game and folder entries
stored in a flat arena: every Entry lives in the CatalogTree's list and
refers to its parent and children by index.
"""

from __future__ import annotations

from collections.abc import Collection, Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from romshelf.catalog.metadata import MetadataList


class EntryKind(str, Enum):
    """Kind of catalog entry.

    The value doubles as the gamelist element tag.

    Attributes:
        GAME: A ROM file.
        FOLDER: A directory containing games.
    """

    GAME = "game"
    FOLDER = "folder"


ALL_KINDS: frozenset[EntryKind] = frozenset(EntryKind)


@dataclass(slots=True, eq=False)
class Entry:
    """A node of the catalog tree.

    Entries compare by identity; the same path always maps to the
    same Entry instance within a tree.

    Attributes:
        index: Position of this entry in its tree's arena.
        kind: Game or folder.
        path: Filesystem location of the entry.
        metadata: Metadata values of the entry.
        parent: Arena index of the parent entry (None for the root).
        children: Arena indices of the children, in insertion order.
    """

    index: int
    kind: EntryKind
    path: Path
    metadata: MetadataList
    parent: int | None = None
    children: list[int] = field(default_factory=list)

    @property
    def name(self) -> str:
        """Final path component, used to match lookups."""
        return self.path.name

    @property
    def is_folder(self) -> bool:
        """Check if the entry is a folder."""
        return self.kind == EntryKind.FOLDER


class CatalogTree:
    """Arena-backed tree of catalog entries.

    The root folder is created with the tree and always sits at index 0.

    Args:
        root_path: Path of the root folder.
        root_metadata: Metadata of the root folder.
    """

    def __init__(self, root_path: Path, root_metadata: MetadataList) -> None:
        self._entries: list[Entry] = [
            Entry(index=0, kind=EntryKind.FOLDER, path=root_path, metadata=root_metadata)
        ]

    @property
    def root(self) -> Entry:
        """The root folder entry."""
        return self._entries[0]

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> Entry:
        return self._entries[index]

    def add_child(
        self,
        parent: Entry,
        kind: EntryKind,
        path: Path,
        metadata: MetadataList,
    ) -> Entry:
        """Create an entry and append it to ``parent``'s children.

        Args:
            parent: Folder receiving the new entry.
            kind: Kind of the new entry.
            path: Path of the new entry.
            metadata: Initial metadata of the new entry.

        Returns:
            The new Entry.

        Raises:
            ValueError: If ``parent`` is not a folder of this tree, or a
                sibling already has the same name.
        """
        if not parent.is_folder:
            msg = f"Cannot add children to game entry: {parent.path}"
            raise ValueError(msg)
        if parent.index >= len(self._entries) or self._entries[parent.index] is not parent:
            msg = f"Entry does not belong to this tree: {parent.path}"
            raise ValueError(msg)
        if self.find_child(parent, path.name) is not None:
            msg = f"Duplicate entry name {path.name!r} under {parent.path}"
            raise ValueError(msg)

        entry = Entry(
            index=len(self._entries),
            kind=kind,
            path=path,
            metadata=metadata,
            parent=parent.index,
        )
        self._entries.append(entry)
        parent.children.append(entry.index)
        return entry

    def children(self, entry: Entry) -> list[Entry]:
        """Get the children of an entry in insertion order."""
        return [self._entries[i] for i in entry.children]

    def parent(self, entry: Entry) -> Entry | None:
        """Get the parent of an entry (None for the root)."""
        if entry.parent is None:
            return None
        return self._entries[entry.parent]

    def ancestors(self, entry: Entry) -> Iterator[Entry]:
        """Iterate from the parent of ``entry`` up to the root."""
        current = self.parent(entry)
        while current is not None:
            yield current
            current = self.parent(current)

    def find_child(self, entry: Entry, name: str) -> Entry | None:
        """Find the child of ``entry`` whose final path component is ``name``."""
        for index in entry.children:
            child = self._entries[index]
            if child.name == name:
                return child
        return None

    def walk(
        self,
        start: Entry | None = None,
        kinds: Collection[EntryKind] = ALL_KINDS,
    ) -> Iterator[Entry]:
        """Iterate descendants of ``start`` in pre-order.

        ``start`` itself is not yielded. Folders are always descended into,
        even when folders are filtered out of the result.

        Args:
            start: Entry to start from. Defaults to the root.
            kinds: Entry kinds to yield.

        Yields:
            Matching entries, parents before their children.
        """
        node = start if start is not None else self.root
        for child in self.children(node):
            if child.kind in kinds:
                yield child
            if child.is_folder:
                yield from self.walk(child, kinds)

    def files(self, kinds: Collection[EntryKind] = ALL_KINDS) -> list[Entry]:
        """Get every entry below the root matching ``kinds``, in pre-order."""
        return list(self.walk(self.root, kinds))

    def count(self, kind: EntryKind) -> int:
        """Count entries of a kind below the root."""
        return sum(1 for _ in self.walk(self.root, (kind,)))

    def remove_if_empty(self, entry: Entry) -> bool:
        """Detach a childless folder if it is the last child of its parent.

        The scanner uses this to drop folders that contained no games.
        Only the most recently added child can be detached so arena
        indices of live entries never change.

        Args:
            entry: Folder to drop.

        Returns:
            True if the folder was removed.
        """
        parent = self.parent(entry)
        if parent is None or entry.children or not entry.is_folder:
            return False
        if not parent.children or parent.children[-1] != entry.index:
            return False
        if entry.index != len(self._entries) - 1:
            return False
        parent.children.pop()
        self._entries.pop()
        return True
