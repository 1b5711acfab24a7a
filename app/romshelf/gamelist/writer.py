"""Gamelist saving.

The gamelist is rewritten by re-reading the current file, replacing
the element of every entry in the catalog with a fresh one built from
its current metadata, and writing the result back. Elements for files
the catalog does not hold are kept untouched, so metadata of files
that were not scanned this time is never lost.
"""

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from xml.etree import ElementTree as ET

from romshelf.catalog.errors import DocumentParseError, DocumentWriteError, MetadataKeyError
from romshelf.catalog.metadata import PATH_TAG, default_name_for
from romshelf.catalog.models import Entry, EntryKind
from romshelf.catalog.system import System
from romshelf.core.settings import Settings
from romshelf.gamelist.document import GamelistDocument, GamelistNode

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GamelistSaveResult:
    """Outcome of saving one system's gamelist.

    Attributes:
        path: Gamelist location that was written (or would have been).
        written: Number of entry elements written from the catalog.
        elided: Number of entries with nothing beyond defaults (no element).
        preserved: Number of old elements kept untouched.
        skipped: True if writes are disabled by the settings.
        error: Error message, None on success.
    """

    path: Path
    written: int = 0
    elided: int = 0
    preserved: int = 0
    skipped: bool = False
    error: str | None = None

    @property
    def success(self) -> bool:
        """Check if the gamelist was written (or deliberately skipped)."""
        return self.error is None


def paths_match(stored: str, entry_path: Path) -> bool:
    """Check whether a stored gamelist path refers to an entry's path.

    Paths match when they are equal as paths, or when both exist and
    point at the same file (symlinks, case-insensitive filesystems).

    Args:
        stored: Text of a ``<path>`` element.
        entry_path: Path of a catalog entry.

    Returns:
        True if both refer to the same file.
    """
    node_path = Path(stored)
    if node_path == entry_path:
        return True
    if not (node_path.exists() and entry_path.exists()):
        return False
    try:
        return os.path.samefile(node_path, entry_path)
    except OSError:
        return False


def build_entry_element(entry: Entry) -> ET.Element | None:
    """Serialize an entry's non-default metadata.

    Args:
        entry: Catalog entry.

    Returns:
        ``<game>``/``<folder>`` element with a leading ``<path>``, or None
        if the entry carries nothing beyond its default name.
    """
    element = ET.Element(entry.kind.value)
    entry.metadata.append_to(element, ignore_defaults=True)

    children = list(element)
    if not children:
        return None
    if (
        len(children) == 1
        and children[0].tag == "name"
        and children[0].text == default_name_for(entry.path)
    ):
        # The only info is the default name, the filesystem already says that
        return None

    path_node = ET.Element(PATH_TAG)
    path_node.text = entry.path.as_posix()
    element.insert(0, path_node)
    return element


def merge_entries(
    document: GamelistDocument,
    entries: Iterable[Entry],
    result: GamelistSaveResult | None = None,
) -> GamelistDocument:
    """Merge catalog entries into a gamelist document.

    For each entry, the first node with the same tag and a matching path
    is dropped and a freshly built node is appended (unless the entry
    only has defaults). All other nodes keep their content and order.

    Args:
        document: Current gamelist.
        entries: Catalog entries in write order.
        result: Optional result receiving the counters.

    Returns:
        New GamelistDocument; ``document`` is left unchanged.
    """
    nodes = list(document.nodes)
    original = set(map(id, document.nodes))

    for node in nodes:
        if node.tag in (EntryKind.GAME.value, EntryKind.FOLDER.value) and node.path is None:
            logger.error("<%s> node contains no <path> child!", node.tag)

    written = elided = 0
    for entry in entries:
        tag = entry.kind.value

        for position, node in enumerate(nodes):
            if node.tag != tag or node.path is None:
                continue
            if paths_match(node.path, entry.path):
                del nodes[position]
                break

        element = build_entry_element(entry)
        if element is None:
            elided += 1
            continue
        nodes.append(GamelistNode.from_element(element))
        written += 1

    if result is not None:
        result.written = written
        result.elided = elided
        result.preserved = sum(1 for node in nodes if id(node) in original)

    return document.with_nodes(nodes)


def save_gamelist(system: System, settings: Settings | None = None) -> GamelistSaveResult:
    """Write a system's catalog metadata to its gamelist.

    Every game and folder of the tree (pre-order) replaces its old
    element. Nothing is written when the settings disable writes.
    Failures are logged and reported in the result; the catalog is
    never modified.

    Args:
        system: System to save.
        settings: Runtime settings. Defaults to Settings().

    Returns:
        GamelistSaveResult describing what was written.
    """
    settings = settings or Settings()
    xml_path = system.gamelist_path()
    result = GamelistSaveResult(path=xml_path)

    if not settings.writes_enabled:
        logger.debug("Gamelist writes disabled, not saving %s", system.name)
        result.skipped = True
        return result

    try:
        if xml_path.exists():
            document = GamelistDocument.parse(xml_path)
        else:
            document = GamelistDocument()
            # The folders leading up to the file must exist for the write
            try:
                xml_path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                msg = f'Cannot create gamelist directory "{xml_path.parent}": {e}'
                raise DocumentWriteError(msg) from e

        merged = merge_entries(document, system.tree.walk(), result)
        merged.write(xml_path)
    except (DocumentParseError, DocumentWriteError, MetadataKeyError) as e:
        logger.error("%s", e)
        result.error = str(e)
        return result

    logger.info(
        'Saved gamelist "%s" (%d written, %d unchanged)',
        xml_path,
        result.written,
        result.preserved,
    )
    return result
