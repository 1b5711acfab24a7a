"""Gamelist loading.

Reads a system's gamelist.xml and attaches the stored metadata to the
catalog entries, creating game entries (and the folders leading to
them) for listed paths that the scan did not produce.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from romshelf.catalog.errors import DocumentParseError
from romshelf.catalog.metadata import MetadataList
from romshelf.catalog.models import EntryKind
from romshelf.catalog.system import System
from romshelf.catalog.tree import find_or_create
from romshelf.core.settings import Settings
from romshelf.gamelist.document import GamelistDocument

logger = logging.getLogger(__name__)

# Games first: folders listed in the gamelist are only found, never
# created, so the games have to put them in the tree beforehand.
_LOAD_ORDER: tuple[EntryKind, ...] = (EntryKind.GAME, EntryKind.FOLDER)


@dataclass(slots=True)
class GamelistLoadResult:
    """Outcome of loading one system's gamelist.

    Attributes:
        path: Gamelist location that was considered.
        loaded: Number of entries whose metadata was applied.
        stale: Listed paths skipped because they no longer exist.
        unresolved: Listed paths skipped because no entry could be found or created.
        skipped: True if loading was disabled or no gamelist exists.
        error: Document-level error message, None on success.
    """

    path: Path
    loaded: int = 0
    stale: int = 0
    unresolved: int = 0
    skipped: bool = False
    error: str | None = None

    @property
    def success(self) -> bool:
        """Check if the document was read without document-level errors."""
        return self.error is None


def load_gamelist(system: System, settings: Settings | None = None) -> GamelistLoadResult:
    """Load a system's gamelist into its catalog tree.

    Missing gamelists are not an error. A malformed gamelist is
    reported and leaves the tree untouched. Individual entries that
    no longer exist or cannot be placed in the tree are skipped.

    Args:
        system: System to load.
        settings: Runtime settings. Defaults to Settings().

    Returns:
        GamelistLoadResult describing what was applied and skipped.
    """
    settings = settings or Settings()
    xml_path = system.gamelist_path()
    result = GamelistLoadResult(path=xml_path)

    if settings.ignore_gamelist:
        logger.debug("Ignoring gamelist for %s", system.name)
        result.skipped = True
        return result

    if not xml_path.exists():
        result.skipped = True
        return result

    logger.info('Parsing XML file "%s"...', xml_path)

    try:
        document = GamelistDocument.parse(xml_path)
    except DocumentParseError as e:
        logger.error("%s", e)
        result.error = str(e)
        return result

    for kind in _LOAD_ORDER:
        for node in document.iter_tag(kind.value):
            if not node.path:
                logger.warning("<%s> node contains no <path> child, ignoring.", kind.value)
                result.stale += 1
                continue

            path = Path(node.path)
            if not path.exists():
                logger.warning('File "%s" does not exist! Ignoring.', path)
                result.stale += 1
                continue

            entry = find_or_create(system, path, kind, folder_paths=settings.folder_paths)
            if entry is None:
                logger.error('Error finding/creating entry for "%s", skipping.', path)
                result.unresolved += 1
                continue

            default_name = entry.metadata.get("name")
            entry.metadata = MetadataList.from_element(node.element, entry.kind)
            # Keep the derived name when the gamelist stores none
            if not entry.metadata.get("name"):
                entry.metadata.set("name", default_name)
            result.loaded += 1

    return result
