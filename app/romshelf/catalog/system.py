"""A configured emulated system and its catalog tree."""

from pathlib import Path

from romshelf.catalog.metadata import metadata_for
from romshelf.catalog.models import CatalogTree, Entry, EntryKind
from romshelf.core.paths import get_gamelists_dir

GAMELIST_FILENAME = "gamelist.xml"


class System:
    """An emulated system: a ROM directory, its extensions and its catalog.

    Args:
        name: Short identifier (e.g. "nes"), used for the gamelist directory.
        root_path: ROM directory of the system.
        full_name: Human-readable name. Defaults to ``name``.
        extensions: File suffixes recognized as games (case-insensitive).
        gamelist: Explicit gamelist location overriding the lookup.
    """

    def __init__(
        self,
        name: str,
        root_path: Path,
        *,
        full_name: str | None = None,
        extensions: tuple[str, ...] = (),
        gamelist: Path | None = None,
    ) -> None:
        self.name = name
        self.full_name = full_name or name
        self.root_path = root_path
        self.extensions = tuple(ext.lower() for ext in extensions)
        self._gamelist = gamelist
        self.tree = CatalogTree(root_path, metadata_for(EntryKind.FOLDER, root_path))

    @property
    def root_entry(self) -> Entry:
        """Root folder of the catalog tree."""
        return self.tree.root

    def gamelist_path(self) -> Path:
        """Locate the gamelist document of this system.

        Lookup order: explicit override, ``<root>/gamelist.xml`` if it
        exists, then the per-user gamelists directory.

        Returns:
            Path of the gamelist document (may not exist yet).
        """
        if self._gamelist is not None:
            return self._gamelist

        in_rom_dir = self.root_path / GAMELIST_FILENAME
        if in_rom_dir.exists():
            return in_rom_dir

        return get_gamelists_dir() / self.name / GAMELIST_FILENAME

    def matches_extension(self, path: Path) -> bool:
        """Check whether a file suffix is one of the system's game extensions."""
        return path.suffix.lower() in self.extensions

    def __repr__(self) -> str:
        return f"System({self.name!r}, {str(self.root_path)!r})"
