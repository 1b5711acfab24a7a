"""Unit tests for find-or-create lookups in the catalog tree."""

import logging
from collections.abc import Callable
from pathlib import Path

import pytest
from romshelf.catalog.errors import ContainmentError, PathResolutionError, StructureError
from romshelf.catalog.models import EntryKind
from romshelf.catalog.system import System
from romshelf.catalog.tree import (
    FolderPathStyle,
    find_or_create,
    intermediate_folder_path,
    resolve_entry,
)


class TestIntermediateFolderPath:
    """Tests for intermediate_folder_path function."""

    def test_stem_style(self) -> None:
        """Stem style joins the parent's stem with the name."""
        path = intermediate_folder_path(Path("/roms/nes"), "hacks", FolderPathStyle.STEM)

        assert path == Path("nes/hacks")

    def test_full_style(self) -> None:
        """Full style joins the parent path with the name."""
        path = intermediate_folder_path(Path("/roms/nes"), "hacks", FolderPathStyle.FULL)

        assert path == Path("/roms/nes/hacks")


class TestResolveEntry:
    """Tests for resolve_entry function."""

    def test_creates_game_at_root(self, make_system: Callable[..., System], rom_root: Path) -> None:
        """A game directly under the root is created with its default name."""
        system = make_system()
        game_path = rom_root / "Super Mario Bros. (USA).nes"

        entry = resolve_entry(system, game_path, EntryKind.GAME)

        assert entry.kind == EntryKind.GAME
        assert entry.path == game_path
        assert entry.metadata.get("name") == "Super Mario Bros."
        assert system.tree.parent(entry) is system.root_entry

    def test_creates_intermediate_folders(
        self, make_system: Callable[..., System], rom_root: Path
    ) -> None:
        """Missing folders leading to a game are created."""
        system = make_system()

        entry = resolve_entry(system, rom_root / "hacks" / "deep" / "deep1.nes", EntryKind.GAME)

        deep = system.tree.parent(entry)
        hacks = system.tree.parent(deep)
        assert deep.is_folder and deep.name == "deep"
        assert hacks.is_folder and hacks.name == "hacks"
        assert system.tree.parent(hacks) is system.root_entry
        assert len(system.tree) == 4

    def test_stem_paths_for_intermediate_folders(
        self, make_system: Callable[..., System], rom_root: Path
    ) -> None:
        """By default intermediate folders get stem-joined paths."""
        system = make_system()

        entry = resolve_entry(system, rom_root / "hacks" / "deep" / "deep1.nes", EntryKind.GAME)

        deep = system.tree.parent(entry)
        hacks = system.tree.parent(deep)
        assert hacks.path == Path("nes/hacks")
        assert deep.path == Path("hacks/deep")

    def test_full_paths_for_intermediate_folders(
        self, make_system: Callable[..., System], rom_root: Path
    ) -> None:
        """The full style gives intermediate folders their real path."""
        system = make_system()

        entry = resolve_entry(
            system,
            rom_root / "hacks" / "deep" / "deep1.nes",
            EntryKind.GAME,
            folder_paths=FolderPathStyle.FULL,
        )

        deep = system.tree.parent(entry)
        assert deep.path == rom_root / "hacks" / "deep"
        assert system.tree.parent(deep).path == rom_root / "hacks"

    def test_idempotent(self, make_system: Callable[..., System], rom_root: Path) -> None:
        """Resolving the same path twice returns the same entry."""
        system = make_system()
        game_path = rom_root / "hacks" / "hack1.nes"

        first = resolve_entry(system, game_path, EntryKind.GAME)
        size = len(system.tree)
        second = resolve_entry(system, game_path, EntryKind.GAME)

        assert second is first
        assert len(system.tree) == size

    def test_equivalent_spellings_resolve_to_same_entry(
        self, make_system: Callable[..., System], rom_root: Path
    ) -> None:
        """Different spellings of one file map to one entry."""
        system = make_system()

        first = resolve_entry(system, rom_root / "a.nes", EntryKind.GAME)
        second = resolve_entry(system, rom_root / "hacks" / ".." / "a.nes", EntryKind.GAME)

        assert second is first

    def test_folder_never_created(self, make_system: Callable[..., System], rom_root: Path) -> None:
        """A folder lookup without an existing folder leaves the tree alone."""
        system = make_system()

        with pytest.raises(StructureError, match="won't create"):
            resolve_entry(system, rom_root / "hacks", EntryKind.FOLDER)

        assert len(system.tree) == 1

    def test_nested_folder_lookup_creates_nothing(
        self, make_system: Callable[..., System], rom_root: Path
    ) -> None:
        """A nested folder lookup does not create its ancestors."""
        system = make_system()

        with pytest.raises(StructureError):
            resolve_entry(system, rom_root / "hacks" / "deep", EntryKind.FOLDER)

        assert len(system.tree) == 1

    def test_folder_found_after_game(
        self, make_system: Callable[..., System], rom_root: Path
    ) -> None:
        """A folder created on the way to a game can be looked up."""
        system = make_system()
        game = resolve_entry(system, rom_root / "hacks" / "hack1.nes", EntryKind.GAME)

        folder = resolve_entry(system, rom_root / "hacks", EntryKind.FOLDER)

        assert folder is system.tree.parent(game)

    def test_outside_root(
        self, make_system: Callable[..., System], rom_root: Path, tmp_path: Path
    ) -> None:
        """Paths outside the root are rejected."""
        system = make_system()
        outside = tmp_path / "elsewhere.nes"
        outside.touch()

        with pytest.raises(ContainmentError, match="is outside system path"):
            resolve_entry(system, outside, EntryKind.GAME)

        assert len(system.tree) == 1

    def test_root_itself(self, make_system: Callable[..., System], rom_root: Path) -> None:
        """The root cannot be looked up as an entry."""
        system = make_system()

        with pytest.raises(ContainmentError, match="is the root"):
            resolve_entry(system, rom_root, EntryKind.FOLDER)

    def test_missing_path(self, make_system: Callable[..., System], rom_root: Path) -> None:
        """Paths that do not exist cannot be resolved."""
        system = make_system()

        with pytest.raises(PathResolutionError):
            resolve_entry(system, rom_root / "gone.nes", EntryKind.GAME)

    def test_game_in_the_way(self, make_system: Callable[..., System], rom_root: Path) -> None:
        """A game entry cannot serve as an intermediate folder."""
        system = make_system()
        hacks = rom_root / "hacks"
        system.tree.add_child(
            system.root_entry, EntryKind.GAME, hacks, system.root_entry.metadata.copy()
        )

        with pytest.raises(StructureError, match="is a game"):
            resolve_entry(system, hacks / "hack1.nes", EntryKind.GAME)

    def test_reuses_scanned_folder(
        self, make_system: Callable[..., System], rom_root: Path
    ) -> None:
        """Existing folders are matched by name and keep their path."""
        system = make_system()
        hacks = system.tree.add_child(
            system.root_entry,
            EntryKind.FOLDER,
            rom_root / "hacks",
            system.root_entry.metadata.copy(),
        )

        game = resolve_entry(system, rom_root / "hacks" / "hack1.nes", EntryKind.GAME)

        assert system.tree.parent(game) is hacks
        assert hacks.path == rom_root / "hacks"

    def test_path_through_symlinked_root(
        self, make_system: Callable[..., System], rom_root: Path, tmp_path: Path
    ) -> None:
        """A game reached through a symlink keeps the given path."""
        link = tmp_path / "nes-link"
        link.symlink_to(rom_root, target_is_directory=True)
        system = make_system()

        entry = resolve_entry(system, link / "a.nes", EntryKind.GAME)

        assert entry.path == link / "a.nes"
        assert system.tree.parent(entry) is system.root_entry


class TestFindOrCreate:
    """Tests for find_or_create function."""

    def test_returns_entry(self, make_system: Callable[..., System], rom_root: Path) -> None:
        """Successful lookups return the entry."""
        system = make_system()

        entry = find_or_create(system, rom_root / "a.nes", EntryKind.GAME)

        assert entry is not None
        assert entry.name == "a.nes"

    def test_structure_error_logged_as_warning(
        self,
        make_system: Callable[..., System],
        rom_root: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Folder lookups that would create are logged as warnings."""
        system = make_system()

        with caplog.at_level(logging.WARNING, logger="romshelf.catalog.tree"):
            entry = find_or_create(system, rom_root / "hacks", EntryKind.FOLDER)

        assert entry is None
        assert any(
            record.levelno == logging.WARNING and "won't create" in record.getMessage()
            for record in caplog.records
        )

    def test_containment_error_logged_as_error(
        self,
        make_system: Callable[..., System],
        tmp_path: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Paths outside the root are logged as errors."""
        system = make_system()
        outside = tmp_path / "elsewhere.nes"
        outside.touch()

        with caplog.at_level(logging.WARNING, logger="romshelf.catalog.tree"):
            entry = find_or_create(system, outside, EntryKind.GAME)

        assert entry is None
        assert any(
            record.levelno == logging.ERROR and "outside system path" in record.getMessage()
            for record in caplog.records
        )

    def test_missing_path_returns_none(
        self, make_system: Callable[..., System], rom_root: Path
    ) -> None:
        """Missing paths return None."""
        system = make_system()

        assert find_or_create(system, rom_root / "gone.nes", EntryKind.GAME) is None
        assert len(system.tree) == 1
