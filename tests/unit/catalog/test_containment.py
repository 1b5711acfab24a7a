"""Unit tests for path containment checks."""

import os
from pathlib import Path

import pytest
from romshelf.catalog.containment import canonicalize, is_contained_and_relative
from romshelf.catalog.errors import PathResolutionError


class TestCanonicalize:
    """Tests for canonicalize function."""

    def test_resolves_dot_segments(self, rom_root: Path) -> None:
        """canonicalize removes . and .. segments."""
        messy = rom_root / "hacks" / ".." / "." / "a.nes"

        assert canonicalize(messy) == (rom_root / "a.nes").resolve()

    def test_missing_path_raises(self, tmp_path: Path) -> None:
        """canonicalize raises PathResolutionError for missing paths."""
        with pytest.raises(PathResolutionError, match="Cannot resolve path"):
            canonicalize(tmp_path / "missing.nes")


class TestIsContainedAndRelative:
    """Tests for is_contained_and_relative function."""

    def test_nested_file(self, rom_root: Path) -> None:
        """A file below the root is contained with its relative path."""
        (rom_root / "foo").mkdir()
        game = rom_root / "foo" / "bar.nes"
        game.touch()

        relative, contained = is_contained_and_relative(game, str(rom_root) + "/")

        assert contained is True
        assert relative == Path("foo/bar.nes")

    def test_rejoin_yields_same_file(self, rom_root: Path) -> None:
        """Joining the root with the relative path gives back the same file."""
        game = rom_root / "hacks" / "deep" / "deep1.nes"

        relative, contained = is_contained_and_relative(game, rom_root)

        assert contained
        assert (rom_root / relative).resolve() == game.resolve()

    def test_accepts_strings(self, rom_root: Path) -> None:
        """Paths can be passed as strings."""
        relative, contained = is_contained_and_relative(str(rom_root / "a.nes"), str(rom_root))

        assert contained
        assert relative == Path("a.nes")

    def test_sibling_directory_not_contained(self, rom_root: Path) -> None:
        """A path in a sibling directory is not contained."""
        snes = rom_root.parent / "snes"
        snes.mkdir()
        game = snes / "zelda.sfc"
        game.touch()

        result, contained = is_contained_and_relative(game, rom_root)

        assert contained is False
        assert result == game.resolve()

    def test_name_prefix_not_contained(self, rom_root: Path) -> None:
        """A directory sharing a name prefix with the root is outside it."""
        other = rom_root.parent / "nes2"
        other.mkdir()
        game = other / "a.nes"
        game.touch()

        _, contained = is_contained_and_relative(game, rom_root)

        assert contained is False

    def test_parent_escape_not_contained(self, rom_root: Path) -> None:
        """A path escaping the root with .. is not contained."""
        outside = rom_root.parent / "outside.nes"
        outside.touch()
        sneaky = rom_root / "hacks" / ".." / ".." / "outside.nes"

        _, contained = is_contained_and_relative(sneaky, rom_root)

        assert contained is False

    def test_parent_of_root_not_contained(self, rom_root: Path) -> None:
        """The parent directory of the root is not contained."""
        _, contained = is_contained_and_relative(rom_root.parent, rom_root)

        assert contained is False

    def test_root_itself(self, rom_root: Path) -> None:
        """The root is contained in itself with an empty relative path."""
        relative, contained = is_contained_and_relative(rom_root, rom_root)

        assert contained is True
        assert relative == Path(".")
        assert relative.parts == ()

    def test_path_through_symlinked_root(self, rom_root: Path, tmp_path: Path) -> None:
        """A path reached through a symlink to the root is contained."""
        link = tmp_path / "nes-link"
        link.symlink_to(rom_root, target_is_directory=True)

        relative, contained = is_contained_and_relative(link / "hacks" / "hack1.nes", rom_root)

        assert contained
        assert relative == Path("hacks/hack1.nes")

    def test_symlinked_root_argument(self, rom_root: Path, tmp_path: Path) -> None:
        """A symlink used as the root still contains the real files."""
        link = tmp_path / "nes-link"
        link.symlink_to(rom_root, target_is_directory=True)

        relative, contained = is_contained_and_relative(rom_root / "a.nes", link)

        assert contained
        assert relative == Path("a.nes")

    def test_symlink_pointing_outside(self, rom_root: Path, tmp_path: Path) -> None:
        """A symlink inside the root that points outside is not contained."""
        target = tmp_path / "elsewhere.nes"
        target.touch()
        link = rom_root / "linked.nes"
        link.symlink_to(target)

        _, contained = is_contained_and_relative(link, rom_root)

        assert contained is False

    def test_missing_path_raises(self, rom_root: Path) -> None:
        """A missing path raises PathResolutionError."""
        with pytest.raises(PathResolutionError):
            is_contained_and_relative(rom_root / "gone.nes", rom_root)

    def test_missing_root_raises(self, rom_root: Path, tmp_path: Path) -> None:
        """A missing root raises PathResolutionError."""
        with pytest.raises(PathResolutionError):
            is_contained_and_relative(rom_root / "a.nes", tmp_path / "no-such-root")

    def test_relative_input_path(self, rom_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Relative paths are resolved against the working directory."""
        monkeypatch.chdir(rom_root)

        relative, contained = is_contained_and_relative(
            os.path.join(".", "hacks", "hack1.nes"), rom_root
        )

        assert contained
        assert relative == Path("hacks/hack1.nes")
