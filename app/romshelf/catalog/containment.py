"""Symlink-safe path containment checks.

Both paths are canonicalized before comparison, so a ROM reached
through a symlinked system directory is still recognized as inside
it, and ``..`` segments cannot smuggle an outside path in.
"""

import os
from pathlib import Path

from romshelf.catalog.errors import PathResolutionError

_CURRENT_DIR = "."


def canonicalize(path: str | os.PathLike[str]) -> Path:
    """Resolve a path to its absolute, symlink-free form.

    Args:
        path: Path to resolve. Must exist on disk.

    Returns:
        Canonical absolute path.

    Raises:
        PathResolutionError: If the path does not exist or cannot be resolved.
    """
    try:
        return Path(path).resolve(strict=True)
    except (OSError, RuntimeError) as e:
        msg = f"Cannot resolve path {os.fspath(path)!r}: {e}"
        raise PathResolutionError(msg) from e


def is_contained_and_relative(
    path: str | os.PathLike[str],
    root: str | os.PathLike[str],
) -> tuple[Path, bool]:
    """Check whether ``path`` lies inside ``root`` and compute the relative path.

    Example:
        ``is_contained_and_relative("/home/pi/roms/nes/foo/bar.nes", "/home/pi/roms/nes/")``
        returns ``(Path("foo/bar.nes"), True)``.

    Args:
        path: Path to test. Must exist.
        root: Root directory. Must exist.

    Returns:
        Tuple of (relative path, contained). When not contained, the first
        element is the canonicalized ``path``. When ``path`` is the root
        itself, the relative path is ``Path(".")``.

    Raises:
        PathResolutionError: If either path does not exist.
    """
    canonical_path = canonicalize(path)
    canonical_root = canonicalize(root)

    if canonical_path.anchor != canonical_root.anchor:
        return canonical_path, False

    path_parts = canonical_path.parts
    root_parts = canonical_root.parts

    # Find point of divergence
    shared = 0
    while (
        shared < len(path_parts)
        and shared < len(root_parts)
        and path_parts[shared] == root_parts[shared]
    ):
        shared += 1

    if shared != len(root_parts):
        return canonical_path, False

    suffix = [part for part in path_parts[shared:] if part != _CURRENT_DIR]
    return Path(*suffix), True
