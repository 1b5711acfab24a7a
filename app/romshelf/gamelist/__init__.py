"""Gamelist module.

This module reads and writes gamelist.xml documents, the per-system
sidecar files holding catalog metadata.
"""

from romshelf.gamelist.document import GamelistDocument, GamelistNode
from romshelf.gamelist.reader import GamelistLoadResult, load_gamelist
from romshelf.gamelist.writer import (
    GamelistSaveResult,
    build_entry_element,
    merge_entries,
    paths_match,
    save_gamelist,
)

__all__ = [
    "GamelistDocument",
    "GamelistLoadResult",
    "GamelistNode",
    "GamelistSaveResult",
    "build_entry_element",
    "load_gamelist",
    "merge_entries",
    "paths_match",
    "save_gamelist",
]
