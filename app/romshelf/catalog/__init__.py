"""Catalog module.

This module provides the in-memory catalog of a system: the entry
tree, metadata values, path containment checks, lookup-or-create of
entries and the ROM directory scanner.
"""

from romshelf.catalog.containment import canonicalize, is_contained_and_relative
from romshelf.catalog.errors import (
    CatalogError,
    ContainmentError,
    DocumentParseError,
    DocumentWriteError,
    PathResolutionError,
    StructureError,
)
from romshelf.catalog.metadata import (
    FOLDER_METADATA,
    GAME_METADATA,
    MetadataDecl,
    MetadataList,
    default_name_for,
    metadata_for,
)
from romshelf.catalog.models import CatalogTree, Entry, EntryKind
from romshelf.catalog.scanner import GameScanner
from romshelf.catalog.system import System
from romshelf.catalog.tree import FolderPathStyle, find_or_create, resolve_entry

__all__ = [
    "FOLDER_METADATA",
    "GAME_METADATA",
    "CatalogError",
    "CatalogTree",
    "ContainmentError",
    "DocumentParseError",
    "DocumentWriteError",
    "Entry",
    "EntryKind",
    "FolderPathStyle",
    "GameScanner",
    "MetadataDecl",
    "MetadataList",
    "PathResolutionError",
    "StructureError",
    "System",
    "canonicalize",
    "default_name_for",
    "find_or_create",
    "is_contained_and_relative",
    "metadata_for",
    "resolve_entry",
]
