"""Exceptions raised by the catalog and gamelist layers.

All errors derive from CatalogError so callers that only want to
report and carry on can catch a single type.
"""


class CatalogError(Exception):
    """Base exception for catalog-related errors."""


class PathResolutionError(CatalogError):
    """Raised when a path does not exist and cannot be canonicalized."""


class ContainmentError(CatalogError):
    """Raised when a path resolves outside the system root."""


class StructureError(CatalogError):
    """Raised when a lookup would need a folder that does not exist."""


class DocumentParseError(CatalogError):
    """Raised when a gamelist document is malformed or has no <gameList> root."""


class DocumentWriteError(CatalogError):
    """Raised when a gamelist document cannot be written to disk."""


class MetadataKeyError(CatalogError):
    """Raised when a metadata key cannot be stored as a gamelist element."""
