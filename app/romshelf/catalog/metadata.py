"""Entry metadata: declared keys, defaults and XML mapping.

Each entry kind has an ordered list of declared metadata keys with a
default value. Values equal to their default are treated as unset and
are not written to the gamelist. Keys found in a gamelist that are not
declared are kept as-is and written back after the declared keys.
"""

import os
import re
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from xml.etree import ElementTree as ET

from romshelf.catalog.errors import MetadataKeyError
from romshelf.catalog.models import EntryKind

# Bracketed tags like "(USA)" or "[!]" in ROM file names
_TAG_PATTERN = re.compile(r"\([^)]*\)|\[[^\]]*\]")

# XML element name without prefix, optionally in ElementTree's {uri}local form
_KEY_PATTERN = re.compile(r"(\{[^{}]*\})?[^\W\d][\w.\-]*")

# Child element holding the entry path, never treated as metadata
PATH_TAG = "path"


@dataclass(frozen=True, slots=True)
class MetadataDecl:
    """Declaration of a single metadata key.

    Attributes:
        key: Key name, also the XML child element tag.
        default: Value considered equivalent to "unset".
        display_name: Human-readable label.
    """

    key: str
    default: str
    display_name: str


GAME_METADATA: tuple[MetadataDecl, ...] = (
    MetadataDecl("name", "", "name"),
    MetadataDecl("desc", "", "description"),
    MetadataDecl("image", "", "image"),
    MetadataDecl("thumbnail", "", "thumbnail"),
    MetadataDecl("rating", "0.000000", "rating"),
    MetadataDecl("releasedate", "not-a-date-time", "release date"),
    MetadataDecl("developer", "unknown", "developer"),
    MetadataDecl("publisher", "unknown", "publisher"),
    MetadataDecl("genre", "unknown", "genre"),
    MetadataDecl("players", "1", "players"),
    MetadataDecl("playcount", "0", "play count"),
    MetadataDecl("lastplayed", "0", "last played"),
)

FOLDER_METADATA: tuple[MetadataDecl, ...] = (
    MetadataDecl("name", "", "name"),
    MetadataDecl("desc", "", "description"),
    MetadataDecl("image", "", "image"),
    MetadataDecl("thumbnail", "", "thumbnail"),
)


def declarations_for(kind: EntryKind) -> tuple[MetadataDecl, ...]:
    """Get the metadata declarations for an entry kind."""
    if kind == EntryKind.GAME:
        return GAME_METADATA
    return FOLDER_METADATA


def validate_key(key: str) -> str:
    """Check that a metadata key can be written as a gamelist child element.

    Args:
        key: Key to check.

    Returns:
        The key, unchanged.

    Raises:
        MetadataKeyError: If the key is not an XML element name or is
            the reserved ``path`` tag.
    """
    if key == PATH_TAG:
        msg = f"'{PATH_TAG}' is reserved for the entry location and cannot hold metadata"
        raise MetadataKeyError(msg)
    if not _KEY_PATTERN.fullmatch(key):
        msg = f"Invalid metadata key '{key}': not a valid XML element name"
        raise MetadataKeyError(msg)
    return key


def default_name_for(path: str | os.PathLike[str]) -> str:
    """Derive the display name a path gets when no name is stored.

    The file stem with parenthesized and bracketed tags removed,
    e.g. ``"Super Mario Bros. (USA) [!].nes"`` becomes ``"Super Mario Bros."``.

    Args:
        path: File or folder path.

    Returns:
        Cleaned name.
    """
    stem = Path(path).stem
    return " ".join(_TAG_PATTERN.sub("", stem).split())


def metadata_for(kind: EntryKind, path: str | os.PathLike[str]) -> "MetadataList":
    """Create the initial metadata of a new entry: defaults plus its default name."""
    metadata = MetadataList(kind)
    metadata.set("name", default_name_for(path))
    return metadata


class MetadataList:
    """Ordered string metadata for one catalog entry.

    Declared keys always resolve (to their default when unset); extra
    keys are kept in the order they were first set.

    Args:
        kind: Entry kind selecting the declared keys.
    """

    def __init__(self, kind: EntryKind) -> None:
        self._kind = kind
        self._decls = declarations_for(kind)
        self._defaults = {decl.key: decl.default for decl in self._decls}
        self._values: dict[str, str] = dict(self._defaults)

    @property
    def kind(self) -> EntryKind:
        """Entry kind these values belong to."""
        return self._kind

    @classmethod
    def from_element(cls, element: ET.Element, kind: EntryKind) -> "MetadataList":
        """Build metadata from a ``<game>``/``<folder>`` element's children.

        The ``<path>`` child is skipped. Text is kept exactly as found,
        surrounding whitespace included. Declared keys missing from the
        element keep their defaults.

        Args:
            element: Gamelist element to read.
            kind: Entry kind selecting the declared keys.

        Returns:
            Parsed MetadataList.
        """
        metadata = cls(kind)
        for child in element:
            if not isinstance(child.tag, str) or child.tag == PATH_TAG:
                continue
            metadata.set(child.tag, child.text or "")
        return metadata

    def get(self, key: str) -> str:
        """Get a value, falling back to the key's default ("" if undeclared)."""
        return self._values.get(key, self._defaults.get(key, ""))

    def set(self, key: str, value: str) -> None:
        """Set a value.

        Raises:
            MetadataKeyError: If the key cannot be written as a gamelist element.
        """
        self._values[validate_key(key)] = value

    def default_value_for(self, key: str) -> str:
        """Get the default of a key ("" if undeclared)."""
        return self._defaults.get(key, "")

    def is_default(self, key: str) -> bool:
        """Check whether a key currently holds its default value."""
        return self.get(key) == self.default_value_for(key)

    def display_name_for(self, key: str) -> str:
        """Get the label of a key (the key itself if undeclared)."""
        for decl in self._decls:
            if decl.key == key:
                return decl.display_name
        return key

    def is_declared(self, key: str) -> bool:
        """Check whether a key is declared for this entry kind."""
        return key in self._defaults

    def keys(self) -> list[str]:
        """Keys in canonical order: declared keys first, then extra keys."""
        extra = [key for key in self._values if key not in self._defaults]
        return [decl.key for decl in self._decls] + extra

    def items(self) -> Iterator[tuple[str, str]]:
        """Iterate (key, value) pairs in canonical order."""
        for key in self.keys():
            yield key, self.get(key)

    def non_default_items(self) -> list[tuple[str, str]]:
        """Get (key, value) pairs whose value differs from the default."""
        return [(key, value) for key, value in self.items() if not self.is_default(key)]

    def append_to(self, element: ET.Element, *, ignore_defaults: bool = True) -> None:
        """Append one child element per key to ``element``.

        Args:
            element: Element to append to.
            ignore_defaults: If True, skip values equal to their default.

        Raises:
            MetadataKeyError: If a key cannot be written as an element.
        """
        for key, value in self.items():
            if ignore_defaults and self.is_default(key):
                continue
            child = ET.SubElement(element, validate_key(key))
            child.text = value

    def copy(self) -> "MetadataList":
        """Return an independent copy."""
        clone = MetadataList(self._kind)
        clone._values = dict(self._values)
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MetadataList):
            return NotImplemented
        return self._kind == other._kind and list(self.items()) == list(other.items())

    def __repr__(self) -> str:
        return f"MetadataList({self._kind.value}, {dict(self.non_default_items())!r})"
