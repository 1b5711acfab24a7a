"""In-memory form of a gamelist.xml document.

A GamelistDocument is an immutable sequence of top-level nodes. The
writer never edits a parsed document in place: it builds a new
document from the old one plus the current catalog entries and
serializes that in one pass.
"""

import copy
import logging
import os
import stat
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from tempfile import NamedTemporaryFile
from xml.etree import ElementTree as ET

from romshelf.catalog.errors import DocumentParseError, DocumentWriteError
from romshelf.catalog.metadata import PATH_TAG

logger = logging.getLogger(__name__)

ROOT_TAG = "gameList"
INDENT = "  "


@dataclass(frozen=True, slots=True)
class GamelistNode:
    """A top-level element of a gamelist.

    Attributes:
        tag: Element tag ("game", "folder", or anything else found in the file).
        path: Text of the ``<path>`` child, None if the element has none.
        element: The element itself.
    """

    tag: str
    path: str | None
    element: ET.Element

    @classmethod
    def from_element(cls, element: ET.Element) -> "GamelistNode":
        """Wrap a parsed top-level element."""
        path_node = element.find(PATH_TAG)
        path = None
        if path_node is not None:
            path = (path_node.text or "").strip()
        return cls(tag=str(element.tag), path=path, element=element)


@dataclass(frozen=True, slots=True)
class GamelistDocument:
    """A parsed or freshly built gamelist.

    Attributes:
        nodes: Top-level elements in document order.
        attrib: Attributes of the ``<gameList>`` root element.
    """

    nodes: tuple[GamelistNode, ...] = ()
    attrib: tuple[tuple[str, str], ...] = ()

    @classmethod
    def parse(cls, path: Path) -> "GamelistDocument":
        """Parse a gamelist file.

        Args:
            path: Gamelist file to read.

        Returns:
            Parsed GamelistDocument.

        Raises:
            DocumentParseError: If the file is not well-formed XML, cannot be
                read, or has no ``<gameList>`` root element.
        """
        try:
            tree = ET.parse(path)
        except ET.ParseError as e:
            msg = f'Error parsing XML file "{path}": {e}'
            raise DocumentParseError(msg) from e
        except OSError as e:
            msg = f'Cannot read XML file "{path}": {e}'
            raise DocumentParseError(msg) from e

        root = tree.getroot()
        if root.tag != ROOT_TAG:
            msg = f'Could not find <{ROOT_TAG}> node in gamelist "{path}"'
            raise DocumentParseError(msg)

        return cls.from_root(root)

    @classmethod
    def from_root(cls, root: ET.Element) -> "GamelistDocument":
        """Build a document from a ``<gameList>`` element."""
        nodes = tuple(GamelistNode.from_element(child) for child in root)
        return cls(nodes=nodes, attrib=tuple(root.attrib.items()))

    def iter_tag(self, tag: str) -> Iterator[GamelistNode]:
        """Iterate the nodes with a given tag, in document order."""
        return (node for node in self.nodes if node.tag == tag)

    def with_nodes(self, nodes: Iterable[GamelistNode]) -> "GamelistDocument":
        """Return a copy of this document holding ``nodes``."""
        return GamelistDocument(nodes=tuple(nodes), attrib=self.attrib)

    def to_element(self) -> ET.Element:
        """Build the ``<gameList>`` element tree of this document."""
        root = ET.Element(ROOT_TAG, dict(self.attrib))
        root.extend(copy.deepcopy(node.element) for node in self.nodes)
        ET.indent(root, space=INDENT)
        return root

    def to_bytes(self) -> bytes:
        """Serialize the document as UTF-8 XML with declaration."""
        root = self.to_element()
        body = ET.tostring(root, encoding="unicode", short_empty_elements=True)
        text = "<?xml version='1.0' encoding='utf-8'?>\n" + body + "\n"
        return text.encode("utf-8")

    def write(self, path: Path) -> Path:
        """Write the document to ``path`` atomically.

        The document is written to a temporary file next to the real file
        and then moved over it with os.replace(). A symlinked ``path`` is
        written through, so the link stays in place. An existing file keeps
        its permission bits.

        Args:
            path: Destination file.

        Returns:
            Path where the document was written.

        Raises:
            DocumentWriteError: If the file cannot be written.
        """
        data = self.to_bytes()

        target = path
        tmp_path: Path | None = None
        try:
            target = path.resolve()
            mode = stat.S_IMODE(target.stat().st_mode) if target.exists() else None
            with NamedTemporaryFile(
                mode="wb",
                dir=target.parent,
                delete=False,
                suffix=".tmp",
            ) as f:
                tmp_path = Path(f.name)
                f.write(data)
            if mode is not None:
                os.chmod(tmp_path, mode)
            os.replace(str(tmp_path), str(target))
        except OSError as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            msg = f'Error saving gamelist file "{path}": {e}'
            raise DocumentWriteError(msg) from e

        logger.debug("Wrote %d nodes to %s", len(self.nodes), target)
        return path
