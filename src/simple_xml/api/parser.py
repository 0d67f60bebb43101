"""Public loading and construction API for simple-xml.

Module-level functions cover the common cases:

- :func:`from_string` and :func:`from_file` parse a whole document
- :func:`new` and :func:`new_filled` build nodes programmatically

Loading either returns the root node (or ``EMPTY``) or raises an
:class:`~simple_xml.parsing.errors.XMLError`; there are no partial results.
"""

import time
from pathlib import Path
from typing import Mapping, Optional, Sequence, Union

from simple_xml.parsing import RecursiveDescentParser, XMLError, XMLIOError
from simple_xml.shared import ParserConfig, get_logger
from simple_xml.tree import EmptyNode, Node

PathType = Union[str, Path]
Document = Union[Node, EmptyNode]

PREVIEW_LENGTH = 100  # Max length for content preview in logs
MS_PER_SECOND = 1000


def from_string(
    xml_string: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None,
) -> Document:
    """Parse an XML document held in a string.

    Args:
        xml_string: The complete document text
        config: Optional parser configuration
        correlation_id: Optional correlation ID for request tracking

    Returns:
        The root node, or ``EMPTY`` if the text contains no element

    Raises:
        XMLError: if the document is malformed

    Examples:
        >>> root = from_string('<note lang="en"><to>Tove</to></note>')
        >>> root.get_attribute("lang")
        'en'
        >>> root["to"][0].content
        'Tove'
    """
    if not isinstance(xml_string, str):
        raise TypeError("xml_string must be str; decode bytes before parsing")

    start_time = time.time()
    logger = get_logger(__name__, correlation_id, "from_string")
    logger.info(
        "Starting string parse operation",
        extra={
            "content_length": len(xml_string),
            "preview": (
                xml_string[:PREVIEW_LENGTH] + "..."
                if len(xml_string) > PREVIEW_LENGTH else xml_string
            ),
        },
    )

    parser = RecursiveDescentParser(xml_string, config, correlation_id)
    try:
        root = parser.parse()
    except XMLError as e:
        logger.error(
            "String parse operation failed",
            extra={
                "error_kind": e.kind.name,
                "error": e.message,
                "processing_time_ms": (time.time() - start_time) * MS_PER_SECOND,
            },
        )
        raise

    logger.info(
        "String parse operation completed",
        extra={
            "root_tag": root.tag,
            "element_count": parser.element_count,
            "skipped_instructions": parser.skipped_instructions,
            "processing_time_ms": (time.time() - start_time) * MS_PER_SECOND,
        },
    )
    return root


def from_file(
    file_path: PathType,
    encoding: str = "utf-8",
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None,
) -> Document:
    """Read a file and parse it as an XML document.

    Args:
        file_path: Path to the XML file
        encoding: Text encoding of the file
        config: Optional parser configuration
        correlation_id: Optional correlation ID for request tracking

    Raises:
        XMLIOError: if the file cannot be read or decoded
        XMLError: if the document is malformed
    """
    path = Path(file_path)
    logger = get_logger(__name__, correlation_id, "from_file")
    logger.info("Reading XML file", extra={"file_path": str(path), "encoding": encoding})

    try:
        content = path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(
            "Failed to read XML file",
            extra={"file_path": str(path), "error": str(e)},
        )
        raise XMLIOError(message=f"Could not read {path}: {e}") from e

    return from_string(content, config, correlation_id)


def new(tag: str, content: str = "") -> Node:
    """Create a node with no attributes or children.

    Attributes and children can be added later with ``set_attribute`` and
    ``add_child``.
    """
    return Node(tag, content=content)


def new_filled(
    tag: str,
    attributes: Mapping[str, str],
    content: str,
    nodes: Mapping[str, Sequence[Node]],
) -> Node:
    """Create a node with attributes, content and children grouped by tag.

    Children are added group by group in the mapping's order.

    Raises:
        ValueError: if a node is listed under a tag other than its own
    """
    node = Node(tag, attributes, content)
    for group_tag, group in nodes.items():
        for child in group:
            if child.tag != group_tag:
                raise ValueError(
                    f"Child with tag {child.tag!r} listed under {group_tag!r}"
                )
            node.add_child(child)
    return node
