"""XML serialization for simple-xml trees.

Two render modes share the same structure. An element with neither children
nor content is written self-closed; otherwise the children come first, in
document order, followed by the element's content.

Processing instructions read by the parser are not kept in the tree, so they
never come back out, apart from the optional XML declaration.

Nothing is escaped unless ``WriterConfig.escape`` is set. The parser does not
expand entities, so escaped output would not read back to the same tree.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union
from xml.sax.saxutils import escape as _escape

from simple_xml.shared.config import WriterConfig

if TYPE_CHECKING:
    from simple_xml.tree.node import EmptyNode, Node

XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'
_ATTRIBUTE_ENTITIES = {'"': "&quot;"}


def _render_attributes(node: "Node", config: WriterConfig) -> str:
    if config.escape:
        return "".join(
            f' {name}="{_escape(value, _ATTRIBUTE_ENTITIES)}"'
            for name, value in node.attributes.items()
        )
    return "".join(f' {name}="{value}"' for name, value in node.attributes.items())


def _render_content(node: "Node", config: WriterConfig) -> str:
    return _escape(node.content) if config.escape else node.content


def _compact(node: "Node", config: WriterConfig) -> str:
    attributes = _render_attributes(node, config)
    if not node.children and not node.content:
        return f"<{node.tag}{attributes}/>"

    children = "".join(_compact(child, config) for child in node.children)
    content = _render_content(node, config)
    return f"<{node.tag}{attributes}>{children}{content}</{node.tag}>"


def _pretty(node: "Node", config: WriterConfig, depth: int) -> str:
    indent = " " * (depth * config.indent)
    attributes = _render_attributes(node, config)
    if not node.children and not node.content:
        return f"{indent}<{node.tag}{attributes}/>\n"

    children = "".join(_pretty(child, config, depth + 1) for child in node.children)
    content = _render_content(node, config)
    if children:
        return f"{indent}<{node.tag}{attributes}>\n{children}{content}{indent}</{node.tag}>\n"
    return f"{indent}<{node.tag}{attributes}>{content}</{node.tag}>\n"


def to_string(
    node: Union["Node", "EmptyNode"],
    config: Optional[WriterConfig] = None,
    declaration: bool = False,
) -> str:
    """Render ``node`` as compact XML; the empty document renders as ``""``."""
    if node.is_empty:
        return ""
    rendered = _compact(node, config or WriterConfig())
    return XML_DECLARATION + rendered if declaration else rendered


def to_string_pretty(
    node: Union["Node", "EmptyNode"],
    config: Optional[WriterConfig] = None,
    declaration: bool = False,
) -> str:
    """Render ``node`` with one element per line, indented per nesting level."""
    if node.is_empty:
        return ""
    rendered = _pretty(node, config or WriterConfig(), 0)
    return f"{XML_DECLARATION}\n{rendered}" if declaration else rendered


def to_file(
    node: Union["Node", "EmptyNode"],
    path: Union[str, Path],
    pretty: bool = False,
    config: Optional[WriterConfig] = None,
    encoding: str = "utf-8",
) -> int:
    """Write the rendering of ``node`` to ``path``.

    Returns:
        Number of characters written
    """
    rendered = to_string_pretty(node, config) if pretty else to_string(node, config)
    return Path(path).write_text(rendered, encoding=encoding)
