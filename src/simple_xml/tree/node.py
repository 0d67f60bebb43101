"""Tree model for simple-xml documents.

A :class:`Node` owns its attributes, its text content and its children. The
children are kept in document order, with a per-tag index of positions so
that ``node["item"]`` stays cheap while siblings with different tags keep
their relative order.

:data:`EMPTY` is the value produced for a document that holds no element at
all. It is a separate :class:`EmptyNode` type rather than a node with an empty
tag, so a real element can never be mistaken for "no element".
"""

from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from simple_xml.shared.config import WriterConfig
from simple_xml.tree import serializer


class Node:
    """A single XML element with attributes, children and text content."""

    __slots__ = ("tag", "attributes", "content", "_children", "_index")

    def __init__(
        self,
        tag: str,
        attributes: Optional[Mapping[str, str]] = None,
        content: str = "",
        children: Optional[Iterable["Node"]] = None,
    ) -> None:
        if not isinstance(tag, str):
            raise TypeError("Node tag must be a string")
        if not tag:
            raise ValueError("Node tag cannot be empty")

        self.tag = tag
        self.attributes: Dict[str, str] = {}
        self.content = content
        self._children: List[Node] = []
        self._index: Dict[str, List[int]] = {}

        for name, value in (attributes or {}).items():
            self.set_attribute(name, value)
        for child in children or ():
            self.add_child(child)

    @property
    def is_empty(self) -> bool:
        """Always False; see :class:`EmptyNode`."""
        return False

    @property
    def children(self) -> Tuple["Node", ...]:
        """All children in document order."""
        return tuple(self._children)

    @property
    def groups(self) -> Dict[str, List["Node"]]:
        """Children grouped by tag, groups ordered by first appearance."""
        return {
            tag: [self._children[pos] for pos in positions]
            for tag, positions in self._index.items()
        }

    def get_nodes(self, tag: str) -> List["Node"]:
        """Return the children with ``tag`` in document order.

        An unknown tag gives an empty list, never an error.
        """
        return [self._children[pos] for pos in self._index.get(tag, ())]

    def __getitem__(self, tag: str) -> List["Node"]:
        return self.get_nodes(tag)

    def __contains__(self, tag: object) -> bool:
        return tag in self._index

    def add_child(self, child: "Node") -> None:
        """Append a child, extending the group for its tag."""
        if not isinstance(child, Node):
            raise TypeError("Child must be a Node instance")
        self._index.setdefault(child.tag, []).append(len(self._children))
        self._children.append(child)

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get attribute value with optional default."""
        return self.attributes.get(name, default)

    def set_attribute(self, name: str, value: str) -> Optional[str]:
        """Add or overwrite an attribute, returning the previous value if any."""
        if not isinstance(name, str) or not isinstance(value, str):
            raise TypeError("Attribute name and value must be strings")
        previous = self.attributes.get(name)
        self.attributes[name] = value
        return previous

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def iter_nodes(self) -> Iterator["Node"]:
        """Yield this node and every descendant, depth first in document order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node._children))

    def depth(self) -> int:
        """Number of element levels in this subtree (a leaf has depth 1)."""
        if not self._children:
            return 1
        return 1 + max(child.depth() for child in self._children)

    def to_string(self, config: Optional[WriterConfig] = None,
                  declaration: bool = False) -> str:
        """Render as compact XML."""
        return serializer.to_string(self, config, declaration)

    def to_string_pretty(self, config: Optional[WriterConfig] = None,
                         declaration: bool = False) -> str:
        """Render as indented XML, one element per line."""
        return serializer.to_string_pretty(self, config, declaration)

    def to_dict(self) -> Dict[str, Any]:
        """Convert node to dictionary representation."""
        result: Dict[str, Any] = {"tag": self.tag, "attributes": dict(self.attributes)}
        if self.content:
            result["content"] = self.content
        if self._children:
            result["children"] = [child.to_dict() for child in self._children]
        return result

    def __str__(self) -> str:
        return self.to_string()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return (
            self.tag == other.tag
            and self.attributes == other.attributes
            and self.content == other.content
            and self._children == other._children
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Node(tag={self.tag!r}, attributes={self.attributes!r}, "
            f"content={self.content!r}, children={len(self._children)})"
        )


class EmptyNode:
    """The result of parsing a document that contains no element.

    Read-only: it answers every lookup with nothing and renders as empty text.
    Use the module-level :data:`EMPTY` instance.
    """

    __slots__ = ()

    tag = ""
    content = ""
    attributes: Mapping[str, str] = MappingProxyType({})
    children: Tuple[Node, ...] = ()

    @property
    def is_empty(self) -> bool:
        return True

    @property
    def groups(self) -> Dict[str, List[Node]]:
        return {}

    def get_nodes(self, tag: str) -> List[Node]:
        return []

    def __getitem__(self, tag: str) -> List[Node]:
        return []

    def __contains__(self, tag: object) -> bool:
        return False

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return default

    def has_attribute(self, name: str) -> bool:
        return False

    def iter_nodes(self) -> Iterator[Node]:
        return iter(())

    def depth(self) -> int:
        return 0

    def to_string(self, config: Optional[WriterConfig] = None,
                  declaration: bool = False) -> str:
        return ""

    def to_string_pretty(self, config: Optional[WriterConfig] = None,
                         declaration: bool = False) -> str:
        return ""

    def to_dict(self) -> Dict[str, Any]:
        return {}

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return ""

    def __repr__(self) -> str:
        return "EMPTY"


EMPTY = EmptyNode()
