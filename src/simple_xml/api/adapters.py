"""Integration adapters for converting trees to and from other XML libraries.

Adapters convert a simple-xml tree into the element type of a target library
and back. ``xml.etree.ElementTree`` is always available; ``lxml`` is used
when it can be imported.

A node's content is written after its children, so on the ElementTree side
it becomes the ``text`` of a childless element or the ``tail`` of the last
child. Going the other way, ``text`` and every child ``tail`` are joined into
the node's content.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type, Union

from simple_xml.shared import get_logger
from simple_xml.tree import EmptyNode, Node

MS_PER_SECOND = 1000


@dataclass
class AdapterMetadata:
    """Metadata about an integration adapter."""

    name: str
    target_library: str
    description: str


@dataclass
class ConversionResult:
    """Result of a conversion operation."""

    success: bool
    converted_data: Any
    original_data: Any
    conversion_time_ms: float
    errors: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)


class IntegrationAdapter(ABC):
    """Abstract base class for all integration adapters."""

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        self.correlation_id = correlation_id
        self._logger = get_logger(__name__, correlation_id, self.__class__.__name__)

    @property
    @abstractmethod
    def metadata(self) -> AdapterMetadata:
        """Get adapter metadata."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the target library can be imported."""

    @abstractmethod
    def element_factory(self) -> Any:
        """Return the module providing ``Element`` and ``SubElement``."""

    def to_target(self, node: Union[Node, EmptyNode]) -> ConversionResult:
        """Convert a tree into the target library's element type."""
        start_time = time.time()
        if node.is_empty:
            return self._create_error_result(
                "Cannot convert an empty document", node, start_time
            )

        try:
            element = _node_to_element(node, self.element_factory())
        except (TypeError, ValueError) as e:
            # lxml rejects tag and attribute names that are not valid XML names
            return self._create_error_result(
                f"Failed to convert to {self.metadata.name}: {e}", node, start_time
            )
        processing_time = (time.time() - start_time) * MS_PER_SECOND
        self._logger.debug(
            "Converted tree to target",
            extra={"target": self.metadata.name, "processing_time_ms": processing_time},
        )
        return ConversionResult(
            success=True,
            converted_data=element,
            original_data=node,
            conversion_time_ms=processing_time,
            metadata={"element_count": sum(1 for _ in element.iter())},
        )

    def from_target(self, target_data: Any) -> ConversionResult:
        """Convert an element of the target library into a tree."""
        start_time = time.time()
        if not isinstance(getattr(target_data, "tag", None), str):
            return self._create_error_result(
                f"Target data is not a valid {self.metadata.target_library} element",
                target_data,
                start_time,
            )

        try:
            node = _element_to_node(target_data)
        except (TypeError, ValueError) as e:
            return self._create_error_result(
                f"Failed to convert from {self.metadata.name}: {e}",
                target_data,
                start_time,
            )

        processing_time = (time.time() - start_time) * MS_PER_SECOND
        return ConversionResult(
            success=True,
            converted_data=node,
            original_data=target_data,
            conversion_time_ms=processing_time,
            metadata={"element_count": sum(1 for _ in node.iter_nodes())},
        )

    def _create_error_result(
        self, error_message: str, original_data: Any, start_time: float
    ) -> ConversionResult:
        self._logger.warning(
            "Conversion failed", extra={"target": self.metadata.name, "error": error_message}
        )
        return ConversionResult(
            success=False,
            converted_data=None,
            original_data=original_data,
            conversion_time_ms=(time.time() - start_time) * MS_PER_SECOND,
            errors=[error_message],
        )


class ElementTreeAdapter(IntegrationAdapter):
    """Adapter for bidirectional conversion with xml.etree.ElementTree."""

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="elementtree",
            target_library="xml.etree.ElementTree",
            description="Bidirectional conversion between Node and ElementTree",
        )

    def is_available(self) -> bool:
        return True

    def element_factory(self) -> Any:
        import xml.etree.ElementTree as ET
        return ET


class LxmlAdapter(IntegrationAdapter):
    """Adapter for bidirectional conversion with lxml.etree."""

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="lxml",
            target_library="lxml",
            description="Bidirectional conversion between Node and lxml.etree",
        )

    def is_available(self) -> bool:
        try:
            import lxml.etree  # noqa: F401
            return True
        except ImportError:
            return False

    def element_factory(self) -> Any:
        import lxml.etree as ET
        return ET


class AdapterRegistry:
    """Registry for managing integration adapters."""

    def __init__(self) -> None:
        self._adapters: Dict[str, Type[IntegrationAdapter]] = {}

    def register(self, adapter_class: Type[IntegrationAdapter]) -> None:
        """Register an adapter class under its metadata name."""
        self._adapters[adapter_class().metadata.name] = adapter_class

    def get_adapter(
        self, adapter_name: str, correlation_id: Optional[str] = None
    ) -> Optional[IntegrationAdapter]:
        """Get an adapter instance by name, or None if unknown or unavailable."""
        adapter_class = self._adapters.get(adapter_name)
        if adapter_class is None:
            return None
        instance = adapter_class(correlation_id)
        return instance if instance.is_available() else None

    def list_available_adapters(self) -> List[AdapterMetadata]:
        """List metadata of every registered adapter whose library imports."""
        available = []
        for adapter_class in self._adapters.values():
            instance = adapter_class()
            if instance.is_available():
                available.append(instance.metadata)
        return available


# Global adapter registry instance
_adapter_registry = AdapterRegistry()


def register_adapter(adapter_class: Type[IntegrationAdapter]) -> None:
    """Register an integration adapter globally."""
    _adapter_registry.register(adapter_class)


def get_adapter(
    adapter_name: str, correlation_id: Optional[str] = None
) -> Optional[IntegrationAdapter]:
    """Get a registered adapter instance."""
    return _adapter_registry.get_adapter(adapter_name, correlation_id)


def list_available_adapters() -> List[AdapterMetadata]:
    """List all available integration adapters."""
    return _adapter_registry.list_available_adapters()


register_adapter(ElementTreeAdapter)
register_adapter(LxmlAdapter)


def to_etree(node: Node) -> Any:
    """Convert a tree to an ``xml.etree.ElementTree.Element``."""
    import xml.etree.ElementTree as ET
    return _node_to_element(node, ET)


def from_etree(element: Any) -> Node:
    """Convert an ElementTree (or lxml) element to a tree."""
    return _element_to_node(element)


def _node_to_element(node: Node, factory: Any, parent: Any = None) -> Any:
    if parent is None:
        element = factory.Element(node.tag, dict(node.attributes))
    else:
        element = factory.SubElement(parent, node.tag, dict(node.attributes))

    last_child = None
    for child in node.children:
        last_child = _node_to_element(child, factory, element)

    if node.content:
        if last_child is None:
            element.text = node.content
        else:
            last_child.tail = node.content
    return element


def _element_to_node(element: Any) -> Node:
    node = Node(element.tag, dict(element.attrib))
    text_parts = [element.text or ""]
    for child in element:
        # Comments and processing instructions have a non-string tag.
        if isinstance(child.tag, str):
            node.add_child(_element_to_node(child))
        text_parts.append(child.tail or "")
    node.content = "".join(text_parts).strip()
    return node
