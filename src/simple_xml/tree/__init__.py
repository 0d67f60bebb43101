"""Tree model and serialization for simple-xml.

Key Components:
    Node: XML element with attributes, ordered children and text content
    EmptyNode / EMPTY: the result for a document with no element
    to_string / to_string_pretty: compact and indented XML rendering
"""

from .node import EMPTY, EmptyNode, Node
from .serializer import XML_DECLARATION, to_file, to_string, to_string_pretty

__all__ = [
    "EMPTY",
    "EmptyNode",
    "Node",
    "XML_DECLARATION",
    "to_file",
    "to_string",
    "to_string_pretty",
]
