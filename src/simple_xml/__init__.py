"""simple-xml: a small in-memory XML reader and writer.

Text is parsed into a tree of :class:`Node` objects carrying a tag,
attributes, child nodes and text content, and trees render back to compact
or indented XML.

Entry points:
- from_string(), from_file() to load a document
- new(), new_filled() to build nodes in code
- Node.to_string(), Node.to_string_pretty() to write XML
"""

__version__ = "0.1.0"
__author__ = "simple-xml developers"

from .api import from_file, from_string, new, new_filled
from .parsing import (
    ContentOutsideRootError,
    ErrorKind,
    InvalidTagNameError,
    MissingAttributeValueError,
    MissingClosingDelimiterError,
    MissingClosingTagError,
    MissingQuotesError,
    NestingTooDeepError,
    TextPosition,
    XMLError,
    XMLIOError,
)
from .shared.config import ParserConfig, SimpleXMLConfig, WriterConfig
from .tree import EMPTY, EmptyNode, Node, to_string, to_string_pretty

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Loading and construction
    "from_file",
    "from_string",
    "new",
    "new_filled",

    # Tree model and rendering
    "EMPTY",
    "EmptyNode",
    "Node",
    "to_string",
    "to_string_pretty",

    # Configuration
    "ParserConfig",
    "SimpleXMLConfig",
    "WriterConfig",

    # Errors
    "ContentOutsideRootError",
    "ErrorKind",
    "InvalidTagNameError",
    "MissingAttributeValueError",
    "MissingClosingDelimiterError",
    "MissingClosingTagError",
    "MissingQuotesError",
    "NestingTooDeepError",
    "TextPosition",
    "XMLError",
    "XMLIOError",
]
