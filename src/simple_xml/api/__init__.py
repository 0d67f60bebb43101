"""Public API for simple-xml: loading, construction and library adapters."""

from .adapters import (
    ElementTreeAdapter,
    LxmlAdapter,
    from_etree,
    get_adapter,
    list_available_adapters,
    to_etree,
)
from .parser import from_file, from_string, new, new_filled

__all__ = [
    "ElementTreeAdapter",
    "LxmlAdapter",
    "from_etree",
    "from_file",
    "from_string",
    "get_adapter",
    "list_available_adapters",
    "new",
    "new_filled",
    "to_etree",
]
