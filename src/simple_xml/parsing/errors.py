"""Error types raised while loading XML.

Every failure aborts the whole parse. Errors carry the offending fragment
(a tag name or attribute token) and the position in the original input where
the problem was found.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict, Optional


class ErrorKind(Enum):
    """Kinds of load failure."""

    IO_FAILURE = auto()
    CONTENT_OUTSIDE_ROOT = auto()
    MISSING_CLOSING_TAG = auto()
    MISSING_CLOSING_DELIMITER = auto()
    MISSING_ATTRIBUTE_VALUE = auto()
    MISSING_QUOTES = auto()
    INVALID_TAG_NAME = auto()
    NESTING_TOO_DEEP = auto()


@dataclass(frozen=True)
class TextPosition:
    """Position in the input: 1-based line and column, 0-based offset."""

    line: int
    column: int
    offset: int

    def __post_init__(self) -> None:
        if self.line < 1:
            raise ValueError("Line number must be >= 1")
        if self.column < 1:
            raise ValueError("Column number must be >= 1")
        if self.offset < 0:
            raise ValueError("Offset must be >= 0")

    @classmethod
    def from_offset(cls, text: str, offset: int) -> "TextPosition":
        """Compute line and column of ``offset`` within ``text``."""
        line = text.count("\n", 0, offset) + 1
        column = offset - (text.rfind("\n", 0, offset) + 1) + 1
        return cls(line=line, column=column, offset=offset)

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


class XMLError(Exception):
    """Base class for every error raised while loading XML."""

    kind: ErrorKind
    description = "XML error"

    def __init__(
        self,
        fragment: Optional[str] = None,
        position: Optional[TextPosition] = None,
        message: Optional[str] = None,
    ) -> None:
        self.fragment = fragment
        self.position = position
        self.message = message or self._default_message()
        super().__init__(self.message)

    def _default_message(self) -> str:
        message = self.description
        if self.fragment is not None:
            message += f": {self.fragment!r}"
        if self.position is not None:
            message += f" at {self.position}"
        return message

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready description of the error."""
        result: Dict[str, Any] = {
            "kind": self.kind.name,
            "message": self.message,
        }
        if self.fragment is not None:
            result["fragment"] = self.fragment
        if self.position is not None:
            result["line"] = self.position.line
            result["column"] = self.position.column
            result["offset"] = self.position.offset
        return result


class XMLIOError(XMLError):
    """Reading the input file failed. The original error is the ``__cause__``."""

    kind = ErrorKind.IO_FAILURE
    description = "Could not read XML input"


class ContentOutsideRootError(XMLError):
    kind = ErrorKind.CONTENT_OUTSIDE_ROOT
    description = "Content outside of the root element"


class MissingClosingTagError(XMLError):
    kind = ErrorKind.MISSING_CLOSING_TAG
    description = "Missing closing tag for element"


class MissingClosingDelimiterError(XMLError):
    kind = ErrorKind.MISSING_CLOSING_DELIMITER
    description = "Missing closing delimiter"


class MissingAttributeValueError(XMLError):
    kind = ErrorKind.MISSING_ATTRIBUTE_VALUE
    description = "Attribute has no value"


class MissingQuotesError(XMLError):
    kind = ErrorKind.MISSING_QUOTES
    description = "Attribute value is not enclosed in double quotes"


class InvalidTagNameError(XMLError):
    kind = ErrorKind.INVALID_TAG_NAME
    description = "Element has no tag name"


class NestingTooDeepError(XMLError):
    kind = ErrorKind.NESTING_TOO_DEEP
    description = "Elements are nested too deeply"
