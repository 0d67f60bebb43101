"""Recursive descent parsing for simple-xml.

Key Components:
    RecursiveDescentParser: builds a tree from one input document
    Payload: outcome of parsing one range of the input
    XMLError and subclasses: the failure taxonomy with source positions
"""

from .errors import (
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
from .parser import Payload, RecursiveDescentParser

__all__ = [
    "ContentOutsideRootError",
    "ErrorKind",
    "InvalidTagNameError",
    "MissingAttributeValueError",
    "MissingClosingDelimiterError",
    "MissingClosingTagError",
    "MissingQuotesError",
    "NestingTooDeepError",
    "Payload",
    "RecursiveDescentParser",
    "TextPosition",
    "XMLError",
    "XMLIOError",
]
