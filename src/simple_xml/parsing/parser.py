"""Recursive descent parser for simple-xml.

The parser works directly on index ranges of the input string. One call to
:meth:`RecursiveDescentParser.parse_slice` reads the text up to the next
element, parses that element (recursing into its inner text) and reports
where it stopped, so the caller can carry on with the rest of its range.

Processing instructions (``<?...?>``) and, unless disabled, comments and
``<!...>`` declarations are skipped. Text on either side of a skipped
instruction is joined as if the instruction were not there.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from simple_xml.parsing.errors import (
    ContentOutsideRootError,
    InvalidTagNameError,
    MissingAttributeValueError,
    MissingClosingDelimiterError,
    MissingClosingTagError,
    MissingQuotesError,
    NestingTooDeepError,
    TextPosition,
)
from simple_xml.shared.config import ParserConfig
from simple_xml.shared.logging import get_logger
from simple_xml.tokenization import iter_unquoted
from simple_xml.tree.node import EMPTY, EmptyNode, Node

EXCERPT_LENGTH = 40
COMMENT_START = "!--"
COMMENT_END = "-->"

_NON_WHITESPACE = re.compile(r"\S")
_PI_START = re.compile(r"<\s*\?")
_MARKUP_START = re.compile(r"<\s*[?!]")


@dataclass
class Payload:
    """Outcome of parsing one range of the input.

    ``node`` is None when the range holds no further element. ``remaining``
    is the offset of the first unconsumed character; it equals the start of
    the range when nothing was consumed. ``prolog_offset`` points at the
    first non-whitespace character of ``prolog``, if there is one.
    """

    prolog: str
    node: Optional[Node]
    remaining: int
    prolog_offset: Optional[int] = None


class RecursiveDescentParser:
    """Parser for a single input document.

    Examples:
        >>> parser = RecursiveDescentParser('<a><b>x</b></a>')
        >>> root = parser.parse()
        >>> root["b"][0].content
        'x'
    """

    def __init__(
        self,
        text: str,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        self.text = text
        self.config = config or ParserConfig()
        self.logger = get_logger(__name__, correlation_id, "parser")
        self.element_count = 0
        self.skipped_instructions = 0
        self._debug = self.logger.is_enabled_for(logging.DEBUG)

    def parse(self) -> Union[Node, EmptyNode]:
        """Parse the whole input and return its root element.

        Returns:
            The root node, or ``EMPTY`` when the input holds no element. Text
            in an input without any element is ignored.

        Raises:
            XMLError: on the first problem found anywhere in the input
        """
        payload = self.parse_slice(0, len(self.text))
        leftover = _NON_WHITESPACE.search(self.text, payload.remaining)

        if payload.node is None:
            stray = payload.prolog_offset
            if stray is None and leftover:
                stray = leftover.start()
            if stray is not None:
                self.logger.warning(
                    "Ignoring text in a document without elements",
                    extra={"offset": stray},
                )
            return EMPTY

        if payload.prolog_offset is not None:
            raise ContentOutsideRootError(
                self._excerpt(payload.prolog_offset),
                self._position(payload.prolog_offset),
            )

        if leftover:
            self.logger.warning(
                "Ignoring content after the root element",
                extra={"offset": leftover.start(), "root_tag": payload.node.tag},
            )
        return payload.node

    def parse_slice(self, start: int, end: int, depth: int = 0) -> Payload:
        """Parse the next element found in ``text[start:end]``.

        Args:
            start: Offset where the range begins
            end: Offset one past the end of the range
            depth: Number of elements enclosing the range
        """
        text = self.text
        prolog_parts = []
        prolog_offset = None
        pos = start

        while True:
            opening = text.find("<", pos, end)
            if opening < 0:
                return Payload("".join(prolog_parts), None, pos, prolog_offset)

            closing = text.find(">", opening + 1, end)
            if closing < 0:
                raise MissingClosingDelimiterError(
                    self._excerpt(opening), self._position(opening)
                )

            prolog_parts.append(text[pos:opening])
            if prolog_offset is None:
                match = _NON_WHITESPACE.search(text, pos, opening)
                if match:
                    prolog_offset = match.start()

            skip_to = self._skip_instruction(opening, closing, end)
            if skip_to is None:
                break
            pos = skip_to

        node, remaining = self._parse_element(opening, closing, end, depth)
        return Payload("".join(prolog_parts), node, remaining, prolog_offset)

    def _instruction_end(self, opening: int, closing: int, end: int) -> Optional[int]:
        """Return the offset after a skippable instruction, or None for an element."""
        header = self.text[opening + 1:closing].lstrip()

        if header.startswith("?"):
            return closing + 1
        if self.config.skip_comments and header.startswith(COMMENT_START):
            comment_end = self.text.find(COMMENT_END, opening + 1 + len(COMMENT_START), end)
            if comment_end < 0:
                raise MissingClosingDelimiterError(
                    self._excerpt(opening), self._position(opening)
                )
            return comment_end + len(COMMENT_END)
        if self.config.skip_comments and header.startswith("!"):
            return closing + 1
        return None

    def _skip_instruction(self, opening: int, closing: int, end: int) -> Optional[int]:
        after = self._instruction_end(opening, closing, end)
        if after is None:
            return None

        self.skipped_instructions += 1
        if self._debug:
            self.logger.debug(
                "Skipped instruction",
                extra={"offset": opening, "instruction": self._excerpt(opening)},
            )
        return after

    def _parse_element(
        self, opening: int, closing: int, end: int, depth: int
    ) -> Tuple[Node, int]:
        """Parse the element whose header spans ``text[opening:closing + 1]``.

        Returns:
            The node and the offset right after the element
        """
        text = self.text
        header = text[opening + 1:closing].rstrip()
        self_closing = header.endswith("/")
        if self_closing:
            header = header[:-1]

        tokens = (
            (offset, token)
            for offset, token in iter_unquoted(
                header, self.config.header_separators, base=opening + 1
            )
            if token
        )
        first = next(tokens, None)
        if first is None:
            raise InvalidTagNameError(
                text[opening:closing + 1], self._position(opening)
            )
        tag = first[1]

        if depth >= self.config.max_depth:
            raise NestingTooDeepError(tag, self._position(opening))

        node = Node(tag)
        for offset, token in tokens:
            if token == "/":
                break
            equal_sign = token.find("=")
            if equal_sign < 0:
                raise MissingAttributeValueError(token, self._position(offset))
            key, value = token[:equal_sign], token[equal_sign + 1:]
            if len(value) < 2 or value[0] != '"' or value[-1] != '"':
                raise MissingQuotesError(token, self._position(offset))
            node.attributes[key] = value[1:-1]

        self.element_count += 1
        if self._debug:
            self.logger.debug(
                "Parsed element header",
                extra={"tag": tag, "offset": opening, "self_closing": self_closing},
            )

        if self_closing:
            return node, closing + 1

        closing_tag = self._find_closing_tag(tag, closing + 1, end)
        if closing_tag < 0:
            raise MissingClosingTagError(tag, self._position(opening))

        content_parts = []
        pos = closing + 1
        while pos < closing_tag:
            payload = self.parse_slice(pos, closing_tag, depth + 1)
            if payload.node is not None:
                node.add_child(payload.node)
            # No element left in the range; the rest is plain content.
            if payload.remaining == pos:
                break
            content_parts.append(payload.prolog)
            pos = payload.remaining

        content_parts.append(text[pos:closing_tag])
        node.content = "".join(content_parts).strip()
        return node, closing_tag + len(tag) + 3

    def _find_closing_tag(self, tag: str, start: int, end: int) -> int:
        """Locate ``</tag>`` for an element whose body starts at ``start``.

        In nesting-aware mode every same-named descendant that is opened (and
        not self-closed) must be closed before the element itself is. Tags
        inside skipped instructions and comments are not counted.
        """
        closing = f"</{tag}>"
        if not self.config.nesting_aware_closing:
            return self.text.find(closing, start, end)

        instruction_start = _MARKUP_START if self.config.skip_comments else _PI_START
        open_elements = 0
        pos = start
        while True:
            candidate = self.text.find(closing, pos, end)
            if candidate < 0:
                return -1

            nested = self._find_opening_tag(tag, pos, candidate)
            instruction = instruction_start.search(self.text, pos, candidate)
            if instruction and (nested < 0 or instruction.start() < nested):
                instruction_closing = self.text.find(">", instruction.start() + 1, end)
                if instruction_closing < 0:
                    return -1
                pos = self._instruction_end(instruction.start(), instruction_closing, end)
                continue

            if nested < 0:
                if open_elements == 0:
                    return candidate
                open_elements -= 1
                pos = candidate + len(closing)
                continue

            nested_end = self.text.find(">", nested, candidate)
            if nested_end < 0:
                pos = nested + len(tag) + 1
                continue
            if not self.text[nested + 1:nested_end].rstrip().endswith("/"):
                open_elements += 1
            pos = nested_end + 1

    def _find_opening_tag(self, tag: str, start: int, limit: int) -> int:
        needle = "<" + tag
        pos = start
        while True:
            found = self.text.find(needle, pos, limit)
            if found < 0:
                return -1
            follow = found + len(needle)
            if follow < len(self.text) and (
                self.text[follow] in "/>" or self.text[follow] in self.config.header_separators
            ):
                return found
            pos = found + 1

    def _position(self, offset: int) -> TextPosition:
        return TextPosition.from_offset(self.text, offset)

    def _excerpt(self, offset: int) -> str:
        excerpt = self.text[offset:offset + EXCERPT_LENGTH]
        if len(self.text) - offset > EXCERPT_LENGTH:
            excerpt += "..."
        return excerpt
