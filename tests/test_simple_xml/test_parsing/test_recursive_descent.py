"""Tests for the recursive descent parser."""

import logging

import pytest

from simple_xml.parsing import (
    ContentOutsideRootError,
    InvalidTagNameError,
    MissingAttributeValueError,
    MissingClosingDelimiterError,
    MissingClosingTagError,
    MissingQuotesError,
    NestingTooDeepError,
    RecursiveDescentParser,
)
from simple_xml.shared.config import ParserConfig
from simple_xml.tree import EMPTY, Node


def parse(text: str, **config_kwargs):
    return RecursiveDescentParser(text, ParserConfig(**config_kwargs)).parse()


class TestElements:
    """Test parsing of well-formed input."""

    def test_single_self_closing_element(self) -> None:
        root = parse("<a/>")

        assert root == Node("a")

    def test_self_closing_with_attribute_and_no_space(self) -> None:
        root = parse('<a k="v"/>')

        assert root.attributes == {"k": "v"}
        assert root.children == ()

    def test_self_closing_with_space_before_slash(self) -> None:
        root = parse('<a k="v" />')

        assert root.attributes == {"k": "v"}

    def test_attributes_keep_spaces_inside_quotes(self) -> None:
        root = parse('<a title="hello world" n="1">x</a>')

        assert root.attributes == {"title": "hello world", "n": "1"}
        assert root.content == "x"

    def test_empty_attribute_value(self) -> None:
        assert parse('<a k=""/>').attributes == {"k": ""}

    def test_whitespace_separators_in_header(self) -> None:
        root = parse('<a\n  x="1"\t y="2"/>')

        assert root.attributes == {"x": "1", "y": "2"}

    def test_nested_children_grouped_by_tag(self) -> None:
        root = parse("<list><item>1</item><item>2</item><other/></list>")

        assert [item.content for item in root["item"]] == ["1", "2"]
        assert len(root["other"]) == 1
        assert [child.tag for child in root.children] == ["item", "item", "other"]

    def test_content_is_joined_text_around_children(self) -> None:
        root = parse("<a>x <b/> y <c/> z</a>")

        assert root.content == "x  y  z"
        assert [child.tag for child in root.children] == ["b", "c"]

    def test_content_is_trimmed(self) -> None:
        assert parse("<a>\n    text\n</a>").content == "text"

    def test_element_with_no_content(self) -> None:
        root = parse("<a></a>")

        assert root.content == ""
        assert root.children == ()

    def test_deep_nesting(self) -> None:
        root = parse("<a><b><c><d>x</d></c></b></a>")

        assert root["b"][0]["c"][0]["d"][0].content == "x"
        assert root.depth() == 4

    def test_element_count(self) -> None:
        parser = RecursiveDescentParser("<a><b/><c><d/></c></a>")
        parser.parse()

        assert parser.element_count == 4


class TestInstructions:
    """Test skipping of processing instructions, comments and declarations."""

    def test_leading_declaration_is_skipped(self) -> None:
        root = parse('<?xml version="1.0"?>\n<a>x</a>')

        assert root == Node("a", content="x")

    def test_text_around_instruction_is_joined(self) -> None:
        assert parse("<a>hello<?pi x?>world</a>").content == "helloworld"

    def test_comment_with_markup_inside(self) -> None:
        root = parse("<a><!-- <b/> -->text</a>")

        assert root.content == "text"
        assert root.children == ()

    def test_same_named_tag_inside_comment(self) -> None:
        root = parse("<a><!-- see <a> --><b/></a>")

        assert [child.tag for child in root.children] == ["b"]
        assert root.content == ""

    def test_closing_tag_inside_comment(self) -> None:
        root = parse("<a><a>x<!-- </a> --></a></a>")

        assert root["a"][0].content == "x"

    def test_same_named_tag_inside_instruction(self) -> None:
        root = parse("<a><?pi <a ?>y</a>")

        assert root.content == "y"
        assert root.children == ()

    def test_doctype_is_skipped(self) -> None:
        root = parse("<!DOCTYPE note>\n<note/>")

        assert root.tag == "note"

    def test_skipped_instruction_count(self) -> None:
        parser = RecursiveDescentParser("<?xml?><!-- c --><a><?pi?></a>")
        parser.parse()

        assert parser.skipped_instructions == 3

    def test_unterminated_comment(self) -> None:
        with pytest.raises(MissingClosingDelimiterError):
            parse("<a><!-- never closed > </a>")

    def test_comments_not_skipped_when_disabled(self) -> None:
        root = parse("<a><!x/></a>", skip_comments=False)

        assert root.children[0].tag == "!x"


class TestDocumentBoundaries:
    """Test handling of the text outside the root element."""

    def test_empty_input(self) -> None:
        assert parse("") is EMPTY

    def test_whitespace_and_instructions_only(self) -> None:
        assert parse("  <?xml version='1.0'?>\n  ") is EMPTY

    def test_text_before_root(self) -> None:
        with pytest.raises(ContentOutsideRootError) as exc_info:
            parse("junk<a/>")

        assert exc_info.value.fragment == "junk<a/>"
        assert exc_info.value.position.offset == 0

    def test_text_split_by_instruction_before_root(self) -> None:
        with pytest.raises(ContentOutsideRootError):
            parse("garbage<?pi?><a/>")

    def test_text_without_element(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="simple_xml.parsing.parser"):
            assert parse("\n  hello") is EMPTY

        record = next(r for r in caplog.records if "without elements" in r.getMessage())
        assert record.offset == 3

    def test_text_around_instruction_without_element(self) -> None:
        assert parse("hello<?pi?>world") is EMPTY

    def test_trailing_content_is_ignored_with_warning(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="simple_xml.parsing.parser"):
            root = parse("<a/><b/>")

        assert root == Node("a")
        assert any("after the root element" in r.getMessage() for r in caplog.records)


class TestClosingTags:
    """Test closing tag search modes."""

    def test_same_name_nesting(self) -> None:
        root = parse("<a><a>x</a></a>")

        assert len(root["a"]) == 1
        assert root["a"][0].content == "x"
        assert root.content == ""

    def test_same_name_nesting_literal_mode(self) -> None:
        with pytest.raises(MissingClosingTagError):
            parse("<a><a>x</a></a>", nesting_aware_closing=False)

    def test_self_closed_same_name_child(self) -> None:
        root = parse("<a><a/><b>y</b></a>")

        assert [child.tag for child in root.children] == ["a", "b"]
        assert root["b"][0].content == "y"

    def test_prefix_tag_is_not_a_nested_opening(self) -> None:
        root = parse("<a><ab>x</ab></a>")

        assert root["ab"][0].content == "x"


class TestErrors:
    """Test error kinds, fragments and positions."""

    def test_missing_closing_tag(self) -> None:
        with pytest.raises(MissingClosingTagError) as exc_info:
            parse("<a>\n<b>")

        error = exc_info.value
        assert error.fragment == "a"
        assert (error.position.line, error.position.column) == (1, 1)

    def test_missing_closing_tag_for_child(self) -> None:
        with pytest.raises(MissingClosingTagError) as exc_info:
            parse("<a><b></a>")

        assert exc_info.value.fragment == "b"

    def test_missing_closing_delimiter(self) -> None:
        with pytest.raises(MissingClosingDelimiterError) as exc_info:
            parse("<a")

        assert exc_info.value.fragment == "<a"

    def test_missing_attribute_value(self) -> None:
        with pytest.raises(MissingAttributeValueError) as exc_info:
            parse("<a flag/>")

        assert exc_info.value.fragment == "flag"
        assert exc_info.value.position.offset == 3

    def test_missing_quotes_position(self) -> None:
        with pytest.raises(MissingQuotesError) as exc_info:
            parse("<root>\n  <item n=bad/>\n</root>")

        error = exc_info.value
        assert error.fragment == "n=bad"
        assert (error.position.line, error.position.column) == (2, 9)

    def test_single_quotes_are_rejected(self) -> None:
        with pytest.raises(MissingQuotesError):
            parse("<a k='v'/>")

    def test_lone_quote_is_rejected(self) -> None:
        with pytest.raises(MissingQuotesError):
            parse('<a k="/>')

    def test_empty_tag_name(self) -> None:
        with pytest.raises(InvalidTagNameError) as exc_info:
            parse("< >")

        assert exc_info.value.fragment == "< >"

    def test_nesting_too_deep(self) -> None:
        with pytest.raises(NestingTooDeepError) as exc_info:
            parse("<a><b><c/></b></a>", max_depth=2)

        assert exc_info.value.fragment == "c"

    def test_nesting_within_limit(self) -> None:
        root = parse("<a><b/></a>", max_depth=2)

        assert root["b"][0] == Node("b")
