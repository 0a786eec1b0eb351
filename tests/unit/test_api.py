#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for the public API functions."""

import logging
from io import BytesIO, StringIO

import pytest

from mdcanon import (
    MarkdownFormatOptions,
    MarkdownParserOptions,
    ReferenceDefinition,
    format_markdown,
    format_markdown_to,
    is_formatted,
    parse_markdown,
    render_events,
)
from mdcanon.events import Emphasis, Paragraph, Text, wrap


@pytest.mark.unit
class TestFormatMarkdown:
    """Test format_markdown and its option handling."""

    def test_basic(self) -> None:
        """Test canonical output for a small document."""
        assert format_markdown("Title\n=====\n\n* one\n* two") == "# Title\n\n- one\n- two\n"

    def test_options_object(self) -> None:
        """Test passing a format options object."""
        assert format_markdown("*hi*", MarkdownFormatOptions(emphasis_marker="*")) == "*hi*\n"

    def test_kwargs_override_options(self) -> None:
        """Test that keyword fields override the options object."""
        options = MarkdownFormatOptions(emphasis_marker="*")
        assert format_markdown("*hi*", options, emphasis_marker="_") == "_hi_\n"

    def test_parser_kwargs(self) -> None:
        """Test that parser fields are routed to the parser options."""
        assert format_markdown("~~x~~", parse_strikethrough=False) == "\\~\\~x\\~\\~\n"
        assert format_markdown("~~x~~") == "~~x~~\n"

    def test_parser_options_object(self) -> None:
        """Test passing a parser options object."""
        result = format_markdown("- [x] a", parser_options=MarkdownParserOptions(parse_task_lists=False))
        assert result == "- \\[x\\] a\n"

    def test_unknown_kwargs_logged(self, caplog) -> None:
        """Test that unknown keyword arguments are ignored with a debug message."""
        with caplog.at_level(logging.DEBUG, logger="mdcanon.api"):
            assert format_markdown("a", not_an_option=1) == "a\n"
        assert "not_an_option" in caplog.text

    def test_bytes_source(self) -> None:
        """Test bytes input."""
        assert format_markdown(b"* a") == "- a\n"

    def test_empty_document(self) -> None:
        """Test that an empty document stays empty."""
        assert format_markdown("") == ""

    def test_sample_is_canonical(self, sample_markdown: str) -> None:
        """Test that the shared sample document is a fixed point."""
        assert format_markdown(sample_markdown) == sample_markdown


@pytest.mark.unit
class TestOtherEntryPoints:
    """Test the remaining API functions."""

    def test_format_markdown_to_text_stream(self) -> None:
        """Test writing to a text stream."""
        buffer = StringIO()
        format_markdown_to("* a", buffer)
        assert buffer.getvalue() == "- a\n"

    def test_format_markdown_to_binary_stream(self) -> None:
        """Test writing to a binary stream."""
        buffer = BytesIO()
        format_markdown_to("* a", buffer, unordered_list_marker="+")
        assert buffer.getvalue() == b"+ a\n"

    def test_format_markdown_to_path(self, tmp_path) -> None:
        """Test writing to a path."""
        target = tmp_path / "out.md"
        format_markdown_to("* a", target)
        assert target.read_text(encoding="utf-8") == "- a\n"

    def test_render_events_returns_text(self) -> None:
        """Test rendering events without an output."""
        events = wrap(Paragraph(), *wrap(Emphasis(), Text("x")))
        assert render_events(events, emphasis_marker="*") == "*x*\n"

    def test_render_events_with_output(self) -> None:
        """Test rendering events into a sink."""
        buffer = StringIO()
        refs = [ReferenceDefinition("a", "/a")]
        assert render_events(wrap(Paragraph(), Text("x")), refs, output=buffer) is None
        assert buffer.getvalue() == "x\n\n[a]: /a\n"

    def test_is_formatted(self) -> None:
        """Test canonical form detection."""
        assert is_formatted("- a\n")
        assert not is_formatted("* a\n")
        assert is_formatted("* a\n", unordered_list_marker="*")

    def test_parse_markdown(self) -> None:
        """Test tokenizing without rendering."""
        events, references = parse_markdown("[a][r]\n\n[r]: /r")
        assert events
        assert [definition.label for definition in references] == ["r"]
