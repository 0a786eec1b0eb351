#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for format and parser options."""

from dataclasses import FrozenInstanceError

import pytest

from mdcanon.options import MarkdownFormatOptions, MarkdownParserOptions


@pytest.mark.unit
class TestMarkdownFormatOptions:
    """Test style option defaults and validation."""

    def test_defaults(self) -> None:
        """Test the canonical default markers."""
        options = MarkdownFormatOptions()
        assert options.blockquote_marker == ">"
        assert options.emphasis_marker == "_"
        assert options.unordered_list_marker == "-"
        assert options.code_formatter is None

    @pytest.mark.parametrize("marker", ["*", "_"])
    def test_valid_emphasis_markers(self, marker: str) -> None:
        """Test both emphasis delimiters."""
        assert MarkdownFormatOptions(emphasis_marker=marker).emphasis_marker == marker

    @pytest.mark.parametrize("marker", ["", "~", "**"])
    def test_invalid_emphasis_marker(self, marker: str) -> None:
        """Test that other emphasis markers are rejected."""
        with pytest.raises(ValueError, match="emphasis_marker"):
            MarkdownFormatOptions(emphasis_marker=marker)

    @pytest.mark.parametrize("marker", ["1", ".", "--"])
    def test_invalid_bullet(self, marker: str) -> None:
        """Test that unknown bullets are rejected."""
        with pytest.raises(ValueError, match="unordered_list_marker"):
            MarkdownFormatOptions(unordered_list_marker=marker)

    @pytest.mark.parametrize("marker", ["", " >", "> ", ">\n>"])
    def test_invalid_blockquote_marker(self, marker: str) -> None:
        """Test that empty, padded or multi-line quote markers are rejected."""
        with pytest.raises(ValueError, match="blockquote_marker"):
            MarkdownFormatOptions(blockquote_marker=marker)

    def test_custom_blockquote_marker(self) -> None:
        """Test a multi-character quote marker."""
        assert MarkdownFormatOptions(blockquote_marker=">>").blockquote_marker == ">>"

    def test_code_formatter_must_be_callable(self) -> None:
        """Test that a non-callable formatter is rejected."""
        with pytest.raises(ValueError, match="code_formatter"):
            MarkdownFormatOptions(code_formatter="black")  # type: ignore[arg-type]

    def test_frozen(self) -> None:
        """Test that options cannot be mutated."""
        options = MarkdownFormatOptions()
        with pytest.raises(FrozenInstanceError):
            options.emphasis_marker = "*"  # type: ignore[misc]

    def test_create_updated(self) -> None:
        """Test copying with changes leaves the original alone."""
        options = MarkdownFormatOptions()
        updated = options.create_updated(unordered_list_marker="+")
        assert updated.unordered_list_marker == "+"
        assert options.unordered_list_marker == "-"

    def test_create_updated_validates(self) -> None:
        """Test that copies are validated too."""
        with pytest.raises(ValueError):
            MarkdownFormatOptions().create_updated(emphasis_marker="+")

    def test_formatter_ignored_in_equality(self) -> None:
        """Test that options differing only by formatter compare equal."""
        assert MarkdownFormatOptions(code_formatter=lambda language, content: None) == MarkdownFormatOptions()

    def test_field_names(self) -> None:
        """Test field name listing in declaration order."""
        assert MarkdownFormatOptions.field_names() == [
            "blockquote_marker",
            "emphasis_marker",
            "unordered_list_marker",
            "code_formatter",
        ]


@pytest.mark.unit
class TestMarkdownParserOptions:
    """Test parser option defaults."""

    def test_all_extensions_enabled_by_default(self) -> None:
        """Test that every extension is on by default."""
        options = MarkdownParserOptions()
        assert options.parse_tables
        assert options.parse_footnotes
        assert options.parse_task_lists
        assert options.parse_strikethrough

    def test_create_updated(self) -> None:
        """Test disabling one extension."""
        assert not MarkdownParserOptions().create_updated(parse_tables=False).parse_tables
