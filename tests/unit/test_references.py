#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for reference definitions and the reference table."""

import pytest

from mdcanon.references import ReferenceDefinition, ReferenceTable, normalize_label


@pytest.mark.unit
class TestNormalizeLabel:
    """Test link label normalization."""

    def test_case_insensitive(self) -> None:
        """Test that labels fold case."""
        assert normalize_label("Foo") == normalize_label("FOO")

    def test_whitespace_collapsed(self) -> None:
        """Test that whitespace runs collapse and ends are stripped."""
        assert normalize_label("  foo \n\t bar ") == "foo bar"


@pytest.mark.unit
class TestReferenceDefinition:
    """Test rendering of definition lines."""

    def test_without_title(self) -> None:
        """Test a definition without title."""
        assert ReferenceDefinition("site", "https://example.com").to_markdown() == "[site]: https://example.com"

    def test_with_title(self) -> None:
        """Test a definition with title."""
        definition = ReferenceDefinition("site", "https://example.com", "Home")
        assert definition.to_markdown() == '[site]: https://example.com "Home"'

    def test_title_quotes_escaped(self) -> None:
        """Test that double quotes inside a title are escaped."""
        definition = ReferenceDefinition("q", "/x", 'say "hi"')
        assert definition.to_markdown() == '[q]: /x "say \\"hi\\""'


@pytest.mark.unit
class TestReferenceTable:
    """Test ordering and lookup in the reference table."""

    def test_sorted_by_label(self) -> None:
        """Test that iteration is in label order regardless of input order."""
        table = ReferenceTable(
            [
                ReferenceDefinition("b", "/b"),
                ReferenceDefinition("a", "/a"),
                ReferenceDefinition("C", "/c"),
            ]
        )
        # Code point order puts uppercase first
        assert [d.label for d in table] == ["C", "a", "b"]

    def test_len_and_truthiness(self) -> None:
        """Test container protocol."""
        assert not ReferenceTable()
        assert len(ReferenceTable()) == 0
        table = ReferenceTable([ReferenceDefinition("a", "/a")])
        assert table
        assert len(table) == 1

    def test_lookup_by_label(self) -> None:
        """Test label lookup is case and whitespace insensitive."""
        table = ReferenceTable([ReferenceDefinition("My Link", "/x")])
        found = table.lookup(label="my   LINK")
        assert found is not None
        assert found.destination == "/x"

    def test_lookup_by_destination(self) -> None:
        """Test the case-insensitive destination fallback."""
        table = ReferenceTable([ReferenceDefinition("site", "https://Example.com")])
        found = table.lookup(destination="https://example.COM")
        assert found is not None
        assert found.label == "site"

    def test_label_match_wins(self) -> None:
        """Test that a label match takes precedence over a destination match."""
        table = ReferenceTable(
            [
                ReferenceDefinition("a", "/shared"),
                ReferenceDefinition("b", "/shared"),
            ]
        )
        found = table.lookup(label="b", destination="/shared")
        assert found is not None
        assert found.label == "b"

    def test_lookup_miss(self) -> None:
        """Test that unknown labels and destinations return None."""
        table = ReferenceTable([ReferenceDefinition("a", "/a")])
        assert table.lookup(label="z") is None
        assert table.lookup(destination="/z") is None
        assert table.lookup() is None
