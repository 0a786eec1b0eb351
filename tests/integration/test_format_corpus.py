#  Copyright (c) 2025 Tom Villani, Ph.D.

"""End-to-end formatting of the reference corpus.

Each case pairs a source document with its canonical form. Running the
formatter on the canonical form must return it unchanged.
"""

import pytest

from mdcanon import format_markdown

BLOCKQUOTE_CASES = [
    pytest.param(
        " >  This is a blockquote",
        "> This is a blockquote\n",
        id="blockquote1",
    ),
    pytest.param(
        "\n>  This is a blockquote\n> Multi-line",
        "> This is a blockquote\n> Multi-line\n",
        id="blockquote2",
    ),
    pytest.param(
        "\n> - With\n    a\n    list\n> - Another item",
        "> - With\n>   a\n>   list\n> - Another item\n",
        id="blockquote3",
    ),
    pytest.param(
        "\n> - List item 1\n>     - Nested item",
        "> - List item 1\n>   - Nested item\n",
        id="blockquote4",
    ),
    pytest.param(
        "\n> Blockquote\n>> Nested\n>>> Even more nested\n> Back to original",
        "> Blockquote\n>\n> > Nested\n> >\n> > > Even more nested\n> > > Back to original\n",
        id="blockquote5",
    ),
]

GENERAL_INPUT = (
    "\n"
    "# This is a heading \n"
    "This is a paragraph. About not *much*.\n"
    "It ~~spans~~ multiple *lines*. \n"
    "\n"
    "```json\n"
    "{\n"
    '    "key": "val"\n'
    "}\n"
    "```\n"
    "\n"
    '    { "key1": 100 }\n'
    "\n"
    '    { "key2: 101 }\n'
    "\n"
    "---\n"
    "\n"
    "\n"
    "<table>\n"
    "<tr><td>Hi</td></tr>\n"
    "</table>\n"
    "\n"
    "<span>Some text</span>\n"
    "\n"
    "Here's a **separate** paragraph.  \n"
    "And another line.\n"
)

GENERAL_EXPECTED = (
    "# This is a heading\n"
    "\n"
    "This is a paragraph. About not _much_.\n"
    "It ~~spans~~ multiple _lines_.\n"
    "\n"
    "```json\n"
    "{\n"
    '    "key": "val"\n'
    "}\n"
    "```\n"
    "\n"
    '    { "key1": 100 }\n'
    "\n"
    '    { "key2: 101 }\n'
    "\n"
    "---\n"
    "\n"
    "<table>\n"
    "<tr><td>Hi</td></tr>\n"
    "</table>\n"
    "\n"
    "<span>Some text</span>\n"
    "\n"
    "Here's a **separate** paragraph.\\\n"
    "And another line.\n"
)

GENERAL_CASES = [pytest.param(GENERAL_INPUT, GENERAL_EXPECTED, id="general")]

LINK_CASES = [
    pytest.param(
        "\n[basic link](https://example.com)",
        "[basic link](https://example.com)\n",
        id="link1",
    ),
    pytest.param(
        "\nInline [basic link](https://example.com) that's part of a sentence.",
        "Inline [basic link](https://example.com) that's part of a sentence.\n",
        id="link2",
    ),
    pytest.param(
        "\nHere's a [shortcut]. It should be preserved.\n\n[shortcut]: https://example.com",
        "Here's a [shortcut]. It should be preserved.\n\n[shortcut]: https://example.com\n",
        id="link3",
    ),
    pytest.param(
        "\nHere's a [collapsed][] link. It should be preserved.\n\n[collapsed]: https://example.com",
        "Here's a [collapsed][] link. It should be preserved.\n\n[collapsed]: https://example.com\n",
        id="link4",
    ),
    pytest.param(
        "\nHere's a [reference][link]. It should be preserved.\n\n[link]: https://example.com",
        "Here's a [reference][link]. It should be preserved.\n\n[link]: https://example.com\n",
        id="link5",
    ),
    pytest.param(
        "\nHere's a [reference][link1]. It should be preserved.\n"
        "\n"
        "[link1]: https://example.com\n"
        "\n"
        "There can be multiple: [link2].\n"
        "\n"
        '[link2]: https://example.com/2 "This is a title"',
        "Here's a [reference][link1]. It should be preserved.\n"
        "\n"
        "There can be multiple: [link2].\n"
        "\n"
        "[link1]: https://example.com\n"
        '[link2]: https://example.com/2 "This is a title"\n',
        id="link6",
    ),
    pytest.param(
        "\nHere's a [reference][link1].\n",
        "Here's a \\[reference\\]\\[link1\\].\n",
        id="link7",
    ),
    pytest.param(
        "\nHere's an <autolink>.\n",
        "Here's an <autolink>.\n",
        id="link8",
    ),
    pytest.param(
        "See [README.md](README.md) here.\n",
        "See [README.md](README.md) here.\n",
        id="link9",
    ),
    pytest.param(
        "\n[https://example.com](https://example.com)",
        "<https://example.com>\n",
        id="link10",
    ),
]

LIST_CASES = [
    pytest.param(
        "\n* item 1\n\n* item 2\n* item 3",
        "- item 1\n- item 2\n- item 3\n",
        id="list1",
    ),
    pytest.param(
        "\n* item 1\n  * item 2\n  * item 3\n    * item 4",
        "- item 1\n  - item 2\n  - item 3\n    - item 4\n",
        id="list2",
    ),
    pytest.param(
        "\n* Multiple\n  line\n  list\n* Next item",
        "- Multiple\n  line\n  list\n- Next item\n",
        id="list3",
    ),
    pytest.param(
        "\n* > blockquote\n  > inside\n  > list\n* Next item",
        "- > blockquote\n  > inside\n  > list\n\n- Next item\n",
        id="list4",
    ),
]

_TABLE_BODY = "| Test  | This is a test |\n"

TABLE_CASES = [
    pytest.param(
        "\n|Title|Description|\n|---|---|\n|Test|This is a test|",
        "| Title | Description    |\n| ----- | -------------- |\n" + _TABLE_BODY,
        id="table1",
    ),
    pytest.param(
        "\n|Title|Description|\n|:--|---|\n|Test|This is a test|",
        "| Title | Description    |\n| :---- | -------------- |\n" + _TABLE_BODY,
        id="table2",
    ),
    pytest.param(
        "\n|Title|Description|\n|:-:|---|\n|Test|This is a test|",
        "| Title | Description    |\n| :---: | -------------- |\n" + _TABLE_BODY,
        id="table3",
    ),
    pytest.param(
        "\n|Title|Description|\n|--:|---|\n|Test|This is a test|",
        "| Title | Description    |\n| ----: | -------------- |\n" + _TABLE_BODY,
        id="table4",
    ),
    pytest.param(
        "\n|Title| |\n|:--|---|\n|Test|This is a test|",
        "| Title |                |\n| :---- | -------------- |\n" + _TABLE_BODY,
        id="table5",
    ),
    pytest.param(
        "\n|Title| |\n|:--|---|\n|Test| |",
        "| Title |     |\n| :---- | --- |\n| Test  |     |\n",
        id="table6",
    ),
    pytest.param(
        "\n> |Title|Description|\n> |---|---|\n> |Test|This is a test|",
        "> | Title | Description    |\n> | ----- | -------------- |\n> | Test  | This is a test |\n",
        id="table7",
    ),
    pytest.param(
        "\n> - |Title|Description|\n>   |---|---|\n>   |Test|This is a test|",
        "> - | Title | Description    |\n>   | ----- | -------------- |\n>   | Test  | This is a test |\n",
        id="table8",
    ),
    pytest.param(
        "> Spacing required.\n\n\n|Title|Description|\n|---|---|\n|Test|This is a test|",
        "> Spacing required.\n\n| Title | Description    |\n| ----- | -------------- |\n" + _TABLE_BODY,
        id="table9",
    ),
]

EXTENSION_CASES = [
    pytest.param(
        "Body text.\n\n[^unused]: This note is never referenced.\n",
        "Body text.\n\n[^unused]: This note is never referenced.\n",
        id="footnote1",
    ),
    pytest.param(
        "[^a]: first\n\n[^b]: second\n\nSee[^b].",
        "See[^b].\n\n[^b]: second\n\n[^a]: first\n",
        id="footnote2",
    ),
    pytest.param(
        "# Title {#intro .lead}",
        "# Title { #intro .lead }\n",
        id="heading_attributes1",
    ),
    pytest.param(
        "## Plain {not attributes}\n",
        "## Plain {not attributes}\n",
        id="heading_attributes2",
    ),
]

ALL_CASES = BLOCKQUOTE_CASES + GENERAL_CASES + LINK_CASES + LIST_CASES + TABLE_CASES + EXTENSION_CASES


@pytest.mark.integration
class TestCorpus:
    """Format every corpus document with the default style."""

    @pytest.mark.parametrize("source,expected", BLOCKQUOTE_CASES)
    def test_blockquotes(self, source: str, expected: str) -> None:
        """Test block quote normalization."""
        assert format_markdown(source) == expected

    @pytest.mark.parametrize("source,expected", GENERAL_CASES)
    def test_general(self, source: str, expected: str) -> None:
        """Test a document mixing most block types."""
        assert format_markdown(source) == expected

    @pytest.mark.parametrize("source,expected", LINK_CASES)
    def test_links(self, source: str, expected: str) -> None:
        """Test link notation preservation and definition placement."""
        assert format_markdown(source) == expected

    @pytest.mark.parametrize("source,expected", LIST_CASES)
    def test_lists(self, source: str, expected: str) -> None:
        """Test list markers, nesting and spacing."""
        assert format_markdown(source) == expected

    @pytest.mark.parametrize("source,expected", TABLE_CASES)
    def test_tables(self, source: str, expected: str) -> None:
        """Test table alignment and padding."""
        assert format_markdown(source) == expected

    @pytest.mark.parametrize("source,expected", EXTENSION_CASES)
    def test_extensions(self, source: str, expected: str) -> None:
        """Test footnote definitions and heading attributes."""
        assert format_markdown(source) == expected


@pytest.mark.integration
class TestCanonicalFormIsStable:
    """The canonical form of every corpus document is a fixed point."""

    @pytest.mark.parametrize("source,expected", ALL_CASES)
    def test_fixed_point(self, source: str, expected: str) -> None:
        """Test that formatting canonical output changes nothing."""
        assert format_markdown(expected) == expected


@pytest.mark.integration
class TestAlternateStyles:
    """Format corpus documents with non-default markers."""

    def test_asterisk_emphasis(self) -> None:
        """Test the general document with asterisk emphasis."""
        result = format_markdown(GENERAL_INPUT, emphasis_marker="*")
        assert "About not *much*." in result
        assert "multiple *lines*." in result

    def test_plus_bullets(self) -> None:
        """Test nested lists with a plus bullet."""
        source = "\n* item 1\n  * item 2\n  * item 3\n    * item 4"
        assert format_markdown(source, unordered_list_marker="+") == "+ item 1\n  + item 2\n  + item 3\n    + item 4\n"

    def test_custom_quote_marker(self) -> None:
        """Test nested quotes with a custom marker."""
        source = "\n> Blockquote\n>> Nested"
        assert format_markdown(source, blockquote_marker="|") == "| Blockquote\n|\n| | Nested\n"
