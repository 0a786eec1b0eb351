"""mdcanon - canonical formatting for CommonMark documents.

mdcanon reads markdown, tokenizes it into a flat stream of Start/End/leaf
events, and re-emits the stream in a single canonical style: ATX headings,
one bullet character, one emphasis delimiter, fenced code with backticks,
aligned pipe tables, and every reference definition collected at the end of
the document. Running the formatter on its own output changes nothing.

Examples
--------
Formatting text:

    >>> from mdcanon import format_markdown
    >>> format_markdown("Title\\n=====\\n\\n* one\\n* two")
    '# Title\\n\\n- one\\n- two\\n'

Choosing markers:

    >>> from mdcanon import MarkdownFormatOptions
    >>> format_markdown("*hi*", MarkdownFormatOptions(emphasis_marker="*"))
    '*hi*\\n'

Rendering an event stream built by hand:

    >>> from mdcanon import render_events
    >>> from mdcanon.events import Paragraph, Strong, Text, wrap
    >>> render_events(wrap(Paragraph(), *wrap(Strong(), Text("bold"))))
    '**bold**\\n'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "mdcanon requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from mdcanon.api import format_markdown, format_markdown_to, is_formatted, parse_markdown, render_events
from mdcanon.exceptions import (
    ConfigError,
    FileAccessError,
    FileError,
    InvalidOptionsError,
    MdcanonError,
    OutputWriteError,
    ParsingError,
    RenderingError,
    ValidationError,
)
from mdcanon.options import MarkdownFormatOptions, MarkdownParserOptions
from mdcanon.parsers import MarkdownEventParser, ParsedDocument
from mdcanon.references import ReferenceDefinition, ReferenceTable
from mdcanon.renderers import MarkdownRenderer

__all__ = [
    "__version__",
    "format_markdown",
    "format_markdown_to",
    "is_formatted",
    "parse_markdown",
    "render_events",
    "MarkdownFormatOptions",
    "MarkdownParserOptions",
    "MarkdownEventParser",
    "MarkdownRenderer",
    "ParsedDocument",
    "ReferenceDefinition",
    "ReferenceTable",
    "MdcanonError",
    "ValidationError",
    "InvalidOptionsError",
    "ConfigError",
    "FileError",
    "FileAccessError",
    "ParsingError",
    "RenderingError",
    "OutputWriteError",
]
