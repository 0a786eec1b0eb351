#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcanon/parsers/__init__.py
"""Parsers turning markdown text into event streams."""

from mdcanon.parsers.base import BaseParser, ParsedDocument, ParserInput, load_text
from mdcanon.parsers.markdown import MarkdownEventParser, footnote_labels, link_source, markdown_to_events, split_text

__all__ = [
    "BaseParser",
    "MarkdownEventParser",
    "ParsedDocument",
    "ParserInput",
    "footnote_labels",
    "load_text",
    "link_source",
    "markdown_to_events",
    "split_text",
]
