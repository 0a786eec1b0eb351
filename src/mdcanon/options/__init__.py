#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Options classes for mdcanon parsing and rendering."""

from mdcanon.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from mdcanon.options.markdown import CodeFormatter, MarkdownFormatOptions, MarkdownParserOptions

__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "CodeFormatter",
    "MarkdownFormatOptions",
    "MarkdownParserOptions",
]
