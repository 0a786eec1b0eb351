#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for Markdown parsing and formatting.

This module defines the style configuration consumed by the renderer and
the extension toggles consumed by the mistune tokenizer adapter.
"""
# src/mdcanon/options/markdown.py


from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from mdcanon.constants import (
    BULLET_SYMBOLS,
    DEFAULT_BLOCKQUOTE_MARKER,
    DEFAULT_EMPHASIS_MARKER,
    DEFAULT_UNORDERED_LIST_MARKER,
    EMPHASIS_SYMBOLS,
)
from mdcanon.options.base import BaseParserOptions, BaseRendererOptions

CodeFormatter = Callable[[str, str], Optional[str]]
"""Code block transform: ``(language, content) -> replacement or None``."""


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Configuration options for tokenizing Markdown into events.

    Parameters
    ----------
    parse_tables : bool, default True
        Whether to parse table syntax (GFM pipe tables).
    parse_footnotes : bool, default True
        Whether to parse footnote references and definitions.
    parse_task_lists : bool, default True
        Whether to parse task list checkboxes (- [ ] and - [x]).
    parse_strikethrough : bool, default True
        Whether to parse strikethrough syntax (~~text~~).

    """

    parse_tables: bool = field(
        default=True,
        metadata={"help": "Parse table syntax (GFM pipe tables)", "cli_name": "no-tables"},
    )
    parse_footnotes: bool = field(
        default=True,
        metadata={"help": "Parse footnote references and definitions", "cli_name": "no-footnotes"},
    )
    parse_task_lists: bool = field(
        default=True,
        metadata={"help": "Parse task list checkboxes (- [ ] and - [x])", "cli_name": "no-task-lists"},
    )
    parse_strikethrough: bool = field(
        default=True,
        metadata={"help": "Parse strikethrough syntax (~~text~~)", "cli_name": "no-strikethrough"},
    )


@dataclass(frozen=True)
class MarkdownFormatOptions(BaseRendererOptions):
    """Style configuration for the markdown renderer.

    Every marker is independently overridable; unset fields keep their
    defaults.

    Parameters
    ----------
    blockquote_marker : str, default ">"
        Marker written (followed by a space) at the start of every block quote line.
    emphasis_marker : {"_", "*"}, default "_"
        Delimiter wrapped around emphasized text.
    unordered_list_marker : {"-", "*", "+"}, default "-"
        Bullet written before the first line of each unordered list item.
    code_formatter : callable or None, default None
        Transform applied to fenced code block content. Called as
        ``code_formatter(language, content)``; a returned string replaces the
        content, ``None`` leaves it untouched.

    Examples
    --------
        >>> options = MarkdownFormatOptions(emphasis_marker="*")
        >>> options.create_updated(unordered_list_marker="+").unordered_list_marker
        '+'

    """

    blockquote_marker: str = field(
        default=DEFAULT_BLOCKQUOTE_MARKER,
        metadata={"help": "Marker prefixed to block quote lines", "cli_name": "blockquote-marker"},
    )
    emphasis_marker: str = field(
        default=DEFAULT_EMPHASIS_MARKER,
        metadata={
            "help": "Delimiter used for emphasis",
            "choices": list(EMPHASIS_SYMBOLS),
            "cli_name": "emphasis-marker",
        },
    )
    unordered_list_marker: str = field(
        default=DEFAULT_UNORDERED_LIST_MARKER,
        metadata={
            "help": "Bullet used for unordered list items",
            "choices": list(BULLET_SYMBOLS),
            "cli_name": "bullet",
        },
    )
    code_formatter: Optional[CodeFormatter] = field(
        default=None,
        compare=False,
        metadata={"help": "Callable transforming fenced code block content", "exclude_from_cli": True},
    )

    def __post_init__(self) -> None:
        """Validate marker values.

        Raises
        ------
        ValueError
            If any marker is empty, spans lines, or is not an allowed symbol.

        """
        super().__post_init__()

        if not self.blockquote_marker or self.blockquote_marker != self.blockquote_marker.strip():
            raise ValueError(
                f"blockquote_marker must be non-empty without surrounding whitespace, got {self.blockquote_marker!r}"
            )
        if "\n" in self.blockquote_marker or "\r" in self.blockquote_marker:
            raise ValueError("blockquote_marker must not contain line breaks")

        if self.emphasis_marker not in EMPHASIS_SYMBOLS:
            raise ValueError(f"emphasis_marker must be one of {EMPHASIS_SYMBOLS}, got {self.emphasis_marker!r}")

        if self.unordered_list_marker not in BULLET_SYMBOLS:
            raise ValueError(
                f"unordered_list_marker must be one of {BULLET_SYMBOLS}, got {self.unordered_list_marker!r}"
            )

        if self.code_formatter is not None and not callable(self.code_formatter):
            raise ValueError("code_formatter must be callable or None")
