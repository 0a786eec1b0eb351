#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcanon/events.py
"""Event classes for the markdown event stream.

A markdown document reaches the renderer as a flat, ordered stream of events
rather than a tree. Block and inline constructs are delimited by a ``Start``
event and its matching ``End`` event, both carrying the same tag; everything
else is a leaf event.

Event Kinds
-----------
Boundary events wrap a tag:
    - Start(tag), End(tag)

Leaf events never open or close a construct:
    - Text, Code, Html
    - SoftBreak, HardBreak, Rule
    - TaskListMarker, FootnoteReference

Tags
----
Block-level tags:
    - Paragraph, Heading, BlockQuote, CodeBlock
    - List, Item, FootnoteDefinition
    - Table, TableHead, TableRow, TableCell

Inline tags:
    - Emphasis, Strong, Strikethrough, Link, Image

All event and tag classes are frozen dataclasses; events are produced once by
the tokenizer adapter and consumed once by the renderer.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional, Union

from mdcanon.constants import CodeBlockKind

Alignment = Optional[Literal["left", "center", "right"]]


class LinkType(Enum):
    """How a link or image was written in the source.

    Members
    -------
    INLINE
        ``[text](destination "title")``
    REFERENCE
        ``[text][label]``
    COLLAPSED
        ``[text][]``
    SHORTCUT
        ``[text]``
    AUTOLINK
        ``<https://example.com>``
    EMAIL
        ``<user@example.com>``

    """

    INLINE = "inline"
    REFERENCE = "reference"
    COLLAPSED = "collapsed"
    SHORTCUT = "shortcut"
    AUTOLINK = "autolink"
    EMAIL = "email"

    @property
    def is_reference(self) -> bool:
        """Whether the link resolves through a reference definition."""
        return self in (LinkType.REFERENCE, LinkType.COLLAPSED, LinkType.SHORTCUT)

    @property
    def is_autolink(self) -> bool:
        """Whether the link is written between angle brackets."""
        return self in (LinkType.AUTOLINK, LinkType.EMAIL)


# =============================================================================
# Tags
# =============================================================================


@dataclass(frozen=True)
class Paragraph:
    """A paragraph of inline content."""


@dataclass(frozen=True)
class Heading:
    """An ATX or setext heading.

    Parameters
    ----------
    level : int
        Heading level, 1 through 6
    identifier : str or None, default None
        Optional ``#id`` attribute
    classes : tuple of str, default ()
        Optional ``.class`` attributes

    """

    level: int
    identifier: Optional[str] = None
    classes: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be between 1 and 6, got {self.level}")

    @property
    def has_attributes(self) -> bool:
        return self.identifier is not None or bool(self.classes)


@dataclass(frozen=True)
class BlockQuote:
    """A block quote container."""


@dataclass(frozen=True)
class CodeBlock:
    """A fenced or indented code block.

    Parameters
    ----------
    kind : {"fenced", "indented"}
        Source notation of the block
    info : str, default ""
        Info string following the opening fence (fenced blocks only)

    """

    kind: CodeBlockKind = "fenced"
    info: str = ""

    @property
    def is_fenced(self) -> bool:
        return self.kind == "fenced"

    @property
    def language(self) -> str:
        """First word of the info string, or an empty string."""
        parts = self.info.split(maxsplit=1)
        return parts[0] if parts else ""


@dataclass(frozen=True)
class List:
    """An ordered or bullet list.

    Parameters
    ----------
    start : str or None, default None
        Ordinal written before every item of an ordered list; ``None`` for
        bullet lists

    """

    start: Optional[str] = None

    @property
    def ordered(self) -> bool:
        return self.start is not None


@dataclass(frozen=True)
class Item:
    """A single list item."""


@dataclass(frozen=True)
class FootnoteDefinition:
    """A footnote definition body, ``[^label]: ...``."""

    label: str


@dataclass(frozen=True)
class Table:
    """A pipe table.

    Parameters
    ----------
    alignments : tuple of Alignment
        Column alignment, one entry per header column

    """

    alignments: tuple[Alignment, ...] = ()


@dataclass(frozen=True)
class TableHead:
    """The header row of a table."""


@dataclass(frozen=True)
class TableRow:
    """A body row of a table."""


@dataclass(frozen=True)
class TableCell:
    """A single table cell."""


@dataclass(frozen=True)
class Emphasis:
    """Emphasized inline content."""


@dataclass(frozen=True)
class Strong:
    """Strongly emphasized inline content."""


@dataclass(frozen=True)
class Strikethrough:
    """Struck-through inline content."""


@dataclass(frozen=True)
class Link:
    """A hyperlink.

    Parameters
    ----------
    link_type : LinkType
        How the link was written
    destination : str
        Link destination
    title : str, default ""
        Optional link title
    label : str or None, default None
        Reference label for ``[text][label]`` links

    """

    link_type: LinkType
    destination: str
    title: str = ""
    label: Optional[str] = None


@dataclass(frozen=True)
class Image:
    """An image; the alt text arrives as the events between Start and End."""

    link_type: LinkType
    destination: str
    title: str = ""


Tag = Union[
    Paragraph,
    Heading,
    BlockQuote,
    CodeBlock,
    List,
    Item,
    FootnoteDefinition,
    Table,
    TableHead,
    TableRow,
    TableCell,
    Emphasis,
    Strong,
    Strikethrough,
    Link,
    Image,
]


# =============================================================================
# Events
# =============================================================================


@dataclass(frozen=True)
class Start:
    """Opens the construct described by ``tag``."""

    tag: Tag


@dataclass(frozen=True)
class End:
    """Closes the construct described by ``tag``."""

    tag: Tag


@dataclass(frozen=True)
class Text:
    """A run of literal text."""

    content: str


@dataclass(frozen=True)
class Code:
    """An inline code span; ``content`` excludes the backticks."""

    content: str


@dataclass(frozen=True)
class Html:
    """A chunk of raw HTML, block or inline."""

    content: str


@dataclass(frozen=True)
class SoftBreak:
    """A line ending inside a paragraph."""


@dataclass(frozen=True)
class HardBreak:
    """A forced line break inside a paragraph."""


@dataclass(frozen=True)
class Rule:
    """A thematic break."""


@dataclass(frozen=True)
class TaskListMarker:
    """A task list checkbox at the start of a list item."""

    checked: bool = False


@dataclass(frozen=True)
class FootnoteReference:
    """An inline footnote reference, ``[^label]``."""

    label: str


Event = Union[
    Start,
    End,
    Text,
    Code,
    Html,
    SoftBreak,
    HardBreak,
    Rule,
    TaskListMarker,
    FootnoteReference,
]

LEAF_EVENTS = (Text, Code, Html, SoftBreak, HardBreak, Rule, TaskListMarker, FootnoteReference)


def wrap(tag: Tag, *inner: Event) -> list[Event]:
    """Return ``[Start(tag), *inner, End(tag)]``.

    Examples
    --------
        >>> wrap(Emphasis(), Text("hi"))
        [Start(tag=Emphasis()), Text(content='hi'), End(tag=Emphasis())]

    """
    return [Start(tag), *inner, End(tag)]


__all__ = [
    "Alignment",
    "BlockQuote",
    "Code",
    "CodeBlock",
    "Emphasis",
    "End",
    "Event",
    "FootnoteDefinition",
    "FootnoteReference",
    "HardBreak",
    "Heading",
    "Html",
    "Image",
    "Item",
    "LEAF_EVENTS",
    "Link",
    "LinkType",
    "List",
    "Paragraph",
    "Rule",
    "SoftBreak",
    "Start",
    "Strikethrough",
    "Strong",
    "Table",
    "TableCell",
    "TableHead",
    "TableRow",
    "Tag",
    "TaskListMarker",
    "Text",
    "wrap",
]
