#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcanon/parsers/markdown.py
"""Markdown to event stream converter.

This module tokenizes markdown with mistune and flattens mistune's token
tree into the Start/End/leaf event stream consumed by the renderer. Reference
definitions, which mistune collects while parsing, are returned next to the
events so the renderer can resolve and re-emit them.

"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Optional

import mistune
from mistune.core import BlockState
from mistune.plugins.footnotes import parse_footnote_item, parse_inline_footnote, parse_ref_footnote
from mistune.plugins.table import table_in_list, table_in_quote
from mistune.util import unikey

from mdcanon.events import (
    BlockQuote,
    Code,
    CodeBlock,
    Emphasis,
    End,
    Event,
    FootnoteDefinition,
    FootnoteReference,
    HardBreak,
    Heading,
    Html,
    Image,
    Item,
    Link,
    LinkType,
    List,
    Paragraph,
    Rule,
    SoftBreak,
    Start,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableHead,
    TableRow,
    TaskListMarker,
    Text,
)
from mdcanon.options.markdown import MarkdownParserOptions
from mdcanon.parsers.base import BaseParser, ParsedDocument, ParserInput
from mdcanon.references import ReferenceDefinition, ReferenceTable, normalize_label
from mdcanon.utils.decorators import debug_timer

logger = logging.getLogger(__name__)

Token = dict[str, Any]

# Each of these characters starts a fresh Text event, so the renderer's
# first-character escaping sees every one of them
_TEXT_BOUNDARY = re.compile(r"(?=[\\<>*_`\[\]~])")
_TABLE_TEXT_BOUNDARY = re.compile(r"(?=[\\<>*_`\[\]~|])")

# Blocks whose inline content receives a pending task list marker
_TEXT_BLOCKS = ("paragraph", "block_text")

_ALIGNMENTS = ("left", "center", "right")

# Trailing "{#id .class}" group of a heading
_HEADING_ATTRIBUTES = re.compile(r"^(?P<text>.*?)\s*\{\s*(?P<attrs>(?:[#.][^\s{}#.]+\s*)+)\}\s*$", re.DOTALL)
_HEADING_ATTRIBUTE = re.compile(r"[#.][^\s{}#.]+")

# Only these survive being rewritten as <...>; anything else is an inline link
_ABSOLUTE_URI = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]{1,31}:[^\s<>]*$")
_EMAIL_ADDRESS = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)


def _ensure_newline(text: str) -> str:
    return text if text.endswith("\n") else text + "\n"


def _plain_text(tokens: list[Token]) -> str:
    """Concatenate the raw text of an inline token tree."""
    parts = []
    for token in tokens:
        if "children" in token:
            parts.append(_plain_text(token["children"]))
        else:
            parts.append(token.get("raw", ""))
    return "".join(parts)


def _parse_link_with_source(inline: Any, m: re.Match, state: Any) -> Optional[int]:
    """Run mistune's link rule and keep the source slice of reference links."""
    count = len(state.tokens)
    end_pos = inline.parse_link(m, state)
    if end_pos and len(state.tokens) > count:
        token = state.tokens[-1]
        if token.get("type") in ("link", "image") and "ref" in token:
            token["source"] = state.src[m.start() : end_pos]
    return end_pos


def link_source(md: mistune.Markdown) -> None:
    """Mistune plugin recording how each reference link was written.

    Mistune resolves ``[text]``, ``[text][]`` and ``[text][label]`` to the
    same token. The source slice stored under ``"source"`` lets the adapter
    tell them apart.
    """
    md.inline.register("link", None, _parse_link_with_source)


def _parse_footnote_ref_with_label(inline: Any, m: re.Match, state: Any) -> int:
    count = len(state.tokens)
    end_pos = parse_inline_footnote(inline, m, state)
    if len(state.tokens) > count and state.tokens[-1].get("type") == "footnote_ref":
        state.tokens[-1]["label"] = m.group("footnote_key")
    return end_pos


def _parse_footnote_def_with_label(block: Any, m: re.Match, state: Any) -> int:
    label = m.group("footnote_key")
    state.env.setdefault("footnote_labels", {}).setdefault(unikey(label), label)
    return parse_ref_footnote(block, m, state)


def footnote_labels(md: mistune.Markdown) -> None:
    """Mistune plugin keeping footnote labels as written.

    Mistune keys footnotes by a case-folded label. The original spelling is
    stored on each ``footnote_ref`` token under ``"label"`` and, for
    definitions, in ``state.env["footnote_labels"]``. Must be loaded after
    mistune's ``footnotes`` plugin.
    """
    md.inline.register("footnote", None, _parse_footnote_ref_with_label)
    md.block.register("ref_footnote", None, _parse_footnote_def_with_label)


def split_text(text: str, in_table: bool = False) -> list[str]:
    """Split a text run before every character the renderer may escape.

    Examples
    --------
        >>> split_text("a [b] c")
        ['a ', '[b', '] c']

    """
    pattern = _TABLE_TEXT_BOUNDARY if in_table else _TEXT_BOUNDARY
    return [piece for piece in pattern.split(text) if piece]


class MarkdownEventParser(BaseParser):
    r"""Convert Markdown to an event stream.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> parser = MarkdownEventParser()
        >>> document = parser.parse("# Hello\n\nThis is **bold**.")
        >>> document.events[0]
        Start(tag=Heading(level=1, identifier=None, classes=()))

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the Markdown parser with options."""
        BaseParser._validate_options_type(options, MarkdownParserOptions, "markdown")
        options = options or MarkdownParserOptions()
        super().__init__(options)
        self.options: MarkdownParserOptions = options

        self._block_handlers: dict[str, Callable[[Token, list[Event]], None]] = {
            "heading": self._process_heading,
            "paragraph": self._process_paragraph,
            "block_text": self._process_block_text,
            "block_code": self._process_code_block,
            "block_quote": self._process_block_quote,
            "list": self._process_list,
            "thematic_break": self._process_thematic_break,
            "block_html": self._process_html_block,
            "table": self._process_table,
            "footnotes": self._process_footnotes,
            "blank_line": self._skip,
        }
        self._inline_handlers: dict[str, Callable[[Token, list[Event]], None]] = {
            "text": self._handle_text_token,
            "emphasis": self._handle_emphasis_token,
            "strong": self._handle_strong_token,
            "strikethrough": self._handle_strikethrough_token,
            "codespan": self._handle_codespan_token,
            "link": self._handle_link_token,
            "image": self._handle_image_token,
            "softbreak": self._handle_softbreak_token,
            "linebreak": self._handle_linebreak_token,
            "inline_html": self._handle_inline_html_token,
            "footnote_ref": self._handle_footnote_ref_token,
        }

        self._markdown = mistune.create_markdown(renderer=None, plugins=self._plugins())
        self._in_table = False
        self._pending_task_marker: Optional[TaskListMarker] = None
        self._footnote_labels: dict[str, str] = {}

    def _plugins(self) -> list[Any]:
        """Select mistune plugins from the parser options."""
        plugins: list[Any] = [link_source]
        if self.options.parse_strikethrough:
            plugins.append("strikethrough")
        if self.options.parse_tables:
            plugins.extend(["table", table_in_quote, table_in_list])
        if self.options.parse_footnotes:
            plugins.extend(["footnotes", footnote_labels])
        if self.options.parse_task_lists:
            plugins.append("task_lists")
        return plugins

    def parse(self, input_data: ParserInput) -> ParsedDocument:
        """Parse Markdown input into events and reference definitions.

        Parameters
        ----------
        input_data : str, bytes, Path or file-like object
            Markdown source

        Returns
        -------
        ParsedDocument
            Ordered events plus the document's reference table

        """
        markdown_content = self._load_text_content(input_data)

        # Reset parser state to prevent leakage across parse calls
        self._in_table = False
        self._pending_task_marker = None

        with debug_timer(logger, "Tokenizing markdown"):
            tokens, state = self._markdown.parse(markdown_content)

        self._footnote_labels = state.env.get("footnote_labels", {})
        events: list[Event] = []
        if isinstance(tokens, list):
            if self.options.parse_footnotes:
                tokens.extend(self._unreferenced_footnotes(tokens, state))
            self._process_tokens(tokens, events)

        references = self._collect_references(state.env.get("ref_links", {}))
        logger.debug(f"Produced {len(events)} events and {len(references)} reference definitions")
        return ParsedDocument(events=events, references=references)

    def _unreferenced_footnotes(self, tokens: list[Token], state: BlockState) -> list[Token]:
        """Parse the footnote definitions mistune left out.

        Mistune only renders notes referenced from the body. The rest are
        parsed the same way and returned as a second ``footnotes`` token, in
        definition order.
        """
        definitions = state.env.get("ref_footnotes") or {}
        # A note referenced only from another note is in env["footnotes"] but never rendered
        referenced = {
            item.get("attrs", {}).get("key")
            for token in tokens
            if token.get("type") == "footnotes"
            for item in token.get("children", [])
        }
        keys = [key for key in definitions if key not in referenced]
        if not keys:
            return []

        logger.debug(f"Keeping {len(keys)} unreferenced footnote definition(s)")
        items = [
            parse_footnote_item(self._markdown.block, key, len(referenced) + i + 1, state) for i, key in enumerate(keys)
        ]
        footer = BlockState(parent=state)
        footer.tokens = [{"type": "footnotes", "children": items}]
        return list(self._markdown.render_state(footer))

    @staticmethod
    def _collect_references(ref_links: dict[str, dict[str, Any]]) -> ReferenceTable:
        definitions = []
        for key, entry in ref_links.items():
            definitions.append(
                ReferenceDefinition(
                    label=entry.get("label", key),
                    destination=entry.get("url", ""),
                    title=entry.get("title") or None,
                )
            )
        return ReferenceTable(definitions)

    # -------------------------------------------------------------------------
    # Block tokens
    # -------------------------------------------------------------------------

    def _process_tokens(self, tokens: list[Token], events: list[Event]) -> None:
        for token in tokens:
            token_type = token.get("type", "")
            handler = self._block_handlers.get(token_type)
            if handler is None:
                logger.debug(f"Skipping unsupported block token '{token_type}'")
                continue
            handler(token, events)

    def _skip(self, token: Token, events: list[Event]) -> None:
        pass

    def _process_heading(self, token: Token, events: list[Event]) -> None:
        attrs = token.get("attrs", {})
        level = attrs.get("level", 1) if isinstance(attrs, dict) else 1
        children = list(token.get("children", []))
        identifier, classes = self._heading_attributes(children)
        tag = Heading(level=level, identifier=identifier, classes=classes)
        events.append(Start(tag))
        self._process_inline_tokens(children, events)
        events.append(End(tag))

    @staticmethod
    def _heading_attributes(children: list[Token]) -> tuple[Optional[str], tuple[str, ...]]:
        """Strip a trailing attribute group from a heading's inline tokens.

        ``# Title {#intro .lead}`` yields identifier ``"intro"`` and classes
        ``("lead",)``. The last ``#id`` wins. Braces holding anything else
        stay in the heading text.
        """
        # Mistune may split one run of text at characters like "_"
        start = len(children)
        while start > 0 and children[start - 1].get("type") == "text":
            start -= 1
        if start == len(children):
            return None, ()
        match = _HEADING_ATTRIBUTES.match("".join(child.get("raw", "") for child in children[start:]))
        if match is None:
            return None, ()

        identifier = None
        classes = []
        for attribute in _HEADING_ATTRIBUTE.findall(match.group("attrs")):
            if attribute.startswith("#"):
                identifier = attribute[1:]
            else:
                classes.append(attribute[1:])

        text = match.group("text")
        del children[start:]
        if text:
            children.append({"type": "text", "raw": text})
        return identifier, tuple(classes)

    def _process_paragraph(self, token: Token, events: list[Event]) -> None:
        tag = Paragraph()
        events.append(Start(tag))
        self._process_inline_tokens(token.get("children", []), events)
        events.append(End(tag))

    def _process_block_text(self, token: Token, events: list[Event]) -> None:
        # Tight list items carry their text without a paragraph boundary
        self._process_inline_tokens(token.get("children", []), events)

    def _process_code_block(self, token: Token, events: list[Event]) -> None:
        attrs = token.get("attrs", {})
        if token.get("style") == "indent":
            tag = CodeBlock(kind="indented")
        else:
            info = attrs.get("info", "") if isinstance(attrs, dict) else ""
            tag = CodeBlock(kind="fenced", info=(info or "").strip())

        events.append(Start(tag))
        content = token.get("raw", "")
        if content:
            events.append(Text(_ensure_newline(content)))
        events.append(End(tag))

    def _process_block_quote(self, token: Token, events: list[Event]) -> None:
        tag = BlockQuote()
        events.append(Start(tag))
        self._process_tokens(token.get("children", []), events)
        events.append(End(tag))

    def _process_list(self, token: Token, events: list[Event]) -> None:
        attrs = token.get("attrs", {})
        start: Optional[str] = None
        if attrs.get("ordered", False):
            start = str(attrs.get("start", 1))
        tag = List(start=start)

        events.append(Start(tag))
        for item in token.get("children", []):
            self._process_list_item(item, events)
        events.append(End(tag))

    def _process_list_item(self, token: Token, events: list[Event]) -> None:
        tag = Item()
        events.append(Start(tag))
        children = token.get("children", [])

        if token.get("type") == "task_list_item":
            marker = TaskListMarker(checked=bool(token.get("attrs", {}).get("checked", False)))
            if children and children[0].get("type") in _TEXT_BLOCKS:
                self._pending_task_marker = marker
            else:
                events.append(marker)

        self._process_tokens(children, events)
        events.append(End(tag))

    def _process_thematic_break(self, token: Token, events: list[Event]) -> None:
        events.append(Rule())

    def _process_html_block(self, token: Token, events: list[Event]) -> None:
        content = token.get("raw", "")
        if content:
            events.append(Html(_ensure_newline(content)))

    def _process_table(self, token: Token, events: list[Event]) -> None:
        head: list[Token] = []
        rows: list[Token] = []
        for part in token.get("children", []):
            if part.get("type") == "table_head":
                head = part.get("children", [])
            elif part.get("type") == "table_body":
                rows = part.get("children", [])

        alignments = tuple(self._cell_alignment(cell) for cell in head)
        tag = Table(alignments=alignments)
        events.append(Start(tag))

        self._in_table = True
        try:
            events.append(Start(TableHead()))
            self._process_table_cells(head, events)
            events.append(End(TableHead()))
            for row in rows:
                events.append(Start(TableRow()))
                self._process_table_cells(row.get("children", []), events)
                events.append(End(TableRow()))
        finally:
            self._in_table = False

        events.append(End(tag))

    @staticmethod
    def _cell_alignment(cell: Token) -> Any:
        align = cell.get("attrs", {}).get("align")
        return align if align in _ALIGNMENTS else None

    def _process_table_cells(self, cells: list[Token], events: list[Event]) -> None:
        for cell in cells:
            events.append(Start(TableCell()))
            self._process_inline_tokens(cell.get("children", []), events)
            events.append(End(TableCell()))

    def _process_footnotes(self, token: Token, events: list[Event]) -> None:
        for item in token.get("children", []):
            key = item.get("attrs", {}).get("key", "")
            label = self._footnote_labels.get(key, key)
            tag = FootnoteDefinition(label=label)
            events.append(Start(tag))
            self._process_tokens(item.get("children", []), events)
            events.append(End(tag))

    # -------------------------------------------------------------------------
    # Inline tokens
    # -------------------------------------------------------------------------

    def _process_inline_tokens(self, tokens: list[Token], events: list[Event]) -> None:
        if self._pending_task_marker is not None:
            events.append(self._pending_task_marker)
            self._pending_task_marker = None

        for token in tokens:
            token_type = token.get("type", "")
            handler = self._inline_handlers.get(token_type)
            if handler is None:
                logger.debug(f"Skipping unsupported inline token '{token_type}'")
                continue
            handler(token, events)

    def _wrap_inline(self, tag: Any, token: Token, events: list[Event]) -> None:
        events.append(Start(tag))
        self._process_inline_tokens(token.get("children", []), events)
        events.append(End(tag))

    def _handle_text_token(self, token: Token, events: list[Event]) -> None:
        for piece in split_text(token.get("raw", ""), in_table=self._in_table):
            events.append(Text(piece))

    def _handle_emphasis_token(self, token: Token, events: list[Event]) -> None:
        self._wrap_inline(Emphasis(), token, events)

    def _handle_strong_token(self, token: Token, events: list[Event]) -> None:
        self._wrap_inline(Strong(), token, events)

    def _handle_strikethrough_token(self, token: Token, events: list[Event]) -> None:
        self._wrap_inline(Strikethrough(), token, events)

    def _handle_codespan_token(self, token: Token, events: list[Event]) -> None:
        events.append(Code(token.get("raw", "")))

    def _handle_link_token(self, token: Token, events: list[Event]) -> None:
        attrs = token.get("attrs", {})
        destination = attrs.get("url", "")
        tag = Link(
            link_type=self._link_type(token, destination),
            destination=destination,
            title=attrs.get("title") or "",
            label=token.get("label"),
        )
        self._wrap_inline(tag, token, events)

    def _handle_image_token(self, token: Token, events: list[Event]) -> None:
        attrs = token.get("attrs", {})
        destination = attrs.get("url", "")
        tag = Image(
            link_type=self._link_type(token, destination),
            destination=destination,
            title=attrs.get("title") or "",
        )
        self._wrap_inline(tag, token, events)

    def _handle_softbreak_token(self, token: Token, events: list[Event]) -> None:
        events.append(SoftBreak())

    def _handle_linebreak_token(self, token: Token, events: list[Event]) -> None:
        events.append(HardBreak())

    def _handle_inline_html_token(self, token: Token, events: list[Event]) -> None:
        content = token.get("raw", "")
        if content:
            events.append(Html(content))

    def _handle_footnote_ref_token(self, token: Token, events: list[Event]) -> None:
        label = token.get("label") or token.get("raw", "")
        events.append(FootnoteReference(label=label))

    @staticmethod
    def _link_type(token: Token, destination: str) -> LinkType:
        """Work out how a link or image was written."""
        children = token.get("children", [])

        if "ref" in token:
            label = token.get("label") or token["ref"]
            source = token.get("source")
            if source is None:
                same = normalize_label(_plain_text(children)) == normalize_label(label)
                return LinkType.SHORTCUT if same else LinkType.REFERENCE
            if source.endswith("[]"):
                return LinkType.COLLAPSED
            if source.endswith(f"][{label}]"):
                return LinkType.REFERENCE
            return LinkType.SHORTCUT

        if token.get("type") == "link" and len(children) == 1 and children[0].get("type") == "text":
            text = children[0].get("raw", "")
            if text == destination and _ABSOLUTE_URI.match(destination):
                return LinkType.AUTOLINK
            if destination == f"mailto:{text}" and _EMAIL_ADDRESS.match(text):
                return LinkType.EMAIL

        return LinkType.INLINE


def markdown_to_events(markdown_content: str, options: MarkdownParserOptions | None = None) -> ParsedDocument:
    r"""Convert a Markdown string to an event stream.

    Parameters
    ----------
    markdown_content : str
        Markdown text to parse
    options : MarkdownParserOptions or None, default = None
        Parser configuration

    Returns
    -------
    ParsedDocument
        Events and reference definitions

    Examples
    --------
    >>> from mdcanon.parsers.markdown import markdown_to_events
    >>> document = markdown_to_events("# Hello\n\nWorld")
    >>> len(document.events)
    6

    """
    return MarkdownEventParser(options).parse(markdown_content)
