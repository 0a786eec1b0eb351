#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcanon/renderers/markdown.py
"""Markdown rendering from an event stream.

This module provides the MarkdownRenderer class which turns a tokenized
markdown event stream back into canonical markdown text.

Rendering is a single forward pass. Container nesting is tracked on an
explicit stack that mirrors the Start/End events, inline output accumulates
in a pending-line buffer, and two flags (``newline_required`` and
``last_line_blank``) decide line breaks and blank-line collapsing without
any lookahead. Tables are the only construct buffered until their End event,
since column widths depend on every row.

"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, TextIO

from mdcanon.constants import (
    ALWAYS_ESCAPED_CHARS,
    CODE_FENCE,
    LINE_START_ESCAPED_CHARS,
    STRIKETHROUGH_MARKER,
    STRONG_MARKER,
    TABLE_CELL_SEPARATOR,
    THEMATIC_BREAK,
)
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
from mdcanon.options.markdown import MarkdownFormatOptions
from mdcanon.references import ReferenceTable
from mdcanon.renderers._containers import BlockQuoteFrame, CodeIndentFrame, ContainerStack, ListFrame
from mdcanon.renderers._emitter import LineEmitter
from mdcanon.renderers._tables import TableAccumulator
from mdcanon.renderers.base import BaseRenderer, References
from mdcanon.utils.decorators import debug_timer
from mdcanon.utils.io_utils import OutputDestination, open_text_sink

logger = logging.getLogger(__name__)

# Events that may directly follow raw HTML without forcing a line break
_HTML_CONTINUATION_EVENTS = (Html, Text, SoftBreak, End)


class MarkdownRenderer(BaseRenderer):
    """Render a markdown event stream to canonical markdown text.

    Parameters
    ----------
    options : MarkdownFormatOptions or None, default = None
        Style configuration (markers and the optional code formatter)

    Examples
    --------
    Basic usage:

        >>> from mdcanon.events import Paragraph, Text, wrap
        >>> renderer = MarkdownRenderer()
        >>> renderer.render_to_string(wrap(Paragraph(), Text("Hello")))
        'Hello\\n'

    The renderer holds no per-document state between calls, so one
    instance can render any number of documents.

    """

    def __init__(self, options: MarkdownFormatOptions | None = None):
        """Initialize the Markdown renderer with options."""
        BaseRenderer._validate_options_type(options, MarkdownFormatOptions, "markdown")
        options = options or MarkdownFormatOptions()
        super().__init__(options)
        self.options: MarkdownFormatOptions = options

        self._start_handlers: dict[type, Callable] = {
            Heading: self._start_heading,
            BlockQuote: self._start_block_quote,
            CodeBlock: self._start_code_block,
            List: self._start_list,
            Item: self._start_item,
            FootnoteDefinition: self._start_footnote_definition,
            Table: self._start_table,
            TableRow: self._start_table_row,
            Emphasis: self._start_emphasis,
            Strong: self._start_strong,
            Strikethrough: self._start_strikethrough,
            Link: self._start_link,
            Image: self._start_image,
        }
        self._end_handlers: dict[type, Callable] = {
            Paragraph: self._end_paragraph,
            Heading: self._end_heading,
            BlockQuote: self._end_block_quote,
            CodeBlock: self._end_code_block,
            List: self._end_list,
            Item: self._end_item,
            Table: self._end_table,
            TableCell: self._end_table_cell,
            Emphasis: self._end_emphasis,
            Strong: self._end_strong,
            Strikethrough: self._end_strikethrough,
            Link: self._end_link,
            Image: self._end_image,
        }
        self._leaf_handlers: dict[type, Callable] = {
            Text: self._on_text,
            Code: self._on_code,
            Html: self._on_html,
            SoftBreak: self._on_soft_break,
            HardBreak: self._on_hard_break,
            Rule: self._on_rule,
            TaskListMarker: self._on_task_list_marker,
            FootnoteReference: self._on_footnote_reference,
        }

        # Per-document state, rebuilt by _reset() for every render
        self._stack: ContainerStack | None = None
        self._emitter: LineEmitter | None = None
        self._references = ReferenceTable()
        self._table: Optional[TableAccumulator] = None
        self._code_block: Optional[CodeBlock] = None
        self._after_html = False

    def render(self, events: Iterable[Event], output: OutputDestination, references: References = ()) -> None:
        """Render an event stream as markdown.

        Parameters
        ----------
        events : iterable of Event
            Ordered event stream, consumed once
        output : str, Path, IO[str] or IO[bytes]
            Output destination; text is written incrementally
        references : ReferenceTable or iterable of ReferenceDefinition, default ()
            Reference definitions collected from the document. All of them
            are written after the body, referenced or not.

        Raises
        ------
        OutputWriteError
            If the sink rejects a write; rendering stops immediately

        """
        table = self._as_reference_table(references)
        with open_text_sink(output) as sink:
            with debug_timer(logger, "Rendering markdown"):
                self._render_stream(events, sink, table)

    def _render_stream(self, events: Iterable[Event], sink: TextIO, references: ReferenceTable) -> None:
        self._reset(sink, references)
        try:
            for event in events:
                if self._after_html:
                    self._after_html = False
                    if not isinstance(event, _HTML_CONTINUATION_EVENTS):
                        self._out.newline()
                self._dispatch(event)

            if self._out.has_pending():
                self._out.newline()
            self._write_reference_definitions()
        finally:
            self._release()

    def _reset(self, sink: TextIO, references: ReferenceTable) -> None:
        self._stack = ContainerStack(self.options.blockquote_marker, self.options.unordered_list_marker)
        self._emitter = LineEmitter(sink, self._stack)
        self._references = references
        self._table = None
        self._code_block = None
        self._after_html = False

    def _release(self) -> None:
        # Drop per-document state so nothing leaks into the next render
        self._stack = None
        self._emitter = None
        self._references = ReferenceTable()
        self._table = None
        self._code_block = None
        self._after_html = False

    @property
    def _out(self) -> LineEmitter:
        assert self._emitter is not None, "renderer used outside of render()"
        return self._emitter

    @property
    def _containers(self) -> ContainerStack:
        assert self._stack is not None, "renderer used outside of render()"
        return self._stack

    def _dispatch(self, event: Event) -> None:
        if isinstance(event, Start):
            self._out.newline_if_required()
            handler = self._start_handlers.get(type(event.tag))
            if handler is not None:
                handler(event.tag)
        elif isinstance(event, End):
            handler = self._end_handlers.get(type(event.tag))
            if handler is not None:
                handler(event.tag)
        else:
            self._leaf_handlers[type(event)](event)

    # -------------------------------------------------------------------------
    # Text and escaping
    # -------------------------------------------------------------------------

    def _write_escaped(self, text: str) -> None:
        """Append text, preceded by a backslash when its first character would read as syntax."""
        if self._code_block is not None:
            if self._code_block.is_fenced and text.startswith(CODE_FENCE):
                self._out.write("\\")
        elif text:
            first = text[0]
            if self._table is not None and first == TABLE_CELL_SEPARATOR:
                self._out.write("\\")
            elif first in ALWAYS_ESCAPED_CHARS:
                self._out.write("\\")
            elif first in LINE_START_ESCAPED_CHARS and not self._out.has_pending():
                self._out.write("\\")
        self._out.write(text)

    def _format_code(self, language: str, content: str) -> str:
        formatter = self.options.code_formatter
        if formatter is None:
            return content
        try:
            formatted = formatter(language, content)
        except Exception as e:
            logger.warning(f"Code formatter failed for language '{language}', keeping original content: {e}")
            return content
        return content if formatted is None else formatted

    def _write_destination(self, destination: str, title: str) -> None:
        self._out.write(f"]({destination}")
        if title:
            escaped = title.replace('"', '\\"')
            self._out.write(f' "{escaped}"')
        self._out.write(")")

    # -------------------------------------------------------------------------
    # Start handlers
    # -------------------------------------------------------------------------

    def _start_heading(self, tag: Heading) -> None:
        self._out.write("#" * tag.level + " ")

    def _start_block_quote(self, tag: BlockQuote) -> None:
        self._containers.push(BlockQuoteFrame())

    def _start_code_block(self, tag: CodeBlock) -> None:
        if self._out.has_pending():
            self._out.newline()
        if tag.is_fenced:
            self._out.write(CODE_FENCE + tag.info)
            self._out.newline()
        else:
            self._containers.push(CodeIndentFrame())
        self._code_block = tag

    def _start_list(self, tag: List) -> None:
        parent = self._containers.top_list
        if parent is not None:
            parent.separated = True
            self._out.newline()
        self._containers.push(ListFrame(ordinal=tag.start))

    def _start_item(self, tag: Item) -> None:
        frame = self._containers.top_list
        if frame is not None:
            frame.start_item()

    def _start_footnote_definition(self, tag: FootnoteDefinition) -> None:
        self._out.write(f"[^{tag.label}]: ")

    def _start_table(self, tag: Table) -> None:
        self._table = TableAccumulator(alignments=tag.alignments)

    def _start_table_row(self, tag: TableRow) -> None:
        if self._table is not None:
            self._table.start_row()

    def _start_emphasis(self, tag: Emphasis) -> None:
        self._out.write(self.options.emphasis_marker)

    def _start_strong(self, tag: Strong) -> None:
        self._out.write(STRONG_MARKER)

    def _start_strikethrough(self, tag: Strikethrough) -> None:
        self._out.write(STRIKETHROUGH_MARKER)

    def _start_link(self, tag: Link) -> None:
        self._out.write("<" if tag.link_type.is_autolink else "[")

    def _start_image(self, tag: Image) -> None:
        self._out.write("![")

    # -------------------------------------------------------------------------
    # End handlers
    # -------------------------------------------------------------------------

    def _end_paragraph(self, tag: Paragraph) -> None:
        frame = self._containers.top_list
        if frame is None:
            self._out.newline_required = True
        else:
            frame.separated = True
        self._out.newline_if_content()

    def _end_heading(self, tag: Heading) -> None:
        if tag.has_attributes:
            attributes = []
            if tag.identifier is not None:
                attributes.append(f"#{tag.identifier}")
            attributes.extend(f".{cls}" for cls in tag.classes)
            self._out.write(" { " + " ".join(attributes) + " }")
        self._out.newline_required = True
        self._out.newline()

    def _end_block_quote(self, tag: BlockQuote) -> None:
        self._containers.pop()
        # List items own their own spacing
        if self._containers.top_list is None:
            self._out.newline_required = True

    def _end_code_block(self, tag: CodeBlock) -> None:
        if tag.is_fenced:
            pending = self._out.pending
            if pending and not pending.endswith("\n"):
                self._out.write("\n")
            self._out.write(CODE_FENCE)
        self._out.newline()
        if not tag.is_fenced:
            self._containers.pop()
        self._out.newline_required = True
        self._code_block = None

    def _end_list(self, tag: List) -> None:
        self._containers.pop()
        if not self._containers.in_list():
            self._out.newline_required = True

    def _end_item(self, tag: Item) -> None:
        frame = self._containers.top_list
        if frame is not None and not frame.separated:
            self._out.newline_if_content()

    def _end_table(self, tag: Table) -> None:
        table = self._table
        if table is None:
            return
        self._table = None
        for line in table.render_lines():
            self._out.write(line)
            self._out.newline()
        self._out.newline_required = True
        frame = self._containers.top_list
        if frame is not None:
            frame.separated = True

    def _end_table_cell(self, tag: TableCell) -> None:
        if self._table is not None:
            self._table.add_cell(self._out.take_pending())

    def _end_emphasis(self, tag: Emphasis) -> None:
        self._out.write(self.options.emphasis_marker)

    def _end_strong(self, tag: Strong) -> None:
        self._out.write(STRONG_MARKER)

    def _end_strikethrough(self, tag: Strikethrough) -> None:
        self._out.write(STRIKETHROUGH_MARKER)

    def _end_link(self, tag: Link) -> None:
        if tag.link_type.is_autolink:
            self._out.write(">")
            return

        if tag.link_type.is_reference:
            definition = self._references.lookup(label=tag.label, destination=tag.destination)
            if definition is not None:
                if tag.link_type is LinkType.REFERENCE:
                    self._out.write(f"][{definition.label}]")
                elif tag.link_type is LinkType.COLLAPSED:
                    self._out.write("][]")
                else:
                    self._out.write("]")
                return
            logger.debug(f"No reference definition for link to '{tag.destination}', writing it inline")

        self._write_destination(tag.destination, tag.title)

    def _end_image(self, tag: Image) -> None:
        self._write_destination(tag.destination, tag.title)

    # -------------------------------------------------------------------------
    # Leaf handlers
    # -------------------------------------------------------------------------

    def _on_text(self, event: Text) -> None:
        text = event.content
        block = self._code_block
        if block is not None and block.is_fenced:
            text = self._format_code(block.language, text)
        self._write_escaped(text)

    def _on_code(self, event: Code) -> None:
        self._out.write("`")
        if event.content.startswith("`"):
            self._out.write("\\")
        self._out.write(event.content)
        self._out.write("`")

    def _on_html(self, event: Html) -> None:
        if not self._out.has_pending():
            self._out.newline_if_required()
        self._out.write(event.content)
        if event.content.endswith("\n"):
            self._out.newline()
        self._after_html = True

    def _on_soft_break(self, event: SoftBreak) -> None:
        self._out.newline()

    def _on_hard_break(self, event: HardBreak) -> None:
        self._out.write("\\")
        # The backslash is the break; trimming would drop it
        self._out.newline(trim=False)

    def _on_rule(self, event: Rule) -> None:
        if self._out.newline_required:
            self._out.newline()
        self._out.write(THEMATIC_BREAK)
        self._out.newline()
        self._out.newline_required = True

    def _on_task_list_marker(self, event: TaskListMarker) -> None:
        self._out.write("[x] " if event.checked else "[ ] ")

    def _on_footnote_reference(self, event: FootnoteReference) -> None:
        self._out.write(f"[^{event.label}]")

    # -------------------------------------------------------------------------
    # Document end
    # -------------------------------------------------------------------------

    def _write_reference_definitions(self) -> None:
        if not self._references:
            return
        self._out.newline()
        for definition in self._references:
            self._out.write(definition.to_markdown())
            self._out.newline()


def render_markdown(
    events: Iterable[Event], references: References = (), options: MarkdownFormatOptions | None = None
) -> str:
    """Render an event stream to a markdown string.

    Parameters
    ----------
    events : iterable of Event
        Ordered event stream
    references : ReferenceTable or iterable of ReferenceDefinition, default ()
        Reference definitions collected from the document
    options : MarkdownFormatOptions or None, default None
        Style configuration

    Returns
    -------
    str
        Rendered markdown

    """
    return MarkdownRenderer(options).render_to_string(events, references)
