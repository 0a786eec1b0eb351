"""The major exported API functions for markdown formatting."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/mdcanon/api.py
import logging
from typing import Any, Iterable, Optional, TypeVar

from mdcanon.events import Event
from mdcanon.options.base import BaseParserOptions, BaseRendererOptions
from mdcanon.options.markdown import MarkdownFormatOptions, MarkdownParserOptions
from mdcanon.parsers.base import ParserInput
from mdcanon.parsers.markdown import MarkdownEventParser
from mdcanon.references import ReferenceTable
from mdcanon.renderers.base import References
from mdcanon.renderers.markdown import MarkdownRenderer
from mdcanon.utils.decorators import debug_timer
from mdcanon.utils.io_utils import OutputDestination

logger = logging.getLogger(__name__)

OptionsT = TypeVar("OptionsT", BaseParserOptions, BaseRendererOptions)


def _apply_kwargs(options: Optional[OptionsT], options_class: type[OptionsT], kwargs: dict[str, Any]) -> OptionsT:
    """Fold the keyword arguments naming fields of ``options_class`` into an options object."""
    base = options if options is not None else options_class()
    names = set(options_class.field_names())
    updates = {k: v for k, v in kwargs.items() if k in names}
    return base.create_updated(**updates) if updates else base


def _split_kwargs(
    options: MarkdownFormatOptions | None,
    parser_options: MarkdownParserOptions | None,
    kwargs: dict[str, Any],
) -> tuple[MarkdownFormatOptions, MarkdownParserOptions]:
    """Split keyword arguments between format and parser options by field name.

    Parameters
    ----------
    options : MarkdownFormatOptions or None
        Base format options
    parser_options : MarkdownParserOptions or None
        Base parser options
    kwargs : dict
        Keyword overrides, e.g. ``emphasis_marker="*"`` or ``parse_tables=False``

    Returns
    -------
    tuple[MarkdownFormatOptions, MarkdownParserOptions]
        Options with the overrides applied

    """
    format_options = _apply_kwargs(options, MarkdownFormatOptions, kwargs)
    parse_options = _apply_kwargs(parser_options, MarkdownParserOptions, kwargs)

    known = set(MarkdownFormatOptions.field_names()) | set(MarkdownParserOptions.field_names())
    unmatched = [k for k in kwargs if k not in known]
    if unmatched:
        logger.debug(f"Kwargs don't match format or parser fields: {unmatched}")

    return format_options, parse_options


def format_markdown(
    source: ParserInput,
    options: MarkdownFormatOptions | None = None,
    parser_options: MarkdownParserOptions | None = None,
    **kwargs: Any,
) -> str:
    """Reformat markdown into its canonical form.

    Parameters
    ----------
    source : str, bytes, Path or file-like object
        Markdown source. A ``str`` is markdown text, never a file name.
    options : MarkdownFormatOptions or None, default None
        Style configuration
    parser_options : MarkdownParserOptions or None, default None
        Tokenizer extension toggles
    **kwargs
        Individual option fields, overriding ``options``/``parser_options``

    Returns
    -------
    str
        Canonical markdown

    Examples
    --------
        >>> format_markdown("* item *one*")
        '- item _one_\\n'
        >>> format_markdown("* item", unordered_list_marker="+")
        '+ item\\n'

    """
    format_options, parse_options = _split_kwargs(options, parser_options, kwargs)
    document = MarkdownEventParser(parse_options).parse(source)
    renderer = MarkdownRenderer(format_options)
    with debug_timer(logger, "Formatting markdown"):
        return renderer.render_to_string(document.events, document.references)


def format_markdown_to(
    source: ParserInput,
    output: OutputDestination,
    options: MarkdownFormatOptions | None = None,
    parser_options: MarkdownParserOptions | None = None,
    **kwargs: Any,
) -> None:
    """Reformat markdown and write the result to ``output``.

    Parameters
    ----------
    source : str, bytes, Path or file-like object
        Markdown source
    output : str, Path, IO[str] or IO[bytes]
        Destination; text is written incrementally, binary streams receive UTF-8
    options : MarkdownFormatOptions or None, default None
        Style configuration
    parser_options : MarkdownParserOptions or None, default None
        Tokenizer extension toggles
    **kwargs
        Individual option fields

    Raises
    ------
    OutputWriteError
        If the destination rejects a write

    """
    format_options, parse_options = _split_kwargs(options, parser_options, kwargs)
    document = MarkdownEventParser(parse_options).parse(source)
    MarkdownRenderer(format_options).render(document.events, output, document.references)


def render_events(
    events: Iterable[Event],
    references: References = (),
    options: MarkdownFormatOptions | None = None,
    output: OutputDestination | None = None,
    **kwargs: Any,
) -> Optional[str]:
    """Render a caller-supplied event stream.

    Parameters
    ----------
    events : iterable of Event
        Ordered event stream, consumed once
    references : ReferenceTable or iterable of ReferenceDefinition, default ()
        Reference definitions for the document
    options : MarkdownFormatOptions or None, default None
        Style configuration
    output : str, Path, IO[str], IO[bytes] or None, default None
        Destination; when None the rendered text is returned
    **kwargs
        Individual format option fields

    Returns
    -------
    str or None
        Rendered markdown when ``output`` is None, otherwise None

    """
    format_options = _apply_kwargs(options, MarkdownFormatOptions, kwargs)
    renderer = MarkdownRenderer(format_options)
    if output is None:
        return renderer.render_to_string(events, references)
    renderer.render(events, output, references)
    return None


def is_formatted(
    source: str,
    options: MarkdownFormatOptions | None = None,
    parser_options: MarkdownParserOptions | None = None,
    **kwargs: Any,
) -> bool:
    """Check whether markdown text is already in canonical form.

    Parameters
    ----------
    source : str
        Markdown text
    options : MarkdownFormatOptions or None, default None
        Style configuration
    parser_options : MarkdownParserOptions or None, default None
        Tokenizer extension toggles
    **kwargs
        Individual option fields

    Returns
    -------
    bool
        True when formatting would leave the text unchanged

    """
    return format_markdown(source, options, parser_options, **kwargs) == source


def parse_markdown(
    source: ParserInput, parser_options: MarkdownParserOptions | None = None
) -> tuple[list[Event], ReferenceTable]:
    """Tokenize markdown into events and reference definitions.

    Returns
    -------
    tuple[list[Event], ReferenceTable]
        Events in document order and the collected reference table

    """
    document = MarkdownEventParser(parser_options).parse(source)
    return document.events, document.references
