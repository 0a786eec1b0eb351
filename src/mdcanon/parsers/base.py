#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcanon/parsers/base.py
"""Base classes for event stream parsers.

A parser tokenizes markdown text into the flat event stream the renderer
consumes, together with the reference definitions found in the document.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Iterator, Union

from mdcanon.events import Event
from mdcanon.exceptions import FileAccessError, FileNotFoundError, InvalidOptionsError, ParsingError
from mdcanon.options.base import BaseParserOptions
from mdcanon.references import ReferenceTable

logger = logging.getLogger(__name__)

ParserInput = Union[str, bytes, Path, IO[str], IO[bytes]]


@dataclass
class ParsedDocument:
    """Result of tokenizing one document.

    Parameters
    ----------
    events : list of Event
        Ordered event stream
    references : ReferenceTable
        Reference definitions collected from anywhere in the document

    """

    events: list[Event] = field(default_factory=list)
    references: ReferenceTable = field(default_factory=ReferenceTable)

    def __iter__(self) -> Iterator[Event]:
        return iter(self.events)

    def __len__(self) -> int:
        return len(self.events)


class BaseParser(ABC):
    """Abstract base class for event stream parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Raises
        ------
        InvalidOptionsError
            If options is not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, input_data: ParserInput) -> ParsedDocument:
        """Tokenize input into an event stream.

        Parameters
        ----------
        input_data : str, bytes, Path or file-like object
            Markdown source. A ``str`` is always treated as markdown text,
            never as a file name; pass a ``Path`` to read a file.

        Returns
        -------
        ParsedDocument
            Events and reference definitions

        """
        pass

    @staticmethod
    def _load_text_content(input_data: ParserInput) -> str:
        """Load markdown text from the supported input types; see :func:`load_text`."""
        return load_text(input_data)


def load_text(input_data: ParserInput) -> str:
    """Load markdown text from a string, bytes, path or stream.

    Bytes are decoded as UTF-8. A leading byte order mark is dropped from
    every kind of input, so a file and its contents read as the same text.

    Raises
    ------
    FileNotFoundError
        If a Path does not exist
    FileAccessError
        If a Path cannot be read
    ParsingError
        If bytes are not valid UTF-8

    """
    if isinstance(input_data, str):
        return _strip_bom(input_data)

    if isinstance(input_data, Path):
        if not input_data.exists():
            raise FileNotFoundError(str(input_data))
        try:
            raw = input_data.read_bytes()
        except OSError as e:
            raise FileAccessError(str(input_data), original_error=e) from e
        return _decode(raw, str(input_data))

    if isinstance(input_data, bytes):
        return _decode(input_data, "<bytes>")

    if hasattr(input_data, "read"):
        content = input_data.read()
        if isinstance(content, bytes):
            return _decode(content, repr(input_data))
        return _strip_bom(content)

    raise TypeError(f"Unsupported input type: {type(input_data).__name__}")


def _strip_bom(text: str) -> str:
    return text[1:] if text.startswith("\ufeff") else text


def _decode(raw: bytes, source: str) -> str:
    # utf-8-sig drops a leading byte order mark
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ParsingError(f"Input is not valid UTF-8: {source}", parsing_stage="decoding", original_error=e) from e
