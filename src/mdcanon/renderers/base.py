#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcanon/renderers/base.py
"""Base classes for event stream renderers.

This module defines the abstract base class renderers inherit from. A
renderer consumes one event stream (plus the document's reference
definitions) and writes the result to a single output sink.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from io import StringIO
from typing import Iterable, Union

from mdcanon.events import Event
from mdcanon.exceptions import InvalidOptionsError
from mdcanon.options.base import BaseRendererOptions
from mdcanon.references import ReferenceDefinition, ReferenceTable
from mdcanon.utils.io_utils import OutputDestination

References = Union[ReferenceTable, Iterable[ReferenceDefinition]]


class BaseRenderer(ABC):
    """Abstract base class for event stream renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    Examples
    --------
    Creating a custom renderer:

        >>> class CountingRenderer(BaseRenderer):
        ...     def render(self, events, output, references=()):
        ...         output.write(f"{sum(1 for _ in events)} events")

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render(self, events: Iterable[Event], output: OutputDestination, references: References = ()) -> None:
        """Render an event stream to the specified output.

        Parameters
        ----------
        events : iterable of Event
            Ordered event stream, consumed once
        output : str, Path, IO[str] or IO[bytes]
            Output destination
        references : ReferenceTable or iterable of ReferenceDefinition, default ()
            Reference definitions collected from the document

        Raises
        ------
        OutputWriteError
            If the sink rejects a write

        """
        pass

    def render_to_string(self, events: Iterable[Event], references: References = ()) -> str:
        """Render an event stream and return the text.

        Parameters
        ----------
        events : iterable of Event
            Ordered event stream
        references : ReferenceTable or iterable of ReferenceDefinition, default ()
            Reference definitions collected from the document

        Returns
        -------
        str
            Rendered document

        """
        buffer = StringIO()
        self.render(events, buffer, references)
        return buffer.getvalue()

    @staticmethod
    def _as_reference_table(references: References) -> ReferenceTable:
        if isinstance(references, ReferenceTable):
            return references
        return ReferenceTable(references)

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Raises
        ------
        InvalidOptionsError
            If options is not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )
