#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcanon/renderers/_emitter.py
"""Line emission for the markdown renderer.

Inline output accumulates in a pending-line buffer. When a block boundary
forces a line break, the buffer is split into physical lines, each line is
prefixed with the container padding, trimmed, and written to the sink. Runs
of blank lines collapse to one, and the output never opens with a blank line.

"""

from __future__ import annotations

from typing import TextIO

from mdcanon.exceptions import OutputWriteError
from mdcanon.renderers._containers import ContainerStack


def split_physical_lines(text: str) -> list[str]:
    """Split pending text into lines.

    A trailing newline does not produce an extra empty line, and a carriage
    return left at the end of a line is dropped.

    Examples
    --------
        >>> split_physical_lines("a\\r\\nb\\n")
        ['a', 'b']

    """
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class LineEmitter:
    """Pending-line buffer plus the two flags that stand in for lookahead.

    Parameters
    ----------
    sink : TextIO
        Destination for finished lines
    stack : ContainerStack
        Open containers; consulted for every line's padding

    Attributes
    ----------
    newline_required : bool
        A block has closed and the next block must start on a fresh line
    last_line_blank : bool
        The last line written was blank; starts true so a document never
        opens with a blank line

    """

    def __init__(self, sink: TextIO, stack: ContainerStack):
        self._sink = sink
        self._stack = stack
        self._buffer: list[str] = []
        self.newline_required = False
        self.last_line_blank = True

    # Pending buffer

    def write(self, text: str) -> None:
        if text:
            self._buffer.append(text)

    @property
    def pending(self) -> str:
        return "".join(self._buffer)

    def has_pending(self) -> bool:
        return any(self._buffer)

    def take_pending(self) -> str:
        """Return the pending text and clear the buffer."""
        text = self.pending
        self._buffer.clear()
        return text

    # Line output

    def newline(self, trim: bool = True) -> None:
        """Flush the pending buffer as complete lines, or write one empty line if it is empty."""
        text = self.take_pending()
        if not text:
            self._write_line("", trim)
            return
        for line in split_physical_lines(text):
            self._write_line(line, trim)

    def newline_if_required(self) -> None:
        if self.newline_required:
            self.newline()
            self.newline_required = False

    def newline_if_content(self) -> None:
        """Break the line when there is pending text or an open container."""
        if self.has_pending() or self._stack:
            self.newline()

    def _write_line(self, line: str, trim: bool) -> None:
        output = self._stack.padding() + line
        if trim:
            output = output.rstrip()
        if output or not self.last_line_blank:
            self._emit(output + "\n")
        self.last_line_blank = not output

    def _emit(self, text: str) -> None:
        try:
            self._sink.write(text)
        except (OSError, ValueError) as e:
            raise OutputWriteError(repr(self._sink), original_error=e) from e
