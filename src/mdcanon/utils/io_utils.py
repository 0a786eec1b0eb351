#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcanon/utils/io_utils.py
"""I/O utilities for handling output destinations.

The renderer writes text incrementally to a single sink. This module turns
the destinations callers hand us (a path, a text stream or a binary stream)
into that sink.

"""

from __future__ import annotations

import io
from contextlib import contextmanager
from io import BytesIO, StringIO
from pathlib import Path
from typing import IO, Iterator, TextIO, Union, cast

from mdcanon.exceptions import FileAccessError

OutputDestination = Union[str, Path, IO[bytes], IO[str]]


class _EncodingWriter:
    """Text facade over a binary stream; every write is encoded as UTF-8."""

    def __init__(self, raw: IO[bytes]):
        self._raw = raw

    def write(self, text: str) -> int:
        self._raw.write(text.encode("utf-8"))
        return len(text)

    def __repr__(self) -> str:
        return f"<utf-8 writer over {self._raw!r}>"


def is_binary_stream(output: object) -> bool:
    """Detect whether a file-like object expects bytes.

    Parameters
    ----------
    output : object
        File-like object with a ``write`` method

    Returns
    -------
    bool
        True for binary streams, False for text streams

    """
    # Concrete types first, then io base classes, then the mode attribute
    if isinstance(output, BytesIO):
        return True
    if isinstance(output, StringIO):
        return False
    if isinstance(output, io.TextIOBase):
        return False
    if isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
        return True
    mode = getattr(output, "mode", "")
    return isinstance(mode, str) and "b" in mode


@contextmanager
def open_text_sink(output: OutputDestination) -> Iterator[TextIO]:
    """Yield a text sink for ``output``.

    Parameters
    ----------
    output : str, Path, IO[bytes] or IO[str]
        Output destination. Paths are opened for writing as UTF-8 and closed
        on exit; streams are written to but never closed.

    Raises
    ------
    FileAccessError
        If a path cannot be opened for writing
    TypeError
        If ``output`` is neither a path nor a writable stream

    """
    if isinstance(output, (str, Path)):
        path = Path(output)
        try:
            handle = path.open("w", encoding="utf-8", newline="")
        except OSError as e:
            raise FileAccessError(str(path), original_error=e) from e
        with handle:
            yield handle
        return

    if not hasattr(output, "write"):
        raise TypeError(f"Output must be a path or a writable stream, got {type(output).__name__}")

    if is_binary_stream(output):
        yield cast(TextIO, _EncodingWriter(cast(IO[bytes], output)))
    else:
        yield cast(TextIO, output)
