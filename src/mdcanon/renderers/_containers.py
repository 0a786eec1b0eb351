#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcanon/renderers/_containers.py
"""Container stack used by the markdown renderer.

Each open block quote, indented code block and list contributes a prefix to
every line written while it is open. Frames are pushed on a construct's
Start event and popped on its End event, so the stack always mirrors the
current nesting.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Union

from mdcanon.constants import CODE_INDENT


@dataclass
class BlockQuoteFrame:
    """An open block quote."""


@dataclass
class CodeIndentFrame:
    """An open indented code block."""


@dataclass
class ListFrame:
    """An open list and the state of its current item.

    Parameters
    ----------
    ordinal : str or None
        Ordinal of an ordered list, ``None`` for bullet lists
    marker_written : bool
        Whether the current item's bullet or ordinal has been written
    separated : bool
        Whether the current item's content has already been terminated by a
        block-level child, so closing the item must not flush another line

    """

    ordinal: Optional[str] = None
    marker_written: bool = False
    separated: bool = False

    def start_item(self) -> None:
        self.marker_written = False
        self.separated = False

    def marker(self, bullet: str) -> str:
        if self.ordinal is None:
            return f"{bullet} "
        return f"{self.ordinal}. "


Frame = Union[BlockQuoteFrame, CodeIndentFrame, ListFrame]


class ContainerStack:
    """Stack of open container frames.

    Parameters
    ----------
    blockquote_marker : str
        Marker written for each open block quote
    bullet : str
        Marker written for the first line of each bullet list item

    """

    def __init__(self, blockquote_marker: str, bullet: str):
        self._frames: list[Frame] = []
        self._blockquote_prefix = f"{blockquote_marker} "
        self._bullet = bullet

    def __len__(self) -> int:
        return len(self._frames)

    def __bool__(self) -> bool:
        return bool(self._frames)

    def __iter__(self) -> Iterator[Frame]:
        return iter(self._frames)

    def push(self, frame: Frame) -> None:
        self._frames.append(frame)

    def pop(self) -> Optional[Frame]:
        return self._frames.pop() if self._frames else None

    @property
    def top(self) -> Optional[Frame]:
        return self._frames[-1] if self._frames else None

    @property
    def top_list(self) -> Optional[ListFrame]:
        """The innermost frame if it is a list, else None."""
        top = self.top
        return top if isinstance(top, ListFrame) else None

    def in_list(self) -> bool:
        """Whether any list frame is open, at any depth."""
        return any(isinstance(frame, ListFrame) for frame in self._frames)

    def padding(self) -> str:
        """Build the prefix for the next output line.

        List frames whose item marker is still unwritten contribute the
        marker and are flagged as written; every later line of the same item
        gets blank padding of the same width instead.
        """
        parts: list[str] = []
        for frame in self._frames:
            if isinstance(frame, BlockQuoteFrame):
                parts.append(self._blockquote_prefix)
            elif isinstance(frame, CodeIndentFrame):
                parts.append(CODE_INDENT)
            else:
                marker = frame.marker(self._bullet)
                if frame.marker_written:
                    parts.append(" " * len(marker))
                else:
                    frame.marker_written = True
                    parts.append(marker)
        return "".join(parts)
