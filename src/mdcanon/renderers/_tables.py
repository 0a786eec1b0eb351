#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcanon/renderers/_tables.py
"""Table accumulation and layout for the markdown renderer.

Cell text is collected while a table is open; nothing is written until the
table closes, because every column's width depends on every row.

"""

from __future__ import annotations

from dataclasses import dataclass, field

from mdcanon.constants import MIN_TABLE_COLUMN_WIDTH
from mdcanon.events import Alignment


@dataclass
class TableAccumulator:
    """Scratch state for one table, live between its Start and End events.

    Parameters
    ----------
    alignments : tuple of Alignment
        Column alignments fixed at table start
    head : list of str
        Header cell texts
    body : list of list of str
        Body rows; a row may hold fewer cells than the header

    """

    alignments: tuple[Alignment, ...] = ()
    head: list[str] = field(default_factory=list)
    body: list[list[str]] = field(default_factory=list)

    def start_row(self) -> None:
        self.body.append([])

    def add_cell(self, text: str) -> None:
        """Store a finished cell in the current body row, or the header before any row starts."""
        if self.body:
            self.body[-1].append(text)
        else:
            self.head.append(text)

    def column_widths(self) -> list[int]:
        """Compute ``max(3, header width, widest body cell)`` for each column."""
        widths = []
        for index, header in enumerate(self.head):
            width = max(MIN_TABLE_COLUMN_WIDTH, len(header))
            for row in self.body:
                if index < len(row):
                    width = max(width, len(row[index]))
            widths.append(width)
        return widths

    def render_lines(self) -> list[str]:
        """Lay out the header row, divider row and body rows."""
        widths = self.column_widths()
        lines = [_row_line(self.head, widths), self._divider_line(widths)]
        lines.extend(_row_line(row, widths) for row in self.body)
        return lines

    def _divider_line(self, widths: list[int]) -> str:
        cells = []
        for index, width in enumerate(widths):
            alignment = self.alignments[index] if index < len(self.alignments) else None
            left = ":" if alignment in ("left", "center") else "-"
            right = ":" if alignment in ("right", "center") else "-"
            cells.append(f" {left}{'-' * (width - 2)}{right} |")
        return "|" + "".join(cells)


def _row_line(row: list[str], widths: list[int]) -> str:
    cells = []
    for index, width in enumerate(widths):
        text = row[index] if index < len(row) else ""
        cells.append(f" {text.ljust(width)} |")
    return "|" + "".join(cells)
