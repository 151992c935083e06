"""Plain text tables laid out as Markdown."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

__all__ = ["Alignment", "Table", "table_with_titles", "table_right_from"]


class Alignment(Enum):
    LEFT = "left"
    RIGHT = "right"


def _cell_lines(cell: str) -> list[str]:
    return cell.splitlines() or [""]


@dataclass
class Table:
    """A table with an optional header row and per-column alignment."""

    header: list[str] = field(default_factory=list)
    alignments: list[Alignment] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)

    def add_row(self, row: Iterable[object]) -> Table:
        """Append a row; cells are converted to strings."""
        self.rows.append([str(cell) for cell in row])
        return self

    def _alignment(self, column: int) -> Alignment:
        if column < len(self.alignments):
            return self.alignments[column]
        return Alignment.LEFT

    def _format_row(self, row: list[str], widths: list[int]) -> list[str]:
        cells = [_cell_lines(cell) for cell in row]
        height = max(len(lines) for lines in cells)
        output = []
        for line_no in range(height):
            parts = []
            for column, (lines, width) in enumerate(zip(cells, widths)):
                text = lines[line_no] if line_no < len(lines) else ""
                if self._alignment(column) is Alignment.RIGHT:
                    parts.append(text.rjust(width))
                else:
                    parts.append(text.ljust(width))
            output.append("| " + " | ".join(parts) + " |")
        return output

    def render(self) -> str:
        """The table as text, one line per physical row."""
        all_rows = ([list(self.header)] if self.header else []) + self.rows
        if not all_rows:
            return ""
        columns = max(len(row) for row in all_rows)
        padded = [row + [""] * (columns - len(row)) for row in all_rows]
        widths = [
            max(len(line) for row in padded for line in _cell_lines(row[column]))
            for column in range(columns)
        ]
        lines: list[str] = []
        body = padded
        if self.header:
            lines.extend(self._format_row(padded[0], widths))
            lines.append("|" + "|".join("-" * (w + 2) for w in widths) + "|")
            body = padded[1:]
        for row in body:
            lines.extend(self._format_row(row, widths))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()


def table_with_titles(titles: Iterable[object]) -> Table:
    """A new table whose header row holds ``titles``."""
    header = [str(title) for title in titles]
    return Table(header=header, alignments=[Alignment.LEFT] * len(header))


def table_right_from(start: int, titles: Iterable[object]) -> Table:
    """A new table with titles whose columns from ``start`` on are right aligned."""
    table = table_with_titles(titles)
    table.alignments = [
        Alignment.RIGHT if column >= start else Alignment.LEFT
        for column in range(len(table.header))
    ]
    return table