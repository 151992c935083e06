"""A table with a selectable row, paging and a scroll position."""

from __future__ import annotations

from collections.abc import Iterable

from .events import KeyEvent

__all__ = ["SelectTable"]


def _text_width(text: str) -> int:
    return max((len(line) for line in text.splitlines()), default=0)


class SelectTable:
    """Rows of text cells of which at most one is selected."""

    def __init__(self, header: Iterable[str]) -> None:
        self.header = [str(cell) for cell in header]
        self.content: list[list[str]] = []
        self.widths: list[int] = []
        self.selected: int | None = None
        self.scroll_length = 0
        self.scroll_position = 0
        self.rows = 0
        self.rows_display = 0
        self.row_height = 0

    def set_content(self, content: Iterable[Iterable[str]], row_height: int) -> None:
        """Replace the rows; the scroll position is reset."""
        self.content = [[str(cell) for cell in row] for row in content]
        self.row_height = row_height
        widths: list[int] | None = None
        for row in [self.header, *self.content]:
            row_widths = [_text_width(cell) for cell in row]
            widths = row_widths if widths is None else [
                max(a, b) for a, b in zip(row_widths, widths)
            ]
        self.widths = widths or []
        self.rows = len(self.content)
        self.scroll_length = self.rows * self.row_height
        self.scroll_position = 0

    def select(self, index: int | None) -> None:
        self.selected = index

    def set_to(self, index: int) -> None:
        self.selected = index
        self.scroll_position = index * self.row_height

    def go_forward(self, step: int) -> None:
        if self.selected is not None:
            self.set_to(min(self.selected + step, max(self.rows - 1, 0)))

    def go_back(self, step: int) -> None:
        if self.selected is not None:
            self.set_to(max(self.selected - step, 0))

    def next(self) -> None:
        self.go_forward(1)

    def previous(self) -> None:
        self.go_back(1)

    def page_down(self) -> None:
        self.go_forward(self.rows_display)

    def page_up(self) -> None:
        self.go_back(self.rows_display)

    def home(self) -> None:
        if self.selected is not None:
            self.set_to(0)

    def end(self) -> None:
        if self.selected is not None:
            self.set_to(max(self.rows - 1, 0))

    def set_rows(self, rows: int) -> None:
        """Set the number of screen lines available to the table."""
        self.rows_display = rows // self.row_height

    def input(self, event: object) -> None:
        if not isinstance(event, KeyEvent) or not event.is_press:
            return
        action = {
            "down": self.next,
            "up": self.previous,
            "pagedown": self.page_down,
            "pageup": self.page_up,
            "home": self.home,
            "end": self.end,
        }.get(event.code)
        if action is not None:
            action()