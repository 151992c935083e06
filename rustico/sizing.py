"""Widget sizes, borders and centering of popups on a character grid."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

__all__ = [
    "Rect",
    "SizedTable",
    "SizedParagraph",
    "SizedGauge",
    "Bordered",
    "center_popup",
]

_U16_MAX = 0xFFFF


def _fit(value: int) -> int | None:
    return value if 0 <= value <= _U16_MAX else None


def _lines(text: str) -> list[str]:
    return text.splitlines()


def _width(text: str) -> int:
    return max((len(line) for line in _lines(text)), default=0)


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height


class SizedTable:
    """A table sized to its content; columns are separated by one space."""

    def __init__(self, content: Iterable[Iterable[str]]) -> None:
        self.rows = [[str(cell) for cell in row] for row in content]
        self._height = sum(
            max((len(_lines(cell)) for cell in row), default=0) for row in self.rows
        )
        widths: list[int] | None = None
        for row in self.rows:
            row_widths = [_width(cell) for cell in row]
            widths = row_widths if widths is None else [
                max(a, b) for a, b in zip(row_widths, widths)
            ]
        self.widths = widths or []
        self._width = sum(self.widths) + len(self.widths) - 1 if self.widths else 0

    def width(self) -> int | None:
        return _fit(self._width)

    def height(self) -> int | None:
        return _fit(self._height)


class SizedParagraph:
    """A block of text sized to its lines."""

    def __init__(self, text: str) -> None:
        self.text = text
        self._height = _fit(len(_lines(text)))
        self._width = _fit(_width(text))

    def width(self) -> int | None:
        return self._width

    def height(self) -> int | None:
        return self._height


class SizedGauge:
    """A one-line gauge with a label, a little wider than the label."""

    def __init__(self, text: str, ratio: float) -> None:
        self.text = text
        self.ratio = ratio
        self._width = _fit(_width(text))

    def width(self) -> int | None:
        return None if self._width is None else self._width + 10

    def height(self) -> int | None:
        return 1


class Bordered:
    """A widget surrounded by borders and an optional title."""

    def __init__(
        self,
        widget: Any,
        title: str | None = None,
        *,
        top: bool = True,
        bottom: bool = True,
        left: bool = True,
        right: bool = True,
    ) -> None:
        self.widget = widget
        self.title = title
        self.top = top
        self.bottom = bottom
        self.left = left
        self.right = right

    def _extra_width(self) -> int:
        return int(self.left) + int(self.right)

    def _extra_height(self) -> int:
        top = self.top or self.title is not None
        return int(top) + int(self.bottom)

    def width(self) -> int | None:
        inner = self.widget.width()
        return None if inner is None else min(inner + self._extra_width(), _U16_MAX)

    def height(self) -> int | None:
        inner = self.widget.height()
        return None if inner is None else min(inner + self._extra_height(), _U16_MAX)

    def inner(self, area: Rect) -> Rect:
        """The part of ``area`` left for the widget."""
        x, y, width, height = area.x, area.y, area.width, area.height
        if self.left:
            x = min(x + 1, area.right)
            width = max(width - 1, 0)
        if self.top or self.title is not None:
            y = min(y + 1, area.bottom)
            height = max(height - 1, 0)
        if self.right:
            width = max(width - 1, 0)
        if self.bottom:
            height = max(height - 1, 0)
        return Rect(x, y, width, height)

    def input(self, event: object) -> Any:
        return self.widget.input(event)


def _center(start: int, total: int, size: int | None) -> tuple[int, int]:
    if size is None:
        return start, total
    middle = min(size, max(total - 2, 0))
    return start + (total - middle) // 2, middle


def center_popup(area: Rect, width: int | None, height: int | None) -> Rect:
    """Center a box of the given size in ``area``, keeping a margin of one cell.

    A dimension given as None takes the full extent of the area.
    """
    y, h = _center(area.y, area.height, height)
    x, w = _center(area.x, area.width, width)
    return Rect(x, y, w, h)