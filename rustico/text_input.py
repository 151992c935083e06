"""A small multi-line text editor driven by key events."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .events import KeyEvent

__all__ = ["TextInputResult", "TextInput"]


@dataclass(frozen=True)
class TextInputResult:
    """What a key press did: nothing, cancelled, or submitted ``text``."""

    kind: str
    text: str | None = None

    NONE: ClassVar[TextInputResult]
    CANCEL: ClassVar[TextInputResult]

    @classmethod
    def submitted(cls, text: str) -> TextInputResult:
        return cls("input", text)

    @property
    def is_cancel(self) -> bool:
        return self.kind == "cancel"

    @property
    def is_input(self) -> bool:
        return self.kind == "input"


TextInputResult.NONE = TextInputResult("none")
TextInputResult.CANCEL = TextInputResult("cancel")


class TextInput:
    """Edits text, or only scrolls through it when not ``changeable``."""

    def __init__(
        self, placeholder: str | None, initial: str, lines: int, changeable: bool
    ) -> None:
        self.placeholder = placeholder
        self.visible_lines = lines
        self.changeable = changeable
        self._buffer = [""]
        self._row = 0
        self._col = 0
        self._insert(initial)
        if not changeable:
            self._move_to_row(0)

    @property
    def cursor(self) -> tuple[int, int]:
        return self._row, self._col

    def height(self) -> int:
        return self.visible_lines

    def text(self) -> str:
        return "\n".join(self._buffer)

    def _insert(self, text: str) -> None:
        line = self._buffer[self._row]
        before, after = line[: self._col], line[self._col :]
        pieces = text.split("\n")
        if len(pieces) == 1:
            self._buffer[self._row] = before + text + after
            self._col += len(text)
            return
        new_lines = [before + pieces[0], *pieces[1:-1], pieces[-1] + after]
        self._buffer[self._row : self._row + 1] = new_lines
        self._row += len(pieces) - 1
        self._col = len(pieces[-1])

    def _move_to_row(self, row: int) -> None:
        self._row = min(max(row, 0), len(self._buffer) - 1)
        self._col = min(self._col, len(self._buffer[self._row]))

    def _backspace(self) -> None:
        if self._col > 0:
            line = self._buffer[self._row]
            self._buffer[self._row] = line[: self._col - 1] + line[self._col :]
            self._col -= 1
        elif self._row > 0:
            previous = self._buffer[self._row - 1]
            self._buffer[self._row - 1] = previous + self._buffer.pop(self._row)
            self._row -= 1
            self._col = len(previous)

    def _delete(self) -> None:
        line = self._buffer[self._row]
        if self._col < len(line):
            self._buffer[self._row] = line[: self._col] + line[self._col + 1 :]
        elif self._row < len(self._buffer) - 1:
            self._buffer[self._row] = line + self._buffer.pop(self._row + 1)

    def _left(self) -> None:
        if self._col > 0:
            self._col -= 1
        elif self._row > 0:
            self._row -= 1
            self._col = len(self._buffer[self._row])

    def _right(self) -> None:
        if self._col < len(self._buffer[self._row]):
            self._col += 1
        elif self._row < len(self._buffer) - 1:
            self._row += 1
            self._col = 0

    def _edit(self, event: KeyEvent) -> None:
        if not event.is_press:
            return
        code = event.code
        if len(code) == 1:
            if not event.ctrl:
                self._insert(code)
            return
        page = max(self.visible_lines, 1)
        actions = {
            "enter": lambda: self._insert("\n"),
            "backspace": self._backspace,
            "delete": self._delete,
            "left": self._left,
            "right": self._right,
            "up": lambda: self._move_to_row(self._row - 1),
            "down": lambda: self._move_to_row(self._row + 1),
            "pageup": lambda: self._move_to_row(self._row - page),
            "pagedown": lambda: self._move_to_row(self._row + page),
            "home": lambda: setattr(self, "_col", 0),
            "end": lambda: setattr(self, "_col", len(self._buffer[self._row])),
        }
        action = actions.get(code)
        if action is not None:
            action()

    def input(self, event: object) -> TextInputResult:
        if not isinstance(event, KeyEvent):
            return TextInputResult.NONE
        code = event.code
        if self.changeable:
            if code == "esc":
                return TextInputResult.CANCEL
            if code == "enter" and self.visible_lines == 1:
                return TextInputResult.submitted(self.text())
            if code == "s" and event.ctrl:
                return TextInputResult.submitted(self.text())
            self._edit(event)
            return TextInputResult.NONE
        if code in ("esc", "enter", "q", "x"):
            return TextInputResult.CANCEL
        if code == "home":
            self._move_to_row(0)
        elif code == "end":
            self._move_to_row(len(self._buffer) - 1)
        elif code in ("pageup", "pagedown", "up", "down"):
            self._edit(event)
        return TextInputResult.NONE