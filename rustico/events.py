"""Key events and the yes/no prompt that reacts to them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

__all__ = ["KeyKind", "KeyEvent", "PromptResult", "Prompt"]


class KeyKind(Enum):
    PRESS = "press"
    REPEAT = "repeat"
    RELEASE = "release"


@dataclass(frozen=True)
class KeyEvent:
    """A key event.

    ``code`` is a single character for printable keys, or one of the names
    ``enter``, ``esc``, ``backspace``, ``delete``, ``left``, ``right``,
    ``up``, ``down``, ``home``, ``end``, ``pageup``, ``pagedown``, ``f5``.
    """

    code: str
    ctrl: bool = False
    kind: KeyKind = KeyKind.PRESS

    @property
    def is_press(self) -> bool:
        return self.kind is KeyKind.PRESS


class PromptResult(Enum):
    OK = "ok"
    CANCEL = "cancel"
    NONE = "none"


_CANCEL_KEYS = frozenset({"q", "n", "c", "esc"})
_OK_KEYS = frozenset({"enter", "y", "j", " "})


@dataclass
class Prompt:
    """Wraps a widget and answers yes or no on key presses."""

    content: Any

    def width(self) -> int | None:
        return self.content.width()

    def height(self) -> int | None:
        return self.content.height()

    def input(self, event: object) -> PromptResult:
        if not isinstance(event, KeyEvent) or not event.is_press:
            return PromptResult.NONE
        if event.code in _CANCEL_KEYS:
            return PromptResult.CANCEL
        if event.code in _OK_KEYS:
            return PromptResult.OK
        return PromptResult.NONE