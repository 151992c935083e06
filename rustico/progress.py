"""Progress reporting and its options."""

from __future__ import annotations

import re
import sys
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Any, TextIO

from .bytesize import format_bytes

__all__ = [
    "ProgressKind",
    "ProgressOptions",
    "Progress",
    "parse_duration",
    "format_duration",
    "fmt_duration",
]

_NS = 1
_US = 1_000
_MS = 1_000_000
_S = 1_000_000_000
_MIN = 60 * _S
_H = 3600 * _S
_D = 86400 * _S
_MONTH = 2_630_016 * _S
_YEAR = 31_557_600 * _S

_UNITS: dict[str, int] = {
    **dict.fromkeys(("nanos", "nsec", "ns"), _NS),
    **dict.fromkeys(("usec", "us"), _US),
    **dict.fromkeys(("msec", "ms"), _MS),
    **dict.fromkeys(("seconds", "second", "secs", "sec", "s"), _S),
    **dict.fromkeys(("minutes", "minute", "mins", "min", "m"), _MIN),
    **dict.fromkeys(("hours", "hour", "hrs", "hr", "h"), _H),
    **dict.fromkeys(("days", "day", "d"), _D),
    **dict.fromkeys(("weeks", "week", "w"), 7 * _D),
    **dict.fromkeys(("months", "month", "M"), _MONTH),
    **dict.fromkeys(("years", "year", "y"), _YEAR),
}

_FORMAT_UNITS = (
    (_YEAR, "y"),
    (_MONTH, "M"),
    (_D, "d"),
    (_H, "h"),
    (_MIN, "m"),
    (_S, "s"),
    (_MS, "ms"),
    (_US, "us"),
    (_NS, "ns"),
)

_PART = re.compile(r"\s*([0-9]+)\s*([A-Za-z]+)\s*")


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``1s``, ``100ms`` or ``1h 30m``."""
    stripped = text.strip()
    if not stripped:
        raise ValueError("empty duration")
    total = 0
    pos = 0
    while pos < len(stripped):
        match = _PART.match(stripped, pos)
        if match is None:
            raise ValueError(f"invalid duration {text!r}")
        number, unit = match.groups()
        if unit not in _UNITS:
            raise ValueError(f"unknown time unit {unit!r} in {text!r}")
        total += int(number) * _UNITS[unit]
        pos = match.end()
    return timedelta(microseconds=total // _US)


def format_duration(duration: timedelta) -> str:
    """Format a duration in the form accepted by :func:`parse_duration`."""
    remaining = (
        (duration.days * 86400 + duration.seconds) * _S + duration.microseconds * _US
    )
    if remaining < 0:
        raise ValueError("duration must not be negative")
    parts = []
    for size, unit in _FORMAT_UNITS:
        amount, remaining = divmod(remaining, size)
        if amount:
            parts.append(f"{amount}{unit}")
    return " ".join(parts) if parts else "0s"


def fmt_duration(seconds: float | timedelta) -> str:
    """Format whole seconds as ``[HH:MM:SS]``."""
    if isinstance(seconds, timedelta):
        seconds = seconds.total_seconds()
    minutes, secs = divmod(int(seconds), 60)
    hours, minutes = divmod(minutes, 60)
    return f"[{hours:02}:{minutes:02}:{secs:02}]"


class ProgressKind(Enum):
    HIDDEN = "hidden"
    SPINNER = "spinner"
    COUNTER = "counter"
    BYTES = "bytes"


class Progress:
    """A progress indicator that renders its state to a text stream."""

    def __init__(
        self,
        kind: ProgressKind,
        prefix: str = "",
        *,
        output: TextIO | None = None,
        interval: timedelta = timedelta(0),
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.kind = kind
        self.prefix = prefix
        self.length: int | None = None
        self.count = 0
        self.finished = False
        self._output = output
        self._interval = interval.total_seconds()
        self._clock = clock
        self._begin = clock()
        self._last_draw: float | None = None

    @property
    def elapsed(self) -> float:
        return self._clock() - self._begin

    def is_hidden(self) -> bool:
        return self.kind is ProgressKind.HIDDEN

    def set_length(self, length: int) -> None:
        self.length = length
        self._draw()

    def set_title(self, title: str) -> None:
        self.prefix = title
        self._draw()

    def inc(self, amount: int) -> None:
        self.count += amount
        self._draw()

    def finish(self) -> None:
        self.finished = True
        if self._output is not None and not self.is_hidden():
            self._output.write(f"\r{self.message()} done\n")
            self._output.flush()

    def ratio(self) -> float:
        """Fraction done; zero while the length is unknown or zero."""
        if not self.length:
            return 0.0
        return self.count / self.length

    def _eta(self, elapsed: float) -> str:
        ratio = self.ratio()
        if ratio < 0.01:
            return " ETA: -"
        if ratio > 0.999_999:
            return ""
        return f" ETA: {fmt_duration(1 + elapsed * (1.0 - ratio) / ratio)}"

    def message(self) -> str:
        """The text describing the current state."""
        if self.kind is ProgressKind.HIDDEN:
            return ""
        elapsed = self.elapsed
        head = f"{fmt_duration(elapsed)} {self.prefix}"
        if self.kind is ProgressKind.SPINNER:
            return head
        if self.kind is ProgressKind.COUNTER:
            count = str(self.count)
            total = "" if self.length is None else f"/{self.length}"
        else:
            count = format_bytes(self.count)
            total = "" if self.length is None else f"/{format_bytes(self.length)}"
        return f"{head} {count}{total}{self._eta(elapsed)}"

    def _draw(self, force: bool = False) -> None:
        if self._output is None or self.is_hidden():
            return
        now = self._clock()
        if (
            not force
            and self._last_draw is not None
            and now - self._last_draw < self._interval
        ):
            return
        self._last_draw = now
        self._output.write(f"\r{self.message()}")
        self._output.flush()


@dataclass
class ProgressOptions:
    """Settings for progress bars."""

    no_progress: bool = False
    progress_interval: timedelta | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProgressOptions:
        unknown = set(data) - {"no-progress", "progress-interval"}
        if unknown:
            raise ValueError(f"unknown progress fields: {', '.join(sorted(unknown))}")
        interval = data.get("progress-interval")
        return cls(
            no_progress=bool(data.get("no-progress", False)),
            progress_interval=None if interval is None else parse_duration(str(interval)),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"no-progress": self.no_progress}
        if self.progress_interval is not None:
            result["progress-interval"] = format_duration(self.progress_interval)
        return result

    def interval(self) -> timedelta:
        """The update interval; zero if none is set."""
        return self.progress_interval if self.progress_interval is not None else timedelta(0)

    def merge(self, other: ProgressOptions) -> None:
        """Fill unset values from ``other``."""
        self.no_progress = self.no_progress or other.no_progress
        if self.progress_interval is None:
            self.progress_interval = other.progress_interval

    def _make(self, kind: ProgressKind, prefix: str) -> Progress:
        if self.no_progress:
            return self.progress_hidden()
        progress = Progress(kind, prefix, output=sys.stderr, interval=self.interval())
        progress._draw(force=True)
        return progress

    def progress_spinner(self, prefix: str) -> Progress:
        return self._make(ProgressKind.SPINNER, prefix)

    def progress_counter(self, prefix: str) -> Progress:
        return self._make(ProgressKind.COUNTER, prefix)

    def progress_bytes(self, prefix: str) -> Progress:
        return self._make(ProgressKind.BYTES, prefix)

    def progress_hidden(self) -> Progress:
        return Progress(ProgressKind.HIDDEN)