"""Selection of snapshots by host, label, paths, tags, time and size."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any

from dateutil import parser as date_parser

from .bytesize import format_bytes, parse_bytes

__all__ = [
    "StringList",
    "SnapshotSummary",
    "Snapshot",
    "SizeRange",
    "AfterDate",
    "BeforeDate",
    "SnapshotFilter",
]

log = logging.getLogger(__name__)

_END_OF_DAY = time(23, 59, 59, 999_999)


@dataclass(frozen=True)
class StringList:
    """An ordered list of distinct strings, written comma separated."""

    items: tuple[str, ...] = ()

    @classmethod
    def parse(cls, text: str) -> StringList:
        items: list[str] = []
        for part in text.split(","):
            if part and part not in items:
                items.append(part)
        return cls(tuple(items))

    def contains_all(self, other: StringList) -> bool:
        """True if every entry of ``other`` is in this list."""
        return all(item in self.items for item in other.items)

    def matches(self, filters: Iterable[StringList]) -> bool:
        """True if no filter is given or this list contains one of the filters."""
        filters = list(filters)
        return not filters or any(self.contains_all(f) for f in filters)

    def __iter__(self) -> Iterator[str]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __str__(self) -> str:
        return ",".join(self.items)


@dataclass(frozen=True)
class SnapshotSummary:
    """Sizes recorded when a snapshot was taken."""

    total_bytes_processed: int = 0
    data_added: int = 0


def _local(moment: datetime) -> datetime:
    return moment.astimezone()


@dataclass
class Snapshot:
    """The properties of a snapshot that filters look at."""

    id: str
    time: datetime
    hostname: str = ""
    label: str = ""
    paths: StringList = field(default_factory=StringList)
    tags: StringList = field(default_factory=StringList)
    summary: SnapshotSummary | None = None


@dataclass(frozen=True)
class SizeRange:
    """An inclusive range of sizes; either bound may be open."""

    lower: int | None = None
    upper: int | None = None

    @staticmethod
    def _parse_size(text: str) -> int | None:
        text = text.strip()
        if not text:
            return None
        return parse_bytes(text)

    @classmethod
    def parse(cls, text: str) -> SizeRange:
        """Parse ``FROM..TO``, ``FROM..``, ``..TO`` or a single lower bound."""
        first, sep, second = text.partition("..")
        if sep:
            return cls(cls._parse_size(first), cls._parse_size(second))
        return cls(cls._parse_size(text), None)

    def matches(self, size: int) -> bool:
        if self.lower is not None and size < self.lower:
            return False
        return not (self.upper is not None and size > self.upper)

    def __str__(self) -> str:
        lower = "" if self.lower is None else format_bytes(self.lower)
        upper = "" if self.upper is None else format_bytes(self.upper)
        return f"{lower}..{upper}"


def _parse_moment(text: str, default_time: time) -> datetime:
    today = date.today()
    try:
        early = date_parser.parse(text, default=datetime.combine(today, time.min))
        late = date_parser.parse(text, default=datetime.combine(today, _END_OF_DAY))
    except (ValueError, OverflowError) as exc:
        raise ValueError(f"cannot parse date/time {text!r}: {exc}") from exc
    if early.hour != late.hour:
        # no time of day given: use the default one
        early = early.replace(
            hour=default_time.hour,
            minute=default_time.minute,
            second=default_time.second,
            microsecond=default_time.microsecond,
        )
    return _local(early)


@dataclass(frozen=True)
class AfterDate:
    """Matches moments strictly after the given one."""

    moment: datetime

    @classmethod
    def parse(cls, text: str) -> AfterDate:
        """Parse a date or date and time; a date alone means its end."""
        return cls(_parse_moment(text, _END_OF_DAY))

    def matches(self, moment: datetime) -> bool:
        return self.moment < _local(moment)

    def __str__(self) -> str:
        return self.moment.isoformat()


@dataclass(frozen=True)
class BeforeDate:
    """Matches moments strictly before the given one."""

    moment: datetime

    @classmethod
    def parse(cls, text: str) -> BeforeDate:
        """Parse a date or date and time; a date alone means its midnight."""
        return cls(_parse_moment(text, time.min))

    def matches(self, moment: datetime) -> bool:
        return _local(moment) < self.moment

    def __str__(self) -> str:
        return self.moment.isoformat()


_PLAIN_LISTS = {
    "filter-hosts": "filter_hosts",
    "filter-labels": "filter_labels",
}
_STRING_LISTS = {
    "filter-paths": "filter_paths",
    "filter-paths-exact": "filter_paths_exact",
    "filter-tags": "filter_tags",
    "filter-tags-exact": "filter_tags_exact",
}
_OPTIONS: dict[str, tuple[str, Callable[[str], Any]]] = {
    "filter-after": ("filter_after", AfterDate.parse),
    "filter-before": ("filter_before", BeforeDate.parse),
    "filter-size": ("filter_size", SizeRange.parse),
    "filter-size-added": ("filter_size_added", SizeRange.parse),
}


def _string_items(key: str, value: Any) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"{key} must be a list of strings")
    return list(value)


@dataclass
class SnapshotFilter:
    """Conditions a snapshot has to meet; empty conditions match everything."""

    filter_hosts: list[str] = field(default_factory=list)
    filter_labels: list[str] = field(default_factory=list)
    filter_paths: list[StringList] = field(default_factory=list)
    filter_paths_exact: list[StringList] = field(default_factory=list)
    filter_tags: list[StringList] = field(default_factory=list)
    filter_tags_exact: list[StringList] = field(default_factory=list)
    filter_after: AfterDate | None = None
    filter_before: BeforeDate | None = None
    filter_size: SizeRange | None = None
    filter_size_added: SizeRange | None = None
    filter_fn: Callable[[Snapshot], bool] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SnapshotFilter:
        if "filter-fn" in data:
            raise ValueError("filter-fn can only be given as a callable")
        known = set(_PLAIN_LISTS) | set(_STRING_LISTS) | set(_OPTIONS)
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"unknown filter fields: {', '.join(sorted(unknown))}")
        values: dict[str, Any] = {}
        for key, attr in _PLAIN_LISTS.items():
            if key in data:
                values[attr] = _string_items(key, data[key])
        for key, attr in _STRING_LISTS.items():
            if key in data:
                values[attr] = [StringList.parse(v) for v in _string_items(key, data[key])]
        for key, (attr, parse) in _OPTIONS.items():
            if key in data:
                values[attr] = parse(str(data[key]))
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key, attr in _PLAIN_LISTS.items():
            result[key] = list(getattr(self, attr))
        for key, attr in _STRING_LISTS.items():
            result[key] = [str(v) for v in getattr(self, attr)]
        for key, (attr, _) in _OPTIONS.items():
            value = getattr(self, attr)
            if value is not None:
                result[key] = str(value)
        return result

    def merge(self, other: SnapshotFilter) -> None:
        """Take lists from ``other`` where the own ones are empty, options where unset."""
        for attr in (*_PLAIN_LISTS.values(), *_STRING_LISTS.values()):
            if not getattr(self, attr):
                setattr(self, attr, list(getattr(other, attr)))
        for attr in (*(a for a, _ in _OPTIONS.values()), "filter_fn"):
            if getattr(self, attr) is None:
                setattr(self, attr, getattr(other, attr))

    def matches(self, snapshot: Snapshot) -> bool:
        """True if the snapshot meets every condition."""
        if self.filter_fn is not None:
            try:
                if not self.filter_fn(snapshot):
                    return False
            except Exception as exc:  # a broken filter function must not stop listing
                log.warning("Error evaluating filter-fn for snapshot %s: %s", snapshot.id, exc)

        if self.filter_after is not None and not self.filter_after.matches(snapshot.time):
            return False
        if self.filter_before is not None and not self.filter_before.matches(snapshot.time):
            return False
        summary = snapshot.summary
        if summary is not None:
            if self.filter_size is not None and not self.filter_size.matches(
                summary.total_bytes_processed
            ):
                return False
            if self.filter_size_added is not None and not self.filter_size_added.matches(
                summary.data_added
            ):
                return False

        return (
            snapshot.paths.matches(self.filter_paths)
            and snapshot.tags.matches(self.filter_tags)
            and (not self.filter_paths_exact or snapshot.paths in self.filter_paths_exact)
            and (not self.filter_tags_exact or snapshot.tags in self.filter_tags_exact)
            and (not self.filter_hosts or snapshot.hostname in self.filter_hosts)
            and (not self.filter_labels or snapshot.label in self.filter_labels)
        )