"""Parsing and formatting of human readable byte sizes."""

from __future__ import annotations

import re

__all__ = ["parse_bytes", "format_bytes"]

_KB = 1000
_KIB = 1024

_UNITS: dict[str, int] = {
    "": 1,
    "b": 1,
    "k": _KB,
    "kb": _KB,
    "ki": _KIB,
    "kib": _KIB,
    "m": _KB**2,
    "mb": _KB**2,
    "mi": _KIB**2,
    "mib": _KIB**2,
    "g": _KB**3,
    "gb": _KB**3,
    "gi": _KIB**3,
    "gib": _KIB**3,
    "t": _KB**4,
    "tb": _KB**4,
    "ti": _KIB**4,
    "tib": _KIB**4,
    "p": _KB**5,
    "pb": _KB**5,
    "pi": _KIB**5,
    "pib": _KIB**5,
}

_PREFIXES = "KMGTPE"
_NUMBER = re.compile(r"[0-9.]*")
_DIGITS = re.compile(r"[0-9]+")


def parse_bytes(text: str) -> int:
    """Parse a size such as ``10``, ``10k``, ``1 MB`` or ``1.5 GiB`` into bytes.

    Decimal units (k, M, G, ...) are powers of 1000, binary units
    (Ki, Mi, Gi, ...) powers of 1024. Units are case-insensitive.
    """
    value = text.strip()
    number = _NUMBER.match(value).group()
    try:
        amount = float(number)
    except ValueError:
        raise ValueError(f"couldn't parse {number!r} into a number") from None
    suffix = value[len(number):].lstrip()
    unit = _UNITS.get(suffix.lower())
    if unit is None:
        raise ValueError(f"couldn't parse {suffix!r} into a known SI unit")
    if _DIGITS.fullmatch(number):
        return int(number) * unit
    return int(amount * unit)


def format_bytes(size: int) -> str:
    """Format a number of bytes using binary prefixes, e.g. ``1.5 KiB``."""
    if size < 0:
        raise ValueError("size must not be negative")
    if size < _KIB:
        return f"{size} B"
    exp = 1
    while exp < len(_PREFIXES) and _KIB ** (exp + 1) <= size:
        exp += 1
    return f"{size / _KIB**exp:.1f} {_PREFIXES[exp - 1]}iB"