from __future__ import annotations

import math
import re
from datetime import timedelta
from typing import Final, Protocol, runtime_checkable

INT64_MIN: Final[int] = -(1 << 63)
INT64_MAX: Final[int] = (1 << 63) - 1

_TRUE_TOKENS: Final[frozenset[str]] = frozenset({"1", "t", "true"})
_FALSE_TOKENS: Final[frozenset[str]] = frozenset({"0", "f", "false"})

_INT_PATTERN = re.compile(r"[+-]?[0-9]+", re.ASCII)

NANOSECOND: Final[int] = 1
MICROSECOND: Final[int] = 1000 * NANOSECOND
MILLISECOND: Final[int] = 1000 * MICROSECOND
SECOND: Final[int] = 1000 * MILLISECOND
MINUTE: Final[int] = 60 * SECOND
HOUR: Final[int] = 60 * MINUTE

_DURATION_UNITS: Final[dict[str, int]] = {
    "ns": NANOSECOND,
    "us": MICROSECOND,
    "µs": MICROSECOND,  # micro sign
    "μs": MICROSECOND,  # greek small letter mu
    "ms": MILLISECOND,
    "s": SECOND,
    "m": MINUTE,
    "h": HOUR,
}
_DURATION_TERM = re.compile(r"([0-9]*)(?:\.([0-9]*))?([^0-9.]*)", re.ASCII)
# Digits past this point cannot move the result by a whole nanosecond.
_MAX_FRACTION_DIGITS: Final[int] = 30


class DecodeError(ValueError):
    """Raised when text does not match the grammar of the target type."""

    def __init__(self, text: str, target: str, reason: str = "invalid syntax") -> None:
        super().__init__(f"{target}: {reason}: {text!r}")
        self.text = text
        self.target = target
        self.reason = reason


@runtime_checkable
class TextUnmarshaler(Protocol):
    """Populates itself in place from raw text; raises ValueError on bad input."""

    def unmarshal_text(self, text: bytes) -> None:
        ...


def parse_bool(text: str) -> bool:
    token = text.lower()
    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    raise DecodeError(text, "bool")


def format_bool(value: bool) -> str:
    return "true" if value else "false"


def parse_int(text: str) -> int:
    if not _INT_PATTERN.fullmatch(text):
        raise DecodeError(text, "int")
    digits = text.lstrip("+-").lstrip("0")
    if len(digits) > 19:
        raise DecodeError(text, "int", "value out of range")
    value = int(digits or "0")
    if text.startswith("-"):
        value = -value
    if value < INT64_MIN or value > INT64_MAX:
        raise DecodeError(text, "int", "value out of range")
    return value


def parse_float(text: str) -> float:
    if not text or not text.isascii() or text != text.strip() or "_" in text:
        raise DecodeError(text, "float")
    try:
        value = float(text)
    except ValueError:
        raise DecodeError(text, "float") from None
    if math.isinf(value) and "inf" not in text.lower():
        raise DecodeError(text, "float", "value out of range")
    return value


def parse_duration(text: str) -> timedelta:
    """Parse ``300ms``, ``-1.5h`` or ``2h45m``; nanoseconds are truncated toward zero."""
    rest = text
    negative = False
    if rest[:1] in ("+", "-"):
        negative = rest[0] == "-"
        rest = rest[1:]
    if rest == "0":
        return timedelta(0)
    if not rest:
        raise DecodeError(text, "duration")

    total = 0
    pos = 0
    while pos < len(rest):
        match = _DURATION_TERM.match(rest, pos)
        whole, fraction, unit_name = match.groups()
        pos = match.end()
        if not whole and not fraction:
            raise DecodeError(text, "duration")
        if not unit_name:
            raise DecodeError(text, "duration", "missing unit")
        unit = _DURATION_UNITS.get(unit_name)
        if unit is None:
            raise DecodeError(text, "duration", f"unknown unit {unit_name!r}")

        whole = whole.lstrip("0")
        if len(whole) > 19:
            raise DecodeError(text, "duration", "value out of range")
        nanos = int(whole or "0") * unit
        if fraction:
            fraction = fraction[:_MAX_FRACTION_DIGITS]
            nanos += int(fraction) * unit // 10 ** len(fraction)
        total += nanos
        if total > 1 << 63:
            raise DecodeError(text, "duration", "value out of range")

    if not negative and total > INT64_MAX:
        raise DecodeError(text, "duration", "value out of range")
    value = timedelta(microseconds=total // MICROSECOND)
    return -value if negative else value


def _fraction_digits(value: int, precision: int) -> str:
    digits = f"{value:0{precision}d}".rstrip("0")
    return f".{digits}" if digits else ""


def format_duration(value: timedelta) -> str:
    nanos = ((value.days * 86400 + value.seconds) * 1_000_000 + value.microseconds) * MICROSECOND
    if nanos == 0:
        return "0s"
    sign = "-" if nanos < 0 else ""
    nanos = abs(nanos)

    if nanos < SECOND:
        if nanos < MICROSECOND:
            return f"{sign}{nanos}ns"
        if nanos < MILLISECOND:
            whole, rem = divmod(nanos, MICROSECOND)
            return f"{sign}{whole}{_fraction_digits(rem, 3)}µs"
        whole, rem = divmod(nanos, MILLISECOND)
        return f"{sign}{whole}{_fraction_digits(rem, 6)}ms"

    seconds, rem = divmod(nanos, SECOND)
    text = f"{seconds % 60}{_fraction_digits(rem, 9)}s"
    minutes = seconds // 60
    if minutes:
        text = f"{minutes % 60}m{text}"
        hours = minutes // 60
        if hours:
            text = f"{hours}h{text}"
    return sign + text
