from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Final

from text_codecs import DecodeError, parse_int

_LEVEL_NAMES: Final[dict[str, int]] = {
    "DEBUG": -4,
    "INFO": 0,
    "WARN": 4,
    "ERROR": 8,
}


@dataclass(order=True)
class LogLevel:
    """Leveled-log severity; higher values are more severe.

    The zero value is INFO. Levels between the named ones are written as an
    offset from the nearest lower name, e.g. ``WARN+2`` or ``DEBUG-1``.
    """

    value: int = 0

    def unmarshal_text(self, text: bytes) -> None:
        raw = os.fsdecode(text)
        name, offset = raw, 0
        cut = next((index for index, char in enumerate(raw) if char in "+-"), -1)
        if cut >= 0:
            name = raw[:cut]
            try:
                offset = parse_int(raw[cut:])
            except DecodeError:
                raise DecodeError(raw, "LogLevel", "invalid offset") from None
        base = _LEVEL_NAMES.get(name.upper())
        if base is None:
            raise DecodeError(raw, "LogLevel", "unknown name")
        self.value = base + offset

    def marshal_text(self) -> bytes:
        return os.fsencode(str(self))

    def to_logging_level(self) -> int:
        """Map onto the ``logging`` module scale (DEBUG=10 ... ERROR=40)."""
        return logging.INFO + (self.value * 10) // 4

    def __str__(self) -> str:
        if self.value < _LEVEL_NAMES["INFO"]:
            name = "DEBUG"
        elif self.value < _LEVEL_NAMES["WARN"]:
            name = "INFO"
        elif self.value < _LEVEL_NAMES["ERROR"]:
            name = "WARN"
        else:
            name = "ERROR"
        offset = self.value - _LEVEL_NAMES[name]
        return name if offset == 0 else f"{name}{offset:+d}"


DEBUG: Final[LogLevel] = LogLevel(_LEVEL_NAMES["DEBUG"])
INFO: Final[LogLevel] = LogLevel(_LEVEL_NAMES["INFO"])
WARN: Final[LogLevel] = LogLevel(_LEVEL_NAMES["WARN"])
ERROR: Final[LogLevel] = LogLevel(_LEVEL_NAMES["ERROR"])
