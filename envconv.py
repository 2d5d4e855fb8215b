from __future__ import annotations

import logging
import os
import warnings
from datetime import timedelta
from typing import Callable, Mapping, Optional, TypeVar

from log_levels import LogLevel
from text_codecs import TextUnmarshaler, parse_bool, parse_duration, parse_float, parse_int

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U", bound=TextUnmarshaler)


def lookup_env(name: str, environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """``None`` means unset; an empty value comes back as ``""``."""
    source = os.environ if environ is None else environ
    return source.get(name)


def _read_env(
    name: str,
    default: T,
    parse: Callable[[str], T],
    type_name: str,
    environ: Optional[Mapping[str, str]],
) -> T:
    raw = lookup_env(name, environ)
    if raw is None:
        return default
    try:
        return parse(raw)
    except ValueError:
        logger.debug("envconv_fallback name=%s type=%s", name, type_name)
        return default


def get_bool(name: str, default: bool, *, environ: Optional[Mapping[str, str]] = None) -> bool:
    return _read_env(name, default, parse_bool, "bool", environ)


def get_int(name: str, default: int, *, environ: Optional[Mapping[str, str]] = None) -> int:
    return _read_env(name, default, parse_int, "int", environ)


def get_float(name: str, default: float, *, environ: Optional[Mapping[str, str]] = None) -> float:
    return _read_env(name, default, parse_float, "float", environ)


def get_duration(
    name: str,
    default: timedelta,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> timedelta:
    return _read_env(name, default, parse_duration, "duration", environ)


def get_string(name: str, default: str, *, environ: Optional[Mapping[str, str]] = None) -> str:
    raw = lookup_env(name, environ)
    return default if raw is None else raw


def get_text_unmarshaler(name: str, default: U, *, environ: Optional[Mapping[str, str]] = None) -> U:
    """Decode into a fresh ``type(default)()``; the default is never mutated."""
    raw = lookup_env(name, environ)
    if raw is None:
        return default
    result = type(default)()
    try:
        result.unmarshal_text(os.fsencode(raw))
    except ValueError:
        logger.debug("envconv_fallback name=%s type=%s", name, type(default).__name__)
        return default
    return result


def get_log_level(name: str, default: LogLevel, *, environ: Optional[Mapping[str, str]] = None) -> LogLevel:
    """Deprecated: use ``get_text_unmarshaler`` instead."""
    warnings.warn(
        "get_log_level is deprecated; use get_text_unmarshaler instead",
        DeprecationWarning,
        stacklevel=2,
    )
    return get_text_unmarshaler(name, default, environ=environ)
