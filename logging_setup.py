from __future__ import annotations

import logging
from typing import Mapping, Optional

from envconv import get_text_unmarshaler
from log_levels import INFO, LogLevel

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def configure_logging(
    name: str = "LOG_LEVEL",
    default: LogLevel = INFO,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> LogLevel:
    """Configure root logging from the level named by ``name``; returns that level."""
    level = get_text_unmarshaler(name, default, environ=environ)
    logging.basicConfig(level=level.to_logging_level(), format=LOG_FORMAT)
    return level
