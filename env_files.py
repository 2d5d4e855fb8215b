from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from dotenv import dotenv_values, find_dotenv

logger = logging.getLogger(__name__)


def read_env_file(path: Optional[Union[str, Path]] = None, encoding: str = "utf-8") -> dict[str, str]:
    """Read a ``.env`` file into a plain mapping without touching ``os.environ``.

    With no ``path`` the nearest ``.env`` at or above the working directory is
    used. Values are kept raw (no ``${VAR}`` expansion) and keys written
    without ``=`` are dropped. A missing file gives an empty mapping, which
    the ``envconv.get_*`` functions treat as "everything unset".
    """
    if path is None:
        path = find_dotenv(usecwd=True)
        if not path:
            logger.debug("env_file_missing path=<search>")
            return {}
    env_path = Path(path)
    if not env_path.is_file():
        logger.debug("env_file_missing path=%s", env_path)
        return {}
    values = dotenv_values(env_path, interpolate=False, encoding=encoding)
    return {key: value for key, value in values.items() if value is not None}
