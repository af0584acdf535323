"""Logger factory for interview_agent modules."""

import logging
import os
import sys
from typing import Optional

_FORMAT = "%(asctime)s  [%(levelname)s]  %(name)s — %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _default_level() -> int:
    level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Return a logger writing to stdout as ``time  [LEVEL]  name — message``.

    The handler is attached once per logger name, so repeated calls from the
    same module do not duplicate output.  *level* defaults to ``LOG_LEVEL``
    from the environment (INFO when unset or unknown).
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
        logger.addHandler(handler)
        logger.propagate = False

    logger.setLevel(level if level is not None else _default_level())
    return logger
