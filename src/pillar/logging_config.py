"""Opt-in logging setup for applications using pillar.

Library modules only create loggers under the ``pillar`` namespace; nothing
is configured on import. Applications that want to see module load
notifications call :func:`configure_logging` once at start-up.
"""

import logging
import os
from typing import Optional, Union

__all__ = ["configure_logging"]

_DEFAULT_LEVEL = "INFO"
_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"
_HANDLER_NAME = "pillar"


def configure_logging(
    level: Optional[Union[str, int]] = None,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
) -> logging.Logger:
    """Attach a stream handler to the ``pillar`` logger.

    Calling this again replaces the handler rather than adding another.

    Environment overrides, used when the matching argument is omitted:
    - `PILLAR_LOG_LEVEL`
    - `PILLAR_LOG_FORMAT`
    - `PILLAR_LOG_DATEFMT`

    Returns:
        The configured ``pillar`` logger.
    """
    if level is None:
        level = os.getenv("PILLAR_LOG_LEVEL", _DEFAULT_LEVEL)
    if isinstance(level, str):
        level = level.upper()
    fmt = fmt or os.getenv("PILLAR_LOG_FORMAT", _DEFAULT_FORMAT)
    datefmt = datefmt or os.getenv("PILLAR_LOG_DATEFMT", _DEFAULT_DATEFMT)

    logger = logging.getLogger("pillar")
    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(fmt, datefmt))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
