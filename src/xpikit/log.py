"""Logging setup for command-line use.

Library modules only create loggers; handlers are installed here, and only
when the CLI asks for them.
"""

from __future__ import annotations

import logging

LOGGER_NAME = "xpikit"
_HANDLER_NAME = "xpikit-stderr"


def configure_logging(level: int | str = logging.WARNING) -> logging.Logger:
    """Attach a stderr handler to the package logger.

    Any handler from an earlier call is replaced, so the package logger
    always has exactly one.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger.setLevel(level)

    for old in [h for h in logger.handlers if h.get_name() == _HANDLER_NAME]:
        logger.removeHandler(old)
        old.close()

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
