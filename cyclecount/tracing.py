from __future__ import annotations

import logging
from typing import IO

_LOGGER_NAME = "cyclecount"
_HANDLER_NAME = "cyclecount.tracing"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _find_handler(logger: logging.Logger) -> logging.StreamHandler | None:
    for handler in logger.handlers:
        if isinstance(handler, logging.StreamHandler) and handler.get_name() == _HANDLER_NAME:
            return handler
    return None


def init_tracing(level: int | str = logging.DEBUG, stream: IO[str] | None = None) -> None:
    """Route the package's log records to ``stream`` (stderr by default).

    The package is silent until this is called. The handler is attached
    once; later calls update the level and, when ``stream`` is given,
    redirect the existing handler to it.
    """

    logger = logging.getLogger(_LOGGER_NAME)
    handler = _find_handler(logger)
    if handler is None:
        handler = logging.StreamHandler(stream)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    elif stream is not None:
        handler.setStream(stream)
    logger.setLevel(level)
