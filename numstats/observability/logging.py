"""Process-wide logging setup for the statistics service."""
from __future__ import annotations

import logging
import sys

from numstats.config import LOG_LEVEL

LOG_FORMAT = '[%(asctime)s] [%(process)d] [%(levelname)s] %(name)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S %z'
# uvicorn installs its own handlers; fold them into ours
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

_configured = False


def _stdout_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(level: int | str = LOG_LEVEL) -> None:
    """Send every log record of the process to stdout at ``level``.

    Only the first call has an effect, so building several apps in one
    process (as the tests do) keeps a single handler.
    """
    global _configured
    if _configured:
        return

    root = logging.getLogger()
    root.handlers[:] = [_stdout_handler()]
    root.setLevel(level)

    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True
        server_logger.setLevel(level)

    _configured = True
