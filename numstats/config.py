"""Service settings, read once from environment variables."""
from __future__ import annotations

import logging
import os

from numstats.services.numeric import NumericType, numeric_type

LOG_LEVEL = logging.getLevelName(os.environ.get("NUMSTATS_LOG_LEVEL", "INFO").upper())  # Root log level
DEFAULT_TYPE_NAME = os.environ.get("NUMSTATS_DEFAULT_TYPE", "f64")  # Element type when a request omits "type"
MAX_ITEMS = int(os.environ.get("NUMSTATS_MAX_ITEMS", 100_000))  # Max numbers/pairs per request body


def default_type() -> NumericType:
    """Adapter for ``NUMSTATS_DEFAULT_TYPE``; raises ``KeyError`` if it names no type."""
    return numeric_type(DEFAULT_TYPE_NAME)
