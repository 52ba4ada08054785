"""Logging setup for command-line entry points.

Library modules only create loggers; handlers are installed here, by the
application, never on import.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "WARNING") -> None:
    """Configure the root logger.

    Args:
        level: Logging level name, e.g. ``"DEBUG"``.
    """
    logging.basicConfig(level=getattr(logging, level.upper()), format=LOG_FORMAT)
