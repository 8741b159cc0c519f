"""
Logging for the Freshdesk client.

Everything logs under the ``freshdesk_client`` namespace: the client itself on
the root of it, retry attempts on ``freshdesk_client.transport``. The library
never attaches handlers on import; scripts call `setup_logger` once.
"""

import logging
import sys
from typing import Optional, TextIO

LOGGER_NAME = "freshdesk_client"


def setup_logger(level: int = logging.INFO, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Attach a single stream handler to the client's logger namespace.

    Child loggers (transport retries) propagate to it. Calling this again only
    updates the level.
    """
    log = logging.getLogger(LOGGER_NAME)
    log.setLevel(level)
    if log.handlers:
        return log

    h = logging.StreamHandler(stream or sys.stderr)
    h.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    log.addHandler(h)
    return log


def get_logger(component: Optional[str] = None) -> logging.Logger:
    """Return the client logger, or the child logger for `component`."""
    if component:
        return logging.getLogger(f"{LOGGER_NAME}.{component}")
    return logging.getLogger(LOGGER_NAME)
