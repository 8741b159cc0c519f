"""
Retrying HTTP transport.

A requests.Session with an HTTPAdapter whose urllib3 Retry policy handles
connection errors and 429/5xx responses with exponential backoff. The client
never retries on its own; it only calls `session.send`.
"""

from __future__ import annotations

import logging
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from freshdesk_client.utils.config import (
    freshdesk_backoff_factor,
    freshdesk_backoff_max,
    freshdesk_max_retries,
)
from freshdesk_client.utils.logger import get_logger

RETRY_STATUSES = (429, 500, 502, 503, 504)


class LoggingRetry(Retry):
    """Retry that reports every failed attempt to the client's logger."""

    def __init__(self, *args: Any, logger: logging.Logger | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.logger = logger or get_logger("transport")

    def new(self, **kw: Any) -> LoggingRetry:
        retry = super().new(**kw)
        retry.logger = self.logger
        return retry

    def increment(
        self,
        method: str | None = None,
        url: str | None = None,
        response: Any = None,
        error: Exception | None = None,
        _pool: Any = None,
        _stacktrace: Any = None,
    ) -> Retry:
        cause = error if error is not None else getattr(response, "status", None)
        self.logger.warning(
            "%s %s attempt %d failed (%s)",
            method,
            url,
            len(self.history) + 1,
            cause,
        )
        return super().increment(method, url, response, error, _pool, _stacktrace)


def build_retry(
    max_retries: int,
    backoff_factor: float,
    backoff_max: float,
    logger: logging.Logger | None = None,
) -> LoggingRetry:
    """Retry policy: every method, honour Retry-After, raise once exhausted."""
    return LoggingRetry(
        total=max_retries,
        backoff_factor=backoff_factor,
        backoff_max=backoff_max,
        status_forcelist=RETRY_STATUSES,
        allowed_methods=None,
        respect_retry_after_header=True,
        raise_on_status=True,
        logger=logger,
    )


def new_retrying_session(
    max_retries: int | None = None,
    backoff_factor: float | None = None,
    backoff_max: float | None = None,
    logger: logging.Logger | None = None,
) -> requests.Session:
    """
    Create a requests session with retry logic.

    Unset arguments come from configuration (FRESHDESK_MAX_RETRIES,
    FRESHDESK_BACKOFF_FACTOR, FRESHDESK_BACKOFF_MAX). Retry attempts are
    logged to `logger`.
    """
    log = logger or get_logger("transport")
    retry = build_retry(
        max_retries if max_retries is not None else freshdesk_max_retries(),
        backoff_factor if backoff_factor is not None else freshdesk_backoff_factor(),
        backoff_max if backoff_max is not None else freshdesk_backoff_max(),
        logger=log,
    )
    session = requests.Session()
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    log.debug(
        "HTTP session ready (retries=%s, backoff_factor=%s, backoff_max=%s)",
        retry.total,
        retry.backoff_factor,
        retry.backoff_max,
    )
    return session
