"""
Freshdesk v2 API client: request building, execution and status checking.

Every resource operation is `new_request` followed by `execute` with the one
status code the endpoint answers with on success. Any other status raises
APIError; transport failures from the retrying session propagate unchanged.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

import requests
from requests.auth import HTTPBasicAuth

from freshdesk_client.contacts import ContactsClient, HTTPContactsClient
from freshdesk_client.envelope import Request, Response
from freshdesk_client.errors import APIError, DecodeError
from freshdesk_client.transport import new_retrying_session
from freshdesk_client.utils.config import freshdesk_api_key, freshdesk_subdomain
from freshdesk_client.utils.logger import get_logger


BASE_URL_TEMPLATE = "https://{subdomain}.freshdesk.com/api/v2/"
# Freshdesk ignores the password when the username is an API key.
API_KEY_PASSWORD = "X"


class Client:
    """
    Entry point for the Freshdesk API.

    Holds the base URL, the API key and the HTTP session for its whole
    lifetime; none of them change after construction. The session is the
    retrying transport unless another one is injected.
    """

    def __init__(
        self,
        subdomain: str,
        api_key: str,
        logger: logging.Logger | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._logger = logger or get_logger()
        self._api_key = api_key
        self._base_url = BASE_URL_TEMPLATE.format(subdomain=subdomain)
        self._session = session if session is not None else new_retrying_session(logger=self._logger)

        self._contacts = HTTPContactsClient(self)

    @classmethod
    def from_env(cls, logger: logging.Logger | None = None) -> Client:
        """Build a client from FRESHDESK_SUBDOMAIN and FRESHDESK_API_KEY."""
        return cls(freshdesk_subdomain(), freshdesk_api_key(), logger=logger)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def contacts(self) -> ContactsClient:
        return self._contacts

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def new_request(self, method: str, path: str, body: Any = None) -> Request:
        """
        Build an authenticated JSON request for `path` relative to the base URL.

        `body` is JSON-encoded unless it is None (sent as an empty body) or
        already bytes (sent as-is).

        Raises:
            TypeError, ValueError: If `body` cannot be encoded as JSON.
        """
        if body is None:
            data = b""
        elif isinstance(body, bytes):
            data = body
        else:
            data = json.dumps(body).encode("utf-8")

        prepared = requests.Request(
            method=method,
            url=self._base_url + path,
            data=data,
            headers={"Content-Type": "application/json"},
            auth=HTTPBasicAuth(self._api_key, API_KEY_PASSWORD),
        ).prepare()
        return Request(prepared)

    def execute(
        self,
        request: Request,
        expected_status: int,
        decode: Callable[[Any], Any] | None = None,
    ) -> Any:
        """
        Send `request` and check the response status.

        Returns `decode(parsed_json_body)` when `decode` is given, else None
        (the body is not read).

        Raises:
            requests.RequestException: Transport failure or retries exhausted.
            APIError: Response status differs from `expected_status`.
            DecodeError: Status matched but the body did not decode.
        """
        self._logger.debug("%s %s", request.method, request.url)
        with self._session.send(request.prepared, stream=True) as raw:
            res = Response(raw)
            if res.status_code != expected_status:
                err = APIError(
                    res.status_code,
                    expected_status,
                    request.payload(),
                    res.payload(),
                )
                self._logger.warning("%s %s failed: %s", request.method, request.url, err.message)
                raise err

            self._logger.debug("%s %s -> %s", request.method, request.url, res.status_code)
            if decode is None:
                return None
            try:
                return decode(res.json())
            except (ValueError, TypeError, KeyError, AttributeError) as e:
                raise DecodeError(
                    f"could not decode {request.method} {request.url} response: {e}"
                ) from e
