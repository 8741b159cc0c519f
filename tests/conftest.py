"""Shared fixtures: a Client wired to a mocked session, and response builders."""

from __future__ import annotations

import io
import json
from typing import Any, Callable
from unittest.mock import MagicMock

import pytest
import requests

from freshdesk_client import Client


def make_response(status: int, body: Any = b"") -> requests.Response:
    """Build a streamed-style requests.Response without touching the network."""
    if isinstance(body, (dict, list)):
        body = json.dumps(body)
    if isinstance(body, str):
        body = body.encode("utf-8")
    r = requests.Response()
    r.status_code = status
    r.raw = io.BytesIO(body)
    r.headers["Content-Type"] = "application/json"
    r.close = MagicMock()
    return r


@pytest.fixture
def session() -> MagicMock:
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session: MagicMock) -> Client:
    return Client("acme", "secret-key", session=session)


@pytest.fixture
def respond(session: MagicMock) -> Callable[..., requests.Response]:
    """Make the mocked session answer the next request with (status, body)."""

    def _respond(status: int, body: Any = b"") -> requests.Response:
        r = make_response(status, body)
        session.send.return_value = r
        return r

    return _respond


def sent_request(session: MagicMock) -> requests.PreparedRequest:
    """The PreparedRequest passed to the last session.send call."""
    return session.send.call_args[0][0]
