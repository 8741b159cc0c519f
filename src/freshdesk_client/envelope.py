"""
Request/response wrappers that can render their body as compact JSON.

Used only for diagnostics when building an APIError. `Response.payload()`
reads the body stream, so it must run before (and instead of) decoding.
"""

from __future__ import annotations

import json
from typing import Any

import requests

_WHITESPACE = frozenset(" \t\n\r")


def compact_json(raw: bytes | str | None) -> str:
    """
    Return `raw` as JSON with insignificant whitespace removed.

    Tokens are kept exactly as sent (no key reordering, no re-escaping).

    Raises:
        ValueError: If `raw` is empty or not valid JSON.
    """
    if raw is None:
        raise ValueError("no body")
    text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
    json.loads(text)

    out: list[str] = []
    in_string = False
    escaped = False
    for ch in text:
        if in_string:
            out.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
            out.append(ch)
        elif ch not in _WHITESPACE:
            out.append(ch)
    return "".join(out)


def _payload(read: Any) -> str:
    try:
        return compact_json(read())
    except (requests.RequestException, RuntimeError, ValueError):
        return ""


class Request:
    """Outbound request built by Client.new_request."""

    def __init__(self, prepared: requests.PreparedRequest) -> None:
        self.prepared = prepared

    @property
    def method(self) -> str | None:
        return self.prepared.method

    @property
    def url(self) -> str | None:
        return self.prepared.url

    @property
    def headers(self) -> Any:
        return self.prepared.headers

    @property
    def body(self) -> bytes | None:
        body = self.prepared.body
        if isinstance(body, str):
            return body.encode("utf-8")
        return body

    def payload(self) -> str:
        """Request body as compact JSON, or "" when there is none or it isn't JSON."""
        return _payload(lambda: self.body)


class Response:
    """Inbound response; wraps a streamed requests.Response."""

    def __init__(self, raw: requests.Response) -> None:
        self.raw = raw

    @property
    def status_code(self) -> int:
        return self.raw.status_code

    @property
    def headers(self) -> Any:
        return self.raw.headers

    def payload(self) -> str:
        """Response body as compact JSON, or "" when unreadable or not JSON. Consumes the body."""
        return _payload(lambda: self.raw.content)

    def json(self) -> Any:
        return json.loads(self.raw.content)
