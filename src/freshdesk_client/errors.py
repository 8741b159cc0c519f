"""
Errors raised by the Freshdesk client.

APIError is raised whenever a response status differs from the one the
operation expects. It keeps both raw payloads for diagnosis and, when the
response body follows Freshdesk's error shape, the decoded description and
field errors:

    {"description": "Validation failed",
     "errors": [{"field": "email", "code": "duplicate_value",
                 "message": "...", "additional_info": {"user_id": 42}}]}
"""

from __future__ import annotations

import dataclasses
import json
import math
from dataclasses import dataclass
from typing import Any

DUPLICATE_FIELD = "email"
DUPLICATE_CODE = "duplicate_value"


class DecodeError(ValueError):
    """Status matched, but the response body did not decode into the expected shape."""


@dataclass(frozen=True)
class FieldError:
    """One server-reported problem with a specific resource attribute."""

    field: str = ""
    message: str = ""
    code: str = ""
    additional_info: dict[str, Any] = dataclasses.field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FieldError:
        info = data.get("additional_info")
        return cls(
            field=_str_or_empty(data.get("field")),
            message=_str_or_empty(data.get("message")),
            code=_str_or_empty(data.get("code")),
            additional_info=info if isinstance(info, dict) else {},
        )


def _str_or_empty(value: Any) -> str:
    return value if isinstance(value, str) else ""


class APIError(Exception):
    """
    Response status did not match the expected one.

    Construction never fails: the response payload is decoded onto
    `description` and `errors` on a best-effort basis, and a payload that is
    not JSON (or not Freshdesk's error shape) just leaves them empty.
    """

    def __init__(
        self,
        status_code: int,
        expected_status: int,
        req_body: str = "",
        res_body: str = "",
    ) -> None:
        self.message = f"received status code {status_code} ({expected_status} expected)"
        self.status_code = status_code
        self.expected_status = expected_status
        self.req_body = req_body
        self.res_body = res_body
        self.description: str | None = None
        self.errors: list[FieldError] = []
        super().__init__(self.message)
        self._enrich(res_body)

    def _enrich(self, res_body: str) -> None:
        try:
            # Numbers in the error body are dynamic values: keep them as floats.
            data = json.loads(res_body, parse_int=float)
        except (TypeError, ValueError):
            return
        if not isinstance(data, dict):
            return

        description = data.get("description")
        if isinstance(description, str):
            self.description = description

        errors = data.get("errors")
        if isinstance(errors, list):
            self.errors = [FieldError.from_dict(e) for e in errors if isinstance(e, dict)]

    def __str__(self) -> str:
        return f"{self.message} - {self.res_body}"

    def is_duplicate(self) -> tuple[bool, int]:
        """
        Report whether the server rejected the contact because its email is taken.

        The first `email`/`duplicate_value` field error decides: it yields
        `(True, user_id)` of the contact that already owns the address when
        `additional_info.user_id` is a number, and `(False, 0)` otherwise.
        """
        for err in self.errors:
            if err.field == DUPLICATE_FIELD and err.code == DUPLICATE_CODE:
                user_id = err.additional_info.get("user_id")
                if user_id is None or isinstance(user_id, bool):
                    return False, 0
                if not isinstance(user_id, (int, float)) or not math.isfinite(user_id):
                    return False, 0
                return True, int(user_id)
        return False, 0
