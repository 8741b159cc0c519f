"""
Contacts resource: Contact and ContactField records plus the contacts API.

See https://developers.freshdesk.com/api/#contacts
"""

from __future__ import annotations

import hashlib
import json
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

if TYPE_CHECKING:
    from freshdesk_client.client import Client

HTTP_OK = 200
HTTP_CREATED = 201
HTTP_NO_CONTENT = 204

_FRACTION = re.compile(r"\.(\d+)")


def _parse_time(value: Any) -> datetime | None:
    if not value:
        return None
    text = str(value).replace("Z", "+00:00")
    # fromisoformat only takes 3 or 6 fractional digits before Python 3.11
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    return datetime.fromisoformat(text)


def _format_time(value: datetime) -> str:
    return value.isoformat().replace("+00:00", "Z")


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

# Optional Contact attributes, in wire order; omitted from the JSON when None.
_CONTACT_OPTIONAL_HEAD = ("id", "unique_external_id")
_CONTACT_OPTIONAL_TAIL = (
    "job_title",
    "description",
    "address",
    "email",
    "other_emails",
    "phone",
    "mobile",
    "other_phone_numbers",
    "twitter_id",
    "time_zone",
    "language",
    "company_id",
    "other_companies",
    "tags",
    "custom_fields",
)


@dataclass(frozen=True)
class Contact:
    id: int | None = None
    unique_external_id: str | None = None
    # True once the contact has been verified
    active: bool = False
    # Only present on soft-deleted contacts
    deleted: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    # Contact can see every ticket of the company they belong to
    view_all_tickets: bool = False
    name: str = ""
    job_title: str | None = None
    description: str | None = None
    address: str | None = None
    # Primary email; additional ones go in other_emails
    email: str | None = None
    other_emails: list[str] | None = None
    phone: str | None = None
    mobile: str | None = None
    other_phone_numbers: list[dict[str, str]] | None = None
    twitter_id: str | None = None
    time_zone: str | None = None
    language: str | None = None
    company_id: str | None = None
    other_companies: list[dict[str, str]] | None = None
    tags: list[str] | None = None
    # Custom field name -> value
    custom_fields: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Contact:
        return cls(
            id=data.get("id"),
            unique_external_id=data.get("unique_external_id"),
            active=bool(data.get("active", False)),
            deleted=bool(data.get("deleted", False)),
            created_at=_parse_time(data.get("created_at")),
            updated_at=_parse_time(data.get("updated_at")),
            view_all_tickets=bool(data.get("view_all_tickets", False)),
            name=data.get("name") or "",
            **{k: data.get(k) for k in _CONTACT_OPTIONAL_TAIL},
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for k in _CONTACT_OPTIONAL_HEAD:
            if getattr(self, k) is not None:
                out[k] = getattr(self, k)
        out["active"] = self.active
        if self.deleted:
            out["deleted"] = True
        if self.created_at is not None:
            out["created_at"] = _format_time(self.created_at)
        if self.updated_at is not None:
            out["updated_at"] = _format_time(self.updated_at)
        out["view_all_tickets"] = self.view_all_tickets
        out["name"] = self.name
        for k in _CONTACT_OPTIONAL_TAIL:
            if getattr(self, k) is not None:
                out[k] = getattr(self, k)
        return out

    def fingerprint(self) -> str:
        """MD5 hex digest of the compact, key-sorted JSON encoding. For change detection only."""
        encoded = json.dumps(self.to_dict(), separators=(",", ":"), sort_keys=True, ensure_ascii=False)
        return hashlib.md5(encoded.encode("utf-8"), usedforsecurity=False).hexdigest()


@dataclass(frozen=True)
class ContactField:
    id: int = 0
    name: str = ""
    # Label seen by agents
    label: str = ""
    position: int = 0
    # False for custom fields
    default: bool = False
    # For custom fields: custom_date, custom_text, ...
    type: str = ""
    editable_in_signup: bool = False
    customers_can_edit: bool = False
    label_for_customers: str = ""
    required_for_customers: bool = False
    displayed_for_customers: bool = False
    required_for_agents: bool = False
    choices: Any = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ContactField:
        return cls(
            id=data.get("id") or 0,
            name=data.get("name") or "",
            label=data.get("label") or "",
            position=data.get("position") or 0,
            default=bool(data.get("default", False)),
            type=data.get("type") or "",
            editable_in_signup=bool(data.get("editable_in_signup", False)),
            customers_can_edit=bool(data.get("customers_can_edit", False)),
            label_for_customers=data.get("label_for_customers") or "",
            required_for_customers=bool(data.get("required_for_customers", False)),
            displayed_for_customers=bool(data.get("displayed_for_customers", False)),
            required_for_agents=bool(data.get("required_for_agents", False)),
            choices=data.get("choices"),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "editable_in_signup": self.editable_in_signup,
            "id": self.id,
            "label": self.label,
            "name": self.name,
            "position": self.position,
            "default": self.default,
            "type": self.type,
            "customers_can_edit": self.customers_can_edit,
            "label_for_customers": self.label_for_customers,
            "required_for_customers": self.required_for_customers,
            "displayed_for_customers": self.displayed_for_customers,
            "required_for_agents": self.required_for_agents,
        }
        if self.choices is not None:
            out["choices"] = self.choices
        return out


def _contact(data: Any) -> Contact:
    return Contact.from_dict(data)


def _contact_list(data: Any) -> list[Contact]:
    if not isinstance(data, list):
        raise TypeError(f"expected a JSON array, got {type(data).__name__}")
    return [Contact.from_dict(d) for d in data]


def _contact_field_list(data: Any) -> list[ContactField]:
    if not isinstance(data, list):
        raise TypeError(f"expected a JSON array, got {type(data).__name__}")
    return [ContactField.from_dict(d) for d in data]


# ---------------------------------------------------------------------------
# Client interface
# ---------------------------------------------------------------------------

class ContactsClient(ABC):
    """Operations on the /contacts endpoints."""

    @abstractmethod
    def create(self, contact: Contact) -> Contact:
        """Create a new contact."""

    @abstractmethod
    def update(self, contact_id: int, contact: Contact) -> Contact:
        """Update an existing contact."""

    @abstractmethod
    def view(self, contact_id: int) -> Contact:
        """Fetch a contact by ID."""

    @abstractmethod
    def list_all(self) -> list[Contact]:
        """List contacts (first page only)."""

    @abstractmethod
    def delete(self, contact_id: int) -> None:
        """Soft-delete a contact."""

    @abstractmethod
    def hard_delete(self, contact_id: int, force: bool = False) -> None:
        """Permanently delete a contact; `force` skips the soft-delete requirement."""

    @abstractmethod
    def restore(self, contact_id: int) -> None:
        """Restore a soft-deleted contact."""

    @abstractmethod
    def list_all_contact_fields(self) -> list[ContactField]:
        """List the contact fields configured on the account."""

    @abstractmethod
    def search_contacts(self, keyword: str) -> list[Contact]:
        """Autocomplete contacts by name."""

    @abstractmethod
    def send_invite(self, contact_id: int) -> None:
        """Send the activation email to a contact."""

    @abstractmethod
    def merge(
        self,
        primary_id: int,
        secondary_ids: list[int],
        attrs: Contact | None = None,
    ) -> None:
        """Merge secondary contacts into the primary one, optionally updating it."""


class HTTPContactsClient(ContactsClient):
    def __init__(self, client: Client) -> None:
        self._client = client

    def create(self, contact: Contact) -> Contact:
        req = self._client.new_request("POST", "contacts", contact.to_dict())
        return self._client.execute(req, HTTP_CREATED, _contact)

    def update(self, contact_id: int, contact: Contact) -> Contact:
        req = self._client.new_request("PUT", f"contacts/{contact_id}", contact.to_dict())
        return self._client.execute(req, HTTP_OK, _contact)

    def view(self, contact_id: int) -> Contact:
        req = self._client.new_request("GET", f"contacts/{contact_id}")
        return self._client.execute(req, HTTP_OK, _contact)

    def list_all(self) -> list[Contact]:
        req = self._client.new_request("GET", "contacts")
        return self._client.execute(req, HTTP_OK, _contact_list)

    def delete(self, contact_id: int) -> None:
        req = self._client.new_request("DELETE", f"contacts/{contact_id}")
        self._client.execute(req, HTTP_OK)

    def hard_delete(self, contact_id: int, force: bool = False) -> None:
        body = json.dumps({"id": contact_id, "force": force}).encode("utf-8")
        req = self._client.new_request("DELETE", f"contacts/{contact_id}/hard_delete", body)
        self._client.execute(req, HTTP_OK)

    def restore(self, contact_id: int) -> None:
        req = self._client.new_request("PUT", f"contacts/{contact_id}/restore")
        self._client.execute(req, HTTP_OK)

    def list_all_contact_fields(self) -> list[ContactField]:
        req = self._client.new_request("GET", "contact_fields")
        return self._client.execute(req, HTTP_OK, _contact_field_list)

    def search_contacts(self, keyword: str) -> list[Contact]:
        # Freshdesk documents 204 for autocomplete even though it returns a list.
        req = self._client.new_request("POST", f"contacts/autocomplete?term={quote(keyword, safe='')}")
        return self._client.execute(req, HTTP_NO_CONTENT, _contact_list)

    def send_invite(self, contact_id: int) -> None:
        req = self._client.new_request("POST", f"contacts/{contact_id}/send_invite")
        self._client.execute(req, HTTP_NO_CONTENT)

    def merge(
        self,
        primary_id: int,
        secondary_ids: list[int],
        attrs: Contact | None = None,
    ) -> None:
        params: dict[str, Any] = {
            "primary_contact_id": primary_id,
            "secondary_contact_ids": list(secondary_ids),
        }
        if attrs is not None:
            params["contact"] = attrs.to_dict()
        body = json.dumps(params).encode("utf-8")
        req = self._client.new_request("POST", "contacts/merge", body)
        self._client.execute(req, HTTP_NO_CONTENT)
