"""Typed client for the Freshdesk v2 REST API."""

from freshdesk_client.client import Client
from freshdesk_client.contacts import Contact, ContactField, ContactsClient
from freshdesk_client.errors import APIError, DecodeError, FieldError

__all__ = [
    "APIError",
    "Client",
    "Contact",
    "ContactField",
    "ContactsClient",
    "DecodeError",
    "FieldError",
]
