#!/usr/bin/env python3
"""
Verification script for Freshdesk API access.

This script checks:
1. FRESHDESK_SUBDOMAIN and FRESHDESK_API_KEY are set
2. The API answers an authenticated request (lists contact fields)
"""

import sys

import requests

from freshdesk_client import APIError, Client
from freshdesk_client.utils.config import get_optional
from freshdesk_client.utils.logger import setup_logger


def check_env_vars() -> tuple[bool, list[str]]:
    """Check if required environment variables are set."""
    results = []
    all_ok = True

    subdomain = get_optional("FRESHDESK_SUBDOMAIN")
    api_key = get_optional("FRESHDESK_API_KEY")

    if subdomain:
        results.append(f"[OK] FRESHDESK_SUBDOMAIN is set: {subdomain}")
    else:
        results.append("[X] FRESHDESK_SUBDOMAIN is not set")
        all_ok = False

    if api_key:
        results.append(f"[OK] FRESHDESK_API_KEY is set: {api_key[:4]}...")
    else:
        results.append("[X] FRESHDESK_API_KEY is not set")
        all_ok = False

    return all_ok, results


def check_connectivity(client: Client) -> tuple[bool, str]:
    """List contact fields as a cheap authenticated round trip."""
    try:
        fields = client.contacts.list_all_contact_fields()
    except APIError as e:
        if e.status_code == 401:
            return False, "[X] Freshdesk authentication failed (invalid API key?)"
        return False, f"[X] Freshdesk API error: {e}"
    except requests.RequestException as e:
        return False, f"[X] Error connecting to {client.base_url}: {e}"
    return True, f"[OK] Freshdesk API is accessible at {client.base_url} ({len(fields)} contact fields)"


def main() -> int:
    """Run all verification checks."""
    setup_logger()
    print("Verifying Freshdesk API access\n")
    print("=" * 60)

    print("\n1. Checking Environment Variables...")
    ok, msgs = check_env_vars()
    for msg in msgs:
        print(f"   {msg}")
    if not ok:
        print("\n[X] Set the missing variables in .env or export them.")
        return 1

    print("\n2. Testing Freshdesk API Connectivity...")
    with Client.from_env() as client:
        ok, msg = check_connectivity(client)
    print(f"   {msg}")

    print("\n" + "=" * 60)
    if not ok:
        print("\n[X] Some checks failed. Please fix the issues above.")
        return 1
    print("\n[OK] All checks passed!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
