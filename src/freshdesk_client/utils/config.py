"""Load and validate environment variables. Uses python-dotenv.

Callers should use the accessor functions below rather than reading `os.environ`
directly, to keep environment handling consistent.
"""

import os
from pathlib import Path

from dotenv import load_dotenv


def _project_root() -> Path:
    """Resolve project root (the directory holding src/)."""
    return Path(__file__).resolve().parents[3]


def load_config() -> None:
    """
    Load .env from project root. Idempotent; safe to call multiple times.
    Values already present in the environment win over the .env file.
    """
    env_path = _project_root() / ".env"
    load_dotenv(env_path, override=False)


def get_required(key: str) -> str:
    """
    Get required env var. Raises if missing or empty.

    Raises:
        ValueError: If key is missing or empty after trimming.
    """
    load_config()
    val = os.getenv(key, "").strip()
    if not val:
        raise ValueError(
            f"Missing required environment variable: {key}. "
            "Set it in .env or export it."
        )
    return val


def get_optional(key: str, default: str = "") -> str:
    """Get optional env var; return default if missing or empty."""
    load_config()
    val = os.getenv(key, "").strip()
    return val if val else default


def get_optional_int(key: str, default: int) -> int:
    """Get optional env var as int; return default if missing or invalid."""
    load_config()
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_optional_float(key: str, default: float) -> float:
    """Get optional env var as float; return default if missing or invalid."""
    load_config()
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# --- Public config accessors ---

def freshdesk_subdomain() -> str:
    """Required: account subdomain, e.g. `acme` for acme.freshdesk.com."""
    return get_required("FRESHDESK_SUBDOMAIN")


def freshdesk_api_key() -> str:
    """Required: agent API key (sent as the basic auth username)."""
    return get_required("FRESHDESK_API_KEY")


def freshdesk_max_retries() -> int:
    """Optional: retries on connection errors and 429/5xx. Default 4."""
    return get_optional_int("FRESHDESK_MAX_RETRIES", 4)


def freshdesk_backoff_factor() -> float:
    """Optional: exponential backoff factor in seconds. Default 1.0."""
    return get_optional_float("FRESHDESK_BACKOFF_FACTOR", 1.0)


def freshdesk_backoff_max() -> float:
    """Optional: upper bound for a single backoff sleep in seconds. Default 30."""
    return get_optional_float("FRESHDESK_BACKOFF_MAX", 30.0)
