"""
Small helpers for identifiers and timestamps.
"""

import secrets
import string
from datetime import datetime, timezone


_ID_ALPHABET = string.ascii_lowercase + string.digits


def new_id(prefix: str, length: int = 9) -> str:
    """Return ``<prefix>-<random suffix>``, e.g. ``sp-k3x9q0a1z``."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))
    return f"{prefix}-{suffix}"


def utc_now_iso() -> str:
    """Current UTC time as an ISO 8601 string with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_today() -> str:
    """Current UTC date as ``YYYY-MM-DD``."""
    return datetime.now(timezone.utc).date().isoformat()
