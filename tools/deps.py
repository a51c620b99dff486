# =============================================================================
# tools/deps.py - Shared handler dependencies
# =============================================================================
# One ApiClient for the whole process, built lazily from the environment the
# first time a tool needs it.  Tests swap in a fake with set_client().
# =============================================================================

from datetime import datetime, timezone

from core.config import load_settings
from core.http_client import ApiClient

_client: ApiClient | None = None


def get_client() -> ApiClient:
    global _client
    if _client is None:
        _client = ApiClient(load_settings())
    return _client


def set_client(client: ApiClient | None) -> None:
    """Replace the shared client (None resets to lazy construction)."""
    global _client
    _client = client


def generated_at() -> str:
    """Report timestamp, ISO-8601 UTC."""
    return datetime.now(timezone.utc).isoformat(timespec="seconds")
