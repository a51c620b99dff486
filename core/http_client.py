# =============================================================================
# core/http_client.py - HTTP Client Facade
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Every outbound call in the project goes through ApiClient.  There are four
#   call classes, each with its own base URL, auth and timeout:
#
#     cloud_get     NetData Cloud REST API (/api/v2), bearer token
#     agent_get     a NetData agent on a monitored host (:19999), no auth
#     provider_get  the Akash provider monitor, no auth
#     wiki_raw      raw markdown of a GitHub wiki page, "token" auth
#
# FAILURE SHAPE:
#   Callers only ever see two exception types from here:
#     ConfigError    - a required credential is missing; raised BEFORE any
#                      network traffic.
#     UpstreamError  - non-2xx status, timeout, DNS failure, refused
#                      connection...  The message is the upstream JSON
#                      "message" field when there is one, else the httpx
#                      error text.
#
# TESTING:
#   Pass an httpx.MockTransport as ``transport`` and no socket is opened.
# =============================================================================

import logging
from typing import Any

import httpx

from core.config import Settings
from core.errors import ConfigError, UpstreamError

logger = logging.getLogger(__name__)

CLOUD_API = "NetData Cloud API"
AGENT_API = "NetData agent"
PROVIDER_API = "Akash Provider API"
WIKI_API = "GitHub wiki"

_JSON_HEADERS = {"Accept": "application/json"}


def _upstream_message(exc: httpx.HTTPError) -> str:
    """Best human-readable reason for a failed call."""
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            body = exc.response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return f"HTTP {exc.response.status_code} from {exc.request.url}"
    # Timeout errors often stringify to "", so fall back to the class name.
    return str(exc) or exc.__class__.__name__


class ApiClient:
    """Async facade over the NetData, Akash and GitHub endpoints."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings
        self._transport = transport

    # -------------------------------------------------------------------------
    # Shared GET
    # -------------------------------------------------------------------------
    async def _get(
        self,
        api: str,
        url: str,
        *,
        timeout: float,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        as_text: bool = False,
        missing_ok: bool = False,
    ) -> Any:
        logger.debug("GET %s params=%s", url, params)
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                response = await client.get(url, headers=headers, params=params)
                if missing_ok and response.status_code == 404:
                    return None
                response.raise_for_status()
                return response.text if as_text else response.json()
        except httpx.HTTPError as exc:
            status = exc.response.status_code if isinstance(exc, httpx.HTTPStatusError) else None
            raise UpstreamError(api, _upstream_message(exc), status_code=status) from exc
        except ValueError as exc:
            # Body was not JSON.
            raise UpstreamError(api, f"invalid JSON response from {url}: {exc}") from exc

    # -------------------------------------------------------------------------
    # NetData Cloud
    # -------------------------------------------------------------------------
    def space_path(self, suffix: str = "") -> str:
        """Path under the configured space, e.g. ``/spaces/<id>/rooms``."""
        if not self.settings.space_id:
            raise ConfigError("NetData space ID is not configured (set NETDATA_SPACE_ID)")
        return f"/spaces/{self.settings.space_id}{suffix}"

    async def cloud_get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        if not self.settings.api_token:
            raise ConfigError("NetData API token is not configured (set NETDATA_API_TOKEN)")
        headers = {**_JSON_HEADERS, "Authorization": f"Bearer {self.settings.api_token}"}
        return await self._get(
            CLOUD_API,
            f"{self.settings.cloud_base_url}/api/v2{path}",
            timeout=self.settings.cloud_timeout,
            headers=headers,
            params=params,
        )

    # -------------------------------------------------------------------------
    # NetData agents
    # -------------------------------------------------------------------------
    async def agent_get(self, host: str, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self._get(
            AGENT_API,
            f"http://{host}:{self.settings.agent_port}{path}",
            timeout=self.settings.agent_timeout,
            params=params,
        )

    # -------------------------------------------------------------------------
    # Akash provider monitor
    # -------------------------------------------------------------------------
    async def provider_get(self, path: str) -> Any:
        return await self._get(
            PROVIDER_API,
            f"{self.settings.provider_api_url}{path}",
            timeout=self.settings.provider_timeout,
            headers=_JSON_HEADERS,
        )

    # -------------------------------------------------------------------------
    # GitHub wiki
    # -------------------------------------------------------------------------
    async def wiki_raw(self, page: str) -> str | None:
        """Markdown source of a wiki page, or None if the page does not exist."""
        if not self.settings.github_token:
            raise ConfigError("GitHub token is not configured (set GITHUB_TOKEN)")
        s = self.settings
        return await self._get(
            WIKI_API,
            f"{s.wiki_raw_base_url}/{s.wiki_owner}/{s.wiki_repo}/{page}.md",
            timeout=s.wiki_timeout,
            headers={"Authorization": f"token {s.github_token}", "User-Agent": "infra-health-mcp"},
            as_text=True,
            missing_ok=True,
        )
