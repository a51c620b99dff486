from typing import Any

import pytest

from core.config import Settings
from core.errors import ConfigError, UpstreamError
from tools import deps


def make_settings(**overrides) -> Settings:
    values = {
        "space_id": "space-1",
        "api_token": "cloud-token",
        "github_token": "gh-token",
        "rate_limit_delay": 0.0,
    }
    values.update(overrides)
    return Settings(**values)


class FakeClient:
    """In-memory stand-in for core.http_client.ApiClient.

    Routes map a key to a response body, an exception instance (raised), or a
    callable taking the request params and returning a body.  Unrouted keys
    fail like an unreachable upstream.  Every call is recorded in ``calls``.
    """

    def __init__(self, settings: Settings | None = None, cloud=None, agent=None, provider=None, wiki=None):
        self.settings = settings or make_settings()
        self.cloud: dict[str, Any] = cloud or {}
        self.agent: dict[tuple[str, str], Any] = agent or {}
        self.provider: dict[str, Any] = provider or {}
        self.wiki: dict[str, Any] = wiki or {}
        self.calls: list[tuple] = []

    @staticmethod
    def _answer(routes: dict, key, params=None):
        if key not in routes:
            raise UpstreamError("Fake API", f"no route for {key}")
        value = routes[key]
        if isinstance(value, BaseException):
            raise value
        if callable(value):
            return value(params)
        return value

    def space_path(self, suffix: str = "") -> str:
        if not self.settings.space_id:
            raise ConfigError("NetData space ID is not configured (set NETDATA_SPACE_ID)")
        return f"/spaces/{self.settings.space_id}{suffix}"

    async def cloud_get(self, path, params=None):
        if not self.settings.api_token:
            raise ConfigError("NetData API token is not configured (set NETDATA_API_TOKEN)")
        self.calls.append(("cloud", path, params))
        return self._answer(self.cloud, path, params)

    async def agent_get(self, host, path, params=None):
        self.calls.append(("agent", host, path, params))
        return self._answer(self.agent, (host, path), params)

    async def provider_get(self, path):
        self.calls.append(("provider", path))
        return self._answer(self.provider, path)

    async def wiki_raw(self, page):
        if not self.settings.github_token:
            raise ConfigError("GitHub token is not configured (set GITHUB_TOKEN)")
        self.calls.append(("wiki", page))
        if page not in self.wiki:
            return None
        value = self.wiki[page]
        if isinstance(value, BaseException):
            raise value
        return value


@pytest.fixture
def fake_client():
    client = FakeClient()
    deps.set_client(client)
    yield client
    deps.set_client(None)


@pytest.fixture
def pauses(monkeypatch):
    """Record every inter-batch pause instead of sleeping."""
    recorded: list[float] = []

    async def fake_pause(seconds):
        recorded.append(seconds)

    monkeypatch.setattr("core.concurrency.pause", fake_pause)
    monkeypatch.setattr("core.prober.pause", fake_pause)
    return recorded
