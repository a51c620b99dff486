# =============================================================================
# core/config.py - Runtime configuration
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads every tunable (base URLs, credentials, timeouts, pacing) from the
#   environment into one frozen Settings object.  main.py loads .env with
#   python-dotenv before calling Settings.from_env(), so values in a local
#   .env file behave exactly like exported variables.
#
# REQUIRED vs. DEFAULTED:
#   Everything has a default except the credentials.  Missing credentials do
#   NOT fail at startup: the NetData token and space ID are checked by the
#   HTTP facade right before a cloud call, and the GitHub token right before
#   a wiki call.  The provider monitor and the agents need no credentials.
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping

from core.errors import ConfigError


def _env_str(environ: Mapping[str, str], name: str, default: str | None = None) -> str | None:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def _env_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = _env_str(environ, name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = _env_str(environ, name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    """All configuration for the server.  Timeouts and delays are in seconds."""

    # --- NetData Cloud ---
    cloud_base_url: str = "https://app.netdata.cloud"
    space_id: str | None = None
    api_token: str | None = None
    cloud_timeout: float = 30.0

    # --- NetData agents (queried directly, no auth) ---
    sandbox_host: str = "216.153.63.25"
    agent_port: int = 19999
    agent_timeout: float = 5.0
    rate_limit_delay: float = 0.1

    # --- Akash provider monitor ---
    provider_api_url: str = "https://providermon.akashnet.net"
    provider_timeout: float = 10.0

    # --- GitHub wiki ---
    github_token: str | None = None
    wiki_owner: str = "ovrclk"
    wiki_repo: str = "server-mgmt"
    wiki_raw_base_url: str = "https://raw.githubusercontent.com/wiki"
    wiki_timeout: float = 15.0

    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build Settings from ``environ`` (defaults to ``os.environ``).

        Blank values count as unset.  Malformed numbers raise ConfigError.
        """
        env = os.environ if environ is None else environ
        return cls(
            cloud_base_url=_env_str(env, "NETDATA_CLOUD_URL", cls.cloud_base_url).rstrip("/"),
            space_id=_env_str(env, "NETDATA_SPACE_ID"),
            api_token=_env_str(env, "NETDATA_API_TOKEN"),
            cloud_timeout=_env_float(env, "NETDATA_CLOUD_TIMEOUT", cls.cloud_timeout),
            sandbox_host=_env_str(env, "NETDATA_SANDBOX_HOST", cls.sandbox_host),
            agent_port=_env_int(env, "NETDATA_AGENT_PORT", cls.agent_port),
            agent_timeout=_env_float(env, "NETDATA_AGENT_TIMEOUT", cls.agent_timeout),
            rate_limit_delay=_env_float(env, "NETDATA_RATE_LIMIT_DELAY", cls.rate_limit_delay),
            provider_api_url=_env_str(env, "AKASH_PROVIDER_API_URL", cls.provider_api_url).rstrip("/"),
            provider_timeout=_env_float(env, "AKASH_API_TIMEOUT", cls.provider_timeout),
            github_token=_env_str(env, "GITHUB_TOKEN"),
            wiki_owner=_env_str(env, "REPO_OWNER", cls.wiki_owner),
            wiki_repo=_env_str(env, "REPO_NAME", cls.wiki_repo),
            wiki_timeout=_env_float(env, "WIKI_TIMEOUT", cls.wiki_timeout),
            log_level=_env_str(env, "LOG_LEVEL", cls.log_level).upper(),
        )

    def describe(self) -> dict[str, object]:
        """Connection details safe to show to a caller (no secret values)."""
        return {
            "cloud_base_url": self.cloud_base_url,
            "space_id": self.space_id or "(not configured)",
            "api_token_present": bool(self.api_token),
            "sandbox_host": self.sandbox_host,
            "agent_port": self.agent_port,
            "provider_api_url": self.provider_api_url,
            "wiki_repo": f"{self.wiki_owner}/{self.wiki_repo}",
            "github_token_present": bool(self.github_token),
            "timeouts_seconds": {
                "cloud": self.cloud_timeout,
                "agent": self.agent_timeout,
                "provider": self.provider_timeout,
                "wiki": self.wiki_timeout,
            },
            "rate_limit_delay_seconds": self.rate_limit_delay,
        }


def load_settings() -> Settings:
    return Settings.from_env()
