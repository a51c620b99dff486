import pytest

from core.config import Settings
from core.errors import ConfigError


def test_defaults_when_environment_is_empty():
    settings = Settings.from_env({})

    assert settings.cloud_base_url == "https://app.netdata.cloud"
    assert settings.space_id is None
    assert settings.api_token is None
    assert settings.sandbox_host == "216.153.63.25"
    assert settings.agent_port == 19999
    assert settings.rate_limit_delay == 0.1
    assert settings.provider_api_url == "https://providermon.akashnet.net"
    assert (settings.wiki_owner, settings.wiki_repo) == ("ovrclk", "server-mgmt")


def test_blank_values_count_as_unset():
    settings = Settings.from_env({"NETDATA_SPACE_ID": "   ", "NETDATA_AGENT_PORT": ""})

    assert settings.space_id is None
    assert settings.agent_port == 19999


def test_overrides_are_parsed_and_normalized():
    settings = Settings.from_env(
        {
            "NETDATA_CLOUD_URL": "https://cloud.example/",
            "NETDATA_SPACE_ID": "abc",
            "NETDATA_AGENT_PORT": "20000",
            "NETDATA_RATE_LIMIT_DELAY": "0.5",
            "AKASH_PROVIDER_API_URL": "https://monitor.example/",
            "REPO_OWNER": "acme",
            "LOG_LEVEL": "debug",
        }
    )

    assert settings.cloud_base_url == "https://cloud.example"
    assert settings.provider_api_url == "https://monitor.example"
    assert settings.space_id == "abc"
    assert settings.agent_port == 20000
    assert settings.rate_limit_delay == 0.5
    assert settings.wiki_owner == "acme"
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    "name, value",
    [("NETDATA_AGENT_PORT", "19999.5"), ("NETDATA_CLOUD_TIMEOUT", "soon")],
)
def test_malformed_numbers_raise_config_error(name, value):
    with pytest.raises(ConfigError, match=name):
        Settings.from_env({name: value})


def test_describe_never_contains_secrets():
    settings = Settings.from_env({"NETDATA_API_TOKEN": "secret-cloud", "GITHUB_TOKEN": "secret-gh"})

    description = settings.describe()

    assert description["api_token_present"] is True
    assert description["github_token_present"] is True
    assert "secret-cloud" not in str(description)
    assert "secret-gh" not in str(description)
