"""Tests for OAuth configuration module."""

from dataclasses import FrozenInstanceError
from unittest import mock

import pytest

from tesla_auth.config import ClientConfig
from tesla_auth.exceptions import ConfigError


class TestClientConfig:
    """Tests for ClientConfig class."""

    def test_config_defaults_target_tesla(self):
        config = ClientConfig()

        assert config.client_id == "ownerapi"
        assert config.client_secret is None
        assert config.authorization_url == "https://auth.tesla.com/oauth2/v3/authorize"
        assert config.token_url == "https://auth.tesla.com/oauth2/v3/token"
        assert config.redirect_uri == "https://auth.tesla.com/void/callback"
        assert config.scopes == ("openid", "email", "offline_access")
        assert config.use_pkce is True
        assert config.request_timeout == 30.0
        assert config.state_ttl_seconds is None

    def test_scope_is_space_delimited(self):
        config = ClientConfig(scopes=("openid", "offline_access"))
        assert config.scope == "openid offline_access"

    def test_scopes_accepts_string(self):
        config = ClientConfig(scopes="openid email")
        assert config.scopes == ("openid", "email")

    def test_config_is_immutable(self):
        config = ClientConfig()
        with pytest.raises(FrozenInstanceError):
            config.client_id = "other"

    def test_client_secret_not_in_repr(self):
        config = ClientConfig(client_secret="super-secret-value")
        assert "super-secret-value" not in repr(config)

    def test_config_validates_empty_client_id(self):
        with pytest.raises(ConfigError, match="client_id cannot be empty"):
            ClientConfig(client_id="")

    @pytest.mark.parametrize(
        "field", ["authorization_url", "token_url", "redirect_uri"]
    )
    def test_config_validates_urls(self, field):
        with pytest.raises(ConfigError, match=field):
            ClientConfig(**{field: "not a url"})

    def test_config_validates_empty_scopes(self):
        with pytest.raises(ConfigError, match="scopes cannot be empty"):
            ClientConfig(scopes=())

    def test_config_validates_timeout(self):
        with pytest.raises(ConfigError, match="request_timeout"):
            ClientConfig(request_timeout=0)

    def test_config_validates_negative_ttl(self):
        with pytest.raises(ConfigError, match="state_ttl_seconds"):
            ClientConfig(state_ttl_seconds=-1)

    @mock.patch.dict("os.environ", {}, clear=True)
    def test_from_env_uses_defaults(self):
        config = ClientConfig.from_env()
        assert config == ClientConfig()

    @mock.patch.dict(
        "os.environ",
        {
            "TESLA_CLIENT_ID": "env_id",
            "TESLA_CLIENT_SECRET": "env_secret",
            "TESLA_REDIRECT_URI": "http://localhost:8080/callback",
            "TESLA_SCOPES": "openid offline_access",
            "TESLA_USE_PKCE": "false",
            "TESLA_REQUEST_TIMEOUT": "10",
            "TESLA_STATE_TTL": "600",
        },
        clear=True,
    )
    def test_from_env_reads_overrides(self):
        config = ClientConfig.from_env()

        assert config.client_id == "env_id"
        assert config.client_secret == "env_secret"
        assert config.redirect_uri == "http://localhost:8080/callback"
        assert config.scopes == ("openid", "offline_access")
        assert config.use_pkce is False
        assert config.request_timeout == 10.0
        assert config.state_ttl_seconds == 600.0

    @mock.patch.dict("os.environ", {"TESLA_REQUEST_TIMEOUT": "soon"}, clear=True)
    def test_from_env_rejects_bad_number(self):
        with pytest.raises(ConfigError, match="Invalid numeric value"):
            ClientConfig.from_env()
