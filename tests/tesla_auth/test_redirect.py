"""Tests for redirect URL parsing and classification."""

import pytest

from tesla_auth.config import ClientConfig
from tesla_auth.redirect import is_redirect_url, parse_redirect_url


class TestParseRedirectUrl:
    """Tests for parse_redirect_url."""

    def test_parses_host_path_and_query(self):
        redirect = parse_redirect_url(
            "https://Auth.Tesla.com/void/callback?code=abc&state=xyz&issuer=https%3A%2F%2Fauth.tesla.com"
        )

        assert redirect.scheme == "https"
        assert redirect.host == "auth.tesla.com"
        assert redirect.port == 443
        assert redirect.path == "/void/callback"
        assert redirect.query == {
            "code": "abc",
            "state": "xyz",
            "issuer": "https://auth.tesla.com",
        }

    def test_explicit_port(self):
        assert parse_redirect_url("http://localhost:8080/callback").port == 8080

    def test_first_duplicate_key_wins(self):
        redirect = parse_redirect_url("https://h/p?code=1&code=2")
        assert redirect.get("code") == "1"

    def test_missing_parameter_is_none(self):
        assert parse_redirect_url("https://h/p").get("code") is None

    @pytest.mark.parametrize("url", ["", "not a url", "/void/callback?code=1"])
    def test_relative_or_garbage_returns_none(self, url):
        assert parse_redirect_url(url) is None


class TestIsRedirectUrl:
    """Tests for is_redirect_url."""

    def test_matches_callback(self, config):
        assert is_redirect_url(
            config, "https://auth.tesla.com/void/callback?code=c&state=s"
        )

    def test_matches_without_query(self, config):
        assert is_redirect_url(config, "https://auth.tesla.com/void/callback")

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/",
            "https://auth.tesla.com/oauth2/v3/authorize?client_id=ownerapi",
            "https://evil.example.com/void/callback?code=c&state=s",
            "https://auth.tesla.com/void/callback/extra",
            "about:blank",
            "",
        ],
    )
    def test_other_urls_do_not_match(self, config, url):
        assert not is_redirect_url(config, url)

    def test_default_port_matches_explicit_default(self, config):
        assert is_redirect_url(config, "https://auth.tesla.com:443/void/callback")

    def test_port_must_match(self):
        config = ClientConfig(redirect_uri="http://localhost:8080/callback")

        assert is_redirect_url(config, "http://localhost:8080/callback?code=c&state=s")
        assert not is_redirect_url(config, "http://localhost:9999/callback?code=c&state=s")
        assert not is_redirect_url(config, "http://localhost/callback?code=c&state=s")
