"""Tests for the Tokens result type."""

import pytest

from tesla_auth.exceptions import MalformedResponseError
from tesla_auth.tokens import Tokens


class TestTokens:
    """Tests for Tokens.from_response."""

    def test_from_full_response(self):
        tokens = Tokens.from_response(
            {
                "access_token": "A",
                "refresh_token": "R",
                "expires_in": 28800,
                "token_type": "Bearer",
                "id_token": "I",
            }
        )

        assert tokens == Tokens(
            access_token="A",
            refresh_token="R",
            expires_in=28800,
            token_type="Bearer",
            id_token="I",
        )

    def test_optional_fields_default_to_none(self):
        tokens = Tokens.from_response({"access_token": "A"})

        assert tokens.refresh_token is None
        assert tokens.expires_in is None
        assert tokens.token_type is None

    def test_expires_in_string_is_converted(self):
        assert Tokens.from_response({"access_token": "A", "expires_in": "300"}).expires_in == 300

    def test_missing_access_token_raises(self):
        with pytest.raises(MalformedResponseError, match="access_token"):
            Tokens.from_response({"refresh_token": "R"})

    def test_non_object_body_raises(self):
        with pytest.raises(MalformedResponseError, match="JSON object"):
            Tokens.from_response(["access_token"])

    def test_bad_expires_in_raises(self):
        with pytest.raises(MalformedResponseError, match="expires_in"):
            Tokens.from_response({"access_token": "A", "expires_in": "soon"})

    def test_repr_masks_token_values(self):
        tokens = Tokens(access_token="eyJhbGciOiJSUzI1NiJ9.secret", refresh_token="refresh-secret")

        text = repr(tokens)
        assert "secret" not in text
        assert "eyJh..." in text
