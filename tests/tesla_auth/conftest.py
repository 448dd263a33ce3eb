"""Shared fixtures for tesla_auth tests."""

import pytest

from tesla_auth.config import ClientConfig
from tesla_auth.transport import TokenTransport


class StubTransport(TokenTransport):
    """Records token requests and answers with a canned response."""

    def __init__(self, response=None, error=None):
        self.response = response if response is not None else {
            "access_token": "A",
            "refresh_token": "R",
            "expires_in": 28800,
            "token_type": "Bearer",
        }
        self.error = error
        self.calls = []

    def post_form(self, url, data, headers=None):
        self.calls.append((url, dict(data)))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def config():
    """Create test OAuth config."""
    return ClientConfig(client_id="test_client_id")


@pytest.fixture
def transport():
    return StubTransport()
