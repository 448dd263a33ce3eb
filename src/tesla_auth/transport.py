"""
Token endpoint transport.

The OAuth client only needs "POST a form, get a JSON object back". The
transport owns the network details, including the request timeout.
"""

import logging
from typing import Any, Dict, Mapping, Optional

import requests

from .exceptions import MalformedResponseError, TokenExchangeError

logger = logging.getLogger(__name__)


class TokenTransport:
    """Interface for posting token requests."""

    def post_form(
        self,
        url: str,
        data: Mapping[str, str],
        headers: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Any]:
        """
        POST a form-encoded body and return the decoded JSON response.

        Raises:
            TokenExchangeError: On network failure or non-2xx status
            MalformedResponseError: If the body is not valid JSON
        """
        raise NotImplementedError


class RequestsTransport(TokenTransport):
    """TokenTransport backed by requests."""

    def __init__(self, timeout: float = 30.0):
        """
        Initialize transport.

        Args:
            timeout: Seconds before a token request is abandoned
        """
        self.timeout = timeout

    def post_form(
        self,
        url: str,
        data: Mapping[str, str],
        headers: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Any]:
        request_headers = {
            "Accept": "application/json",
            "Content-Type": "application/x-www-form-urlencoded",
        }
        if headers:
            request_headers.update(headers)

        try:
            response = requests.post(
                url,
                headers=request_headers,
                data=dict(data),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Network error during token exchange: {e}")
            raise TokenExchangeError(f"Network error during token exchange: {e}") from e

        if not 200 <= response.status_code < 300:
            logger.error(
                f"Token exchange failed: {response.status_code} - {response.text}"
            )
            raise TokenExchangeError(
                f"Token exchange failed with status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid response from token endpoint: {e}")
            raise MalformedResponseError(
                f"Invalid response from token endpoint: {e}",
                status_code=response.status_code,
            ) from e
