"""
Redirect URL parsing and classification.

The interceptor forwards every URL the browser visits; only those whose
host, port and path match the configured ``redirect_uri`` are callbacks.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional
from urllib.parse import parse_qsl, urlparse

from .config import ClientConfig

DEFAULT_PORTS = {"http": 80, "https": 443}


@dataclass(frozen=True)
class RedirectUrl:
    """
    A parsed URL observed during the authorization flow.

    Attributes:
        scheme: URL scheme ("https")
        host: Lower-cased host name, without port
        port: Explicit port, or the scheme default (None if unknown)
        path: URL path
        query: Query parameters; the first occurrence of a key wins
    """

    scheme: str
    host: str
    port: Optional[int]
    path: str
    query: Dict[str, str] = field(default_factory=dict)

    def get(self, name: str) -> Optional[str]:
        return self.query.get(name)


def parse_redirect_url(url: str) -> Optional[RedirectUrl]:
    """
    Parse a URL into a RedirectUrl.

    Args:
        url: Raw URL string

    Returns:
        RedirectUrl, or None if the string is not an absolute URL
    """
    try:
        parsed = urlparse(url.strip())
        host = parsed.hostname
        port = parsed.port
    except (AttributeError, ValueError):
        return None

    if not parsed.scheme or not host:
        return None

    query: Dict[str, str] = {}
    for key, value in parse_qsl(parsed.query, keep_blank_values=True):
        query.setdefault(key, value)

    return RedirectUrl(
        scheme=parsed.scheme.lower(),
        host=host.lower(),
        port=port or DEFAULT_PORTS.get(parsed.scheme.lower()),
        path=parsed.path or "/",
        query=query,
    )


def is_redirect_url(config: ClientConfig, url: str) -> bool:
    """
    Check whether a URL is the configured OAuth callback.

    Pure predicate: compares host, port and path with ``config.redirect_uri``.

    Args:
        config: OAuth configuration
        url: Observed URL

    Returns:
        True if host, port and path match the redirect URI, False otherwise
    """
    observed = parse_redirect_url(url)
    expected = parse_redirect_url(config.redirect_uri)
    if observed is None or expected is None:
        return False
    return (
        observed.host == expected.host
        and observed.port == expected.port
        and observed.path == expected.path
    )
