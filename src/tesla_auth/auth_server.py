"""
Local OAuth callback server.

Use this interceptor when the client is registered with a redirect URI on
the local machine (e.g. http://localhost:8080/callback). The server
serves the redirect URI path only and forwards each request to that path,
query included, to the RedirectChannel; the OAuthClient decides whether
it is a valid callback. Apart from the /oauth/status page, other paths
get a 404 and are not forwarded.

IMPORTANT: This server is designed for single-user, personal use. It runs
only while the authorization flow is in progress.
"""

import logging
import threading
from typing import Optional
from urllib.parse import urlparse

from flask import Flask, Response, request
from werkzeug.serving import make_server

from .config import ClientConfig
from .coordinator import RedirectChannel, RedirectInterceptor
from .exceptions import ConfigError

logger = logging.getLogger(__name__)

LOCAL_HOSTS = {"localhost", "127.0.0.1", "::1"}

_PAGE = """<html>
<head><title>{title}</title></head>
<body style="font-family: Arial, sans-serif; max-width: 600px; margin: 50px auto; padding: 20px;">
    <h1 style="color: {color};">{title}</h1>
    <p>{message}</p>
    <p style="margin-top: 30px; color: #666;">You can close this window and return to the terminal.</p>
</body>
</html>"""


class OAuthCallbackServer(RedirectInterceptor):
    """
    Local HTTP(S) server that captures the OAuth redirect.

    The server:
    1. Listens on the host/port of the configured redirect URI
    2. Publishes each request to the callback path on the channel
    3. Shows a page telling the user to return to the terminal
    """

    def __init__(
        self,
        config: ClientConfig,
        ssl_cert_path: Optional[str] = None,
        ssl_key_path: Optional[str] = None,
    ):
        """
        Initialize callback server.

        Args:
            config: OAuth configuration; redirect_uri must point at this machine
            ssl_cert_path: Certificate for an https redirect URI
            ssl_key_path: Private key for an https redirect URI

        Raises:
            ConfigError: If redirect_uri is not local or https lacks a certificate
        """
        redirect = urlparse(config.redirect_uri)
        if redirect.hostname not in LOCAL_HOSTS:
            raise ConfigError(
                f"Callback server needs a redirect_uri on localhost, got {config.redirect_uri}"
            )

        if redirect.scheme == "https" and not (ssl_cert_path and ssl_key_path):
            raise ConfigError(
                "An https redirect_uri needs ssl_cert_path and ssl_key_path"
            )

        self.config = config
        self.host = redirect.hostname
        self.port = redirect.port or (443 if redirect.scheme == "https" else 80)
        self.callback_path = redirect.path or "/"
        self.ssl_context = (
            (ssl_cert_path, ssl_key_path) if redirect.scheme == "https" else None
        )

        self.app = Flask(__name__)
        self.app.logger.setLevel(logging.WARNING)  # Suppress Flask logs
        self.channel: Optional[RedirectChannel] = None
        self.server = None
        self._thread: Optional[threading.Thread] = None

        self.app.add_url_rule(
            self.callback_path,
            "oauth_callback",
            self._handle_callback,
            methods=["GET"],
        )
        self.app.add_url_rule(
            "/oauth/status", "oauth_status", self._handle_status, methods=["GET"]
        )

    def _handle_callback(self) -> Response:
        """Forward the callback URL to the OAuth client."""
        logger.info("Received OAuth callback")

        if self.channel is not None:
            self.channel.publish(request.url)

        error = request.args.get("error")
        if error:
            return Response(
                _PAGE.format(
                    title="Authorization Failed",
                    color="#d32f2f",
                    message=f"Error: {error}",
                ),
                status=400,
                content_type="text/html",
            )

        return Response(
            _PAGE.format(
                title="Callback Received",
                color="#4caf50",
                message="Tesla redirected back to this application.",
            ),
            status=200,
            content_type="text/html",
        )

    def _handle_status(self) -> Response:
        """Status endpoint for debugging."""
        return Response(
            '{"status": "running", "waiting_for": "oauth_callback"}',
            status=200,
            content_type="application/json",
        )

    def start(self, channel: RedirectChannel) -> None:
        """
        Start the callback server in a background thread.

        Raises:
            OSError: If the port cannot be bound
        """
        self.channel = channel
        self.server = make_server(
            self.host,
            self.port,
            self.app,
            threaded=True,
            ssl_context=self.ssl_context,
        )

        logger.info(f"Starting OAuth callback server on {self.host}:{self.port}")
        self._thread = threading.Thread(
            target=self.server.serve_forever, name="tesla-auth-callback", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        """Stop the callback server."""
        if self.server is not None:
            logger.info("OAuth callback server shutting down")
            self.server.shutdown()
            self.server = None
        if self._thread is not None:
            self._thread.join(timeout=5)
            self._thread = None
