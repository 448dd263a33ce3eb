"""
Command-line entry point.

Usage:
    tesla-auth                  # open browser, paste the callback URL
    tesla-auth --no-browser     # only print the authorization URL
    tesla-auth --listen         # capture a localhost redirect_uri with a local server
    tesla-auth --timeout 600    # give up after ten minutes

Configuration is read from TESLA_* environment variables
(see ClientConfig.from_env).
"""

import argparse
import logging
import sys
from typing import List, Optional

from .auth_server import OAuthCallbackServer
from .client import OAuthClient
from .config import ClientConfig
from .coordinator import AuthorizationCoordinator
from .exceptions import ConfigError
from .interceptors import PastedUrlInterceptor
from .sink import ConsoleSink

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tesla-auth",
        description="Obtain Tesla OAuth access and refresh tokens",
    )
    parser.add_argument(
        "--no-browser",
        action="store_true",
        help="Don't open browser automatically (just print the URL)",
    )
    parser.add_argument(
        "--listen",
        action="store_true",
        help="Capture the redirect with a local callback server "
        "(TESLA_REDIRECT_URI must point at localhost)",
    )
    parser.add_argument("--ssl-cert", help="Certificate for an https local redirect URI")
    parser.add_argument("--ssl-key", help="Private key for an https local redirect URI")
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for sign-in (default: wait indefinitely)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the authorization flow.

    Returns:
        Exit code (0 for success, 1 for failure, 2 for configuration error)
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        config = ClientConfig.from_env()
        if args.listen:
            interceptor = OAuthCallbackServer(
                config, ssl_cert_path=args.ssl_cert, ssl_key_path=args.ssl_key
            )
        else:
            interceptor = PastedUrlInterceptor()
    except ConfigError as e:
        logger.error(f"❌ Configuration error: {e}")
        return EXIT_CONFIG

    coordinator = AuthorizationCoordinator(OAuthClient(config), ConsoleSink())

    try:
        result = coordinator.run(
            interceptor, open_browser=not args.no_browser, timeout=args.timeout
        )
    except KeyboardInterrupt:
        print("\nAuthorization cancelled by user", file=sys.stderr)
        return EXIT_FAILED
    except OSError as e:
        logger.error(f"❌ Could not start callback server: {e}")
        return EXIT_FAILED

    if result.timed_out:
        print(
            f"❌ No callback received within {args.timeout:.0f} seconds",
            file=sys.stderr,
        )
        return EXIT_FAILED

    return EXIT_OK if result.success else EXIT_FAILED
