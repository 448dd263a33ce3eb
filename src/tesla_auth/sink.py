"""
Presentation sinks for the outcome of an authorization flow.

A sink receives either the Tokens or the error that ended the attempt.
"""

import sys
import threading
from typing import List, Optional, TextIO

from .exceptions import TeslaAuthError
from .tokens import Tokens


class PresentationSink:
    """Receives the final outcome of an authorization flow."""

    def on_tokens(self, tokens: Tokens) -> None:
        raise NotImplementedError

    def on_error(self, error: TeslaAuthError) -> None:
        raise NotImplementedError


class ConsoleSink(PresentationSink):
    """Prints tokens to stdout and errors to stderr."""

    def __init__(self, out: Optional[TextIO] = None, err: Optional[TextIO] = None):
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def on_tokens(self, tokens: Tokens) -> None:
        print(f"Access Token:  {tokens.access_token}", file=self.out)
        print(f"Refresh Token:  {tokens.refresh_token or '-'}", file=self.out)
        if tokens.expires_in is not None:
            print(f"Expires In:  {tokens.expires_in}s", file=self.out)
        self.out.flush()

    def on_error(self, error: TeslaAuthError) -> None:
        print(f"❌ Authorization failed: {error}", file=self.err)
        description = getattr(error, "error_description", None)
        if description:
            print(f"   {description}", file=self.err)
        self.err.flush()


class CollectingSink(PresentationSink):
    """Keeps every outcome it receives; handy for embedding and tests."""

    def __init__(self):
        self.tokens: List[Tokens] = []
        self.errors: List[TeslaAuthError] = []
        self._lock = threading.Lock()

    def on_tokens(self, tokens: Tokens) -> None:
        with self._lock:
            self.tokens.append(tokens)

    def on_error(self, error: TeslaAuthError) -> None:
        with self._lock:
            self.errors.append(error)
