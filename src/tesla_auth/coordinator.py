"""
Coordinator for a complete authorization flow.

An interceptor (browser paste, local callback server, embedded webview)
publishes every URL it observes on a RedirectChannel. A single consumer
thread feeds those URLs to the OAuthClient in arrival order and hands the
outcome to a PresentationSink. Producers never wait on the consumer.
"""

import logging
import queue
import threading
import webbrowser
from dataclasses import dataclass
from typing import Iterator, Optional

from .client import OAuthClient
from .exceptions import AuthorizationError, TeslaAuthError
from .sink import CollectingSink, PresentationSink
from .tokens import Tokens

logger = logging.getLogger(__name__)

_CLOSED = object()


class RedirectChannel:
    """Ordered, unbounded, single-reader channel of observed URLs."""

    def __init__(self):
        self._queue: "queue.Queue[object]" = queue.Queue()

    def publish(self, url: str) -> None:
        """Enqueue an observed URL. Never blocks."""
        self._queue.put_nowait(url)

    def close(self) -> None:
        """Signal the reader that no more URLs will arrive."""
        self._queue.put_nowait(_CLOSED)

    def __iter__(self) -> Iterator[str]:
        while True:
            item = self._queue.get()
            if item is _CLOSED:
                return
            yield item


class RedirectInterceptor:
    """Observes browser navigation and publishes visited URLs."""

    def start(self, channel: RedirectChannel) -> None:
        raise NotImplementedError

    def stop(self) -> None:
        pass


@dataclass
class FlowResult:
    """
    Outcome of an authorization flow.

    Attributes:
        success: Whether tokens were obtained
        tokens: Tokens (if successful)
        error: Error that ended the attempt (if failed)
        timed_out: True if the caller stopped waiting before an outcome
    """

    success: bool
    tokens: Optional[Tokens] = None
    error: Optional[TeslaAuthError] = None
    timed_out: bool = False


class AuthorizationCoordinator:
    """
    Runs the consumer side of the authorization flow.

    Example:
        coordinator = AuthorizationCoordinator(OAuthClient(config), ConsoleSink())
        result = coordinator.run(PastedUrlInterceptor())
    """

    def __init__(
        self,
        client: OAuthClient,
        sink: Optional[PresentationSink] = None,
        channel: Optional[RedirectChannel] = None,
    ):
        """
        Initialize coordinator.

        Args:
            client: OAuth client that validates callbacks and exchanges codes
            sink: Receives the outcome (collects it in memory if not provided)
            channel: URL channel (creates one if not provided)
        """
        self.client = client
        self.sink = sink or CollectingSink()
        self.channel = channel or RedirectChannel()
        self.result: Optional[FlowResult] = None
        self._done = threading.Event()
        self._stopping = threading.Event()
        self._consumer: Optional[threading.Thread] = None

    def start(self) -> None:
        """Start the consumer thread."""
        if self._consumer is not None:
            return
        self._consumer = threading.Thread(
            target=self._consume, name="tesla-auth-consumer", daemon=True
        )
        self._consumer.start()

    def wait(self, timeout: Optional[float] = None) -> FlowResult:
        """
        Wait for the flow to finish.

        Args:
            timeout: Maximum seconds to wait (None waits indefinitely)

        Returns:
            FlowResult with tokens or error
        """
        if self._done.wait(timeout=timeout):
            return self.result

        logger.warning(f"Timeout waiting for callback after {timeout}s")
        return FlowResult(success=False, timed_out=True)

    def stop(self) -> None:
        """Close the channel and let the consumer drain and exit."""
        self._stopping.set()
        self.channel.close()
        if self._consumer is not None:
            self._consumer.join(timeout=5)
            self._consumer = None

    def run(
        self,
        interceptor: RedirectInterceptor,
        open_browser: bool = True,
        timeout: Optional[float] = None,
    ) -> FlowResult:
        """
        Run the complete authorization flow.

        1. Generates the authorization URL
        2. Starts the consumer and the interceptor
        3. Opens the browser (or displays the URL)
        4. Waits for the callback and the token exchange

        Args:
            interceptor: Source of observed URLs
            open_browser: Whether to open the system browser
            timeout: Seconds to wait for the outcome (None waits indefinitely)

        Returns:
            FlowResult with tokens or error
        """
        auth_url = self.client.authorization_url()
        self.start()

        try:
            interceptor.start(self.channel)

            print("\nPlease sign in with your Tesla account by visiting:")
            print(f"\n  {auth_url}\n")

            if open_browser:
                try:
                    webbrowser.open(auth_url)
                except webbrowser.Error as e:
                    logger.warning(f"Could not open browser automatically: {e}")

            return self.wait(timeout)
        finally:
            interceptor.stop()
            self.stop()

    def _consume(self) -> None:
        for url in self.channel:
            if self._done.is_set():
                # Terminal: keep draining so producers never pile up
                continue

            try:
                tokens = self.client.handle_url(url)
            except TeslaAuthError as e:
                self._finish(FlowResult(success=False, error=e))
                continue
            except Exception as e:
                logger.exception("Unexpected error while handling callback")
                error = TeslaAuthError(f"Unexpected error while handling callback: {e}")
                error.__cause__ = e
                self._finish(FlowResult(success=False, error=error))
                continue

            if tokens is not None:
                self._finish(FlowResult(success=True, tokens=tokens))

        if not self._done.is_set() and not self._stopping.is_set():
            logger.error("URL input closed before a callback was received")
            self._finish(
                FlowResult(
                    success=False,
                    error=AuthorizationError(
                        "Input closed before a callback was received"
                    ),
                )
            )

    def _finish(self, result: FlowResult) -> None:
        self.result = result
        try:
            if result.success:
                self.sink.on_tokens(result.tokens)
            else:
                self.sink.on_error(result.error)
        except Exception:
            logger.exception("Presentation sink failed")
        finally:
            self._done.set()
