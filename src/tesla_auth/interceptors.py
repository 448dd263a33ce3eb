"""
Redirect interceptor that reads URLs pasted into the terminal.

Tesla redirects to https://auth.tesla.com/void/callback, which renders a
"Page Not Found" in a regular browser. The user copies that page's URL
from the address bar and pastes it here.
"""

import logging
import sys
import threading
from typing import Optional, TextIO

from .coordinator import RedirectChannel, RedirectInterceptor

logger = logging.getLogger(__name__)

PASTE_PROMPT = (
    "After signing in, your browser lands on a 'Page Not Found' page.\n"
    "Copy the full URL from the address bar and paste it below.\n"
)


class PastedUrlInterceptor(RedirectInterceptor):
    """Publishes each non-empty line read from a text stream.

    End of input closes the channel, unless stop() was called first.
    """

    def __init__(self, stream: Optional[TextIO] = None, prompt: Optional[str] = PASTE_PROMPT):
        """
        Initialize interceptor.

        Args:
            stream: Source of pasted URLs (default: stdin)
            prompt: Text shown before reading (None for no prompt)
        """
        self.stream = stream or sys.stdin
        self.prompt = prompt
        self._stopped = threading.Event()
        self._reader: Optional[threading.Thread] = None

    def start(self, channel: RedirectChannel) -> None:
        if self.prompt:
            print(self.prompt, file=sys.stderr)

        # Daemon: a blocking readline cannot be interrupted on stop()
        self._reader = threading.Thread(
            target=self._read, args=(channel,), name="tesla-auth-paste", daemon=True
        )
        self._reader.start()

    def stop(self) -> None:
        self._stopped.set()

    def _read(self, channel: RedirectChannel) -> None:
        for line in iter(self.stream.readline, ""):
            if self._stopped.is_set():
                break
            url = line.strip()
            if url:
                logger.debug("Read pasted URL")
                channel.publish(url)

        if not self._stopped.is_set():
            logger.debug("Paste stream closed")
            channel.close()
