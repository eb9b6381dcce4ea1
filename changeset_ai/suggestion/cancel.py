"""Cooperative cancellation for long-running waits."""

import threading


class CancellationToken:
    """Set once by the caller; checked by the code doing the waiting."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float) -> bool:
        """Sleep up to timeout seconds, waking early on cancel. Returns is_cancelled."""
        return self._event.wait(timeout)
