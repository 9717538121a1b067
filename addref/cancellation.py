"""Cooperative cancellation."""

import threading

from .errors import FixCancelled


class CancellationToken:
    """Signal checked at each suspension point.

    Cancelling is one-way; a cancelled token stays cancelled.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self):
        if self._event.is_set():
            raise FixCancelled("Operation was cancelled")

    def wait(self, timeout: float) -> bool:
        """Sleep up to ``timeout`` seconds, returning True once cancelled."""
        return self._event.wait(timeout)
