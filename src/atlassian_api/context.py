"""Cancellation and deadline signal passed alongside every request."""

import threading
import time

from atlassian_api.errors import CancelledError, DeadlineExceededError


class Context:
    """Cooperative cancellation token with an optional monotonic deadline.

    A context may be shared by several calls and cancelled from any thread.
    """

    def __init__(self, deadline=None):
        self.deadline = deadline
        self._cancelled = threading.Event()

    @classmethod
    def background(cls):
        return cls()

    @classmethod
    def with_timeout(cls, seconds):
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self):
        self._cancelled.set()

    def remaining(self):
        """Seconds left before the deadline, or None when there is none."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def err(self):
        if self._cancelled.is_set():
            return CancelledError()
        if self.deadline is not None and time.monotonic() >= self.deadline:
            return DeadlineExceededError()
        return None

    def done(self):
        return self.err() is not None

    def wait(self, delay):
        """Sleep for ``delay`` seconds unless cancelled first.

        Returns None when the full delay elapsed, otherwise the
        CancelledError/DeadlineExceededError that cut it short.
        """
        remaining = self.remaining()
        if remaining is not None and remaining < delay:
            if self._cancelled.wait(remaining):
                return CancelledError()
            return DeadlineExceededError()
        if self._cancelled.wait(delay):
            return CancelledError()
        return None
