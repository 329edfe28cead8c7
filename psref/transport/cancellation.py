# psref/transport/cancellation.py

"""Cancellation token threaded through every blocking call."""

import threading
import time
from concurrent.futures import Future
from typing import TypeVar

from psref.errors import Cancelled, DeadlineExceeded

T = TypeVar("T")


class CancelToken:
    """A cancel signal with an optional monotonic deadline.

    One token may be shared by several threads; ``cancel()`` wakes every
    thread blocked in :meth:`wait` or :meth:`wait_for`.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._listeners: list[threading.Event] = []
        self.deadline: float | None = (
            time.monotonic() + timeout if timeout is not None else None
        )

    def cancel(self) -> None:
        """Fire the token."""
        with self._lock:
            self._event.set()
            listeners = list(self._listeners)
        for wake in listeners:
            wake.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None when unbounded."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def error(self) -> Cancelled:
        """Build the exception matching the token's state."""
        if self.cancelled:
            return Cancelled("operation cancelled")
        return DeadlineExceeded("deadline exceeded")

    def raise_if_cancelled(self) -> None:
        if self.cancelled or self.expired:
            raise self.error()

    def wait(self, seconds: float) -> bool:
        """Sleep up to *seconds*; return True if the token fired first."""
        remaining = self.remaining()
        if remaining is not None and remaining < seconds:
            self._event.wait(remaining)
            return True
        return self._event.wait(seconds)

    def wait_for(self, future: "Future[T]") -> T:
        """Return the result of *future*, or raise as soon as the token fires.

        The future is abandoned, not interrupted, when the token wins;
        whatever it eventually produces is discarded.
        """
        wake = threading.Event()
        future.add_done_callback(lambda _: wake.set())
        with self._lock:
            self._listeners.append(wake)
            if self._event.is_set():
                wake.set()
        try:
            wake.wait(self.remaining())
        finally:
            with self._lock:
                self._listeners.remove(wake)

        if not future.done():
            future.cancel()
            raise self.error()
        return future.result()
