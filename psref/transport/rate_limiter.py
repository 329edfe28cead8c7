# psref/transport/rate_limiter.py

"""Token bucket shared by every request a client sends."""

import logging
import threading
import time
from collections.abc import Callable

from psref.errors import DeadlineExceeded
from psref.transport.cancellation import CancelToken

logger = logging.getLogger("psref.rate_limiter")


class TokenBucket:
    """Token bucket refilled at ``rate`` tokens per second up to ``burst``.

    The bucket starts full.  A request that finds it empty reserves the
    next token anyway (the count goes negative) and sleeps until that
    token is due, so concurrent callers queue up in arrival order.
    The lock is only held while the count is updated, never while
    sleeping.
    """

    def __init__(
        self,
        rate: float,
        burst: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if rate <= 0:
            raise ValueError("rate must be positive")
        if burst < 1:
            raise ValueError("burst must be at least 1")
        self.rate = rate
        self.burst = burst
        self._clock = clock
        self._tokens: float = float(burst)
        self._last: float = clock()
        self._lock = threading.Lock()

    @classmethod
    def every(cls, interval: float, burst: int) -> "TokenBucket":
        """One token per *interval* seconds, bursting up to *burst*."""
        if interval <= 0:
            raise ValueError("interval must be positive")
        return cls(1.0 / interval, burst)

    def _advance(self, now: float) -> None:
        elapsed = max(0.0, now - self._last)
        self._tokens = min(
            float(self.burst), self._tokens + elapsed * self.rate
        )
        self._last = now

    def reserve(self, deadline: float | None = None) -> float:
        """Take one token and return how long to wait before using it.

        Raises DeadlineExceeded without taking the token when the wait
        would end after *deadline*.
        """
        with self._lock:
            now = self._clock()
            self._advance(now)
            delay = 0.0
            if self._tokens < 1:
                delay = (1 - self._tokens) / self.rate
            if deadline is not None and now + delay > deadline:
                raise DeadlineExceeded(
                    f"rate limiter wait of {delay:.2f}s would exceed deadline"
                )
            self._tokens -= 1
            return delay

    def cancel_reservation(self) -> None:
        """Give back a token taken by :meth:`reserve` but never used."""
        with self._lock:
            self._advance(self._clock())
            self._tokens = min(float(self.burst), self._tokens + 1)

    def wait(self, cancel: CancelToken | None = None) -> None:
        """Block until a request may be sent.

        Raises Cancelled (or DeadlineExceeded) as soon as *cancel* fires.
        """
        if cancel is None:
            cancel = CancelToken()
        cancel.raise_if_cancelled()

        delay = self.reserve(cancel.deadline)
        if delay <= 0:
            return
        logger.debug("Rate limit reached. Waiting %.2f seconds", delay)
        if cancel.wait(delay):
            self.cancel_reservation()
            raise cancel.error()

    def get_stats(self) -> dict[str, float]:
        """Current rate limiter statistics."""
        with self._lock:
            self._advance(self._clock())
            return {
                "tokens": self._tokens,
                "rate": self.rate,
                "burst": float(self.burst),
            }
