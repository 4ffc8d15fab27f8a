"""
Token bucket rate limiter shared by every call made through one client.
"""
import time
import logging
from threading import Lock

from amap_regeo.geocoding.errors import WaitCancelled

# Get logger
logger = logging.getLogger(__name__)


class TokenBucket:
    """
    Thread-safe token bucket.

    The bucket starts full with ``burst`` tokens and refills at ``rate`` tokens per second.
    A caller that finds the bucket empty reserves the next token (the balance goes negative)
    and sleeps outside the lock until its reservation matures, so concurrent callers queue up
    one refill interval apart.

    Args:
        rate: Tokens added per second
        burst: Bucket capacity
        clock: Monotonic time source, replaceable in tests
    """

    def __init__(self, rate=1.0, burst=1, clock=time.monotonic):
        if rate <= 0:
            raise ValueError("rate must be positive")
        if burst < 1:
            raise ValueError("burst must be at least 1")
        self.rate = rate
        self.burst = burst
        self._clock = clock
        self._tokens = float(burst)
        self._last = clock()
        # Number of reservations handed out, identifies the newest one
        self._issued = 0
        self._lock = Lock()

    def _advance(self, now):
        elapsed = max(0.0, now - self._last)
        self._tokens = min(float(self.burst), self._tokens + elapsed * self.rate)
        self._last = now

    def _reserve(self, timeout):
        with self._lock:
            self._advance(self._clock())
            delay = 0.0
            if self._tokens < 1:
                delay = (1 - self._tokens) / self.rate
            if timeout is not None and delay > timeout:
                raise WaitCancelled(f"rate limiter wait of {delay:.2f}s exceeds timeout {timeout}s")
            self._tokens -= 1
            self._issued += 1
            return delay, self._issued

    def reserve(self, timeout=None):
        """
        Take one token and return how many seconds the caller must wait before using it.

        Raises:
            WaitCancelled: If the wait would exceed ``timeout``. No token is taken in that case.
        """
        delay, _ = self._reserve(timeout)
        return delay

    def release(self, ticket=None):
        """
        Give back a token taken by ``reserve`` but never used.

        The token is only returned while no later reservation exists, since later
        reservations already have their wake up time fixed. ``ticket`` identifies the
        reservation being released, None means the newest one.
        """
        with self._lock:
            if ticket is not None and ticket != self._issued:
                return
            self._advance(self._clock())
            self._tokens = min(float(self.burst), self._tokens + 1)

    def wait(self, timeout=None, cancel=None):
        """
        Block until a token is granted.

        Args:
            timeout: Maximum seconds to wait, None waits as long as needed
            cancel: Optional threading.Event, setting it aborts the wait

        Raises:
            WaitCancelled: If the timeout cannot be met or ``cancel`` is set
        """
        if cancel is not None and cancel.is_set():
            raise WaitCancelled("rate limiter wait cancelled")

        delay, ticket = self._reserve(timeout)
        if delay <= 0:
            return

        logger.debug(f"Rate limiting: waiting {delay:.2f}s")
        if cancel is None:
            time.sleep(delay)
            return

        if cancel.wait(delay):
            self.release(ticket)
            raise WaitCancelled("rate limiter wait cancelled")
