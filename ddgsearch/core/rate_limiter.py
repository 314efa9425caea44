"""
Rate Limiter
Spaces consecutive outbound requests made through one client
"""
import threading
import time
from typing import Callable, Optional


class RateLimiter:
    """
    Blocks a request when the previous one went out less than ``window`` seconds ago.

    The first request never waits. After that, any request issued inside the
    window sleeps ``sleep_duration`` before going out. The last-call timestamp
    is shared by every search running on the client, so it is read and written
    under a lock; the sleep happens while holding it, which queues concurrent
    callers behind each other.
    """

    def __init__(
        self,
        sleep_duration: float = 1.5,
        window: float = 20.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.sleep_duration = max(0.0, float(sleep_duration))
        self.window = max(0.0, float(window))
        self._clock = clock
        self._sleep = sleep
        self._last_call: Optional[float] = None
        self._lock = threading.Lock()

    def wait(self) -> float:
        """Pace the calling thread; returns the number of seconds slept."""
        with self._lock:
            slept = 0.0
            if self._last_call is not None:
                elapsed = self._clock() - self._last_call
                if elapsed < self.window and self.sleep_duration > 0:
                    self._sleep(self.sleep_duration)
                    slept = self.sleep_duration
            self._last_call = self._clock()
            return slept

    @property
    def last_call(self) -> Optional[float]:
        with self._lock:
            return self._last_call
