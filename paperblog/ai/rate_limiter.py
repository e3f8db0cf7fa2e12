import threading
import time
from collections.abc import Callable

from paperblog.logging.logger import Log


class RateLimiter:
    """Spaces calls to the generative backend by a minimum interval.

    One instance is shared by every component of the process that calls the
    backend. The interval is measured from call start to call start, and the
    lock is held while sleeping so concurrent callers queue up in turn.
    """

    def __init__(
        self,
        min_interval_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if min_interval_seconds < 0:
            raise ValueError(
                f"min_interval_seconds must not be negative, got {min_interval_seconds}"
            )
        self._min_interval_seconds = min_interval_seconds
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._last_call: float | None = None

    @property
    def min_interval_seconds(self) -> float:
        return self._min_interval_seconds

    def wait(self) -> None:
        """Block until the next call may start, then record its start time."""
        with self._lock:
            now = self._clock()
            if self._last_call is not None:
                remaining = self._min_interval_seconds - (now - self._last_call)
                if remaining > 0:
                    Log.debug(f"Rate limit: waiting {remaining:.2f}s before AI call")
                    self._sleep(remaining)
                    now = self._clock()
            self._last_call = now
