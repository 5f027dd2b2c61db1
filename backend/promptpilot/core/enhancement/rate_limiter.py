"""Per-session cooldown between enhancement requests."""

import logging
import math
import threading
import time
from typing import Callable, Optional

from .errors import CooldownError

logger = logging.getLogger(__name__)


def monotonic_ms() -> float:
    """Default clock: monotonic time in milliseconds."""
    return time.monotonic() * 1000


class RateLimiter:
    """Enforces a minimum interval between dispatched requests.

    Owns the session's RateLimitState (the last dispatch timestamp). The
    check-and-set in ``try_acquire`` runs under a lock so two near
    simultaneous submissions can never both pass.
    """

    def __init__(
        self,
        min_interval_ms: int = 30000,
        clock: Callable[[], float] = monotonic_ms,
    ):
        self.min_interval_ms = min_interval_ms
        self._clock = clock
        self._last_request_ms: Optional[float] = None
        self._lock = threading.Lock()

    @property
    def last_request_ms(self) -> Optional[float]:
        return self._last_request_ms

    def try_acquire(self, now_ms: Optional[float] = None) -> None:
        """Record a dispatch at ``now_ms`` or raise CooldownError.

        Raises:
            CooldownError: If the previous dispatch is within the interval.
                The recorded timestamp is left unchanged.
        """
        now = self._clock() if now_ms is None else now_ms
        with self._lock:
            remaining = self._remaining(now)
            if remaining > 0:
                logger.info(f"Cooldown active: remaining_ms={remaining}")
                raise CooldownError(remaining)
            self._last_request_ms = now

    def remaining_ms(self, now_ms: Optional[float] = None) -> int:
        """Remaining cooldown at ``now_ms`` (0 when a request may be sent)."""
        now = self._clock() if now_ms is None else now_ms
        with self._lock:
            return self._remaining(now)

    def _remaining(self, now: float) -> int:
        if self._last_request_ms is None:
            return 0
        elapsed = now - self._last_request_ms
        if elapsed >= self.min_interval_ms:
            return 0
        return math.ceil(self.min_interval_ms - elapsed)
