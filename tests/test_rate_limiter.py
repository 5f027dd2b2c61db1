"""Tests for the per-session rate limiter."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from promptpilot.core.enhancement import CooldownError, ErrorKind, RateLimiter


class TestRateLimiter:
    """Tests for cooldown enforcement."""

    def test_first_request_allowed(self):
        limiter = RateLimiter()
        assert limiter.remaining_ms(0) == 0
        limiter.try_acquire(0)
        assert limiter.last_request_ms == 0

    def test_request_inside_window_rejected(self):
        limiter = RateLimiter(min_interval_ms=30000)
        limiter.try_acquire(1_000)

        with pytest.raises(CooldownError) as exc_info:
            limiter.try_acquire(11_000)

        error = exc_info.value
        assert error.kind == ErrorKind.COOLDOWN
        assert error.remaining_ms == 20000
        assert error.retry_after_ms == 20000
        assert "20 seconds" in error.message

    def test_rejection_does_not_reset_window(self):
        limiter = RateLimiter(min_interval_ms=30000)
        limiter.try_acquire(1_000)
        with pytest.raises(CooldownError):
            limiter.try_acquire(11_000)

        assert limiter.last_request_ms == 1_000
        assert limiter.remaining_ms(21_000) == 10000

    def test_request_after_window_allowed(self):
        limiter = RateLimiter(min_interval_ms=30000)
        limiter.try_acquire(0)
        limiter.try_acquire(31_000)
        assert limiter.last_request_ms == 31_000

    def test_exact_boundary_allowed(self):
        limiter = RateLimiter(min_interval_ms=30000)
        limiter.try_acquire(0)
        limiter.try_acquire(30_000)

    def test_partial_second_rounds_up(self):
        limiter = RateLimiter(min_interval_ms=30000)
        limiter.try_acquire(0)
        with pytest.raises(CooldownError) as exc_info:
            limiter.try_acquire(29_999.5)
        assert exc_info.value.remaining_ms == 1
        assert exc_info.value.message == "Please wait 1 second before enhancing another prompt."

    def test_uses_injected_clock(self, clock):
        limiter = RateLimiter(min_interval_ms=30000, clock=clock)
        limiter.try_acquire()
        clock.advance(5_000)
        assert limiter.remaining_ms() == 25000

    def test_concurrent_acquire_admits_one(self):
        limiter = RateLimiter(min_interval_ms=30000)

        def attempt(_):
            try:
                limiter.try_acquire(5_000)
                return True
            except CooldownError:
                return False

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(attempt, range(32)))

        assert results.count(True) == 1
