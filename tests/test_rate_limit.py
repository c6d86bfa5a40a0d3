"""
Unit tests for the fixed-window rate limiter.
"""
import pytest

from core.services.services_rate_limit import FixedWindowRateLimiter


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestFixedWindow:

    def test_allows_up_to_limit(self):
        limiter = FixedWindowRateLimiter(max_requests=2, window_seconds=60, clock=FakeClock())

        assert limiter.hit("ip").allowed
        assert limiter.hit("ip").allowed
        assert not limiter.hit("ip").allowed

    def test_keys_are_independent(self):
        limiter = FixedWindowRateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())

        assert limiter.hit("a").allowed
        assert limiter.hit("b").allowed
        assert not limiter.hit("a").allowed

    def test_window_resets(self):
        clock = FakeClock()
        limiter = FixedWindowRateLimiter(max_requests=1, window_seconds=60, clock=clock)

        limiter.hit("ip")
        assert not limiter.hit("ip").allowed

        clock.now = 60.0
        decision = limiter.hit("ip")
        assert decision.allowed
        assert decision.remaining == 0

    def test_reset_after_counts_down(self):
        clock = FakeClock()
        limiter = FixedWindowRateLimiter(max_requests=5, window_seconds=900, clock=clock)

        limiter.hit("ip")
        clock.now = 100.0
        assert limiter.hit("ip").reset_after == pytest.approx(800.0)

    @pytest.mark.parametrize("kwargs", [{"max_requests": 0, "window_seconds": 1}, {"max_requests": 1, "window_seconds": 0}])
    def test_rejects_bad_configuration(self, kwargs):
        with pytest.raises(ValueError):
            FixedWindowRateLimiter(**kwargs)
