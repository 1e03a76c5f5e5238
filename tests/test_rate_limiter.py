"""
Tests for the per-client rate limiter
"""

import pytest

from backend_api.services.rate_limiter import RateLimiter
from tests.conftest import FakeClock


class TestRateLimiter:
    """Tests for minimum-interval admission"""

    def setup_method(self):
        """Setup test fixtures"""
        self.limiter = RateLimiter(min_interval=0.8)

    def test_first_request_accepted(self):
        assert self.limiter.admit("1.2.3.4", now=10.0).accepted

    def test_rapid_second_request_rejected(self):
        """Test a request inside the interval is rejected, then accepted at the boundary"""
        assert self.limiter.admit("c", now=10.0).accepted

        second = self.limiter.admit("c", now=10.5)
        third = self.limiter.admit("c", now=10.8)

        assert not second.accepted
        assert second.retry_after == pytest.approx(0.3)
        assert third.accepted

    def test_rejection_does_not_reset_timer(self):
        """Test only accepted requests update the timestamp"""
        self.limiter.admit("c", now=10.0)
        assert not self.limiter.admit("c", now=10.7).accepted

        # Interval still measured from 10.0, not from the rejected 10.7
        assert self.limiter.admit("c", now=10.8).accepted
        assert not self.limiter.admit("c", now=11.0).accepted

    def test_clients_are_independent(self):
        """Test one client's traffic does not limit another"""
        self.limiter.admit("a", now=10.0)

        assert self.limiter.admit("b", now=10.1).accepted
        assert len(self.limiter) == 2

    def test_uses_clock_when_now_omitted(self):
        """Test the injected clock drives admission"""
        clock = FakeClock(start=50.0)
        limiter = RateLimiter(min_interval=0.8, clock=clock)

        assert limiter.admit("c").accepted
        clock.advance(0.5)
        assert not limiter.admit("c").accepted
        clock.advance(0.5)
        assert limiter.admit("c").accepted


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
