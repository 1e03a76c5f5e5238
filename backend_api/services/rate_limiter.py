"""
Per-client rate limiter for the chat endpoint

Each client may have at most one accepted request per minimum interval.
Only accepted requests move the client's timestamp; rejected attempts cost
nothing beyond the wait. Entries live for the process lifetime.
"""

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from backend_model.config import settings
from backend_model.logger import logger


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of an admission check"""
    accepted: bool
    retry_after: float = 0.0  # Seconds until the client would be admitted


class RateLimiter:
    """Minimum-interval limiter keyed by client identity (origin address)"""

    def __init__(self, min_interval: Optional[float] = None, clock: Callable[[], float] = time.monotonic):
        """
        Args:
            min_interval: Seconds required between accepted requests (default from settings)
            clock: Source of the current time in seconds
        """
        self.min_interval = settings.rate_limit_interval if min_interval is None else min_interval
        self.clock = clock
        self._last_request_at: Dict[str, float] = {}

    def admit(self, client_id: str, now: Optional[float] = None) -> RateLimitDecision:
        """
        Decide whether a request from client_id is accepted at time now.

        Args:
            client_id: Client identity
            now: Current time in seconds (defaults to the limiter's clock)

        Returns:
            RateLimitDecision
        """
        if now is None:
            now = self.clock()

        last = self._last_request_at.get(client_id)
        if last is not None:
            elapsed = now - last
            if elapsed < self.min_interval:
                retry_after = self.min_interval - elapsed
                logger.info(f"Rate limited client {client_id} (retry in {retry_after:.2f}s)")
                return RateLimitDecision(accepted=False, retry_after=retry_after)

        self._last_request_at[client_id] = now
        return RateLimitDecision(accepted=True)

    def __len__(self) -> int:
        return len(self._last_request_at)
