"""In-memory token-bucket rate limiting keyed by tool name (per-process, best-effort)."""

from __future__ import annotations

import asyncio
import time
from typing import Dict, Optional


class TokenBucket:
    """Refills continuously at ``rate`` tokens per second up to ``capacity``."""

    def __init__(self, rate: float, capacity: float) -> None:
        self.rate = rate
        self.capacity = capacity
        self.tokens = capacity
        self.updated_at = time.monotonic()
        self._lock = asyncio.Lock()

    def _refill(self) -> None:
        now = time.monotonic()
        self.tokens = min(self.capacity, self.tokens + (now - self.updated_at) * self.rate)
        self.updated_at = now

    async def try_take(self, amount: float = 1.0) -> bool:
        async with self._lock:
            self._refill()
            if self.tokens < amount:
                return False
            self.tokens -= amount
            return True


class PerKeyRateLimiter:
    """
    One bucket per key, created on first use.

    Keys listed in ``per_tool`` get their own rate and a burst of one
    second's worth of tokens (at least one); every other key shares the
    default ``rate_per_sec``/``burst`` settings.
    """

    def __init__(
        self,
        rate_per_sec: float,
        burst: float | None = None,
        *,
        per_tool: Optional[Dict[str, float]] = None,
    ) -> None:
        self.rate = rate_per_sec
        self.burst = burst if burst is not None else rate_per_sec
        self.per_tool = dict(per_tool or {})
        self._buckets: Dict[str, TokenBucket] = {}
        self._lock = asyncio.Lock()

    def bucket_for(self, key: str) -> TokenBucket:
        override = self.per_tool.get(key)
        if override is None:
            return TokenBucket(self.rate, self.burst)
        return TokenBucket(override, max(override, 1.0))

    async def allow(self, key: str) -> bool:
        async with self._lock:
            bucket = self._buckets.get(key)
            if bucket is None:
                bucket = self._buckets[key] = self.bucket_for(key)
        return await bucket.try_take()
