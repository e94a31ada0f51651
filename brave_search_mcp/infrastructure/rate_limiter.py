"""
Dual-window rate limiter for the Brave Search API quota.

Tracks admitted requests in a one-second window and a monthly window.
A call is rejected as soon as either window is exhausted; there is no
queuing and no backoff, the caller fails immediately.

Monthly reset policies:
- "never"    the monthly counter only grows for the process lifetime
- "calendar" the monthly counter resets when the UTC calendar month changes
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Callable, Literal

from loguru import logger

from brave_search_mcp.exceptions import RateLimitExceeded

MonthlyResetPolicy = Literal["never", "calendar"]

WINDOW_SECONDS = 1.0


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class RateWindow:
    second_count: int = 0
    month_count: int = 0
    window_start: float = 0.0
    month_key: tuple[int, int] = (0, 0)


class RateLimiter:
    """Per-second / per-month admission gate shared by all upstream calls."""

    def __init__(
        self,
        per_second: int = 1,
        per_month: int = 15000,
        monthly_reset: MonthlyResetPolicy = "never",
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        if monthly_reset not in ("never", "calendar"):
            raise ValueError(f"Unknown monthly reset policy: {monthly_reset!r}")
        self.per_second = per_second
        self.per_month = per_month
        self.monthly_reset = monthly_reset
        self._clock = clock
        self._wall_clock = wall_clock
        self._lock = asyncio.Lock()

        now = wall_clock()
        self.window = RateWindow(
            window_start=clock(),
            month_key=(now.year, now.month),
        )

    async def check_and_consume(self) -> None:
        """Admit one request or raise RateLimitExceeded without counting it."""
        async with self._lock:
            window = self.window
            now = self._clock()

            if now - window.window_start > WINDOW_SECONDS:
                window.second_count = 0
                window.window_start = now

            if self.monthly_reset == "calendar":
                today = self._wall_clock()
                month_key = (today.year, today.month)
                if month_key != window.month_key:
                    logger.info(
                        f"Monthly quota window rolled over to {month_key[0]}-{month_key[1]:02d} "
                        f"after {window.month_count} requests"
                    )
                    window.month_count = 0
                    window.month_key = month_key

            if window.second_count >= self.per_second:
                logger.warning(
                    f"Per-second rate limit reached ({self.per_second}/s)"
                )
                raise RateLimitExceeded(
                    details={"window": "second", "limit": self.per_second}
                )
            if window.month_count >= self.per_month:
                logger.warning(
                    f"Monthly rate limit reached ({self.per_month}/month)"
                )
                raise RateLimitExceeded(
                    details={"window": "month", "limit": self.per_month}
                )

            window.second_count += 1
            window.month_count += 1

    def snapshot(self) -> RateWindow:
        """Return a copy of the current counters."""
        return replace(self.window)
