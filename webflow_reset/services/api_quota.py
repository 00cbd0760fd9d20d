"""
API Quota Pacing Service
Spaces out Webflow API calls so a run never trips the remote rate limit
"""

import asyncio
import time
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class RequestPacer:
    """
    Minimum-interval gate shared by every call site of one run.

    The quota window is the earliest (monotonic) time at which the next
    call may go out. Every consumer awaits `consume_quota()` right before
    its request; the window is then pushed `min_interval` seconds past
    the moment the caller was released.
    """

    def __init__(
        self,
        min_interval: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    ):
        """
        Initialize request pacer

        Args:
            min_interval: Seconds that must pass between two calls
            clock: Monotonic time source (seconds)
            sleep: Coroutine used to suspend the caller
        """
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._next_available = 0.0

    @property
    def quota_window(self) -> float:
        """Earliest time at which the next call may be issued"""
        return self._next_available

    async def consume_quota(self, custom_delay: Optional[float] = None):
        """
        Sleep until quota becomes available, and mark that new quota as used.

        Args:
            custom_delay: Wait exactly this many seconds instead of the
                remaining pacing interval (e.g. the 60s publish limit)
        """
        if custom_delay is not None:
            wait = custom_delay
        else:
            wait = self._next_available - self._clock()

        if wait > 0:
            logger.debug(f"⏳ Pacing: sleeping {wait:.2f}s")
            await self._sleep(wait)

        self._next_available = self._clock() + self.min_interval
