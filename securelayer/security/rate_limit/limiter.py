from __future__ import annotations

import asyncio
import time
from typing import Callable, Optional

from securelayer.core.config import settings
from securelayer.utils.logger import get_logger

from .models import RateLimitConfig, RateLimitResult
from .store import InMemoryRateLimitStore, RateLimitStore

logger = get_logger(__name__)


class RateLimiter:
    """
    Per-key fixed-window admission control.

    The first request for a key (or the first after its window has ended)
    opens a new window of `config.window_seconds` and is allowed; later
    requests are allowed until `config.max_requests` is reached, then denied
    until the window ends. `check` never raises and never waits.

    Lifecycle: create at service startup, `await start()` to run the expiry
    sweep as an owned background task, `await stop()` at shutdown (or use
    `async with`). The sweep only bounds memory; expired entries are also
    replaced on their next access.
    """

    def __init__(
        self,
        store: Optional[RateLimitStore] = None,
        *,
        sweep_interval: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.store = store if store is not None else InMemoryRateLimitStore()
        self.sweep_interval = (
            sweep_interval
            if sweep_interval is not None
            else settings.RATE_LIMIT_SWEEP_INTERVAL_SECONDS
        )
        self._clock = clock
        self._sweep_task: Optional[asyncio.Task] = None

    def check(self, config: RateLimitConfig, key: str) -> RateLimitResult:
        result = self.store.hit(key, config, self._clock())
        if not result.allowed:
            logger.warning(
                "rate_limit_exceeded",
                limiter=config.name,
                limit_key=key,
                max_requests=config.max_requests,
                window_seconds=config.window_seconds,
            )
        return result

    def sweep(self) -> int:
        removed = self.store.sweep(self._clock())
        if removed:
            logger.debug("rate_limit_sweep", removed=removed, active=len(self.store))
        return removed

    @property
    def running(self) -> bool:
        return self._sweep_task is not None and not self._sweep_task.done()

    async def start(self) -> None:
        """Start the periodic expiry sweep on the running event loop"""
        if self.running:
            logger.warning("Rate limit sweeper already started")
            return

        self._sweep_task = asyncio.create_task(self._sweep_loop())
        logger.info("Started rate limit sweeper", sweep_interval=self.sweep_interval)

    async def stop(self) -> None:
        """Cancel the sweep task and wait for it to finish"""
        if self._sweep_task:
            self._sweep_task.cancel()
            try:
                await self._sweep_task
            except asyncio.CancelledError:
                pass
            self._sweep_task = None

        logger.info("Stopped rate limit sweeper")

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self.sweep_interval)
            try:
                self.sweep()
            except Exception as e:
                logger.error(f"Rate limit sweep failed: {e}", exc_info=True)

    async def __aenter__(self) -> "RateLimiter":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()
