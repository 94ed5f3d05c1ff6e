from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Dict, Optional

from .models import RateLimitConfig, RateLimitEntry, RateLimitResult


class RateLimitStore(ABC):
    """
    Backing store for fixed-window counters.

    `hit` is the whole read-check-increment-write for one key and must be
    atomic with respect to other `hit` and `sweep` calls. A shared external
    store for multi-instance deployments implements the same contract.
    """

    @abstractmethod
    def hit(self, key: str, config: RateLimitConfig, now: float) -> RateLimitResult:
        ...

    @abstractmethod
    def sweep(self, now: float) -> int:
        """Drop entries whose window has ended; return how many were removed."""
        ...

    @abstractmethod
    def get(self, key: str) -> Optional[RateLimitEntry]:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...

    @abstractmethod
    def __len__(self) -> int:
        ...


class InMemoryRateLimitStore(RateLimitStore):
    """
    Thread-safe single-process store.

    One lock guards the whole mapping; nothing inside it blocks, so it is
    safe to call from both worker threads and the event loop. Contents are
    lost on restart.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, RateLimitEntry] = {}
        self._lock = threading.Lock()

    def hit(self, key: str, config: RateLimitConfig, now: float) -> RateLimitResult:
        with self._lock:
            entry = self._entries.get(key)

            if entry is None or entry.expired(now):
                entry = RateLimitEntry(count=1, reset_at=now + config.window_seconds)
                self._entries[key] = entry
                return RateLimitResult(
                    allowed=True,
                    remaining=config.max_requests - 1,
                    reset_at=entry.reset_at,
                )

            # Denials leave count and reset_at untouched.
            if entry.count >= config.max_requests:
                return RateLimitResult(allowed=False, remaining=0, reset_at=entry.reset_at)

            entry.count += 1
            return RateLimitResult(
                allowed=True,
                remaining=config.max_requests - entry.count,
                reset_at=entry.reset_at,
            )

    def sweep(self, now: float) -> int:
        with self._lock:
            expired = [k for k, e in self._entries.items() if e.expired(now)]
            for key in expired:
                del self._entries[key]
            return len(expired)

    def get(self, key: str) -> Optional[RateLimitEntry]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            return RateLimitEntry(count=entry.count, reset_at=entry.reset_at)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
