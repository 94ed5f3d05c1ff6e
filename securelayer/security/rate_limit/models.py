from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from securelayer.core.config import settings


@dataclass(frozen=True)
class RateLimitConfig:
    """Quota for one limiter purpose: `max_requests` per fixed window."""

    max_requests: int
    window_seconds: float
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if self.max_requests <= 0:
            raise ValueError("max_requests must be greater than zero")
        if self.window_seconds <= 0:
            raise ValueError("window_seconds must be greater than zero")


@dataclass
class RateLimitEntry:
    count: int
    reset_at: float  # store clock seconds

    def expired(self, now: float) -> bool:
        return now >= self.reset_at


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    remaining: int
    reset_at: Optional[float] = None


# Keys are not namespaced by the limiter: callers must prefix them per
# purpose ("ai:{org_id}", "upload:{user_id}") or two configs share one counter.
AI_RATE_LIMIT = RateLimitConfig(
    max_requests=settings.RATE_LIMIT_AI_MAX_REQUESTS,
    window_seconds=settings.RATE_LIMIT_AI_WINDOW_SECONDS,
    name="ai",
)

UPLOAD_RATE_LIMIT = RateLimitConfig(
    max_requests=settings.RATE_LIMIT_UPLOAD_MAX_REQUESTS,
    window_seconds=settings.RATE_LIMIT_UPLOAD_WINDOW_SECONDS,
    name="upload",
)

NAMED_RATE_LIMITS: Dict[str, RateLimitConfig] = {
    "ai": AI_RATE_LIMIT,
    "upload": UPLOAD_RATE_LIMIT,
}


def get_named_rate_limit(name: str) -> RateLimitConfig:
    """Look up a configured limiter purpose; unknown names raise KeyError."""
    return NAMED_RATE_LIMITS[name]
