from .limiter import RateLimiter
from .models import (
    AI_RATE_LIMIT,
    NAMED_RATE_LIMITS,
    UPLOAD_RATE_LIMIT,
    RateLimitConfig,
    RateLimitEntry,
    RateLimitResult,
    get_named_rate_limit,
)
from .store import InMemoryRateLimitStore, RateLimitStore

__all__ = [
    "RateLimiter",
    "RateLimitConfig",
    "RateLimitEntry",
    "RateLimitResult",
    "RateLimitStore",
    "InMemoryRateLimitStore",
    "AI_RATE_LIMIT",
    "UPLOAD_RATE_LIMIT",
    "NAMED_RATE_LIMITS",
    "get_named_rate_limit",
]
