"""
Security package: encryption at rest and request rate limiting.

Components are independent of each other and use structlog for logging.
Shared state (rate-limit counters) sits behind a small store interface so it
can be swapped by environment.
"""
