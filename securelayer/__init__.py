"""securelayer: key encryption, rate limiting and redacted logging."""

__version__ = "0.1.0"
