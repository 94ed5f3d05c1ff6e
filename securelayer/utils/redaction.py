# securelayer/utils/redaction.py
"""Redact secret-shaped substrings and secret-named fields before log output."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple

from structlog.types import EventDict, WrappedLogger

REDACTED = "[REDACTED]"


@dataclass(frozen=True)
class RedactionRule:
    """A named pattern whose every match is replaced wholly by `replacement`."""

    name: str
    pattern: re.Pattern
    replacement: str = REDACTED

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


# Order matters: the generic assignment rule runs first so `token=sk-...`
# is consumed as a whole.
DEFAULT_RULES: Tuple[RedactionRule, ...] = (
    RedactionRule(
        "assignment",
        re.compile(
            r"(?:key|token|secret|password|authorization)[=:]\s*[\"']?"
            r"([a-zA-Z0-9_\-./+=]{10,})[\"']?",
            re.IGNORECASE,
        ),
    ),
    RedactionRule("google_api_key", re.compile(r"AIza[a-zA-Z0-9_\-]{33}")),
    RedactionRule("openai_api_key", re.compile(r"sk-[a-zA-Z0-9]{20,}")),
    RedactionRule("jwt", re.compile(r"eyJ[a-zA-Z0-9_\-]+\.eyJ[a-zA-Z0-9_\-]+")),
)

SENSITIVE_FIELDS = frozenset(
    {
        "api_key",
        "apikey",
        "api-key",
        "secret",
        "password",
        "token",
        "access_token",
        "refresh_token",
        "authorization",
        "private_key",
        "encryption_key",
        "encrypted_key",
    }
)


def redact(text: str, rules: Optional[Iterable[RedactionRule]] = None) -> str:
    """Apply each rule in order to `text` and return the scrubbed result."""
    for rule in DEFAULT_RULES if rules is None else rules:
        text = rule.apply(text)
    return text


def _normalize_field(name: str) -> str:
    return re.sub(r"[-_\s]", "", name.lower())


_NORMALIZED_FIELDS = frozenset(_normalize_field(f) for f in SENSITIVE_FIELDS)


def is_sensitive_field(name: str) -> bool:
    """Case-insensitive match ignoring dashes, underscores and spaces."""
    return _normalize_field(name) in _NORMALIZED_FIELDS


def redact_value(value: Any, rules: Optional[Iterable[RedactionRule]] = None) -> Any:
    """Recursively scrub strings and secret-named fields in a nested structure."""
    if isinstance(value, str):
        return redact(value, rules)
    if isinstance(value, dict):
        return {
            k: REDACTED
            if isinstance(k, str) and is_sensitive_field(k)
            else redact_value(v, rules)
            for k, v in value.items()
        }
    if isinstance(value, list):
        return [redact_value(v, rules) for v in value]
    if isinstance(value, tuple):
        return tuple(redact_value(v, rules) for v in value)
    return value


def redact_processor(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """structlog processor: scrub every field of the event before rendering."""
    return redact_value(event_dict)
