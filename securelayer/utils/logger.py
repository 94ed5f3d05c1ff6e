"""
Structured logging configuration using structlog, with secret redaction.

Two entry points:
- `get_logger(__name__)` returns an application logger whose events pass
  through `redact_processor` before rendering.
- `RedactingLog` offers console-style leveled calls (`log.info("x", obj, exc)`)
  that stringify heterogeneous arguments, scrub them and write one
  `[LEVEL] message` line to stderr.
"""

import json
import logging
import sys
from typing import Any, Iterable, Optional, TextIO

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from securelayer.core.config import settings
from securelayer.utils.redaction import RedactionRule, redact, redact_processor


def configure_logging() -> None:
    """
    Configure structured logging for the entire application.

    This function sets up:
    - Development: Human-readable logs with colors
    - Production: JSON structured logs for machine processing

    Exceptions are rendered to text before redaction so traceback messages
    are scrubbed too.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    )

    processors: list[Processor] = [
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
    ]

    if settings.is_development:
        processors.extend(
            [
                # log.exception() without exc_info
                structlog.dev.set_exc_info,
                structlog.processors.format_exc_info,
                redact_processor,
                structlog.dev.ConsoleRenderer(
                    colors=True, exception_formatter=structlog.dev.plain_traceback
                ),
            ]
        )
    else:
        processors.extend(
            [
                structlog.processors.format_exc_info,
                redact_processor,
                structlog.processors.JSONRenderer(),
            ]
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


_LEVEL_PREFIXES = {
    "info": "INFO",
    "warning": "WARN",
    "error": "ERROR",
    "debug": "DEBUG",
}


def _render_line(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
    return f"[{_LEVEL_PREFIXES[method_name]}] {event_dict['event']}"


def _to_text(arg: Any) -> str:
    """Reduce one log argument to text; never raises."""
    try:
        if isinstance(arg, str):
            return arg
        if isinstance(arg, BaseException):
            return str(arg) or type(arg).__name__
        return json.dumps(arg, default=str)
    except Exception:  # noqa: BLE001 - unserializable or hostile __str__/__repr__
        try:
            return str(arg)
        except Exception:  # noqa: BLE001
            return object.__repr__(arg)


class RedactingLog:
    """
    Leveled logger that scrubs secret-shaped substrings before emission.

    Every argument is converted to text first (exceptions to their message,
    structured values to JSON, strings unchanged), then each piece is passed
    through the ordered redaction rules and the pieces are joined by spaces.
    `debug` is dropped in production; the other levels always emit.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        *,
        stream: Optional[TextIO] = None,
        production: Optional[bool] = None,
        rules: Optional[Iterable[RedactionRule]] = None,
    ) -> None:
        self.name = name or settings.APP_NAME
        self._production = production
        self._rules = tuple(rules) if rules is not None else None
        # Injected streams are fixed for the instance's lifetime.
        self._logger = self._wrap(stream) if stream is not None else None

    @property
    def production(self) -> bool:
        if self._production is None:
            return settings.is_production
        return self._production

    def format(self, *args: Any) -> str:
        """Return the redacted, space-joined text for `args`."""
        return " ".join(redact(_to_text(arg), self._rules) for arg in args)

    def _wrap(self, file: TextIO) -> Any:
        return structlog.wrap_logger(
            structlog.PrintLogger(file=file),
            processors=[_render_line],
            wrapper_class=structlog.BoundLogger,
            context_class=dict,
            cache_logger_on_first_use=False,
            logger_name=self.name,
        )

    def _emit(self, method_name: str, args: tuple) -> None:
        try:
            # stderr is resolved per call so redirected streams are honoured.
            logger = self._logger if self._logger is not None else self._wrap(sys.stderr)
            getattr(logger, method_name)(self.format(*args))
        except Exception:  # noqa: BLE001 - logging must never reach the caller
            return

    def info(self, *args: Any) -> None:
        self._emit("info", args)

    def warn(self, *args: Any) -> None:
        self._emit("warning", args)

    warning = warn

    def error(self, *args: Any) -> None:
        self._emit("error", args)

    def debug(self, *args: Any) -> None:
        if self.production:
            return
        self._emit("debug", args)


# Shared instance for modules that want console-style calls.
log = RedactingLog()

# Initialize logging with sensible defaults; services may call
# configure_logging() again after adjusting settings.
configure_logging()
