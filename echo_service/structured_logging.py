"""Structured logging built on structlog, with correlation id tracking."""

import logging
import os
import sys
import uuid
from contextvars import ContextVar, Token
from typing import Any, Optional, TextIO

import structlog
from pydantic import BaseModel, Field
from structlog.stdlib import BoundLogger
from structlog.typing import EventDict, WrappedLogger

LOGGING_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

LOG_FORMATS = {"json", "keyvalue"}

# Fields rendered at the top level of a record; everything else goes under "extra"
CONTEXT_FIELDS = {"stream", "logging_level", "context"}
TRACE_FIELDS = {"thread", "trace_id", "trace_flags", "span_id"}
RESERVED_FIELDS = {"message", "level", "logger", "timestamp", "correlation_id", "exception"}

_HANDLER_MARKER = "_echo_service_handler"

# Context variable to store correlation ID across async calls
_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


class LoggingContext(BaseModel):
    """Logging settings, read from the environment when not given explicitly."""

    stream: str = Field(default_factory=lambda: os.getenv("STREAM", "stdout"))
    logging_level: str = Field(default_factory=lambda: os.getenv("LOGGING_LEVEL", "INFO"))
    log_format: str = Field(default_factory=lambda: os.getenv("LOG_FORMAT", "json"))
    context: str = Field(default_factory=lambda: os.getenv("CONTEXT", "default"))


def get_logging_level(level: str) -> int:
    try:
        return LOGGING_LEVELS[level.upper()]
    except KeyError:
        raise ValueError(f"Unsupported logging level: {level}") from None


def get_stream(stream: str) -> TextIO:
    name = stream.lower()
    if name == "stdout":
        return sys.stdout
    if name == "stderr":
        return sys.stderr
    raise ValueError(f"Unsupported stream: {stream}")


def generate_correlation_id() -> str:
    """Generate a new correlation ID."""
    return str(uuid.uuid4())


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID for the current context."""
    _correlation_id.set(correlation_id)


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID."""
    return _correlation_id.get()


def get_or_create_correlation_id() -> str:
    """Get existing correlation ID or create a new one."""
    correlation_id = get_correlation_id()
    if correlation_id is None:
        correlation_id = generate_correlation_id()
        set_correlation_id(correlation_id)
    return correlation_id


class CorrelationContext:
    """Context manager that scopes a correlation ID to a block."""

    def __init__(self, correlation_id: Optional[str] = None):
        self.correlation_id = correlation_id or generate_correlation_id()
        self.token: Optional[Token[Optional[str]]] = None

    def __enter__(self) -> str:
        self.token = _correlation_id.set(self.correlation_id)
        return self.correlation_id

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self.token is not None:
            _correlation_id.reset(self.token)
            self.token = None


def add_correlation_id(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    correlation_id = get_correlation_id()
    if correlation_id and "correlation_id" not in event_dict:
        event_dict["correlation_id"] = correlation_id
    return event_dict


def process_log_fields(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Rename the event to ``message`` and nest non-standard keys under ``extra``."""
    processed: EventDict = {"message": event_dict.pop("event", "")}
    extra: dict[str, Any] = {}

    for key, value in event_dict.items():
        if key in RESERVED_FIELDS or key in CONTEXT_FIELDS or key in TRACE_FIELDS:
            processed[key] = value
        else:
            extra[key] = value

    if extra:
        processed["extra"] = extra
    return processed


def set_context_fields(context: LoggingContext) -> None:
    """Bind the logging context to every record emitted from now on."""
    structlog.contextvars.bind_contextvars(
        stream=context.stream,
        logging_level=context.logging_level,
        context=context.context,
    )


def clear_context_fields() -> None:
    structlog.contextvars.clear_contextvars()


def _install_handler(stream: TextIO, level: int) -> None:
    root_logger = logging.getLogger()

    # Replace only our own handler so that handlers installed by the host stay in place
    for handler in root_logger.handlers[:]:
        if getattr(handler, _HANDLER_MARKER, False):
            root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    setattr(handler, _HANDLER_MARKER, True)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)


def configure_structlog(context: Optional[LoggingContext] = None) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        context: Logging settings. Defaults to a ``LoggingContext`` read from the environment.
    """
    context = context or LoggingContext()
    level = get_logging_level(context.logging_level)
    stream = get_stream(context.stream)

    if context.log_format not in LOG_FORMATS:
        raise ValueError(f"Unsupported log format: {context.log_format}")

    renderer: Any
    if context.log_format == "keyvalue":
        renderer = structlog.processors.KeyValueRenderer(key_order=["message", "level", "logger"], drop_missing=True)
    else:
        renderer = structlog.processors.JSONRenderer()

    _install_handler(stream, level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
            add_correlation_id,
            structlog.processors.format_exc_info,
            process_log_fields,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    clear_context_fields()
    set_context_fields(context)


def get_logger(name: str = "") -> BoundLogger:
    """Return a structlog logger, named after this module when no name is given."""
    return structlog.stdlib.get_logger(name or __name__)  # type: ignore[no-any-return]
