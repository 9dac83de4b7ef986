"""
Structured logging for the product filter service, built on structlog.

The API and the seeding script share one setup. Production runs emit one
JSON object per line; everything else gets the colored console renderer.
The vector index token is masked out of every log line, since backend
error messages can echo request headers.

Usage:
    from core.logging import configure_logging_from_settings, get_logger

    configure_logging_from_settings(get_settings())

    logger = get_logger(__name__)
    logger.info("Product query issued", top_k=12, sort="price-asc")
"""

import logging
import sys
from typing import TYPE_CHECKING, Any, Iterable, Optional

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

if TYPE_CHECKING:
    from config.settings import Settings


# Third-party loggers that are too chatty at INFO
_NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")

REDACTED = "***"


class SecretMasker:
    """
    structlog processor that replaces known secrets in string values.

    Only top-level values are scanned; the service never logs nested
    structures that could carry credentials.
    """

    def __init__(self, secrets: Iterable[str] = ()):
        self.secrets = tuple(s for s in secrets if s)

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        if not self.secrets:
            return event_dict
        for key, value in event_dict.items():
            if isinstance(value, str):
                for secret in self.secrets:
                    if secret in value:
                        value = value.replace(secret, REDACTED)
                event_dict[key] = value
        return event_dict


def _pre_render_processors(include_timestamp: bool, secrets: Iterable[str]) -> list[Processor]:
    processors: list[Processor] = []
    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))
    processors += [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        SecretMasker(secrets),
    ]
    return processors


def _renderers(json_logs: bool) -> list[Processor]:
    if json_logs:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [
        structlog.dev.ConsoleRenderer(
            colors=sys.stdout.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        )
    ]


def configure_logging(
    json_logs: bool = False,
    log_level: str = "INFO",
    include_timestamp: bool = True,
    secrets: Iterable[str] = (),
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        json_logs: JSON lines if True, console output otherwise.
        log_level: Minimum level name (DEBUG, INFO, WARNING, ...).
        include_timestamp: Prefix each event with an ISO timestamp.
        secrets: Strings to mask in every logged value.
    """
    structlog.configure(
        processors=_pre_render_processors(include_timestamp, secrets) + _renderers(json_logs),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # force=True so a second call (tests, reload) replaces the handler
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
        force=True,
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def configure_logging_from_settings(settings: "Settings", json_logs: Optional[bool] = None) -> None:
    """
    Configure logging from application settings.

    JSON output follows `settings.is_production` unless `json_logs` is given;
    DEBUG level follows `settings.debug`. The vector index token is masked.
    """
    configure_logging(
        json_logs=settings.is_production if json_logs is None else json_logs,
        log_level="DEBUG" if settings.debug else "INFO",
        secrets=(settings.upstash_vector_rest_token,),
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger, usually named after the calling module."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind request-scoped values (request_id, method, path) to later log lines."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop all bound request context."""
    structlog.contextvars.clear_contextvars()
