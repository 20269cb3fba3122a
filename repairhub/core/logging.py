"""Structured logging setup using structlog.

Configures structlog to:
- Output JSON in production, pretty console in dev
- Tag every line with the request id and, inside a search, the cache key
- Integrate with stdlib logging so existing loggers get structured output
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

import structlog

from repairhub.config import get_settings

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)
search_query_var: ContextVar[str | None] = ContextVar("search_query", default=None)

# Longer queries are cut in log lines
SEARCH_QUERY_LOG_CHARS = 80


def _inject_search_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict,
) -> dict:
    """Structlog processor adding request_id and search_query when bound."""
    for var, key in ((request_id_var, "request_id"), (search_query_var, "search_query")):
        val = var.get(None)
        if val is not None:
            event_dict.setdefault(key, val)
    return event_dict


@contextmanager
def bind_search_query(normalized_query: str) -> Iterator[None]:
    """Tag log lines emitted while one search runs, including its provider tasks."""
    token = search_query_var.set(normalized_query[:SEARCH_QUERY_LOG_CHARS])
    try:
        yield
    finally:
        search_query_var.reset(token)


def setup_logging() -> None:
    """Configure structlog + stdlib logging. Call once at app startup."""
    settings = get_settings()
    is_dev = settings.debug
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        _inject_search_context,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    renderer = structlog.dev.ConsoleRenderer() if is_dev else structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    # Reduce noise from third-party libs
    for noisy in ("httpx", "httpcore", "uvicorn.access", "sqlalchemy.engine"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance."""
    return structlog.get_logger(name)
