"""Structured logging via structlog.

Library modules log through ``logging.getLogger(__name__)`` (or
``structlog.get_logger()``) and never configure handlers themselves. An
application embedding repodetect calls `configure_structlog()` once at
startup.

Renderer selection:
  debug=True  — `ConsoleRenderer` with colours for local development.
  debug=False — `JSONRenderer` for machine-parseable logs in production.

The ``source_url`` context variable is bound by the detection engine for
the duration of a request, so every log line emitted while a source is
being inspected carries the (redacted) URL.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar

import structlog

_source_url_var: ContextVar[str] = ContextVar("source_url", default="")


def get_source_url() -> str:
    """Return the redacted URL of the source being inspected, or ''."""
    return _source_url_var.get()


def bind_source_url(url: str):
    """Set the current source URL. Returns a token for `reset_source_url`."""
    return _source_url_var.set(url)


def reset_source_url(token) -> None:
    _source_url_var.reset(token)


def _inject_context_vars(
    logger: logging.Logger,
    method: str,
    event_dict: dict,
) -> dict:
    """Structlog processor: inject source_url from the ContextVar."""
    source_url = get_source_url()
    if source_url:
        event_dict["source_url"] = source_url
    return event_dict


def configure_structlog(debug: bool = True) -> None:
    """Configure structlog for the application lifetime.

    Calling multiple times is safe — structlog is idempotent.
    """
    shared_processors: list = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _inject_context_vars,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if debug:
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )

    # Bridge stdlib logging so httpx and our module loggers share the stream.
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if debug else logging.INFO,
    )
