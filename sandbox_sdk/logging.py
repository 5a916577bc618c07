from __future__ import annotations

"""
Structured logging setup for the sandbox SDK.

This module configures **structlog** + the stdlib ``logging`` package so that
SDK events (session resets, compiler runs, unsupported client calls) come out
either as a readable console stream (default) or as JSON lines for CI logs.

Library code only ever calls :func:`get_logger`; applications (and the
``sandbox-sdk`` CLI) call :func:`setup_logging` once on start.

Quick start
-----------
    from sandbox_sdk.logging import setup_logging, get_logger

    setup_logging(level="DEBUG")
    log = get_logger(__name__)
    log.info("package_published", digest="...")

Environment
-----------
- SANDBOX_LOG_LEVEL: one of DEBUG, INFO, WARNING, ERROR (default: INFO)
- SANDBOX_LOG_FORMAT: "console" (default) or "json"
"""

import logging
import os
from typing import Any, ContextManager, Iterable, Optional

import structlog
from structlog.contextvars import merge_contextvars
from structlog.processors import JSONRenderer


def _base_processors(include_stacktrace: bool) -> Iterable:
    yield structlog.stdlib.add_log_level
    yield structlog.processors.TimeStamper(fmt="iso", utc=True)
    yield merge_contextvars
    yield structlog.processors.StackInfoRenderer()
    if include_stacktrace:
        yield structlog.processors.format_exc_info
    yield structlog.processors.UnicodeDecoder()


def setup_logging(
    *,
    level: Optional[str | int] = None,
    log_format: Optional[str] = None,
) -> None:
    """
    Configure structlog + stdlib logging. Safe to call more than once; the last
    call wins.

    Parameters
    ----------
    level: str|int
        Log level (e.g., "INFO"). Defaults to $SANDBOX_LOG_LEVEL or INFO.
    log_format: str
        "console" (default) or "json". Defaults to $SANDBOX_LOG_FORMAT.
    """
    level = level or os.getenv("SANDBOX_LOG_LEVEL", "").upper() or "INFO"
    log_format = (log_format or os.getenv("SANDBOX_LOG_FORMAT", "") or "console").lower()

    processors = list(_base_processors(include_stacktrace=log_format == "json"))

    if log_format == "json":
        renderer = JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False, sort_keys=False)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            *processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.add_logger_name,
                *processors,
            ],
        )
    )

    sdk_logger = logging.getLogger("sandbox_sdk")
    sdk_logger.setLevel(level)
    for h in list(sdk_logger.handlers):
        sdk_logger.removeHandler(h)
    sdk_logger.addHandler(handler)
    sdk_logger.propagate = False


def get_logger(name: Optional[str] = None) -> Any:
    """
    Return a structlog logger for ``name`` (normally ``__name__``).
    """
    return structlog.get_logger(name)


def bind_context(**kv: Any) -> None:
    """
    Bind key/value pairs (e.g. ``package_dir``) into the structlog contextvars store.
    """
    structlog.contextvars.bind_contextvars(**kv)


def bound_context(**kv: Any) -> ContextManager[None]:
    """
    Bind key/value pairs for the duration of a ``with`` block. Keys the caller
    had already bound get their previous values back on exit.
    """
    return structlog.contextvars.bound_contextvars(**kv)


def clear_context(*keys: str) -> None:
    """
    Drop the given context keys; with no keys, drop all bound context.
    """
    if keys:
        structlog.contextvars.unbind_contextvars(*keys)
    else:
        structlog.contextvars.clear_contextvars()


__all__ = [
    "setup_logging",
    "get_logger",
    "bind_context",
    "bound_context",
    "clear_context",
]
