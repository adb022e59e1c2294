"""Structured logging for the Character Inventory Manager.

The interactive menu owns stdout, so log lines are written to stderr (or
a stream passed to ``configure_logging``). Each line carries the app name,
and while a character is active, the character it concerns.

Example:
    >>> from inventory_manager.core.logging import character_context, get_logger
    >>> logger = get_logger(__name__)
    >>> with character_context("Thorin"):
    ...     logger.info("Inventory saved", items=12)
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import IO, TYPE_CHECKING

import structlog
from structlog.types import Processor


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger


APP_NAME = "inventory_manager"


def add_app_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Tag the entry with the application name."""
    event_dict.setdefault("app", APP_NAME)
    return event_dict


def _renderer(json_format: bool, stream: IO[str]) -> list[Processor]:
    if json_format:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [
        structlog.dev.ConsoleRenderer(
            colors=stream.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        )
    ]


def configure_logging(
    *,
    level: str = "WARNING",
    json_format: bool = False,
    stream: IO[str] | None = None,
) -> None:
    """Configure structlog for the application.

    Args:
        level: Minimum level to emit (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Emit one JSON object per line instead of console text.
        stream: Destination for log lines; defaults to ``sys.stderr``.
    """
    stream = stream if stream is not None else sys.stderr
    threshold = getattr(logging, level.upper(), logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            add_app_context,
            *_renderer(json_format, stream),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(threshold),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger, typically with ``__name__``."""
    return structlog.get_logger(name)


@contextmanager
def character_context(character_name: str | None) -> Iterator[None]:
    """Tag every log line emitted inside the block with the active character.

    Args:
        character_name: Name of the character whose inventory is open.
    """
    with structlog.contextvars.bound_contextvars(character=character_name):
        yield


__all__ = [
    "APP_NAME",
    "add_app_context",
    "character_context",
    "configure_logging",
    "get_logger",
]
