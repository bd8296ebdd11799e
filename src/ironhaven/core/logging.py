"""Structured logging for the Ironhaven turn-resolution core.

The engine never prints; it emits structlog events that the hosting service
routes wherever it likes. Console rendering is used during development and
JSON lines in production.

Example:
    >>> from ironhaven.core.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Encounter created", hostiles=2, round=1)
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger

    from ironhaven.core.config import Settings


_LINE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def add_app_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Stamp ``app="ironhaven"`` on every entry (structlog processor)."""
    event_dict["app"] = "ironhaven"
    return event_dict


def configure_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
    log_file: str | None = None,
) -> None:
    """Route structlog and stdlib logging to stdout.

    Unknown level names fall back to INFO.

    Args:
        level: Minimum level name, e.g. ``"DEBUG"``.
        json_format: Render one JSON object per line instead of the
            console layout.
        log_file: Also append stdlib records to this file.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format=_LINE_FORMAT, level=numeric_level, stream=sys.stdout, force=True)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter(_LINE_FORMAT))
        logging.getLogger().addHandler(file_handler)


def configure_from_settings(settings: Settings) -> None:
    """Configure logging from the ``log_level``/``json_logs`` settings."""
    configure_logging(level=settings.log_level, json_format=settings.json_logs)


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Return the structlog logger for a module, usually ``__name__``."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Attach key-values to every entry logged from now on.

    Stays bound until ``clear_context``; prefer ``bound_context`` when the
    binding belongs to a single resolution.
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop every key bound with ``bind_context``."""
    structlog.contextvars.clear_contextvars()


@contextmanager
def bound_context(**kwargs: Any) -> Iterator[None]:
    """Bind key-values for the duration of a ``with`` block.

    Keys already bound outside the block get their previous values back
    on exit.

    Example:
        >>> with bound_context(character_id="c-1", encounter_id="enc-7"):
        ...     logger.info("Turn advanced")  # carries both ids
    """
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield


__all__ = [
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "bound_context",
    "clear_context",
]
