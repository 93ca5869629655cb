"""Logging setup for tasklist.

Log events go to stderr so they never mix with the rendered list on
stdout. The default level is WARNING, which keeps the terminal quiet
unless storage misbehaves; set ``TASKLIST_LOG_LEVEL=debug`` to trace
every load and save.
"""

import logging
import sys
from typing import TYPE_CHECKING

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from tasklist.config import TaskListSettings


def _renderer(log_format: str) -> list[Processor]:
    if log_format == "json":
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [
        structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        )
    ]


def configure_logging(settings: "TaskListSettings | None" = None) -> None:
    """Install the structlog pipeline for the given settings.

    Without settings, logs at WARNING in console format.
    """
    level = logging.WARNING
    log_format = "console"
    if settings is not None:
        level = getattr(logging, settings.log_level.upper(), logging.WARNING)
        log_format = settings.log_format

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        *_renderer(log_format),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    # prompt_toolkit and asyncio log through the standard library
    logging.basicConfig(
        format="%(message)s",
        level=level,
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger, named when ``name`` is given."""
    return structlog.get_logger(name) if name else structlog.get_logger()


def bind_context(**kwargs) -> None:
    """Attach key-value pairs to every later log event in this context.

    Example:
        bind_context(app="tasklist")
        logger.warning("tasks_write_failed", key="tasks")  # carries app=...
    """
    structlog.contextvars.bind_contextvars(**kwargs)


class Loggers:
    """Named loggers, one per layer."""

    @staticmethod
    def store() -> structlog.stdlib.BoundLogger:
        return get_logger("tasklist.tasks")

    @staticmethod
    def persistence() -> structlog.stdlib.BoundLogger:
        return get_logger("tasklist.persistence")

    @staticmethod
    def cli() -> structlog.stdlib.BoundLogger:
        return get_logger("tasklist.cli")
