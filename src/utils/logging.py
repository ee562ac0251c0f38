"""Structured logging setup using structlog.

One shared processor chain (context vars, log level, timestamps, stack
info) feeds either a coloured ConsoleRenderer for local work or a
JSONRenderer for production.  Both the level and the renderer come from
:class:`~src.config.settings.Settings` (``log_level`` and ``app_env``).

Output goes to *stream* (stdout by default).  The CLI passes stderr so
command output on stdout stays clean for piping.  Standard-library
``logging`` is routed through the same formatter and stream.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, TextIO

import structlog

if TYPE_CHECKING:
    from src.config.settings import Settings


def configure_logging(
    log_level: str = "INFO",
    json_output: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: Logging level string (DEBUG, INFO, WARNING, ERROR, FATAL).
        json_output: Render JSON lines instead of coloured console output.
        stream: Where log lines are written. Defaults to ``sys.stdout``.
    """
    target = stream if stream is not None else sys.stdout

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if json_output:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        # No ANSI colours unless the stream is a terminal.
        renderer = structlog.dev.ConsoleRenderer(colors=target.isatty())

    structlog.configure(
        processors=[*shared_processors, renderer],
        # Drops below-threshold events before the processor chain runs.
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(log_level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=target),
        # Module-level loggers must follow a later reconfigure (the CLI moves
        # output to stderr after src.main has configured stdout).
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *shared_processors,
            renderer,
        ],
    )

    handler = logging.StreamHandler(target)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())


def configure_logging_from_settings(app_settings: Settings, stream: TextIO | None = None) -> None:
    """Apply ``log_level`` and ``app_env`` from *app_settings*.

    ``app_env == "production"`` selects JSON output.
    """
    configure_logging(
        log_level=app_settings.log_level,
        json_output=app_settings.app_env == "production",
        stream=stream,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a named structlog logger, configuring defaults on first use."""
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(logger_name=name)
