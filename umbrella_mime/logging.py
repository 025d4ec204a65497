"""Structured logging setup using structlog.

Library modules log through :func:`get_logger`, which binds structlog to a
stdlib logger named after the module. Until :func:`setup_logging` runs,
events follow the stdlib defaults (debug and info dropped, warnings to
stderr) and never reach stdout. Callers that want formatted output (the
command line entry point, an embedding service) call
:func:`setup_logging` once at start-up.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog

from .config import LoggingConfig


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def get_logger(name: str) -> Any:
    """structlog logger backed by the stdlib logger *name*."""
    return structlog.wrap_logger(logging.getLogger(name))


def setup_logging(config: LoggingConfig | None = None, *, stream: TextIO | None = None) -> None:
    """Route structlog events through a single stdlib handler.

    Output goes to *stream* (stderr by default) so it never mixes with
    encoded MIME written to stdout.
    """
    config = config or LoggingConfig()

    if config.renderer == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *_shared_processors(),
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

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(config.level)
