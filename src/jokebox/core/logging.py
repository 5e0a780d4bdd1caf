"""Logging configuration for the Jokebox service.

Modules log through ``logging.getLogger(__name__)``; this module only installs
the root handler once at application start. Records are rendered by structlog,
either as JSON lines (``LOG_FORMAT=json``) or as plain console lines.
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import Processor

from jokebox.core.settings import Settings

_configured = False


def _shared_processors(log_format: str) -> list[Processor]:
    processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if log_format == "json":
        # The console renderer formats exceptions itself.
        processors.append(structlog.processors.format_exc_info)
    return processors


def build_formatter(log_format: str) -> logging.Formatter:
    """Return the stdlib formatter for ``log_format`` ("json" or "text")."""
    log_format = log_format.lower()
    if log_format == "json":
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=False,
            exception_formatter=structlog.dev.plain_traceback,
        )
    return structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=_shared_processors(log_format),
    )


def configure_logging(settings: Settings) -> None:
    """Install the root handler according to ``LOG_LEVEL`` and ``LOG_FORMAT``."""
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(build_formatter(settings.log_format))

    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel("DEBUG" if settings.debug else settings.log_level.upper())
    _configured = True

    # SQL echo is controlled by SQL_DEBUG through the engine, not the root level.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
