"""Structured logging with structlog.

Every event carries the engine version, and events raised while one
document is parsed also carry that document's format and size (see
``document_context``). JSON for production, console for dev.

Usage:
    import structlog
    logger = structlog.get_logger(__name__)
    logger.info("rows_extracted", count=42)
"""

import logging
import sys

import structlog

from .. import __version__

ENGINE_NAME = "statement-engine"


def add_engine_version(logger, method_name, event_dict):
    """Stamp the engine name and version on the event."""
    event_dict.setdefault("engine", ENGINE_NAME)
    event_dict.setdefault("engine_version", __version__)
    return event_dict


def document_context(file_format: str, size: int):
    """Bind the document being parsed for every log event inside the block."""
    return structlog.contextvars.bound_contextvars(
        file_format=file_format, document_bytes=size
    )


def setup_logging(log_level: str = "INFO", json_output: bool = True) -> None:
    """Configure structured logging for the engine.

    Args:
        log_level: Python log level string (DEBUG, INFO, WARNING, ERROR).
        json_output: If True, use JSON renderer (production). If False,
                     use colorized console renderer (development).
    """
    processors: list = [
        structlog.contextvars.merge_contextvars,
        add_engine_version,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # stdout carries CLI output
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )
