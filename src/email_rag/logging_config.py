"""Structured logging configuration using structlog.

Logs always go to stderr: stdout belongs to the CLI, which writes search
documents and cleaned text there. Production renders one JSON object per
line, development a colored console line.
"""

import logging
import sys
from typing import TextIO

import structlog
from structlog.types import EventDict, WrappedLogger

APP_NAME = "email-rag-pipeline"


def add_app_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Tag every log event with the application name."""
    event_dict["app"] = APP_NAME
    return event_dict


def configure_logging(
    log_level: str = "INFO",
    environment: str = "development",
    stream: TextIO | None = None,
) -> None:
    """Route structlog and stdlib logging through one stderr handler.

    Args:
        log_level: Logging level name; unknown names fall back to INFO
        environment: "production" selects JSON lines, anything else the
            console renderer
        stream: Output stream, stderr when omitted
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    json_output = environment.lower() == "production"

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
    ]
    if json_output:
        pre_chain.append(structlog.processors.format_exc_info)
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)
    )
    handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
