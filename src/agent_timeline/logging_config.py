"""Structured logging configuration using structlog.

Provides centralized logging configuration with:
- JSON formatting for machine consumption
- Pretty console output for development
- Integration with standard library logging

Engine components never configure logging themselves. They receive a
bound logger from the caller and fall back to get_logger(__name__).
"""

import logging
import sys

import structlog

__all__ = ["configure_logging", "get_logger"]


def configure_logging(verbose: bool = False, json_output: bool = False) -> None:
    """Configure structured logging for the application.

    Args:
        verbose: Enable verbose/debug output.
        json_output: If True, output JSON format. Otherwise, pretty console format.

    """
    level = logging.DEBUG if verbose else logging.WARNING

    # Diagnostics go to stderr so rendered timelines stay clean on stdout
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
        force=True,
    )

    processors: list[structlog.types.Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name, typically __name__ from the calling module.

    Returns:
        Configured structlog logger instance.

    Example:
        logger = get_logger(__name__)
        logger.warning("orphan_result", correlation_id="call_1", index=4)

    """
    return structlog.get_logger(name)
