"""
Structured logging configuration using structlog.

Provides JSON-formatted logs for machine consumption and
human-readable console output for interactive use of the CLI.
"""
import sys
import logging
import structlog
from pathlib import Path
from typing import Optional


def configure_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    json_output: bool = False
):
    """
    Configure structured logging for the application.

    Logs go to stderr so that command output on stdout stays parseable.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for log output
        json_output: If True, output JSON logs; else human-readable console

    Example:
        >>> from geohash_index.utils.logging_config import configure_logging, get_logger
        >>> configure_logging(log_level="INFO", json_output=False)
        >>> logger = get_logger(__name__)
        >>> logger.info("coverage_planned", hash_length=5, cells=9)
    """
    level = getattr(logging, log_level.upper())

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
        force=True,
    )

    processors = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
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

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter('%(message)s'))

        logging.getLogger().addHandler(file_handler)


def get_logger(name: str):
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Structured logger with bound context

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("batch_encoded", rows=10000, length=7)
    """
    return structlog.get_logger(name)
