"""Logging configuration."""

import logging
import sys
from typing import Any

ROOT_LOGGER_NAME = "content_search_step"


def configure_logging(log_level: str = "INFO") -> logging.Logger:
    """
    Configure logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logger instance
    """
    # Convert string log level to logging constant
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    # Configure package logger
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(numeric_level)

    # Replace handlers installed by an earlier call
    for existing in list(logger.handlers):
        logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module of this package."""
    return logging.getLogger(name)


def log_query(
    logger: logging.Logger,
    query: dict[str, Any],
):
    """
    Log query information.

    Args:
        logger: Logger instance
        query: Query information
    """
    logger.info(f"Query: {query.get('text_query')!r}")
    logger.debug(f"Query details: {query}")


def log_results(logger: logging.Logger, results: dict[str, Any]):
    """
    Log result information.

    Args:
        logger: Logger instance
        results: Result information
    """
    logger.info(f"Total results: {results.get('total_results', 0)}")
    logger.debug(f"Results: {results}")
