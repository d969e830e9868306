"""
Resurfacer Logging Configuration
================================
Centralized logging configuration using loguru.

Provides:
  - configure_logging(): Setup function called by the CLI and host integrations
  - JSON log format when LOG_FORMAT=json environment variable is set
  - Standard-library logging redirected into loguru

Usage:
    from resurfacer.core.logging_config import configure_logging

    configure_logging(level="INFO", json_format=False)
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from loguru import logger


def configure_logging(
    level: Optional[str] = "INFO",
    json_format: Optional[bool] = None,
    *,
    sink: Optional[str] = None,
) -> None:
    """
    Configure loguru logging for Resurfacer.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: If True, use JSON format. If None, check LOG_FORMAT env var.
        sink: Optional file path for log output. If None, logs to stderr.

    Environment:
        LOG_FORMAT: Set to "json" to enable JSON formatted logs.
        LOG_LEVEL: Used when level is None.
    """
    if json_format is None:
        json_format = os.environ.get("LOG_FORMAT", "").lower() == "json"

    if level is None:
        level = os.environ.get("LOG_LEVEL", "INFO")

    logger.remove()

    log_sink = sink if sink else sys.stderr

    if json_format:
        logger.add(
            log_sink,
            level=level.upper(),
            serialize=True,
            backtrace=True,
            diagnose=False,
        )
    else:
        logger.add(
            log_sink,
            level=level.upper(),
            format=(
                "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
                "<level>{message}</level>"
            ),
            colorize=sink is None,
            backtrace=True,
            diagnose=True,
        )

    _intercept_standard_logging(level)

    logger.debug(f"Logging configured: level={level}, json_format={json_format}")


class InterceptHandler(logging.Handler):
    """Forward standard-library log records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            log_level = logger.level(record.levelname).name
        except ValueError:
            log_level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            log_level, record.getMessage()
        )


def _intercept_standard_logging(level: str) -> None:
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logging.getLogger("asyncio").setLevel(level.upper())


__all__ = ["configure_logging", "InterceptHandler", "logger"]
