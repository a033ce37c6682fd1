"""Logging configuration using loguru.

Intercepts stdlib logging so that ``websockets`` and any library the plugin
pulls in flow through loguru with a unified format.  Every record carries
the plugin UUID, since the host runs one process per plugin and they often
share a log directory.
"""

from __future__ import annotations

import logging
import sys

from loguru import logger

_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>{extra[plugin]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

# websockets logs every frame at DEBUG
_NOISY_LOGGERS = ("websockets", "websockets.client")


class _InterceptHandler(logging.Handler):
    """Bridge stdlib logging records into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip logging's own frames so the record points at the library call-site
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: str = "INFO", log_file: str | None = None, plugin_uuid: str = "") -> None:
    """Configure loguru as the sole logging sink.

    The host captures the plugin's stderr only while it is attached, so a
    ``log_file`` is the usual choice for installed plugins.  Call this once
    at process startup, before the connection runs.
    """
    level = level.upper()

    logger.configure(extra={"plugin": plugin_uuid or "-"})
    logger.remove()
    logger.add(sys.stderr, level=level, format=_FORMAT)
    if log_file:
        logger.add(log_file, level=level, format=_FORMAT, rotation="5 MB", retention=3, colorize=False)

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.info("Logging initialised (level={}, plugin={})", level, plugin_uuid or "-")
