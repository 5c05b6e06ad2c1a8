"""Logging configuration for applications using the loader.

The package disables its own loguru output on import. Call ``setup_logging``
(or ``logger.enable("event_handler_loader")``) to see it.
"""

import logging
import sys

from loguru import logger

PACKAGE_NAME = "event_handler_loader"


class InterceptHandler(logging.Handler):
    """Intercept standard logging messages toward loguru."""

    def emit(self, record):
        # Get corresponding loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where the logged message originated
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(log_level: str, fmt: str | None = None) -> None:
    """Configure loguru output and enable the loader's log messages.

    Args:
        log_level: Log level to use, usually ``get_settings().log_level``.
        fmt: Optional loguru format string. Defaults to loguru's own format.
    """
    log_level = log_level.upper()

    logger.remove()  # Remove default handler
    if fmt is None:
        logger.add(sys.stderr, level=log_level, colorize=True)
    else:
        logger.add(sys.stderr, format=fmt, level=log_level, colorize=True)
    logger.enable(PACKAGE_NAME)

    logger.debug(f"Log level set to: {log_level}")

    # Redirect all standard logging to loguru
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logging.getLogger("asyncio").setLevel(log_level)
