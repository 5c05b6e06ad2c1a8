"""CLI entry point.

Usage:
    python -m event_handler_loader.cli inspect handlers/
    event-handler-loader check handlers/ --export-type named
"""

import sys

from loguru import logger
from pydantic import ValidationError
from rich.markup import escape

import event_handler_loader
from event_handler_loader.cli.app import app
from event_handler_loader.cli.utils import console
from event_handler_loader.settings import get_settings


def _configure_cli_logging(log_level: str) -> None:
    """Configure loguru for CLI (compact format: level + message, no timestamps)."""
    logger.remove()  # Remove default handler
    logger.add(
        sys.stderr,
        format="<level>{level: <8}</level> | <level>{message}</level>",
        level=log_level,
        colorize=True,
    )
    logger.enable(event_handler_loader.__name__)


def main() -> None:
    """CLI entry point with logging configuration."""
    try:
        settings = get_settings()
    except ValidationError as e:
        console.print(f"[red]Error: invalid EVENT_HANDLER_LOADER_* environment settings\n{escape(str(e))}[/red]")
        sys.exit(1)

    _configure_cli_logging(settings.log_level)
    app()


if __name__ == "__main__":
    main()
