"""Command-line interface for inspecting handler directories."""

from event_handler_loader.cli.app import app

__all__ = ["app"]
