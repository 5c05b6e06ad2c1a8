"""Exceptions raised while loading event handlers.

Every failure aborts the whole ``load_event_handlers`` call. Nothing is
retried and listeners bound before the failure stay bound.

All exceptions derive from ``EventHandlerLoaderError`` so callers can catch
the whole family at once:

```python
try:
    await load_event_handlers("handlers", emitter)
except EventHandlerLoaderError as e:
    logger.error(f"Could not load handlers: {e}")
```
"""

from pathlib import Path
from typing import Any


class EventHandlerLoaderError(Exception):
    """Base exception for all event handler loader errors."""


class InvalidDirectoryError(EventHandlerLoaderError):
    """Raised when the handler directory does not exist or is not a directory."""

    def __init__(self, path: str | Path):
        self.path = path
        super().__init__(f"Invalid event handler directory path: '{path}'. Must be an existent directory.")


class InvalidTargetError(EventHandlerLoaderError):
    """Raised when the target lacks one or more listener registration methods."""

    def __init__(self, target: Any, missing: list[str]):
        self.target = target
        self.missing = missing
        super().__init__(
            f"Invalid listener target {type(target).__name__}: missing callable method(s) {', '.join(missing)}."
        )


class InvalidOptionsError(EventHandlerLoaderError):
    """Raised when the options argument or one of its values is invalid.

    ``option`` holds the dotted name of the offending option, or ``None`` when
    the options argument itself has the wrong type.
    """

    def __init__(self, message: str, option: str | None = None):
        self.option = option
        super().__init__(message)


class EmptyDirectoryError(EventHandlerLoaderError):
    """Raised when a handler directory yields no candidate files."""

    def __init__(self, path: str | Path, reason: str = "No event handler files found"):
        self.path = path
        super().__init__(f"Invalid event handler files. {reason} in directory: {path}")


class ModuleLoadError(EventHandlerLoaderError):
    """Raised when executing a handler module fails.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, source: str, error: BaseException):
        self.source = source
        super().__init__(f"Failed to load event handler module {source}: {type(error).__name__}: {error}")


class ExportNotFoundError(EventHandlerLoaderError):
    """Raised when a requested export is absent from a loaded module."""

    def __init__(self, export_name: str, source: str, detail: str):
        self.export_name = export_name
        self.source = source
        super().__init__(f"Invalid event handler module. {detail} '{export_name}' in module: {source}")


class HandlerValidationError(EventHandlerLoaderError):
    """Base class for handler shape validation failures."""

    def __init__(self, message: str, key: str, source: str):
        self.key = key
        self.source = source
        super().__init__(message)


class MissingPropertyError(HandlerValidationError):
    """Raised when a handler candidate lacks a required property."""

    def __init__(self, key: str, expected: str, source: str):
        self.expected = expected
        super().__init__(
            f"Missing required key '{key}' (expected {expected}) on event handler in module: {source}",
            key,
            source,
        )


class InvalidTypeError(HandlerValidationError):
    """Raised when a handler property holds a value of the wrong type."""

    def __init__(self, key: str, value: Any, expected: str, source: str):
        self.value = value
        self.expected = expected
        super().__init__(
            f"Invalid value for key '{key}': {value!r} ({type(value).__name__}). "
            f"Must be {expected}. In module: {source}",
            key,
            source,
        )


__all__ = [
    "EmptyDirectoryError",
    "EventHandlerLoaderError",
    "ExportNotFoundError",
    "HandlerValidationError",
    "InvalidDirectoryError",
    "InvalidOptionsError",
    "InvalidTargetError",
    "InvalidTypeError",
    "MissingPropertyError",
    "ModuleLoadError",
]
