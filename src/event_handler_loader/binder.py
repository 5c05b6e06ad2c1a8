"""Binding of listeners onto a listener target."""

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from loguru import logger

from .validator import NormalizedHandler

LISTENER_METHOD_NAMES = ("on", "once", "add_listener", "prepend_listener", "prepend_once_listener")


@runtime_checkable
class ListenerTarget(Protocol):
    """Anything handlers can be bound to.

    The loader never emits events itself; it only calls one of these methods
    once per handler.
    """

    def on(self, event: Any, listener: Callable[..., Any]) -> Any: ...

    def once(self, event: Any, listener: Callable[..., Any]) -> Any: ...

    def add_listener(self, event: Any, listener: Callable[..., Any]) -> Any: ...

    def prepend_listener(self, event: Any, listener: Callable[..., Any]) -> Any: ...

    def prepend_once_listener(self, event: Any, listener: Callable[..., Any]) -> Any: ...


def missing_listener_methods(target: Any) -> list[str]:
    """Return the registration methods ``target`` lacks or has non-callable."""
    return [name for name in LISTENER_METHOD_NAMES if not callable(getattr(target, name, None))]


def has_listener_methods(target: Any) -> bool:
    return not missing_listener_methods(target)


def select_method_name(once: bool, prepend: bool) -> str:
    if once:
        return "prepend_once_listener" if prepend else "once"
    return "prepend_listener" if prepend else "on"


def bind_listener(target: ListenerTarget, handler: NormalizedHandler, listener: Callable[..., Any]) -> str:
    """Register ``listener`` on ``target`` according to the handler's flags.

    Returns:
        The name of the registration method that was called.
    """
    method_name = select_method_name(handler.once, handler.prepend)
    getattr(target, method_name)(handler.event_name, listener)
    logger.debug(f"Bound {getattr(listener, '__name__', listener)!s} to {handler.event_name!r} via {method_name}")
    return method_name
