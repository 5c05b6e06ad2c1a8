"""Wrapping of handler ``execute`` callables into listeners.

Whether a listener is async is decided once, when it is created, from how the
execute callable is declared (``async def``). A plain function that happens to
return an awaitable is treated as synchronous and its result is not awaited.
"""

import functools
import inspect
from collections.abc import Callable, Sequence
from typing import Any


def is_async_callable(fn: Callable[..., Any]) -> bool:
    """Return True if ``fn`` is declared async.

    Sees through ``functools.partial`` and callable objects with an async ``__call__``.
    """
    while isinstance(fn, functools.partial):
        fn = fn.func
    if inspect.iscoroutinefunction(fn):
        return True
    call = getattr(fn, "__call__", None)
    return not inspect.isroutine(fn) and inspect.iscoroutinefunction(call)


def create_listener(execute: Callable[..., Any], prepended_args: Sequence[Any] = ()) -> Callable[..., Any]:
    """Wrap ``execute`` so every call receives ``prepended_args`` before the emitted ones.

    Args:
        execute: The handler's execute callable
        prepended_args: Arguments passed first on every invocation

    Returns:
        An ``async def`` listener if ``execute`` is declared async, a plain one otherwise.
        Exceptions raised by ``execute`` propagate unchanged.
    """
    prefix = tuple(prepended_args)

    if is_async_callable(execute):

        @functools.wraps(execute)
        async def async_listener(*emitted_args: Any, **kwargs: Any) -> Any:
            args = prefix + emitted_args if prefix else emitted_args
            return await execute(*args, **kwargs)

        return async_listener

    @functools.wraps(execute)
    def sync_listener(*emitted_args: Any, **kwargs: Any) -> Any:
        args = prefix + emitted_args if prefix else emitted_args
        return execute(*args, **kwargs)

    return sync_listener
