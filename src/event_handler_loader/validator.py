"""Validation and normalization of handler candidates.

A candidate is read through the configured ``HandlerKeys``: mappings are read
by key, any other object by attribute. Both of these are valid handlers:

```python
default = {"name": "ping", "execute": on_ping}


class default:
    name = "ping"
    is_prepend = True

    @staticmethod
    async def execute(*args):
        ...
```
"""

from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from .exceptions import InvalidTypeError, MissingPropertyError
from .settings import HandlerKeys


class NormalizedHandler(BaseModel):
    """A validated handler, ready to be bound."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    event_name: Any
    once: bool = False
    prepend: bool = False
    execute: Callable[..., Any]


def has_property(candidate: Any, key: str) -> bool:
    if isinstance(candidate, Mapping):
        return key in candidate
    return hasattr(candidate, key)


def get_property(candidate: Any, key: str) -> Any:
    if isinstance(candidate, Mapping):
        return candidate[key]
    return getattr(candidate, key)


def _read_flag(candidate: Any, key: str, source: str) -> bool:
    if not has_property(candidate, key):
        return False
    value = get_property(candidate, key)
    if not isinstance(value, bool):
        raise InvalidTypeError(key, value, "a boolean", source)
    return value


def normalize_handler(candidate: Any, keys: HandlerKeys, source: str) -> NormalizedHandler:
    """Validate ``candidate`` and return its normalized form.

    Checks run in a fixed order and stop at the first failure: required keys,
    then ``name``, ``is_once``, ``is_prepend`` and ``execute`` values.

    Args:
        candidate: The export selected from a handler module
        keys: Property names to read
        source: File URI of the module, used in error messages

    Raises:
        MissingPropertyError: If the name or execute key is absent
        InvalidTypeError: If a value has the wrong type
    """
    if not has_property(candidate, keys.name):
        raise MissingPropertyError(keys.name, "a non-empty string or enum member", source)
    if not has_property(candidate, keys.execute):
        raise MissingPropertyError(keys.execute, "a callable", source)

    event_name = get_property(candidate, keys.name)
    # str check first: a StrEnum member is both, and that is fine
    if isinstance(event_name, str):
        if not event_name:
            raise InvalidTypeError(keys.name, event_name, "a non-empty string or enum member", source)
    elif not isinstance(event_name, Enum):
        raise InvalidTypeError(keys.name, event_name, "a non-empty string or enum member", source)

    once = _read_flag(candidate, keys.is_once, source)
    prepend = _read_flag(candidate, keys.is_prepend, source)

    execute = get_property(candidate, keys.execute)
    if not callable(execute):
        raise InvalidTypeError(keys.execute, execute, "a callable", source)

    return NormalizedHandler(event_name=event_name, once=once, prepend=prepend, execute=execute)
