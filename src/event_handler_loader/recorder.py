"""A listener target that records registrations instead of dispatching events.

Useful for dry runs: load a directory onto a ``HandlerRecorder`` to see what
would be bound, and how, without touching a real emitter.

```python
recorder = HandlerRecorder()
await load_event_handlers("handlers", recorder)
for registration in recorder.registrations:
    print(registration.method, registration.event_name)
```
"""

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict

from .listener import is_async_callable


class Registration(BaseModel):
    """One recorded registration call."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    method: str
    event_name: Any
    listener: Callable[..., Any]

    @property
    def is_async(self) -> bool:
        return is_async_callable(self.listener)

    @property
    def listener_name(self) -> str:
        return getattr(self.listener, "__qualname__", None) or repr(self.listener)


class HandlerRecorder:
    """Records every registration made through the five listener methods."""

    def __init__(self) -> None:
        self.registrations: list[Registration] = []

    def _record(self, method: str, event: Any, listener: Callable[..., Any]) -> "HandlerRecorder":
        self.registrations.append(Registration(method=method, event_name=event, listener=listener))
        return self

    def on(self, event: Any, listener: Callable[..., Any]) -> "HandlerRecorder":
        return self._record("on", event, listener)

    def once(self, event: Any, listener: Callable[..., Any]) -> "HandlerRecorder":
        return self._record("once", event, listener)

    def add_listener(self, event: Any, listener: Callable[..., Any]) -> "HandlerRecorder":
        return self._record("add_listener", event, listener)

    def prepend_listener(self, event: Any, listener: Callable[..., Any]) -> "HandlerRecorder":
        return self._record("prepend_listener", event, listener)

    def prepend_once_listener(self, event: Any, listener: Callable[..., Any]) -> "HandlerRecorder":
        return self._record("prepend_once_listener", event, listener)

    def event_names(self) -> list[Any]:
        """Event names in first-registration order, without duplicates."""
        names: list[Any] = []
        for registration in self.registrations:
            if registration.event_name not in names:
                names.append(registration.event_name)
        return names

    def count(self, event: Any) -> int:
        return sum(1 for registration in self.registrations if registration.event_name == event)
