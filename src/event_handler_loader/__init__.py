"""Load event handler modules from a directory and bind them onto an emitter.

Each handler lives in its own file and declares what it listens to:

```python
# handlers/ping.py
async def execute(client, *args):
    await client.reply("pong")

default = {"name": "ping", "is_once": False, "execute": execute}
```

```python
from event_handler_loader import load_event_handlers

await load_event_handlers("handlers", client, {"listener_prepended_args": [client]})
```
"""

from loguru import logger

from .binder import LISTENER_METHOD_NAMES, ListenerTarget, bind_listener, has_listener_methods
from .enums import ExportType, ImportMode
from .exceptions import (
    EmptyDirectoryError,
    EventHandlerLoaderError,
    ExportNotFoundError,
    HandlerValidationError,
    InvalidDirectoryError,
    InvalidOptionsError,
    InvalidTargetError,
    InvalidTypeError,
    MissingPropertyError,
    ModuleLoadError,
)
from .listener import create_listener, is_async_callable
from .loader import BindOverride, load_event_handlers, load_event_handlers_sync
from .recorder import HandlerRecorder, Registration
from .settings import HandlerKeys, LoadOptions, Settings, get_settings
from .validator import NormalizedHandler, normalize_handler

__version__ = "0.1.0"

# Library convention: silent until the application enables it
logger.disable(__name__)

__all__ = [
    "LISTENER_METHOD_NAMES",
    "BindOverride",
    "EmptyDirectoryError",
    "EventHandlerLoaderError",
    "ExportNotFoundError",
    "ExportType",
    "HandlerKeys",
    "HandlerRecorder",
    "HandlerValidationError",
    "ImportMode",
    "InvalidDirectoryError",
    "InvalidOptionsError",
    "InvalidTargetError",
    "InvalidTypeError",
    "ListenerTarget",
    "LoadOptions",
    "MissingPropertyError",
    "ModuleLoadError",
    "NormalizedHandler",
    "Registration",
    "Settings",
    "bind_listener",
    "create_listener",
    "get_settings",
    "has_listener_methods",
    "is_async_callable",
    "load_event_handlers",
    "load_event_handlers_sync",
    "normalize_handler",
]
