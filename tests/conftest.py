"""Shared fixtures for event handler loader tests."""

import asyncio
import inspect
import textwrap
from collections import defaultdict
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest


class Emitter:
    """Minimal emitter with the five registration methods plus emit and listener_count.

    ``prepend`` listeners go to the front, ``once`` listeners are removed before
    they run. Coroutines returned by async listeners are collected in ``pending``.
    """

    def __init__(self) -> None:
        self._listeners: dict[Any, list[tuple[Callable[..., Any], bool]]] = defaultdict(list)
        self.pending: list[asyncio.Future] = []

    def on(self, event: Any, listener: Callable[..., Any]) -> "Emitter":
        self._listeners[event].append((listener, False))
        return self

    def add_listener(self, event: Any, listener: Callable[..., Any]) -> "Emitter":
        return self.on(event, listener)

    def once(self, event: Any, listener: Callable[..., Any]) -> "Emitter":
        self._listeners[event].append((listener, True))
        return self

    def prepend_listener(self, event: Any, listener: Callable[..., Any]) -> "Emitter":
        self._listeners[event].insert(0, (listener, False))
        return self

    def prepend_once_listener(self, event: Any, listener: Callable[..., Any]) -> "Emitter":
        self._listeners[event].insert(0, (listener, True))
        return self

    def emit(self, event: Any, *args: Any) -> bool:
        entries = list(self._listeners.get(event, []))
        for entry in entries:
            listener, once = entry
            if once:
                self._listeners[event].remove(entry)
            result = listener(*args)
            if inspect.isawaitable(result):
                try:
                    asyncio.get_running_loop()
                except RuntimeError:
                    asyncio.run(result)
                else:
                    self.pending.append(asyncio.ensure_future(result))
        return bool(entries)

    def listener_count(self, event: Any) -> int:
        return len(self._listeners.get(event, []))

    def listeners(self, event: Any) -> list[Callable[..., Any]]:
        return [listener for listener, _ in self._listeners.get(event, [])]

    async def drain(self) -> None:
        """Wait for every coroutine started by async listeners."""
        pending, self.pending = self.pending, []
        await asyncio.gather(*pending)


@pytest.fixture
def emitter() -> Emitter:
    return Emitter()


@pytest.fixture
def make_handlers(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory writing handler modules into a fresh directory.

    Usage: ``make_handlers({"ping.py": "default = {...}"}, name="events")``
    """

    def _make(files: dict[str, str], name: str = "handlers") -> Path:
        directory = tmp_path / name
        directory.mkdir(parents=True, exist_ok=True)
        for filename, source in files.items():
            path = directory / filename
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(source), encoding="utf-8")
        return directory

    return _make


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch):
    """Keep environment overrides and cached settings out of tests."""
    from event_handler_loader.settings import get_settings

    for var in [
        "EVENT_HANDLER_LOADER_IMPORT_MODE",
        "EVENT_HANDLER_LOADER_EXPORT_TYPE",
        "EVENT_HANDLER_LOADER_PREFERRED_NAMED_EXPORT",
        "EVENT_HANDLER_LOADER_IS_RECURSIVE",
        "EVENT_HANDLER_LOADER_LOG_LEVEL",
    ]:
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
