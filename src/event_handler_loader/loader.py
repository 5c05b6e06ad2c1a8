"""Loading of event handler modules from a directory onto a listener target.

```python
from event_handler_loader import load_event_handlers

await load_event_handlers(
    "bot/events",
    client,
    {"export_type": "named", "listener_prepended_args": [client]},
)
```

Each module file in the directory is loaded, its handler candidates are
validated, wrapped into listeners and bound with one of ``on``, ``once``,
``prepend_listener`` or ``prepend_once_listener``. A ``bind_override``
callback replaces validation and binding entirely.

Any failure aborts the whole load. Listeners bound before the failure stay
bound, and loading the same directory twice binds everything twice.
"""

import asyncio
import concurrent.futures
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from loguru import logger

from .binder import bind_listener, missing_listener_methods
from .enums import ImportMode
from .exceptions import EmptyDirectoryError, InvalidOptionsError, InvalidTargetError
from .importer import import_event_handlers
from .listener import create_listener, is_async_callable
from .resolver import is_module_file, list_files, resolve_directory
from .settings import LoadOptions, resolve_options
from .validator import normalize_handler

BindOverride = Callable[[Any, Any, str, tuple[Any, ...]], Any]


async def _load_module(
    path: Path,
    target: Any,
    options: LoadOptions,
    bind_override: BindOverride | None,
) -> int:
    """Load one module and bind its handlers. Returns the number of candidates handled."""
    # Module loading is the suspension point between concurrent pipelines
    await asyncio.sleep(0)
    source, candidates = import_event_handlers(path, options.export_type, options.preferred_named_export)
    prepended_args = options.listener_prepended_args

    for candidate in candidates:
        if bind_override is not None:
            if is_async_callable(bind_override):
                await bind_override(target, candidate, source, prepended_args)
            else:
                bind_override(target, candidate, source, prepended_args)
            continue

        handler = normalize_handler(candidate, options.preferred_event_handler_keys, source)
        bind_listener(target, handler, create_listener(handler.execute, prepended_args))

    logger.debug(f"Processed {len(candidates)} handler(s) from {source}")
    return len(candidates)


async def load_event_handlers(
    directory: str | Path,
    target: Any,
    options: Mapping[str, Any] | LoadOptions | None = None,
    bind_override: BindOverride | None = None,
) -> bool:
    """Load every handler module in ``directory`` and bind it onto ``target``.

    Every call executes each module file afresh and registers it in
    ``sys.modules`` under a unique name, where it stays for the life of the
    process. Calling this repeatedly (e.g. on every reload) therefore grows
    ``sys.modules`` by one entry per loaded file.

    Args:
        directory: Directory holding the handler modules
        target: Object exposing ``on``, ``once``, ``add_listener``,
            ``prepend_listener`` and ``prepend_once_listener``
        options: Mapping of option names to values, or a ``LoadOptions``.
            Merged over the defaults from ``get_settings()``.
        bind_override: Called as ``bind_override(target, candidate, source, prepended_args)``
            for each candidate instead of validating and binding it. Awaited
            when declared async.

    Returns:
        True once every module has been processed.

    Raises:
        InvalidDirectoryError: If ``directory`` is missing or not a directory
        InvalidTargetError: If ``target`` lacks a registration method
        InvalidOptionsError: If ``options`` or ``bind_override`` is invalid, or an
            ``EVENT_HANDLER_LOADER_*`` environment default is invalid
        EmptyDirectoryError: If the directory has no files, or no module files
            while ``require_modules`` is set
        ModuleLoadError: If executing a module fails
        ExportNotFoundError: If a module lacks the selected export
        MissingPropertyError: If a handler lacks its name or execute property
        InvalidTypeError: If a handler property has the wrong type
    """
    dir_path = resolve_directory(directory)

    missing = missing_listener_methods(target)
    if missing:
        raise InvalidTargetError(target, missing)

    load_options = resolve_options(options)
    if bind_override is not None and not callable(bind_override):
        raise InvalidOptionsError(f"Invalid bind override: {bind_override!r}. Must be callable.", "bind_override")

    files = list_files(dir_path, recursive=load_options.is_recursive)
    if not files:
        raise EmptyDirectoryError(dir_path)

    module_files = []
    for path in files:
        if is_module_file(path, load_options.module_extensions):
            module_files.append(path)
        else:
            logger.trace(f"Skipping non-module file {path}")

    if not module_files:
        if load_options.require_modules:
            raise EmptyDirectoryError(dir_path, "No event handler modules found")
        logger.warning(f"No event handler modules found in {dir_path}, nothing to bind")
        return True

    logger.debug(f"Loading {len(module_files)} module(s) from {dir_path} ({load_options.import_mode} mode)")

    if load_options.import_mode == ImportMode.CONCURRENT:
        results = await asyncio.gather(
            *(_load_module(path, target, load_options, bind_override) for path in module_files),
            return_exceptions=True,
        )
        errors = [result for result in results if isinstance(result, BaseException)]
        if errors:
            logger.error(f"Loading handlers from {dir_path} failed: {len(errors)} of {len(module_files)} module(s) failed")
            raise errors[0]
        handled = sum(results)
    else:
        handled = 0
        for path in module_files:
            try:
                handled += await _load_module(path, target, load_options, bind_override)
            except Exception as e:
                logger.error(f"Loading handlers from {dir_path} failed at {path.name}: {e}")
                raise

    logger.info(f"Loaded {handled} event handler(s) from {len(module_files)} module(s) in {dir_path}")
    return True


def load_event_handlers_sync(
    directory: str | Path,
    target: Any,
    options: Mapping[str, Any] | LoadOptions | None = None,
    bind_override: BindOverride | None = None,
) -> bool:
    """Run ``load_event_handlers`` from synchronous code.

    Inside a running event loop the load runs on a worker thread with its own
    loop; async listeners are still bound as coroutine functions.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(load_event_handlers(directory, target, options, bind_override))

    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
        future = executor.submit(asyncio.run, load_event_handlers(directory, target, options, bind_override))
        return future.result()
