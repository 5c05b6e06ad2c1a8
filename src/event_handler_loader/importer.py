"""Dynamic loading of handler modules and export selection.

A handler module is an ordinary Python file. Its exports are read like this:

- the **default export** is the module attribute named ``default``;
- the **named exports** are the names in ``__all__`` when the module defines
  it, otherwise the public names the file assigns at top level that are not
  modules, classes or functions. Names the file only imports
  (``from loguru import logger``, ``from __future__ import annotations``) are
  never exports.

```python
# handlers/ready.py
default = {"name": "ready", "is_once": True, "execute": on_ready}
```

Each load registers the module in ``sys.modules`` under a unique name, and it
stays there for the life of the process.
"""

import ast
import inspect
import itertools
import re
import sys
from importlib.util import module_from_spec, spec_from_file_location
from pathlib import Path
from types import ModuleType
from typing import Any

from loguru import logger

from .enums import ExportType
from .exceptions import ExportNotFoundError, ModuleLoadError
from .settings import ALL_NAMED_EXPORTS, DEFAULT_NAMED_EXPORT

DEFAULT_EXPORT_NAME = "default"
MODULE_NAME_PREFIX = "_event_handler_module"

_module_counter = itertools.count()


def _unique_module_name(path: Path) -> str:
    stem = re.sub(r"\W", "_", path.stem)
    return f"{MODULE_NAME_PREFIX}_{stem}_{next(_module_counter)}"


def import_module_from_path(path: Path) -> ModuleType:
    """Execute the file at ``path`` as a fresh module.

    Every call loads the file again under a new module name, so loading the
    same file twice runs its top-level code twice. The module is left in
    ``sys.modules``; a failed load is removed again.

    Raises:
        ModuleLoadError: If the file cannot be read or executed.
    """
    source = path.as_uri()
    module_name = _unique_module_name(path)
    spec = spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ModuleLoadError(source, ImportError(f"No module loader for {path.name}"))

    module = module_from_spec(spec)
    # Registered before execution so dataclasses and pickling can find the module
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        sys.modules.pop(module_name, None)
        raise ModuleLoadError(source, e) from e

    logger.trace(f"Loaded module {module_name} from {source}")
    return module


def _collect_assigned(statements: list[ast.stmt], names: set[str]) -> None:
    for node in statements:
        if isinstance(node, ast.Assign):
            targets = node.targets
        elif isinstance(node, (ast.AnnAssign, ast.AugAssign)):
            targets = [node.target]
        elif isinstance(node, (ast.If, ast.Try, ast.TryStar, ast.With)):
            _collect_assigned(node.body, names)
            _collect_assigned(getattr(node, "orelse", []), names)
            _collect_assigned(getattr(node, "finalbody", []), names)
            for handler in getattr(node, "handlers", []):
                _collect_assigned(handler.body, names)
            continue
        else:
            continue

        for target in targets:
            for sub in ast.walk(target):
                if isinstance(sub, ast.Name) and isinstance(sub.ctx, ast.Store):
                    names.add(sub.id)


def assigned_names(module: ModuleType) -> set[str] | None:
    """Return the names ``module``'s source assigns at top level.

    Returns ``None`` when the module has no readable source.
    """
    try:
        tree = ast.parse(inspect.getsource(module))
    except (OSError, TypeError, SyntaxError):
        return None

    names: set[str] = set()
    _collect_assigned(tree.body, names)
    return names


def get_named_exports(module: ModuleType) -> dict[str, Any]:
    """Return the named exports of ``module`` in declaration order."""
    names = getattr(module, "__all__", None)
    if names is not None:
        return {name: getattr(module, name, None) for name in names}

    own_names = assigned_names(module)
    exports = {}
    for name, value in vars(module).items():
        if name.startswith("_"):
            continue
        if own_names is not None and name not in own_names:
            continue
        if inspect.ismodule(value) or inspect.isclass(value) or inspect.isroutine(value):
            continue
        exports[name] = value
    return exports
def extract_candidates(
    module: ModuleType,
    export_type: ExportType,
    preferred_named_export: str,
    source: str,
) -> list[Any]:
    """Select the handler candidates of a loaded module.

    Args:
        module: The loaded handler module
        export_type: Export selection policy
        preferred_named_export: Export name used with ``ExportType.NAMED``; ``*`` means all
        source: File URI of the module, used in error messages

    Returns:
        Candidates in declaration order.

    Raises:
        ExportNotFoundError: If the selected export is missing or ``None``. Under
            the all-named-exports policy a ``None`` export fails the load too.
    """
    namespace = vars(module)

    if export_type == ExportType.ALL or (export_type == ExportType.NAMED and preferred_named_export == ALL_NAMED_EXPORTS):
        candidates = []
        for export_name, value in get_named_exports(module).items():
            if export_name == DEFAULT_EXPORT_NAME:
                continue
            if value is None:
                raise ExportNotFoundError(export_name, source, "Must be a named export. Unable to verify named export")
            candidates.append(value)
        if not candidates:
            logger.warning(f"No named exports found in module: {source}")
        return candidates

    if export_type == ExportType.NAMED:
        if preferred_named_export == DEFAULT_EXPORT_NAME or namespace.get(preferred_named_export) is None:
            detail = (
                "Unable to verify named export"
                if preferred_named_export == DEFAULT_NAMED_EXPORT
                else "Unable to verify preferred named export"
            )
            raise ExportNotFoundError(preferred_named_export, source, f"Must be a named export. {detail}")
        return [namespace[preferred_named_export]]

    if namespace.get(DEFAULT_EXPORT_NAME) is None:
        raise ExportNotFoundError(DEFAULT_EXPORT_NAME, source, "Must be a default export. Unable to verify default export")
    return [namespace[DEFAULT_EXPORT_NAME]]


def import_event_handlers(path: Path, export_type: ExportType, preferred_named_export: str) -> tuple[str, list[Any]]:
    """Load ``path`` and return its source URI with its handler candidates."""
    module = import_module_from_path(path)
    source = path.as_uri()
    return source, extract_candidates(module, export_type, preferred_named_export, source)
