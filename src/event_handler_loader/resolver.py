"""Directory resolution and file enumeration for handler modules."""

from pathlib import Path

from loguru import logger

from .exceptions import InvalidDirectoryError

SKIPPED_DIRECTORY_NAMES = frozenset({"__pycache__"})


def resolve_directory(path: str | Path) -> Path:
    """Resolve ``path`` to an absolute directory.

    Raises:
        InvalidDirectoryError: If the path does not exist, is not a directory,
            or is not a valid path at all (e.g. holds a null byte).
    """
    try:
        directory = Path(path).expanduser().resolve()
        is_dir = directory.is_dir()
    except (OSError, RuntimeError, TypeError, ValueError) as e:
        raise InvalidDirectoryError(path) from e

    if not is_dir:
        raise InvalidDirectoryError(path)
    return directory


def list_files(directory: Path, recursive: bool = False) -> list[Path]:
    """List the regular files of ``directory``, sorted by path.

    With ``recursive`` the whole tree is scanned, skipping hidden directories,
    ``__pycache__`` and symlinked directories, so a link loop is never followed
    and no file is listed twice.
    """
    files: list[Path] = []
    for entry in sorted(directory.iterdir()):
        if entry.is_file():
            files.append(entry)
        elif recursive and entry.is_dir():
            if entry.name.startswith(".") or entry.name in SKIPPED_DIRECTORY_NAMES:
                logger.trace(f"Skipping directory {entry}")
                continue
            if entry.is_symlink():
                logger.trace(f"Skipping symlinked directory {entry}")
                continue
            files.extend(list_files(entry, recursive=True))
    return files


def is_module_file(path: Path, extensions: tuple[str, ...]) -> bool:
    """Return True if ``path`` looks like a loadable handler module.

    Dunder files such as ``__init__.py`` are package plumbing, never handlers.
    """
    if path.name.startswith("__"):
        return False
    return path.suffix.lower() in extensions
