"""Load options and environment configuration.

``LoadOptions`` describes one ``load_event_handlers`` call. Callers may pass a
plain mapping or a ``LoadOptions`` instance; either way the values are merged
over the defaults and validated here.

``Settings`` holds process-wide defaults read from environment variables
(prefix ``EVENT_HANDLER_LOADER_``) or a ``.env`` file. For example
``EVENT_HANDLER_LOADER_IMPORT_MODE=sequential`` makes every load sequential
unless the caller says otherwise.
"""

from collections.abc import Mapping
from functools import lru_cache
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .enums import ExportType, ImportMode
from .exceptions import InvalidOptionsError

DEFAULT_NAMED_EXPORT = "event_handler"
ALL_NAMED_EXPORTS = "*"
DEFAULT_MODULE_EXTENSIONS = (".py",)


class HandlerKeys(BaseModel):
    """Property names read off each handler candidate.

    Any subset may be given; omitted roles keep their default name.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: StrictStr = Field(default="name", min_length=1)
    is_once: StrictStr = Field(default="is_once", min_length=1)
    is_prepend: StrictStr = Field(default="is_prepend", min_length=1)
    execute: StrictStr = Field(default="execute", min_length=1)


class LoadOptions(BaseModel):
    """Options for a single ``load_event_handlers`` call."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    import_mode: ImportMode = ImportMode.CONCURRENT
    export_type: ExportType = ExportType.DEFAULT
    preferred_named_export: StrictStr = Field(default=DEFAULT_NAMED_EXPORT, min_length=1)
    listener_prepended_args: tuple[Any, ...] = ()
    preferred_event_handler_keys: HandlerKeys = Field(default_factory=HandlerKeys)
    is_recursive: StrictBool = False
    module_extensions: tuple[StrictStr, ...] = Field(default=DEFAULT_MODULE_EXTENSIONS, min_length=1)
    require_modules: StrictBool = False

    @field_validator("import_mode", mode="before")
    @classmethod
    def accept_parallel_alias(cls, v: Any) -> Any:
        """Accept ``parallel`` as another spelling of ``concurrent``."""
        if v == "parallel":
            return ImportMode.CONCURRENT
        return v

    @field_validator("module_extensions")
    @classmethod
    def validate_extensions(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        for extension in v:
            if len(extension) < 2 or not extension.startswith("."):
                raise ValueError(f"Extension must look like '.py', got: {extension!r}")
        return tuple(extension.lower() for extension in v)


class Settings(BaseSettings):
    """Process-wide defaults.

    Attributes map to environment variables using the ``EVENT_HANDLER_LOADER_``
    prefix (case-insensitive).
    """

    log_level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Log level used by setup_logging and the CLI",
    )
    import_mode: ImportMode = Field(
        default=ImportMode.CONCURRENT,
        description="Default import mode when the caller does not pass one",
    )  # fmt: skip
    export_type: ExportType = Field(
        default=ExportType.DEFAULT,
        description="Default export selection policy",
    )  # fmt: skip
    preferred_named_export: str = Field(
        default=DEFAULT_NAMED_EXPORT,
        description="Default named export looked up with export_type 'named'",
    )  # fmt: skip
    is_recursive: bool = Field(
        default=False,
        description="Scan subdirectories by default",
    )  # fmt: skip

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | None) -> str:
        """Normalize and validate log level."""
        if v is None:
            return "INFO"

        v_upper = str(v).upper()

        allowed = {"TRACE", "DEBUG", "INFO", "WARNING", "ERROR"}
        if v_upper not in allowed:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {', '.join(sorted(allowed))}")

        return v_upper

    model_config = SettingsConfigDict(
        env_prefix="EVENT_HANDLER_LOADER_",
        case_sensitive=False,
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    def load_defaults(self) -> dict[str, Any]:
        """Return the option defaults that caller options are merged over."""
        return {
            "import_mode": self.import_mode,
            "export_type": self.export_type,
            "preferred_named_export": self.preferred_named_export,
            "is_recursive": self.is_recursive,
        }


@lru_cache
def get_settings() -> Settings:
    """Return the cached ``Settings`` instance."""

    return Settings()


def _invalid_value(error: ValidationError, kind: str) -> InvalidOptionsError:
    first = error.errors()[0]
    option = ".".join(str(part) for part in first["loc"])
    return InvalidOptionsError(f"Invalid value for {kind} '{option}': {first.get('input')!r}. {first['msg']}.", option)


def resolve_options(options: Mapping[str, Any] | LoadOptions | None = None, settings: Settings | None = None) -> LoadOptions:
    """Merge caller options over the defaults and validate the result.

    Args:
        options: ``None``, a mapping of option names to values, or a ``LoadOptions``.
        settings: Source of defaults. Falls back to ``get_settings()``.

    Returns:
        The validated, frozen ``LoadOptions``.

    Raises:
        InvalidOptionsError: If ``options`` is not a mapping, names an unknown
            option, or holds an invalid value, or if an ``EVENT_HANDLER_LOADER_*``
            environment variable holds an invalid default. Only the first
            problem is reported.
    """
    if options is None:
        overrides: dict[str, Any] = {}
    elif isinstance(options, LoadOptions):
        overrides = {name: getattr(options, name) for name in options.model_fields_set}
    elif isinstance(options, Mapping):
        overrides = dict(options)
    else:
        raise InvalidOptionsError(f"Invalid options: {options!r}. Must be a mapping or LoadOptions instance.")

    try:
        defaults = (settings or get_settings()).load_defaults()
    except ValidationError as e:
        raise _invalid_value(e, "setting") from None

    try:
        return LoadOptions.model_validate({**defaults, **overrides})
    except ValidationError as e:
        raise _invalid_value(e, "option") from None


__all__ = [
    "ALL_NAMED_EXPORTS",
    "DEFAULT_NAMED_EXPORT",
    "HandlerKeys",
    "LoadOptions",
    "Settings",
    "get_settings",
    "resolve_options",
]
