"""CLI utility functions shared across commands."""

from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from event_handler_loader.recorder import HandlerRecorder

console = Console()


def parse_key_aliases(pairs: list[str]) -> dict[str, str]:
    """Parse ``ROLE=ALIAS`` pairs given with ``--key``.

    Raises:
        typer.BadParameter: If a pair has no ``=``
    """
    aliases = {}
    for pair in pairs:
        role, sep, alias = pair.partition("=")
        if not sep:
            raise typer.BadParameter(f"Expected ROLE=ALIAS, got: {pair}", param_hint="--key")
        aliases[role.strip()] = alias.strip()
    return aliases


def build_options(
    export_type: str | None,
    named_export: str | None,
    recursive: bool,
    key_pairs: list[str],
) -> dict[str, Any]:
    """Build a load options mapping from CLI flags, leaving unset flags to the defaults."""
    options: dict[str, Any] = {"import_mode": "sequential", "is_recursive": recursive}
    if export_type is not None:
        options["export_type"] = export_type
    if named_export is not None:
        options["preferred_named_export"] = named_export
    if key_pairs:
        options["preferred_event_handler_keys"] = parse_key_aliases(key_pairs)
    return options


def render_registrations(recorder: HandlerRecorder, title: str) -> Table:
    table = Table(title=title)
    table.add_column("Event", style="cyan")
    table.add_column("Method")
    table.add_column("Listener")
    table.add_column("Async", justify="center")
    for registration in recorder.registrations:
        table.add_row(
            escape(str(registration.event_name)),
            registration.method,
            escape(registration.listener_name),
            "yes" if registration.is_async else "no",
        )
    return table
