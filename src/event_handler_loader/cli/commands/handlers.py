"""Handler directory commands."""

import asyncio
from pathlib import Path

import typer
from rich.markup import escape

from event_handler_loader.cli.utils import build_options, console, render_registrations
from event_handler_loader.exceptions import EventHandlerLoaderError
from event_handler_loader.loader import load_event_handlers
from event_handler_loader.recorder import HandlerRecorder


def _dry_run(directory: Path, options: dict) -> HandlerRecorder:
    recorder = HandlerRecorder()
    try:
        asyncio.run(load_event_handlers(directory, recorder, options))
    except EventHandlerLoaderError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from None
    return recorder


def inspect(
    directory: Path = typer.Argument(..., help="Directory holding handler modules"),
    export_type: str | None = typer.Option(None, "--export-type", "-e", help="default, named or all"),
    named_export: str | None = typer.Option(None, "--named-export", "-n", help="Named export to read, '*' for all"),
    recursive: bool = typer.Option(False, "--recursive", "-r", help="Include subdirectories"),
    key: list[str] = typer.Option([], "--key", "-k", help="Property alias as ROLE=ALIAS, e.g. name=event"),
):
    """List the listeners a directory would bind, without binding them.

    Examples:
        event-handler-loader inspect handlers/
        event-handler-loader inspect handlers/ -e named -n '*' -k name=event
    """
    options = build_options(export_type, named_export, recursive, key)
    recorder = _dry_run(directory, options)

    if not recorder.registrations:
        console.print("[yellow]No event handlers found[/yellow]")
        return
    console.print(render_registrations(recorder, f"Event handlers in {directory}"))


def check(
    directory: Path = typer.Argument(..., help="Directory holding handler modules"),
    export_type: str | None = typer.Option(None, "--export-type", "-e", help="default, named or all"),
    named_export: str | None = typer.Option(None, "--named-export", "-n", help="Named export to read, '*' for all"),
    recursive: bool = typer.Option(False, "--recursive", "-r", help="Include subdirectories"),
    key: list[str] = typer.Option([], "--key", "-k", help="Property alias as ROLE=ALIAS, e.g. name=event"),
):
    """Validate every handler module in a directory. Exits with code 1 on the first problem.

    Examples:
        event-handler-loader check handlers/
    """
    options = build_options(export_type, named_export, recursive, key)
    recorder = _dry_run(directory, options)

    events = recorder.event_names()
    console.print(
        f"[green]{len(recorder.registrations)} handler(s) for {len(events)} event(s) in {directory} are valid[/green]"
    )
