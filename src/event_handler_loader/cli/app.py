"""Main CLI application."""

import typer

from event_handler_loader.cli.commands import handlers

app = typer.Typer(
    name="event-handler-loader",
    help="Event handler loader - inspect and check handler directories",
    no_args_is_help=True,
)

app.command("inspect")(handlers.inspect)
app.command("check")(handlers.check)
