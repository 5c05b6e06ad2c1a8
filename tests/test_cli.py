"""Tests for the command-line interface."""

from typer.testing import CliRunner

from event_handler_loader.cli.app import app

runner = CliRunner()

PING_HANDLER = """
async def execute(*args):
    return args

default = {"name": "ping", "is_prepend": True, "execute": execute}
"""


def test_inspect_lists_handlers(make_handlers):
    directory = make_handlers({"ping.py": PING_HANDLER})

    result = runner.invoke(app, ["inspect", str(directory)])

    assert result.exit_code == 0
    assert "ping" in result.output
    assert "prepend_listener" in result.output


def test_inspect_with_key_aliases(make_handlers):
    directory = make_handlers({"ping.py": 'event_handler = {"event": "pong", "run": print}\n'})

    result = runner.invoke(
        app, ["inspect", str(directory), "-e", "named", "-k", "name=event", "--key", "execute=run"]
    )

    assert result.exit_code == 0
    assert "pong" in result.output


def test_inspect_without_handlers(make_handlers):
    directory = make_handlers({"notes.txt": "nothing"})

    result = runner.invoke(app, ["inspect", str(directory)])

    assert result.exit_code == 0
    assert "No event handlers found" in result.output


def test_check_valid_directory(make_handlers):
    directory = make_handlers({"ping.py": PING_HANDLER, "tick.py": PING_HANDLER.replace("ping", "tick")})

    result = runner.invoke(app, ["check", str(directory)])

    assert result.exit_code == 0
    assert "2 handler(s) for 2 event(s)" in result.output


def test_check_invalid_handler(make_handlers):
    directory = make_handlers({"bad.py": 'default = {"name": "bad"}\n'})

    result = runner.invoke(app, ["check", str(directory)])

    assert result.exit_code == 1
    assert "Missing required key" in result.output


def test_check_invalid_option(make_handlers):
    directory = make_handlers({"ping.py": PING_HANDLER})

    result = runner.invoke(app, ["check", str(directory), "--export-type", "everything"])

    assert result.exit_code == 1
    assert "export_type" in result.output


def test_malformed_key_alias(make_handlers):
    directory = make_handlers({"ping.py": PING_HANDLER})

    result = runner.invoke(app, ["check", str(directory), "--key", "name"])

    assert result.exit_code == 2


def test_check_invalid_environment_default(make_handlers, monkeypatch):
    directory = make_handlers({"ping.py": PING_HANDLER})
    monkeypatch.setenv("EVENT_HANDLER_LOADER_EXPORT_TYPE", "bogus")

    result = runner.invoke(app, ["check", str(directory)])

    assert result.exit_code == 1
    assert "export_type" in result.output
