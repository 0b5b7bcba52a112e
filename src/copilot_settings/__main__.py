"""Entry point for `python -m copilot_settings` and the `copilot-settings` CLI command."""

from __future__ import annotations

import asyncio
import enum
import json
from collections.abc import Coroutine
from pathlib import Path
from typing import Any, Optional

import typer

from copilot_settings.config import DEFAULT_CHECK_TIMEOUT
from copilot_settings.errors import BinaryCheckError, PersistenceError
from copilot_settings.logs import configure_logging
from copilot_settings.storage import JsonFileStorage
from copilot_settings.store import SettingsStore
from copilot_settings.validator import BinaryValidator, format_error, format_result

app = typer.Typer(add_completion=False, no_args_is_help=True)


class HotkeyName(str, enum.Enum):
    accept = "accept"
    cancel = "cancel"


def _run(coro: Coroutine[Any, Any, Any]) -> Any:
    """Run a coroutine; turn storage failures into exit code 2."""
    try:
        return asyncio.run(coro)
    except PersistenceError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(2) from exc


async def _update_and_save(store: SettingsStore, **changes: Any) -> None:
    await store.load()
    store.update(**changes)
    await store.save()


@app.callback()
def main(
    ctx: typer.Context,
    data_file: Optional[Path] = typer.Option(
        None, help="Settings file (default: ~/.copilot_settings/data.json)"
    ),
    debug: bool = typer.Option(False, help="Write a debug trace to copilot_settings_debug.log"),
) -> None:
    """Copilot settings — configure the completion assistant and check its runtime."""
    configure_logging(debug)
    ctx.obj = SettingsStore(JsonFileStorage(data_file))


@app.command()
def show(ctx: typer.Context) -> None:
    """Print the effective settings (stored values over defaults) as JSON."""
    settings = _run(ctx.obj.load())
    typer.echo(json.dumps(settings.to_data(), indent=2))


@app.command("set-path")
def set_path(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Binary path, or 'default'"),
) -> None:
    """Set the runtime binary path."""
    _run(_update_and_save(ctx.obj, binary_path=path))
    typer.echo(f"binaryPath = {path}")


@app.command()
def enable(ctx: typer.Context) -> None:
    """Turn suggestions on."""
    _run(_update_and_save(ctx.obj, enabled=True))
    typer.echo("enabled = true")


@app.command()
def disable(ctx: typer.Context) -> None:
    """Turn suggestions off."""
    _run(_update_and_save(ctx.obj, enabled=False))
    typer.echo("enabled = false")


@app.command("set-hotkey")
def set_hotkey(
    ctx: typer.Context,
    hotkey: HotkeyName = typer.Argument(..., help="Which hotkey to change"),
    key: str = typer.Argument(..., help="Key or key combination, e.g. Tab or Ctrl-Enter"),
) -> None:
    """Change the accept or cancel hotkey."""
    if not key:
        typer.echo("Error: key must not be empty", err=True)
        raise typer.Exit(2)
    _run(_update_and_save(ctx.obj, hotkeys={hotkey.value: key}))
    typer.echo(f"hotkeys.{hotkey.value} = {key}")


@app.command()
def check(
    ctx: typer.Context,
    path: Optional[str] = typer.Option(None, help="Binary to check instead of the configured one"),
    timeout: float = typer.Option(
        DEFAULT_CHECK_TIMEOUT, min=0.1, help="Seconds to wait for the version"
    ),
) -> None:
    """Run the binary with --version and report whether it is compatible."""
    store: SettingsStore = ctx.obj
    if path is None:
        path = _run(store.load()).binary_path
    validator = BinaryValidator(timeout=timeout)
    try:
        result = asyncio.run(validator.check(path))
    except BinaryCheckError as exc:
        typer.echo(format_error(exc))
        raise typer.Exit(1) from exc
    typer.echo(format_result(result, validator.required))
    if not result.compatible:
        raise typer.Exit(1)


@app.command()
def tui(ctx: typer.Context) -> None:
    """Open the interactive settings panel."""
    from copilot_settings.app import SettingsApp

    SettingsApp(ctx.obj).run()


if __name__ == "__main__":
    app()
