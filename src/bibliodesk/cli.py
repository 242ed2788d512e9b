"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.console import Console
from rich.table import Table

from .di.bootstrap import create_container
from .errors import BiblioError, NavigationError, SettingsError
from .gui.navigator import Navigator
from .gui.utils.console_logger import configure_logging
from .settings.manager import SettingsManager

app = typer.Typer(help="Desktop client for the BiblioDesk library catalog")

SettingsOption = typer.Option(None, "--settings", "-s", help="Path to settings.json")


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (NavigationError, SettingsError) as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except BiblioError as exc:
            typer.echo(f"Unexpected error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def _load_settings(path: Optional[Path]) -> SettingsManager:
    settings = SettingsManager(path)
    settings.load()
    return settings


@app.command()
@_handle_errors
def run(
    settings_file: Optional[Path] = SettingsOption,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
) -> None:
    """Launch the desktop client."""

    from .gui.main import main

    if verbose:
        configure_logging("DEBUG")
    raise typer.Exit(main([], settings_path=settings_file))


@app.command()
@_handle_errors
def views(settings_file: Optional[Path] = SettingsOption) -> None:
    """List registered views with the stylesheets each one composes."""

    settings = _load_settings(settings_file)
    navigator: Navigator = create_container(settings).resolve(Navigator)

    table = Table(title="Registered views")
    table.add_column("View")
    table.add_column("Stylesheets")
    for view_id in navigator.registry.view_ids():
        sheets = navigator.compose_stylesheets(view_id)
        table.add_row(view_id, "\n".join(path.name for path in sheets) or "-")
    Console().print(table)


@app.command()
@_handle_errors
def settings(
    key: Optional[str] = typer.Argument(None, help="Dotted key, e.g. ui.page_size"),
    settings_file: Optional[Path] = SettingsOption,
) -> None:
    """Print the effective settings, or a single value."""

    manager = _load_settings(settings_file)
    if key is None:
        print(manager.snapshot())
        return
    value = manager.get(key)
    if value is None:
        typer.echo(f"Error: unknown setting {key}", err=True)
        raise typer.Exit(1)
    print(value)


if __name__ == "__main__":  # pragma: no cover - manual launch
    app()
