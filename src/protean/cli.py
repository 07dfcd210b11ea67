# src/protean/cli.py
"""protean Command Line Interface.

Inspect property contracts without writing code:

    protean parse '!type' category
    protean contract myapp.resources:Document --json
"""

from __future__ import annotations

import importlib
import json
from pathlib import Path

import typer
from pydantic import ValidationError

from protean import __version__
from protean.contracts import PropertyContract
from protean.core.config import ProteanSettings, get_settings, load_settings
from protean.core.configurable import get_contract
from protean.core.logging import configure_logging

__all__ = ["app"]

app = typer.Typer(
    name="protean",
    help="protean: inspect declared property contracts.",
    no_args_is_help=True,
)

# Settings chosen by the root callback, shared with subcommands
_state: dict[str, ProteanSettings] = {}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"protean version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    settings: str | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log at DEBUG level.",
    ),
) -> None:
    """protean: inspect declared property contracts."""
    try:
        config = load_settings(Path(settings).expanduser()) if settings else get_settings()
    except FileNotFoundError:
        typer.echo(f"Error: Settings file not found: {settings}", err=True)
        raise typer.Exit(1) from None
    except ValidationError as e:
        typer.echo("Configuration errors:", err=True)
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            typer.echo(f"  - {loc}: {error['msg']}", err=True)
        raise typer.Exit(1) from None

    configure_logging(config, level="DEBUG" if verbose else None)
    _state["settings"] = config


def _current_settings() -> ProteanSettings:
    return _state.get("settings") or get_settings()


def _render(contract: PropertyContract, json_output: bool) -> None:
    if json_output:
        typer.echo(json.dumps(contract.as_dict(), indent=2))
        return
    typer.echo(f"names:    {', '.join(contract.names) or '-'}")
    typer.echo(f"required: {', '.join(contract.required) or '-'}")
    typer.echo(f"optional: {', '.join(contract.optional) or '-'}")


@app.command()
def parse(
    names: list[str] = typer.Argument(
        ...,
        help="Declared property names; prefix required ones with the marker (default '!').",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON.",
    ),
) -> None:
    """Show the contract a raw declaration builds."""
    marker = _current_settings().required_marker
    _render(PropertyContract.from_declaration(names, marker=marker), json_output)


def _import_target(target: str) -> object:
    """Resolve 'package.module:Qualified.Name' to an object."""
    module_name, sep, qualname = target.partition(":")
    if not sep or not module_name or not qualname:
        raise ValueError(f"Expected 'module:Class', got {target!r}")

    obj: object = importlib.import_module(module_name)
    for part in qualname.split("."):
        obj = getattr(obj, part)
    return obj


@app.command()
def contract(
    target: str = typer.Argument(
        ...,
        help="Class to inspect, as 'package.module:ClassName'.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON.",
    ),
) -> None:
    """Show the merged contract of an augmented class."""
    try:
        obj = _import_target(target)
    except (ImportError, AttributeError, ValueError) as e:
        typer.echo(f"Error: cannot load {target}: {e}", err=True)
        raise typer.Exit(1) from None

    try:
        found = get_contract(obj)
    except TypeError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    _render(found, json_output)


if __name__ == "__main__":
    app()
