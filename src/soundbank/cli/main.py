"""Typer-based command line interface for the sound bank."""
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import click
import typer

from ..commands import build_registry
from ..config import AppConfig, load_config
from ..errors import BankError
from ..library import ModelLibrary
from ..logging import configure_logging
from ..store import BankStore

app = typer.Typer(help="Sound bank command line interface")


@app.callback()
def main(ctx: typer.Context, config: Optional[Path] = typer.Option(None, "--config", metavar="PATH")) -> None:
    try:
        ctx.obj = load_config(config)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=2)
    configure_logging(ctx.obj.logging.normalized_level(), renderer=ctx.obj.logging.renderer)


def _store() -> BankStore:
    config: AppConfig = click.get_current_context().obj
    return BankStore.from_config(config)


def _fail(exc: BankError) -> None:
    typer.echo(f"error: {exc}", err=True)
    raise typer.Exit(code=1)


@app.command("dir")
def bank_dir() -> None:
    """Create the bank root if needed and print it."""
    try:
        typer.echo(_store().ensure_bank_dir())
    except BankError as exc:
        _fail(exc)


@app.command()
def write(
    rel_path: str = typer.Argument(..., help="Path relative to the bank root"),
    contents: Optional[str] = typer.Argument(None, help="Text to store; read from stdin when omitted"),
) -> None:
    text = contents if contents is not None else sys.stdin.read()
    try:
        _store().write_text(rel_path, text)
    except BankError as exc:
        _fail(exc)


@app.command()
def read(rel_path: str = typer.Argument(..., help="Path relative to the bank root")) -> None:
    try:
        typer.echo(_store().read_text(rel_path), nl=False)
    except BankError as exc:
        _fail(exc)


@app.command("ls")
def list_dir(rel_dir: str = typer.Argument("", help="Directory relative to the bank root")) -> None:
    try:
        names = _store().read_dir(rel_dir)
    except BankError as exc:
        _fail(exc)
        return
    for name in names:
        typer.echo(name)


@app.command("rm")
def remove(rel_path: str = typer.Argument(..., help="Path relative to the bank root")) -> None:
    try:
        _store().remove(rel_path)
    except BankError as exc:
        _fail(exc)


@app.command()
def exists(rel_path: str = typer.Argument(..., help="Path relative to the bank root")) -> None:
    try:
        found = _store().exists(rel_path)
    except BankError as exc:
        _fail(exc)
        return
    typer.echo("true" if found else "false")


@app.command()
def invoke(
    command: str = typer.Argument(..., help="Command name, e.g. fs_read_text"),
    args: str = typer.Option("{}", "--args", help="JSON object of command arguments"),
) -> None:
    """Run a host command and print its JSON response."""
    try:
        parsed = json.loads(args)
    except json.JSONDecodeError as exc:
        typer.echo(f"error: --args is not valid JSON: {exc}", err=True)
        raise typer.Exit(code=2)
    registry = build_registry(_store())
    payload = json.dumps({"command": command, "args": parsed})
    response = registry.invoke_json(payload)
    typer.echo(response)
    if not json.loads(response)["ok"]:
        raise typer.Exit(code=1)


@app.command()
def models() -> None:
    """List stored synthesis models as JSON."""
    try:
        loaded = ModelLibrary(_store()).load_all()
    except BankError as exc:
        _fail(exc)
        return
    summary = [{"id": model.meta.id, "name": model.name, "tags": model.meta.tags} for model in loaded]
    typer.echo(json.dumps(summary, ensure_ascii=False, indent=2))


@app.command()
def version() -> None:
    from ..version import __version__

    typer.echo(__version__)


if __name__ == "__main__":  # pragma: no cover
    app()
