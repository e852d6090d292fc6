"""Manifest commands: generate, update, preview, clean."""

from __future__ import annotations

import typer

from plz.cli.commands._helpers import run_command
from plz.cli.context import build_context
from plz.core.command import ManifestAction, ManifestCommand

manifest_app = typer.Typer(help="Manage the cached list of repositories.")


def _run(action: ManifestAction) -> None:
    run_command(build_context(), ManifestCommand(action=action))


@manifest_app.callback(invoke_without_command=True)
def _manifest(ctx: typer.Context) -> None:  # pyright: ignore[reportUnusedFunction]
    """Without a subcommand, preview."""
    if ctx.invoked_subcommand is None:
        _run(ManifestAction.PREVIEW)


@manifest_app.command()
def generate() -> None:
    """Rebuild the manifest from a fresh walk of the working directory."""
    _run(ManifestAction.GENERATE)


@manifest_app.command()
def update() -> None:
    """Merge a fresh walk of the working directory into the manifest."""
    _run(ManifestAction.UPDATE)


@manifest_app.command()
def preview() -> None:
    """List the repositories commands would run on."""
    _run(ManifestAction.PREVIEW)


@manifest_app.command()
def clean() -> None:
    """Delete the manifest document."""
    _run(ManifestAction.CLEAN)
