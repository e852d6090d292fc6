"""Shell completion script output."""

from __future__ import annotations

from enum import Enum

import typer
from click.shell_completion import get_completion_class

from plz.core.errors import ErrorCode
from plz.platform.paths import APP_NAME

COMPLETE_VAR = "_GIT_PLZ_COMPLETE"


class Shell(str, Enum):
    BASH = "bash"
    ZSH = "zsh"
    FISH = "fish"


def completion_script(shell: Shell) -> str | None:
    """Completion script for ``shell``, or None if click has no support for it."""
    from plz.cli.app import app

    cls = get_completion_class(shell.value)
    if cls is None:
        return None
    command = typer.main.get_command(app)
    return cls(command, {}, APP_NAME, COMPLETE_VAR).source()


def completions(
    shell: Shell = typer.Argument(..., help="Shell to generate completions for."),
) -> None:
    """Print a shell completion script."""
    script = completion_script(shell)
    if script is None:
        typer.echo(f"error: unsupported shell: {shell.value}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    typer.echo(script)
