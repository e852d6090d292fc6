"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer

from plz.core.errors import ErrorCode
from plz.core.result import Err, Result
from plz.output.console import Style
from plz.services.runner import RunSummary, UnhandledCommand

if TYPE_CHECKING:
    from plz.cli.context import CLIContext
    from plz.core.command import Command


def exit_on_error[T, E](
    result: Result[T, E],
    ctx: CLIContext,
    error_code: ErrorCode = ErrorCode.IO_ERROR,
) -> None:
    """Exit with ``error_code`` if result is Err, otherwise return.

    Error objects are expected to expose ``message`` and optionally ``hint``.
    """
    if isinstance(result, Err):
        error = result.error
        message: str = getattr(error, "message", str(error))
        hint: str | None = getattr(error, "hint", None)
        ctx.console.error(message)
        if hint:
            ctx.console.print(f"hint: {hint}", Style.DIM)
        raise typer.Exit(code=int(error_code))


def exit_with_code(code: int) -> NoReturn:
    raise typer.Exit(code=code)


def run_command(ctx: CLIContext, command: Command) -> RunSummary:
    """Execute a decoded command, mapping failures to exit codes."""
    try:
        result = ctx.runner().execute(command)
    except UnhandledCommand as e:
        ctx.console.error(f"internal error: unhandled command {e}")
        exit_with_code(int(ErrorCode.INTERNAL_ERROR))

    exit_on_error(result, ctx, ErrorCode.IO_ERROR)
    return result.unwrap()
