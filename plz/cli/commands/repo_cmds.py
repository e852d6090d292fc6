"""Repository commands: status, checkout, reset.

Each runs one operation on every selected repository in parallel and
prints results as they complete.
"""

from __future__ import annotations

import typer

from plz.cli.commands._helpers import run_command
from plz.cli.context import build_context
from plz.core.command import CheckoutCommand, ResetCommand, StatusCommand

_JOBS_HELP = "Worker threads (default: number of CPUs)."


def status(
    jobs: int | None = typer.Option(None, "--jobs", "-j", min=1, help=_JOBS_HELP),
) -> None:
    """Show changed files in every repository (the default command)."""
    run_command(build_context(), StatusCommand(workers=jobs))


def checkout(
    branch: str = typer.Argument(..., help="Branch to check out."),
    jobs: int | None = typer.Option(None, "--jobs", "-j", min=1, help=_JOBS_HELP),
) -> None:
    """Check out BRANCH in every repository."""
    run_command(build_context(), CheckoutCommand(branch=branch, workers=jobs))


def reset(
    jobs: int | None = typer.Option(None, "--jobs", "-j", min=1, help=_JOBS_HELP),
) -> None:
    """Remove untracked files and hard-reset every repository to HEAD."""
    run_command(build_context(), ResetCommand(workers=jobs))
