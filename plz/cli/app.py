from __future__ import annotations

import typer

from plz import __version__
from plz.cli.commands.completions import completions
from plz.cli.commands.manifest_cmd import manifest_app
from plz.cli.commands.repo_cmds import checkout, reset, status
from plz.platform.paths import APP_NAME

app = typer.Typer(
    name=APP_NAME,
    add_completion=False,
    no_args_is_help=False,
    rich_markup_mode="rich",
)


# Commands
app.command()(status)
app.command()(checkout)
app.command()(reset)
app.command()(completions)

# Sub-apps
app.add_typer(manifest_app, name="manifest")


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Run git operations across every repository under the current directory."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    # By default, just show status.
    if ctx.invoked_subcommand is None:
        status(jobs=None)


def main() -> None:
    app(prog_name=APP_NAME)
