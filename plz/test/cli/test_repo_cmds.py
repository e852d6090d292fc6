from __future__ import annotations

from pathlib import Path

import pytest
import typer

from plz.cli.context import CLIContext
from plz.core.config import Config
from plz.core.errors import ErrorCode
from plz.output.console import MockConsole
from plz.services.runner import UnhandledCommand


def _ctx(tmp_path: Path) -> CLIContext:
    workspace = tmp_path / "w"
    workspace.mkdir(exist_ok=True)
    cache_dir = tmp_path / "cache"
    return CLIContext(
        working_dir=workspace,
        cache_dir=cache_dir,
        manifest_path=cache_dir / "manifest.json",
        config=Config(),
        console=MockConsole(),
    )


def test_status_without_repositories_prints_nothing(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import plz.cli.commands.repo_cmds as repo_cmds

    ctx = _ctx(tmp_path)
    monkeypatch.setattr(repo_cmds, "build_context", lambda: ctx)

    repo_cmds.status(jobs=2)

    assert isinstance(ctx.console, MockConsole)
    assert ctx.console.outputs == []


def test_reset_without_repositories_succeeds(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import plz.cli.commands.repo_cmds as repo_cmds

    monkeypatch.setattr(repo_cmds, "build_context", lambda: _ctx(tmp_path))

    repo_cmds.reset(jobs=None)


def test_unhandled_command_is_internal_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import plz.cli.commands._helpers as helpers
    from plz.core.command import StatusCommand

    class BrokenRunner:
        def execute(self, command: object) -> None:
            raise UnhandledCommand(repr(command))

    ctx = _ctx(tmp_path)
    monkeypatch.setattr(CLIContext, "runner", lambda self: BrokenRunner())

    with pytest.raises(typer.Exit) as exc:
        helpers.run_command(ctx, StatusCommand())

    assert exc.value.exit_code == int(ErrorCode.INTERNAL_ERROR)
    assert isinstance(ctx.console, MockConsole)
    assert ctx.console.has_error()
