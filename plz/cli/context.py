from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from plz.core.config import CONFIG_FILENAME, Config, ManifestFormat, load_config_or_default
from plz.core.errors import ErrorCode
from plz.output.console import ConsoleProtocol, RichConsole
from plz.platform.paths import manifest_path, user_cache_dir, user_config_dir
from plz.services.runner import CommandRunner


@dataclass(frozen=True, slots=True)
class CLIContext:
    working_dir: Path
    cache_dir: Path
    manifest_path: Path
    config: Config
    console: ConsoleProtocol

    def runner(self) -> CommandRunner:
        return CommandRunner(
            working_dir=self.working_dir,
            document=self.manifest_path,
            console=self.console,
            workers=self.config.dispatch.workers,
        )


def _abort(message: str) -> typer.Exit:
    typer.echo(f"error: {message}", err=True)
    return typer.Exit(code=int(ErrorCode.ENV_ERROR))


def build_context() -> CLIContext:
    try:
        working_dir = Path.cwd()
    except OSError as e:
        raise _abort(f"could not get working directory: {e}")

    try:
        cache_dir = user_cache_dir()
        config_dir = user_config_dir()
    except RuntimeError as e:
        raise _abort(f"could not locate app cache directory: {e}")

    if cache_dir.exists() and not cache_dir.is_dir():
        raise _abort(f"cache directory is not a directory: {cache_dir}")

    config = load_config_or_default(config_dir / CONFIG_FILENAME)
    lines = config.manifest.format is ManifestFormat.LINES

    return CLIContext(
        working_dir=working_dir,
        cache_dir=cache_dir,
        manifest_path=manifest_path(cache_dir, lines=lines),
        config=config,
        console=RichConsole(),
    )
