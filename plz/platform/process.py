"""Subprocess execution with Result-based error handling.

Usage:
    match run_git(repo_path, ["status", "--porcelain=v1"]):
        case Ok(stdout):
            print(stdout)
        case Err(error):
            print(f"Failed: {error.stderr}")
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from plz.core.result import Err, Ok, Result

__all__ = ["GIT_ENV", "ProcessError", "run", "run_git"]

# Many git processes run side by side without a terminal:
# - never block on a credential prompt
# - skip the optional index refresh lock that `status` takes
# - keep messages in English so they read the same in every result line
GIT_ENV: Mapping[str, str] = {
    "GIT_TERMINAL_PROMPT": "0",
    "GIT_OPTIONAL_LOCKS": "0",
    "LC_ALL": "C",
}


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A subprocess that could not be started or exited non-zero.

    Attributes:
        command: The command that was executed.
        returncode: Exit code, -1 if the process never ran.
        stdout: Standard output (may be empty).
        stderr: Standard error.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"

    @classmethod
    def not_started(cls, cmd: Sequence[str], reason: str) -> ProcessError:
        return cls(command=tuple(cmd), returncode=-1, stdout="", stderr=reason)


def run(
    cmd: Sequence[str],
    cwd: Path,
    *,
    env: Mapping[str, str] | None = None,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Execute ``cmd`` in ``cwd`` and return its stdout.

    ``env`` entries are layered over the inherited environment.

    Returns:
        Ok(stdout) on exit code 0, Err(ProcessError) otherwise, including
        when the executable is missing or the timeout expires.
    """
    full_env = {**os.environ, **env} if env else None
    try:
        proc = subprocess.run(
            list(cmd),
            cwd=str(cwd),
            env=full_env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return Err(ProcessError.not_started(cmd, f"Command timed out after {timeout}s"))
    except OSError as e:
        return Err(ProcessError.not_started(cmd, str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)


def run_git(
    repo: Path,
    args: Sequence[str],
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Run ``git -C <repo> <args>`` non-interactively."""
    return run(["git", "-C", str(repo), *args], cwd=repo, env=GIT_ENV, timeout=timeout)
