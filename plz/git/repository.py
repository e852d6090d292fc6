"""Git repository abstraction.

``Repository`` is the per-repository capability the dispatch engine drives.
Every method shells out to ``git -C <path>`` and returns a Result, so a
failing repository is a value rather than an exception.

Usage:
    repo = Repository(Path("/src/project"))
    match repo.statuses():
        case Ok(entries):
            for entry in entries:
                print(entry.kind.label, entry.path)
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol

from plz.core.result import Err, Ok, Result
from plz.platform.process import ProcessError, run_git

_GIT_TIMEOUT_SECONDS = 60.0

__all__ = [
    "GitError",
    "Repository",
    "RepositoryHandle",
    "StatusEntry",
    "StatusKind",
    "parse_porcelain",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class StatusKind(Enum):
    """Closed set of change kinds reported by ``status``."""

    DELETED = "Deleted"
    MODIFIED = "Modified"
    NEW = "New"
    RENAMED = "Renamed"
    TYPECHANGED = "Typechanged"
    UNKNOWN = "Unknown"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def from_xy(cls, xy: str) -> StatusKind:
        """Classify a two-character porcelain status code."""
        if xy == "??":
            return cls.NEW
        if "D" in xy:
            return cls.DELETED
        if "R" in xy:
            return cls.RENAMED
        if "T" in xy:
            return cls.TYPECHANGED
        if "A" in xy or "C" in xy:
            return cls.NEW
        if "M" in xy:
            return cls.MODIFIED
        return cls.UNKNOWN


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """One changed file.

    Attributes:
        kind: Classified change kind
        path: File path relative to the repository root
    """

    kind: StatusKind
    path: str


def parse_porcelain(output: str) -> tuple[StatusEntry, ...]:
    """Parse ``git status --porcelain=v1 -z`` output.

    With ``-z`` records are NUL-terminated and paths are never quoted. A
    rename or copy record is followed by an extra record holding the
    original path, which is consumed and dropped.
    """
    records = output.split("\0")
    entries: list[StatusEntry] = []

    i = 0
    while i < len(records):
        record = records[i]
        i += 1
        if len(record) < 4:
            continue

        xy = record[:2]
        entries.append(StatusEntry(kind=StatusKind.from_xy(xy), path=record[3:]))

        if "R" in xy or "C" in xy:
            i += 1

    return tuple(entries)


class Repository:
    """Handle on one git working tree.

    Attributes:
        path: Absolute path to the repository root
    """

    __slots__ = ("path",)

    def __init__(self, path: Path) -> None:
        self.path = path

    def __repr__(self) -> str:
        return f"Repository({str(self.path)!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Repository) and other.path == self.path

    def __hash__(self) -> int:
        return hash(self.path)

    def exists(self) -> bool:
        """Check if ``path`` still holds a git working tree."""
        return (self.path / ".git").exists()

    def statuses(self) -> Result[tuple[StatusEntry, ...], GitError]:
        """List changed files, untracked files included."""
        match self._run(["status", "--porcelain=v1", "-z", "--untracked-files=all"]):
            case Err(e):
                return Err(self._error("status", e))
            case Ok(stdout):
                return Ok(parse_porcelain(stdout))

    def checkout(self, branch: str) -> Result[str, GitError]:
        """Switch the working tree to ``branch``.

        Returns:
            Ok(branch) on success, Err(GitError) if git refused
        """
        match self._run(["checkout", branch]):
            case Err(e):
                return Err(self._error(f"checkout {branch}", e))
            case Ok(_):
                return Ok(branch)

    def reset(self) -> Result[str, GitError]:
        """Hard-reset the working tree to HEAD.

        Returns:
            Ok(head) with the branch name, or the short commit id when
            HEAD is detached
        """
        result = self._run(["reset", "--hard", "HEAD"])
        if isinstance(result, Err):
            return Err(self._error("reset --hard", result.error))

        return self.head()

    def head(self) -> Result[str, GitError]:
        """Describe HEAD: branch name, or short commit id when detached."""
        result = self._run(["rev-parse", "--abbrev-ref", "HEAD"])
        if isinstance(result, Err):
            return Err(self._error("rev-parse", result.error))

        name = result.value.strip()
        if name != "HEAD":
            return Ok(name)

        match self._run(["rev-parse", "--short", "HEAD"]):
            case Err(e):
                return Err(self._error("rev-parse", e))
            case Ok(stdout):
                return Ok(stdout.strip())

    def remove_untracked(self) -> Result[str, GitError]:
        """Delete untracked files and directories (``git clean -fd``)."""
        match self._run(["clean", "-fd"]):
            case Err(e):
                return Err(self._error("clean -fd", e))
            case Ok(stdout):
                return Ok(stdout.strip())

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        return run_git(self.path, args, timeout=_GIT_TIMEOUT_SECONDS)

    @staticmethod
    def _error(command: str, e: ProcessError) -> GitError:
        return GitError(
            command=command,
            message=e.stderr.strip() or e.stdout.strip() or f"git {command} failed",
            returncode=e.returncode,
        )


class RepositoryHandle(Protocol):
    """What the manifest and the dispatch engine need from a repository.

    ``Repository`` implements it against the git executable; tests supply
    in-memory fakes.
    """

    @property
    def path(self) -> Path: ...

    def statuses(self) -> Result[tuple[StatusEntry, ...], GitError]: ...

    def checkout(self, branch: str) -> Result[str, GitError]: ...

    def reset(self) -> Result[str, GitError]: ...

    def remove_untracked(self) -> Result[str, GitError]: ...
