"""In-memory repository for tests.

Implements ``RepositoryHandle`` without touching git, with configurable
failures per operation and a record of the calls made.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path

from plz.core.result import Err, Ok, Result
from plz.git.repository import GitError, StatusEntry

__all__ = ["FakeRepository"]


def _empty_calls() -> list[str]:
    return []


@dataclass
class FakeRepository:
    """Scripted repository.

    Attributes:
        path: Reported repository path
        entries: What ``statuses()`` returns
        head: What ``reset()`` reports as the new head
        delay: Seconds every operation sleeps, to exercise concurrency
        *_error: When set, the matching operation fails with this message
        calls: Operation names in call order
    """

    path: Path
    entries: tuple[StatusEntry, ...] = ()
    head: str = "main"
    delay: float = 0.0
    status_error: str | None = None
    checkout_error: str | None = None
    reset_error: str | None = None
    clean_error: str | None = None
    raises: Exception | None = None
    calls: list[str] = field(default_factory=_empty_calls)

    def _enter(self, name: str) -> None:
        self.calls.append(name)
        if self.delay:
            time.sleep(self.delay)
        if self.raises is not None:
            raise self.raises

    def statuses(self) -> Result[tuple[StatusEntry, ...], GitError]:
        self._enter("statuses")
        if self.status_error:
            return Err(GitError(command="status", message=self.status_error))
        return Ok(self.entries)

    def checkout(self, branch: str) -> Result[str, GitError]:
        self._enter(f"checkout {branch}")
        if self.checkout_error:
            return Err(GitError(command=f"checkout {branch}", message=self.checkout_error))
        return Ok(branch)

    def reset(self) -> Result[str, GitError]:
        self._enter("reset")
        if self.reset_error:
            return Err(GitError(command="reset --hard", message=self.reset_error))
        self.entries = ()
        return Ok(self.head)

    def remove_untracked(self) -> Result[str, GitError]:
        self._enter("remove_untracked")
        if self.clean_error:
            return Err(GitError(command="clean -fd", message=self.clean_error))
        return Ok("")
