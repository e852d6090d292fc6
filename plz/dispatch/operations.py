"""Per-repository operations run by the worker pool.

Each operation maps one repository to exactly one DispatchResult and
encodes that command's failure policy:

- status: a failing status check is reported
- checkout: a failed checkout is reported; other repositories carry on
- reset: a failing status check or untracked cleanup abandons the
  repository silently; a failing reset is reported
"""

from __future__ import annotations

from plz.core.result import Err, Ok
from plz.dispatch.results import DispatchResult, Failed, Operation, Skipped, Succeeded
from plz.git.repository import RepositoryHandle, StatusEntry

__all__ = [
    "checkout_operation",
    "reset_operation",
    "status_operation",
]


def status_operation(repo: RepositoryHandle) -> DispatchResult[tuple[StatusEntry, ...]]:
    match repo.statuses():
        case Ok(entries):
            return Succeeded(repo.path, entries)
        case Err(e):
            return Failed(repo.path, e.message)


def checkout_operation(branch: str) -> Operation[str]:
    """Build the checkout operation for ``branch``."""

    def checkout(repo: RepositoryHandle) -> DispatchResult[str]:
        match repo.checkout(branch):
            case Ok(checked_out):
                return Succeeded(repo.path, checked_out)
            case Err(e):
                return Failed(repo.path, e.message)

    return checkout


def reset_operation(repo: RepositoryHandle) -> DispatchResult[str]:
    """Clean untracked files if needed, then hard-reset to HEAD.

    The payload is the new head (branch name or short commit id).
    """
    statuses = repo.statuses()
    if isinstance(statuses, Err):
        return Skipped(repo.path, reason=f"status: {statuses.error.message}")

    if statuses.value:
        cleaned = repo.remove_untracked()
        if isinstance(cleaned, Err):
            return Skipped(repo.path, reason=f"clean: {cleaned.error.message}")

    match repo.reset():
        case Ok(head):
            return Succeeded(repo.path, head)
        case Err(e):
            return Failed(repo.path, e.message)
