"""Git operations.

- ``Repository``: per-repository capability (status, checkout, reset,
  untracked cleanup) built on the ``git`` executable
- ``find_repositories``: lazy recursive discovery under a root

Usage:
    from plz.git import find_repositories

    for repo in find_repositories(Path.cwd()):
        print(repo.path)
"""

from plz.git.discovery import find_repositories
from plz.git.repository import (
    GitError,
    Repository,
    RepositoryHandle,
    StatusEntry,
    StatusKind,
    parse_porcelain,
)

__all__ = [
    # Discovery
    "find_repositories",
    # Repository
    "GitError",
    "Repository",
    "RepositoryHandle",
    "StatusEntry",
    "StatusKind",
    "parse_porcelain",
]
