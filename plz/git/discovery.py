"""Repository discovery.

Walks a directory tree and yields a ``Repository`` for every working tree
found below it (a directory holding a ``.git`` directory or a ``.git``
file, as worktrees and submodules use). The starting directory itself is
never yielded, so a walk selects exactly what a manifest bound to the same
root can store. The walk does not descend into a repository below the
starting directory, and never into ``.git``.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

from plz.git.repository import Repository

__all__ = ["find_repositories"]

GIT_DIR = ".git"


def find_repositories(root: Path) -> Iterator[Repository]:
    """Lazily yield every repository strictly below ``root``.

    Directories are visited in sorted order so the walk is reproducible.
    Unreadable directories are skipped.
    """
    for dirpath, dirnames, filenames in os.walk(root, topdown=True):
        current = Path(dirpath)
        has_git = GIT_DIR in dirnames or GIT_DIR in filenames
        dirnames[:] = sorted(d for d in dirnames if d != GIT_DIR)

        if has_git and current != root:
            yield Repository(current)
            dirnames[:] = []
