"""Discovery-or-cache selection.

An empty manifest means walking the working directory. A populated one is
trusted: its paths are joined to the manifest root, and entries that have
stopped being working trees are dropped silently. Stale entries are never
removed here; only ``manifest generate`` rebuilds the document from scratch.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

from plz.git.discovery import find_repositories
from plz.git.repository import Repository
from plz.manifest.store import Manifest

__all__ = ["Discover", "cached_repositories", "select_repositories"]

type Discover = Callable[[Path], Iterable[Repository]]


def cached_repositories(manifest: Manifest) -> Iterator[Repository]:
    """Rebuild repository handles from the manifest without walking."""
    for rel in manifest.paths():
        repo = Repository(manifest.root.joinpath(*rel.parts))
        if repo.exists():
            yield repo


def select_repositories(
    manifest: Manifest,
    working_dir: Path,
    *,
    discover: Discover = find_repositories,
) -> Iterable[Repository]:
    """Repositories for this invocation, lazily."""
    if manifest.is_empty():
        return discover(working_dir)
    return cached_repositories(manifest)
