"""In-memory manifest state.

A snapshot is a root directory plus the set of repository paths below it,
each stored relative to the root in POSIX form ("a", "b/c").
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path, PurePath, PurePosixPath

__all__ = ["ManifestSnapshot", "is_valid_key", "relative_key"]


def relative_key(root: PurePath, path: PurePath) -> str | None:
    """Express ``path`` relative to ``root`` as a manifest key.

    Returns None when ``path`` is not strictly below ``root``: outside it,
    equal to it, or not comparable (relative vs absolute).
    """
    try:
        rel = path.relative_to(root)
    except ValueError:
        return None

    if not rel.parts:
        return None
    return PurePosixPath(*rel.parts).as_posix()


def is_valid_key(key: str) -> bool:
    """True for a non-empty relative path with no ``..`` or ``.`` parts."""
    p = PurePosixPath(key)
    if not key or p.is_absolute() or "\\" in key:
        return False
    return all(part not in ("", ".", "..") for part in key.split("/"))


@dataclass(frozen=True, slots=True)
class ManifestSnapshot:
    """Root plus deduplicated relative repository paths.

    Attributes:
        root: Absolute directory the paths are relative to
        repositories: Relative POSIX paths, one per repository
    """

    root: Path
    repositories: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def empty(cls, root: Path) -> ManifestSnapshot:
        return cls(root=root)

    def __len__(self) -> int:
        return len(self.repositories)

    def sorted_keys(self) -> list[str]:
        """Repository keys in lexicographic order."""
        return sorted(self.repositories)

    def merged(self, keys: Iterable[str]) -> ManifestSnapshot:
        """Return a snapshot with ``keys`` added; existing keys are no-ops."""
        return ManifestSnapshot(root=self.root, repositories=self.repositories | frozenset(keys))
