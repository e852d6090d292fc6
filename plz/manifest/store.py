"""Manifest: the persisted cache of discovered repositories.

The manifest is a latency optimization only. Opening it never fails: a
missing, unreadable or malformed document yields an empty manifest, and an
empty manifest makes the selector walk the filesystem instead.

Usage:
    manifest = Manifest.open(document, Path.cwd(), console=console)
    if manifest.is_empty():
        ...
    result = manifest.add_repositories(find_repositories(Path.cwd()))
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from os import PathLike
from pathlib import Path, PurePath, PurePosixPath

from plz.core.config import ManifestFormat
from plz.core.result import Err, Ok, Result
from plz.git.repository import RepositoryHandle
from plz.manifest.codec import decode, encode, format_for
from plz.manifest.errors import ManifestError
from plz.manifest.snapshot import ManifestSnapshot, relative_key
from plz.output.console import ConsoleProtocol, Style
from plz.platform.files import replace_text

__all__ = ["Manifest", "ManifestPaths", "remove_document"]


class ManifestPaths:
    """Finite, restartable view of a snapshot's relative paths.

    Each iteration walks the keys afresh in lexicographic order.
    """

    __slots__ = ("_snapshot",)

    def __init__(self, snapshot: ManifestSnapshot) -> None:
        self._snapshot = snapshot

    def __iter__(self) -> Iterator[PurePosixPath]:
        for key in self._snapshot.sorted_keys():
            yield PurePosixPath(key)

    def __len__(self) -> int:
        return len(self._snapshot)


class Manifest:
    """Loaded manifest bound to a document path.

    Attributes:
        document: Where the manifest is persisted
    """

    def __init__(
        self,
        document: Path,
        snapshot: ManifestSnapshot,
        *,
        console: ConsoleProtocol | None = None,
    ) -> None:
        self.document = document
        self._snapshot = snapshot
        self._console = console

    @classmethod
    def open(
        cls,
        document: Path,
        root: Path,
        *,
        console: ConsoleProtocol | None = None,
    ) -> Manifest:
        """Load ``document``, or start empty and bound to ``root``."""
        match _read(document, root):
            case Ok(snapshot):
                return cls(document, snapshot, console=console)
            case Err(_):
                return cls.fresh(document, root, console=console)

    @classmethod
    def fresh(
        cls,
        document: Path,
        root: Path,
        *,
        console: ConsoleProtocol | None = None,
    ) -> Manifest:
        """Empty manifest bound to ``root``, ignoring what is on disk."""
        return cls(document, ManifestSnapshot.empty(root), console=console)

    @property
    def root(self) -> Path:
        return self._snapshot.root

    @property
    def snapshot(self) -> ManifestSnapshot:
        return self._snapshot

    @property
    def format(self) -> ManifestFormat:
        return format_for(self.document)

    def is_empty(self) -> bool:
        return len(self._snapshot) == 0

    def __len__(self) -> int:
        return len(self._snapshot)

    def contains(self, path: str | PathLike[str]) -> bool:
        """Membership test for a repository path.

        Absolute paths are made relative to the root first; anything
        outside the root is not a member.
        """
        p = PurePath(path)
        if p.is_absolute():
            key = relative_key(self.root, p)
        else:
            key = PurePosixPath(*p.parts).as_posix() if p.parts else None
        return key is not None and key in self._snapshot.repositories

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, PathLike)):
            return False
        return self.contains(path)

    def paths(self) -> ManifestPaths:
        return ManifestPaths(self._snapshot)

    def add_repositories(self, repos: Iterable[RepositoryHandle]) -> Result[int, ManifestError]:
        """Merge repositories into the manifest and persist it.

        Repositories not strictly below the root are reported and skipped.
        The document is rewritten once, after the whole input is consumed.

        Returns:
            Ok(number of newly added paths), or Err if the write failed
        """
        keys: set[str] = set()
        for repo in repos:
            key = relative_key(self.root, repo.path)
            if key is None:
                self._diagnostic(f"skipping {repo.path}: not below manifest root {self.root}")
                continue
            keys.add(key)

        before = len(self._snapshot)
        self._snapshot = self._snapshot.merged(keys)
        added = len(self._snapshot) - before

        return self.save().map(lambda _: added)

    def save(self) -> Result[Path, ManifestError]:
        """Atomically replace the document with the full snapshot."""
        content = encode(self._snapshot, self.format)
        try:
            replace_text(self.document, content)
        except OSError as e:
            return Err(
                ManifestError(
                    kind="write_failed",
                    message=f"Cannot write manifest {self.document}: {e}",
                    path=self.document,
                    hint="check permissions on the cache directory",
                )
            )
        return Ok(self.document)

    def _diagnostic(self, message: str) -> None:
        if self._console is not None:
            self._console.print(message, Style.DIM)

    def __repr__(self) -> str:
        return (
            f"Manifest(document={str(self.document)!r}, "
            f"root={str(self.root)!r}, repositories={len(self)})"
        )


def _read(document: Path, root: Path) -> Result[ManifestSnapshot, ManifestError]:
    try:
        text = document.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(ManifestError(kind="unreadable", message="No manifest", path=document))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ManifestError(kind="unreadable", message=str(e), path=document))

    return decode(text, format_for(document), root)


def remove_document(document: Path) -> Result[bool, ManifestError]:
    """Delete the manifest document.

    Returns:
        Ok(True) if a document was removed, Ok(False) if there was none
    """
    try:
        document.unlink()
    except FileNotFoundError:
        return Ok(False)
    except OSError as e:
        return Err(
            ManifestError(
                kind="remove_failed",
                message=f"Cannot remove manifest {document}: {e}",
                path=document,
            )
        )
    return Ok(True)
