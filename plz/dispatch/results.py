"""Per-repository dispatch outcomes.

Three distinct variants, because they have different output contracts:

- ``Succeeded``: the operation ran; ``payload`` is what the renderer shows
- ``Failed``: the operation failed and the user should hear about it
- ``Skipped``: the operation was abandoned on purpose and prints nothing
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from plz.git.repository import RepositoryHandle

__all__ = [
    "DispatchResult",
    "Failed",
    "Operation",
    "Skipped",
    "Succeeded",
]


@dataclass(frozen=True, slots=True)
class Succeeded[T]:
    path: Path
    payload: T


@dataclass(frozen=True, slots=True)
class Failed:
    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class Skipped:
    """Soft-skip. ``reason`` is for tests and debugging, never rendered."""

    path: Path
    reason: str | None = None


type DispatchResult[T] = Succeeded[T] | Failed | Skipped

type Operation[T] = Callable[[RepositoryHandle], DispatchResult[T]]
