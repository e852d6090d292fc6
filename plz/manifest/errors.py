"""Manifest error type."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

__all__ = ["ManifestError"]


@dataclass(frozen=True, slots=True)
class ManifestError:
    """Error reading, writing or removing the manifest document.

    ``invalid`` is recoverable (the manifest degrades to empty); write and
    remove failures are fatal to the command that triggered them.
    """

    kind: Literal["invalid", "unreadable", "write_failed", "remove_failed"]
    message: str
    path: Path | None = None
    hint: str | None = None
