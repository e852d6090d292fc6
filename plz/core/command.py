"""Decoded command values.

The CLI turns argv into exactly one of these immutable values; everything
below the CLI receives the value and never looks at argv again.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "CheckoutCommand",
    "Command",
    "ManifestAction",
    "ManifestCommand",
    "ResetCommand",
    "StatusCommand",
]


class ManifestAction(Enum):
    GENERATE = "generate"
    UPDATE = "update"
    PREVIEW = "preview"
    CLEAN = "clean"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class StatusCommand:
    workers: int | None = None


@dataclass(frozen=True, slots=True)
class CheckoutCommand:
    branch: str
    workers: int | None = None


@dataclass(frozen=True, slots=True)
class ResetCommand:
    workers: int | None = None


@dataclass(frozen=True, slots=True)
class ManifestCommand:
    action: ManifestAction


type Command = StatusCommand | CheckoutCommand | ResetCommand | ManifestCommand
