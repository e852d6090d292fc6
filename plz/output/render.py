"""Rendering of streamed dispatch results.

Each renderer handles one result as soon as it arrives. ``Skipped``
results never print anything.
"""

from __future__ import annotations

from collections.abc import Callable

from plz.dispatch.results import DispatchResult, Failed, Skipped, Succeeded
from plz.git.repository import StatusEntry, StatusKind
from plz.output.console import ConsoleProtocol, Style

__all__ = [
    "LABEL_WIDTH",
    "Renderer",
    "render_checkout",
    "render_reset",
    "render_status",
    "status_label",
]

# Width of the longest label, "Typechanged"
LABEL_WIDTH = 11

_KIND_STYLES: dict[StatusKind, Style] = {
    StatusKind.DELETED: Style.ERROR,
    StatusKind.MODIFIED: Style.INFO,
    StatusKind.NEW: Style.SUCCESS,
    StatusKind.RENAMED: Style.INFO,
    StatusKind.TYPECHANGED: Style.INFO,
    StatusKind.UNKNOWN: Style.NOTICE,
}

type Renderer[T] = Callable[[DispatchResult[T], ConsoleProtocol], None]


def status_label(kind: StatusKind) -> str:
    """Right-aligned, fixed-width label for ``kind``."""
    return kind.label.rjust(LABEL_WIDTH)


def render_status(
    result: DispatchResult[tuple[StatusEntry, ...]],
    console: ConsoleProtocol,
) -> None:
    """Repository path, then one labeled line per changed file.

    Clean repositories print nothing.
    """
    match result:
        case Succeeded(path=path, payload=entries):
            if not entries:
                return
            console.print(str(path), Style.BOLD)
            for entry in entries:
                label = f"  {status_label(entry.kind)}"
                console.labeled(label, entry.path, _KIND_STYLES[entry.kind])
        case Failed(path=path, reason=reason):
            console.error(f"{path}: {reason}")
        case Skipped():
            pass


def render_checkout(result: DispatchResult[str], console: ConsoleProtocol) -> None:
    match result:
        case Succeeded(path=path):
            console.print(str(path))
        case Failed(path=path, reason=reason):
            console.error(f"{path}: checkout failed: {reason}")
        case Skipped():
            pass


def render_reset(result: DispatchResult[str], console: ConsoleProtocol) -> None:
    match result:
        case Succeeded(path=path, payload=head):
            console.print(f"{path}  [{head}]")
        case Failed(path=path, reason=reason):
            console.error(f"{path}: reset failed: {reason}")
        case Skipped():
            pass
