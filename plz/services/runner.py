"""Command execution.

``CommandRunner`` takes one decoded ``Command`` value and carries it out
against the working directory and the manifest document it was built
with. Repository commands stream results to the console as they arrive;
manifest commands read or rewrite the document.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from plz.core.command import (
    CheckoutCommand,
    Command,
    ManifestAction,
    ManifestCommand,
    ResetCommand,
    StatusCommand,
)
from plz.core.result import Err, Ok, Result
from plz.dispatch.operations import checkout_operation, reset_operation, status_operation
from plz.dispatch.pool import dispatch
from plz.dispatch.results import DispatchResult, Failed, Operation, Skipped, Succeeded
from plz.git.discovery import find_repositories
from plz.git.repository import Repository
from plz.manifest.errors import ManifestError
from plz.manifest.store import Manifest, remove_document
from plz.output.console import ConsoleProtocol, Style
from plz.output.render import Renderer, render_checkout, render_reset, render_status
from plz.services.selector import Discover, select_repositories

__all__ = ["CommandRunner", "RunSummary", "UnhandledCommand"]


class UnhandledCommand(Exception):
    """A command value the runner has no branch for (a programming error)."""


@dataclass(slots=True)
class RunSummary:
    """Per-outcome counts for one run."""

    succeeded: int = 0
    failed: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.succeeded + self.failed + self.skipped

    def record(self, result: DispatchResult[object]) -> None:
        match result:
            case Succeeded():
                self.succeeded += 1
            case Failed():
                self.failed += 1
            case Skipped():
                self.skipped += 1


class CommandRunner:
    """Run commands for one invocation.

    Policy:
    - The manifest document is read once per command and written at most
      once, by ``manifest generate`` / ``manifest update``.
    - Repository commands never abort on a single repository's failure.
    """

    def __init__(
        self,
        *,
        working_dir: Path,
        document: Path,
        console: ConsoleProtocol,
        workers: int | None = None,
        discover: Discover = find_repositories,
    ) -> None:
        self._working_dir = working_dir
        self._document = document
        self._console = console
        self._workers = workers
        self._discover = discover

    def execute(self, command: Command) -> Result[RunSummary, ManifestError]:
        """Carry out ``command``.

        Raises:
            UnhandledCommand: for a value outside the Command union
        """
        match command:
            case StatusCommand(workers=workers):
                return Ok(self.status(workers=workers))
            case CheckoutCommand(branch=branch, workers=workers):
                return Ok(self.checkout(branch, workers=workers))
            case ResetCommand(workers=workers):
                return Ok(self.reset(workers=workers))
            case ManifestCommand(action=action):
                return self.manifest(action)
            case _:
                raise UnhandledCommand(repr(command))

    # -------------------------------------------------------------------------
    # Repository commands
    # -------------------------------------------------------------------------

    def status(self, *, workers: int | None = None) -> RunSummary:
        return self._run(status_operation, render_status, workers)

    def checkout(self, branch: str, *, workers: int | None = None) -> RunSummary:
        return self._run(checkout_operation(branch), render_checkout, workers)

    def reset(self, *, workers: int | None = None) -> RunSummary:
        return self._run(reset_operation, render_reset, workers)

    def repositories(self) -> Iterable[Repository]:
        """Cached or freshly discovered repositories for this invocation."""
        manifest = Manifest.open(self._document, self._working_dir, console=self._console)
        return select_repositories(manifest, self._working_dir, discover=self._discover)

    def _run[T](
        self,
        operation: Operation[T],
        render: Renderer[T],
        workers: int | None,
    ) -> RunSummary:
        summary = RunSummary()
        results = dispatch(self.repositories(), operation, workers=workers or self._workers)
        for result in results:
            render(result, self._console)
            summary.record(result)
        return summary

    # -------------------------------------------------------------------------
    # Manifest commands
    # -------------------------------------------------------------------------

    def manifest(self, action: ManifestAction) -> Result[RunSummary, ManifestError]:
        match action:
            case ManifestAction.GENERATE:
                return self.manifest_write(fresh=True)
            case ManifestAction.UPDATE:
                return self.manifest_write(fresh=False)
            case ManifestAction.PREVIEW:
                return Ok(self.manifest_preview())
            case ManifestAction.CLEAN:
                return self.manifest_clean()

    def manifest_write(self, *, fresh: bool) -> Result[RunSummary, ManifestError]:
        """Walk the working directory and persist what was found.

        ``fresh`` starts from an empty snapshot bound to the working
        directory, dropping stale entries; otherwise the walk is merged
        into the existing document.
        """
        if fresh:
            manifest = Manifest.fresh(self._document, self._working_dir, console=self._console)
        else:
            manifest = Manifest.open(self._document, self._working_dir, console=self._console)

        result = manifest.add_repositories(self._discover(self._working_dir))
        if isinstance(result, Err):
            return result

        self._console.success(f"{len(manifest)} repositories under {manifest.root}")
        self._console.print(f"added {result.value}, written to {manifest.document}", Style.DIM)
        return Ok(RunSummary(succeeded=len(manifest)))

    def manifest_preview(self) -> RunSummary:
        """List the repositories a command would run on; writes nothing."""
        summary = RunSummary()
        for repo in self.repositories():
            self._console.print(str(repo.path))
            summary.succeeded += 1
        return summary

    def manifest_clean(self) -> Result[RunSummary, ManifestError]:
        result = remove_document(self._document)
        if isinstance(result, Err):
            return result

        if result.value:
            self._console.success(f"removed {self._document}")
        else:
            self._console.print(f"no manifest at {self._document}", Style.DIM)
        return Ok(RunSummary())
