"""Bounded worker pool that fans one operation out across repositories.

Layout of a run::

    repositories ──feeder──▶ work queue ──▶ N workers ──Sender──▶ channel ──▶ consumer

- The feeder drains the (possibly lazy) repository iterable into a bounded
  work queue, then posts one stop marker per worker.
- Each worker owns one Sender clone and handles one repository per task.
  An exception raised by the operation becomes that repository's
  ``Failed`` result and never reaches another task.
- The dispatching thread closes its own sender once the workers hold
  theirs, so the channel closes exactly when the last worker exits.
- Results are yielded in completion order as they arrive.
"""

from __future__ import annotations

import os
import queue
from collections.abc import Iterable, Iterator
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Final

from plz.dispatch.channel import Receiver, Sender, channel
from plz.dispatch.results import DispatchResult, Failed, Operation
from plz.git.repository import RepositoryHandle

__all__ = ["WorkerPool", "default_workers", "dispatch", "run_isolated"]

_STOP: Final = None


def default_workers() -> int:
    """Host parallelism."""
    return os.cpu_count() or 1


def run_isolated[T](operation: Operation[T], repo: RepositoryHandle) -> DispatchResult[T]:
    """Run ``operation`` on ``repo``, turning any exception into ``Failed``."""
    try:
        return operation(repo)
    except Exception as e:
        return Failed(path=repo.path, reason=f"{type(e).__name__}: {e}")


class WorkerPool:
    """Fixed-size pool of OS threads.

    Attributes:
        workers: Number of worker threads per run
    """

    def __init__(self, workers: int | None = None) -> None:
        if workers is not None and workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        self.workers = workers or default_workers()

    def run[T](
        self,
        repositories: Iterable[RepositoryHandle],
        operation: Operation[T],
    ) -> Iterator[DispatchResult[T]]:
        """Stream one result per repository, in completion order.

        An exception raised while iterating ``repositories`` is re-raised
        here after every already-queued repository has been processed.
        """
        work: queue.Queue[RepositoryHandle | None] = queue.Queue(maxsize=self.workers * 2)
        tx: Sender[DispatchResult[T]]
        rx: Receiver[DispatchResult[T]]
        tx, rx = channel()

        def feed() -> None:
            try:
                for repo in repositories:
                    work.put(repo)
            finally:
                for _ in range(self.workers):
                    work.put(_STOP)

        def work_loop(sender: Sender[DispatchResult[T]]) -> None:
            with sender:
                while True:
                    repo = work.get()
                    if repo is _STOP:
                        return
                    sender.send(run_isolated(operation, repo))

        with ThreadPoolExecutor(
            max_workers=self.workers + 1,
            thread_name_prefix="plz-dispatch",
        ) as executor:
            worker_futures: list[Future[None]] = []
            try:
                for _ in range(self.workers):
                    worker_futures.append(executor.submit(work_loop, tx.clone()))
            finally:
                tx.close()
            feeder = executor.submit(feed)

            yield from rx

        feeder.result()
        for future in worker_futures:
            future.result()


def dispatch[T](
    repositories: Iterable[RepositoryHandle],
    operation: Operation[T],
    *,
    workers: int | None = None,
) -> Iterator[DispatchResult[T]]:
    """Run ``operation`` against every repository on a fresh worker pool."""
    return WorkerPool(workers).run(repositories, operation)
