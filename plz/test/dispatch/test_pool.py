"""Tests for plz.dispatch.pool."""

from __future__ import annotations

import os
import threading
import time
from collections.abc import Iterator
from pathlib import Path

import pytest

from plz.dispatch.operations import checkout_operation
from plz.dispatch.pool import WorkerPool, default_workers, dispatch, run_isolated
from plz.dispatch.results import DispatchResult, Failed, Skipped, Succeeded
from plz.git.fake import FakeRepository
from plz.git.repository import RepositoryHandle

_checkout_main = checkout_operation("main")


def _fleet(n: int, failing: int = 0) -> list[FakeRepository]:
    return [
        FakeRepository(
            path=Path(f"/w/repo-{i:04d}"),
            checkout_error="boom" if i < failing else None,
        )
        for i in range(n)
    ]


class TestDefaultWorkers:
    def test_matches_cpu_count(self) -> None:
        assert default_workers() == (os.cpu_count() or 1)


class TestWorkerPool:
    def test_rejects_zero_workers(self) -> None:
        with pytest.raises(ValueError, match="workers"):
            WorkerPool(0)

    def test_default_size(self) -> None:
        assert WorkerPool().workers == default_workers()

    def test_empty_input(self) -> None:
        assert list(dispatch([], _checkout_main, workers=4)) == []

    @pytest.mark.parametrize("workers", sorted({1, 2, 3, default_workers()}))
    def test_exactly_one_result_per_repository(self, workers: int) -> None:
        repos = _fleet(2000, failing=37)

        results = list(dispatch(repos, _checkout_main, workers=workers))

        assert len(results) == 2000
        assert sorted(r.path for r in results) == sorted(r.path for r in repos)
        assert sum(isinstance(r, Failed) for r in results) == 37
        assert all(r.calls == ["checkout main"] for r in repos)

    def test_failures_do_not_stop_others(self) -> None:
        repos = _fleet(10, failing=10)

        results = list(dispatch(repos, _checkout_main, workers=3))

        assert len(results) == 10
        assert all(isinstance(r, Failed) for r in results)

    def test_exception_is_isolated(self) -> None:
        repos = _fleet(20)
        repos[5].raises = RuntimeError("kaboom")

        results = list(dispatch(repos, _checkout_main, workers=4))

        assert len(results) == 20
        failed = [r for r in results if isinstance(r, Failed)]
        assert len(failed) == 1
        assert failed[0].path == repos[5].path
        assert failed[0].reason == "RuntimeError: kaboom"

    def test_runs_concurrently(self) -> None:
        workers = 4
        barrier = threading.Barrier(workers, timeout=5)

        def wait_for_all(repo: RepositoryHandle) -> DispatchResult[str]:
            barrier.wait()
            return Succeeded(repo.path, "ok")

        results = list(dispatch(_fleet(workers), wait_for_all, workers=workers))

        assert all(isinstance(r, Succeeded) for r in results)

    def test_results_stream_in_completion_order(self) -> None:
        slow = FakeRepository(path=Path("/w/slow"), delay=1.0)
        fast = _fleet(5)

        started = time.monotonic()
        results = dispatch([slow, *fast], _checkout_main, workers=2)
        first = next(results)
        first_elapsed = time.monotonic() - started
        rest = list(results)

        assert first.path != slow.path
        assert first_elapsed < 0.5
        assert len(rest) == 5
        assert rest[-1].path == slow.path
        assert sorted(r.path for r in [first, *rest]) == sorted(r.path for r in [slow, *fast])

    def test_lazy_input_is_consumed_once(self) -> None:
        pulled: list[int] = []

        def repos() -> Iterator[FakeRepository]:
            for i in range(50):
                pulled.append(i)
                yield FakeRepository(path=Path(f"/w/{i}"))

        results = list(dispatch(repos(), _checkout_main, workers=2))

        assert len(results) == 50
        assert pulled == list(range(50))

    def test_input_error_is_reraised_after_queued_work(self) -> None:
        def repos() -> Iterator[FakeRepository]:
            yield FakeRepository(path=Path("/w/a"))
            yield FakeRepository(path=Path("/w/b"))
            raise OSError("walk failed")

        seen: list[DispatchResult[str]] = []
        with pytest.raises(OSError, match="walk failed"):
            for result in dispatch(repos(), _checkout_main, workers=2):
                seen.append(result)

        assert sorted(r.path for r in seen) == [Path("/w/a"), Path("/w/b")]

    def test_skipped_results_are_streamed(self) -> None:
        def skip(repo: RepositoryHandle) -> DispatchResult[str]:
            return Skipped(repo.path, reason="nothing to do")

        results = list(dispatch(_fleet(5), skip, workers=2))

        assert len(results) == 5
        assert all(isinstance(r, Skipped) for r in results)


class TestRunIsolated:
    def test_passes_result_through(self) -> None:
        repo = FakeRepository(path=Path("/w/a"))
        assert run_isolated(_checkout_main, repo) == Succeeded(Path("/w/a"), "main")

    def test_converts_exception(self) -> None:
        repo = FakeRepository(path=Path("/w/a"), raises=ValueError("bad"))
        assert run_isolated(_checkout_main, repo) == Failed(Path("/w/a"), "ValueError: bad")
