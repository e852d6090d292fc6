"""Tests for plz.manifest.store."""

from __future__ import annotations

import json
from pathlib import Path, PurePosixPath

import pytest

from plz.core.config import ManifestFormat
from plz.core.result import Err, Ok
from plz.git.fake import FakeRepository
from plz.manifest.store import Manifest, remove_document
from plz.output.console import MockConsole, Style


def _repos(*paths: Path) -> list[FakeRepository]:
    return [FakeRepository(path=p) for p in paths]


@pytest.fixture
def document(tmp_path: Path) -> Path:
    return tmp_path / "cache" / "repositories.json"


@pytest.fixture
def root(tmp_path: Path) -> Path:
    workspace = tmp_path / "w"
    workspace.mkdir()
    return workspace


class TestOpen:
    def test_missing_document_is_empty(self, document: Path, root: Path) -> None:
        manifest = Manifest.open(document, root)

        assert manifest.is_empty()
        assert manifest.root == root
        assert not document.exists()

    def test_garbage_document_is_empty(self, document: Path, root: Path) -> None:
        document.parent.mkdir(parents=True)
        document.write_text("{{{ not json", encoding="utf-8")

        manifest = Manifest.open(document, root)

        assert manifest.is_empty()
        assert manifest.root == root

    def test_loads_stored_root(self, document: Path, root: Path, tmp_path: Path) -> None:
        document.parent.mkdir(parents=True)
        document.write_text(
            json.dumps({"root_path": str(root), "repositories": ["a", "b/c"]}),
            encoding="utf-8",
        )

        manifest = Manifest.open(document, tmp_path / "elsewhere")

        assert manifest.root == root
        assert len(manifest) == 2

    def test_format_follows_suffix(self, tmp_path: Path, root: Path) -> None:
        assert Manifest.open(tmp_path / "m.json", root).format is ManifestFormat.JSON
        assert Manifest.open(tmp_path / "m.txt", root).format is ManifestFormat.LINES


class TestAddRepositories:
    def test_writes_document(self, document: Path, root: Path) -> None:
        manifest = Manifest.open(document, root)

        result = manifest.add_repositories(_repos(root / "a", root / "b" / "c"))

        assert result == Ok(2)
        data = json.loads(document.read_text(encoding="utf-8"))
        assert data == {"root_path": str(root), "repositories": ["a", "b/c"]}

    def test_merge_is_idempotent(self, document: Path, root: Path) -> None:
        manifest = Manifest.open(document, root)
        manifest.add_repositories(_repos(root / "a"))
        first = document.read_text(encoding="utf-8")

        result = manifest.add_repositories(_repos(root / "a"))

        assert result == Ok(0)
        assert document.read_text(encoding="utf-8") == first

    def test_reopen_sees_saved_paths(self, document: Path, root: Path) -> None:
        Manifest.open(document, root).add_repositories(_repos(root / "a", root / "b" / "c"))

        reopened = Manifest.open(document, root)

        assert list(reopened.paths()) == [PurePosixPath("a"), PurePosixPath("b/c")]

    def test_out_of_root_is_reported_and_skipped(self, document: Path, root: Path, tmp_path: Path) -> None:
        console = MockConsole()
        manifest = Manifest.open(document, root, console=console)
        outside = tmp_path / "outside" / "x"

        result = manifest.add_repositories(_repos(root / "a", outside, root))

        assert result == Ok(1)
        assert list(manifest.paths()) == [PurePosixPath("a")]
        assert len(console.find("not below manifest root")) == 2
        assert console.count(Style.DIM) == 2

    def test_empty_input_still_writes(self, document: Path, root: Path) -> None:
        result = Manifest.open(document, root).add_repositories([])

        assert result == Ok(0)
        assert document.exists()

    def test_lines_document(self, tmp_path: Path, root: Path) -> None:
        document = tmp_path / "repositories.txt"
        manifest = Manifest.open(document, root)

        manifest.add_repositories(_repos(root / "b", root / "a"))

        assert document.read_text(encoding="utf-8") == f"{root / 'a'}\n{root / 'b'}\n"
        assert len(Manifest.open(document, root)) == 2

    def test_write_failure(self, tmp_path: Path, root: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        manifest = Manifest.open(blocker / "repositories.json", root)

        result = manifest.add_repositories(_repos(root / "a"))

        assert isinstance(result, Err)
        assert result.error.kind == "write_failed"
        assert result.error.hint is not None


class TestContains:
    @pytest.fixture
    def manifest(self, document: Path, root: Path) -> Manifest:
        m = Manifest.open(document, root)
        m.add_repositories(_repos(root / "a", root / "b" / "c"))
        return m

    def test_relative_members(self, manifest: Manifest) -> None:
        assert manifest.contains("a")
        assert manifest.contains("b/c")
        assert not manifest.contains("b")
        assert not manifest.contains("missing")

    def test_absolute_members(self, manifest: Manifest, root: Path) -> None:
        assert manifest.contains(root / "b" / "c")
        assert not manifest.contains(root)
        assert not manifest.contains(Path("/definitely/elsewhere/a"))

    def test_in_operator(self, manifest: Manifest) -> None:
        assert "a" in manifest
        assert Path("b/c") in manifest
        assert 42 not in manifest


class TestPaths:
    def test_restartable(self, document: Path, root: Path) -> None:
        manifest = Manifest.open(document, root)
        manifest.add_repositories(_repos(root / "b", root / "a"))
        paths = manifest.paths()

        assert list(paths) == list(paths) == [PurePosixPath("a"), PurePosixPath("b")]
        assert len(paths) == 2

    def test_fresh_ignores_disk(self, document: Path, root: Path) -> None:
        Manifest.open(document, root).add_repositories(_repos(root / "a"))

        assert Manifest.fresh(document, root).is_empty()


class TestRemoveDocument:
    def test_remove_twice(self, document: Path, root: Path) -> None:
        Manifest.open(document, root).add_repositories(_repos(root / "a"))

        assert remove_document(document) == Ok(True)
        assert not document.exists()
        assert remove_document(document) == Ok(False)

    def test_remove_failure(self, tmp_path: Path) -> None:
        directory = tmp_path / "is-a-directory"
        (directory / "child").mkdir(parents=True)

        result = remove_document(directory)

        assert isinstance(result, Err)
        assert result.error.kind == "remove_failed"


def test_open_survives_deeply_nested_document(document: Path, root: Path) -> None:
    document.parent.mkdir(parents=True)
    document.write_text("[" * 100_000 + "]" * 100_000, encoding="utf-8")

    assert Manifest.open(document, root).is_empty()
