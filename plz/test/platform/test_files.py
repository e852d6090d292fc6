from __future__ import annotations

import os
from pathlib import Path

import pytest

from plz.platform.files import replace_text


def test_replace_text_creates_parent_dirs(tmp_path: Path) -> None:
    path = tmp_path / "git-plz" / "nested" / "manifest.json"
    replace_text(path, "{}\n")

    assert path.read_text(encoding="utf-8") == "{}\n"


def test_replace_text_replaces_whole_file(tmp_path: Path) -> None:
    path = tmp_path / "manifest.txt"
    path.write_text("a very long previous content\n" * 10, encoding="utf-8")

    replace_text(path, "short\n")

    assert path.read_text(encoding="utf-8") == "short\n"


def test_replace_text_leaves_no_temp_file_on_failure(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    path = tmp_path / "manifest.json"

    def fail_replace(_src: Path, _dst: Path) -> None:
        raise OSError("replace failed")

    monkeypatch.setattr(os, "replace", fail_replace)

    with pytest.raises(OSError, match="replace failed"):
        replace_text(path, "payload")

    assert list(tmp_path.glob(".manifest.json.*.tmp")) == []
    assert not path.exists()
