"""Tests for plz.output.console."""

from __future__ import annotations

import pytest

from plz.output.console import MockConsole, RichConsole, Style


class TestMockConsole:
    def test_records_messages_and_styles(self) -> None:
        console = MockConsole()

        console.print("plain")
        console.success("done")
        console.error("broken")
        console.labeled("   Modified", "a.py", Style.INFO)

        assert console.messages == ["plain", "OK done", "error: broken", "   Modified a.py"]
        assert console.has_error()
        assert console.count(Style.INFO) == 1

    def test_find_and_clear(self) -> None:
        console = MockConsole()
        console.print("skipping /x: not below manifest root /w", Style.DIM)
        console.print("skipping /y: not below manifest root /w", Style.DIM)

        assert len(console.find("skipping")) == 2

        console.clear()
        assert console.text == ""


class TestRichConsole:
    def test_does_not_interpret_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()

        console.print("/src/[bold]weird[/bold]", Style.BOLD)

        assert "/src/[bold]weird[/bold]" in capsys.readouterr().out

    def test_labeled_line(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().labeled("   Modified", "src/app.py", Style.INFO)

        assert capsys.readouterr().out == "   Modified src/app.py\n"

    def test_success_and_error_prefixes(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()

        console.success("3 repositories")
        console.error("boom")

        assert capsys.readouterr().out == "OK 3 repositories\nerror: boom\n"

    def test_stderr_backend(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole(stderr=True).print("to stderr")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "to stderr" in captured.err
