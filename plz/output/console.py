"""Console output abstraction.

Services and the dispatch renderer print through ``ConsoleProtocol`` so
they never depend on Rich directly. ``RichConsole`` is the production
backend; ``MockConsole`` captures output for tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()  # green
    ERROR = auto()  # red
    INFO = auto()  # cyan
    NOTICE = auto()  # magenta, for things git could not classify
    DIM = auto()
    BOLD = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Protocol for console output.

    Messages are plain text: implementations must not interpret markup in
    them, since they routinely contain file paths.
    """

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message with optional styling."""
        ...

    def labeled(self, label: str, message: str, style: Style) -> None:
        """Print ``label`` in ``style`` followed by an unstyled message."""
        ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


_RICH_STYLES: dict[Style, str] = {
    Style.DEFAULT: "",
    Style.SUCCESS: "bright_green",
    Style.ERROR: "bright_red",
    Style.INFO: "bright_cyan",
    Style.NOTICE: "bright_magenta",
    Style.DIM: "dim",
    Style.BOLD: "bold",
}


class RichConsole:
    """Console implementation using Rich."""

    def __init__(self, *, stderr: bool = False) -> None:
        # Import Rich lazily to keep `import plz` cheap
        from rich.console import Console

        self._console = Console(stderr=stderr, highlight=False)

    def _text(self, message: str, style: Style = Style.DEFAULT) -> object:
        from rich.text import Text

        return Text(message, style=_RICH_STYLES.get(style, ""))

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._console.print(self._text(message, style))

    def labeled(self, label: str, message: str, style: Style) -> None:
        from rich.text import Text

        text = Text()
        text.append(label, style=_RICH_STYLES.get(style, ""))
        text.append(" ")
        text.append(message)
        self._console.print(text)

    def success(self, message: str) -> None:
        self.labeled("OK", message, Style.SUCCESS)

    def error(self, message: str) -> None:
        self.labeled("error:", message, Style.ERROR)


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def labeled(self, label: str, message: str, style: Style) -> None:
        self.outputs.append(OutputRecord(f"{label} {message}", style))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"OK {message}", Style.SUCCESS))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    # Test helpers

    def clear(self) -> None:
        self.outputs.clear()

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Find all outputs containing a substring."""
        return [o for o in self.outputs if substring in o.message]

    def count(self, style: Style) -> int:
        return sum(1 for o in self.outputs if o.style == style)
