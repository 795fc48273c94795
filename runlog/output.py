"""
Output abstraction for the runlog CLI.

Commands write through an OutputWriter so they can be tested without
capturing stdout.
"""

import sys
from typing import Protocol, TextIO


class OutputWriter(Protocol):
    """Protocol for CLI output writing."""

    def write(self, text: str = "") -> None:
        """Write text with trailing newline."""
        ...

    def write_raw(self, text: str) -> None:
        """Write text without trailing newline."""
        ...


class ConsoleOutput:
    """Output writer bound to a stream (stdout by default)."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout

    def write(self, text: str = "") -> None:
        print(text, file=self._stream)

    def write_raw(self, text: str) -> None:
        print(text, end="", file=self._stream)


class BufferedOutput:
    """
    Output writer that keeps everything in memory.

    Example:
        out = BufferedOutput()
        out.write("0  2024-01-01T00:00:00.000Z  logs/test_run.log")
        assert out.lines == ["0  2024-01-01T00:00:00.000Z  logs/test_run.log"]
    """

    def __init__(self) -> None:
        self._parts: list[str] = []

    def write(self, text: str = "") -> None:
        self._parts.append(text + "\n")

    def write_raw(self, text: str) -> None:
        self._parts.append(text)

    @property
    def text(self) -> str:
        return "".join(self._parts)

    @property
    def lines(self) -> list[str]:
        return self.text.splitlines()
