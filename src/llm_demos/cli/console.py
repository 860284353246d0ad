"""Console port used by the interactive demos."""

from __future__ import annotations

import sys
from typing import Protocol, TextIO


class ConsolePort(Protocol):
    """Line-oriented input/output seen by an interactive session."""

    def read_line(self, prompt: str) -> str:
        """Show `prompt` and return one line without its terminator.

        Raises `EOFError` when input is exhausted.
        """

    def write(self, text: str) -> None:
        """Write text without a trailing newline."""

    def write_line(self, text: str = "") -> None:
        """Write text followed by a newline."""


class StdConsole:
    """`ConsolePort` backed by the process's stdin/stdout."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stdout

    def read_line(self, prompt: str) -> str:
        return input(prompt)

    def write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def write_line(self, text: str = "") -> None:
        self.stream.write(text + "\n")
        self.stream.flush()
