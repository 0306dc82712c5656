"""
Adapter: ScriptedConsole
Implements the Console port over a fixed sequence of input lines
(a session script file, or a list in tests).
"""
from __future__ import annotations

from typing import Iterable, Iterator, Optional

from rich.console import Console as _RichTerminal


class ScriptedConsole:
    def __init__(
        self,
        lines: Iterable[str],
        prompt: str = ">> ",
        echo: Optional[_RichTerminal] = None,
    ) -> None:
        self._lines: Iterator[str] = iter(lines)
        self._prompt = prompt
        self._echo = echo
        self.transcript: list[str] = []   # prompts with inputs, and output lines
        self.output: list[str] = []       # output lines only

    # -- Console protocol ----------------------------------------------------

    def read_line(self) -> str:
        try:
            line = next(self._lines).strip()
        except StopIteration:
            raise EOFError("End of script")
        self._record(f"{self._prompt}{line}")
        return line

    def print_line(self, text: str) -> None:
        self.output.append(text)
        self._record(text)

    def _record(self, line: str) -> None:
        self.transcript.append(line)
        if self._echo is not None:
            self._echo.print(line, markup=False, highlight=False)
