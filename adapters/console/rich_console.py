"""
Adapter: RichConsole
Implements the Console port on a terminal through rich.

The last `history_size` prompts and printed lines are kept in `transcript`,
the way a line-buffered console keeps its history.
"""
from __future__ import annotations

import sys
from collections import deque

from rich.console import Console as _RichTerminal


def safe_terminal_text(value: object) -> str:
    s = str(value)
    encoding = sys.stdout.encoding or "utf-8"
    try:
        s.encode(encoding)
        return s
    except UnicodeEncodeError:
        return s.encode(encoding, errors="replace").decode(encoding, errors="replace")


class RichConsole:
    def __init__(
        self,
        prompt: str = ">> ",
        terminal: _RichTerminal | None = None,
        history_size: int = 1000,
    ) -> None:
        self._prompt = prompt
        self._terminal = terminal or _RichTerminal(highlight=False)
        self.transcript: deque[str] = deque(maxlen=history_size)

    # -- Console protocol ----------------------------------------------------

    def read_line(self) -> str:
        # rich re-raises EOFError / KeyboardInterrupt from input()
        line = self._terminal.input(self._prompt).strip()
        self.transcript.append(f"{self._prompt}{line}")
        return line

    def print_line(self, text: str) -> None:
        line = safe_terminal_text(text)
        self.transcript.append(line)
        self._terminal.print(line, markup=False, highlight=False)
