"""
Port: Console
Responsibility: the two I/O capabilities the calculator session needs.
"""
from typing import Protocol, runtime_checkable


@runtime_checkable
class Console(Protocol):
    def read_line(self) -> str:
        """
        Blocks until the user submits a line; returns it stripped.
        Raises EOFError when no more input will arrive.
        """
        ...

    def print_line(self, text: str) -> None:
        """Displays one line of text. Fire-and-forget."""
        ...
