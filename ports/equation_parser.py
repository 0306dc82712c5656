"""
Port: EquationParser
Responsibility: turning one line of user text into an Equation of term trees.
"""
from typing import Protocol, runtime_checkable

from contracts import Equation


@runtime_checkable
class EquationParser(Protocol):
    def parse(self, text: str) -> Equation:
        """
        Parses an equation `[expr] '=' expr` or a bare `expr`.

        - Bare expressions return Equation(left=None, right=expr).
        - '-' and '/' operands are normalised to Opposite / MulInverse,
          so only ADD and MULTIPLY chains appear in the result.

        A line either parses entirely or raises a ParseError subclass;
        there is no partial result.
        """
        ...
