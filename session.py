"""
session.py — the calculator's read-eval-print protocol.

Per formula:
  1. the user submits an equation; it is echoed, parsed and compiled,
  2. zero or more binding lines `name = expr`, the `inline` command, or an
     empty line that ends the binding phase,
  3. the formula is evaluated under the accumulated bindings.

The session is the only recovery boundary: a failing formula is reported and
discarded, a failing binding line is reported and the binding phase goes on.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from adapters.console.scripted_console import ScriptedConsole
from adapters.equation_parser.precedence_parser import PrecedenceEquationParser
from adapters.evaluator.formula import Evaluator, UnknownEvaluator
from config import Settings
from contracts import Bindings, EvalResult, Term
from errors import CalcError
from ports.console import Console
from ports.equation_parser import EquationParser
from ports.evaluator import describe

logger = logging.getLogger("termcalc.session")


class CalculatorSession:
    def __init__(
        self,
        console: Console,
        parser: Optional[EquationParser] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._console = console
        self._settings = settings or Settings()
        self._parser = parser or PrecedenceEquationParser(
            max_digits=self._settings.decimal_precision
        )

    def run(self) -> None:
        self._print(self._settings.greeting)
        while True:
            try:
                line = self._console.read_line()
            except EOFError:
                break
            if line == self._settings.exit_command:
                break
            try:
                self._formula_round(line)
            except CalcError as exc:
                logger.warning("Formula %r failed: %s", line, exc)
                self._print(f"Error: {exc}")
        logger.info("Session closed.")

    # -- Private -------------------------------------------------------------

    def _print(self, text: object) -> None:
        self._console.print_line(str(text))

    def _formula_round(self, line: str) -> None:
        self._print("Formula:")
        self._print(line)
        equation = self._parser.parse(line)
        self._print(equation)
        self._print("Compile...")
        evaluator = Evaluator.from_equation(equation, self._settings.decimal_precision)
        self._print(evaluator)
        self._print("As you will:")

        context = self._bind_unknowns(evaluator)

        self._print("Result:")
        logger.debug("Evaluating %s", describe(evaluator, context))
        self._print(evaluator.eval(context))

    def _bind_unknowns(self, evaluator: Evaluator) -> Bindings:
        context: Bindings = {}
        while True:
            try:
                line = self._console.read_line()
            except EOFError:
                break
            if not line:
                break
            try:
                if line == self._settings.inline_command:
                    evaluator.inline(context)
                    context.clear()
                    self._print(evaluator)
                    self._print("As you will:")
                    continue
                binding = bind_unknown(
                    self._parser, line, context, self._settings.decimal_precision
                )
            except CalcError as exc:
                logger.warning("Binding %r failed: %s", line, exc)
                self._print(f"Error: {exc}")
                continue
            self._print(f"{binding.unknown} = {binding.origin} := {binding.current}")
        return context


@dataclass
class BoundUnknown:
    unknown: str
    origin: str     # folded right side, before the context was inlined
    current: Term   # what gets stored in the context


def bind_unknown(
    parser: EquationParser,
    line: str,
    context: Bindings,
    precision: Optional[int] = None,
) -> BoundUnknown:
    """Parses `name = expr`, inlines the current context into it and stores it."""
    binding = UnknownEvaluator.from_equation(parser.parse(line), precision)
    origin = str(binding.evaluator)
    binding.inline(context)
    context[binding.unknown] = binding.formula
    return BoundUnknown(binding.unknown, origin, binding.formula)


def evaluate_once(
    text: str,
    bindings: Iterable[str] = (),
    parser: Optional[EquationParser] = None,
    settings: Optional[Settings] = None,
) -> EvalResult:
    """
    Non-interactive round: parse the formula, apply `name = expr` lines in
    order, inline them and evaluate. Any CalcError propagates.
    """
    precision = (settings or Settings()).decimal_precision
    parser = parser or PrecedenceEquationParser(max_digits=precision)

    evaluator = Evaluator.from_equation(parser.parse(text), precision)
    context: Bindings = {}
    for line in bindings:
        bind_unknown(parser, line, context, precision)
    result = evaluator.eval(context)
    evaluator.inline(context)
    return EvalResult(formula=evaluator.formula, bindings=context, result=result)


def evaluate_script(lines: Iterable[str], settings: Optional[Settings] = None) -> list[str]:
    """Replays a whole session from lines; returns the printed output."""
    settings = settings or Settings()
    console = ScriptedConsole(lines, prompt=settings.prompt)
    CalculatorSession(console, settings=settings).run()
    return console.output
