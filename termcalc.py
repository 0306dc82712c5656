#!/usr/bin/env python3
"""
termcalc.py — TermCalc CLI.

Runs entirely locally, no API server required.

Configuration: environment variables with the TERMCALC_ prefix
or a .env file (e.g. TERMCALC_DECIMAL_PRECISION=50).

Subcommands:
    repl   — interactive session (default)
    parse  — show the parsed equation and the compiled formula
    eval   — evaluate a formula with `name = expr` bindings
    run    — replay a session script, one input line per file line

Usage:
    python termcalc.py
    python termcalc.py parse --text "3+4 = x"
    python termcalc.py eval --text "x+1" --bind "x = 5"
    python termcalc.py run --file session.txt
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table

from adapters.console.rich_console import safe_terminal_text


# -- helpers ---------------------------------------------------------------

_CONSOLE: Console | None = None


def _console() -> Console:
    global _CONSOLE
    if _CONSOLE is None:
        _CONSOLE = Console(highlight=False)
    return _CONSOLE


def _print_kv_table(title: str, rows: list[tuple[str, Any]]) -> None:
    table = Table(title=title, box=box.ASCII, show_header=False, pad_edge=False)
    table.add_column("Key", no_wrap=True, style="bold cyan")
    table.add_column("Value")
    for key, value in rows:
        table.add_row(safe_terminal_text(key), safe_terminal_text(value))
    _console().print(table)


def _read_text(args: argparse.Namespace) -> str:
    text = getattr(args, "text", None) or sys.stdin.read().strip()
    if not text:
        print("Error: pass a formula with --text or on stdin", file=sys.stderr)
        sys.exit(1)
    return text


def _fail(exc: Exception) -> None:
    print(f"Error: {exc}", file=sys.stderr)
    sys.exit(1)


# -- subcommands -----------------------------------------------------------

def _repl(args: argparse.Namespace) -> None:
    from adapters.console.rich_console import RichConsole
    from config import Settings
    from session import CalculatorSession

    settings = Settings()
    console = RichConsole(prompt=settings.prompt, history_size=settings.history_size)
    session = CalculatorSession(console, settings=settings)
    try:
        session.run()
    except KeyboardInterrupt:
        print(file=sys.stderr)


def _parse(args: argparse.Namespace) -> None:
    from adapters.equation_parser.precedence_parser import PrecedenceEquationParser
    from adapters.evaluator.formula import Evaluator
    from config import Settings
    from errors import CalcError

    text = _read_text(args)
    try:
        precision = Settings().decimal_precision
        equation = PrecedenceEquationParser(max_digits=precision).parse(text)
        evaluator = Evaluator.from_equation(equation, precision)
    except CalcError as exc:
        _fail(exc)

    _print_kv_table("Parse", [
        ("text", text),
        ("equation", equation),
        ("formula", evaluator),
    ])


def _eval(args: argparse.Namespace) -> None:
    from errors import CalcError
    from session import evaluate_once

    text = _read_text(args)
    try:
        outcome = evaluate_once(text, args.bind)
    except CalcError as exc:
        _fail(exc)

    rows: list[tuple[str, Any]] = [("formula", text)]
    rows += [(name, term) for name, term in outcome.bindings.items()]
    rows += [("inlined", outcome.formula), ("result", outcome.result)]
    _print_kv_table("Eval", rows)


def _run(args: argparse.Namespace) -> None:
    from adapters.console.scripted_console import ScriptedConsole
    from config import Settings
    from session import CalculatorSession

    try:
        with open(args.file, encoding="utf-8") as f:
            lines = f.read().splitlines()
    except OSError as e:
        print(f"Error reading file: {e}", file=sys.stderr)
        sys.exit(1)

    settings = Settings()
    console = ScriptedConsole(lines, prompt=settings.prompt, echo=_console())
    CalculatorSession(console, settings=settings).run()


# -- main ------------------------------------------------------------------

def main(argv: list[str] | None = None) -> None:
    from config import Settings

    parser = argparse.ArgumentParser(
        prog="termcalc",
        description="TermCalc — algebraic calculator (local CLI)",
    )
    sub = parser.add_subparsers(dest="command")

    # repl
    sub.add_parser("repl", help="Interactive session")

    # parse
    p = sub.add_parser("parse", help="Parse a formula and show the compiled form")
    p.add_argument("--text", "-t", help="Formula (or stdin)")

    # eval
    p = sub.add_parser("eval", help="Evaluate a formula with bindings")
    p.add_argument("--text", "-t", help="Formula (or stdin)")
    p.add_argument("--bind", "-b", action="append", default=[], metavar="NAME=EXPR",
                   help="Binding line, may be repeated; applied in order")

    # run
    p = sub.add_parser("run", help="Replay a session script")
    p.add_argument("--file", "-f", required=True, help="Script with one input per line")

    args = parser.parse_args(argv)
    logging.basicConfig(level=Settings().log_level.upper())

    commands = {
        "repl":  _repl,
        "parse": _parse,
        "eval":  _eval,
        "run":   _run,
    }
    commands[args.command or "repl"](args)


if __name__ == "__main__":
    main()
