from __future__ import annotations

from decimal import Decimal

import pytest

from adapters.console.scripted_console import ScriptedConsole
from config import Settings
from contracts import Number
from errors import UnboundVariableError
from session import CalculatorSession, evaluate_once, evaluate_script


def _n(value: str) -> Number:
    return Number(value=Decimal(value))


def test_full_round_transcript():
    out = evaluate_script(["x+1", "x = 5", "", "exit"])

    assert out == [
        "Welcome to Glom's Calculator!",
        "Formula:",
        "x+1",
        " = + [ x , 1 ]",
        "Compile...",
        "+ [ x , 1 ]",
        "As you will:",
        "x = 5 := 5",
        "Result:",
        "6",
    ]


def test_binding_shows_origin_and_inlined_value():
    out = evaluate_script(["x*y", "x = 2", "y = x+1", ""])

    assert "y = + [ x , 1 ] := 3" in out
    assert out[-1] == "6"


def test_bad_binding_is_reported_and_binding_goes_on():
    out = evaluate_script(["1/x", "2*y = 3", "x = 2", "", "exit"])

    assert "Error: Invalid Unknown Equation" in out
    assert "x = 2 := 2" in out
    assert out[-2:] == ["Result:", "0.5"]


def test_failing_formula_restarts_the_loop():
    out = evaluate_script(["5/0", "1+1", "", "exit"])

    assert "Error: Division by zero" in out
    assert out[-1] == "2"


def test_parse_error_is_reported():
    out = evaluate_script(["(1+1", "exit"])

    assert out[-1] == "Error: Parentheses not closed!"


def test_unbound_name_at_result_is_an_error():
    out = evaluate_script(["x+1", "", "exit"])

    assert out[-2:] == ["Result:", "Error: Unknown variable x"]


def test_inline_command_folds_bindings_into_the_formula():
    out = evaluate_script(["x*y", "x = 2", "inline", "y = 3", "", "exit"])

    assert out[out.index("x = 2 := 2") + 1:][:2] == ["* [ y , 2 ]", "As you will:"]
    assert out[-1] == "6"


def test_inline_clears_the_context():
    out = evaluate_script(["x+y", "x = 1", "inline", "", "exit"])

    # x is gone from the context but already folded into the formula
    assert out[-1] == "Error: Unknown variable y"


def test_end_of_input_ends_binding_and_session():
    out = evaluate_script(["1+2"])

    assert out[-2:] == ["Result:", "3"]


def test_exit_ends_the_session_immediately():
    assert evaluate_script(["exit", "1+2"]) == ["Welcome to Glom's Calculator!"]


def test_settings_drive_the_protocol():
    settings = Settings(greeting="hi", exit_command="quit", prompt="? ")
    console = ScriptedConsole(["1", "", "quit", "2"], prompt=settings.prompt)

    CalculatorSession(console, settings=settings).run()

    assert console.output[0] == "hi"
    assert console.output[-1] == "1"
    assert console.transcript[1] == "? 1"


def test_evaluate_once_applies_bindings_in_order():
    outcome = evaluate_once("x*y+1", ["x = 2", "y = x+1"])

    assert outcome.result == _n("7")
    assert outcome.formula == _n("7")
    assert outcome.bindings == {"x": _n("2"), "y": _n("3")}


def test_evaluate_once_propagates_errors():
    with pytest.raises(UnboundVariableError):
        evaluate_once("x+1")


def test_division_results_print_in_plain_notation():
    out = evaluate_script(["1/0.1", "", "1/0.01", "", "exit"])

    assert out.count("Result:") == 2
    assert out[out.index("Result:") + 1] == "10"
    assert out[-1] == "100"
    assert str(evaluate_once("2/0.5").result) == "4"


def test_deeply_nested_input_is_an_error_not_a_crash():
    out = evaluate_script(["(" * 300 + "1" + ")" * 300, "-" * 400 + "1", "1+1", "", "exit"])

    assert out.count("Error: Expression nested too deeply!") == 2
    assert out[-2:] == ["Result:", "2"]


def test_bindings_that_nest_too_deep_are_reported():
    deep = "-(" * 6 + "z" + ")" * 6
    lines = ["x", "a = " + deep]
    lines += [f"{b} = {deep.replace('z', a)}" for a, b in zip("abcdefghijk", "bcdefghijkl")]
    out = evaluate_script(lines + ["", "exit"])

    assert "Error: Term nested too deeply!" in out
    assert out[-2:] == ["Result:", "Error: Unknown variable x"]
