from __future__ import annotations

from decimal import Decimal

import pytest

from adapters.equation_parser.precedence_parser import PrecedenceEquationParser
from adapters.evaluator.formula import Evaluator, UnknownEvaluator, move_right_side
from contracts import Chain, Commutative, Equation, Number, Opposite, Unknown
from errors import InvalidEquationError, InvalidUnknownEquationError, UnboundVariableError
from ports.evaluator import TermEvaluator

ADD = Commutative.ADD
MUL = Commutative.MULTIPLY


def _n(value: str) -> Number:
    return Number(value=Decimal(value))


def _u(name: str) -> Unknown:
    return Unknown(name=name)


def _parse(text: str) -> Equation:
    return PrecedenceEquationParser().parse(text)


def test_bare_expression_is_the_formula():
    assert Evaluator.from_equation(_parse("1+2")).formula == _n("3")


def test_equation_is_rearranged_to_left_minus_right():
    evaluator = Evaluator.from_equation(_parse("3+4 = x"))

    assert evaluator.formula == Chain(op=ADD, terms=[Opposite(term=_u("x")), _n("7")])
    assert str(evaluator) == "+ [ -x , 7 ]"


def test_non_chain_left_side_is_wrapped():
    eq = _parse("x = 2")

    assert move_right_side(eq) == Chain(op=ADD, terms=[_u("x"), Opposite(term=_n("2"))])
    assert str(Evaluator.from_equation(eq)) == "+ [ x , -2 ]"


def test_equation_without_right_side_is_rejected():
    with pytest.raises(InvalidEquationError):
        Evaluator.from_equation(Equation(left=_u("x")))


def test_eval_requires_every_name():
    evaluator = Evaluator.from_equation(_parse("x+1"))

    with pytest.raises(UnboundVariableError, match="Unknown variable x") as exc:
        evaluator.eval({})
    assert exc.value.names == ["x"]


def test_eval_leaves_the_formula_untouched():
    evaluator = Evaluator.from_equation(_parse("x+1"))

    assert evaluator.eval({"x": _n("5")}) == _n("6")
    assert evaluator.formula == Chain(op=ADD, terms=[_u("x"), _n("1")])


def test_inline_is_permanent():
    evaluator = Evaluator.from_equation(_parse("x+1"))

    evaluator.inline({"x": _n("5")})

    assert evaluator.formula == _n("6")
    assert evaluator.eval({}) == _n("6")


def test_partial_inline_keeps_what_was_bound():
    evaluator = Evaluator.from_equation(_parse("x*y"))

    evaluator.inline({"x": _n("2")})

    assert evaluator.formula == Chain(op=MUL, terms=[_u("y"), _n("2")])
    assert evaluator.eval({"y": _n("3")}) == _n("6")


def test_unknown_evaluator_binds_a_name():
    binding = UnknownEvaluator.from_equation(_parse("x = 3+4"))

    assert binding.unknown == "x"
    assert binding.formula == _n("7")
    assert str(binding) == "x = 7"


def test_unknown_evaluator_inlines_earlier_bindings():
    binding = UnknownEvaluator.from_equation(_parse("y = x*2"))
    assert binding.formula == Chain(op=MUL, terms=[_u("x"), _n("2")])

    binding.inline({"x": _n("5")})

    assert binding.formula == _n("10")


@pytest.mark.parametrize("text", ["3+4 = x", "2*x = 4", "x+1"])
def test_unknown_evaluator_needs_a_single_name_on_the_left(text):
    with pytest.raises(InvalidUnknownEquationError, match="Invalid Unknown Equation"):
        UnknownEvaluator.from_equation(_parse(text))


def test_evaluators_satisfy_the_port():
    evaluator = Evaluator.from_equation(_parse("1"))

    assert isinstance(evaluator, TermEvaluator)
    assert isinstance(UnknownEvaluator("x", evaluator), TermEvaluator)
