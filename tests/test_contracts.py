from __future__ import annotations

from decimal import Decimal

from contracts import (
    Chain,
    Commutative,
    Equation,
    MulInverse,
    Number,
    Operator,
    Opposite,
    Power,
    Unknown,
    clone,
    depth,
)


def _n(value: str) -> Number:
    return Number(value=Decimal(value))


def test_term_rendering_uses_debug_form():
    chain = Chain(
        op=Commutative.ADD,
        terms=[_n("1"), Opposite(term=Unknown(name="x")), MulInverse(term=_n("2"))],
    )

    assert str(chain) == "+ [ 1 , -x , 1/2 ]"
    assert str(Chain(op=Commutative.MULTIPLY, terms=[_n("2"), Unknown(name="y")])) == "* [ 2 , y ]"
    assert str(Power(base=Unknown(name="a"), exponent=_n("3"))) == "a^3"
    assert str(Power(exponent=_n("3"))) == "none^3"


def test_equation_rendering_with_missing_side():
    assert str(Equation(left=Unknown(name="x"), right=_n("5"))) == "x = 5"
    assert str(Equation(right=_n("5"))) == " = 5"


def test_equality_is_structural_and_order_sensitive():
    ab = Chain(op=Commutative.ADD, terms=[Unknown(name="a"), Unknown(name="b")])

    assert ab == Chain(op=Commutative.ADD, terms=[Unknown(name="a"), Unknown(name="b")])
    assert ab != Chain(op=Commutative.ADD, terms=[Unknown(name="b"), Unknown(name="a")])
    assert ab != Chain(op=Commutative.MULTIPLY, terms=[Unknown(name="a"), Unknown(name="b")])


def test_clone_is_deep():
    original = Chain(op=Commutative.ADD, terms=[Unknown(name="x")])

    copy = clone(original)
    copy.terms.append(_n("1"))

    assert original.terms == [Unknown(name="x")]
    assert copy != original


def test_operator_priorities_and_normalisation():
    assert [Operator.from_char(c).priority for c in "=+-*/^"] == [0, 1, 1, 2, 2, 3]
    assert Operator.from_char("$") is None
    assert Operator.SUBTRACT.to_commutative_term(_n("3")) == Opposite(term=_n("3"))
    assert Operator.DIVIDE.to_commutative_term(_n("3")) == MulInverse(term=_n("3"))
    assert Operator.ADD.to_commutative_term(_n("3")) == _n("3")
    assert Operator.DIVIDE.commutative is Commutative.MULTIPLY


def test_numbers_render_in_plain_notation():
    assert str(Number(value=Decimal("1E+1"))) == "10"
    assert str(Number(value=Decimal("1E+2"))) == "100"
    assert str(Number(value=Decimal("2.0"))) == "2"
    assert str(Number(value=Decimal("-0"))) == "0"
    assert str(Number(value=Decimal("1E-7"))) == "0.0000001"
    assert str(_n("0.5")) == "0.5"


def test_depth_counts_levels():
    assert depth(_n("1")) == 1
    assert depth(Opposite(term=Chain(op=Commutative.ADD, terms=[_n("1"), Unknown(name="x")]))) == 3
    assert depth(Power(exponent=_n("2"))) == 2
