"""
Adapter: Evaluator, UnknownEvaluator
Implements the TermEvaluator port on top of the simplifier.

Evaluator        — owns one formula: `left = right` becomes `left + -(right)`,
                   a bare expression is used as is; folded once on creation.
UnknownEvaluator — a binding line `name = expr`; the left side must be a single
                   Unknown, the right side is folded and kept symbolic.
"""
from __future__ import annotations

import logging
from typing import Optional

from adapters.evaluator.simplifier import fold, reduce_with_context
from contracts import (
    Bindings,
    Chain,
    Commutative,
    Equation,
    Opposite,
    Term,
    Unknown,
    clone,
)
from errors import InvalidEquationError, InvalidUnknownEquationError, UnboundVariableError

logger = logging.getLogger("termcalc.evaluator")


def move_right_side(equation: Equation) -> Term:
    """Rearranges `left = right` into the single term `left + -(right)`."""
    if equation.right is None:
        raise InvalidEquationError()
    if equation.left is None:
        return clone(equation.right)

    left = clone(equation.left)
    opposite = Opposite(term=clone(equation.right))
    if isinstance(left, Chain) and left.op is Commutative.ADD:
        left.terms.append(opposite)
        return left
    return Chain(op=Commutative.ADD, terms=[left, opposite])


class Evaluator:
    """Standing formula that bindings are progressively folded into."""

    def __init__(self, formula: Term, precision: Optional[int] = None) -> None:
        self.formula = formula
        self._precision = precision

    @classmethod
    def from_equation(cls, equation: Equation, precision: Optional[int] = None) -> Evaluator:
        return cls(fold(move_right_side(equation), precision), precision)

    # -- TermEvaluator protocol ----------------------------------------------

    def inline(self, context: Bindings) -> None:
        self.formula, unresolved = reduce_with_context(self.formula, context, self._precision)
        if unresolved:
            logger.debug("Inlined with %s still unbound", ", ".join(unresolved))

    def eval(self, context: Bindings) -> Term:
        result, unresolved = reduce_with_context(clone(self.formula), context, self._precision)
        if unresolved:
            raise UnboundVariableError(unresolved)
        return result

    def __str__(self) -> str:
        return str(self.formula)


class UnknownEvaluator:
    """Binding `name = expr`; its right side stays reducible until inlined."""

    def __init__(self, unknown: str, evaluator: Evaluator) -> None:
        self.unknown = unknown
        self.evaluator = evaluator

    @classmethod
    def from_equation(
        cls, equation: Equation, precision: Optional[int] = None
    ) -> UnknownEvaluator:
        if not isinstance(equation.left, Unknown) or equation.right is None:
            raise InvalidUnknownEquationError()
        formula = fold(equation.right, precision)
        return cls(equation.left.name, Evaluator(formula, precision))

    @property
    def formula(self) -> Term:
        return self.evaluator.formula

    # -- TermEvaluator protocol ----------------------------------------------

    def inline(self, context: Bindings) -> None:
        self.evaluator.inline(context)

    def eval(self, context: Bindings) -> Term:
        return self.evaluator.eval(context)

    def __str__(self) -> str:
        return f"{self.unknown} = {self.evaluator}"
