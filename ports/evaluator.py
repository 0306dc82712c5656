"""
Port: TermEvaluator
Responsibility: deterministic constant folding and substitution over term trees.
"""
from typing import Optional, Protocol, runtime_checkable

from contracts import Bindings, Term


@runtime_checkable
class TermEvaluator(Protocol):
    def inline(self, context: Bindings) -> None:
        """
        Permanently substitutes every bound Unknown of the formula with its
        bound term and re-folds constants. Unbound names stay in place;
        an unbound name is a normal, deferred state here, never an error.
        """
        ...

    def eval(self, context: Bindings) -> Term:
        """
        Reduces a copy of the formula under the given bindings.
        Returns a Number or a residual symbolic Term (bindings may be symbolic).
        Raises UnboundVariableError if an Unknown has no binding.
        Raises DivisionByZeroError on 1/0.
        """
        ...


def describe(evaluator: TermEvaluator, context: Optional[Bindings] = None) -> str:
    """Short text for logs: formula plus the bound names."""
    names = ", ".join(sorted(context or {})) or "-"
    return f"{evaluator} | bound: {names}"
