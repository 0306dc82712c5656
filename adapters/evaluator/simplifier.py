"""
Adapter: simplifier
Recursive walk over a Term tree with exact Decimal arithmetic.

fold()                — constant folding only; Unknown leaves are left alone
simplify()            — folding plus substitution from a bindings context;
                        returns None when an Unknown has no binding
reduce_with_context() — the same walk, returning the rewritten tree together
                        with the names that stayed unbound

The input tree is never modified: every call builds a new tree and no node of
the result is shared with the input or with the bindings.
Trees deeper than MAX_TERM_DEPTH, on the way in or after substitution, raise
TermTooDeepError instead of exhausting the interpreter stack.
"""
from __future__ import annotations

import logging
from decimal import Decimal, DecimalException, localcontext
from typing import Optional

from contracts import (
    Bindings,
    Chain,
    Commutative,
    MAX_TERM_DEPTH,
    MulInverse,
    Number,
    Opposite,
    Power,
    Term,
    Unknown,
    clone,
    depth,
)
from errors import (
    DivisionByZeroError,
    EvaluationError,
    InvalidPowerError,
    PowerBaseError,
    TermTooDeepError,
)

logger = logging.getLogger("termcalc.simplifier")


def fold(term: Term, precision: Optional[int] = None) -> Term:
    """Constant folding with no substitution; never reports unbound names."""
    reduced, _ = reduce_with_context(term, None, precision)
    return reduced


def simplify(
    term: Term,
    context: Optional[Bindings] = None,
    precision: Optional[int] = None,
) -> Optional[Term]:
    reduced, unresolved = reduce_with_context(term, context, precision)
    if unresolved:
        return None
    return reduced


def reduce_with_context(
    term: Term,
    context: Optional[Bindings],
    precision: Optional[int] = None,
) -> tuple[Term, list[str]]:
    if depth(term) > MAX_TERM_DEPTH:
        raise TermTooDeepError()
    unresolved: list[str] = []
    try:
        with localcontext() as ctx:
            if precision is not None:
                ctx.prec = precision
            reduced = _reduce(term, context, unresolved)
    except DecimalException as exc:
        raise EvaluationError(f"Arithmetic error: {type(exc).__name__}")
    # Substituted bindings can stack trees deeper than either input.
    if depth(reduced) > MAX_TERM_DEPTH:
        raise TermTooDeepError()
    if unresolved:
        logger.debug("Unbound after reduction: %s", ", ".join(unresolved))
    return reduced, unresolved


# -- Private -----------------------------------------------------------------

def _reduce(
    term: Term,
    context: Optional[Bindings],
    unresolved: list[str],
) -> Term:
    if isinstance(term, Number):
        return clone(term)

    if isinstance(term, Chain):
        return _reduce_chain(term, context, unresolved)

    if isinstance(term, Power):
        if term.base is None:
            raise PowerBaseError("Power has no base!")
        base = _reduce(term.base, context, unresolved)
        exponent = _reduce(term.exponent, context, unresolved)
        if isinstance(base, Number) and isinstance(exponent, Number):
            return Number(value=_power(base.value, exponent.value))
        return Power(base=base, exponent=exponent)

    if isinstance(term, Opposite):
        inner = _reduce(term.term, context, unresolved)
        if isinstance(inner, Number):
            return Number(value=-inner.value)
        return Opposite(term=inner)

    if isinstance(term, MulInverse):
        inner = _reduce(term.term, context, unresolved)
        if isinstance(inner, Number):
            if inner.value == 0:
                raise DivisionByZeroError()
            return Number(value=Decimal(1) / inner.value)
        return MulInverse(term=inner)

    if isinstance(term, Unknown):
        if context is None:
            return clone(term)
        bound = context.get(term.name)
        if bound is None:
            if term.name not in unresolved:
                unresolved.append(term.name)
            return clone(term)
        # Substituted as-is: the bound term was reduced when it was bound.
        return clone(bound)

    raise TypeError(f"Unknown term type: {type(term)}")


def _reduce_chain(
    chain: Chain,
    context: Optional[Bindings],
    unresolved: list[str],
) -> Term:
    total = chain.op.identity
    kept: list[Term] = []
    for child in chain.terms:
        child = _reduce(child, context, unresolved)
        if not isinstance(child, Number):
            kept.append(child)
        elif chain.op is Commutative.ADD:
            total += child.value
        else:
            total *= child.value

    if not kept:
        return Number(value=total)
    # A zero sum is dropped; a product accumulator is always kept, even 1.
    if chain.op is Commutative.MULTIPLY or total != 0:
        kept.append(Number(value=total))
    if len(kept) == 1:
        return kept[0]
    return Chain(op=chain.op, terms=kept)


def _power(base: Decimal, exponent: Decimal) -> Decimal:
    try:
        return base ** exponent
    except DecimalException:
        raise InvalidPowerError(f"Invalid power {base}^{exponent}")
