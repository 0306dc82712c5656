"""
contracts.py — Single source of truth for every data type in TermCalc.
All modules import term and equation types ONLY from here.
"""
from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel


# ─────────────────────────── Operators ───────────────────────────────────

class Commutative(str, Enum):
    ADD = "add"
    MULTIPLY = "multiply"

    @property
    def symbol(self) -> str:
        return "+" if self is Commutative.ADD else "*"

    @property
    def identity(self) -> Decimal:
        return Decimal(0) if self is Commutative.ADD else Decimal(1)


class Operator(str, Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    POWER = "^"
    EQUALS = "="

    @classmethod
    def from_char(cls, c: str) -> Optional[Operator]:
        try:
            return cls(c)
        except ValueError:
            return None

    @property
    def priority(self) -> int:
        return _PRIORITIES[self]

    @property
    def commutative(self) -> Commutative:
        """Chain kind hosting this operator's operands (- and / are rewritten)."""
        if self in (Operator.ADD, Operator.SUBTRACT):
            return Commutative.ADD
        if self in (Operator.MULTIPLY, Operator.DIVIDE):
            return Commutative.MULTIPLY
        raise ValueError(f"Operator {self.value!r} has no commutative chain")

    def to_commutative_term(self, term: Term) -> Term:
        if self is Operator.SUBTRACT:
            return Opposite(term=term)
        if self is Operator.DIVIDE:
            return MulInverse(term=term)
        return term


_PRIORITIES = {
    Operator.EQUALS: 0,
    Operator.ADD: 1,
    Operator.SUBTRACT: 1,
    Operator.MULTIPLY: 2,
    Operator.DIVIDE: 2,
    Operator.POWER: 3,
}


# ─────────────────────────── Term tree ───────────────────────────────────

class Number(BaseModel):
    node_type: Literal["number"] = "number"
    value: Decimal

    def __str__(self) -> str:
        # Plain notation: 1/0.1 shows as 10, never 1E+1.
        if self.value == self.value.to_integral_value():
            return str(int(self.value))
        return format(self.value, "f")


class Chain(BaseModel):
    """n-ary commutative operation; child order is kept for display only."""
    node_type: Literal["chain"] = "chain"
    op: Commutative
    terms: list["Term"]

    def __str__(self) -> str:
        inner = " , ".join(str(t) for t in self.terms)
        return f"{self.op.symbol} [ {inner} ]"


class Power(BaseModel):
    node_type: Literal["power"] = "power"
    base: Optional["Term"] = None   # None only while the parser is building it
    exponent: "Term"

    def __str__(self) -> str:
        base = "none" if self.base is None else str(self.base)
        return f"{base}^{self.exponent}"


class MulInverse(BaseModel):
    node_type: Literal["mul_inverse"] = "mul_inverse"
    term: "Term"

    def __str__(self) -> str:
        return f"1/{self.term}"


class Opposite(BaseModel):
    node_type: Literal["opposite"] = "opposite"
    term: "Term"

    def __str__(self) -> str:
        return f"-{self.term}"


class Unknown(BaseModel):
    node_type: Literal["unknown"] = "unknown"
    name: str

    def __str__(self) -> str:
        return self.name


Term = Union[Number, Chain, Power, MulInverse, Opposite, Unknown]
Chain.model_rebuild()
Power.model_rebuild()
MulInverse.model_rebuild()
Opposite.model_rebuild()

# name → bound term; owned by the session, read-only for the simplifier
Bindings = dict[str, Term]


# ─────────────────────────── Equation ────────────────────────────────────

class Equation(BaseModel):
    left: Optional[Term] = None
    right: Optional[Term] = None

    def __str__(self) -> str:
        left = "" if self.left is None else str(self.left)
        right = "" if self.right is None else str(self.right)
        return f"{left} = {right}"


def clone(term: Term) -> Term:
    """Deep structural copy; no sub-term is shared with the original."""
    return term.model_copy(deep=True)


# Deepest tree the recursive walks (rendering, cloning, folding) accept.
MAX_TERM_DEPTH = 64


def _children(term: Term) -> list[Term]:
    if isinstance(term, Chain):
        return term.terms
    if isinstance(term, Power):
        return [t for t in (term.base, term.exponent) if t is not None]
    if isinstance(term, (MulInverse, Opposite)):
        return [term.term]
    return []


def depth(term: Term) -> int:
    """Height of the tree; a single leaf has depth 1. Computed without recursion."""
    deepest = 0
    stack = [(term, 1)]
    while stack:
        node, level = stack.pop()
        deepest = max(deepest, level)
        stack.extend((child, level + 1) for child in _children(node))
    return deepest


# ─────────────────────────── Evaluator ───────────────────────────────────

class EvalResult(BaseModel):
    formula: Term                   # formula after all bindings were inlined
    bindings: dict[str, Term]       # name → substituted binding term
    result: Term                    # Number, or residual symbolic term
