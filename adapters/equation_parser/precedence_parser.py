"""
Adapter: PrecedenceEquationParser
Implements the EquationParser port.

Tokenizer — scans the line once, character class by character class:
  NUMBER — digits with at most one '.', no leading '0' unless followed by '.'
           and no more significant digits than max_digits
  NAME   — run of ASCII letters, one variable per run (case-sensitive)
  OP     — + - * / ^ =
  PAREN  — ( )
  ' '    — ignored; anything else is an invalid character

Parsing — precedence climbing over each side of '=':
  expr   = unary (OP unary)*      equal priority → one chain
  unary  = ('-' | '+') unary | power
  power  = primary ('^' unary)?   right-associative
  primary = NUMBER | NAME | '(' expr ')'

'-' and '/' operands are rewritten to Opposite / MulInverse when they join a
chain, so only ADD and MULTIPLY chains leave the parser. Operands that are
already chains of the same kind are spliced in (1+2+3 and (1+2)+3 both give
one ADD chain of three numbers).
"""
from __future__ import annotations

import logging
import re
from decimal import Decimal, InvalidOperation
from typing import NamedTuple, Optional

from contracts import (
    Chain,
    Commutative,
    Equation,
    Number,
    Operator,
    Opposite,
    Power,
    Term,
    Unknown,
)
from errors import (
    EquationSidesError,
    InvalidCharacterError,
    InvalidNumeralError,
    MalformedMergeError,
    MissingOperandError,
    NestingTooDeepError,
    PowerBaseError,
    UnbalancedParenthesesError,
)

logger = logging.getLogger("termcalc.parser")

# Parentheses, unary signs and exponents opened at once.
MAX_NESTING = 12
# Significant digits of a numeral; longer ones would be rounded when folded.
MAX_DIGITS = 28


# ──────────────────────────────────────────────────────────────────────────────
# Tokenizer
# ──────────────────────────────────────────────────────────────────────────────

_TOKEN_RE = re.compile(
    r'(?P<number>[0-9.]+)'      # numeral, validated separately
    r'|(?P<name>[A-Za-z]+)'     # identifier
    r'|(?P<op>[-+*/^=])'        # operator
    r'|(?P<paren>[()])'         # parenthesis
    r'|(?P<space> +)'           # ignored
)

# Binary operators that build chains; '^' and '=' are handled separately.
_CHAIN_OPS = frozenset({
    Operator.ADD, Operator.SUBTRACT, Operator.MULTIPLY, Operator.DIVIDE,
})


class _Token(NamedTuple):
    kind: str   # "number" | "name" | "op" | "paren"
    text: str


def _check_numeral(raw: str, max_digits: int = MAX_DIGITS) -> Decimal:
    # A trailing '.' is never part of a numeral.
    if raw.endswith("."):
        raise InvalidCharacterError(".")
    if len(raw) > 1 and raw[0] == "0" and raw[1] != ".":
        raise InvalidNumeralError("Invalid Number! Cant start with 0 !")
    if raw.count(".") > 1:
        raise InvalidNumeralError("Invalid Number! Multiple Decimals!", code="3002")
    try:
        value = Decimal(raw)
    except InvalidOperation:
        raise InvalidNumeralError(f"Invalid Number! {raw!r}")
    if len(value.as_tuple().digits) > max_digits:
        raise InvalidNumeralError("Invalid Number! Too many digits!", code="3010")
    return value


def _tokenize(text: str, max_digits: int = MAX_DIGITS) -> list[_Token]:
    """Splits text into tokens; checks characters, numerals and parentheses."""
    tokens: list[_Token] = []
    depth = 0
    pos = 0
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if m is None:
            raise InvalidCharacterError(text[pos])
        pos = m.end()
        kind = m.lastgroup
        if kind == "space":
            continue
        raw = m.group(kind)
        if kind == "number":
            _check_numeral(raw, max_digits)
        elif kind == "paren":
            depth += 1 if raw == "(" else -1
            if depth < 0:
                raise UnbalancedParenthesesError()
        tokens.append(_Token(kind, raw))
    if depth != 0:
        raise UnbalancedParenthesesError()
    return tokens


# ──────────────────────────────────────────────────────────────────────────────
# Term builders
# ──────────────────────────────────────────────────────────────────────────────

def _chain(op: Commutative, operands: list[Term]) -> Chain:
    terms: list[Term] = []
    for operand in operands:
        if isinstance(operand, Chain) and operand.op == op:
            terms.extend(operand.terms)
        else:
            terms.append(operand)
    return Chain(op=op, terms=terms)


def _bind_base(power: Power, base: Term) -> Power:
    if power.base is not None:
        raise PowerBaseError("Power already has a base!")
    power.base = base
    return power


# ──────────────────────────────────────────────────────────────────────────────
# Precedence climbing parser
# ──────────────────────────────────────────────────────────────────────────────

class _Parser:
    def __init__(self, tokens: list[_Token], max_nesting: int = MAX_NESTING) -> None:
        self._tokens = tokens
        self._pos = 0
        self._nesting = 0
        self._max_nesting = max_nesting

    def _peek(self) -> Optional[_Token]:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else None

    def _peek_operator(self) -> Optional[Operator]:
        tok = self._peek()
        if tok is None or tok.kind != "op":
            return None
        return Operator.from_char(tok.text)

    def _consume(self) -> _Token:
        t = self._tokens[self._pos]
        self._pos += 1
        return t

    def _enter(self) -> None:
        self._nesting += 1
        if self._nesting > self._max_nesting:
            raise NestingTooDeepError()

    def _leave(self) -> None:
        self._nesting -= 1

    def parse(self) -> Term:
        node = self._expr(0)
        tok = self._peek()
        if tok is not None:
            if tok.text == ")":
                raise UnbalancedParenthesesError()
            # Two operands without an operator between them.
            raise MalformedMergeError()
        return node

    def _expr(self, min_priority: int) -> Term:
        left = self._unary()
        while True:
            op = self._peek_operator()
            if op not in _CHAIN_OPS or op.priority <= min_priority:
                break
            priority = op.priority
            kind = op.commutative
            operands = [left]
            # Same priority: keep absorbing into one chain.
            while op in _CHAIN_OPS and op.priority == priority:
                self._consume()
                right = self._expr(priority)
                operands.append(op.to_commutative_term(right))
                op = self._peek_operator()
            left = _chain(kind, operands)
        return left

    def _unary(self) -> Term:
        op = self._peek_operator()
        if op not in (Operator.SUBTRACT, Operator.ADD):
            return self._power()
        self._consume()
        self._enter()
        operand = self._unary()
        self._leave()
        if op is Operator.SUBTRACT:
            return Opposite(term=operand)
        return operand

    def _power(self) -> Term:
        base = self._primary()
        if self._peek_operator() is not Operator.POWER:
            return base
        self._consume()
        self._enter()
        exponent = self._unary()
        self._leave()
        return _bind_base(Power(exponent=exponent), base)

    def _primary(self) -> Term:
        tok = self._peek()
        if tok is None or tok.kind == "op" or tok.text == ")":
            raise MissingOperandError()
        self._consume()
        if tok.kind == "number":
            # already checked by the tokenizer
            return Number(value=Decimal(tok.text))
        if tok.kind == "name":
            return Unknown(name=tok.text)
        # '(': the group binds as one operand
        self._enter()
        node = self._expr(0)
        self._leave()
        closing = self._peek()
        if closing is None:
            raise UnbalancedParenthesesError()
        if closing.text != ")":
            raise MalformedMergeError()
        self._consume()
        return node


# ──────────────────────────────────────────────────────────────────────────────
# Adapter
# ──────────────────────────────────────────────────────────────────────────────

class PrecedenceEquationParser:
    """
    Parses one line into an Equation.
    Raises a ParseError subclass on the first problem found; never returns
    a half-built equation.

    max_nesting bounds parentheses, unary signs and exponents opened at once;
    max_digits bounds the significant digits of a numeral and is normally the
    decimal precision, so a literal is never rounded when it is folded.
    """

    def __init__(self, max_nesting: int = MAX_NESTING, max_digits: int = MAX_DIGITS) -> None:
        self._max_nesting = max_nesting
        self._max_digits = max_digits

    # -- EquationParser protocol --------------------------------------------

    def parse(self, text: str) -> Equation:
        tokens = _tokenize(text.strip(), self._max_digits)
        splits = [i for i, t in enumerate(tokens) if t.kind == "op" and t.text == "="]
        if len(splits) > 1:
            raise EquationSidesError()

        if not splits:
            equation = Equation(right=self._side(tokens))
        else:
            at = splits[0]
            equation = Equation(left=self._side(tokens[:at]), right=self._side(tokens[at + 1:]))
        logger.debug("Parsed %r -> %s", text, equation)
        return equation

    def _side(self, tokens: list[_Token]) -> Term:
        return _Parser(tokens, self._max_nesting).parse()
