"""
errors.py — Error taxonomy for TermCalc.

Every fallible operation raises a CalcError subclass. The session loop and the
HTTP API are the only places that catch them.

Codes are structured as:
  1. digit: family (3 = parse, 4 = binding, 5 = evaluation)
  2.-4. digit: error number
"""
from __future__ import annotations


class CalcError(Exception):
    code = "9999"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def __str__(self) -> str:
        return self.message


# ─────────────────────────── Parse errors ────────────────────────────────

class ParseError(CalcError):
    code = "3000"


class InvalidNumeralError(ParseError):
    code = "3001"


class InvalidCharacterError(ParseError):
    code = "3003"

    def __init__(self, char: str) -> None:
        super().__init__(f"Invalid Character '{char}'")
        self.char = char


class UnbalancedParenthesesError(ParseError):
    code = "3004"

    def __init__(self) -> None:
        super().__init__("Parentheses not closed!")


class MissingOperandError(ParseError):
    code = "3005"

    def __init__(self) -> None:
        super().__init__("No Terms Found!")


class MalformedMergeError(ParseError):
    code = "3006"

    def __init__(self) -> None:
        super().__init__("Invalid Chain / Power!")


class PowerBaseError(ParseError):
    code = "3007"


class EquationSidesError(ParseError):
    code = "3008"

    def __init__(self) -> None:
        super().__init__("Equation already has two sides!")


class NestingTooDeepError(ParseError):
    code = "3009"

    def __init__(self) -> None:
        super().__init__("Expression nested too deeply!")


# ─────────────────────────── Binding errors ──────────────────────────────

class BindingError(CalcError):
    code = "4000"


class InvalidEquationError(BindingError):
    code = "4001"

    def __init__(self) -> None:
        super().__init__("Invalid Equation")


class InvalidUnknownEquationError(BindingError):
    code = "4002"

    def __init__(self) -> None:
        super().__init__("Invalid Unknown Equation")


class UnboundVariableError(BindingError):
    code = "4003"

    def __init__(self, names: list[str]) -> None:
        label = "variable" if len(names) == 1 else "variables"
        super().__init__(f"Unknown {label} {', '.join(names)}")
        self.names = names


# ─────────────────────────── Evaluation errors ───────────────────────────

class EvaluationError(CalcError):
    code = "5000"


class DivisionByZeroError(EvaluationError):
    code = "5001"

    def __init__(self) -> None:
        super().__init__("Division by zero")


class InvalidPowerError(EvaluationError):
    code = "5002"


class TermTooDeepError(EvaluationError):
    code = "5003"

    def __init__(self) -> None:
        super().__init__("Term nested too deeply!")
