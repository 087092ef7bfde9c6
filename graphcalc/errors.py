from enum import Enum
from typing import Optional


class CalculatorError(Exception):
    """Base class for every error the graphing core reports to its host."""


class LexError(CalculatorError):
    def __init__(self, position: int, char: str, message: Optional[str] = None):
        self.position = position
        self.char = char
        self.message = message or f"Unrecognized character {char!r}"
        super().__init__(f"{self.message} at position {position}")


class ParseErrorReason(str, Enum):
    UNEXPECTED_TOKEN = "unexpected token"
    UNMATCHED_PAREN = "unmatched parenthesis"
    UNKNOWN_FUNCTION = "unknown function"
    UNKNOWN_IDENTIFIER = "unknown identifier"
    EMPTY_EXPRESSION = "empty expression"
    TRAILING_INPUT = "trailing input"
    MISSING_ARGUMENT = "missing argument"
    TOO_DEEP = "expression too deeply nested"


class ParseError(CalculatorError):
    def __init__(self, reason: ParseErrorReason, position: int, detail: str = ""):
        self.reason = reason
        self.position = position
        self.detail = detail
        text = reason.value.capitalize()
        if detail:
            text = f"{text}: {detail}"
        super().__init__(f"{text} at position {position}")


class EvalErrorKind(str, Enum):
    DOMAIN_ERROR = "domain error"


class EvalError(CalculatorError):
    def __init__(self, message: str, kind: EvalErrorKind = EvalErrorKind.DOMAIN_ERROR):
        self.kind = kind
        self.message = message
        super().__init__(f"{kind.value.capitalize()}: {message}")


# Suggestion lines shown under the warning message.
_HINTS = {
    ParseErrorReason.UNEXPECTED_TOKEN: "Check for a missing operand, e.g. '2+3' instead of '2+'.",
    ParseErrorReason.UNMATCHED_PAREN: "Every '(' needs a matching ')'.",
    ParseErrorReason.UNKNOWN_FUNCTION: "Available functions: sin, cos, tan, sqrt, log, ln, abs, exp.",
    ParseErrorReason.UNKNOWN_IDENTIFIER: "Use x as the variable; pi and e are the known constants.",
    ParseErrorReason.EMPTY_EXPRESSION: "Type a function of x, for example x^2 - 4.",
    ParseErrorReason.TRAILING_INPUT: "Remove the extra input after the expression.",
    ParseErrorReason.MISSING_ARGUMENT: "Functions need parentheses, e.g. sin(x).",
    ParseErrorReason.TOO_DEEP: "Simplify the expression or split it into fewer nested parts.",
}


def hint_for(error: CalculatorError) -> str:
    """Return a short suggestion for fixing ``error`` (empty when there is none)."""
    if isinstance(error, LexError):
        return "Only numbers, x, + - * / ^, parentheses and function names are allowed."
    if isinstance(error, ParseError):
        return _HINTS.get(error.reason, "")
    if isinstance(error, EvalError):
        return "The function is undefined at this x."
    return ""
