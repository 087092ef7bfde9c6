import logging
import math
import re
from typing import List, NamedTuple, Optional

from graphcalc import config
from graphcalc.errors import LexError

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

NUMBER = "NUMBER"
IDENT = "IDENT"
OP = "OP"
LPAREN = "LPAREN"
RPAREN = "RPAREN"

OPERATORS = "+-*/^"

# digits with an optional fraction (or a bare fraction), then an optional exponent
_NUMBER_RE = re.compile(r"(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_LETTERS_RE = re.compile(r"[A-Za-z]+")

# longest first so "exp" wins over "e" and "sqrt" is never split
KNOWN_NAMES = tuple(
    sorted(
        set(config.FUNCTION_NAMES) | set(config.CONSTANTS) | {config.VARIABLE_NAME},
        key=len,
        reverse=True,
    )
)


class Token(NamedTuple):
    kind: str
    text: str
    position: int
    value: Optional[float] = None

    def starts_factor(self) -> bool:
        """True when this token can begin an operand (number, name or '(')."""
        return self.kind in (NUMBER, IDENT, LPAREN)


def _split_name_run(run: str) -> Optional[List[str]]:
    """Split a lower-case run of letters into known names, longest match first."""
    parts = []
    i = 0
    while i < len(run):
        for name in KNOWN_NAMES:
            if run.startswith(name, i):
                parts.append(name)
                i += len(name)
                break
        else:
            return None
    return parts


def tokenize(text: str) -> List[Token]:
    """
    Turn an expression string into a list of tokens.

    Raises LexError for a character that cannot start any token. Letter runs
    that are not made of known names come out as a single IDENT so the parser
    can report them as unknown functions or identifiers.
    """
    tokens: List[Token] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch.isspace():
            i += 1
            continue

        if "0" <= ch <= "9" or ch == ".":
            m = _NUMBER_RE.match(text, i)
            if m is None:
                raise LexError(i, ch)
            value = float(m.group())
            if math.isinf(value):
                raise LexError(i, ch, f"Number {m.group()!r} is too large")
            if m.end() < n and text[m.end()] == ".":
                raise LexError(m.end(), ".", "Second decimal point in number")
            tokens.append(Token(NUMBER, m.group(), i, value))
            i = m.end()
            continue

        if ch.isascii() and ch.isalpha():
            m = _LETTERS_RE.match(text, i)
            run = m.group().lower()
            parts = _split_name_run(run)
            if parts is None:
                tokens.append(Token(IDENT, run, i))
            else:
                offset = i
                for name in parts:
                    tokens.append(Token(IDENT, name, offset))
                    offset += len(name)
            i = m.end()
            continue

        if ch in OPERATORS:
            tokens.append(Token(OP, ch, i))
        elif ch == "(":
            tokens.append(Token(LPAREN, ch, i))
        elif ch == ")":
            tokens.append(Token(RPAREN, ch, i))
        else:
            raise LexError(i, ch)
        i += 1

    logger.debug("tokenize: %r -> %d tokens", text, len(tokens))
    return tokens
