import logging
from typing import List, Optional, Sequence

from graphcalc import config
from graphcalc.errors import ParseError, ParseErrorReason
from graphcalc.nodes import BinaryOp, Constant, FunctionCall, Node, UnaryMinus, Variable, tree_depth
from graphcalc.tokenizer import IDENT, LPAREN, NUMBER, OP, RPAREN, Token, tokenize

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class Parser:
    """
    Recursive-descent parser over a token list.

    Precedence, lowest to highest: + and -, * and /, implicit multiplication,
    unary minus, ^ (right-associative), then numbers, x, constants, function
    calls and parenthesised groups.
    """

    def __init__(self, tokens: Sequence[Token], source_length: int = 0):
        self.tokens: List[Token] = list(tokens)
        self.pos = 0
        self.depth = 0
        # where "end of input" errors point
        if source_length:
            self.end_position = source_length
        elif self.tokens:
            last = self.tokens[-1]
            self.end_position = last.position + len(last.text)
        else:
            self.end_position = 0

    # -------------------------
    # Token helpers
    # -------------------------
    def _peek(self) -> Optional[Token]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def _advance(self) -> Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def _at_op(self, ops: str) -> bool:
        tok = self._peek()
        return tok is not None and tok.kind == OP and tok.text in ops

    def _nest(self, tok: Token) -> None:
        self.depth += 1
        if self.depth > config.MAX_NESTING:
            raise ParseError(
                ParseErrorReason.TOO_DEEP, tok.position, f"more than {config.MAX_NESTING} nested levels"
            )

    def _unexpected(self, tok: Optional[Token]) -> ParseError:
        if tok is None:
            return ParseError(ParseErrorReason.UNEXPECTED_TOKEN, self.end_position, "unexpected end of input")
        if tok.kind == RPAREN:
            return ParseError(ParseErrorReason.UNMATCHED_PAREN, tok.position, "')' without matching '('")
        return ParseError(ParseErrorReason.UNEXPECTED_TOKEN, tok.position, repr(tok.text))

    # -------------------------
    # Grammar
    # -------------------------
    def parse(self) -> Node:
        if not self.tokens:
            raise ParseError(ParseErrorReason.EMPTY_EXPRESSION, 0)
        node = self._expression()
        tok = self._peek()
        if tok is not None:
            if tok.kind == RPAREN:
                raise self._unexpected(tok)
            raise ParseError(ParseErrorReason.TRAILING_INPUT, tok.position, repr(tok.text))
        # long flat chains like x+x+...+x nest only in the tree
        if tree_depth(node) > config.MAX_DEPTH:
            raise ParseError(
                ParseErrorReason.TOO_DEEP, 0, f"expression tree deeper than {config.MAX_DEPTH} levels"
            )
        return node

    def _expression(self) -> Node:
        node = self._term()
        while self._at_op("+-"):
            op = self._advance().text
            node = BinaryOp(op, node, self._term())
        return node

    def _term(self) -> Node:
        node = self._implicit()
        while self._at_op("*/"):
            op = self._advance().text
            node = BinaryOp(op, node, self._implicit())
        return node

    def _implicit(self) -> Node:
        node = self._unary()
        # 2x, x(x+1), 2sin(x): an operand directly after an operand multiplies
        while True:
            tok = self._peek()
            if tok is None or not tok.starts_factor():
                return node
            node = BinaryOp("*", node, self._unary())

    def _unary(self) -> Node:
        # counted in a loop so long minus chains do not recurse
        negations = 0
        while self._at_op("-"):
            self._advance()
            negations += 1
        return _negate(self._power(), negations)

    def _power(self) -> Node:
        # a^b^c is a^(b^c); each exponent may carry its own leading minus signs
        operands = [self._primary()]
        negations = []
        while self._at_op("^"):
            self._advance()
            count = 0
            while self._at_op("-"):
                self._advance()
                count += 1
            negations.append(count)
            operands.append(self._primary())

        node = operands[-1]
        for i in range(len(operands) - 2, -1, -1):
            node = BinaryOp("^", operands[i], _negate(node, negations[i]))
        return node

    def _primary(self) -> Node:
        tok = self._peek()
        if tok is None:
            raise self._unexpected(tok)

        if tok.kind == NUMBER:
            self._advance()
            return Constant(tok.value)

        if tok.kind == LPAREN:
            self._nest(self._advance())
            inner = self._expression()
            self._expect_close(tok)
            self.depth -= 1
            return inner

        if tok.kind == IDENT:
            return self._name(self._advance())

        if tok.kind == RPAREN:
            raise ParseError(ParseErrorReason.UNEXPECTED_TOKEN, tok.position, "missing operand before ')'")
        raise self._unexpected(tok)

    def _name(self, tok: Token) -> Node:
        name = tok.text
        if name == config.VARIABLE_NAME:
            return Variable()
        if name in config.CONSTANTS:
            return Constant(config.CONSTANTS[name])

        nxt = self._peek()
        followed_by_paren = nxt is not None and nxt.kind == LPAREN
        if name not in config.FUNCTION_NAMES:
            reason = ParseErrorReason.UNKNOWN_FUNCTION if followed_by_paren else ParseErrorReason.UNKNOWN_IDENTIFIER
            raise ParseError(reason, tok.position, repr(name))
        if not followed_by_paren:
            raise ParseError(ParseErrorReason.MISSING_ARGUMENT, tok.position, f"{name} needs '(' ... ')'")

        open_tok = self._advance()
        self._nest(open_tok)
        argument = self._expression()
        self._expect_close(open_tok)
        self.depth -= 1
        return FunctionCall(name, argument)

    def _expect_close(self, open_tok: Token) -> None:
        tok = self._peek()
        if tok is not None and tok.kind == RPAREN:
            self._advance()
            return
        if tok is None:
            raise ParseError(ParseErrorReason.UNMATCHED_PAREN, open_tok.position, "'(' is never closed")
        raise self._unexpected(tok)


def _negate(node: Node, times: int) -> Node:
    for _ in range(times):
        node = UnaryMinus(node)
    return node


def parse(tokens: Sequence[Token]) -> Node:
    """Build an expression tree from ``tokens``; raises ParseError on malformed input."""
    return Parser(tokens).parse()


def parse_text(text: str) -> Node:
    """Tokenize and parse ``text`` in one step."""
    tree = Parser(tokenize(text), source_length=len(text)).parse()
    logger.debug("parse: %r -> %r", text, tree)
    return tree
