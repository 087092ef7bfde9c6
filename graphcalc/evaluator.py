import math
from typing import Callable, Dict

from graphcalc import config
from graphcalc.errors import EvalError
from graphcalc.nodes import BinaryOp, Constant, FunctionCall, Node, UnaryMinus, Variable


# -------------------------
# Functions with domain checks
# -------------------------
def _sqrt(v: float) -> float:
    if v < 0:
        raise EvalError(f"sqrt of negative number {v:g}")
    return math.sqrt(v)


def _log10(v: float) -> float:
    if v <= 0:
        raise EvalError(f"log of non-positive number {v:g}")
    return math.log10(v)


def _ln(v: float) -> float:
    if v <= 0:
        raise EvalError(f"ln of non-positive number {v:g}")
    return math.log(v)


def _tan(v: float) -> float:
    # poles are reported as undefined instead of as huge finite values
    if abs(math.cos(v)) < config.POLE_EPSILON:
        raise EvalError(f"tan is undefined at {v:g}")
    return math.tan(v)


FUNCTIONS: Dict[str, Callable[[float], float]] = {
    "sin": math.sin,
    "cos": math.cos,
    "tan": _tan,
    "sqrt": _sqrt,
    "log": _log10,
    "ln": _ln,
    "abs": abs,
    "exp": math.exp,
}


def _divide(a: float, b: float) -> float:
    if b == 0:
        raise EvalError("division by zero")
    return a / b


def _power(base: float, exponent: float) -> float:
    if base == 0 and exponent < 0:
        raise EvalError("zero raised to a negative power")
    if base < 0 and not float(exponent).is_integer():
        raise EvalError(f"negative base {base:g} with fractional exponent {exponent:g}")
    return math.pow(base, exponent)


BINARY_OPS: Dict[str, Callable[[float, float], float]] = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": _divide,
    "^": _power,
}


class Evaluator:
    """
    Walks an expression tree for one value of x.

    Holds nothing but x, so a fresh instance per call keeps evaluation free of
    shared state.
    """

    def __init__(self, x: float):
        self.x = x

    def visit(self, node: Node) -> float:
        method = "visit_" + node.__class__.__name__
        visitor = getattr(self, method, self.generic_visit)
        return visitor(node)

    def visit_Constant(self, node: Constant) -> float:
        return node.value

    def visit_Variable(self, node: Variable) -> float:
        return self.x

    def visit_UnaryMinus(self, node: UnaryMinus) -> float:
        return -self.visit(node.operand)

    def visit_BinaryOp(self, node: BinaryOp) -> float:
        left = self.visit(node.left)
        right = self.visit(node.right)
        try:
            fn = BINARY_OPS[node.op]
        except KeyError:
            raise TypeError(f"Unsupported binary operator: {node.op}") from None
        try:
            return _finite(fn(left, right))
        except OverflowError:
            raise EvalError(f"result of {left:g} {node.op} {right:g} is too large") from None

    def visit_FunctionCall(self, node: FunctionCall) -> float:
        arg = self.visit(node.argument)
        try:
            fn = FUNCTIONS[node.name]
        except KeyError:
            raise TypeError(f"Unsupported function: {node.name}") from None
        try:
            return _finite(fn(arg))
        except OverflowError:
            raise EvalError(f"{node.name}({arg:g}) is too large") from None
        except ValueError as e:
            # math raises ValueError for anything else outside a function's domain
            raise EvalError(f"{node.name}({arg:g}): {e}") from None

    def generic_visit(self, node):
        raise TypeError(f"Unsupported expression node: {node.__class__.__name__}")


def _finite(value: float) -> float:
    if math.isnan(value) or math.isinf(value):
        raise EvalError("result is not a finite number")
    return value


def evaluate(tree: Node, x: float) -> float:
    """
    Evaluate ``tree`` at ``x``.

    Raises EvalError (kind DOMAIN_ERROR) where the function is undefined:
    division by zero, roots and logs outside their domain, tan at a pole,
    and results that overflow or are not finite.
    """
    return _finite(Evaluator(float(x)).visit(tree))
