"""
Expression tree produced by the parser.

Nodes are frozen dataclasses: they compare structurally, hash, and are never
modified after the parser builds them, so one tree can be shared by any number
of evaluations.
"""
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Constant:
    value: float


@dataclass(frozen=True)
class Variable:
    pass


@dataclass(frozen=True)
class BinaryOp:
    op: str  # one of + - * / ^
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class UnaryMinus:
    operand: "Node"


@dataclass(frozen=True)
class FunctionCall:
    name: str
    argument: "Node"


Node = Union[Constant, Variable, BinaryOp, UnaryMinus, FunctionCall]


def to_canonical(node: Node) -> str:
    """
    Render a tree as a fully parenthesised expression string.

    Parsing the result gives back a tree equal to ``node``.
    """
    if isinstance(node, Constant):
        return repr(float(node.value))
    if isinstance(node, Variable):
        return "x"
    if isinstance(node, BinaryOp):
        return f"({to_canonical(node.left)}{node.op}{to_canonical(node.right)})"
    if isinstance(node, UnaryMinus):
        return f"(-{to_canonical(node.operand)})"
    if isinstance(node, FunctionCall):
        return f"{node.name}({to_canonical(node.argument)})"
    raise TypeError(f"Not an expression node: {node!r}")


def _children(node: Node):
    if isinstance(node, BinaryOp):
        return (node.left, node.right)
    if isinstance(node, UnaryMinus):
        return (node.operand,)
    if isinstance(node, FunctionCall):
        return (node.argument,)
    return ()


def tree_depth(node: Node) -> int:
    """Number of levels in the tree (a lone leaf has depth 1); walks without recursion."""
    deepest = 0
    stack = [(node, 1)]
    while stack:
        current, depth = stack.pop()
        deepest = max(deepest, depth)
        stack.extend((child, depth + 1) for child in _children(current))
    return deepest
